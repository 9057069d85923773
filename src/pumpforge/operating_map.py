import math

import numpy as np
import pandas as pd
from loguru import logger
from scipy.optimize import brentq

from .pump import evaluate
from .thermo import CoolPropProvider, get_density

SWEEP_COLUMNS = ["M_dot", "T_ex", "h_ex", "N_pp", "W_dot", "epsilon_is", "epsilon_vol", "M", "flag"]


def sweep_mass_flow(P_su, h_su, P_ex, fluid, M_dots, config, provider=None):
    """
    Evaluates the pump over a range of mass flow rates.
    Args:
        M_dots (array-like): Mass flow rates [kg/s].
        Other arguments as for pumpforge.pump.evaluate.
    Returns:
        pandas.DataFrame: One row per mass flow, columns SWEEP_COLUMNS.
    """
    if provider is None:
        provider = CoolPropProvider()

    rows = []
    for M_dot in np.atleast_1d(np.asarray(M_dots, dtype=float)):
        result, _ = evaluate(P_su, h_su, P_ex, fluid, float(M_dot), config, provider)
        rows.append({"M_dot": float(M_dot), **result.to_dict()})

    df = pd.DataFrame(rows, columns=SWEEP_COLUMNS)
    n_rejected = int((df["flag"] < 0).sum())
    if n_rejected:
        logger.warning(f"{n_rejected}/{len(df)} sweep points fell back to the ideal machine")
    return df


def solve_mass_flow(P_su, h_su, P_ex, fluid, N_pp, config, provider=None, bracket=None, xtol=1e-12):
    """
    Finds the mass flow delivered at an imposed rotational speed.
    The pump is evaluated at imposed mass flow and the flow is adjusted with
    Brent's method until the modelled speed matches N_pp.
    Args:
        N_pp (float): Rotational speed [rpm].
        bracket (tuple, optional): (M_dot_low, M_dot_high) search interval [kg/s].
            Defaults to 1e-6 and 2 times the swept mass flow N_pp/60*V_s*rho_su.
        xtol (float): Absolute tolerance on the mass flow.
        Other arguments as for pumpforge.pump.evaluate.
    Returns:
        tuple: (M_dot, EvaluationResult, TSTrace)
    Raises:
        ValueError: If the speed residual does not change sign over the bracket,
            or if it only changes sign across a jump between the model and the
            ideal-machine fallback.
    """
    if provider is None:
        provider = CoolPropProvider()

    if bracket is None:
        rho_su = get_density(fluid, h_su, P_su, provider)
        M_dot_swept = N_pp / 60 * config.V_s * rho_su
        bracket = (1e-6 * M_dot_swept, 2 * M_dot_swept)

    def residual(M_dot):
        result, _ = evaluate(P_su, h_su, P_ex, fluid, M_dot, config, provider)
        return result.N_pp - N_pp

    try:
        M_dot = brentq(residual, bracket[0], bracket[1], xtol=xtol)
    except ValueError:
        logger.error(f"No mass flow in {bracket} kg/s matches N_pp={N_pp} rpm")
        raise

    result, ts = evaluate(P_su, h_su, P_ex, fluid, M_dot, config, provider)
    if not math.isclose(result.N_pp, N_pp, rel_tol=1e-6, abs_tol=1e-9):
        # brentq closed in on a jump between the model and the ideal-machine fallback
        logger.error(
            f"Speed residual jumps at M_dot={M_dot:.6g} kg/s (N_pp={result.N_pp:.6g} rpm, flag {result.flag}); "
            f"no mass flow delivers N_pp={N_pp} rpm"
        )
        raise ValueError(f"No mass flow matches N_pp={N_pp} rpm: residual is discontinuous at M_dot={M_dot:.6g} kg/s")
    if not result.accepted:
        logger.warning(f"Imposed speed N_pp={N_pp} rpm is met by the ideal-machine fallback (flag {result.flag})")
    logger.info(f"N_pp={N_pp} rpm -> M_dot={M_dot:.6g} kg/s (flag {result.flag})")
    return M_dot, result, ts
