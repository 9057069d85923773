"""
Steady-state volumetric pump model with imposed mass flow.

`evaluate` checks the operating point, runs the configured model branch,
checks the exhaust enthalpy against validity bounds and falls back to an
ideal machine when either check fails. The result always carries a flag:
    1   model result accepted
    -1  exhaust enthalpy out of bounds, ideal-machine values returned
    -2  infeasible operating point, ideal-machine values returned
"""
from loguru import logger

from .config import ConstantEfficiency, PolynomialEfficiency, SemiEmpirical
from .errors import InvalidModelType
from .state import (
    FLAG_ACCEPTED,
    FLAG_INFEASIBLE,
    FLAG_OUT_OF_BOUNDS,
    EvaluationResult,
    InletState,
    OperatingPoint,
    TSTrace,
)
from .thermo import (
    CoolPropProvider,
    get_density,
    get_enthalpy,
    get_entropy,
    get_temperature,
    inlet_state,
    isentropic_enthalpy,
)
from .units.constant_efficiency import ConstantEfficiencyPump
from .units.polynomial_efficiency import PolynomialEfficiencyPump
from .units.semi_empirical import SemiEmpiricalPump

MODEL_UNITS = {
    ConstantEfficiency: ConstantEfficiencyPump,
    PolynomialEfficiency: PolynomialEfficiencyPump,
    SemiEmpirical: SemiEmpiricalPump,
}

# (P [Pa], T [K]) reference states for the default exhaust enthalpy bounds
H_MIN_REFERENCE = (5e4, 253.15)
H_MAX_REFERENCE = (4e6, 500.0)


def build_model(config):
    """Instantiate the model branch matching the configuration type."""
    unit_class = MODEL_UNITS.get(type(config))
    if not unit_class:
        logger.error(f"Unknown pump model type: {type(config).__name__}")
        raise InvalidModelType(f"Unknown pump model type: {type(config).__name__}")
    return unit_class(config)


def enthalpy_bounds(config, fluid, provider):
    """
    Returns the (h_min, h_max) validity window for the exhaust enthalpy.
    Bounds set on the configuration win; missing ones are evaluated at the
    cold/low-pressure and hot/high-pressure reference states.
    """
    h_min = config.h_min
    if h_min is None:
        P, T = H_MIN_REFERENCE
        h_min = get_enthalpy(fluid, T, P, provider)
    h_max = config.h_max
    if h_max is None:
        P, T = H_MAX_REFERENCE
        h_max = get_enthalpy(fluid, T, P, provider)
    return h_min, h_max


def exhaust_flag(h_ex, h_min, h_max):
    return FLAG_ACCEPTED if h_min < h_ex < h_max else FLAG_OUT_OF_BOUNDS


def holdup_mass(point, h_ex, rho_su, V, provider):
    """Fluid mass [kg] inside the pump: mean of supply and exhaust densities times V."""
    rho_ex = get_density(point.fluid, h_ex, point.P_ex, provider)
    return (rho_su + rho_ex) / 2 * V


def fallback_result(point, inlet, config, flag, provider, h_ex_s=None):
    """
    Ideal-machine result returned with a negative flag.
    The exhaust state is taken equal to the supply state while the power is
    the full isentropic work, without efficiency penalty.
    """
    if h_ex_s is None:
        h_ex_s = isentropic_enthalpy(point.P_ex, inlet.s, point.fluid, provider)
    h_ex = point.h_su
    return EvaluationResult(
        T_ex=inlet.T,
        h_ex=h_ex,
        N_pp=60 * point.M_dot / (config.V_s * inlet.rho),
        W_dot=point.M_dot * (h_ex_s - point.h_su),
        epsilon_is=1.0,
        epsilon_vol=1.0,
        M=holdup_mass(point, h_ex, inlet.rho, config.V, provider),
        flag=flag,
    )


def ts_trace(point, inlet, result, provider):
    """Supply and exhaust (T, s) samples for a T-s diagram."""
    s_ex = get_entropy(point.fluid, result.h_ex, point.P_ex, provider)
    return TSTrace(T=(inlet.T, result.T_ex), s=(inlet.s, s_ex))


def evaluate(P_su, h_su, P_ex, fluid, M_dot, config, provider=None):
    """
    Simulates the pump at an imposed mass flow rate.
    Args:
        P_su (float): Supply pressure [Pa].
        h_su (float): Supply enthalpy [J/kg].
        P_ex (float): Exhaust pressure [Pa].
        fluid (str): Working fluid name.
        M_dot (float): Mass flow rate [kg/s].
        config: ConstantEfficiency, PolynomialEfficiency or SemiEmpirical.
        provider: Thermophysical provider, CoolPropProvider by default.
    Returns:
        tuple: (EvaluationResult, TSTrace)
    Raises:
        InvalidModelType: If config is not one of the known model configurations.
        PropertyLookupError: If the provider fails on any lookup.
    """
    model = build_model(config)
    if provider is None:
        provider = CoolPropProvider()

    point = OperatingPoint(P_su=P_su, h_su=h_su, P_ex=P_ex, M_dot=M_dot, fluid=fluid)
    inlet = InletState(*inlet_state(P_su, h_su, fluid, provider))

    if not point.is_feasible:
        logger.warning(
            f"Infeasible pump operating point (P_su={P_su}, P_ex={P_ex}, M_dot={M_dot}), "
            "returning ideal machine"
        )
        result = fallback_result(point, inlet, config, FLAG_INFEASIBLE, provider)
        return result, ts_trace(point, inlet, result, provider)

    estimate = model.run(point, inlet, provider)
    h_min, h_max = enthalpy_bounds(config, fluid, provider)
    flag = exhaust_flag(estimate.h_ex, h_min, h_max)
    logger.debug(
        f"{config.model_type}: h_ex={estimate.h_ex:.1f} J/kg, bounds=({h_min:.1f}, {h_max:.1f}), flag={flag}"
    )

    if flag == FLAG_ACCEPTED:
        result = EvaluationResult(
            T_ex=get_temperature(fluid, P_ex, estimate.h_ex, provider),
            h_ex=estimate.h_ex,
            N_pp=estimate.N_pp,
            W_dot=estimate.W_dot,
            epsilon_is=estimate.epsilon_is,
            epsilon_vol=estimate.epsilon_vol,
            M=holdup_mass(point, estimate.h_ex, inlet.rho, config.V, provider),
            flag=flag,
        )
    else:
        logger.warning(
            f"Exhaust enthalpy {estimate.h_ex:.1f} J/kg outside ({h_min:.1f}, {h_max:.1f}), "
            "returning ideal machine"
        )
        result = fallback_result(point, inlet, config, flag, provider, h_ex_s=estimate.h_ex_s)

    return result, ts_trace(point, inlet, result, provider)
