"""Tests for mass-flow sweeps and imposed-speed solves."""
from __future__ import annotations

import numpy as np
import pytest

from pumpforge import FLAG_ACCEPTED, FLAG_INFEASIBLE, PolynomialEfficiency, solve_mass_flow, sweep_mass_flow
from pumpforge.operating_map import SWEEP_COLUMNS


def test_sweep_returns_one_row_per_mass_flow(liquid, demo_point, constant_config):
    demo_point.pop("M_dot")
    M_dots = np.linspace(0.02, 0.2, 10)
    df = sweep_mass_flow(**demo_point, M_dots=M_dots, config=constant_config, provider=liquid)

    assert list(df.columns) == SWEEP_COLUMNS
    assert len(df) == 10
    assert np.allclose(df["M_dot"], M_dots)
    assert (df["flag"] == FLAG_ACCEPTED).all()
    # constant efficiencies: speed and power both linear in mass flow
    assert np.allclose(df["N_pp"] / df["M_dot"], df["N_pp"].iloc[0] / df["M_dot"].iloc[0])
    assert np.allclose(df["W_dot"] / df["M_dot"], df["W_dot"].iloc[0] / df["M_dot"].iloc[0])


def test_sweep_keeps_fallback_points(liquid, demo_point, semi_empirical_config):
    demo_point.pop("M_dot")
    df = sweep_mass_flow(**demo_point, M_dots=[0.0, 0.05, 0.1], config=semi_empirical_config, provider=liquid)
    assert df["flag"].tolist()[0] == FLAG_INFEASIBLE
    assert df["epsilon_is"].iloc[0] == 1.0


def test_sweep_accepts_scalar(liquid, demo_point, constant_config):
    demo_point.pop("M_dot")
    df = sweep_mass_flow(**demo_point, M_dots=0.1, config=constant_config, provider=liquid)
    assert len(df) == 1


def test_solve_mass_flow_inverts_constant_efficiency(liquid, demo_point, constant_config):
    demo_point.pop("M_dot")
    M_dot, result, ts = solve_mass_flow(**demo_point, N_pp=3000.0, config=constant_config, provider=liquid)

    expected = 3000.0 / 60 * constant_config.epsilon_vol * constant_config.V_s * liquid.rho
    assert M_dot == pytest.approx(expected, rel=1e-8)
    assert result.N_pp == pytest.approx(3000.0, rel=1e-8)
    assert result.flag == FLAG_ACCEPTED
    assert len(ts) == 2


def test_solve_mass_flow_with_leakage(liquid, demo_point, semi_empirical_config):
    demo_point.pop("M_dot")
    M_dot, result, _ = solve_mass_flow(
        **demo_point, N_pp=4000.0, config=semi_empirical_config, provider=liquid, bracket=(1e-4, 1.0)
    )
    # leakage is independent of the flow, so the delivered flow exceeds the swept one
    assert M_dot > 4000.0 / 60 * semi_empirical_config.V_s * liquid.rho
    assert result.N_pp == pytest.approx(4000.0, rel=1e-8)


def test_solve_mass_flow_bracket_without_root(liquid, demo_point, constant_config):
    demo_point.pop("M_dot")
    with pytest.raises(ValueError):
        solve_mass_flow(**demo_point, N_pp=3000.0, config=constant_config, provider=liquid, bracket=(0.1, 0.2))


def test_solve_mass_flow_rejects_root_on_fallback_jump(liquid, demo_point):
    demo_point.pop("M_dot")
    dh_s = (demo_point["P_ex"] - demo_point["P_su"]) / liquid.rho
    # epsilon_is = M_dot / M_dot_nom keeps W_dot constant, so h_ex only stays
    # below h_max for M_dot > 0.05 kg/s. Below that the ideal machine (epsilon_vol
    # = 1) takes over and the speed drops from 2885 to 2308 rpm.
    config = PolynomialEfficiency(
        V_s=1e-6,
        V=1.4e-3,
        M_dot_nom=0.1,
        coeffPol_is=[0, 0, 1, 0, 0, 0],
        coeffPol_vol=[0.8, 0, 0, 0, 0, 0],
        h_min=0.0,
        h_max=demo_point["h_su"] + 2 * dh_s,
    )
    with pytest.raises(ValueError, match="discontinuous"):
        solve_mass_flow(**demo_point, N_pp=2600.0, config=config, provider=liquid, bracket=(0.01, 0.1))
