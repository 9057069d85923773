"""Shared fixtures: a deterministic property provider and the demo pump cases."""
from __future__ import annotations

import math

import pytest
from loguru import logger

from pumpforge import ConstantEfficiency, PolynomialEfficiency, PropertyLookupError, SemiEmpirical

T_REF = 273.15


class IncompressibleLiquid:
    """Incompressible liquid with constant cp and density.

    h = cp (T - T_ref) + P / rho and s = cp ln(T / T_ref), so an isentropic
    pressure rise adds exactly dP / rho to the enthalpy. Every lookup is
    recorded in ``calls`` as (target, name1, name2).
    """

    def __init__(self, cp: float = 1300.0, rho: float = 1300.0, fluids=("R245fa",)) -> None:
        self.cp = cp
        self.rho = rho
        self.fluids = fluids
        self.calls: list[tuple[str, str, str]] = []

    def resolve(self, target, name1, value1, name2, value2, fluid):
        self.calls.append((target, name1, name2))
        if fluid not in self.fluids:
            raise PropertyLookupError(f"Unknown fluid {fluid}")
        known = {name1: value1, name2: value2}
        if "P" not in known:
            raise PropertyLookupError(f"Unsupported inputs {name1}, {name2}")
        P = known["P"]

        if "H" in known:
            T = T_REF + (known["H"] - P / self.rho) / self.cp
        elif "S" in known:
            T = T_REF * math.exp(known["S"] / self.cp)
        elif "T" in known:
            T = known["T"]
        else:
            raise PropertyLookupError(f"Unsupported inputs {name1}, {name2}")
        if T <= 0.0:
            raise PropertyLookupError(f"State outside the correlation: T={T}")

        values = {
            "T": T,
            "D": self.rho,
            "S": self.cp * math.log(T / T_REF),
            "H": self.cp * (T - T_REF) + P / self.rho,
        }
        if target not in values:
            raise PropertyLookupError(f"Unsupported property {target}")
        return values[target]

    def bound_lookups(self):
        return [c for c in self.calls if c == ("H", "P", "T")]


DEMO_POINT = {
    "P_su": 4.0001e5,
    "h_su": 2.6676e5,
    "P_ex": 3.6510e6 * 0.99,
    "fluid": "R245fa",
    "M_dot": 0.1,
}


@pytest.fixture
def liquid():
    return IncompressibleLiquid()


@pytest.fixture
def demo_point():
    return dict(DEMO_POINT)


@pytest.fixture
def constant_config():
    return ConstantEfficiency(V_s=1e-6, V=1.4e-3, epsilon_is=0.5, epsilon_vol=0.8)


@pytest.fixture
def polynomial_config():
    return PolynomialEfficiency(
        V_s=1e-6,
        V=1.4e-3,
        M_dot_nom=0.1,
        coeffPol_is=[0.2, 0.02, 0.3, -0.001, 0.0, -0.1],
        coeffPol_vol=[0.9, -0.005, 0.05, 0.0, 0.0, -0.02],
    )


@pytest.fixture
def semi_empirical_config():
    return SemiEmpirical(V_s=1e-6, V=1.4e-3, A_leak=2e-8, W_dot_loss=50.0, K_0_loss=1.6)


@pytest.fixture(params=["constant", "polynomial", "semi_empirical"])
def any_config(request, constant_config, polynomial_config, semi_empirical_config):
    return {
        "constant": constant_config,
        "polynomial": polynomial_config,
        "semi_empirical": semi_empirical_config,
    }[request.param]


@pytest.fixture
def liquid_class():
    return IncompressibleLiquid


@pytest.fixture
def caplog_loguru():
    """Collects the messages loguru emits at ERROR level and above."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="ERROR")
    yield messages
    logger.remove(handler_id)
