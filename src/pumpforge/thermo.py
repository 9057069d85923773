import math
from typing import Protocol

import CoolProp.CoolProp as CP

from .errors import PropertyLookupError


class ThermophysicalProvider(Protocol):
    """
    Resolves one fluid property from two independent state properties.
    Property identifiers follow the CoolProp names ("T", "P", "H", "S", "D").
    """

    def resolve(self, target, name1, value1, name2, value2, fluid) -> float:
        ...


class CoolPropProvider:
    """Property provider backed by CoolProp.PropsSI."""

    def resolve(self, target, name1, value1, name2, value2, fluid):
        """
        Return the property `target` of `fluid` at the state (name1=value1, name2=value2).
        Raises:
            PropertyLookupError: If CoolProp rejects the fluid, the state or the
                property name, or returns a non-finite value.
        """
        try:
            value = CP.PropsSI(target, name1, value1, name2, value2, fluid)
        except ValueError as exc:
            raise PropertyLookupError(
                f"Cannot resolve {target} for '{fluid}' at {name1}={value1}, {name2}={value2}: {exc}"
            ) from exc
        if not math.isfinite(value):
            raise PropertyLookupError(
                f"Non-finite {target} for '{fluid}' at {name1}={value1}, {name2}={value2}"
            )
        return value


def inlet_state(P_su, h_su, fluid, provider):
    """Return (T_su, s_su, rho_su) at the pump supply."""
    T_su = provider.resolve("T", "P", P_su, "H", h_su, fluid)
    s_su = provider.resolve("S", "P", P_su, "H", h_su, fluid)
    rho_su = provider.resolve("D", "P", P_su, "H", h_su, fluid)
    return T_su, s_su, rho_su


def isentropic_enthalpy(P_ex, s_su, fluid, provider):
    """Exhaust enthalpy [J/kg] of an isentropic compression to P_ex."""
    return provider.resolve("H", "P", P_ex, "S", s_su, fluid)


def get_density(fluid, h, P, provider):
    """Return density [kg/m³] at (h, P)."""
    return provider.resolve("D", "H", h, "P", P, fluid)


def get_entropy(fluid, h, P, provider):
    """Return specific entropy [J/kg-K] at (h, P)."""
    return provider.resolve("S", "H", h, "P", P, fluid)


def get_temperature(fluid, P, h, provider):
    """Return temperature [K] at (P, h)."""
    return provider.resolve("T", "P", P, "H", h, fluid)


def get_enthalpy(fluid, T, P, provider):
    """Return specific enthalpy [J/kg] at (T, P)."""
    return provider.resolve("H", "P", P, "T", T, fluid)
