import numpy as np

from ..state import PumpEstimate
from ..thermo import isentropic_enthalpy

EFFICIENCY_MIN = 0.01
EFFICIENCY_MAX = 1.0


def response_surface(coeffs, r_p, r_m):
    """Quadratic surface a1 + a2*rp + a3*rm + a4*rp² + a5*rp*rm + a6*rm²."""
    basis = np.array([1.0, r_p, r_m, r_p**2, r_p * r_m, r_m**2])
    return float(np.dot(np.asarray(coeffs, dtype=float), basis))


def clamp_efficiency(value):
    return float(np.clip(value, EFFICIENCY_MIN, EFFICIENCY_MAX))


class PolynomialEfficiencyPump:
    """
    Volumetric pump whose efficiencies follow polynomial fits in the
    pressure ratio and the mass flow normalised by its nominal value.
    Both efficiencies are clipped to [0.01, 1] and the shaft power is
    floored at zero, so an extrapolated fit cannot yield a negative or
    infinite result.
    """

    def __init__(self, config):
        self.V_s = config.V_s
        self.M_dot_nom = config.M_dot_nom
        self.coeffPol_is = config.coeffPol_is
        self.coeffPol_vol = config.coeffPol_vol

    def efficiencies(self, point):
        """Return the clipped (epsilon_is, epsilon_vol) at the operating point."""
        r_p = point.P_ex / point.P_su
        r_m = point.M_dot / self.M_dot_nom
        epsilon_is = clamp_efficiency(response_surface(self.coeffPol_is, r_p, r_m))
        epsilon_vol = clamp_efficiency(response_surface(self.coeffPol_vol, r_p, r_m))
        return epsilon_is, epsilon_vol

    def run(self, point, inlet, provider):
        h_ex_s = isentropic_enthalpy(point.P_ex, inlet.s, point.fluid, provider)
        epsilon_is, epsilon_vol = self.efficiencies(point)

        N_pp = 60 * point.M_dot / (epsilon_vol * self.V_s * inlet.rho)
        W_dot = max(0.0, point.M_dot * (h_ex_s - point.h_su) / epsilon_is)
        h_ex = point.h_su + W_dot / point.M_dot

        return PumpEstimate(
            h_ex=h_ex,
            h_ex_s=h_ex_s,
            N_pp=N_pp,
            W_dot=W_dot,
            epsilon_is=epsilon_is,
            epsilon_vol=epsilon_vol,
        )
