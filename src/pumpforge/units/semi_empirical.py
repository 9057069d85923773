import math

import numpy as np

from ..state import PumpEstimate
from ..thermo import isentropic_enthalpy


class SemiEmpiricalPump:
    """
    Semi-empirical volumetric pump.
    Internal leakage is an orifice flow driven by the pressure rise and the
    shaft power is a constant loss plus a term proportional to the
    hydraulic power. Efficiencies are derived from these and are reported
    unclamped: an isentropic efficiency above 1 flags loss parameters that
    do not match the fluid.
    """

    def __init__(self, config):
        self.V_s = config.V_s
        self.A_leak = config.A_leak
        self.W_dot_loss = config.W_dot_loss
        self.K_0_loss = config.K_0_loss

    def leakage_flow(self, point, rho_su):
        """Leakage mass flow [kg/s] back through the clearances."""
        return self.A_leak * math.sqrt(2 * rho_su * (point.P_ex - point.P_su))

    def run(self, point, inlet, provider):
        h_ex_s = isentropic_enthalpy(point.P_ex, inlet.s, point.fluid, provider)
        rho_su = inlet.rho
        delta_P = point.P_ex - point.P_su

        M_dot_th = point.M_dot - self.leakage_flow(point, rho_su)
        N_pp = 60 * M_dot_th / (self.V_s * rho_su)
        W_dot = self.W_dot_loss + self.K_0_loss * point.M_dot / rho_su * delta_P

        # zero speed or zero power give inf/nan efficiencies instead of raising
        with np.errstate(divide="ignore", invalid="ignore"):
            epsilon_vol = float(np.divide(point.M_dot, np.float64(N_pp / 60 * self.V_s * rho_su)))
            epsilon_is = float(np.divide(point.M_dot * (h_ex_s - point.h_su), np.float64(W_dot)))
        h_ex = point.h_su + W_dot / point.M_dot

        return PumpEstimate(
            h_ex=h_ex,
            h_ex_s=h_ex_s,
            N_pp=N_pp,
            W_dot=W_dot,
            epsilon_is=epsilon_is,
            epsilon_vol=epsilon_vol,
        )
