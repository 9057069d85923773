from ..state import PumpEstimate
from ..thermo import isentropic_enthalpy


class ConstantEfficiencyPump:
    """
    Volumetric pump with constant isentropic and volumetric efficiencies.
    The efficiencies are taken verbatim from the configuration, no clamping.
    """

    def __init__(self, config):
        self.V_s = config.V_s
        self.epsilon_is = config.epsilon_is
        self.epsilon_vol = config.epsilon_vol

    def run(self, point, inlet, provider):
        """
        Computes speed, power and exhaust enthalpy at an imposed mass flow.
        Args:
            point (OperatingPoint): Feasible operating point.
            inlet (InletState): Supply temperature, entropy and density.
            provider: Thermophysical property provider.
        Returns:
            PumpEstimate: Unvalidated model output.
        """
        h_ex_s = isentropic_enthalpy(point.P_ex, inlet.s, point.fluid, provider)

        N_pp = 60 * point.M_dot / (self.epsilon_vol * self.V_s * inlet.rho)
        W_dot = point.M_dot * (h_ex_s - point.h_su) / self.epsilon_is
        h_ex = point.h_su + W_dot / point.M_dot

        return PumpEstimate(
            h_ex=h_ex,
            h_ex_s=h_ex_s,
            N_pp=N_pp,
            W_dot=W_dot,
            epsilon_is=self.epsilon_is,
            epsilon_vol=self.epsilon_vol,
        )
