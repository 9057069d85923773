"""Operating point, model output and T-s trace containers."""
from dataclasses import asdict, dataclass

FLAG_ACCEPTED = 1
FLAG_OUT_OF_BOUNDS = -1
FLAG_INFEASIBLE = -2


@dataclass(frozen=True)
class OperatingPoint:
    """
    Boundary conditions imposed on the pump.
    Attributes:
        P_su (float): Supply pressure [Pa].
        h_su (float): Supply specific enthalpy [J/kg].
        P_ex (float): Exhaust pressure [Pa].
        M_dot (float): Imposed mass flow rate [kg/s].
        fluid (str): Working fluid name understood by the property provider.
    """

    P_su: float
    h_su: float
    P_ex: float
    M_dot: float
    fluid: str

    @property
    def is_feasible(self):
        """True when the point can be modelled forward (pressure rise and positive flow)."""
        return self.P_su < self.P_ex and self.M_dot > 0


@dataclass(frozen=True)
class InletState:
    """Supply state resolved from (P_su, h_su)."""

    T: float
    s: float
    rho: float


@dataclass(frozen=True)
class PumpEstimate:
    """Raw output of one model branch, before the exhaust state is validated."""

    h_ex: float
    h_ex_s: float
    N_pp: float
    W_dot: float
    epsilon_is: float
    epsilon_vol: float


@dataclass(frozen=True)
class EvaluationResult:
    """
    Final pump performance.
    `flag` is 1 for an accepted model result, -1 when the exhaust enthalpy
    fell outside the validity bounds and -2 when the operating point was
    infeasible. Negative flags carry the ideal-machine fallback values.
    """

    T_ex: float
    h_ex: float
    N_pp: float
    W_dot: float
    epsilon_is: float
    epsilon_vol: float
    M: float
    flag: int

    @property
    def accepted(self):
        return self.flag == FLAG_ACCEPTED

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class TSTrace:
    """Two-point temperature-entropy trace: supply state then exhaust state."""

    T: tuple
    s: tuple

    def __post_init__(self):
        if len(self.T) != 2 or len(self.s) != 2:
            raise ValueError("A pump T-s trace holds exactly two points")

    def __len__(self):
        return 2

    def __iter__(self):
        return iter(zip(self.T, self.s))

    def __getitem__(self, index):
        return (self.T[index], self.s[index])

    def to_dict(self):
        return {"T": list(self.T), "s": list(self.s)}
