"""Pump model configurations, one frozen dataclass per modelling approach."""
from dataclasses import dataclass, fields
from typing import Optional

from loguru import logger

from .errors import InvalidModelType


def _require_positive(name, value):
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def _require_efficiency(name, value):
    if not 0 < value <= 1:
        raise ValueError(f"{name} must lie in (0, 1], got {value}")


def _coefficients(name, values):
    coeffs = tuple(float(a) for a in values)
    if len(coeffs) != 6:
        raise ValueError(f"{name} needs 6 polynomial coefficients, got {len(coeffs)}")
    return coeffs


@dataclass(frozen=True)
class _PumpConfig:
    V_s: float
    V: float

    def _check_geometry(self):
        _require_positive("V_s", self.V_s)
        _require_positive("V", self.V)

    def _check_bounds(self):
        if self.h_min is not None and self.h_max is not None and self.h_min >= self.h_max:
            raise ValueError(f"h_min ({self.h_min}) must be lower than h_max ({self.h_max})")


@dataclass(frozen=True)
class ConstantEfficiency(_PumpConfig):
    """
    Constant isentropic and volumetric efficiencies.
    Attributes:
        V_s (float): Displacement volume [m³].
        V (float): Internal volume of the pump [m³].
        epsilon_is (float): Isentropic efficiency, in (0, 1].
        epsilon_vol (float): Volumetric efficiency, in (0, 1].
        h_min, h_max (float, optional): Exhaust enthalpy validity bounds [J/kg].
    """

    epsilon_is: float
    epsilon_vol: float
    h_min: Optional[float] = None
    h_max: Optional[float] = None

    model_type = "ConstantEfficiency"

    def __post_init__(self):
        self._check_geometry()
        _require_efficiency("epsilon_is", self.epsilon_is)
        _require_efficiency("epsilon_vol", self.epsilon_vol)
        self._check_bounds()


@dataclass(frozen=True)
class PolynomialEfficiency(_PumpConfig):
    """
    Efficiencies given by a quadratic surface in pressure ratio and
    normalised mass flow:
        f = a1 + a2*rp + a3*rm + a4*rp^2 + a5*rp*rm + a6*rm^2
    with rp = P_ex/P_su and rm = M_dot/M_dot_nom.
    """

    M_dot_nom: float
    coeffPol_is: tuple
    coeffPol_vol: tuple
    h_min: Optional[float] = None
    h_max: Optional[float] = None

    model_type = "PolynomialEfficiency"

    def __post_init__(self):
        self._check_geometry()
        _require_positive("M_dot_nom", self.M_dot_nom)
        # frozen dataclass: normalise list inputs to tuples
        object.__setattr__(self, "coeffPol_is", _coefficients("coeffPol_is", self.coeffPol_is))
        object.__setattr__(self, "coeffPol_vol", _coefficients("coeffPol_vol", self.coeffPol_vol))
        self._check_bounds()


@dataclass(frozen=True)
class SemiEmpirical(_PumpConfig):
    """
    Leakage through an equivalent orifice plus constant and
    pressure-proportional power losses.
    Attributes:
        A_leak (float): Leakage area [m²].
        W_dot_loss (float): Constant power loss [W].
        K_0_loss (float): Proportional loss coefficient [-].
    """

    A_leak: float
    W_dot_loss: float
    K_0_loss: float
    h_min: Optional[float] = None
    h_max: Optional[float] = None

    model_type = "SemiEmpirical"

    def __post_init__(self):
        self._check_geometry()
        if self.A_leak < 0:
            raise ValueError(f"A_leak must not be negative, got {self.A_leak}")
        self._check_bounds()


MODEL_TYPES = {
    "ConstantEfficiency": ConstantEfficiency,
    "PolynomialEfficiency": PolynomialEfficiency,
    "SemiEmpirical": SemiEmpirical,
}

# Short tags and parameter names used by the ORCmKit Matlab models
MODEL_TYPE_ALIASES = {
    "CstEff": "ConstantEfficiency",
    "PolEff": "PolynomialEfficiency",
    "SemiEmp": "SemiEmpirical",
}
PARAMETER_ALIASES = {
    "W_dot_0_loss": "W_dot_loss",
}


def pump_config_from_dict(params):
    """
    Builds a pump configuration from a parameter dictionary.
    Args:
        params (dict): Must contain "modelType" plus the fields of the selected
            model. Unknown keys (e.g. "displayResults") are ignored and the
            ORCmKit name "W_dot_0_loss" is read as "W_dot_loss".
    Returns:
        ConstantEfficiency | PolynomialEfficiency | SemiEmpirical
    Raises:
        InvalidModelType: If "modelType" is missing or not a known model.
        ValueError: If a required field is missing or out of range.
    """
    model_type = params.get("modelType")
    model_type = MODEL_TYPE_ALIASES.get(model_type, model_type)
    config_class = MODEL_TYPES.get(model_type)
    if not config_class:
        logger.error(f"Unknown pump model type: {params.get('modelType')}")
        raise InvalidModelType(f"Unknown pump model type: {params.get('modelType')}")

    params = dict(params)
    for alias, name in PARAMETER_ALIASES.items():
        if alias in params and name not in params:
            params[name] = params.pop(alias)

    names = [f.name for f in fields(config_class)]
    missing = [n for n in names if n not in params and n not in ("h_min", "h_max")]
    if missing:
        logger.error(f"{model_type} pump is missing parameter(s): {', '.join(missing)}")
        raise ValueError(f"{model_type} pump is missing parameter(s): {', '.join(missing)}")
    return config_class(**{k: v for k, v in params.items() if k in names})


def pump_config_to_dict(config):
    """Inverse of pump_config_from_dict; optional bounds are dropped when unset."""
    params = {"modelType": config.model_type}
    for f in fields(config):
        value = getattr(config, f.name)
        if value is None:
            continue
        params[f.name] = list(value) if isinstance(value, tuple) else value
    return params
