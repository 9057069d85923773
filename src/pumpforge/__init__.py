"""
pumpforge - Steady-state volumetric pump models for ORC systems.

Provides:
- Three interchangeable pump models (constant efficiency, polynomial
  efficiency, semi-empirical) driven by an imposed mass flow rate
- Feasibility and exhaust-state checks with an ideal-machine fallback
- Thermodynamic property lookups via CoolProp, or any injected provider
- Mass-flow sweeps and imposed-speed solves
- JSON-schema validated pump cases, results export and T-s diagrams
"""

from .config import (
    ConstantEfficiency,
    PolynomialEfficiency,
    SemiEmpirical,
    pump_config_from_dict,
    pump_config_to_dict,
)
from .errors import InvalidModelType, PropertyLookupError, PumpforgeError
from .operating_map import solve_mass_flow, sweep_mass_flow
from .pump import evaluate
from .state import (
    FLAG_ACCEPTED,
    FLAG_INFEASIBLE,
    FLAG_OUT_OF_BOUNDS,
    EvaluationResult,
    OperatingPoint,
    TSTrace,
)
from .thermo import CoolPropProvider, ThermophysicalProvider
from .validate import validate_case
from .result import (
    save_results_csv,
    save_results_json,
    save_sweep_csv,
    plot_ts_diagram,
    plot_sweep,
)

__version__ = "0.1.0"

__all__ = [
    "ConstantEfficiency",
    "PolynomialEfficiency",
    "SemiEmpirical",
    "pump_config_from_dict",
    "pump_config_to_dict",
    "InvalidModelType",
    "PropertyLookupError",
    "PumpforgeError",
    "solve_mass_flow",
    "sweep_mass_flow",
    "evaluate",
    "FLAG_ACCEPTED",
    "FLAG_INFEASIBLE",
    "FLAG_OUT_OF_BOUNDS",
    "EvaluationResult",
    "OperatingPoint",
    "TSTrace",
    "CoolPropProvider",
    "ThermophysicalProvider",
    "validate_case",
    "save_results_csv",
    "save_results_json",
    "save_sweep_csv",
    "plot_ts_diagram",
    "plot_sweep",
    "__version__",
]
