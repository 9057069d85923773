"""Pump model branches for pumpforge."""

from .constant_efficiency import ConstantEfficiencyPump
from .polynomial_efficiency import PolynomialEfficiencyPump
from .semi_empirical import SemiEmpiricalPump

__all__ = ["ConstantEfficiencyPump", "PolynomialEfficiencyPump", "SemiEmpiricalPump"]
