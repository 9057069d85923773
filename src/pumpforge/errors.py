"""Exception types raised by pumpforge."""


class PumpforgeError(Exception):
    """Base class for pumpforge errors."""


class InvalidModelType(PumpforgeError, ValueError):
    """Raised when a pump configuration names an unknown model type."""


class PropertyLookupError(PumpforgeError, RuntimeError):
    """Raised when the thermophysical provider cannot resolve a property."""
