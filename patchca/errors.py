
class ConfigurationError(ValueError):
    """Raised when run parameters cannot produce a meaningful landscape."""


class NumericDegeneracyError(ArithmeticError):
    """Raised in strict mode when a density estimate leaves the open interval (0, 1)."""
