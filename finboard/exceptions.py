"""Exception classes for finboard."""


class FinboardError(Exception):
    """Base exception for finboard."""
    pass


class ThemeError(FinboardError):
    """Incomplete or invalid theme and token definitions."""
    pass


class ConfigError(FinboardError):
    """Configuration-related errors."""
    pass


class StoreError(FinboardError):
    """Invalid store actions."""
    pass


class ValidationError(FinboardError):
    """Data validation errors."""
    pass
