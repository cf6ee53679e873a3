class PanchangamError(Exception):
    """Base error."""

class CoordinateError(PanchangamError, ValueError):
    """Raised for a latitude/longitude outside the valid range or not finite."""

class ConfigError(PanchangamError, ValueError):
    """Raised when an EngineConfig field has an unsupported value."""

class LeapSecondTableError(PanchangamError):
    """Raised when a leap-second table file cannot be parsed."""
