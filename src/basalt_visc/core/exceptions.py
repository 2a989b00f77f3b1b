class BasaltVizError(Exception):
    """Base class for basalt-visc errors."""

class DecodeError(BasaltVizError):
    """Raised when an uploaded spreadsheet or text file cannot be decoded."""
    pass

class ConfigError(BasaltVizError):
    pass
