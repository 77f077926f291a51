"""Error types raised by the media core."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when static catalog configuration is inconsistent or unreadable."""
