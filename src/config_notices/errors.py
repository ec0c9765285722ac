"""
Exceptions raised by the configuration notices engine.
"""


class NoticesError(Exception):
    """Base class for all configuration notices errors."""


class ConfigurationError(NoticesError):
    """Raised when a piece of host configuration has an unusable shape."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


class ManifestError(NoticesError):
    """Raised when the required-services manifest can't be loaded."""
