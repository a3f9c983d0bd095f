"""Custom exceptions for media manager."""


class MediaManagerError(Exception):
    """Base exception for media manager errors."""
    pass


class ConfigurationError(MediaManagerError):
    """Raised when there's an error in configuration."""
    pass
