__all__ = [
    'SonogramError',
    'ConfigurationError'
]


class SonogramError(Exception):
    """Base class for errors raised by the rendering pipeline."""


class ConfigurationError(SonogramError, ValueError):
    """Input format or render parameters are not supported.

    Raised before any transform work begins, so no partial output exists.
    """
