"""Exceptions raised by sankeyflow."""


class SankeyError(Exception):
    """Base class for all sankeyflow errors."""

    pass


class LinkReferenceError(SankeyError, LookupError):
    """Raised when a link endpoint index does not name a node."""

    pass


class LayoutStateError(SankeyError):
    """Raised when an operation needs a completed layout and none exists."""

    pass


class ConfigError(SankeyError, ValueError):
    """Raised when a layout configuration value is unusable."""

    pass
