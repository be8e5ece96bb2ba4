"""
Exception hierarchy.

All errors derive from ``ValueError`` as well, so callers that only know
about built-in exceptions keep working.
"""


class DataCommError(Exception):
    """Base class for every error raised by datacomm."""


class ConfigurationError(DataCommError, ValueError):
    """An unknown scheme, modulation kind or waveform kind was requested."""


class DomainError(DataCommError, ValueError):
    """A formula was fed values for which it is mathematically undefined."""


class ExpressionError(DataCommError, ValueError):
    """A signal equation could not be tokenized or parsed."""
