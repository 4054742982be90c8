"""
Mizan exception hierarchy.

All mizan exceptions inherit from MizanError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""


class MizanError(Exception):
    """Base exception class for all mizan errors."""


class ConfigurationError(MizanError):
    """Raised for configuration errors (missing keys, invalid values)."""


class UnknownSchoolError(ConfigurationError, ValueError):
    """Raised when a school identifier does not match any known school."""


class InvalidPriceQuoteError(MizanError, ValueError):
    """Raised when a metal price quote carries a negative or non-numeric rate."""
