"""Shared infrastructure - configuration, exceptions, logging."""

from .config import Config, get_config, reset_config
from .exceptions import ConfigurationError, InvalidPriceQuoteError, MizanError, UnknownSchoolError

__all__ = [
    "Config",
    "ConfigurationError",
    "InvalidPriceQuoteError",
    "MizanError",
    "UnknownSchoolError",
    "get_config",
    "reset_config",
]
