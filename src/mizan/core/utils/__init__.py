"""Small shared helpers."""

from .logging import setup_logging, setup_logging_from_config
from .numbers import CENT, MAX_AMOUNT, coerce_non_negative, money_context, round_cent, to_money

__all__ = [
    "CENT",
    "MAX_AMOUNT",
    "coerce_non_negative",
    "money_context",
    "round_cent",
    "setup_logging",
    "setup_logging_from_config",
    "to_money",
]
