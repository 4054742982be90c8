"""Obligation calculators - school policies, zakat, khums, and routing."""

from .khums import KhumsResult, calculate_khums
from .router import Engine, ObligationRouter, RoutedObligations, claim_categories, khums_input_from_holdings
from .schools import (
    SCHOOL_LABELS,
    SCHOOL_POLICIES,
    Inclusion,
    ResolvedPolicy,
    School,
    SchoolPolicy,
    ThresholdStandard,
    ZakatOptions,
    parse_school,
    resolve_policy,
)
from .valuation import ValuedHoldings, value_holdings
from .zakat import ZakatCalculator, ZakatResult, calculate_zakat

__all__ = [
    "SCHOOL_LABELS",
    "SCHOOL_POLICIES",
    "Engine",
    "Inclusion",
    "KhumsResult",
    "ObligationRouter",
    "ResolvedPolicy",
    "RoutedObligations",
    "School",
    "SchoolPolicy",
    "ThresholdStandard",
    "ValuedHoldings",
    "ZakatCalculator",
    "ZakatOptions",
    "ZakatResult",
    "calculate_khums",
    "calculate_zakat",
    "claim_categories",
    "khums_input_from_holdings",
    "parse_school",
    "resolve_policy",
    "value_holdings",
]
