"""
Zakat Calculator - 2.5% annual levy on qualifying wealth, per school.

Implements:
- School-specific asset inclusion (full value, one third, or excluded)
- School-specific deductions (debts, living expenses)
- Nisab threshold checking (gold 85 g or silver 595 g standard)
- 2.5% zakat on net zakatable wealth, with a per-category breakdown

All arithmetic is done in Decimal. Amounts are held to the cent and the
rate is exact, so breakdown obligations always sum to the total due.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from loguru import logger

from mizan.core.config import Config
from mizan.core.exceptions import ConfigurationError
from mizan.core.utils.numbers import money_context, round_cent
from mizan.financial.models import (
    AssetCategory,
    AssetHolding,
    BreakdownRow,
    DeductionCategory,
    MetalPriceQuote,
)

from .rates import NISAB_GOLD_GRAMS, NISAB_SILVER_GRAMS, ONE_THIRD_DIVISOR, ZAKAT_RATE
from .schools import (
    SCHOOL_LABELS,
    Inclusion,
    ResolvedPolicy,
    School,
    ThresholdStandard,
    ZakatOptions,
    resolve_policy,
)
from .valuation import ValuedHoldings, value_holdings

ZERO = Decimal("0")

# Shown in the breakdown only when they contribute something.
CONDITIONAL_CATEGORIES = frozenset({AssetCategory.PERSONAL_JEWELRY, AssetCategory.RETIREMENT_ACCOUNTS})


@dataclass
class ZakatResult:
    """Complete result of a zakat calculation."""

    school: School
    total_assets: Decimal
    total_deductions: Decimal
    net_worth: Decimal
    threshold_amount: Decimal
    threshold_standard: ThresholdStandard
    is_above_threshold: bool
    obligation_due: Decimal
    breakdown: list[BreakdownRow] = field(default_factory=list)

    @property
    def is_jafari(self) -> bool:
        return self.school == School.JAFARI

    @property
    def zakat_rate(self) -> Decimal:
        return ZAKAT_RATE

    def row_for(self, category: AssetCategory | DeductionCategory) -> BreakdownRow | None:
        for row in self.breakdown:
            if row.category == category:
                return row
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "school": self.school.value,
            "school_label": SCHOOL_LABELS[self.school],
            "totals": {
                "total_assets": round(float(self.total_assets), 2),
                "total_deductions": round(float(self.total_deductions), 2),
                "net_worth": round(float(self.net_worth), 2),
            },
            "nisab": {
                "standard": self.threshold_standard.value,
                "threshold": round(float(self.threshold_amount), 2),
                "meets_nisab": self.is_above_threshold,
            },
            "zakat": {
                "rate": float(ZAKAT_RATE),
                "due": round(float(self.obligation_due), 2),
            },
            "breakdown": [row.to_dict() for row in self.breakdown],
        }


def zakatable_amount(value: Decimal, inclusion: Inclusion) -> Decimal:
    """Portion of a category's value that counts towards zakat."""
    match inclusion:
        case Inclusion.FULL:
            return value
        case Inclusion.ONE_THIRD:
            with money_context():
                return round_cent(value / ONE_THIRD_DIVISOR)
        case _:
            return ZERO


def nisab_threshold(standard: ThresholdStandard, quote: MetalPriceQuote) -> Decimal:
    """Nisab in currency for the given standard."""
    if standard == ThresholdStandard.SILVER:
        return NISAB_SILVER_GRAMS * quote.silver_per_gram
    return NISAB_GOLD_GRAMS * quote.gold_per_gram


def check_nisab(
    net_worth: Decimal,
    standard: ThresholdStandard,
    quote: MetalPriceQuote,
) -> tuple[bool, Decimal]:
    """Check if net zakatable wealth meets the nisab threshold.

    Returns:
        Tuple of (meets_nisab, threshold)
    """
    threshold = nisab_threshold(standard, quote)
    meets = net_worth >= threshold

    logger.debug(f"Nisab check: {net_worth:,.2f} vs threshold {threshold:,.2f} ({standard.value} standard)")

    return (meets, threshold)


def _asset_rows(
    valued: ValuedHoldings,
    resolved: ResolvedPolicy,
) -> list[BreakdownRow]:
    rows = []
    for category in resolved.included_categories():
        amount = zakatable_amount(valued.value_of(category), resolved.inclusion_for(category))
        if category in CONDITIONAL_CATEGORIES and amount <= 0:
            continue
        rows.append(BreakdownRow(category=category, amount=amount, obligation=ZERO))
    return rows


def _deductions(valued: ValuedHoldings, resolved: ResolvedPolicy) -> list[tuple[DeductionCategory, Decimal]]:
    """Deductions the school allows, in the order they are credited."""
    deductions = []
    if resolved.deducts_debts:
        deductions.append((DeductionCategory.DEBTS_OWED, valued.debts_owed))
    if resolved.deducts_living_expenses and valued.living_expenses > 0:
        deductions.append((DeductionCategory.LIVING_EXPENSES, valued.living_expenses))
    return deductions


def calculate_zakat(
    assets: AssetHolding | dict[str, Any],
    school: School | str,
    quote: MetalPriceQuote,
    threshold_standard: ThresholdStandard | str | None = None,
    options: ZakatOptions | None = None,
) -> ZakatResult:
    """Perform a complete zakat calculation.

    Args:
        assets: Holdings, or raw form data to normalize into holdings.
        school: School member or identifier.
        quote: Metal prices per gram.
        threshold_standard: Requested nisab standard; Hanafi and Ja'fari
            override it.
        options: Jewelry/retirement opt-ins.

    Raises:
        UnknownSchoolError: If ``school`` is not a known school.
    """
    if not isinstance(assets, AssetHolding):
        assets = AssetHolding.from_mapping(assets)

    resolved = resolve_policy(school, options, threshold_standard)

    with money_context():
        valued = value_holdings(assets, quote)

        rows = _asset_rows(valued, resolved)
        total_assets = sum((row.amount for row in rows), ZERO)

        deductions = _deductions(valued, resolved)
        total_deductions = sum((amount for _, amount in deductions), ZERO)
        net_worth = max(ZERO, total_assets - total_deductions)

        meets_nisab, threshold = check_nisab(net_worth, resolved.threshold_standard, quote)

        obligation_due = ZERO
        if meets_nisab:
            obligation_due = net_worth * ZAKAT_RATE
            for row in rows:
                row.obligation = row.amount * ZAKAT_RATE
        else:
            logger.info(f"Net worth {net_worth:,.2f} below nisab {threshold:,.2f}, no zakat due")

        # Each deduction offsets at most the assets not yet offset, so the
        # negative row obligations never push the breakdown total below zero.
        uncredited = total_assets
        for category, amount in deductions:
            credited = min(uncredited, amount)
            uncredited -= credited
            obligation = ZERO - credited * ZAKAT_RATE if meets_nisab else ZERO
            rows.append(BreakdownRow(category=category, amount=ZERO - amount, obligation=obligation))

    return ZakatResult(
        school=resolved.school,
        total_assets=total_assets,
        total_deductions=total_deductions,
        net_worth=net_worth,
        threshold_amount=threshold,
        threshold_standard=resolved.threshold_standard,
        is_above_threshold=meets_nisab,
        obligation_due=obligation_due,
        breakdown=rows,
    )


class ZakatCalculator:
    """Calculator for Islamic obligatory charity (zakat).

    Holds default options and an optional fallback price quote so callers
    can compute repeatedly with the same settings.
    """

    def __init__(
        self,
        options: ZakatOptions | None = None,
        quote: MetalPriceQuote | None = None,
    ):
        self.options = options or ZakatOptions()
        self.quote = quote

    @classmethod
    def from_config(cls, config: Config) -> "ZakatCalculator":
        """Build a calculator from the ``obligations`` and ``pricing`` sections."""
        settings = config.validated().obligations
        options = ZakatOptions(
            include_jewelry=settings.include_jewelry,
            include_retirement=settings.include_retirement,
            threshold_standard=settings.threshold_standard,
        )
        return cls(options=options, quote=MetalPriceQuote.from_config(config))

    def calculate(
        self,
        assets: AssetHolding | dict[str, Any],
        school: School | str,
        quote: MetalPriceQuote | None = None,
        threshold_standard: ThresholdStandard | str | None = None,
        options: ZakatOptions | None = None,
    ) -> ZakatResult:
        """Calculate zakat, falling back to this calculator's quote and options."""
        quote = quote or self.quote
        if quote is None:
            raise ConfigurationError("No metal price quote supplied and no fallback quote configured")
        return calculate_zakat(assets, school, quote, threshold_standard, options or self.options)
