"""
Khums Calculator - one fifth of annual surplus, per Ja'fari jurisprudence.

Implements:
- Annual surplus: income + property subject to khums − deductions
- Inheritance exemption (never counted as income)
- Five advanced categories, each taxed at 20% on its own
- Split of the total obligation into Sahm al-Imam and Sahm al-Sadat

Khums takes no school parameter: it is computed the same way whenever it
applies.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from loguru import logger

from mizan.core.utils.numbers import money_context
from mizan.financial.models import KhumsInput

from .rates import KHUMS_RATE, SAHM_AL_IMAM_RATE, SAHM_AL_SADAT_RATE

ZERO = Decimal("0")

INCOME_FIELDS = ("savings", "cash_on_hand", "investments", "business_profits", "rental_income", "gifts")
PROPERTY_FIELDS = ("gold_silver_purchased", "jewelry_beyond_use", "unused_goods")
DEDUCTION_FIELDS = ("annual_expenses", "debt_payments", "business_reinvestment")
ADVANCED_FIELDS = ("kanz", "madan", "ghaws", "property_appreciation", "mixed_halal_haram")


@dataclass
class KhumsResult:
    """Complete result of a khums calculation."""

    total_income: Decimal
    total_property: Decimal
    gross_surplus: Decimal
    total_deductions: Decimal
    net_surplus: Decimal
    standard_obligation: Decimal
    advanced_obligation: Decimal
    total_obligation: Decimal
    imam_share: Decimal
    sadat_share: Decimal

    @property
    def khums_rate(self) -> Decimal:
        return KHUMS_RATE

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "surplus": {
                "total_income": round(float(self.total_income), 2),
                "total_property": round(float(self.total_property), 2),
                "gross_surplus": round(float(self.gross_surplus), 2),
                "total_deductions": round(float(self.total_deductions), 2),
                "net_surplus": round(float(self.net_surplus), 2),
            },
            "khums": {
                "rate": float(KHUMS_RATE),
                "standard": round(float(self.standard_obligation), 2),
                "advanced": round(float(self.advanced_obligation), 2),
                "total": round(float(self.total_obligation), 2),
            },
            "shares": {
                "sahm_al_imam": round(float(self.imam_share), 2),
                "sahm_al_sadat": round(float(self.sadat_share), 2),
            },
        }


def _sum_fields(khums_input: KhumsInput, names: tuple[str, ...]) -> Decimal:
    return sum((getattr(khums_input, name) for name in names), ZERO)


def calculate_khums(khums_input: KhumsInput | dict[str, Any]) -> KhumsResult:
    """Calculate khums on a year's surplus and advanced categories.

    Args:
        khums_input: Income, property, deductions and advanced categories, or
            raw form data to normalize into a ``KhumsInput``.
    """
    if not isinstance(khums_input, KhumsInput):
        khums_input = KhumsInput.from_mapping(khums_input)

    with money_context():
        total_income = _sum_fields(khums_input, INCOME_FIELDS)
        total_property = _sum_fields(khums_input, PROPERTY_FIELDS)
        gross_surplus = total_income + total_property

        total_deductions = _sum_fields(khums_input, DEDUCTION_FIELDS)
        net_surplus = max(ZERO, gross_surplus - total_deductions)

        standard_obligation = net_surplus * KHUMS_RATE
        advanced_obligation = sum((getattr(khums_input, name) * KHUMS_RATE for name in ADVANCED_FIELDS), ZERO)
        total_obligation = standard_obligation + advanced_obligation
        imam_share = total_obligation * SAHM_AL_IMAM_RATE
        sadat_share = total_obligation * SAHM_AL_SADAT_RATE

    if khums_input.inheritance > 0:
        logger.debug(f"Inheritance of {khums_input.inheritance:,.2f} is exempt from khums")
    logger.debug(
        f"Khums: surplus {gross_surplus:,.2f} - deductions {total_deductions:,.2f} = {net_surplus:,.2f}; "
        f"standard {standard_obligation:,.2f} + advanced {advanced_obligation:,.2f}"
    )

    return KhumsResult(
        total_income=total_income,
        total_property=total_property,
        gross_surplus=gross_surplus,
        total_deductions=total_deductions,
        net_surplus=net_surplus,
        standard_obligation=standard_obligation,
        advanced_obligation=advanced_obligation,
        total_obligation=total_obligation,
        imam_share=imam_share,
        sadat_share=sadat_share,
    )
