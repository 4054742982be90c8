"""Core obligation data models.

Inputs supplied by the surrounding application (asset holdings, a metal
price quote, Khums income and property) and the breakdown rows emitted by
the calculators. Inputs are fail-soft: any negative or unparseable amount
becomes zero. Only the price quote, which comes from a price feed rather
than a form, is validated strictly.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any

from mizan.core.exceptions import InvalidPriceQuoteError
from mizan.core.utils.numbers import MAX_AMOUNT, coerce_non_negative, round_cent, to_money

if TYPE_CHECKING:
    from mizan.core.config import Config


class AssetCategory(str, Enum):
    """Asset categories that a school may count towards Zakat."""

    CASH = "cash"
    GOLD = "gold"
    SILVER = "silver"
    INVESTMENTS = "investments"
    BUSINESS_INVENTORY = "business_inventory"
    CRYPTO = "crypto"
    LIVESTOCK = "livestock"
    CROPS = "crops"
    PERSONAL_JEWELRY = "personal_jewelry"
    RETIREMENT_ACCOUNTS = "retirement_accounts"


class DeductionCategory(str, Enum):
    """Liabilities that a school may subtract from zakatable wealth."""

    DEBTS_OWED = "debts_owed"
    LIVING_EXPENSES = "living_expenses"


CATEGORY_LABELS: dict[AssetCategory | DeductionCategory, str] = {
    AssetCategory.CASH: "Cash & Bank Accounts",
    AssetCategory.GOLD: "Gold",
    AssetCategory.SILVER: "Silver",
    AssetCategory.INVESTMENTS: "Investments (1/3 zakatable)",
    AssetCategory.BUSINESS_INVENTORY: "Business Inventory",
    AssetCategory.CRYPTO: "Crypto Assets",
    AssetCategory.LIVESTOCK: "Livestock",
    AssetCategory.CROPS: "Agricultural Produce",
    AssetCategory.PERSONAL_JEWELRY: "Personal Jewelry",
    AssetCategory.RETIREMENT_ACCOUNTS: "Retirement Accounts (1/3 zakatable)",
    DeductionCategory.DEBTS_OWED: "Debts Owed",
    DeductionCategory.LIVING_EXPENSES: "Living Expenses",
}


def _camel_to_snake(name: str) -> str:
    out = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out).lstrip("_")


def _field_values(cls: type, data: dict[str, Any], aliases: dict[str, str]) -> dict[str, Any]:
    """Pick the dataclass fields of ``cls`` out of raw form data."""
    names = {f.name for f in fields(cls)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        name = _camel_to_snake(key)
        name = aliases.get(name, name)
        if name in names:
            values[name] = value
    return values


@dataclass
class AssetHolding:
    """A household's holdings for one Zakat calculation.

    Metals are weights in grams; every other field is a currency amount.
    All fields default to zero and are normalized on construction.

    Attributes:
        cash: Cash on hand and bank balances.
        gold_grams: Gold held, in grams.
        silver_grams: Silver held, in grams.
        investments: Market value of stocks and funds.
        business_inventory: Trade goods held for sale.
        livestock: Value of grazing livestock.
        crops: Value of agricultural produce.
        crypto: Value of crypto holdings.
        retirement_accounts: Retirement account balance.
        personal_jewelry: Value of jewelry worn for personal use.
        debts_owed: Debts currently owed by the household.
        living_expenses: Declared living expenses for the year.
    """

    cash: Decimal = Decimal("0")
    gold_grams: Decimal = Decimal("0")
    silver_grams: Decimal = Decimal("0")
    investments: Decimal = Decimal("0")
    business_inventory: Decimal = Decimal("0")
    livestock: Decimal = Decimal("0")
    crops: Decimal = Decimal("0")
    crypto: Decimal = Decimal("0")
    retirement_accounts: Decimal = Decimal("0")
    personal_jewelry: Decimal = Decimal("0")
    debts_owed: Decimal = Decimal("0")
    living_expenses: Decimal = Decimal("0")

    def __post_init__(self):
        for f in fields(self):
            val = getattr(self, f.name)
            if f.name in ("gold_grams", "silver_grams"):
                setattr(self, f.name, coerce_non_negative(val))
            else:
                setattr(self, f.name, to_money(val))

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> AssetHolding:
        """Build holdings from raw form data.

        Accepts snake_case or camelCase keys; ``gold``/``silver`` are read as
        grams. Unknown keys are ignored.
        """
        aliases = {
            "gold": "gold_grams",
            "silver": "silver_grams",
            "retirement": "retirement_accounts",
            "jewelry": "personal_jewelry",
        }
        return cls(**_field_values(cls, data, aliases))


@dataclass
class MetalPriceQuote:
    """Already-resolved metal prices, per gram, in the calculation currency."""

    gold_per_gram: Decimal
    silver_per_gram: Decimal

    def __post_init__(self):
        for field_name in ("gold_per_gram", "silver_per_gram"):
            val = getattr(self, field_name)
            if isinstance(val, bool):
                raise InvalidPriceQuoteError(f"{field_name} must be a number, got {val!r}")
            try:
                number = val if isinstance(val, Decimal) else Decimal(str(val))
            except InvalidOperation as e:
                raise InvalidPriceQuoteError(f"{field_name} must be a number, got {val!r}") from e
            if not number.is_finite() or number < 0 or number > MAX_AMOUNT:
                raise InvalidPriceQuoteError(f"{field_name} must be non-negative and at most {MAX_AMOUNT}, got {val!r}")
            setattr(self, field_name, number)

    @classmethod
    def from_troy_ounce(cls, gold_per_ounce: Any, silver_per_ounce: Any) -> MetalPriceQuote:
        """Convert per-troy-ounce feed prices to per-gram, rounded to the cent."""
        from .calculators.rates import GRAMS_PER_TROY_OUNCE

        raw = MetalPriceQuote(gold_per_ounce, silver_per_ounce)
        return cls(
            gold_per_gram=round_cent(raw.gold_per_gram / GRAMS_PER_TROY_OUNCE),
            silver_per_gram=round_cent(raw.silver_per_gram / GRAMS_PER_TROY_OUNCE),
        )

    @classmethod
    def from_config(cls, config: Config) -> MetalPriceQuote:
        """Fallback quote from the ``pricing`` section of a Config."""
        pricing = config.validated().pricing
        return cls(gold_per_gram=pricing.gold_per_gram, silver_per_gram=pricing.silver_per_gram)


@dataclass
class KhumsInput:
    """A year's income, property and deductions for Khums.

    ``inheritance`` is recorded but exempt: it never enters total income.
    The five advanced categories (kanz, madan, ghaws, property appreciation,
    mixed halal/haram wealth) are each taxed on their own, outside the
    surplus and its deductions.
    """

    # Income
    savings: Decimal = Decimal("0")
    cash_on_hand: Decimal = Decimal("0")
    investments: Decimal = Decimal("0")
    business_profits: Decimal = Decimal("0")
    rental_income: Decimal = Decimal("0")
    gifts: Decimal = Decimal("0")
    inheritance: Decimal = Decimal("0")

    # Property
    gold_silver_purchased: Decimal = Decimal("0")
    jewelry_beyond_use: Decimal = Decimal("0")
    unused_goods: Decimal = Decimal("0")

    # Deductions
    annual_expenses: Decimal = Decimal("0")
    debt_payments: Decimal = Decimal("0")
    business_reinvestment: Decimal = Decimal("0")

    # Advanced categories
    kanz: Decimal = Decimal("0")
    madan: Decimal = Decimal("0")
    ghaws: Decimal = Decimal("0")
    property_appreciation: Decimal = Decimal("0")
    mixed_halal_haram: Decimal = Decimal("0")

    def __post_init__(self):
        for f in fields(self):
            setattr(self, f.name, to_money(getattr(self, f.name)))

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> KhumsInput:
        """Build a Khums input from raw form data (snake_case or camelCase keys)."""
        aliases = {
            "jewelry_beyond_personal_use": "jewelry_beyond_use",
            "treasure": "kanz",
            "minerals": "madan",
            "sea_finds": "ghaws",
        }
        return cls(**_field_values(cls, data, aliases))


@dataclass
class BreakdownRow:
    """One line of a Zakat breakdown.

    Asset rows carry a positive amount and an obligation of amount × 2.5%.
    Deduction rows carry the deducted amount as a negative number, and a
    negative obligation: the share of the levy that the deduction cancels
    out. Debts are credited before living expenses, each only up to the
    assets not yet offset, so the row obligations of a breakdown always sum
    to the total due. Below nisab every obligation is zero.
    """

    category: AssetCategory | DeductionCategory
    amount: Decimal
    obligation: Decimal

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self.category]

    @property
    def is_deduction(self) -> bool:
        return isinstance(self.category, DeductionCategory)

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "label": self.label,
            "amount": round(float(self.amount), 2),
            "obligation": round(float(self.obligation), 2),
        }
