"""
Asset valuation - turns weight-denominated holdings into currency.

Gold and silver are held in grams and valued at the injected quote; every
other holding is already a currency amount and passes through unchanged.
A zero price yields a zero value; the caller is expected to supply a sane
quote.
"""

from dataclasses import dataclass
from decimal import Decimal

from mizan.core.utils.numbers import money_context, round_cent
from mizan.financial.models import AssetCategory, AssetHolding, MetalPriceQuote


@dataclass
class ValuedHoldings:
    """Holdings with every asset category expressed in currency."""

    values: dict[AssetCategory, Decimal]
    debts_owed: Decimal
    living_expenses: Decimal

    def value_of(self, category: AssetCategory) -> Decimal:
        return self.values[category]


def metal_value(grams: Decimal, price_per_gram: Decimal) -> Decimal:
    """Value a metal weight, rounded to the cent."""
    with money_context():
        return round_cent(grams * price_per_gram)


def value_holdings(assets: AssetHolding, quote: MetalPriceQuote) -> ValuedHoldings:
    """Value every asset category in the calculation currency."""
    values = {
        AssetCategory.CASH: assets.cash,
        AssetCategory.GOLD: metal_value(assets.gold_grams, quote.gold_per_gram),
        AssetCategory.SILVER: metal_value(assets.silver_grams, quote.silver_per_gram),
        AssetCategory.INVESTMENTS: assets.investments,
        AssetCategory.BUSINESS_INVENTORY: assets.business_inventory,
        AssetCategory.CRYPTO: assets.crypto,
        AssetCategory.LIVESTOCK: assets.livestock,
        AssetCategory.CROPS: assets.crops,
        AssetCategory.PERSONAL_JEWELRY: assets.personal_jewelry,
        AssetCategory.RETIREMENT_ACCOUNTS: assets.retirement_accounts,
    }
    return ValuedHoldings(
        values=values,
        debts_owed=assets.debts_owed,
        living_expenses=assets.living_expenses,
    )
