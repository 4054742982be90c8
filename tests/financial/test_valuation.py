"""Tests for mizan.financial.calculators.valuation."""

from decimal import Decimal

from mizan.financial.calculators.valuation import metal_value, value_holdings
from mizan.financial.models import AssetCategory, AssetHolding, MetalPriceQuote


def test_metal_value_rounds_to_cent():
    assert metal_value(Decimal("12.3456"), Decimal("85.2")) == Decimal("1051.85")


def test_metals_valued_at_quote(prices):
    valued = value_holdings(AssetHolding(gold_grams=100, silver_grams=595), prices)
    assert valued.value_of(AssetCategory.GOLD) == Decimal("7500")
    assert valued.value_of(AssetCategory.SILVER) == Decimal("535.50")


def test_zero_price_yields_zero(zero_prices):
    valued = value_holdings(AssetHolding(gold_grams=100), zero_prices)
    assert valued.value_of(AssetCategory.GOLD) == 0


def test_currency_holdings_pass_through():
    assets = AssetHolding(cash=1, investments=2, business_inventory=3, crypto=4, livestock=5, crops=6)
    valued = value_holdings(assets, MetalPriceQuote(1, 1))
    assert [valued.value_of(c) for c in (
        AssetCategory.CASH,
        AssetCategory.INVESTMENTS,
        AssetCategory.BUSINESS_INVENTORY,
        AssetCategory.CRYPTO,
        AssetCategory.LIVESTOCK,
        AssetCategory.CROPS,
    )] == [1, 2, 3, 4, 5, 6]


def test_every_category_valued(prices):
    valued = value_holdings(AssetHolding(), prices)
    assert set(valued.values) == set(AssetCategory)


def test_liabilities_carried(prices):
    valued = value_holdings(AssetHolding(debts_owed=300, living_expenses=200), prices)
    assert valued.debts_owed == 300
    assert valued.living_expenses == 200


def test_huge_metal_value():
    assert metal_value(Decimal("1e60"), Decimal("1e40")) == Decimal("1e100")
