"""Tests for mizan.financial.models."""

from decimal import Decimal

import pytest

from mizan.core.config import Config
from mizan.core.exceptions import InvalidPriceQuoteError
from mizan.financial.models import (
    AssetCategory,
    AssetHolding,
    BreakdownRow,
    DeductionCategory,
    KhumsInput,
    MetalPriceQuote,
)


class TestAssetHolding:
    def test_defaults_are_zero(self):
        assets = AssetHolding()
        assert assets.cash == 0
        assert assets.gold_grams == 0
        assert assets.debts_owed == 0

    def test_auto_convert_to_decimal(self):
        assets = AssetHolding(cash=50000.50, investments="1,200")
        assert isinstance(assets.cash, Decimal)
        assert assets.cash == Decimal("50000.50")
        assert assets.investments == Decimal("1200")

    def test_invalid_values_become_zero(self):
        assets = AssetHolding(cash=-100, crypto="abc", livestock=None, crops=float("nan"))
        assert assets.cash == 0
        assert assets.crypto == 0
        assert assets.livestock == 0
        assert assets.crops == 0

    def test_money_rounded_to_cent(self):
        assert AssetHolding(cash="10.005").cash == Decimal("10.01")

    def test_grams_keep_precision(self):
        assert AssetHolding(gold_grams="12.3456").gold_grams == Decimal("12.3456")

    def test_from_mapping_camel_case(self):
        assets = AssetHolding.from_mapping(
            {
                "cash": 1000,
                "businessInventory": 500,
                "retirementAccounts": 900,
                "debtsOwed": 200,
                "livingExpenses": 100,
            }
        )
        assert assets.business_inventory == 500
        assert assets.retirement_accounts == 900
        assert assets.debts_owed == 200
        assert assets.living_expenses == 100

    def test_from_mapping_aliases(self):
        assets = AssetHolding.from_mapping({"gold": 10, "silver": 200, "jewelry": 300, "retirement": 400})
        assert assets.gold_grams == 10
        assert assets.silver_grams == 200
        assert assets.personal_jewelry == 300
        assert assets.retirement_accounts == 400

    def test_from_mapping_ignores_unknown_keys(self):
        assets = AssetHolding.from_mapping({"cash": 1, "yacht": 1_000_000})
        assert assets == AssetHolding(cash=1)


class TestMetalPriceQuote:
    def test_create(self):
        quote = MetalPriceQuote(gold_per_gram=75, silver_per_gram="0.90")
        assert quote.gold_per_gram == Decimal("75")
        assert quote.silver_per_gram == Decimal("0.90")

    def test_zero_allowed(self):
        quote = MetalPriceQuote(0, 0)
        assert quote.gold_per_gram == 0

    @pytest.mark.parametrize("bad", [-1, "-0.5", "abc", float("inf"), True])
    def test_invalid_raises(self, bad):
        with pytest.raises(InvalidPriceQuoteError):
            MetalPriceQuote(gold_per_gram=bad, silver_per_gram=1)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            MetalPriceQuote(gold_per_gram=1, silver_per_gram=-1)

    def test_from_troy_ounce(self):
        quote = MetalPriceQuote.from_troy_ounce("2650.00", "31.10")
        # 2650 / 31.1035 = 85.1994...; 31.10 / 31.1035 = 0.9998...
        assert quote.gold_per_gram == Decimal("85.20")
        assert quote.silver_per_gram == Decimal("1.00")

    def test_from_config(self, tmp_config_file):
        quote = MetalPriceQuote.from_config(Config(config_file=tmp_config_file))
        assert quote.gold_per_gram == 75
        assert quote.silver_per_gram == Decimal("0.9")

    def test_from_config_defaults(self):
        quote = MetalPriceQuote.from_config(Config())
        assert quote.gold_per_gram == Decimal("85.2")
        assert quote.silver_per_gram == 1


class TestKhumsInput:
    def test_normalizes_fields(self):
        khums_input = KhumsInput(savings="10,000", gifts=-5, kanz="x")
        assert khums_input.savings == Decimal("10000")
        assert khums_input.gifts == 0
        assert khums_input.kanz == 0

    def test_from_mapping(self):
        khums_input = KhumsInput.from_mapping(
            {
                "cashOnHand": 5000,
                "businessProfits": 40000,
                "jewelryBeyondPersonalUse": 700,
                "mixedHalalHaram": 300,
                "treasure": 100,
                "minerals": 200,
                "seaFinds": 50,
            }
        )
        assert khums_input.cash_on_hand == 5000
        assert khums_input.business_profits == 40000
        assert khums_input.jewelry_beyond_use == 700
        assert khums_input.mixed_halal_haram == 300
        assert khums_input.kanz == 100
        assert khums_input.madan == 200
        assert khums_input.ghaws == 50


class TestBreakdownRow:
    def test_asset_row(self):
        row = BreakdownRow(AssetCategory.INVESTMENTS, Decimal("10000"), Decimal("250"))
        assert row.label == "Investments (1/3 zakatable)"
        assert row.is_deduction is False

    def test_deduction_row(self):
        row = BreakdownRow(DeductionCategory.DEBTS_OWED, Decimal("-3000"), Decimal("-75"))
        assert row.label == "Debts Owed"
        assert row.is_deduction is True

    def test_to_dict(self):
        row = BreakdownRow(AssetCategory.CASH, Decimal("1234.56"), Decimal("30.864"))
        assert row.to_dict() == {
            "category": "cash",
            "label": "Cash & Bank Accounts",
            "amount": 1234.56,
            "obligation": 30.86,
        }


class TestLargeAmounts:
    def test_huge_holdings_normalize(self):
        assets = AssetHolding(cash="1e30", gold_grams="1e27", investments=1e40)
        assert assets.cash == Decimal("1e30")
        assert assets.gold_grams == Decimal("1e27")
        assert assets.investments == Decimal("1e40")

    def test_above_maximum_becomes_zero(self):
        assert AssetHolding(cash="1e101").cash == 0
        assert KhumsInput(savings="1e500").savings == 0

    def test_price_above_maximum_raises(self):
        with pytest.raises(InvalidPriceQuoteError):
            MetalPriceQuote(gold_per_gram="1e101", silver_per_gram=1)

    def test_huge_troy_ounce_price(self):
        quote = MetalPriceQuote.from_troy_ounce("3.11035e40", 0)
        assert quote.gold_per_gram == Decimal("1e39")
