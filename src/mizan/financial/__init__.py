"""Obligation framework - input models and calculators."""

from .models import AssetCategory, AssetHolding, BreakdownRow, DeductionCategory, KhumsInput, MetalPriceQuote

__all__ = [
    "AssetCategory",
    "AssetHolding",
    "BreakdownRow",
    "DeductionCategory",
    "KhumsInput",
    "MetalPriceQuote",
]
