"""
Jurisprudential constants for Zakat and Khums.

Single source of truth for every rate, weight and ratio used by the
calculators. This module has NO dependencies on other modules to prevent
import cycles.

These are fixed by the classical sources, not tunable settings. Changing
any of them changes the religious obligation being computed, so none of
them is read from configuration.

Sources:
- Zakat rate (1/40): hadith of Ali, Sunan Abi Dawud 1573
- Nisab weights: 20 mithqal of gold (~85 g), 200 dirham of silver (~595 g)
- Khums rate (1/5): Qur'an 8:41
- Khums split: Sahm al-Imam and Sahm al-Sadat, equal halves

Last updated: January 2026
"""

from decimal import Decimal

# =============================================================================
# ZAKAT
# =============================================================================

ZAKAT_RATE = Decimal("0.025")  # 2.5% of net zakatable wealth

NISAB_GOLD_GRAMS = Decimal("85")  # 20 mithqal
NISAB_SILVER_GRAMS = Decimal("595")  # 200 dirham

# Only the tangible, zakatable share of a company (cash, receivables,
# inventory) is counted for equities and equity-based retirement funds.
ONE_THIRD_DIVISOR = Decimal("3")


# =============================================================================
# KHUMS
# =============================================================================

KHUMS_RATE = Decimal("0.20")  # 20% of annual surplus and of each advanced category

SAHM_AL_IMAM_RATE = Decimal("0.5")
SAHM_AL_SADAT_RATE = Decimal("0.5")


# =============================================================================
# UNITS
# =============================================================================

GRAMS_PER_TROY_OUNCE = Decimal("31.1035")
