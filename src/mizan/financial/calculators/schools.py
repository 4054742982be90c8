"""
School policy table - which rules each school of jurisprudence applies.

Every school maps to exactly one statically declared ``SchoolPolicy``:

- which threshold (nisab) standard governs
- which asset categories count towards Zakat, and at what fraction
- which liabilities are deducted
- how personal jewelry and retirement balances are treated
- which categories the school routes to Khums instead of Zakat

``resolve_policy`` applies the caller's options to a school's policy and
returns a ``ResolvedPolicy`` with a concrete inclusion for every category.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from loguru import logger

from mizan.core.exceptions import ConfigurationError, UnknownSchoolError
from mizan.financial.models import AssetCategory


class School(str, Enum):
    """Schools of jurisprudence (madhab)."""

    HANAFI = "hanafi"
    SHAFII = "shafii"
    MALIKI = "maliki"
    HANBALI = "hanbali"
    JAFARI = "jafari"


SCHOOL_LABELS = {
    School.HANAFI: "Hanafi",
    School.SHAFII: "Shafi'i",
    School.MALIKI: "Maliki",
    School.HANBALI: "Hanbali",
    School.JAFARI: "Ja'fari",
}


class ThresholdStandard(str, Enum):
    """Metal in which the nisab threshold is denominated."""

    GOLD = "gold"
    SILVER = "silver"


class ThresholdRule(Enum):
    """How a school picks its threshold standard."""

    GOLD = "gold"
    SILVER = "silver"
    USER_CHOICE = "user_choice"


class Inclusion(Enum):
    """How much of a category's value counts towards Zakat."""

    EXCLUDED = "excluded"
    FULL = "full"
    ONE_THIRD = "one_third"


class JewelryRule(Enum):
    ALWAYS = "always"
    OPT_IN = "opt_in"
    NEVER = "never"


class RetirementRule(Enum):
    OPT_IN = "opt_in"  # counted at one third when the caller opts in
    NEVER = "never"


@dataclass(frozen=True)
class ZakatOptions:
    """Caller choices that some schools leave open."""

    include_jewelry: bool = False
    include_retirement: bool = False
    threshold_standard: ThresholdStandard | None = None


@dataclass(frozen=True)
class SchoolPolicy:
    """Static ruleset for one school.

    ``inclusions`` covers the categories whose treatment is fixed by the
    school; jewelry and retirement are governed by their own rules because
    some schools leave them to the caller.
    """

    school: School
    threshold_rule: ThresholdRule
    inclusions: tuple[tuple[AssetCategory, Inclusion], ...]
    deducts_debts: bool
    deducts_living_expenses: bool
    jewelry: JewelryRule
    retirement: RetirementRule
    khums_routed: frozenset[AssetCategory] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ResolvedPolicy:
    """A school's policy with caller options applied."""

    policy: SchoolPolicy
    threshold_standard: ThresholdStandard
    inclusions: tuple[tuple[AssetCategory, Inclusion], ...]

    @property
    def school(self) -> School:
        return self.policy.school

    @property
    def deducts_debts(self) -> bool:
        return self.policy.deducts_debts

    @property
    def deducts_living_expenses(self) -> bool:
        return self.policy.deducts_living_expenses

    def inclusion_for(self, category: AssetCategory) -> Inclusion:
        for cat, inclusion in self.inclusions:
            if cat == category:
                return inclusion
        return Inclusion.EXCLUDED

    def included_categories(self) -> tuple[AssetCategory, ...]:
        return tuple(cat for cat, inclusion in self.inclusions if inclusion != Inclusion.EXCLUDED)


# =============================================================================
# POLICY TABLE
# =============================================================================

# Cash, metals, trade goods, crypto and agricultural wealth count in full;
# equities count at their tangible third.
_SUNNI_INCLUSIONS = (
    (AssetCategory.CASH, Inclusion.FULL),
    (AssetCategory.GOLD, Inclusion.FULL),
    (AssetCategory.SILVER, Inclusion.FULL),
    (AssetCategory.INVESTMENTS, Inclusion.ONE_THIRD),
    (AssetCategory.BUSINESS_INVENTORY, Inclusion.FULL),
    (AssetCategory.CRYPTO, Inclusion.FULL),
    (AssetCategory.LIVESTOCK, Inclusion.FULL),
    (AssetCategory.CROPS, Inclusion.FULL),
)

# Zakat only on gold, silver, livestock and crops; liquid wealth falls under Khums.
_JAFARI_INCLUSIONS = (
    (AssetCategory.CASH, Inclusion.EXCLUDED),
    (AssetCategory.GOLD, Inclusion.FULL),
    (AssetCategory.SILVER, Inclusion.FULL),
    (AssetCategory.INVESTMENTS, Inclusion.EXCLUDED),
    (AssetCategory.BUSINESS_INVENTORY, Inclusion.EXCLUDED),
    (AssetCategory.CRYPTO, Inclusion.EXCLUDED),
    (AssetCategory.LIVESTOCK, Inclusion.FULL),
    (AssetCategory.CROPS, Inclusion.FULL),
)

SCHOOL_POLICIES: dict[School, SchoolPolicy] = {
    School.HANAFI: SchoolPolicy(
        school=School.HANAFI,
        threshold_rule=ThresholdRule.SILVER,
        inclusions=_SUNNI_INCLUSIONS,
        deducts_debts=True,
        deducts_living_expenses=True,
        jewelry=JewelryRule.ALWAYS,
        retirement=RetirementRule.NEVER,
    ),
    School.SHAFII: SchoolPolicy(
        school=School.SHAFII,
        threshold_rule=ThresholdRule.USER_CHOICE,
        inclusions=_SUNNI_INCLUSIONS,
        deducts_debts=False,  # gross-asset basis
        deducts_living_expenses=False,
        jewelry=JewelryRule.OPT_IN,
        retirement=RetirementRule.OPT_IN,
    ),
    School.MALIKI: SchoolPolicy(
        school=School.MALIKI,
        threshold_rule=ThresholdRule.USER_CHOICE,
        inclusions=_SUNNI_INCLUSIONS,
        deducts_debts=True,
        deducts_living_expenses=False,
        jewelry=JewelryRule.OPT_IN,
        retirement=RetirementRule.NEVER,
    ),
    School.HANBALI: SchoolPolicy(
        school=School.HANBALI,
        threshold_rule=ThresholdRule.USER_CHOICE,
        inclusions=_SUNNI_INCLUSIONS,
        deducts_debts=True,
        deducts_living_expenses=False,
        jewelry=JewelryRule.OPT_IN,
        retirement=RetirementRule.OPT_IN,
    ),
    School.JAFARI: SchoolPolicy(
        school=School.JAFARI,
        threshold_rule=ThresholdRule.GOLD,
        inclusions=_JAFARI_INCLUSIONS,
        deducts_debts=True,
        deducts_living_expenses=False,
        jewelry=JewelryRule.NEVER,
        retirement=RetirementRule.NEVER,
        khums_routed=frozenset(
            {
                AssetCategory.CASH,
                AssetCategory.INVESTMENTS,
                AssetCategory.BUSINESS_INVENTORY,
                AssetCategory.CRYPTO,
            }
        ),
    ),
}


# =============================================================================
# PARSING & RESOLUTION
# =============================================================================

_SCHOOL_ALIASES = {school.value: school for school in School}


def parse_school(value: Any) -> School:
    """Parse a school identifier.

    Accepts ``School`` members or strings, ignoring case, apostrophes,
    hyphens and spaces ("Shafi'i", "JA'FARI").

    Raises:
        UnknownSchoolError: If the identifier matches no school.
    """
    if isinstance(value, School):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for ch in ("'", "’", "-", " ", "_"):
            key = key.replace(ch, "")
        if key in _SCHOOL_ALIASES:
            return _SCHOOL_ALIASES[key]
    raise UnknownSchoolError(f"Unknown school: {value!r}. Available: {[s.value for s in School]}")


def parse_threshold_standard(value: Any) -> ThresholdStandard:
    """Parse a threshold standard ("gold" or "silver").

    Raises:
        ConfigurationError: If the value is neither.
    """
    if isinstance(value, ThresholdStandard):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for standard in ThresholdStandard:
            if standard.value == key:
                return standard
    available = [s.value for s in ThresholdStandard]
    raise ConfigurationError(f"Unknown threshold standard: {value!r}. Available: {available}")


def _resolve_jewelry(rule: JewelryRule, options: ZakatOptions) -> Inclusion:
    match rule:
        case JewelryRule.ALWAYS:
            return Inclusion.FULL
        case JewelryRule.OPT_IN:
            return Inclusion.FULL if options.include_jewelry else Inclusion.EXCLUDED
        case _:
            return Inclusion.EXCLUDED


def _resolve_retirement(rule: RetirementRule, options: ZakatOptions) -> Inclusion:
    if rule == RetirementRule.OPT_IN and options.include_retirement:
        return Inclusion.ONE_THIRD
    return Inclusion.EXCLUDED


def resolve_policy(
    school: School | str,
    options: ZakatOptions | None = None,
    requested_standard: ThresholdStandard | str | None = None,
) -> ResolvedPolicy:
    """Resolve the complete ruleset for one calculation.

    Args:
        school: School member or identifier.
        options: Jewelry/retirement opt-ins and a preferred threshold standard.
        requested_standard: Threshold standard asked for by the caller; takes
            precedence over ``options.threshold_standard``. Ignored by schools
            that enforce their own standard.
    """
    policy = SCHOOL_POLICIES[parse_school(school)]
    options = options or ZakatOptions()

    requested = requested_standard or options.threshold_standard or ThresholdStandard.GOLD
    requested = parse_threshold_standard(requested)

    match policy.threshold_rule:
        case ThresholdRule.SILVER:
            standard = ThresholdStandard.SILVER
        case ThresholdRule.GOLD:
            standard = ThresholdStandard.GOLD
        case _:
            standard = requested

    if standard != requested:
        logger.debug(
            f"{SCHOOL_LABELS[policy.school]} enforces the {standard.value} standard; ignoring {requested.value}"
        )

    inclusions = policy.inclusions + (
        (AssetCategory.PERSONAL_JEWELRY, _resolve_jewelry(policy.jewelry, options)),
        (AssetCategory.RETIREMENT_ACCOUNTS, _resolve_retirement(policy.retirement, options)),
    )

    return ResolvedPolicy(policy=policy, threshold_standard=standard, inclusions=inclusions)
