"""
Obligation router - decides which engine claims each asset category.

Under most schools every asset category is either zakatable or exempt.
The Ja'fari school moves cash, investments, business inventory and crypto
out of Zakat and into Khums. The router makes that partition explicit:
each category is claimed by exactly one of Zakat, Khums, or neither
(exempt), and both engines are consulted accordingly.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from loguru import logger

from mizan.core.config import Config
from mizan.core.exceptions import ConfigurationError
from mizan.core.utils.numbers import money_context
from mizan.financial.models import AssetCategory, AssetHolding, KhumsInput, MetalPriceQuote

from .khums import KhumsResult, calculate_khums
from .schools import (
    SCHOOL_LABELS,
    Inclusion,
    ResolvedPolicy,
    School,
    ThresholdStandard,
    ZakatOptions,
    parse_school,
    resolve_policy,
)
from .valuation import value_holdings
from .zakat import ZakatCalculator, ZakatResult

ZERO = Decimal("0")


class Engine(Enum):
    """Which obligation claims an asset category."""

    ZAKAT = "zakat"
    KHUMS = "khums"
    EXEMPT = "exempt"


@dataclass
class RoutedObligations:
    """Zakat and (where applicable) Khums for one household and school.

    ``khums_from_holdings`` is set when no Khums input was supplied and Khums
    was computed on the routed holdings alone.
    """

    school: School
    zakat: ZakatResult
    khums: KhumsResult | None
    claims: dict[AssetCategory, Engine]
    routed_to_khums: dict[AssetCategory, Decimal] = field(default_factory=dict)
    khums_from_holdings: bool = False

    @property
    def total_due(self) -> Decimal:
        """Single amount owed across both obligations."""
        khums_due = self.khums.total_obligation if self.khums else ZERO
        with money_context():
            return self.zakat.obligation_due + khums_due

    def categories_for(self, engine: Engine) -> list[AssetCategory]:
        return [category for category, claim in self.claims.items() if claim == engine]

    def to_dict(self) -> dict:
        return {
            "school": self.school.value,
            "school_label": SCHOOL_LABELS[self.school],
            "claims": {category.value: claim.value for category, claim in self.claims.items()},
            "routed_to_khums": {
                category.value: round(float(amount), 2) for category, amount in self.routed_to_khums.items()
            },
            "zakat": self.zakat.to_dict(),
            "khums": self.khums.to_dict() if self.khums else None,
            "khums_from_holdings": self.khums_from_holdings,
            "total_due": round(float(self.total_due), 2),
        }


def khums_input_from_holdings(routed: dict[AssetCategory, Decimal]) -> KhumsInput:
    """Khums input covering only the holdings a school moved out of Zakat."""
    with money_context():
        investments = routed.get(AssetCategory.INVESTMENTS, ZERO) + routed.get(AssetCategory.CRYPTO, ZERO)
    return KhumsInput(
        cash_on_hand=routed.get(AssetCategory.CASH, ZERO),
        investments=investments,
        business_profits=routed.get(AssetCategory.BUSINESS_INVENTORY, ZERO),
    )


def claim_categories(resolved: ResolvedPolicy) -> dict[AssetCategory, Engine]:
    """Assign every asset category to exactly one engine.

    Raises:
        ConfigurationError: If the school's table leaves a category unassigned
            or routes an included category to Khums.
    """
    claims: dict[AssetCategory, Engine] = {}
    routed = resolved.policy.khums_routed
    school = resolved.school.value

    for category, inclusion in resolved.inclusions:
        if inclusion != Inclusion.EXCLUDED:
            if category in routed:
                raise ConfigurationError(f"{category.value} is claimed by both zakat and khums for {school}")
            claims[category] = Engine.ZAKAT
        elif category in routed:
            claims[category] = Engine.KHUMS
        else:
            claims[category] = Engine.EXEMPT

    missing = set(AssetCategory) - set(claims)
    if missing:
        raise ConfigurationError(f"Unclaimed categories for {school}: {sorted(c.value for c in missing)}")

    return claims


class ObligationRouter:
    """Computes every obligation a school imposes on one set of holdings.

    School, options and the fallback quote can come from configuration; an
    explicit argument always wins. There is no default school: a missing
    school is a configuration error.
    """

    def __init__(self, config: Config | None = None):
        self.config = config
        if config is not None:
            settings = config.validated().obligations
            self.default_school = settings.school
            self.calculator = ZakatCalculator.from_config(config)
        else:
            self.default_school = None
            self.calculator = ZakatCalculator()

    def route(
        self,
        assets: AssetHolding | dict[str, Any],
        quote: MetalPriceQuote | None = None,
        school: School | str | None = None,
        khums_input: KhumsInput | dict[str, Any] | None = None,
        threshold_standard: ThresholdStandard | str | None = None,
        options: ZakatOptions | None = None,
    ) -> RoutedObligations:
        """Compute zakat, and khums where the school routes wealth to it.

        A supplied ``khums_input`` is taken as the year's complete Khums
        picture and is not merged with the routed holdings, which it already
        accounts for. Without one, Khums is computed on the routed holdings.

        Raises:
            ConfigurationError: If no school is given or configured.
            UnknownSchoolError: If the school is not recognized.
        """
        if school is None:
            school = self.default_school
        if school is None:
            raise ConfigurationError("No school given and obligations.school is not configured")
        school = parse_school(school)

        if not isinstance(assets, AssetHolding):
            assets = AssetHolding.from_mapping(assets)
        options = options or self.calculator.options

        resolved = resolve_policy(school, options, threshold_standard)
        claims = claim_categories(resolved)

        zakat = self.calculator.calculate(assets, school, quote, threshold_standard, options)

        routed_to_khums: dict[AssetCategory, Decimal] = {}
        khums = None
        khums_from_holdings = False
        if resolved.policy.khums_routed:
            valued = value_holdings(assets, quote or self.calculator.quote)
            routed_to_khums = {
                category: valued.value_of(category)
                for category, claim in claims.items()
                if claim == Engine.KHUMS and valued.value_of(category) > 0
            }
            if khums_input is not None:
                khums = calculate_khums(khums_input)
            else:
                logger.info(
                    f"No khums input for {SCHOOL_LABELS[school]}; computing khums on routed holdings "
                    f"{sorted(c.value for c in routed_to_khums)}"
                )
                khums = calculate_khums(khums_input_from_holdings(routed_to_khums))
                khums_from_holdings = True
        elif khums_input is not None:
            logger.warning(f"Khums does not apply under the {SCHOOL_LABELS[school]} school; ignoring khums input")

        return RoutedObligations(
            school=school,
            zakat=zakat,
            khums=khums,
            claims=claims,
            routed_to_khums=routed_to_khums,
            khums_from_holdings=khums_from_holdings,
        )
