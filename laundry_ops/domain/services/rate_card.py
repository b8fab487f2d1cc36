"""
Rate Card - Price table injected into the pricing services.

All prices are in whole units of the local currency (XOF by default). The
rate card is configuration: the application layer builds it from
``PricingConfig`` so that every caller prices with the same table.
"""

from dataclasses import dataclass
from decimal import Decimal

from ..constants import DEFAULT_CURRENCY
from ..value_objects import Money


@dataclass(frozen=True)
class RateCard:
    """Price table for wash orders.

    Attributes:
        unit_price_large: Price of one 20 kg machine load
        unit_price_small: Price of one 6 kg machine load
        per_kg_detailed_rate: Price per kg of the Detailed formula
        drying_rate_per_kg: Drying surcharge per kg (Basic formula)
        ironing_rate_per_kg: Ironing surcharge per kg (Basic formula)
        express_surcharge: Fixed express surcharge, any formula
        delivery_surcharge: Fixed delivery surcharge
        monthly_quota_ceiling: Premium monthly quota in kg
        student_discount_rate: Student discount as a fraction (0.10 = 10%)
        opening_discount_rate: Opening promotion discount as a fraction
        currency: ISO 4217 currency code

    Example:
        >>> card = RateCard(unit_price_large=Decimal("4000"), unit_price_small=Decimal("2000"))
        >>> card.large_load_price
        Money(4000, 'XOF')
    """

    unit_price_large: Decimal = Decimal("4000")
    unit_price_small: Decimal = Decimal("2000")
    per_kg_detailed_rate: Decimal = Decimal("600")
    drying_rate_per_kg: Decimal = Decimal("150")
    ironing_rate_per_kg: Decimal = Decimal("800")
    express_surcharge: Decimal = Decimal("1000")
    delivery_surcharge: Decimal = Decimal("1000")
    monthly_quota_ceiling: Decimal = Decimal("40")
    student_discount_rate: Decimal = Decimal("0.10")
    opening_discount_rate: Decimal = Decimal("0.05")
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        """Validate the rate card.

        Raises:
            ValueError: If a price or the quota is negative, or a discount rate
                is outside [0, 1).
        """
        prices = {
            "unit_price_large": self.unit_price_large,
            "unit_price_small": self.unit_price_small,
            "per_kg_detailed_rate": self.per_kg_detailed_rate,
            "drying_rate_per_kg": self.drying_rate_per_kg,
            "ironing_rate_per_kg": self.ironing_rate_per_kg,
            "express_surcharge": self.express_surcharge,
            "delivery_surcharge": self.delivery_surcharge,
            "monthly_quota_ceiling": self.monthly_quota_ceiling,
        }
        for name, value in prices.items():
            if value < 0:
                raise ValueError(f"{name} cannot be negative")

        for name, rate in (
            ("student_discount_rate", self.student_discount_rate),
            ("opening_discount_rate", self.opening_discount_rate),
        ):
            if not Decimal("0") <= rate < Decimal("1"):
                raise ValueError(f"{name} must be between 0 and 1")

        if self.unit_price_large <= 0 or self.unit_price_small <= 0:
            raise ValueError("Machine load prices must be positive")

    def money(self, amount: Decimal | int) -> Money:
        return Money(amount, self.currency)

    @property
    def large_load_price(self) -> Money:
        return self.money(self.unit_price_large)

    @property
    def small_load_price(self) -> Money:
        return self.money(self.unit_price_small)


DEFAULT_RATE_CARD = RateCard()
