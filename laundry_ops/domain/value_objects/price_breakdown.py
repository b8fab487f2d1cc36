"""Itemized price of an order."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

from .machine_allocation import MachineAllocation
from .money import Money
from .order_options import Formula, OrderOption
from .quota_usage import QuotaUsage


class DiscountKind(Enum):
    """Reasons a discount can be granted on an order."""

    STUDENT = "student"
    OPENING = "opening"


class IncludedService(Enum):
    """Services bundled into a price without a separate line item."""

    PICKUP = "pickup"
    WASHING = "washing"
    DRYING = "drying"
    IRONING = "ironing"
    DELIVERY = "delivery"


ALL_INCLUSIVE_SERVICES: tuple[IncludedService, ...] = tuple(IncludedService)


@dataclass(frozen=True)
class PriceBreakdown:
    """Computed, immutable price of an order.

    A price change is a recomputation producing a new breakdown; instances are
    never patched. Every amount is already rounded to whole currency units.

    Attributes:
        base_price: Wash price of the billable weight
        surcharges: Option surcharges itemized by option
        discount: Discount amount (never includes the express surcharge)
        subtotal: base_price plus all surcharges
        total: subtotal minus discount
        pricing_formula: Formula the billable weight was priced with, None when
            nothing was billable
        allocation: Machine allocation of the billable weight when priced per load
        quota_usage: Quota split the price was computed from
        is_premium_free: True when a Premium subscription covered the whole weight
        surplus_formula_forced: True when a small surplus had to be billed per kilogram
        discount_rate: Rate the discount was computed with
        discount_kind: Why the discount was granted
        included_services: Services bundled into the base price
    """

    base_price: Money
    surcharges: Mapping[OrderOption, Money]
    discount: Money
    subtotal: Money
    total: Money
    pricing_formula: Formula | None
    allocation: MachineAllocation | None = None
    quota_usage: QuotaUsage | None = None
    is_premium_free: bool = False
    surplus_formula_forced: bool = False
    discount_rate: Decimal = Decimal("0")
    discount_kind: DiscountKind | None = None
    included_services: tuple[IncludedService, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "surcharges", MappingProxyType(dict(self.surcharges)))
        if self.total != self.subtotal.subtract(self.discount):
            raise ValueError("Total must equal subtotal minus discount")

    @property
    def currency(self) -> str:
        return self.total.currency

    @property
    def options_total(self) -> Money:
        """Sum of all option surcharges."""
        result = Money.zero(self.base_price.currency)
        for amount in self.surcharges.values():
            result = result.add(amount)
        return result

    def surcharge(self, option: OrderOption) -> Money:
        """Surcharge billed for an option, zero when not billed."""
        return self.surcharges.get(option, Money.zero(self.base_price.currency))

    def to_dict(self) -> dict[str, object]:
        """Convert to a plain dictionary with integer amounts."""
        return {
            "base_price": self.base_price.to_int(),
            "surcharges": {
                option.value: amount.to_int() for option, amount in self.surcharges.items()
            },
            "discount": self.discount.to_int(),
            "discount_rate": str(self.discount_rate),
            "discount_kind": self.discount_kind.value if self.discount_kind else None,
            "subtotal": self.subtotal.to_int(),
            "total": self.total.to_int(),
            "currency": self.currency,
            "pricing_formula": self.pricing_formula.value if self.pricing_formula else None,
            "is_premium_free": self.is_premium_free,
            "surplus_formula_forced": self.surplus_formula_forced,
            "allocation": (
                {
                    "large_loads": self.allocation.large_loads,
                    "small_loads": self.allocation.small_loads,
                    "weight_kg": str(self.allocation.weight_kg),
                }
                if self.allocation
                else None
            ),
            "included_services": [service.value for service in self.included_services],
        }
