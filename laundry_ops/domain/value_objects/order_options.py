"""Wash formulas and add-on options selectable on an order."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Formula(Enum):
    """Pricing mode of a wash order.

    Values:
        BASIC: Priced per machine load, add-on options billed separately
        DETAILED: Priced per kilogram, pickup/drying/ironing/delivery included
    """

    BASIC = "basic"
    DETAILED = "detailed"


class OrderOption(Enum):
    """Add-on services of an order."""

    DELIVERY = "delivery"
    DRYING = "drying"
    IRONING = "ironing"
    EXPRESS = "express"


@dataclass(frozen=True)
class OrderOptions:
    """Set of add-on options selected on an order.

    Dependency rules (drying needs delivery, ironing needs drying) are checked
    by the price calculator, not here, so that an invalid combination can be
    reported with the formula it was requested for.
    """

    delivery: bool = False
    drying: bool = False
    ironing: bool = False
    express: bool = False

    @classmethod
    def of(cls, *options: OrderOption) -> OrderOptions:
        """Build an option set from individual options."""
        return cls(**{option.value: True for option in options})

    def selected(self) -> frozenset[OrderOption]:
        """Get the selected options."""
        return frozenset(option for option in OrderOption if getattr(self, option.value))

    def is_selected(self, option: OrderOption) -> bool:
        return bool(getattr(self, option.value))
