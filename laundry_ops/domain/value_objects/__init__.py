"""Immutable value objects for type safety."""

from .billing_period import BillingPeriod
from .machine_allocation import MachineAllocation
from .money import Money
from .order_options import Formula, OrderOption, OrderOptions
from .order_status import OrderField, OrderStatus
from .price_breakdown import DiscountKind, IncludedService, PriceBreakdown
from .quota_usage import QuotaUsage

__all__ = [
    "BillingPeriod",
    "DiscountKind",
    "Formula",
    "IncludedService",
    "MachineAllocation",
    "Money",
    "OrderOption",
    "OrderField",
    "OrderOptions",
    "OrderStatus",
    "PriceBreakdown",
    "QuotaUsage",
]
