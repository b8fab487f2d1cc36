"""Domain services for pricing and order lifecycle."""

# Lifecycle first: the order entity depends on it.
from .order_lifecycle import FORWARD_CHAIN, TERMINAL_STATES, OrderLifecycle
from .rate_card import DEFAULT_RATE_CARD, RateCard
from .machine_allocator import MachineAllocator
from .quota_tracker import QuotaTracker
from .price_calculator import PriceCalculator

__all__ = [
    "DEFAULT_RATE_CARD",
    "FORWARD_CHAIN",
    "MachineAllocator",
    "OrderLifecycle",
    "PriceCalculator",
    "QuotaTracker",
    "RateCard",
    "TERMINAL_STATES",
]
