"""Domain entities."""

from .order import Order, StatusChange
from .order_draft import OrderDraft
from .subscription import ClientSubscription, PlanKind

__all__ = ["ClientSubscription", "Order", "OrderDraft", "PlanKind", "StatusChange"]
