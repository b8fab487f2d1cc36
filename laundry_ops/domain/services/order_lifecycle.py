"""
Order Lifecycle - State machine validating order status transitions.

The lifecycle is a strict forward chain from intake to delivery:

    PENDING → CONFIRMED → ON_THE_WAY → PICKED_UP → PROCESSING → OUT_FOR_DELIVERY → DELIVERED
       ↓          ↓            ↓            ↓            ↓               ↓
    CANCELLED  CANCELLED   CANCELLED    CANCELLED    CANCELLED       CANCELLED

No stage can be skipped, no transition goes backwards, and DELIVERED and
CANCELLED are terminal. The state machine also decides which order fields may
still change in a given status.

The machine is a pure validator: serializing concurrent transitions on the same
order is the storage layer's job (optimistic versioning on the order).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from ..exceptions import ImmutableFieldError, InvalidTransitionError
from ..value_objects import OrderField, OrderStatus

if TYPE_CHECKING:
    from ..entities.order import Order

logger = logging.getLogger(__name__)

# Forward chain; each status may only advance to the next one
FORWARD_CHAIN: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.ON_THE_WAY,
    OrderStatus.PICKED_UP,
    OrderStatus.PROCESSING,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

TERMINAL_STATES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
)


def _build_transitions() -> dict[OrderStatus, frozenset[OrderStatus]]:
    transitions: dict[OrderStatus, frozenset[OrderStatus]] = {}
    for current, following in zip(FORWARD_CHAIN, FORWARD_CHAIN[1:]):
        transitions[current] = frozenset({following, OrderStatus.CANCELLED})
    for terminal in TERMINAL_STATES:
        transitions[terminal] = frozenset()
    return transitions


class OrderLifecycle:
    """
    State machine for the order lifecycle and field mutation gating.
    """

    TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = _build_transitions()

    # Statuses in which each field may still be changed
    MUTABLE_IN: dict[OrderField, frozenset[OrderStatus]] = {
        OrderField.WEIGHT: frozenset({OrderStatus.PENDING}),
        OrderField.ALLOCATION: frozenset({OrderStatus.PENDING}),
        OrderField.OPTIONS: frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED}),
        # Price freezes once the site starts handling the laundry
        OrderField.PRICE: frozenset(
            {
                OrderStatus.PENDING,
                OrderStatus.CONFIRMED,
                OrderStatus.ON_THE_WAY,
                OrderStatus.PICKED_UP,
            }
        ),
    }

    DESCRIPTIONS: dict[OrderStatus, str] = {
        OrderStatus.CONFIRMED: "Order confirmed by the site",
        OrderStatus.ON_THE_WAY: "Driver on the way to the client",
        OrderStatus.PICKED_UP: "Laundry picked up",
        OrderStatus.PROCESSING: "Washing started at the site",
        OrderStatus.OUT_FOR_DELIVERY: "Laundry out for delivery",
        OrderStatus.DELIVERED: "Laundry delivered",
        OrderStatus.CANCELLED: "Order cancelled",
    }

    @classmethod
    def can_transition(cls, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        """
        Check whether a transition between statuses is allowed

        Args:
            from_status: Current status
            to_status: Requested status

        Returns:
            True if the transition is allowed
        """
        return to_status in cls.TRANSITIONS.get(from_status, frozenset())

    @classmethod
    def validate_transition(cls, from_status: OrderStatus, to_status: OrderStatus) -> None:
        """
        Validate a transition

        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        if cls.can_transition(from_status, to_status):
            return

        if cls.is_terminal(from_status):
            reason = f"'{from_status.value}' is a terminal status"
        else:
            allowed = sorted(status.value for status in cls.TRANSITIONS[from_status])
            reason = f"allowed transitions: {', '.join(allowed)}"

        raise InvalidTransitionError(from_status.value, to_status.value, reason)

    @classmethod
    def transition(
        cls,
        order: Order,
        requested_status: OrderStatus,
        changed_at: datetime | None = None,
        reason: str | None = None,
    ) -> Order:
        """
        Move an order to the requested status, appending an audit entry

        Args:
            order: Order to update
            requested_status: Target status
            changed_at: Timestamp of the change (defaults to now)
            reason: Optional free-text reason, e.g. for cancellations

        Returns:
            The updated order

        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        cls.validate_transition(order.status, requested_status)
        change = order.record_status(requested_status, changed_at=changed_at, reason=reason)

        logger.debug(
            f"Order {order.id} moved from {change.from_status.value} to {change.to_status.value}",
            extra={"order_id": str(order.id)},
        )
        return order

    @classmethod
    def available_transitions(cls, status: OrderStatus) -> list[OrderStatus]:
        """Statuses reachable from the given one, forward step first"""
        reachable = cls.TRANSITIONS.get(status, frozenset())
        return sorted(reachable, key=lambda s: s == OrderStatus.CANCELLED)

    @classmethod
    def is_terminal(cls, status: OrderStatus) -> bool:
        return status in TERMINAL_STATES

    @classmethod
    def describe(cls, from_status: OrderStatus, to_status: OrderStatus) -> str:
        """Human readable description of a transition"""
        description = cls.DESCRIPTIONS.get(to_status)
        if description is None:
            return f"Transition from {from_status.value} to {to_status.value}"
        return description

    @classmethod
    def mutable_fields(cls, status: OrderStatus) -> frozenset[OrderField]:
        """Fields that may still be changed in the given status"""
        return frozenset(
            order_field for order_field, statuses in cls.MUTABLE_IN.items() if status in statuses
        )

    @classmethod
    def is_mutable(cls, status: OrderStatus, order_field: OrderField) -> bool:
        return status in cls.MUTABLE_IN[order_field]

    @classmethod
    def ensure_mutable(cls, order: Order, order_field: OrderField) -> None:
        """
        Raises:
            ImmutableFieldError: If the field is locked in the order's status
        """
        if not cls.is_mutable(order.status, order_field):
            raise ImmutableFieldError(order.id, order_field.value, order.status.value)
