"""
In-memory repositories.

Reference implementations of the storage and billing collaborators. Each
repository serializes its writes with an ``asyncio.Lock`` so that the
compare-and-set checks below are atomic within one event loop:

- orders are updated only if the stored version equals the expected version
- the quota counter is incremented only if it still equals the value the
  price was computed from

Stored entities are copies; callers mutating an order they read do not
change what is stored until they call ``update_order``.
"""

import asyncio
import logging
from dataclasses import replace
from decimal import Decimal
from uuid import UUID

from laundry_ops.application.interfaces.exceptions import (
    DuplicateEntityError,
    OrderNotFoundError,
    SubscriptionNotFoundError,
)
from laundry_ops.domain.entities import ClientSubscription, Order, PlanKind
from laundry_ops.domain.exceptions import QuotaConflictError, StaleDataException
from laundry_ops.domain.value_objects import BillingPeriod

logger = logging.getLogger(__name__)


def _copy_order(order: Order) -> Order:
    # Price, options and history entries are immutable; only the list is shared state
    return replace(order, status_history=list(order.status_history))


class InMemoryOrderRepository:
    """Order storage with optimistic versioning."""

    def __init__(self) -> None:
        self._orders: dict[UUID, Order] = {}
        self._version_lock = asyncio.Lock()

    async def save_order(self, order: Order) -> Order:
        async with self._version_lock:
            if order.id in self._orders:
                raise DuplicateEntityError("Order", order.id)

            self._orders[order.id] = _copy_order(order)
            logger.debug(f"Inserted order {order.id} with version {order.version}")
            return order

    async def get_order_by_id(self, order_id: UUID) -> Order | None:
        stored = self._orders.get(order_id)
        return _copy_order(stored) if stored else None

    async def update_order(self, order: Order, expected_version: int) -> Order:
        """
        Store an order if its stored version still equals ``expected_version``.

        Raises:
            OrderNotFoundError: If the order doesn't exist
            StaleDataException: If the order was updated since it was read
        """
        async with self._version_lock:
            stored = self._orders.get(order.id)
            if stored is None:
                raise OrderNotFoundError(order.id)

            if stored.version != expected_version:
                raise StaleDataException(
                    entity_type="Order",
                    entity_id=order.id,
                    expected_version=expected_version,
                    actual_version=stored.version,
                )

            order.version = expected_version + 1
            self._orders[order.id] = _copy_order(order)
            logger.debug(f"Updated order {order.id} to version {order.version}")
            return order


class InMemorySubscriptionRepository:
    """
    Subscription storage: one plan per client, one quota counter per billing period.

    The counter of a period the client has not ordered in yet starts at zero
    under the client's current plan; it is created on first access.
    """

    def __init__(self, subscriptions: list[ClientSubscription] | None = None) -> None:
        self._plans: dict[UUID, PlanKind] = {}
        self._subscriptions: dict[tuple[UUID, BillingPeriod], ClientSubscription] = {}
        self._quota_lock = asyncio.Lock()
        for subscription in subscriptions or []:
            self.add_subscription(subscription)

    def add_subscription(self, subscription: ClientSubscription) -> None:
        if subscription.client_id is None:
            raise ValueError("Guest subscriptions are not stored")
        self._plans[subscription.client_id] = subscription.plan
        self._subscriptions[(subscription.client_id, subscription.billing_period)] = subscription

    def set_plan(self, client_id: UUID, plan: PlanKind) -> None:
        """Change the plan used for periods that have no counter yet."""
        self._plans[client_id] = plan

    async def get_subscription(
        self, client_id: UUID, period: BillingPeriod
    ) -> ClientSubscription | None:
        return self._current(client_id, period)

    async def apply_quota_increment(
        self,
        client_id: UUID,
        period: BillingPeriod,
        increment_kg: Decimal,
        expected_cumulative_kg: Decimal,
    ) -> ClientSubscription:
        """
        Raises:
            QuotaConflictError: If the counter changed since it was read
            SubscriptionNotFoundError: If the client has no plan
        """
        if increment_kg <= 0:
            raise ValueError(f"Quota increment must be positive, got {increment_kg}")

        async with self._quota_lock:
            stored = self._get(client_id, period)
            if stored.cumulative_washed_kg != expected_cumulative_kg:
                raise QuotaConflictError(
                    client_id, expected_cumulative_kg, stored.cumulative_washed_kg
                )

            updated = stored.with_cumulative(stored.cumulative_washed_kg + increment_kg)
            self._subscriptions[(client_id, period)] = updated
            logger.debug(
                f"Quota for client {client_id} in {period}: {updated.cumulative_washed_kg} kg",
                extra={"client_id": str(client_id)},
            )
            return updated

    async def release_quota(
        self, client_id: UUID, period: BillingPeriod, amount_kg: Decimal
    ) -> ClientSubscription:
        if amount_kg <= 0:
            raise ValueError(f"Released quota must be positive, got {amount_kg}")

        async with self._quota_lock:
            stored = self._get(client_id, period)
            remaining = max(Decimal("0"), stored.cumulative_washed_kg - amount_kg)
            updated = stored.with_cumulative(remaining)
            self._subscriptions[(client_id, period)] = updated
            return updated

    def _current(self, client_id: UUID, period: BillingPeriod) -> ClientSubscription | None:
        stored = self._subscriptions.get((client_id, period))
        if stored is None and client_id in self._plans:
            stored = ClientSubscription(
                client_id=client_id, plan=self._plans[client_id], billing_period=period
            )
            self._subscriptions[(client_id, period)] = stored
            logger.debug(f"Opened {period} quota counter for client {client_id}")
        return stored

    def _get(self, client_id: UUID, period: BillingPeriod) -> ClientSubscription:
        stored = self._current(client_id, period)
        if stored is None:
            raise SubscriptionNotFoundError(client_id, period)
        return stored
