"""
Storage and billing contracts consumed by OrderService.

The pricing engine never writes the quota counter directly: it hands the
increment to ``ISubscriptionRepository.apply_quota_increment``, which must
apply it atomically against the value the price was computed from.
"""

# Standard library imports
from abc import abstractmethod
from decimal import Decimal
from typing import Protocol
from uuid import UUID

# Local imports
from laundry_ops.domain.entities import ClientSubscription, Order
from laundry_ops.domain.value_objects import BillingPeriod


class IOrderRepository(Protocol):
    """Stores orders with optimistic versioning: every successful update bumps ``version``."""

    @abstractmethod
    async def save_order(self, order: Order) -> Order:
        """
        Insert a newly priced order.

        Raises:
            DuplicateEntityError: If an order with the same id exists
            RepositoryError: If the storage fails
        """
        ...

    @abstractmethod
    async def get_order_by_id(self, order_id: UUID) -> Order | None:
        """Load an order, None if it does not exist. The caller gets its own copy."""
        ...

    @abstractmethod
    async def update_order(self, order: Order, expected_version: int) -> Order:
        """
        Update an existing order if nobody else changed it since it was read.

        Args:
            order: Order carrying the new status, options or price
            expected_version: Version the order had when it was read

        Returns:
            The order, with its version incremented

        Raises:
            OrderNotFoundError: If the order was never saved
            StaleDataException: If the stored version differs from expected_version
        """
        ...


class ISubscriptionRepository(Protocol):
    """
    Per-period quota counters of subscribed clients.

    Owned by the billing subsystem; the order engine reads snapshots and
    applies quota increments through it. The plan belongs to the client and
    the counter to the period: a period the client has not used yet reads as
    a zero counter under the client's plan.
    """

    @abstractmethod
    async def get_subscription(
        self, client_id: UUID, period: BillingPeriod
    ) -> ClientSubscription | None:
        """
        Retrieve a client's subscription snapshot for a billing period.

        Args:
            client_id: Client identifier
            period: Billing period the counter belongs to

        Returns:
            The subscription snapshot, None if the client has no plan
        """
        ...

    @abstractmethod
    async def apply_quota_increment(
        self,
        client_id: UUID,
        period: BillingPeriod,
        increment_kg: Decimal,
        expected_cumulative_kg: Decimal,
    ) -> ClientSubscription:
        """
        Atomically add consumed quota to the client's counter.

        Args:
            client_id: Client identifier
            period: Billing period of the counter
            increment_kg: Quota consumed by the order
            expected_cumulative_kg: Counter value the order was priced against

        Returns:
            The updated subscription snapshot

        Raises:
            QuotaConflictError: If the counter no longer equals expected_cumulative_kg
            SubscriptionNotFoundError: If the client has no plan
        """
        ...

    @abstractmethod
    async def release_quota(
        self, client_id: UUID, period: BillingPeriod, amount_kg: Decimal
    ) -> ClientSubscription:
        """
        Give back quota previously consumed by an order.

        The counter never goes below zero.

        Raises:
            SubscriptionNotFoundError: If the client has no plan
        """
        ...
