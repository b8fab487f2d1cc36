"""
Order Service - Application layer orchestration for order operations.

Coordinates the pricing engine with the storage and billing collaborators:

- quote: price a draft against the live subscription, nothing is written
- create_order: price, reserve the consumed quota atomically, persist
- modify_order: re-price after a weight or option change, adjust the reservation
- transition: validate a status change and persist it with a version check;
  a cancelled order gives its quota back

Only the quota counter and the stored order are shared between concurrent
callers. The counter is updated through a compare-and-set on the value the
price was computed from; on conflict the whole computation is redone from a
fresh read. Quota is only given back once the order that held it is stored.
"""

import asyncio
import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID

from ...domain.entities import ClientSubscription, Order, OrderDraft, PlanKind
from ...domain.exceptions import QuotaConflictError
from ...domain.services import OrderLifecycle, PriceCalculator
from ...domain.value_objects import BillingPeriod, OrderOptions, OrderStatus, PriceBreakdown
from ..config import ConcurrencyConfig
from ..interfaces.exceptions import OrderNotFoundError, QuotaReleaseError
from ..interfaces.repositories import IOrderRepository, ISubscriptionRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _consumed(price: PriceBreakdown) -> Decimal:
    return price.quota_usage.quota_consumed_kg if price.quota_usage else Decimal("0")


class OrderService:
    """Application service orchestrating order pricing, quota and lifecycle.

    This service coordinates between:
    - Domain services (PriceCalculator, OrderLifecycle)
    - The order repository (optimistic versioning)
    - The subscription repository (atomic quota increments)
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        subscription_repository: ISubscriptionRepository,
        calculator: PriceCalculator | None = None,
        concurrency: ConcurrencyConfig | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.order_repository = order_repository
        self.subscription_repository = subscription_repository
        self.calculator = calculator or PriceCalculator()
        self.concurrency = concurrency or ConcurrencyConfig()
        self.clock = clock

    # --- Queries ---

    async def quote(self, draft: OrderDraft) -> PriceBreakdown:
        """Price a draft without reserving quota or persisting anything.

        Raises:
            InvalidWeightError: If weight is below the minimum order weight
            InvalidOrderError: If the options are not allowed
        """
        period = BillingPeriod.from_datetime(self.clock())
        subscription = await self._load_subscription(draft.client_id, period)
        return self.calculator.price(draft, subscription)

    async def get_order(self, order_id: UUID) -> Order:
        """
        Raises:
            OrderNotFoundError: If the order doesn't exist
        """
        order = await self.order_repository.get_order_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    # --- Commands ---

    async def create_order(self, draft: OrderDraft) -> Order:
        """Price a draft, reserve its quota consumption and persist the order.

        Args:
            draft: Order parameters collected at intake

        Returns:
            The persisted order in PENDING status

        Raises:
            InvalidWeightError: If weight is below the minimum order weight
            InvalidOrderError: If the options are not allowed
            QuotaConflictError: If the quota counter kept changing after all retries
        """
        created_at = self.clock()
        period = BillingPeriod.from_datetime(created_at)

        price = await self._price_with_reservation(draft, period)
        order = Order.create(draft, price, created_at=created_at)

        try:
            saved = await self.order_repository.save_order(order)
        except Exception:
            # The order does not exist, give its quota back
            if order.client_id is not None and order.quota_consumed_kg > 0:
                await self.subscription_repository.release_quota(
                    order.client_id, period, order.quota_consumed_kg
                )
            raise

        logger.info(
            f"Created order {saved.id}: {saved.weight_kg} kg, total {price.total}",
            extra={"order_id": str(saved.id), "client_id": str(saved.client_id)},
        )
        return saved

    async def modify_order(
        self,
        order_id: UUID,
        weight_kg: Decimal | None = None,
        options: OrderOptions | None = None,
    ) -> Order:
        """Change the weight or options of an order and re-price it.

        Changed fields must still be mutable in the order's status. When the
        weight changes, the quota reservation is adjusted by the difference:
        an increase is reserved before the order is stored, a decrease is
        released after it is stored.

        Raises:
            OrderNotFoundError: If the order doesn't exist
            ImmutableFieldError: If a changed field or the price is locked
            InvalidOrderError: If the new parameters are not allowed
            QuotaConflictError: If the quota counter kept changing after all retries
            StaleDataException: If the order was modified concurrently
        """
        order = await self.get_order(order_id)
        expected_version = order.version
        draft = order.with_changes(weight_kg=weight_kg, options=options)

        if draft.weight_kg == order.weight_kg and order.price is not None:
            # Same weight, same quota split; only the options are re-priced
            subscription = await self._load_subscription(order.client_id, order.billing_period)
            price = self.calculator.price(draft, subscription, order.price.quota_usage)
        else:
            price = await self._price_with_reservation(
                draft, order.billing_period, already_consumed_kg=order.quota_consumed_kg
            )

        previously_consumed = order.quota_consumed_kg
        try:
            order.reprice(draft, price)
            updated = await self.order_repository.update_order(order, expected_version)
        except Exception:
            await self._undo_increase(
                order.client_id, order.billing_period, previously_consumed, price
            )
            raise

        released = previously_consumed - _consumed(price)
        if updated.client_id is not None and released > 0:
            await self.subscription_repository.release_quota(
                updated.client_id, updated.billing_period, released
            )

        logger.info(
            f"Modified order {updated.id}: {updated.weight_kg} kg, total {price.total}",
            extra={"order_id": str(updated.id)},
        )
        return updated

    async def transition(
        self, order_id: UUID, status: OrderStatus, reason: str | None = None
    ) -> Order:
        """Move an order to a new status.

        Moving to CANCELLED gives back the quota the order consumed, after
        the cancellation is stored.

        Raises:
            OrderNotFoundError: If the order doesn't exist
            InvalidTransitionError: If the transition is not allowed
            StaleDataException: If the order was modified concurrently
            QuotaReleaseError: If the order was cancelled but its quota was not given back
        """
        order = await self.get_order(order_id)
        expected_version = order.version
        previous_status = order.status

        OrderLifecycle.transition(order, status, changed_at=self.clock(), reason=reason)
        updated = await self.order_repository.update_order(order, expected_version)

        logger.info(
            f"Order {updated.id}: {previous_status.value} -> {status.value}",
            extra={"order_id": str(updated.id), "status": status.value},
        )
        if status == OrderStatus.CANCELLED:
            await self._release_cancelled(updated)
        return updated

    async def cancel_order(self, order_id: UUID, reason: str | None = None) -> Order:
        """Cancel an order and give back the quota it consumed.

        Raises:
            OrderNotFoundError: If the order doesn't exist
            InvalidTransitionError: If the order is already terminal
            StaleDataException: If the order was modified concurrently
            QuotaReleaseError: If the order was cancelled but its quota was not given back
        """
        return await self.transition(order_id, OrderStatus.CANCELLED, reason=reason)

    # --- Internals ---

    async def _load_subscription(
        self, client_id: UUID | None, period: BillingPeriod
    ) -> ClientSubscription:
        if client_id is None:
            return ClientSubscription.guest(period)

        subscription = await self.subscription_repository.get_subscription(client_id, period)
        if subscription is None:
            return ClientSubscription(client_id=client_id, plan=PlanKind.NONE, billing_period=period)
        return subscription

    async def _price_with_reservation(
        self,
        draft: OrderDraft,
        period: BillingPeriod,
        already_consumed_kg: Decimal = Decimal("0"),
    ) -> PriceBreakdown:
        """Price a draft and apply the change in quota consumption atomically.

        ``already_consumed_kg`` is the reservation the order holds from an
        earlier pricing; it is excluded from the counter before splitting and
        only an increase over it is applied here. A decrease is left for the
        caller to release once the re-priced order is stored.
        """
        attempt = 0
        while True:
            subscription = await self._load_subscription(draft.client_id, period)
            price = self.calculator.price(draft, subscription.excluding(already_consumed_kg))

            increase = _consumed(price) - already_consumed_kg
            if increase <= 0 or draft.client_id is None:
                return price

            try:
                await self.subscription_repository.apply_quota_increment(
                    draft.client_id,
                    period,
                    increase,
                    expected_cumulative_kg=subscription.cumulative_washed_kg,
                )
                return price
            except QuotaConflictError:
                if attempt >= self.concurrency.max_quota_retries:
                    logger.error(
                        f"Quota conflict for client {draft.client_id} after {attempt + 1} attempts",
                        extra={"client_id": str(draft.client_id)},
                    )
                    raise

                delay = self._retry_delay(attempt)
                logger.warning(
                    f"Quota conflict on attempt {attempt + 1}, retrying in {delay:.3f}s",
                    extra={"client_id": str(draft.client_id)},
                )
                await asyncio.sleep(delay)
                attempt += 1

    async def _undo_increase(
        self,
        client_id: UUID | None,
        period: BillingPeriod,
        previously_consumed_kg: Decimal,
        price: PriceBreakdown,
    ) -> None:
        """Undo a reservation increase made for a modification that was not saved."""
        increase = _consumed(price) - previously_consumed_kg
        if client_id is not None and increase > 0:
            await self.subscription_repository.release_quota(client_id, period, increase)

    async def _release_cancelled(self, order: Order) -> None:
        if order.client_id is None or order.quota_consumed_kg <= 0:
            return

        try:
            await self.subscription_repository.release_quota(
                order.client_id, order.billing_period, order.quota_consumed_kg
            )
        except Exception as e:
            logger.error(
                f"Order {order.id} cancelled but {order.quota_consumed_kg} kg of quota "
                f"was not released: {e}",
                extra={"order_id": str(order.id), "client_id": str(order.client_id)},
                exc_info=True,
            )
            raise QuotaReleaseError(order, order.quota_consumed_kg, cause=e) from e

    def _retry_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at the configured maximum."""
        delay = self.concurrency.retry_base_delay * (self.concurrency.backoff_factor**attempt)
        delay = min(delay, self.concurrency.retry_max_delay)
        return delay * random.uniform(0.5, 1.0)
