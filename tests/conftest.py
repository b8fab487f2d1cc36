"""Global pytest configuration and fixtures."""

# Standard library imports
from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

# Third-party imports
import pytest

# Local imports
from laundry_ops.application.config import ConcurrencyConfig
from laundry_ops.application.services.order_service import OrderService
from laundry_ops.domain.entities import ClientSubscription, OrderDraft, PlanKind
from laundry_ops.domain.services import PriceCalculator, RateCard
from laundry_ops.domain.value_objects import BillingPeriod
from laundry_ops.infrastructure.repositories import (
    InMemoryOrderRepository,
    InMemorySubscriptionRepository,
)

FIXED_NOW = datetime(2024, 3, 15, 10, 30, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Fixed clock value used by order services in tests."""
    return FIXED_NOW


@pytest.fixture
def period() -> BillingPeriod:
    return BillingPeriod.from_datetime(FIXED_NOW)


@pytest.fixture
def rate_card() -> RateCard:
    """Default rate table."""
    return RateCard()


@pytest.fixture
def calculator(rate_card) -> PriceCalculator:
    return PriceCalculator(rate_card)


@pytest.fixture
def client_id():
    return uuid4()


@pytest.fixture
def guest() -> ClientSubscription:
    return ClientSubscription.guest(BillingPeriod.from_datetime(FIXED_NOW))


@pytest.fixture
def premium_subscription(client_id, period):
    """Factory for Premium subscriptions with a given cumulative washed weight."""

    def _make(cumulative_kg="0") -> ClientSubscription:
        return ClientSubscription(
            client_id=client_id,
            plan=PlanKind.PREMIUM,
            billing_period=period,
            cumulative_washed_kg=Decimal(str(cumulative_kg)),
        )

    return _make


@pytest.fixture
def make_draft(client_id):
    """Factory for order drafts owned by the test client."""

    def _make(weight_kg="20", **kwargs) -> OrderDraft:
        kwargs.setdefault("client_id", client_id)
        return OrderDraft(weight_kg=Decimal(str(weight_kg)), **kwargs)

    return _make


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def subscription_repository() -> InMemorySubscriptionRepository:
    return InMemorySubscriptionRepository()


@pytest.fixture
def order_service(order_repository, subscription_repository, calculator) -> OrderService:
    """Order service over in-memory repositories, with a fixed clock and no retry delay."""
    return OrderService(
        order_repository=order_repository,
        subscription_repository=subscription_repository,
        calculator=calculator,
        concurrency=ConcurrencyConfig(max_quota_retries=2, retry_base_delay=0.0),
        clock=lambda: FIXED_NOW,
    )
