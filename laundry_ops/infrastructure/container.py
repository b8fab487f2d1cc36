"""
Dependency wiring - Builds the order service from configuration.
"""

import logging

from laundry_ops.application.config import ApplicationConfig, get_config
from laundry_ops.application.services.order_service import OrderService
from laundry_ops.application.use_cases import (
    CreateOrderUseCase,
    ModifyOrderUseCase,
    QuoteOrderUseCase,
    TransitionOrderUseCase,
)
from laundry_ops.domain.services import MachineAllocator, PriceCalculator, QuotaTracker
from laundry_ops.infrastructure.repositories import (
    InMemoryOrderRepository,
    InMemorySubscriptionRepository,
)

logger = logging.getLogger(__name__)


def build_price_calculator(config: ApplicationConfig | None = None) -> PriceCalculator:
    """Price calculator using the configured rate table."""
    config = config or get_config()
    rate_card = config.pricing.to_rate_card()
    return PriceCalculator(
        rate_card,
        allocator=MachineAllocator(rate_card),
        quota_tracker=QuotaTracker(rate_card),
    )


def build_order_service(
    config: ApplicationConfig | None = None,
    order_repository: InMemoryOrderRepository | None = None,
    subscription_repository: InMemorySubscriptionRepository | None = None,
) -> OrderService:
    """
    Wire an OrderService.

    Args:
        config: Application configuration, the global one if omitted
        order_repository: Order storage, a new in-memory one if omitted
        subscription_repository: Subscription storage, a new in-memory one if omitted

    Returns:
        Configured OrderService
    """
    config = config or get_config()
    config.validate()

    service = OrderService(
        order_repository=order_repository or InMemoryOrderRepository(),
        subscription_repository=subscription_repository or InMemorySubscriptionRepository(),
        calculator=build_price_calculator(config),
        concurrency=config.concurrency,
    )
    logger.info(f"Order service built for {config.environment.value} environment")
    return service


def build_use_cases(
    service: OrderService,
) -> tuple[QuoteOrderUseCase, CreateOrderUseCase, ModifyOrderUseCase, TransitionOrderUseCase]:
    """Use cases sharing one order service."""
    return (
        QuoteOrderUseCase(service),
        CreateOrderUseCase(service),
        ModifyOrderUseCase(service),
        TransitionOrderUseCase(service),
    )
