"""
Unit tests for dependency wiring
"""

from decimal import Decimal

import pytest

from laundry_ops.application.config import (
    ApplicationConfig,
    ConcurrencyConfig,
    PricingConfig,
    reset_config,
    set_config,
)
from laundry_ops.application.use_cases import (
    CreateOrderRequest,
    CreateOrderUseCase,
    QuoteOrderRequest,
    QuoteOrderUseCase,
    TransitionOrderUseCase,
)
from laundry_ops.infrastructure.container import (
    build_order_service,
    build_price_calculator,
    build_use_cases,
)


@pytest.fixture(autouse=True)
def clean_singleton():
    reset_config()
    yield
    reset_config()


class TestContainer:
    def test_calculator_uses_configured_rates(self, make_draft):
        config = ApplicationConfig(pricing=PricingConfig(unit_price_large=Decimal("5000")))

        calculator = build_price_calculator(config)

        assert calculator.price(make_draft("20", client_id=None)).total.to_int() == 5000

    def test_service_uses_global_config(self):
        set_config(ApplicationConfig(concurrency=ConcurrencyConfig(max_quota_retries=7)))

        service = build_order_service()

        assert service.concurrency.max_quota_retries == 7

    def test_invalid_config_rejected(self):
        config = ApplicationConfig(concurrency=ConcurrencyConfig(backoff_factor=0))

        with pytest.raises(ValueError):
            build_order_service(config)

    def test_repositories_can_be_injected(self, order_repository, subscription_repository):
        service = build_order_service(
            ApplicationConfig(),
            order_repository=order_repository,
            subscription_repository=subscription_repository,
        )

        assert service.order_repository is order_repository
        assert service.subscription_repository is subscription_repository

    @pytest.mark.asyncio
    async def test_use_cases_share_the_service(self, order_repository):
        service = build_order_service(ApplicationConfig(), order_repository=order_repository)
        quote, create, modify, transition = build_use_cases(service)

        created = await create.execute(CreateOrderRequest(weight_kg=Decimal("12")))
        quoted = await quote.execute(QuoteOrderRequest(weight_kg=Decimal("12")))

        assert isinstance(quote, QuoteOrderUseCase)
        assert isinstance(create, CreateOrderUseCase)
        assert isinstance(transition, TransitionOrderUseCase)
        assert modify.order_service is service
        assert created.success
        assert created.total == quoted.total == 4000
        assert await order_repository.get_order_by_id(created.order_id) is not None
