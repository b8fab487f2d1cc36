"""
Unit tests for order use cases
"""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from laundry_ops.application.interfaces.exceptions import RepositoryError
from laundry_ops.application.use_cases import (
    CreateOrderRequest,
    CreateOrderResponse,
    CreateOrderUseCase,
    ModifyOrderRequest,
    ModifyOrderUseCase,
    QuoteOrderRequest,
    QuoteOrderUseCase,
    TransitionOrderRequest,
    TransitionOrderUseCase,
)


@pytest.fixture
def create_use_case(order_service):
    return CreateOrderUseCase(order_service)


class TestQuoteOrderUseCase:
    """Test quoting through the use case boundary"""

    @pytest.mark.asyncio
    async def test_quote_success(self, order_service):
        use_case = QuoteOrderUseCase(order_service)
        request = QuoteOrderRequest(weight_kg=Decimal("25"), options=["delivery"])

        response = await use_case.execute(request)

        assert response.success
        assert response.total == 7000
        assert response.formatted_total == "7 000 FCFA"
        assert response.price["pricing_formula"] == "basic"
        assert response.request_id == request.request_id

    @pytest.mark.asyncio
    async def test_below_minimum_weight(self, order_service):
        use_case = QuoteOrderUseCase(order_service)

        response = await use_case.execute(QuoteOrderRequest(weight_kg=Decimal("5")))

        assert not response.success
        assert "at least 6" in response.error


class TestCreateOrderUseCase:
    """Test order creation through the use case boundary"""

    @pytest.mark.asyncio
    async def test_create_success(self, create_use_case, order_repository, client_id):
        request = CreateOrderRequest(weight_kg=Decimal("20"), client_id=client_id)

        response = await create_use_case.execute(request)

        assert response.success
        assert response.status == "pending"
        assert response.total == 4000
        assert await order_repository.get_order_by_id(response.order_id) is not None

    @pytest.mark.parametrize(
        "kwargs,expected_error",
        [
            ({"weight_kg": "abc"}, "Invalid weight: abc"),
            ({"weight_kg": Decimal("0")}, "Weight must be positive"),
            ({"weight_kg": Decimal("10"), "formula": "premium"}, "Invalid formula: premium"),
            (
                {"weight_kg": Decimal("10"), "surplus_formula": "luxury"},
                "Invalid surplus formula: luxury",
            ),
            (
                {"weight_kg": Decimal("10"), "options": ["folding", "express", "starch"]},
                "Invalid options: folding, starch",
            ),
        ],
    )
    @pytest.mark.asyncio
    async def test_request_validation(self, create_use_case, kwargs, expected_error):
        response = await create_use_case.execute(CreateOrderRequest(**kwargs))

        assert not response.success
        assert response.error == expected_error

    @pytest.mark.asyncio
    async def test_disallowed_option_reported(self, create_use_case):
        request = CreateOrderRequest(
            weight_kg=Decimal("10"), formula="detailed", options=["drying", "delivery"]
        )

        response = await create_use_case.execute(request)

        assert not response.success
        assert "detailed" in response.error

    @pytest.mark.asyncio
    async def test_repository_error_reported(self):
        service = AsyncMock()
        service.create_order.side_effect = RepositoryError("storage unavailable")
        use_case = CreateOrderUseCase(service)

        response = await use_case.execute(CreateOrderRequest(weight_kg=Decimal("10")))

        assert not response.success
        assert response.error == "storage unavailable"

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_response(self):
        """Test that unhandled exceptions still produce a typed response"""
        service = AsyncMock()
        service.create_order.side_effect = RuntimeError("boom")
        use_case = CreateOrderUseCase(service)

        response = await use_case.execute(CreateOrderRequest(weight_kg=Decimal("10")))

        assert isinstance(response, CreateOrderResponse)
        assert not response.success
        assert response.error == "boom"


class TestModifyOrderUseCase:
    """Test modification through the use case boundary"""

    @pytest.mark.asyncio
    async def test_modify_weight(self, order_service, create_use_case):
        created = await create_use_case.execute(CreateOrderRequest(weight_kg=Decimal("20")))
        use_case = ModifyOrderUseCase(order_service)

        response = await use_case.execute(
            ModifyOrderRequest(order_id=created.order_id, weight_kg=Decimal("25"))
        )

        assert response.success
        assert response.total == 6000

    @pytest.mark.asyncio
    async def test_nothing_to_modify(self, order_service):
        use_case = ModifyOrderUseCase(order_service)

        response = await use_case.execute(ModifyOrderRequest(order_id=uuid4()))

        assert not response.success
        assert response.error == "Nothing to modify"

    @pytest.mark.asyncio
    async def test_unknown_order(self, order_service):
        use_case = ModifyOrderUseCase(order_service)

        response = await use_case.execute(
            ModifyOrderRequest(order_id=uuid4(), options=["express"])
        )

        assert not response.success
        assert "not found" in response.error

    @pytest.mark.asyncio
    async def test_weight_locked_after_confirmation(self, order_service, create_use_case):
        created = await create_use_case.execute(CreateOrderRequest(weight_kg=Decimal("20")))
        transition = TransitionOrderUseCase(order_service)
        await transition.execute(
            TransitionOrderRequest(order_id=created.order_id, status="confirmed")
        )
        use_case = ModifyOrderUseCase(order_service)

        response = await use_case.execute(
            ModifyOrderRequest(order_id=created.order_id, weight_kg=Decimal("30"))
        )

        assert not response.success
        assert "weight_kg" in response.error


class TestTransitionOrderUseCase:
    """Test status changes through the use case boundary"""

    @pytest.mark.asyncio
    async def test_confirm(self, order_service, create_use_case):
        created = await create_use_case.execute(CreateOrderRequest(weight_kg=Decimal("20")))
        use_case = TransitionOrderUseCase(order_service)

        response = await use_case.execute(
            TransitionOrderRequest(order_id=created.order_id, status="confirmed")
        )

        assert response.success
        assert response.status == "confirmed"
        assert response.available_transitions == ["on_the_way", "cancelled"]

    @pytest.mark.asyncio
    async def test_cancel_has_no_further_transitions(self, order_service, create_use_case):
        created = await create_use_case.execute(CreateOrderRequest(weight_kg=Decimal("20")))
        use_case = TransitionOrderUseCase(order_service)

        response = await use_case.execute(
            TransitionOrderRequest(order_id=created.order_id, status="cancelled", reason="no show")
        )

        assert response.success
        assert response.available_transitions == []

    @pytest.mark.asyncio
    async def test_invalid_status_name(self, order_service):
        use_case = TransitionOrderUseCase(order_service)

        response = await use_case.execute(
            TransitionOrderRequest(order_id=uuid4(), status="washed")
        )

        assert not response.success
        assert response.error == "Invalid status: washed"

    @pytest.mark.asyncio
    async def test_skipping_a_stage_reported(self, order_service, create_use_case):
        created = await create_use_case.execute(CreateOrderRequest(weight_kg=Decimal("20")))
        use_case = TransitionOrderUseCase(order_service)

        response = await use_case.execute(
            TransitionOrderRequest(order_id=created.order_id, status="delivered")
        )

        assert not response.success
        assert response.status is None

    @pytest.mark.asyncio
    async def test_cancel_without_quota_release_reported(
        self, order_service, subscription_repository, premium_subscription, client_id, create_use_case
    ):
        subscription_repository.add_subscription(premium_subscription("0"))
        created = await create_use_case.execute(
            CreateOrderRequest(weight_kg=Decimal("20"), client_id=client_id)
        )
        subscription_repository.release_quota = AsyncMock(
            side_effect=RepositoryError("billing unavailable")
        )
        use_case = TransitionOrderUseCase(order_service)

        response = await use_case.execute(
            TransitionOrderRequest(order_id=created.order_id, status="cancelled")
        )

        assert not response.success
        assert "was cancelled but" in response.error
