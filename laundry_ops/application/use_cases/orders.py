"""
Order Use Cases

Request/response boundary around OrderService: quoting, creating, modifying
and moving orders through their lifecycle. Domain and repository errors are
converted into unsuccessful responses here and nowhere else.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from laundry_ops.application.services.order_service import OrderService
from laundry_ops.domain.entities import OrderDraft
from laundry_ops.domain.services import OrderLifecycle
from laundry_ops.domain.value_objects import Formula, OrderOption, OrderOptions, OrderStatus

from .base import UseCase, UseCaseRequest, UseCaseResponse


# Request/Response DTOs
@dataclass
class OrderDraftRequest(UseCaseRequest):
    """Pricing parameters shared by quote and create requests."""

    weight_kg: Decimal
    formula: str = Formula.BASIC.value
    options: list[str] = field(default_factory=list)
    client_id: UUID | None = None
    is_student: bool = False
    is_opening_promotion: bool = False
    surplus_formula: str | None = None

    def to_draft(self) -> OrderDraft:
        return OrderDraft(
            weight_kg=Decimal(str(self.weight_kg)),
            formula=Formula(self.formula),
            options=_parse_options(self.options),
            client_id=self.client_id,
            is_student=self.is_student,
            is_opening_promotion=self.is_opening_promotion,
            surplus_formula=Formula(self.surplus_formula) if self.surplus_formula else None,
        )


@dataclass
class QuoteOrderRequest(OrderDraftRequest):
    """Request to price an order without creating it."""


@dataclass
class QuoteOrderResponse(UseCaseResponse):
    """Response with the itemized price."""

    price: dict[str, Any] | None = None
    total: int | None = None
    formatted_total: str | None = None


@dataclass
class CreateOrderRequest(OrderDraftRequest):
    """Request to create a priced order."""


@dataclass
class CreateOrderResponse(UseCaseResponse):
    """Response from creating an order."""

    order_id: UUID | None = None
    status: str | None = None
    price: dict[str, Any] | None = None
    total: int | None = None
    quota_consumed_kg: Decimal | None = None


@dataclass
class ModifyOrderRequest(UseCaseRequest):
    """Request to change the weight or options of an order."""

    order_id: UUID
    weight_kg: Decimal | None = None
    options: list[str] | None = None


@dataclass
class ModifyOrderResponse(UseCaseResponse):
    """Response from modifying an order."""

    order_id: UUID | None = None
    price: dict[str, Any] | None = None
    total: int | None = None


@dataclass
class TransitionOrderRequest(UseCaseRequest):
    """Request to move an order to a new status."""

    order_id: UUID
    status: str
    reason: str | None = None


@dataclass
class TransitionOrderResponse(UseCaseResponse):
    """Response from a status change."""

    order_id: UUID | None = None
    status: str | None = None
    available_transitions: list[str] = field(default_factory=list)


def _parse_options(names: list[str]) -> OrderOptions:
    return OrderOptions.of(*(OrderOption(name) for name in names))


def _validate_weight(value: Any) -> str | None:
    try:
        weight = Decimal(str(value))
    except InvalidOperation:
        return f"Invalid weight: {value}"
    if weight <= 0:
        return "Weight must be positive"
    return None


def _validate_option_names(names: list[str]) -> str | None:
    valid_options = {option.value for option in OrderOption}
    unknown = [name for name in names if name not in valid_options]
    if unknown:
        return f"Invalid options: {', '.join(unknown)}"
    return None


def _validate_draft_request(request: OrderDraftRequest) -> str | None:
    weight_error = _validate_weight(request.weight_kg)
    if weight_error:
        return weight_error

    valid_formulas = {formula.value for formula in Formula}
    if request.formula not in valid_formulas:
        return f"Invalid formula: {request.formula}"
    if request.surplus_formula is not None and request.surplus_formula not in valid_formulas:
        return f"Invalid surplus formula: {request.surplus_formula}"

    return _validate_option_names(request.options)


# Use Case Implementations
class QuoteOrderUseCase(UseCase[QuoteOrderRequest, QuoteOrderResponse]):
    """Prices an order draft for display before it is created."""

    response_type = QuoteOrderResponse

    def __init__(self, order_service: OrderService):
        super().__init__("QuoteOrderUseCase")
        self.order_service = order_service

    async def validate(self, request: QuoteOrderRequest) -> str | None:
        return _validate_draft_request(request)

    async def process(self, request: QuoteOrderRequest) -> QuoteOrderResponse:
        price = await self.order_service.quote(request.to_draft())

        return QuoteOrderResponse(
            success=True,
            price=price.to_dict(),
            total=price.total.to_int(),
            formatted_total=price.total.format(),
            request_id=request.request_id,
        )


class CreateOrderUseCase(UseCase[CreateOrderRequest, CreateOrderResponse]):
    """
    Creates a priced order.

    Quota conflicts that persist after the service's retries are reported
    as an unsuccessful response; the caller may resubmit.
    """

    response_type = CreateOrderResponse

    def __init__(self, order_service: OrderService):
        super().__init__("CreateOrderUseCase")
        self.order_service = order_service

    async def validate(self, request: CreateOrderRequest) -> str | None:
        return _validate_draft_request(request)

    async def process(self, request: CreateOrderRequest) -> CreateOrderResponse:
        order = await self.order_service.create_order(request.to_draft())

        return CreateOrderResponse(
            success=True,
            order_id=order.id,
            status=order.status.value,
            price=order.price.to_dict(),
            total=order.price.total.to_int(),
            quota_consumed_kg=order.quota_consumed_kg,
            request_id=request.request_id,
        )


class ModifyOrderUseCase(UseCase[ModifyOrderRequest, ModifyOrderResponse]):
    """Changes weight or options of an order and re-prices it."""

    response_type = ModifyOrderResponse

    def __init__(self, order_service: OrderService):
        super().__init__("ModifyOrderUseCase")
        self.order_service = order_service

    async def validate(self, request: ModifyOrderRequest) -> str | None:
        if request.weight_kg is None and request.options is None:
            return "Nothing to modify"
        if request.weight_kg is not None:
            weight_error = _validate_weight(request.weight_kg)
            if weight_error:
                return weight_error
        if request.options is not None:
            return _validate_option_names(request.options)
        return None

    async def process(self, request: ModifyOrderRequest) -> ModifyOrderResponse:
        order = await self.order_service.modify_order(
            request.order_id,
            weight_kg=Decimal(str(request.weight_kg)) if request.weight_kg is not None else None,
            options=_parse_options(request.options) if request.options is not None else None,
        )

        return ModifyOrderResponse(
            success=True,
            order_id=order.id,
            price=order.price.to_dict(),
            total=order.price.total.to_int(),
            request_id=request.request_id,
        )


class TransitionOrderUseCase(UseCase[TransitionOrderRequest, TransitionOrderResponse]):
    """Moves an order along its lifecycle; cancelling also gives back its quota."""

    response_type = TransitionOrderResponse

    def __init__(self, order_service: OrderService):
        super().__init__("TransitionOrderUseCase")
        self.order_service = order_service

    async def validate(self, request: TransitionOrderRequest) -> str | None:
        if request.status not in {status.value for status in OrderStatus}:
            return f"Invalid status: {request.status}"
        return None

    async def process(self, request: TransitionOrderRequest) -> TransitionOrderResponse:
        order = await self.order_service.transition(
            request.order_id, OrderStatus(request.status), reason=request.reason
        )

        return TransitionOrderResponse(
            success=True,
            order_id=order.id,
            status=order.status.value,
            available_transitions=[
                next_status.value
                for next_status in OrderLifecycle.available_transitions(order.status)
            ],
            request_id=request.request_id,
        )
