"""
Application Use Cases

Each use case validates a request, delegates to OrderService and reports
failures as unsuccessful responses.
"""

from .base import UseCase, UseCaseRequest, UseCaseResponse
from .orders import (
    CreateOrderRequest,
    CreateOrderResponse,
    CreateOrderUseCase,
    ModifyOrderRequest,
    ModifyOrderResponse,
    ModifyOrderUseCase,
    QuoteOrderRequest,
    QuoteOrderResponse,
    QuoteOrderUseCase,
    TransitionOrderRequest,
    TransitionOrderResponse,
    TransitionOrderUseCase,
)

__all__ = [
    # Base classes
    "UseCase",
    "UseCaseRequest",
    "UseCaseResponse",
    # Orders
    "CreateOrderRequest",
    "CreateOrderResponse",
    "CreateOrderUseCase",
    "ModifyOrderRequest",
    "ModifyOrderResponse",
    "ModifyOrderUseCase",
    "QuoteOrderRequest",
    "QuoteOrderResponse",
    "QuoteOrderUseCase",
    "TransitionOrderRequest",
    "TransitionOrderResponse",
    "TransitionOrderUseCase",
]
