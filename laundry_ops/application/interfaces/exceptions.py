"""
Storage errors raised by the order and subscription repositories.

These belong to the application layer: the domain never sees them, and the
use-case boundary reports them like domain errors.
"""

from typing import Any
from uuid import UUID


class RepositoryError(Exception):
    """Storage collaborator failed; ``cause`` holds the underlying error if any."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class EntityNotFoundError(RepositoryError):
    def __init__(self, entity_type: str, identifier: Any) -> None:
        super().__init__(f"{entity_type} with identifier '{identifier}' not found")
        self.entity_type = entity_type
        self.identifier = identifier


class OrderNotFoundError(EntityNotFoundError):
    def __init__(self, order_id: UUID) -> None:
        super().__init__("Order", order_id)
        self.order_id = order_id


class SubscriptionNotFoundError(EntityNotFoundError):
    """No subscription counter exists for the client in the billing period."""

    def __init__(self, client_id: UUID, period: Any) -> None:
        super().__init__("ClientSubscription", f"{client_id}/{period}")
        self.client_id = client_id
        self.period = period


class DuplicateEntityError(RepositoryError):
    """An order with the same id was already saved."""

    def __init__(self, entity_type: str, identifier: Any) -> None:
        super().__init__(f"{entity_type} with identifier '{identifier}' already exists")
        self.entity_type = entity_type
        self.identifier = identifier


class QuotaReleaseError(RepositoryError):
    """
    An order was cancelled but the quota it held was not given back.

    The cancellation itself is stored; ``order`` is the cancelled order and
    ``amount_kg`` the quota left on the counter.
    """

    def __init__(self, order: Any, amount_kg: Any, cause: Exception | None = None) -> None:
        super().__init__(
            f"Order {order.id} was cancelled but {amount_kg} kg of quota was not released",
            cause,
        )
        self.order = order
        self.amount_kg = amount_kg
