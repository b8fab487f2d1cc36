"""
Domain-level exceptions for the laundry order engine.

This module defines exceptions that are specific to domain logic and business rules.
These exceptions are raised within domain entities and services. All of them are
recoverable by the caller; the application layer decides whether to retry or to
surface them to an end user.
"""

from decimal import Decimal
from typing import Any
from uuid import UUID


class DomainException(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class InvalidOrderError(DomainException):
    """Raised when an order draft combines options or formulas that are not allowed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidWeightError(InvalidOrderError):
    """Raised when a weight is non-positive or below the minimum order weight."""

    def __init__(self, weight_kg: Decimal, minimum_kg: Decimal | None = None) -> None:
        if minimum_kg is None:
            message = f"Weight must be positive, got {weight_kg} kg"
        else:
            message = f"Weight must be at least {minimum_kg} kg, got {weight_kg} kg"

        super().__init__(message, field="weight_kg", value=weight_kg)
        self.weight_kg = weight_kg
        self.minimum_kg = minimum_kg


class ImmutableFieldError(InvalidOrderError):
    """Raised when an order field is changed in a status that no longer allows it."""

    def __init__(self, order_id: UUID | str, field: str, status: str) -> None:
        super().__init__(
            f"Order {order_id}: '{field}' cannot be modified in status '{status}'",
            field=field,
        )
        self.details["order_id"] = str(order_id)
        self.details["status"] = status
        self.order_id = order_id
        self.status = status


class InvalidTransitionError(DomainException):
    """Raised when a requested status change is not allowed by the order lifecycle."""

    def __init__(self, from_status: str, to_status: str, reason: str = "") -> None:
        message = f"Invalid transition from '{from_status}' to '{to_status}'"
        if reason:
            message += f": {reason}"

        super().__init__(
            message,
            details={"from_status": from_status, "to_status": to_status},
        )
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason


class ConcurrencyException(DomainException):
    """
    General concurrency-related exception for domain operations.

    Used for conflicting writes on shared state.
    """

    def __init__(
        self,
        message: str,
        entity_type: str | None = None,
        entity_id: UUID | str | None = None,
        operation: str | None = None,
    ) -> None:
        details = {}
        if entity_type:
            details["entity_type"] = entity_type
        if entity_id:
            details["entity_id"] = str(entity_id)
        if operation:
            details["operation"] = operation

        super().__init__(message, details)
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.operation = operation


class QuotaConflictError(ConcurrencyException):
    """
    Raised when an atomic quota increment is rejected because the client's
    cumulative washed weight changed since it was read.

    The orchestrator must retry with a fresh subscription read.
    """

    def __init__(
        self,
        client_id: UUID | str,
        expected_cumulative_kg: Decimal,
        actual_cumulative_kg: Decimal | None = None,
        message: str | None = None,
    ) -> None:
        if message is None:
            message = (
                f"Quota for client {client_id} was modified concurrently. "
                f"Expected cumulative {expected_cumulative_kg} kg"
            )
            if actual_cumulative_kg is not None:
                message += f", but found {actual_cumulative_kg} kg"

        super().__init__(
            message,
            entity_type="ClientSubscription",
            entity_id=client_id,
            operation="apply_quota_increment",
        )
        self.client_id = client_id
        self.expected_cumulative_kg = expected_cumulative_kg
        self.actual_cumulative_kg = actual_cumulative_kg


class StaleDataException(ConcurrencyException):
    """
    Raised when attempting to update an entity that has been modified by another process.

    This is the domain's optimistic locking exception indicating version conflict.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: UUID | str,
        expected_version: int,
        actual_version: int | None = None,
    ) -> None:
        message = (
            f"{entity_type} {entity_id} has been modified by another process. "
            f"Expected version {expected_version}"
        )
        if actual_version is not None:
            message += f", but found version {actual_version}"

        super().__init__(message, entity_type=entity_type, entity_id=entity_id, operation="update")
        self.details["expected_version"] = expected_version
        self.details["actual_version"] = actual_version
        self.expected_version = expected_version
        self.actual_version = actual_version
