"""
Base Use Case

Request/response envelope shared by the order use cases and the execution
template that validates a request, runs it and turns failures into
unsuccessful responses.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID, uuid4

from laundry_ops.application.interfaces.exceptions import RepositoryError
from laundry_ops.domain.exceptions import DomainException

TRequest = TypeVar("TRequest", bound="UseCaseRequest")
TResponse = TypeVar("TResponse", bound="UseCaseResponse")


@dataclass(kw_only=True)
class UseCaseRequest:
    """
    Common request fields.

    Keyword-only so that derived requests can declare required fields
    before these defaulted ones.
    """

    request_id: UUID = field(default_factory=uuid4)
    correlation_id: UUID | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def with_correlation_id(self, correlation_id: UUID) -> "UseCaseRequest":
        """Set the correlation ID and return self for chaining."""
        self.correlation_id = correlation_id
        return self


@dataclass
class UseCaseResponse:
    """Common response fields."""

    success: bool
    error: str | None = None
    request_id: UUID | None = None

    @classmethod
    def failure(cls, error: str, request_id: UUID | None) -> "UseCaseResponse":
        return cls(success=False, error=error, request_id=request_id)


class UseCase(ABC, Generic[TRequest, TResponse]):
    """
    Template for order use cases.

    Subclasses set ``response_type`` and implement ``validate`` and
    ``process``. Errors listed in ``handled_errors`` are expected business
    outcomes and become unsuccessful responses logged as warnings; anything
    else is logged with its traceback before becoming one.
    """

    response_type: ClassVar[type[UseCaseResponse]] = UseCaseResponse
    handled_errors: ClassVar[tuple[type[Exception], ...]] = (DomainException, RepositoryError)

    def __init__(self, name: str | None = None) -> None:
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    async def execute(self, request: TRequest) -> TResponse:
        """
        Validate and process a request.

        Args:
            request: The use case request

        Returns:
            The use case response; never raises
        """
        request_id = request.request_id
        log_context = {"request_id": str(request_id), "use_case": self.name}
        started = time.perf_counter()

        self.logger.info(f"Executing {self.name}", extra=log_context)

        try:
            validation_error = await self.validate(request)
            if validation_error:
                self.logger.warning(
                    f"Validation failed for {self.name}: {validation_error}", extra=log_context
                )
                return self._create_error_response(validation_error, request_id)

            response = await self.process(request)
        except self.handled_errors as e:
            self.logger.warning(f"{self.name} rejected: {e}", extra=log_context)
            return self._create_error_response(str(e), request_id)
        except Exception as e:
            self.logger.error(f"Error executing {self.name}: {e}", extra=log_context, exc_info=True)
            return self._create_error_response(str(e), request_id)

        elapsed_ms = (time.perf_counter() - started) * 1000
        self.logger.info(
            f"Executed {self.name} in {elapsed_ms:.1f}ms",
            extra={**log_context, "success": response.success},
        )
        return response

    @abstractmethod
    async def validate(self, request: TRequest) -> str | None:
        """
        Check request fields that the domain cannot check itself.

        Returns:
            Error message if validation fails, None otherwise
        """

    @abstractmethod
    async def process(self, request: TRequest) -> TResponse:
        """Run the validated request against the order service."""

    def _create_error_response(self, error: str, request_id: UUID | None) -> TResponse:
        return self.response_type.failure(error, request_id)  # type: ignore[return-value]
