"""
Order Entity - Wash job with its computed price and lifecycle
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from ..exceptions import InvalidWeightError
from ..services.order_lifecycle import OrderLifecycle
from ..value_objects import (
    BillingPeriod,
    Formula,
    MachineAllocation,
    OrderField,
    OrderOptions,
    OrderStatus,
    PriceBreakdown,
)
from .order_draft import OrderDraft


@dataclass(frozen=True)
class StatusChange:
    """Audit entry appended on every status transition."""

    from_status: OrderStatus
    to_status: OrderStatus
    changed_at: datetime
    reason: str | None = None


@dataclass
class Order:
    """
    Order entity representing a wash job.

    This is a domain entity with business logic.
    All weights use Decimal for precision. Field changes go through the
    lifecycle gate; status changes go through OrderLifecycle.transition.
    """

    # Identity
    id: UUID = field(default_factory=uuid4)
    client_id: UUID | None = None

    # Wash parameters
    weight_kg: Decimal = Decimal("0")
    formula: Formula = Formula.BASIC
    options: OrderOptions = field(default_factory=OrderOptions)
    is_student: bool = False
    is_opening_promotion: bool = False
    surplus_formula: Formula | None = None

    # Pricing
    price: PriceBreakdown | None = None
    quota_consumed_kg: Decimal = Decimal("0")

    # Lifecycle
    status: OrderStatus = OrderStatus.PENDING
    status_history: list[StatusChange] = field(default_factory=list)

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = None
    billing_period: BillingPeriod | None = None

    # Optimistic concurrency
    version: int = 1

    def __post_init__(self) -> None:
        """Validate order after initialization"""
        if not isinstance(self.weight_kg, Decimal):
            self.weight_kg = Decimal(str(self.weight_kg))

        if self.weight_kg <= 0:
            raise InvalidWeightError(self.weight_kg)

        if self.billing_period is None:
            self.billing_period = BillingPeriod.from_datetime(self.created_at)

    @classmethod
    def create(
        cls,
        draft: OrderDraft,
        price: PriceBreakdown,
        created_at: datetime | None = None,
    ) -> Order:
        """Factory method creating a priced order in PENDING status"""
        created_at = created_at or datetime.now(UTC)
        quota_consumed = price.quota_usage.quota_consumed_kg if price.quota_usage else Decimal("0")

        return cls(
            client_id=draft.client_id,
            weight_kg=draft.weight_kg,
            formula=draft.formula,
            options=draft.options,
            is_student=draft.is_student,
            is_opening_promotion=draft.is_opening_promotion,
            surplus_formula=draft.surplus_formula,
            price=price,
            quota_consumed_kg=quota_consumed,
            created_at=created_at,
        )

    @property
    def allocation(self) -> MachineAllocation | None:
        """Machine allocation of the billable weight, if it was priced per load"""
        return self.price.allocation if self.price else None

    def to_draft(self) -> OrderDraft:
        """Pricing input equivalent to the current order fields"""
        return OrderDraft(
            weight_kg=self.weight_kg,
            formula=self.formula,
            options=self.options,
            client_id=self.client_id,
            is_student=self.is_student,
            is_opening_promotion=self.is_opening_promotion,
            surplus_formula=self.surplus_formula,
        )

    def with_changes(
        self,
        weight_kg: Decimal | None = None,
        options: OrderOptions | None = None,
    ) -> OrderDraft:
        """Draft of this order with the requested field changes, checked against the gate.

        Raises:
            ImmutableFieldError: If a changed field is locked in the current status
        """
        draft = self.to_draft()

        if weight_kg is not None and Decimal(str(weight_kg)) != self.weight_kg:
            OrderLifecycle.ensure_mutable(self, OrderField.WEIGHT)
            draft = replace(draft, weight_kg=Decimal(str(weight_kg)))

        if options is not None and options != self.options:
            OrderLifecycle.ensure_mutable(self, OrderField.OPTIONS)
            draft = replace(draft, options=options)

        return draft

    def reprice(self, draft: OrderDraft, price: PriceBreakdown) -> None:
        """
        Replace the wash parameters and the price with a recomputed one.

        Raises:
            ImmutableFieldError: If weight, options or price are locked
        """
        OrderLifecycle.ensure_mutable(self, OrderField.PRICE)
        if draft.weight_kg != self.weight_kg:
            OrderLifecycle.ensure_mutable(self, OrderField.WEIGHT)
        if draft.options != self.options:
            OrderLifecycle.ensure_mutable(self, OrderField.OPTIONS)
        if self.allocation != price.allocation:
            OrderLifecycle.ensure_mutable(self, OrderField.ALLOCATION)

        self.weight_kg = draft.weight_kg
        self.options = draft.options
        self.surplus_formula = draft.surplus_formula
        self.price = price
        self.quota_consumed_kg = (
            price.quota_usage.quota_consumed_kg if price.quota_usage else Decimal("0")
        )
        self.updated_at = datetime.now(UTC)

    def record_status(
        self, to_status: OrderStatus, changed_at: datetime | None = None, reason: str | None = None
    ) -> StatusChange:
        """Append an audit entry and move to the new status.

        Only OrderLifecycle calls this, after validating the transition.
        """
        change = StatusChange(
            from_status=self.status,
            to_status=to_status,
            changed_at=changed_at or datetime.now(UTC),
            reason=reason,
        )
        self.status_history.append(change)
        self.status = to_status
        self.updated_at = change.changed_at
        return change

    def is_terminal(self) -> bool:
        """Check if order is in terminal state"""
        return OrderLifecycle.is_terminal(self.status)

    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    def __str__(self) -> str:
        """String representation"""
        total = self.price.total.format() if self.price else "unpriced"
        return f"Order {self.id}: {self.weight_kg} kg {self.formula.value} - {self.status.value} - {total}"
