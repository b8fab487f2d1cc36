"""
Client Subscription Entity - Billing plan snapshot read by the pricing engine
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ..value_objects import BillingPeriod


class PlanKind(Enum):
    """Billing plan of a client."""

    NONE = "none"  # Guest or walk-in client
    STANDARD = "standard"
    PREMIUM = "premium"


@dataclass(frozen=True)
class ClientSubscription:
    """
    Snapshot of a client's billing plan for one billing period.

    The billing subsystem owns the cumulative washed weight; the pricing engine
    only reads it and hands back the increment to apply. The snapshot is frozen
    so a computation cannot change the counter by accident.
    """

    client_id: UUID | None
    plan: PlanKind = PlanKind.NONE
    billing_period: BillingPeriod | None = None
    cumulative_washed_kg: Decimal = Decimal("0")
    version: int = 1

    def __post_init__(self) -> None:
        """Validate subscription after initialization"""
        if not isinstance(self.cumulative_washed_kg, Decimal):
            object.__setattr__(
                self, "cumulative_washed_kg", Decimal(str(self.cumulative_washed_kg))
            )

        if self.cumulative_washed_kg < 0:
            raise ValueError(
                f"Cumulative washed weight cannot be negative, got {self.cumulative_washed_kg}"
            )

        if self.billing_period is None:
            object.__setattr__(
                self, "billing_period", BillingPeriod.from_datetime(datetime.now(UTC))
            )

    @classmethod
    def guest(cls, billing_period: BillingPeriod | None = None) -> ClientSubscription:
        """Subscription used for anonymous orders."""
        return cls(client_id=None, plan=PlanKind.NONE, billing_period=billing_period)

    @property
    def is_premium(self) -> bool:
        return self.plan == PlanKind.PREMIUM

    def with_cumulative(self, cumulative_washed_kg: Decimal) -> ClientSubscription:
        """Copy of this snapshot with a different counter value and the next version."""
        return replace(
            self,
            cumulative_washed_kg=cumulative_washed_kg,
            version=self.version + 1,
        )

    def excluding(self, consumed_kg: Decimal) -> ClientSubscription:
        """
        View of the counter without an order's own earlier consumption.

        Used when re-pricing an order that already consumed quota, so that
        its own weight is not counted twice.
        """
        return replace(
            self,
            cumulative_washed_kg=max(Decimal("0"), self.cumulative_washed_kg - consumed_kg),
        )
