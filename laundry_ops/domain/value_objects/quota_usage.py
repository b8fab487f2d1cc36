"""Quota usage value object for Premium subscriptions."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..constants import SMALL_LOAD_CAPACITY_KG


@dataclass(frozen=True)
class QuotaUsage:
    """Split of an order's weight between the monthly quota and the billable surplus.

    Invariant: ``quota_consumed_kg + billable_weight_kg == order_weight_kg``.

    Attributes:
        order_weight_kg: Weight of the order being priced
        billable_weight_kg: Weight that must be paid for (surplus for Premium)
        quota_consumed_kg: Weight covered by the subscription, i.e. the
            increment the billing collaborator must apply to the counter
        quota_ceiling_kg: Monthly quota of the plan (zero when not Premium)
        cumulative_washed_kg: Counter value the split was computed from
    """

    order_weight_kg: Decimal
    billable_weight_kg: Decimal
    quota_consumed_kg: Decimal
    quota_ceiling_kg: Decimal = Decimal("0")
    cumulative_washed_kg: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if self.quota_consumed_kg + self.billable_weight_kg != self.order_weight_kg:
            raise ValueError("Consumed and billable weight must add up to the order weight")

    @property
    def quota_remaining_kg(self) -> Decimal:
        """Quota left before this order."""
        return max(Decimal("0"), self.quota_ceiling_kg - self.cumulative_washed_kg)

    @property
    def covered_weight_kg(self) -> Decimal:
        return self.quota_consumed_kg

    @property
    def surplus_kg(self) -> Decimal:
        return self.billable_weight_kg

    @property
    def is_fully_covered(self) -> bool:
        return self.billable_weight_kg == 0

    @property
    def requires_detailed_formula(self) -> bool:
        """A surplus smaller than one small load can only be billed per kilogram."""
        return Decimal("0") < self.billable_weight_kg < SMALL_LOAD_CAPACITY_KG
