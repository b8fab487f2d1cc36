"""
Quota Tracker - Splits a Premium order between the monthly quota and the surplus.

The tracker reads the client's cumulative washed weight from a subscription
snapshot and never changes it. The ``quota_consumed_kg`` it returns is the
increment the billing collaborator must apply atomically; until that
increment is confirmed, the split is only a proposal.
"""

import logging
from decimal import Decimal

from ..entities.subscription import ClientSubscription
from ..exceptions import InvalidWeightError
from ..value_objects import QuotaUsage
from .rate_card import DEFAULT_RATE_CARD, RateCard

logger = logging.getLogger(__name__)


class QuotaTracker:
    """Computes billable surplus and quota consumption for an order weight."""

    def __init__(self, rate_card: RateCard = DEFAULT_RATE_CARD) -> None:
        self.rate_card = rate_card

    @property
    def monthly_quota_ceiling(self) -> Decimal:
        return self.rate_card.monthly_quota_ceiling

    def quota_remaining(self, subscription: ClientSubscription) -> Decimal:
        """Quota left in the subscription's billing period, zero when not Premium."""
        if not subscription.is_premium:
            return Decimal("0")
        return max(Decimal("0"), self.monthly_quota_ceiling - subscription.cumulative_washed_kg)

    def compute_surplus(
        self, subscription: ClientSubscription, order_weight_kg: Decimal | int | str
    ) -> QuotaUsage:
        """Split an order weight into billable weight and quota consumption.

        Args:
            subscription: Snapshot of the client's plan for the order's period
            order_weight_kg: Weight of the order

        Returns:
            QuotaUsage where billable + consumed == order weight

        Raises:
            InvalidWeightError: If the order weight is not positive
        """
        if not isinstance(order_weight_kg, Decimal):
            order_weight_kg = Decimal(str(order_weight_kg))

        if order_weight_kg <= 0:
            raise InvalidWeightError(order_weight_kg)

        if not subscription.is_premium:
            return QuotaUsage(
                order_weight_kg=order_weight_kg,
                billable_weight_kg=order_weight_kg,
                quota_consumed_kg=Decimal("0"),
            )

        remaining = self.quota_remaining(subscription)
        billable = max(Decimal("0"), order_weight_kg - remaining)
        usage = QuotaUsage(
            order_weight_kg=order_weight_kg,
            billable_weight_kg=billable,
            quota_consumed_kg=order_weight_kg - billable,
            quota_ceiling_kg=self.monthly_quota_ceiling,
            cumulative_washed_kg=subscription.cumulative_washed_kg,
        )

        logger.debug(
            f"Premium split for {order_weight_kg} kg: {usage.quota_consumed_kg} kg covered, "
            f"{usage.billable_weight_kg} kg billable",
            extra={"client_id": str(subscription.client_id)},
        )
        return usage
