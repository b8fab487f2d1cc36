"""
Price Calculator - Domain service producing the itemized price of an order.

Composes the quota split (Premium clients), the machine allocation of the
billable weight (Basic formula) and the option surcharges, then applies the
client's discount.

Formula rules:
    BASIC     options: delivery, drying (needs delivery), ironing (needs drying), express
              base:    allocation of billable weight, large x price_large + small x price_small
    DETAILED  options: express only
              base:    billable kg x per_kg_detailed_rate

Premium rules:
    - nothing billable: base, drying and ironing are free; express and delivery
      are still charged
    - surplus below one small load (6 kg): always priced per kg
    - larger surplus: priced with the operator's choice (defaults to the order formula)

Rounding:
    Every line item is computed at full Decimal precision and rounded half-up
    to whole currency units once, when it is finalized. Subtotal, discount and
    total are derived from already rounded line items.
"""

import logging
from decimal import Decimal

from ..constants import MINIMUM_ORDER_WEIGHT_KG
from ..entities.order_draft import OrderDraft
from ..entities.subscription import ClientSubscription
from ..exceptions import InvalidOrderError, InvalidWeightError
from ..value_objects import (
    DiscountKind,
    Formula,
    IncludedService,
    MachineAllocation,
    Money,
    OrderOption,
    PriceBreakdown,
    QuotaUsage,
)
from ..value_objects.price_breakdown import ALL_INCLUSIVE_SERVICES
from .machine_allocator import MachineAllocator
from .quota_tracker import QuotaTracker
from .rate_card import DEFAULT_RATE_CARD, RateCard

logger = logging.getLogger(__name__)

ALLOWED_OPTIONS: dict[Formula, frozenset[OrderOption]] = {
    Formula.BASIC: frozenset(OrderOption),
    Formula.DETAILED: frozenset({OrderOption.EXPRESS}),
}

PREMIUM_COVERED_SERVICES: tuple[IncludedService, ...] = (
    IncludedService.PICKUP,
    IncludedService.WASHING,
    IncludedService.DRYING,
    IncludedService.IRONING,
)


class PriceCalculator:
    """Computes PriceBreakdown values from order drafts.

    Pure and stateless apart from its injected collaborators; a single
    instance can price concurrent orders.
    """

    def __init__(
        self,
        rate_card: RateCard = DEFAULT_RATE_CARD,
        allocator: MachineAllocator | None = None,
        quota_tracker: QuotaTracker | None = None,
    ) -> None:
        """Initialize with a rate card.

        Args:
            rate_card: Price table
            allocator: Machine allocator, built from the rate card if omitted
            quota_tracker: Quota tracker, built from the rate card if omitted
        """
        self.rate_card = rate_card
        self.allocator = allocator or MachineAllocator(rate_card)
        self.quota_tracker = quota_tracker or QuotaTracker(rate_card)

    def validate(self, draft: OrderDraft) -> None:
        """Check weight and option combination of a draft.

        Raises:
            InvalidWeightError: If weight is below the minimum order weight
            InvalidOrderError: If the options are inconsistent or not allowed
                by the selected formula
        """
        if draft.weight_kg < MINIMUM_ORDER_WEIGHT_KG:
            raise InvalidWeightError(draft.weight_kg, MINIMUM_ORDER_WEIGHT_KG)

        options = draft.options
        if options.ironing and not options.drying:
            raise InvalidOrderError("Ironing requires drying", field="options", value="ironing")

        disallowed = options.selected() - ALLOWED_OPTIONS[draft.formula]
        if disallowed:
            names = ", ".join(sorted(option.value for option in disallowed))
            raise InvalidOrderError(
                f"Options not available with the {draft.formula.value} formula: {names}",
                field="options",
                value=names,
            )

        if options.drying and not options.delivery:
            raise InvalidOrderError("Drying requires delivery", field="options", value="drying")

    def price(
        self,
        draft: OrderDraft,
        subscription: ClientSubscription | None = None,
        quota_usage: QuotaUsage | None = None,
    ) -> PriceBreakdown:
        """Compute the itemized price of a draft.

        Args:
            draft: Order parameters
            subscription: Client's plan snapshot, guest plan if omitted
            quota_usage: Previously reserved quota split to price against,
                instead of computing a new one from the subscription

        Returns:
            PriceBreakdown with every amount rounded to whole currency units

        Raises:
            InvalidWeightError: If weight is below the minimum order weight
            InvalidOrderError: If the options are not allowed
        """
        self.validate(draft)
        subscription = subscription or ClientSubscription.guest()

        if quota_usage is None:
            quota_usage = self.quota_tracker.compute_surplus(subscription, draft.weight_kg)
        elif quota_usage.order_weight_kg != draft.weight_kg:
            raise ValueError("Quota usage was computed for a different weight")

        pricing_formula, forced = self._pricing_formula(draft, subscription, quota_usage)
        billable = quota_usage.billable_weight_kg

        allocation: MachineAllocation | None = None
        if pricing_formula == Formula.BASIC:
            allocation = self.allocator.allocate(billable)
            base_price = self.allocator.cost(allocation).round()
        elif pricing_formula == Formula.DETAILED:
            base_price = self._money(billable * self.rate_card.per_kg_detailed_rate)
        else:
            base_price = Money.zero(self.rate_card.currency)

        surcharges = self._surcharges(draft, pricing_formula, billable)
        subtotal = base_price
        for amount in surcharges.values():
            subtotal = subtotal.add(amount)

        is_premium_free = subscription.is_premium and quota_usage.is_fully_covered
        discount_kind, discount_rate, discount = self._discount(
            draft, base_price, surcharges, is_premium_free
        )

        breakdown = PriceBreakdown(
            base_price=base_price,
            surcharges=surcharges,
            discount=discount,
            subtotal=subtotal,
            total=subtotal.subtract(discount),
            pricing_formula=pricing_formula,
            allocation=allocation,
            quota_usage=quota_usage,
            is_premium_free=is_premium_free,
            surplus_formula_forced=forced,
            discount_rate=discount_rate,
            discount_kind=discount_kind,
            included_services=self._included_services(pricing_formula, is_premium_free),
        )

        logger.debug(
            f"Priced {draft.weight_kg} kg {draft.formula.value}: total {breakdown.total}",
            extra={"client_id": str(draft.client_id) if draft.client_id else None},
        )
        return breakdown

    def _money(self, amount: Decimal) -> Money:
        """Finalize a line item: round once, to whole currency units."""
        return self.rate_card.money(amount).round()

    def _pricing_formula(
        self, draft: OrderDraft, subscription: ClientSubscription, usage: QuotaUsage
    ) -> tuple[Formula | None, bool]:
        """Formula used for the billable weight, and whether it was imposed."""
        if usage.billable_weight_kg == 0:
            return None, False

        if usage.requires_detailed_formula:
            return Formula.DETAILED, True

        if subscription.is_premium and draft.surplus_formula is not None:
            return draft.surplus_formula, False

        return draft.formula, False

    def _surcharges(
        self, draft: OrderDraft, pricing_formula: Formula | None, billable_kg: Decimal
    ) -> dict[OrderOption, Money]:
        options = draft.options
        surcharges: dict[OrderOption, Money] = {}

        if options.delivery:
            surcharges[OrderOption.DELIVERY] = self._money(self.rate_card.delivery_surcharge)

        # Per-kg drying and ironing only apply to weight billed per machine load;
        # the Detailed formula and the Premium quota already include them.
        if pricing_formula == Formula.BASIC:
            if options.drying:
                surcharges[OrderOption.DRYING] = self._money(
                    billable_kg * self.rate_card.drying_rate_per_kg
                )
            if options.ironing:
                surcharges[OrderOption.IRONING] = self._money(
                    billable_kg * self.rate_card.ironing_rate_per_kg
                )

        if options.express:
            surcharges[OrderOption.EXPRESS] = self._money(self.rate_card.express_surcharge)

        return surcharges

    def _discount(
        self,
        draft: OrderDraft,
        base_price: Money,
        surcharges: dict[OrderOption, Money],
        is_premium_free: bool,
    ) -> tuple[DiscountKind | None, Decimal, Money]:
        """Discount on base price and surcharges, express excluded."""
        zero = Money.zero(self.rate_card.currency)

        # Add-on services of a fully covered order are charged in full
        if is_premium_free:
            return None, Decimal("0"), zero

        if draft.is_student:
            kind, rate = DiscountKind.STUDENT, self.rate_card.student_discount_rate
        elif draft.is_opening_promotion:
            kind, rate = DiscountKind.OPENING, self.rate_card.opening_discount_rate
        else:
            return None, Decimal("0"), zero

        discountable = base_price
        for option, amount in surcharges.items():
            if option != OrderOption.EXPRESS:
                discountable = discountable.add(amount)

        if not discountable.is_positive() or rate == 0:
            return None, Decimal("0"), zero

        return kind, rate, discountable.multiply(rate).round()

    @staticmethod
    def _included_services(
        pricing_formula: Formula | None, is_premium_free: bool
    ) -> tuple[IncludedService, ...]:
        if pricing_formula == Formula.DETAILED:
            return ALL_INCLUSIVE_SERVICES
        if is_premium_free:
            return PREMIUM_COVERED_SERVICES
        return (IncludedService.WASHING,)
