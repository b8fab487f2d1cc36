"""
Machine Allocator - Maps a washable weight to 20 kg and 6 kg machine loads.

The allocation minimizes what the client pays rather than the number of
machines: the weight is first covered with large loads, and the remainder
goes either into one more large load or into small loads, whichever is
cheaper under the injected unit prices.

Example:
    >>> allocator = MachineAllocator(RateCard())
    >>> allocator.allocate(Decimal("25"))
    MachineAllocation(large_loads=1, small_loads=1, weight_kg=Decimal('25'))
"""

import logging
from decimal import ROUND_FLOOR, Decimal

from ..constants import (
    LARGE_LOAD_CAPACITY_KG,
    SMALL_LOAD_CAPACITY_KG,
    SMALL_LOAD_ROUNDING_THRESHOLD_KG,
)
from ..exceptions import InvalidWeightError
from ..value_objects import MachineAllocation, Money
from .rate_card import DEFAULT_RATE_CARD, RateCard

logger = logging.getLogger(__name__)


def _floor(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


class MachineAllocator:
    """Cost-minimizing allocation of machine loads.

    Stateless apart from the rate card; safe to share between threads.
    """

    def __init__(self, rate_card: RateCard = DEFAULT_RATE_CARD) -> None:
        self.rate_card = rate_card

    def allocate(self, weight_kg: Decimal | int | str) -> MachineAllocation:
        """Allocate machine loads for a weight.

        Args:
            weight_kg: Washable weight in kilograms

        Returns:
            MachineAllocation for the weight

        Raises:
            InvalidWeightError: If weight is not positive

        Algorithm:
            n = floor(w / 20), r = w mod 20
            r == 0                        -> n large
            price_small * r / 6 > price_large -> n + 1 large
            otherwise                     -> n large, floor(r / 6) small,
                                             +1 small if r mod 6 > 1.5
        """
        if not isinstance(weight_kg, Decimal):
            weight_kg = Decimal(str(weight_kg))

        if weight_kg <= 0:
            raise InvalidWeightError(weight_kg)

        large_loads = _floor(weight_kg / LARGE_LOAD_CAPACITY_KG)
        remainder = weight_kg - large_loads * LARGE_LOAD_CAPACITY_KG

        if remainder == 0:
            allocation = MachineAllocation(large_loads, 0, weight_kg)
        elif self.remainder_small_cost(remainder) > self.rate_card.unit_price_large:
            allocation = MachineAllocation(large_loads + 1, 0, weight_kg)
        else:
            whole_small = _floor(remainder / SMALL_LOAD_CAPACITY_KG)
            partial = remainder - whole_small * SMALL_LOAD_CAPACITY_KG
            small_loads = whole_small + (1 if partial > SMALL_LOAD_ROUNDING_THRESHOLD_KG else 0)
            allocation = MachineAllocation(large_loads, small_loads, weight_kg)

        logger.debug(f"Allocated {weight_kg} kg as {allocation}")
        return allocation

    def remainder_small_cost(self, remainder_kg: Decimal) -> Decimal:
        """Cost of billing a remainder through small machines, pro rata and unrounded."""
        return self.rate_card.unit_price_small * remainder_kg / SMALL_LOAD_CAPACITY_KG

    def cost(self, allocation: MachineAllocation) -> Money:
        """Machine price of an allocation under this allocator's unit prices."""
        return allocation.machine_cost(
            self.rate_card.large_load_price, self.rate_card.small_load_price
        )
