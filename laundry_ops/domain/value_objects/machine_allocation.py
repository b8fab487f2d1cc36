"""Machine allocation value object."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .money import Money


@dataclass(frozen=True)
class MachineAllocation:
    """Number of large (20 kg) and small (6 kg) machine loads used for a weight.

    Attributes:
        large_loads: Count of 20 kg machine cycles
        small_loads: Count of 6 kg machine cycles
        weight_kg: Weight the allocation was computed for
    """

    large_loads: int
    small_loads: int
    weight_kg: Decimal

    def __post_init__(self) -> None:
        if self.large_loads < 0 or self.small_loads < 0:
            raise ValueError("Machine load counts cannot be negative")

    @property
    def total_loads(self) -> int:
        return self.large_loads + self.small_loads

    def machine_cost(self, unit_price_large: Money, unit_price_small: Money) -> Money:
        """Cost of running the allocated loads at the given unit prices."""
        return unit_price_large.multiply(self.large_loads).add(
            unit_price_small.multiply(self.small_loads)
        )

    def __str__(self) -> str:
        return f"20kg x {self.large_loads}, 6kg x {self.small_loads}"
