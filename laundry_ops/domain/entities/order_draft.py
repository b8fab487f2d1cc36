"""
Order Draft - Pricing input collected at intake, before an order exists
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from ..value_objects import Formula, OrderOptions


@dataclass(frozen=True)
class OrderDraft:
    """Parameters for pricing and creating an order.

    Attributes:
        weight_kg: Washable weight in kilograms
        formula: Formula selected by the client
        options: Add-on options selected by the client
        client_id: Owning client, None for guest orders
        is_student: Client qualifies for the student discount
        is_opening_promotion: Order falls under the opening promotion
        surplus_formula: Formula the operator picked for a Premium surplus of
            at least one small load; defaults to ``formula``
    """

    weight_kg: Decimal
    formula: Formula = Formula.BASIC
    options: OrderOptions = field(default_factory=OrderOptions)
    client_id: UUID | None = None
    is_student: bool = False
    is_opening_promotion: bool = False
    surplus_formula: Formula | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.weight_kg, Decimal):
            object.__setattr__(self, "weight_kg", Decimal(str(self.weight_kg)))
