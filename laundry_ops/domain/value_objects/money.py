"""Money amounts in the billing currency.

Order prices are quoted in whole FCFA (ISO code XOF). Intermediate values such
as ``2000 x 5/6`` for a partial small load keep their full Decimal precision;
only finished line items are rounded, half-up, with ``round()``.
"""

# Standard library imports
from decimal import ROUND_HALF_UP, Decimal
from functools import total_ordering
from typing import Any, Self

from ..constants import CURRENCY_CODE_LENGTH, DEFAULT_CURRENCY

# Currencies printed with a local suffix instead of their ISO code
_CURRENCY_SUFFIXES = {"XOF": "FCFA"}


@total_ordering
class Money:
    """Immutable amount of a single currency.

    Example:
        >>> Money(2000).multiply(Decimal("5") / 6).round()
        Money(1667, 'XOF')
        >>> Money(30750).format()
        '30 750 FCFA'
    """

    __slots__ = ("_amount", "_currency")

    def __init__(
        self, amount: Decimal | float | int | str, currency: str = DEFAULT_CURRENCY
    ) -> None:
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        if len(currency) != CURRENCY_CODE_LENGTH:
            raise ValueError(f"Invalid currency code: {currency}")

        self._amount = amount
        self._currency = currency.upper()

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"Cannot modify immutable Money attribute '{name}'")
        super().__setattr__(name, value)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Self:
        return cls(Decimal("0"), currency)

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def currency(self) -> str:
        return self._currency

    def _same_currency(self, other: object, operation: str) -> "Money":
        if not isinstance(other, Money):
            raise TypeError(f"Cannot {operation} Money and {type(other)}")
        if other._currency != self._currency:
            raise ValueError(f"Cannot {operation} {self._currency} and {other._currency}")
        return other

    # Arithmetic returns new instances; line items are combined in one currency

    def add(self, other: Self) -> Self:
        """Sum of two amounts; ValueError if the currencies differ."""
        other = self._same_currency(other, "add")
        return type(self)(self._amount + other._amount, self._currency)

    def subtract(self, other: Self) -> Self:
        """Difference of two amounts; ValueError if the currencies differ."""
        other = self._same_currency(other, "subtract")
        return type(self)(self._amount - other._amount, self._currency)

    def multiply(self, factor: Decimal | float | int) -> Self:
        """Scale by a rate or a load fraction, without rounding."""
        if not isinstance(factor, Decimal):
            factor = Decimal(str(factor))
        return type(self)(self._amount * factor, self._currency)

    def round(self, decimal_places: int = 0) -> Self:
        """Finalize the amount, half-up, to whole units unless told otherwise."""
        step = Decimal(1).scaleb(-decimal_places)
        return type(self)(self._amount.quantize(step, rounding=ROUND_HALF_UP), self._currency)

    def is_positive(self) -> bool:
        return self._amount > 0

    def is_zero(self) -> bool:
        return self._amount == 0

    def to_int(self) -> int:
        """Whole currency units, as stored and returned to callers."""
        return int(self.round()._amount)

    def format(self, include_currency: bool = True, decimal_places: int = 0) -> str:
        """Render for receipts, grouping thousands with spaces: ``4 000 FCFA``."""
        rounded = self.round(decimal_places)._amount
        digits = f"{rounded:,.{decimal_places}f}".replace(",", " ")
        if not include_currency:
            return digits
        return f"{digits} {_CURRENCY_SUFFIXES.get(self._currency, self._currency)}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return False
        return (self._amount, self._currency) == (other._amount, other._currency)

    def __lt__(self, other: Self | Decimal | int) -> bool:
        if isinstance(other, (Decimal, int)):
            return self._amount < Decimal(other)
        other = self._same_currency(other, "compare")
        return self._amount < other._amount

    def __add__(self, other: Self) -> Self:
        return self.add(other)

    def __sub__(self, other: Self) -> Self:
        return self.subtract(other)

    def __hash__(self) -> int:
        return hash((self._amount, self._currency))

    def __repr__(self) -> str:
        return f"Money({self._amount}, '{self._currency}')"

    def __str__(self) -> str:
        return self.format()
