"""Billing period value object keying a client's monthly quota consumption."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, order=True)
class BillingPeriod:
    """Calendar month a Premium quota counter belongs to.

    Orders carry the period they were created in, so an order priced late is
    still attributed to the month it belongs to instead of whatever month the
    counter happens to be in.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        if self.year < 1:
            raise ValueError(f"Year must be positive, got {self.year}")

    @classmethod
    def from_datetime(cls, moment: datetime) -> BillingPeriod:
        """Get the billing period containing the given moment."""
        return cls(year=moment.year, month=moment.month)

    def next(self) -> BillingPeriod:
        """Get the following billing period."""
        if self.month == 12:
            return BillingPeriod(self.year + 1, 1)
        return BillingPeriod(self.year, self.month + 1)

    def contains(self, moment: datetime) -> bool:
        """Check whether a moment falls inside this period."""
        return moment.year == self.year and moment.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
