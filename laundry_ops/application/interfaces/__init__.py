"""
Application Interfaces - Repository Contracts

This module defines the interface contracts that the infrastructure layer
must implement. Following the dependency inversion principle, the application
layer defines what it needs, and the infrastructure layer provides it.
"""

from .exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    OrderNotFoundError,
    QuotaReleaseError,
    RepositoryError,
    SubscriptionNotFoundError,
)
from .repositories import IOrderRepository, ISubscriptionRepository

__all__ = [
    # Repository interfaces
    "IOrderRepository",
    "ISubscriptionRepository",
    # Exceptions
    "DuplicateEntityError",
    "EntityNotFoundError",
    "OrderNotFoundError",
    "QuotaReleaseError",
    "RepositoryError",
    "SubscriptionNotFoundError",
]
