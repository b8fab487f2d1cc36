"""Repository implementations."""

from .memory import InMemoryOrderRepository, InMemorySubscriptionRepository

__all__ = ["InMemoryOrderRepository", "InMemorySubscriptionRepository"]
