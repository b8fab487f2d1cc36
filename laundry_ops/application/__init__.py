"""
Application Layer - Use Cases and Orchestration

This layer contains:
- Services: Order orchestration over the pricing engine
- Use Cases: Request/response boundary for callers
- Interfaces: Repository contracts and abstractions
- Configuration: Rate table, retries and logging settings

Depends on domain layer, orchestrates business logic.
Defines interfaces that infrastructure layer must implement.
"""

from .interfaces import (
    DuplicateEntityError,
    EntityNotFoundError,
    IOrderRepository,
    ISubscriptionRepository,
    OrderNotFoundError,
    RepositoryError,
)

__all__ = [
    "DuplicateEntityError",
    "EntityNotFoundError",
    "IOrderRepository",
    "ISubscriptionRepository",
    "OrderNotFoundError",
    "RepositoryError",
]
