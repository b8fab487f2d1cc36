"""
Domain Layer - Pure Business Logic

This layer contains:
- Entities: Orders and client subscriptions
- Value Objects: Money, weights, allocations and price breakdowns
- Services: Machine allocation, quota tracking, pricing and lifecycle rules

No external dependencies allowed in this layer.
"""
