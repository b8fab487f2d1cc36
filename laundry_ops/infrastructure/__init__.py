"""
Infrastructure Layer - Storage and wiring

This layer contains:
- Repositories: In-memory storage and billing collaborators
- Logging setup
- Container: Wiring of the order service from configuration
"""
