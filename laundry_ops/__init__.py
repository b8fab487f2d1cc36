"""
Laundry Ops - order pricing, machine allocation and lifecycle engine.

Layers:
- domain: pure pricing, allocation, quota and lifecycle rules
- application: configuration, repository contracts and order orchestration
- infrastructure: logging setup, reference storage and wiring
"""

__version__ = "0.1.0"
