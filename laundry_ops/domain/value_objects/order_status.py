"""Order lifecycle status and the order fields it gates."""

from enum import Enum


class OrderStatus(Enum):
    """Order status enumeration, in lifecycle order."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    ON_THE_WAY = "on_the_way"  # Driver heading to the client
    PICKED_UP = "picked_up"
    PROCESSING = "processing"  # Site has started washing
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderField(Enum):
    """Order fields whose mutability depends on the status."""

    WEIGHT = "weight_kg"
    ALLOCATION = "allocation"
    OPTIONS = "options"
    PRICE = "price"
