"""Fixed physical and business constants of the laundry domain."""

from decimal import Decimal

# Machine capacities
LARGE_LOAD_CAPACITY_KG = Decimal("20")
SMALL_LOAD_CAPACITY_KG = Decimal("6")

# A remainder above this share of a small load rounds up to one more small load
SMALL_LOAD_ROUNDING_THRESHOLD_KG = Decimal("1.5")

MINIMUM_ORDER_WEIGHT_KG = Decimal("6")

DEFAULT_CURRENCY = "XOF"
CURRENCY_CODE_LENGTH = 3
