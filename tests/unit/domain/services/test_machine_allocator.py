"""
Unit tests for the machine allocator domain service
"""

from decimal import Decimal

import pytest

from laundry_ops.domain.exceptions import InvalidOrderError, InvalidWeightError
from laundry_ops.domain.services import MachineAllocator, RateCard
from laundry_ops.domain.value_objects import MachineAllocation, Money


class TestMachineAllocator:
    """Test load allocation with the default rate table"""

    @pytest.fixture
    def allocator(self, rate_card):
        return MachineAllocator(rate_card)

    @pytest.mark.parametrize("weight", ["20", "40", "60", "100", "200"])
    def test_exact_multiples_of_twenty_use_large_loads_only(self, allocator, weight):
        """Test that multiples of 20 kg give w/20 large loads and no small load"""
        allocation = allocator.allocate(Decimal(weight))

        assert allocation.large_loads == int(Decimal(weight) / 20)
        assert allocation.small_loads == 0

    def test_remainder_above_large_price_rounds_up_to_large_load(self, allocator):
        """Test 15 kg: small machines would cost 5000, one large load costs 4000"""
        allocation = allocator.allocate(Decimal("15"))

        assert allocation == MachineAllocation(1, 0, Decimal("15"))

    def test_small_remainder_adds_small_load(self, allocator):
        """Test 25 kg: 1 large load and the 5 kg remainder in one small load"""
        allocation = allocator.allocate(Decimal("25"))

        assert allocation.large_loads == 1
        assert allocation.small_loads == 1

    def test_remainder_equal_to_large_price_stays_on_small_loads(self, allocator):
        """Test 12 kg: small cost equals large price, the tie goes to small loads"""
        allocation = allocator.allocate(Decimal("12"))

        assert (allocation.large_loads, allocation.small_loads) == (0, 2)

    @pytest.mark.parametrize(
        "weight,expected",
        [
            ("6", (0, 1)),
            ("7.5", (0, 1)),  # partial of exactly 1.5 kg is absorbed
            ("7.6", (0, 2)),  # partial above 1.5 kg adds a load
            ("21", (1, 0)),  # 1 kg remainder is absorbed
            ("21.5", (1, 0)),
            ("22", (1, 1)),
            ("32", (1, 2)),
            ("33", (2, 0)),
        ],
    )
    def test_partial_load_threshold(self, allocator, weight, expected):
        """Test rounding of the partial small load around the 1.5 kg threshold"""
        allocation = allocator.allocate(Decimal(weight))

        assert (allocation.large_loads, allocation.small_loads) == expected

    def test_allocation_keeps_weight(self, allocator):
        """Test that the allocation carries the weight it was computed for"""
        allocation = allocator.allocate("25")

        assert allocation.weight_kg == Decimal("25")

    @pytest.mark.parametrize("weight", ["0", "-1", "-20"])
    def test_non_positive_weight_raises_error(self, allocator, weight):
        """Test that non-positive weight raises InvalidWeightError"""
        with pytest.raises(InvalidWeightError, match="Weight must be positive"):
            allocator.allocate(Decimal(weight))

    def test_invalid_weight_is_invalid_order(self, allocator):
        """Test that weight errors can be handled as invalid orders"""
        with pytest.raises(InvalidOrderError):
            allocator.allocate(Decimal("0"))

    def test_cost(self, allocator):
        """Test machine cost of an allocation"""
        allocation = allocator.allocate(Decimal("25"))

        assert allocator.cost(allocation) == Money(Decimal("6000"))

    def test_remainder_small_cost_is_pro_rata(self, allocator):
        """Test that small machine cost is prorated and unrounded"""
        assert allocator.remainder_small_cost(Decimal("5")) == Decimal("2000") * 5 / 6


class TestMachineAllocatorCostTieBreak:
    """Test that the allocation follows the cheaper way of covering the remainder"""

    @pytest.mark.parametrize(
        "weight", ["6.5", "9", "11.9", "12", "12.1", "13", "19.9", "26", "45", "58", "77.7"]
    )
    def test_extra_large_load_only_when_small_machines_cost_more(self, rate_card, weight):
        """Test that an extra large load is used exactly when small machines cost more"""
        allocator = MachineAllocator(rate_card)
        weight_kg = Decimal(weight)
        whole_large = int(weight_kg // 20)
        remainder = weight_kg - whole_large * 20

        allocation = allocator.allocate(weight_kg)

        small_cost = rate_card.unit_price_small * remainder / 6
        if small_cost > rate_card.unit_price_large:
            assert allocation == MachineAllocation(whole_large + 1, 0, weight_kg)
        else:
            assert allocation.large_loads == whole_large
            assert allocation.small_loads * 6 + Decimal("1.5") >= remainder

    def test_cheaper_small_machines_change_the_split(self):
        """Test 15 kg with cheap small machines stays on small loads"""
        allocator = MachineAllocator(
            RateCard(unit_price_large=Decimal("4000"), unit_price_small=Decimal("1000"))
        )

        allocation = allocator.allocate(Decimal("15"))

        assert (allocation.large_loads, allocation.small_loads) == (0, 3)

    def test_unit_prices_come_from_rate_card(self):
        """Test that cost uses the injected unit prices"""
        allocator = MachineAllocator(
            RateCard(unit_price_large=Decimal("5000"), unit_price_small=Decimal("2500"))
        )

        allocation = allocator.allocate(Decimal("26"))

        assert allocator.cost(allocation) == Money(Decimal("7500"))
