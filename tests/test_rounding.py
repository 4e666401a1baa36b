import pytest

from minifloat.rounding import (
	ROUNDING_FUNCTIONS,
	RoundingMode,
	round_ceiling,
	round_floor,
	round_nearest_away,
	round_nearest_even,
	round_truncate,
	rounding_function,
)


class TestRoundingMode:
	@pytest.mark.parametrize("mode,value", [
		(RoundingMode.NEAREST_EVEN, 0),
		(RoundingMode.NEAREST_AWAY, 1),
		(RoundingMode.TRUNCATE, 2),
		(RoundingMode.CEILING, 3),
		(RoundingMode.FLOOR, 4),
	])
	def test_stable_values(self, mode, value):
		assert int(mode) == value
		assert RoundingMode(value) is mode

	def test_lookup(self):
		assert len(ROUNDING_FUNCTIONS) == len(RoundingMode)
		assert rounding_function(RoundingMode.CEILING) is round_ceiling
		assert rounding_function(0) is round_nearest_even
		assert rounding_function(4) is round_floor

	def test_unknown_mode(self):
		with pytest.raises(ValueError):
			rounding_function(5)


# (mantissa, shift 4, sign) -> expected per strategy.  The low four bits are dropped.
CASES = [
	# exact: nothing dropped
	(0b0011_0000, 0, 0b0011, 0b0011, 0b0011, 0b0011, 0b0011),
	(0b0011_0000, 1, 0b0011, 0b0011, 0b0011, 0b0011, 0b0011),
	# below half
	(0b0010_0111, 0, 0b0010, 0b0010, 0b0010, 0b0011, 0b0010),
	(0b0010_0111, 1, 0b0010, 0b0010, 0b0010, 0b0010, 0b0011),
	# exact half, even retained bit
	(0b0010_1000, 0, 0b0010, 0b0011, 0b0010, 0b0011, 0b0010),
	# exact half, odd retained bit
	(0b0011_1000, 0, 0b0100, 0b0100, 0b0011, 0b0100, 0b0011),
	(0b0011_1000, 1, 0b0100, 0b0100, 0b0011, 0b0011, 0b0100),
	# above half
	(0b0010_1001, 0, 0b0011, 0b0011, 0b0010, 0b0011, 0b0010),
	# sticky bit only
	(0b0010_0001, 0, 0b0010, 0b0010, 0b0010, 0b0011, 0b0010),
	(0b0010_0001, 1, 0b0010, 0b0010, 0b0010, 0b0010, 0b0011),
	# zero
	(0, 0, 0, 0, 0, 0, 0),
	(0, 1, 0, 0, 0, 0, 0),
]


@pytest.mark.parametrize("mantissa,sign,even,away,trunc,ceil,floor", CASES)
def test_strategies(mantissa, sign, even, away, trunc, ceil, floor):
	assert round_nearest_even(mantissa, 4, sign) == even
	assert round_nearest_away(mantissa, 4, sign) == away
	assert round_truncate(mantissa, 4, sign) == trunc
	assert round_ceiling(mantissa, 4, sign) == ceil
	assert round_floor(mantissa, 4, sign) == floor


def test_carry_out_of_width():
	# All retained bits set plus a round-up carries into the next bit.
	assert round_nearest_even(0b1111_1000, 4, 0) == 0b1_0000
	assert round_ceiling(0b1111_0001, 4, 0) == 0b1_0000
	assert round_truncate(0b1111_1111, 4, 0) == 0b1111
