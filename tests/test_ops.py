import math

import pytest

from minifloat import MinifloatFormat, RoundingMode
from minifloat.ops import add, divide, multiply, subtract

mf8 = MinifloatFormat(1, 4, 3)


def bits(value):
	return mf8.encode(value)


class TestOps:
	def test_add(self):
		assert mf8.decode(add(mf8, bits(1.5), bits(2.25))) == 3.75

	def test_subtract(self):
		assert mf8.decode(subtract(mf8, bits(1.5), bits(2.25))) == -0.75
		assert subtract(mf8, bits(3.0), bits(3.0)) == 0

	@pytest.mark.parametrize("mode,expected", [
		(RoundingMode.NEAREST_EVEN, 3.5),
		(RoundingMode.NEAREST_AWAY, 3.5),
		(RoundingMode.TRUNCATE, 3.25),
		(RoundingMode.CEILING, 3.5),
		(RoundingMode.FLOOR, 3.25),
	])
	def test_multiply_rounds_once(self, mode, expected):
		# 1.5 * 2.25 = 3.375 sits halfway between 3.25 and 3.5
		assert mf8.decode(multiply(mf8, bits(1.5), bits(2.25), mode)) == expected

	def test_multiply_overflow(self):
		assert mf8.decode(multiply(mf8, bits(128), bits(2))) == math.inf
		assert mf8.decode(multiply(mf8, bits(128), bits(2), RoundingMode.TRUNCATE)) == 240

	def test_divide(self):
		assert mf8.decode(divide(mf8, bits(1), bits(4))) == 0.25
		assert mf8.decode(divide(mf8, bits(1), bits(0))) == math.inf
		assert mf8.decode(divide(mf8, bits(-1), bits(0))) == -math.inf
		assert math.isnan(mf8.decode(divide(mf8, bits(0), bits(0))))

	def test_default_rounding_of_format(self):
		fmt = MinifloatFormat(1, 4, 3, default_rounding=RoundingMode.FLOOR)
		a = fmt.encode(1.5)
		b = fmt.encode(2.25)
		assert fmt.decode(multiply(fmt, a, b)) == 3.25
