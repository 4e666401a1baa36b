from __future__ import annotations

from enum import IntEnum
from typing import Callable, Tuple


class RoundingMode(IntEnum):
	"""Rounding applied when a double does not fit the target significand.

	The numeric values are stable and may be passed as plain integers.
	"""

	NEAREST_EVEN = 0
	NEAREST_AWAY = 1
	TRUNCATE = 2
	CEILING = 3
	FLOOR = 4


RoundingFunction = Callable[[int, int, int], int]


def _ctz(value: int) -> int:
	# Trailing zero count; zero has all 64 bits clear.
	if value == 0:
		return 64
	return (value & -value).bit_length() - 1


def round_nearest_even(mantissa: int, shift: int, sign: int) -> int:
	zeros = _ctz(mantissa)
	mantissa >>= shift - 1
	half = mantissa & 1
	incr = 1 if half and (zeros < shift - 1 or mantissa & 2) else 0
	return (mantissa >> 1) + incr


def round_nearest_away(mantissa: int, shift: int, sign: int) -> int:
	mantissa >>= shift - 1
	return (mantissa >> 1) + (mantissa & 1)


def round_truncate(mantissa: int, shift: int, sign: int) -> int:
	return mantissa >> shift


def round_ceiling(mantissa: int, shift: int, sign: int) -> int:
	incr = 1 if not sign and _ctz(mantissa) < shift else 0
	return (mantissa >> shift) + incr


def round_floor(mantissa: int, shift: int, sign: int) -> int:
	incr = 1 if sign and _ctz(mantissa) < shift else 0
	return (mantissa >> shift) + incr


# Indexed by RoundingMode value.
ROUNDING_FUNCTIONS: Tuple[RoundingFunction, ...] = (
	round_nearest_even,
	round_nearest_away,
	round_truncate,
	round_ceiling,
	round_floor,
)


def rounding_function(mode: RoundingMode | int) -> RoundingFunction:
	"""Return the strategy that drops `shift` low bits of a mantissa for `mode`."""
	return ROUNDING_FUNCTIONS[RoundingMode(mode)]
