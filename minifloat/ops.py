from __future__ import annotations

from typing import Callable

import numpy as np

from .format import MinifloatFormat
from .rounding import RoundingMode


def _binary_op(
	fmt: MinifloatFormat,
	a_packed: int,
	b_packed: int,
	op: Callable[[np.float64, np.float64], np.float64],
	rounding: RoundingMode | int | None,
) -> int:
	a = np.float64(fmt.decode(a_packed))
	b = np.float64(fmt.decode(b_packed))
	# Operands are exact in double precision; only the final encode rounds.
	with np.errstate(all="ignore"):
		res = op(a, b)
	return fmt.encode(float(res), rounding)


def add(fmt: MinifloatFormat, a_packed: int, b_packed: int, rounding: RoundingMode | int | None = None) -> int:
	return _binary_op(fmt, a_packed, b_packed, np.add, rounding)


def subtract(fmt: MinifloatFormat, a_packed: int, b_packed: int, rounding: RoundingMode | int | None = None) -> int:
	return _binary_op(fmt, a_packed, b_packed, np.subtract, rounding)


def multiply(fmt: MinifloatFormat, a_packed: int, b_packed: int, rounding: RoundingMode | int | None = None) -> int:
	return _binary_op(fmt, a_packed, b_packed, np.multiply, rounding)


def divide(fmt: MinifloatFormat, a_packed: int, b_packed: int, rounding: RoundingMode | int | None = None) -> int:
	return _binary_op(fmt, a_packed, b_packed, np.divide, rounding)
