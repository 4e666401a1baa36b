from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .rounding import RoundingMode, rounding_function

if TYPE_CHECKING:
	from .format import MinifloatFormat


# IEEE 754 float64 layout
F64_SIGN = 0x8000_0000_0000_0000
F64_EXP_ALL_ONES = 0x7FF
F64_MANT_BITS = 52
F64_MANT_MASK = 0x000F_FFFF_FFFF_FFFF
F64_IMPLICIT_ONE = 0x0010_0000_0000_0000

# Format significands are left-justified into a 32-bit slot while decoding.
_SLOT_BITS = 32
_SLOT_MASK = 0xFFFF_FFFF


def _float_to_bits(value: float) -> int:
	return int(np.array(value, dtype=np.float64).view(np.uint64))


def _bits_to_float(bits: int) -> float:
	return float(np.array(bits, dtype=np.uint64).view(np.float64))


def _clz32(value: int) -> int:
	return _SLOT_BITS - value.bit_length()


def encode(value: float, fmt: MinifloatFormat, rounding: RoundingMode | int | None = None) -> int:
	"""Encode a double into the bit pattern of `fmt`.

	Every input maps to some pattern: NaN becomes the all-ones pattern, values
	past the largest finite magnitude become infinity (or saturate for the
	directed modes that round toward the range), and negative values in an
	unsigned format become zero or NaN depending on the rounding mode.
	"""
	mode = fmt.default_rounding if rounding is None else RoundingMode(rounding)
	significand_bits = fmt.significand_bits
	max_exponent = fmt.max_exponent
	nan_bits = (1 << fmt.total_bits) - 1

	bits = _float_to_bits(value)
	s0 = bits >> 63
	e0 = (bits >> F64_MANT_BITS) & F64_EXP_ALL_ONES
	m0 = bits & F64_MANT_MASK
	if e0 == F64_EXP_ALL_ONES and m0:
		return nan_bits

	# Native subnormals (and zero) sit on the minimum native exponent.
	e = (e0 if e0 else 1) + fmt.exponent_delta
	m = m0
	if e <= 0 or not e0:
		shift = min(1 - e, F64_MANT_BITS + 1)
		if e0:
			m |= F64_IMPLICIT_ONE
		dropped = m & ((1 << shift) - 1)
		# Sticky bit: never the half-way bit, since at least 29 bits get rounded off.
		m = (m >> shift) | (1 if dropped else 0)
		e = 0

	m = rounding_function(mode)(m, F64_MANT_BITS - significand_bits, s0)
	if m >> significand_bits:
		# Rounded up into the next binade.
		e += 1
		m = 0

	if e >= max_exponent:
		e = max_exponent
		m = 0
		if e0 < F64_EXP_ALL_ONES and (
			mode == RoundingMode.TRUNCATE
			or (s0 and mode == RoundingMode.CEILING)
			or (not s0 and mode == RoundingMode.FLOOR)
		):
			e = max_exponent - 1
			m = (1 << significand_bits) - 1

	if not fmt.sign_bits and s0:
		if mode in (RoundingMode.TRUNCATE, RoundingMode.CEILING):
			return 0
		if not e and not m:
			return 0
		return nan_bits

	return ((s0 << fmt.exponent_bits) | e) << significand_bits | m


def decode(bits: int, fmt: MinifloatFormat) -> float:
	"""Decode a bit pattern of `fmt` into a double. Exact for every pattern."""
	significand_bits = fmt.significand_bits
	max_exponent = fmt.max_exponent
	bits = int(bits) & ((1 << fmt.total_bits) - 1)

	sign = F64_SIGN if fmt.sign_bits and bits >> (fmt.total_bits - 1) else 0
	e0 = (bits >> significand_bits) & max_exponent
	m0 = (bits << (_SLOT_BITS - significand_bits)) & _SLOT_MASK

	promoted = False
	if e0 == 0:
		if m0:
			# Promote the subnormal: move the leading one just past the slot.
			shift = _clz32(m0) + 1
			m0 = (m0 << shift) & _SLOT_MASK
			e0 = 1 - shift
			promoted = True
		else:
			e0 = fmt.exponent_delta
	elif e0 == max_exponent:
		return _bits_to_float(sign | (F64_EXP_ALL_ONES << F64_MANT_BITS) | m0)

	e = e0 - fmt.exponent_delta
	m = m0 << (F64_MANT_BITS - _SLOT_BITS)
	if promoted and e <= 0:
		# Below the native normal range, only reachable with biases near 1023.
		m = (F64_IMPLICIT_ONE | m) >> (1 - e)
		e = 0
	return _bits_to_float(sign | (e << F64_MANT_BITS) | m)
