from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, NamedTuple

import numpy as np

from . import codec
from .rounding import RoundingMode

logger = logging.getLogger(__name__)

# Native float64 exponent range reachable by a format's exponents.
_MIN_NATIVE_EXPONENT = -1023
_MAX_NATIVE_EXPONENT = 1024


class InvalidFormat(ValueError):
	"""Raised when minifloat format parameters are out of range."""


class Fields(NamedTuple):
	sign: int
	exponent: int
	significand: int


def _smallest_uint_dtype_for_bits(total_bits: int) -> np.dtype:
	if total_bits <= 8:
		return np.uint8
	elif total_bits <= 16:
		return np.uint16
	else:
		return np.uint32


def _check_int(name: str, value) -> int:
	if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
		raise InvalidFormat(f"{name} must be an integer: got {value!r}")
	return int(value)


@dataclass(frozen=True)
class MinifloatFormat:
	"""Configurable minifloat layout packed into at most 32 bits.

	Layout is [sign | exponent | significand] from most-significant to least-significant bits.

	- sign_bits: 0 or 1
	- exponent_bits: 1 to 8
	- significand_bits: 1 to 23
	- exponent_bias: if None, uses (2^(exponent_bits-1) - 1)
	- default_rounding: rounding mode used when encode() is not given one

	The all-ones exponent is reserved for infinity (zero significand) and NaN.
	Instances are immutable and can be shared freely.
	"""

	sign_bits: int
	exponent_bits: int
	significand_bits: int
	exponent_bias: int | None = None
	default_rounding: RoundingMode = RoundingMode.NEAREST_EVEN

	def __post_init__(self):
		sign_bits = _check_int("sign_bits", self.sign_bits)
		exponent_bits = _check_int("exponent_bits", self.exponent_bits)
		significand_bits = _check_int("significand_bits", self.significand_bits)
		if sign_bits not in (0, 1):
			raise InvalidFormat(f"sign_bits must be 0 or 1: got {sign_bits}")
		if exponent_bits < 1:
			raise InvalidFormat(f"exponent_bits must be at least 1: got {exponent_bits}")
		if exponent_bits > 8:
			raise InvalidFormat(f"exponent_bits must be at most 8: got {exponent_bits}")
		if significand_bits < 1:
			raise InvalidFormat(f"significand_bits must be at least 1: got {significand_bits}")
		if significand_bits > 23:
			raise InvalidFormat(f"significand_bits must be at most 23: got {significand_bits}")
		try:
			default_rounding = RoundingMode(self.default_rounding)
		except ValueError:
			raise InvalidFormat(f"unknown default_rounding: got {self.default_rounding!r}") from None

		bias = self.exponent_bias
		if bias is None:
			bias = (1 << (exponent_bits - 1)) - 1
		bias = _check_int("exponent_bias", bias)
		exponent_min = -bias
		exponent_max = (1 << exponent_bits) - bias
		if exponent_min < _MIN_NATIVE_EXPONENT:
			raise InvalidFormat(f"exponent_bias too positive: got {bias} => {exponent_min}")
		if exponent_max > _MAX_NATIVE_EXPONENT:
			raise InvalidFormat(f"exponent_bias too negative: got {bias} => {exponent_max}")

		object.__setattr__(self, "sign_bits", sign_bits)
		object.__setattr__(self, "exponent_bits", exponent_bits)
		object.__setattr__(self, "significand_bits", significand_bits)
		object.__setattr__(self, "exponent_bias", bias)
		object.__setattr__(self, "default_rounding", default_rounding)
		total_bits = sign_bits + exponent_bits + significand_bits
		object.__setattr__(self, "total_bits", total_bits)
		object.__setattr__(self, "exponent_delta", bias + _MIN_NATIVE_EXPONENT)
		object.__setattr__(self, "max_exponent", (1 << exponent_bits) - 1)
		object.__setattr__(self, "storage_dtype", _smallest_uint_dtype_for_bits(total_bits))
		# Masks and shifts
		object.__setattr__(self, "_significand_mask", (1 << significand_bits) - 1)
		object.__setattr__(self, "_exponent_mask", (1 << exponent_bits) - 1)
		object.__setattr__(self, "_sign_shift", significand_bits + exponent_bits)
		object.__setattr__(self, "_exponent_shift", significand_bits)
		logger.debug("constructed minifloat format %s (%d bits)", self.label, total_bits)

	@classmethod
	def from_label(cls, label: str, default_rounding: RoundingMode = RoundingMode.NEAREST_EVEN) -> MinifloatFormat:
		"""Parse a label such as "1.4.3" or "1.4.3.-2" (sign.exponent.significand[.bias])."""
		terms = label.strip().split(".")
		if len(terms) not in (3, 4):
			raise InvalidFormat(f"label must have 3 or 4 dot-separated terms: got {label!r}")
		try:
			values = [int(term) for term in terms]
		except ValueError:
			raise InvalidFormat(f"label terms must be integers: got {label!r}") from None
		bias = values[3] if len(values) == 4 else None
		return cls(values[0], values[1], values[2], bias, default_rounding)

	@property
	def dtype(self) -> np.dtype:
		return self.storage_dtype

	@property
	def signed(self) -> bool:
		return self.sign_bits > 0

	@property
	def bits(self) -> int:
		return self.total_bits

	@property
	def cardinality(self) -> int:
		return 1 << self.total_bits

	@property
	def max_value(self) -> float:
		"""Largest finite value."""
		return self.decode(self.encode(float("inf")) - 1)

	@property
	def min_value(self) -> float:
		"""Smallest positive value."""
		return self.decode(1)

	@property
	def epsilon(self) -> float:
		"""Gap between 1 and the next larger value.

		If every finite value is below 1, this is the gap between the two largest
		finite values; if 1 itself rounds below 1, the gap above zero.
		"""
		one_bits = self.encode(1.0)
		one = self.decode(one_bits)
		if one > 1:
			# 1 rounded up to infinity
			one_bits -= 2
			one = self.decode(one_bits)
		elif one < 1:
			one_bits = 0
			one = 0.0
		return self.decode(one_bits + 1) - one

	@property
	def label(self) -> str:
		terms = [self.sign_bits, self.exponent_bits, self.significand_bits]
		if self.exponent_bias != (1 << (self.exponent_bits - 1)) - 1:
			terms.append(self.exponent_bias)
		return ".".join(str(term) for term in terms)

	def fields(self, packed: int) -> Fields:
		"""Split a bit pattern into its raw sign/exponent/significand fields."""
		packed = int(packed)
		sign = (packed >> self._sign_shift) & 0x1 if self.sign_bits else 0
		exponent = (packed >> self._exponent_shift) & self._exponent_mask
		significand = packed & self._significand_mask
		return Fields(sign, exponent, significand)

	def encode(self, value: float, rounding: RoundingMode | int | None = None) -> int:
		"""Encode one double into this format's bit pattern."""
		return codec.encode(value, self, rounding)

	def decode(self, packed: int) -> float:
		"""Decode one bit pattern of this format to a double (always exact)."""
		return codec.decode(packed, self)

	def round(self, value: float, rounding: RoundingMode | int | None = None) -> float:
		"""Round a double to the nearest value representable in this format."""
		return self.decode(self.encode(value, rounding))

	def storage_info(self) -> Dict[str, int | np.dtype]:
		return {
			"total_bits": self.total_bits,
			"dtype": self.storage_dtype,
			"sign_bits": self.sign_bits,
			"exponent_bits": self.exponent_bits,
			"significand_bits": self.significand_bits,
			"exponent_bias": self.exponent_bias,
		}


def make_format(
	sign_bits: int,
	exponent_bits: int,
	significand_bits: int,
	exponent_bias: int | None = None,
	default_rounding: RoundingMode | int = RoundingMode.NEAREST_EVEN,
) -> MinifloatFormat:
	return MinifloatFormat(sign_bits, exponent_bits, significand_bits, exponent_bias, default_rounding)


HALF = MinifloatFormat(1, 5, 10)
BFLOAT16 = MinifloatFormat(1, 8, 7)
SINGLE = MinifloatFormat(1, 8, 23)
E5M2 = MinifloatFormat(1, 5, 2)
