from .codec import decode, encode
from .format import BFLOAT16, E5M2, HALF, SINGLE, Fields, InvalidFormat, MinifloatFormat, make_format
from .ops import add, subtract, multiply, divide
from .rounding import RoundingMode, rounding_function

__all__ = [
	"MinifloatFormat",
	"InvalidFormat",
	"Fields",
	"RoundingMode",
	"make_format",
	"rounding_function",
	"encode",
	"decode",
	"HALF",
	"BFLOAT16",
	"SINGLE",
	"E5M2",
	"add",
	"subtract",
	"multiply",
	"divide",
]
