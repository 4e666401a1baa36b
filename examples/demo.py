import logging

from minifloat import MinifloatFormat, RoundingMode
from minifloat.ops import add, multiply


def main() -> None:
	logging.basicConfig(level=logging.DEBUG)
	mf8 = MinifloatFormat(1, 4, 3)

	print("Format:", mf8.label, mf8.storage_info())
	print("max:", mf8.max_value, "min:", mf8.min_value, "epsilon:", mf8.epsilon)

	values = [0.0, -0.0, 0.1, 0.25, 0.5, 1.0, -1.0, 10.0, 1000.0, float("inf"), float("-inf"), float("nan")]
	for value in values:
		packed = mf8.encode(value)
		print(f"{value!r:>8} -> {packed:#04x} {mf8.fields(packed)} -> {mf8.decode(packed)!r}")

	print("Rounding 247.99 / 256:")
	for mode in RoundingMode:
		print(f"  {mode.name:<12} {mf8.round(247.99, mode)!r:>6} {mf8.round(256, mode)!r:>6}")

	a = mf8.encode(1.5)
	b = mf8.encode(2.25)
	print("Sum decoded:", mf8.decode(add(mf8, a, b)))
	print("Prod decoded:", mf8.decode(multiply(mf8, a, b)))


if __name__ == "__main__":
	main()
