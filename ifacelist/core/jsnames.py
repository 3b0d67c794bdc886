# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JavaScript naming rules shared by the checker and the lister.

Property keys are strings at runtime, so numeric literal names are
canonicalized with `Number.prototype.toString` semantics. Ordering follows
`Array.prototype.sort`, which compares UTF-16 code units rather than code
points.
"""

from __future__ import annotations

import math


def utf16_sort_key(text: str) -> bytes:
	"""Sort key that orders strings by UTF-16 code units."""
	return text.encode("utf-16-be", "surrogatepass")


def js_sorted(names) -> list[str]:
	return sorted(names, key=utf16_sort_key)


def utf16_length(text: str) -> int:
	"""Length in UTF-16 code units; characters outside the BMP take two."""
	return len(text) + sum(1 for ch in text if ord(ch) > 0xFFFF)


def parse_numeric_literal(text: str) -> float:
	"""Value of a numeric literal token (`1_000`, `0x1F`, `0o17`, `0b101`, `1.5e3`)."""
	clean = text.replace("_", "")
	prefix = clean[:2].lower()
	if prefix == "0x":
		return float(int(clean[2:], 16))
	if prefix == "0o":
		return float(int(clean[2:], 8))
	if prefix == "0b":
		return float(int(clean[2:], 2))
	return float(clean)


def js_number_to_string(value: float) -> str:
	"""Render a number exactly like JavaScript's `String(value)`."""
	if math.isnan(value):
		return "NaN"
	if math.isinf(value):
		return "Infinity" if value > 0 else "-Infinity"
	if value == 0:
		return "0"
	sign = "-" if value < 0 else ""
	# repr() yields the shortest round-tripping digits, as does ECMAScript.
	mantissa, _, exp = repr(abs(float(value))).partition("e")
	int_part, _, frac_part = mantissa.partition(".")
	digits = int_part + frac_part
	point = len(int_part) + (int(exp) if exp else 0)
	stripped = digits.lstrip("0")
	point -= len(digits) - len(stripped)
	digits = stripped.rstrip("0")
	k = len(digits)
	if k <= point <= 21:
		return sign + digits + "0" * (point - k)
	if 0 < point <= 21:
		return sign + digits[:point] + "." + digits[point:]
	if -6 < point <= 0:
		return sign + "0." + "0" * (-point) + digits
	exponent = point - 1
	head = digits[0] + ("." + digits[1:] if k > 1 else "")
	return f"{sign}{head}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


__all__ = ["utf16_sort_key", "js_sorted", "utf16_length", "parse_numeric_literal", "js_number_to_string"]
