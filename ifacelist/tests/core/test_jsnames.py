# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from ifacelist.core.jsnames import js_number_to_string, js_sorted, parse_numeric_literal, utf16_length, utf16_sort_key


@pytest.mark.parametrize(
	"value, expected",
	[
		(0.0, "0"),
		(-0.0, "0"),
		(1.0, "1"),
		(-7.0, "-7"),
		(1.5, "1.5"),
		(0.5, "0.5"),
		(123.0, "123"),
		(1e20, "100000000000000000000"),
		(1e21, "1e+21"),
		(1.5e-7, "1.5e-7"),
		(0.000001, "0.000001"),
		(4294967295.0, "4294967295"),
		(float("inf"), "Infinity"),
		(float("nan"), "NaN"),
	],
)
def test_number_to_string_matches_javascript(value: float, expected: str) -> None:
	assert js_number_to_string(value) == expected


@pytest.mark.parametrize(
	"text, expected",
	[
		("42", 42.0),
		("1_000", 1000.0),
		("0x1F", 31.0),
		("0o17", 15.0),
		("0b101", 5.0),
		("1.5e3", 1500.0),
		("1.", 1.0),
	],
)
def test_parse_numeric_literal(text: str, expected: float) -> None:
	assert parse_numeric_literal(text) == expected


def test_sort_uses_utf16_code_units() -> None:
	# U+FFFF sorts after the surrogate pair of U+1F600 in UTF-16, before it by code point.
	names = ["\uffff", "\U0001F600", "b", "B", "a"]
	assert js_sorted(names) == ["B", "a", "b", "\U0001F600", "\uffff"]
	assert utf16_sort_key("\U0001F600") < utf16_sort_key("\uffff")


def test_sort_puts_punctuation_before_letters() -> None:
	assert js_sorted(["x", '""/@#$%^&', "f"]) == ['""/@#$%^&', "f", "x"]


def test_utf16_length_counts_surrogate_pairs() -> None:
	assert utf16_length("abc") == 3
	assert utf16_length("\uffff") == 1
	assert utf16_length("a\U0001F600b") == 4
