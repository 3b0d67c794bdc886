# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Checker types.

Only what property-key analysis needs is modelled: intrinsic types, string,
number and boolean literals, `symbol` and `unique symbol`, unions, and object
types (interfaces expose their flattened properties, object literals their
property types).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ifacelist.core.jsnames import js_number_to_string

from .symbols import Symbol


class TypeFlags(enum.IntFlag):
	NONE = 0
	ANY = 1 << 0
	UNKNOWN = 1 << 1
	STRING = 1 << 2
	NUMBER = 1 << 3
	BOOLEAN = 1 << 4
	STRING_LITERAL = 1 << 5
	NUMBER_LITERAL = 1 << 6
	BOOLEAN_LITERAL = 1 << 7
	ES_SYMBOL = 1 << 8
	UNIQUE_ES_SYMBOL = 1 << 9
	VOID = 1 << 10
	UNDEFINED = 1 << 11
	NULL = 1 << 12
	NEVER = 1 << 13
	OBJECT = 1 << 14
	UNION = 1 << 15

	LITERAL = STRING_LITERAL | NUMBER_LITERAL | BOOLEAN_LITERAL
	NULLABLE = UNDEFINED | NULL


@dataclass(eq=False)
class Type:
	flags: TypeFlags
	name: str = ""
	# Literal value: str for string literals, float for number literals, bool for booleans.
	value: object = None
	# Property key of a unique symbol (`__@name@id`).
	escaped_name: str = ""
	types: Tuple["Type", ...] = ()
	# Property types of an object literal type.
	property_types: Dict[str, "Type"] = field(default_factory=dict)

	def __str__(self) -> str:  # pragma: no cover - trivial repr
		if self.flags & TypeFlags.STRING_LITERAL:
			return repr(self.value)
		if self.flags & TypeFlags.NUMBER_LITERAL:
			return js_number_to_string(self.value)
		if self.flags & TypeFlags.BOOLEAN_LITERAL:
			return "true" if self.value else "false"
		if self.flags & TypeFlags.UNIQUE_ES_SYMBOL:
			return f"unique symbol ({self.escaped_name})"
		if self.flags & TypeFlags.UNION:
			return " | ".join(str(t) for t in self.types)
		return self.name


@dataclass(eq=False)
class InterfaceType(Type):
	"""Declared type of an interface: own members first, then inherited ones."""

	symbol: Optional[Symbol] = None
	properties: List[Symbol] = field(default_factory=list)

	def get_properties(self) -> List[Symbol]:
		return list(self.properties)

	def get_property(self, name: str) -> Optional[Symbol]:
		return next((prop for prop in self.properties if prop.name == name), None)


ANY = Type(TypeFlags.ANY, "any")
UNKNOWN = Type(TypeFlags.UNKNOWN, "unknown")
STRING = Type(TypeFlags.STRING, "string")
NUMBER = Type(TypeFlags.NUMBER, "number")
BOOLEAN = Type(TypeFlags.BOOLEAN, "boolean")
ES_SYMBOL = Type(TypeFlags.ES_SYMBOL, "symbol")
VOID = Type(TypeFlags.VOID, "void")
UNDEFINED = Type(TypeFlags.UNDEFINED, "undefined")
NULL = Type(TypeFlags.NULL, "null")
NEVER = Type(TypeFlags.NEVER, "never")
OBJECT = Type(TypeFlags.OBJECT, "object")

INTRINSICS: Dict[str, Type] = {
	t.name: t for t in (ANY, UNKNOWN, STRING, NUMBER, BOOLEAN, ES_SYMBOL, VOID, UNDEFINED, NULL, NEVER, OBJECT)
}

_LITERAL_CACHE: Dict[Tuple[TypeFlags, object], Type] = {}


def literal_type(value) -> Type:
	"""Interned literal type for a str, float or bool value."""
	if isinstance(value, bool):
		flags = TypeFlags.BOOLEAN_LITERAL
	elif isinstance(value, str):
		flags = TypeFlags.STRING_LITERAL
	else:
		flags = TypeFlags.NUMBER_LITERAL
		value = float(value)
	key = (flags, value)
	cached = _LITERAL_CACHE.get(key)
	if cached is None:
		cached = Type(flags, value=value)
		_LITERAL_CACHE[key] = cached
	return cached


def union_type(types) -> Type:
	flat: List[Type] = []
	for t in types:
		for part in t.types if t.flags & TypeFlags.UNION else (t,):
			if part.flags & TypeFlags.NEVER or any(part is seen for seen in flat):
				continue
			flat.append(part)
	if not flat:
		return NEVER
	if len(flat) == 1:
		return flat[0]
	if any(t.flags & TypeFlags.ANY for t in flat):
		return ANY
	return Type(TypeFlags.UNION, types=tuple(flat))


def widen_literal(t: Type) -> Type:
	"""Base primitive of a literal type, as inferred for mutable bindings."""
	if t.flags & TypeFlags.STRING_LITERAL:
		return STRING
	if t.flags & TypeFlags.NUMBER_LITERAL:
		return NUMBER
	if t.flags & TypeFlags.BOOLEAN_LITERAL:
		return BOOLEAN
	if t.flags & TypeFlags.UNIQUE_ES_SYMBOL:
		return ES_SYMBOL
	if t.flags & TypeFlags.UNION:
		return union_type(widen_literal(part) for part in t.types)
	return t


def is_type_assignable_to(source: Type, target: Type) -> bool:
	"""
	Assignability without strict null checks: `undefined` and `null` go
	anywhere, `any` goes anywhere but `never`, `never` goes anywhere.
	"""
	if source is target:
		return True
	if source.flags & TypeFlags.NEVER:
		return True
	if target.flags & (TypeFlags.ANY | TypeFlags.UNKNOWN):
		return True
	if target.flags & TypeFlags.NEVER:
		return False
	if source.flags & (TypeFlags.ANY | TypeFlags.NULLABLE):
		return True
	if source.flags & TypeFlags.UNION:
		return all(is_type_assignable_to(part, target) for part in source.types)
	if target.flags & TypeFlags.UNION:
		return any(is_type_assignable_to(source, part) for part in target.types)
	if source.flags & TypeFlags.LITERAL and target.flags & TypeFlags.LITERAL:
		return source.flags == target.flags and source.value == target.value
	if source.flags & TypeFlags.STRING_LITERAL:
		return bool(target.flags & TypeFlags.STRING)
	if source.flags & TypeFlags.NUMBER_LITERAL:
		return bool(target.flags & TypeFlags.NUMBER)
	if source.flags & TypeFlags.BOOLEAN_LITERAL:
		return bool(target.flags & TypeFlags.BOOLEAN)
	if source.flags & TypeFlags.UNIQUE_ES_SYMBOL:
		return bool(target.flags & TypeFlags.ES_SYMBOL)
	if target.flags & TypeFlags.OBJECT:
		return bool(source.flags & TypeFlags.OBJECT)
	return source.flags == target.flags and not source.flags & TypeFlags.UNIQUE_ES_SYMBOL


__all__ = [
	"TypeFlags",
	"Type",
	"InterfaceType",
	"ANY",
	"UNKNOWN",
	"STRING",
	"NUMBER",
	"BOOLEAN",
	"ES_SYMBOL",
	"VOID",
	"UNDEFINED",
	"NULL",
	"NEVER",
	"OBJECT",
	"INTRINSICS",
	"literal_type",
	"union_type",
	"widen_literal",
	"is_type_assignable_to",
]
