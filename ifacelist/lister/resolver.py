# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Property resolver: the property names an interface guarantees at runtime.

The names come from the checker's flattened interface type, so inherited
members are included. A property is dropped when it is optional. The whole
interface is rejected when one of its properties is keyed by a symbol or has
an array-index name, since neither can be matched against string-keyed
properties of a heap object.
"""

from __future__ import annotations

import re
from typing import Optional

from ifacelist.checker import Symbol, SymbolFlags, TypeChecker
from ifacelist.parser import ast

from .records import InterfaceRecord, Location

MAX_ARRAY_INDEX = 2**32 - 2

_CANONICAL_INDEX = re.compile(r"0|[1-9][0-9]*")


def is_array_index_name(name: str) -> bool:
	"""True for the canonical decimal form of an integer in [0, 2**32 - 2]."""
	return _CANONICAL_INDEX.fullmatch(name) is not None and int(name) <= MAX_ARRAY_INDEX


def is_symbol_property(checker: TypeChecker, prop: Symbol) -> bool:
	"""
	Whether the property key is a symbol rather than a string.

	Only the first declaration is inspected, and only a computed name
	(`[expr]`) can be symbol-keyed: the key expression's type must be
	assignable to `symbol`, which includes `any`.
	"""
	if not prop.declarations:
		return False
	name = getattr(prop.declarations[0], "name", None)
	if not isinstance(name, ast.ComputedName):
		return False
	key_type = checker.get_type_at_location(name.expr)
	return checker.is_type_assignable_to(key_type, checker.get_es_symbol_type())


def resolve_interface(
	checker: TypeChecker,
	symbol: Symbol,
	declaration: ast.InterfaceDecl,
	file_name: Optional[str] = None,
) -> Optional[InterfaceRecord]:
	"""
	Record for `declaration`, or None when the interface must be left out entirely.

	`file_name` defaults to the file the binder saw the declaration in. The
	position is counted in UTF-16 code units, like TypeScript positions.
	"""
	bound_file = checker.binder.node_files.get(id(declaration), "")
	if file_name is None:
		file_name = bound_file
	interface_type = checker.get_type_at_location(declaration)
	properties = []
	for prop in interface_type.get_properties():
		if prop.flags & SymbolFlags.OPTIONAL:
			continue
		if is_symbol_property(checker, prop):
			return None
		if is_array_index_name(prop.name):
			return None
		properties.append(prop.name)
	return InterfaceRecord(
		name=symbol.get_name(),
		properties=tuple(properties),
		location=Location(file_name=file_name, position=_position_of(checker, declaration, bound_file)),
	)


def _position_of(checker: TypeChecker, declaration: ast.InterfaceDecl, file_name: str) -> int:
	"""Full start of the declaration in UTF-16 code units."""
	source = checker.binder.source_files.get(file_name)
	if source is None:
		return declaration.loc.full_start
	return source.utf16_offset(declaration.loc.full_start)


__all__ = ["MAX_ARRAY_INDEX", "is_array_index_name", "is_symbol_property", "resolve_interface"]
