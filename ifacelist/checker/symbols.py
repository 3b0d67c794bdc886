# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Symbols and scopes produced by the binder.

A `Symbol` groups every declaration that shares a name in one declaration
space; `SymbolFlags` records what kinds of declarations contributed to it.
The exclusion masks decide which kinds may merge (two interfaces, an
interface and a namespace, overloaded functions) and which collide.
"""

from __future__ import annotations

import enum
from typing import Dict, List, Optional, Tuple


class SymbolFlags(enum.IntFlag):
	NONE = 0
	PROPERTY = 1 << 0
	OPTIONAL = 1 << 1
	METHOD = 1 << 2
	GET_ACCESSOR = 1 << 3
	SET_ACCESSOR = 1 << 4
	READONLY = 1 << 5
	INTERFACE = 1 << 6
	TYPE_ALIAS = 1 << 7
	BLOCK_SCOPED_VARIABLE = 1 << 8
	FUNCTION_SCOPED_VARIABLE = 1 << 9
	FUNCTION = 1 << 10
	NAMESPACE = 1 << 11
	ENUM = 1 << 12
	ENUM_MEMBER = 1 << 13
	ALIAS = 1 << 14
	MODULE = 1 << 15

	VARIABLE = BLOCK_SCOPED_VARIABLE | FUNCTION_SCOPED_VARIABLE
	VALUE = VARIABLE | FUNCTION | ENUM | ENUM_MEMBER | PROPERTY | METHOD | GET_ACCESSOR | SET_ACCESSOR
	TYPE = INTERFACE | TYPE_ALIAS | ENUM
	CONTAINER = NAMESPACE | ENUM | MODULE


# What a new declaration of each kind may not merge with.
EXCLUDES: Dict[SymbolFlags, SymbolFlags] = {
	SymbolFlags.INTERFACE: SymbolFlags.TYPE & ~SymbolFlags.INTERFACE,
	SymbolFlags.TYPE_ALIAS: SymbolFlags.TYPE,
	SymbolFlags.BLOCK_SCOPED_VARIABLE: SymbolFlags.VALUE | SymbolFlags.NAMESPACE,
	SymbolFlags.FUNCTION_SCOPED_VARIABLE: (SymbolFlags.VALUE & ~SymbolFlags.FUNCTION_SCOPED_VARIABLE) | SymbolFlags.NAMESPACE,
	SymbolFlags.FUNCTION: SymbolFlags.VALUE & ~SymbolFlags.FUNCTION,
	SymbolFlags.NAMESPACE: SymbolFlags.VARIABLE,
	SymbolFlags.ENUM: (SymbolFlags.VALUE | SymbolFlags.TYPE) & ~SymbolFlags.ENUM,
	SymbolFlags.ENUM_MEMBER: SymbolFlags.VALUE,
	SymbolFlags.ALIAS: SymbolFlags.ALIAS,
}


class Symbol:
	"""A named entity. `exports` holds the members of namespaces, enums and modules."""

	def __init__(self, name: str, flags: SymbolFlags, parent: Optional["Symbol"] = None) -> None:
		self.name = name
		self.flags = flags
		self.parent = parent
		self.declarations: List[object] = []
		self.exports: Dict[str, Symbol] = {}
		# `export * from "x"` targets of a module symbol, as (file name, specifier).
		self.star_exports: List[Tuple[str, str]] = []
		# Import target of an ALIAS symbol: (importing file, specifier, export name).
		# An export name of None designates the whole module (`import * as ns`).
		self.alias_target: Optional[Tuple[str, str, Optional[str]]] = None

	def get_name(self) -> str:
		return self.name

	def __repr__(self) -> str:
		return f"Symbol({self.name!r}, {self.flags!r})"


class Scope:
	"""
	A lexical scope. Non-exported declarations live in `symbols`; a scope whose
	`container` is a namespace or module symbol also sees the container's
	exports, which are shared by every block of a merged namespace.
	"""

	def __init__(
		self,
		kind: str,
		parent: Optional["Scope"] = None,
		container: Optional[Symbol] = None,
		ambient: bool = False,
	) -> None:
		self.kind = kind
		self.parent = parent
		self.container = container
		# Declarations in ambient namespaces and modules are exported implicitly.
		self.ambient = ambient
		self.symbols: Dict[str, Symbol] = {}

	@property
	def is_function_scope(self) -> bool:
		return self.kind in ("global", "module", "function", "namespace")

	def lookup(self, name: str, meaning: SymbolFlags) -> Optional[Symbol]:
		"""Innermost symbol named `name` with any of the `meaning` flags (aliases always match)."""
		wanted = meaning | SymbolFlags.ALIAS
		scope: Optional[Scope] = self
		while scope is not None:
			symbol = scope.symbols.get(name)
			if symbol is not None and symbol.flags & wanted:
				return symbol
			if scope.container is not None:
				symbol = scope.container.exports.get(name)
				if symbol is not None and symbol.flags & wanted:
					return symbol
			scope = scope.parent
		return None

	def __repr__(self) -> str:
		return f"Scope({self.kind!r}, {sorted(self.symbols)!r})"


__all__ = ["SymbolFlags", "EXCLUDES", "Symbol", "Scope"]
