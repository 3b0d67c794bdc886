# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type checker queries over a bound program.

The checker answers what the interface lister asks: the symbol of a
declaration, the flattened properties of an interface, and the type of a
property-key expression. Interface members are bound lazily here rather than
in the binder because a computed name such as `[key]` needs the type of `key`
to become a property name (its literal value, or `__@name@id` for a unique
symbol).

There is no default library. The global `Symbol` is modelled as a built-in
exposing the well-known symbols (`Symbol.iterator`, ...) as unique symbols.
"""

from __future__ import annotations

import posixpath
from typing import Dict, List, Optional, Set, Tuple

from ifacelist.core.diagnostics import Diagnostic
from ifacelist.core.jsnames import js_number_to_string, parse_numeric_literal
from ifacelist.core.span import Span
from ifacelist.parser import ast

from .binder import Binder, normalize_file_name
from .symbols import Scope, Symbol, SymbolFlags
from .types import (
	ANY,
	ES_SYMBOL,
	INTRINSICS,
	NULL,
	NUMBER,
	OBJECT,
	STRING,
	UNDEFINED,
	InterfaceType,
	Type,
	TypeFlags,
	is_type_assignable_to,
	literal_type,
	union_type,
	widen_literal,
)

COMPUTED_PROPERTY_NAME = "__computed"

WELL_KNOWN_SYMBOLS = (
	"asyncDispose",
	"asyncIterator",
	"dispose",
	"hasInstance",
	"isConcatSpreadable",
	"iterator",
	"match",
	"matchAll",
	"replace",
	"search",
	"species",
	"split",
	"toPrimitive",
	"toStringTag",
	"unscopables",
)

_MODULE_SUFFIXES = ("", ".ts", ".tsx", ".d.ts", "/index.ts", "/index.tsx", "/index.d.ts")


class TypeChecker:
	def __init__(self, binder: Binder) -> None:
		self.binder = binder
		self.diagnostics: List[Diagnostic] = []
		self._symbol_ids: Dict[int, int] = {}
		self._declared_types: Dict[int, InterfaceType] = {}
		self._alias_properties: Dict[int, Optional[List[Symbol]]] = {}
		self._symbol_types: Dict[int, Type] = {}
		self._unique_symbols: Dict[int, Type] = {}
		self._enum_values: Dict[int, Dict[str, object]] = {}
		self._expression_scopes: Dict[int, Tuple[Scope, str]] = {}
		self._symbol_constructor: Optional[Type] = None
		# Symbols whose structure is being computed, innermost last.
		self._resolving: List[Symbol] = []
		self._resolving_values: Set[int] = set()
		self._reported: Set[Tuple[str, int, int, str]] = set()
		self._file = ""

	# --- Public queries ----------------------------------------------------

	def get_symbol_at_location(self, node) -> Optional[Symbol]:
		"""Bound symbol of a declaration, or the value a name expression refers to."""
		if isinstance(node, ast.Name):
			scope, _ = self._expression_scopes.get(id(node), (self.binder.global_scope, ""))
			return self._resolve_alias(scope.lookup(node.ident, SymbolFlags.VALUE | SymbolFlags.CONTAINER))
		return self.binder.symbol_of(node)

	def get_type_at_location(self, node) -> Type:
		if isinstance(node, ast.InterfaceDecl):
			symbol = self.binder.symbol_of(node)
			if symbol is None:
				return ANY
			return self.get_declared_type_of_symbol(symbol)
		if isinstance(node, ast.Expr):
			scope, file_name = self._expression_scopes.get(id(node), (self.binder.global_scope, self._file))
			previous_file = self._enter_file(file_name)
			try:
				return self.get_type_of_expression(node, scope)
			finally:
				self._file = previous_file
		symbol = self.binder.symbol_of(node)
		if symbol is not None:
			return self.get_type_of_symbol(symbol)
		return ANY

	def get_es_symbol_type(self) -> Type:
		return ES_SYMBOL

	def is_type_assignable_to(self, source: Type, target: Type) -> bool:
		return is_type_assignable_to(source, target)

	def get_declared_type_of_symbol(self, symbol: Symbol) -> InterfaceType:
		"""Flattened interface type: own members in declaration order, then each base's."""
		cached = self._declared_types.get(id(symbol))
		if cached is not None:
			return cached
		iface = InterfaceType(TypeFlags.OBJECT, name=symbol.name, symbol=symbol)
		declarations = [decl for decl in symbol.declarations if isinstance(decl, ast.InterfaceDecl)]
		table: Dict[str, Symbol] = {}
		self._resolving.append(symbol)
		try:
			for decl in declarations:
				previous_file = self._enter_file(self.binder.node_files.get(id(decl), self._file))
				try:
					self._add_members(table, decl.members, self.binder.scope_of(decl), symbol)
				finally:
					self._file = previous_file
			properties = list(table.values())
			for decl in declarations:
				previous_file = self._enter_file(self.binder.node_files.get(id(decl), self._file))
				try:
					for base in decl.heritage:
						for prop in self._properties_of_base(base, self.binder.scope_of(decl)):
							if prop.name not in table:
								table[prop.name] = prop
								properties.append(prop)
				finally:
					self._file = previous_file
		finally:
			self._resolving.pop()
		iface.properties = properties
		self._declared_types[id(symbol)] = iface
		return iface

	def get_type_of_symbol(self, symbol: Optional[Symbol]) -> Type:
		symbol = self._resolve_alias(symbol)
		if symbol is None:
			return ANY
		cached = self._symbol_types.get(id(symbol))
		if cached is not None:
			return cached
		if id(symbol) in self._resolving_values:
			return ANY
		self._resolving_values.add(id(symbol))
		declaration = symbol.declarations[0] if symbol.declarations else None
		previous_file = self._enter_file(self.binder.node_files.get(id(declaration), self._file))
		try:
			result = self._compute_symbol_type(symbol)
		finally:
			self._file = previous_file
			self._resolving_values.discard(id(symbol))
		self._symbol_types[id(symbol)] = result
		return result

	def get_type_of_expression(self, expr: ast.Expr, scope: Optional[Scope] = None) -> Type:
		if scope is None:
			scope, _ = self._expression_scopes.get(id(expr), (self.binder.global_scope, ""))
		if isinstance(expr, ast.StringLiteral):
			return literal_type(expr.value)
		if isinstance(expr, ast.NumericLiteral):
			return literal_type(parse_numeric_literal(expr.text))
		if isinstance(expr, ast.Unary):
			operand = self.get_type_of_expression(expr.operand, scope)
			if operand.flags & TypeFlags.NUMBER_LITERAL:
				return literal_type(-operand.value if expr.op == "-" else operand.value)
			return NUMBER
		if isinstance(expr, ast.Name):
			return self._type_of_name(expr, scope)
		if isinstance(expr, ast.Attr):
			return self._type_of_attr(expr, scope)
		if isinstance(expr, ast.Index):
			key = self.get_type_of_expression(expr.index, scope)
			if key.flags & (TypeFlags.STRING_LITERAL | TypeFlags.NUMBER_LITERAL):
				name = key.value if isinstance(key.value, str) else js_number_to_string(key.value)
				return self._property_of(self.get_type_of_expression(expr.value, scope), name, expr)
			return ANY
		if isinstance(expr, ast.Call):
			return self._type_of_call(expr, scope)
		if isinstance(expr, (ast.New, ast.ArrayLiteral)):
			return OBJECT
		if isinstance(expr, ast.AsExpr):
			if expr.type_expr is None:
				return self._const_type(expr.value, scope)
			return self._type_from_node(expr.type_expr, scope)
		if isinstance(expr, ast.ObjectLiteral):
			return self._object_literal_type(expr, scope, const=False)
		return ANY

	# --- Members -----------------------------------------------------------

	def _add_members(self, table: Dict[str, Symbol], members, scope: Scope, parent: Optional[Symbol]) -> None:
		for member in members:
			if isinstance(member, ast.PropertySignature):
				flags = SymbolFlags.PROPERTY
			elif isinstance(member, ast.MethodSignature):
				flags = SymbolFlags.METHOD
			elif isinstance(member, ast.GetAccessor):
				flags = SymbolFlags.GET_ACCESSOR
			elif isinstance(member, ast.SetAccessor):
				flags = SymbolFlags.SET_ACCESSOR
			else:
				# Call, construct and index signatures are not properties.
				continue
			if getattr(member, "optional", False):
				flags |= SymbolFlags.OPTIONAL
			if getattr(member, "readonly", False):
				flags |= SymbolFlags.READONLY
			name = self._property_name(member.name, scope)
			symbol = table.get(name)
			if symbol is None:
				symbol = Symbol(name, flags, parent=parent)
				table[name] = symbol
			else:
				symbol.flags |= flags
			symbol.declarations.append(member)

	def _property_name(self, name: ast.PropertyName, scope: Scope) -> str:
		if isinstance(name, ast.IdentifierName):
			return name.text
		if isinstance(name, ast.StringName):
			return name.value
		if isinstance(name, ast.NumericName):
			return js_number_to_string(parse_numeric_literal(name.text))
		expr = name.expr
		self._expression_scopes[id(expr)] = (scope, self._file)
		if isinstance(expr, ast.StringLiteral):
			return expr.value
		if isinstance(expr, ast.NumericLiteral):
			return js_number_to_string(parse_numeric_literal(expr.text))
		key_type = self.get_type_of_expression(expr, scope)
		if key_type.flags & TypeFlags.STRING_LITERAL:
			return key_type.value
		if key_type.flags & TypeFlags.NUMBER_LITERAL:
			return js_number_to_string(key_type.value)
		if key_type.flags & TypeFlags.UNIQUE_ES_SYMBOL:
			return key_type.escaped_name
		self._warn(
			"A computed property name in an interface must refer to an expression whose type is a literal type or a 'unique symbol' type.",
			name.loc,
			"TS1169",
		)
		return COMPUTED_PROPERTY_NAME

	def _properties_of_base(self, ref: ast.TypeRef, scope: Scope) -> List[Symbol]:
		target = self._resolve_type_name(ref.name, scope)
		if target is None:
			self._warn(f"Cannot find name '{ref.dotted}'.", ref.loc, "TS2304")
			return []
		if target in self._resolving:
			self._warn(f"Type '{target.name}' recursively references itself as a base type.", ref.loc, "TS2310")
			return []
		properties = self._properties_of_type_symbol(target)
		if properties is None:
			self._warn(
				"An interface can only extend an object type or intersection of object types with statically known members.",
				ref.loc,
				"TS2312",
			)
			return []
		return properties

	def _properties_of_type_symbol(self, symbol: Symbol) -> Optional[List[Symbol]]:
		if symbol.flags & SymbolFlags.INTERFACE:
			return self.get_declared_type_of_symbol(symbol).get_properties()
		if symbol.flags & SymbolFlags.TYPE_ALIAS:
			if id(symbol) in self._alias_properties:
				return self._alias_properties[id(symbol)]
			decl = next(d for d in symbol.declarations if isinstance(d, ast.TypeAliasDecl))
			self._resolving.append(symbol)
			previous_file = self._enter_file(self.binder.node_files.get(id(decl), self._file))
			try:
				properties = self._properties_of_type_node(decl.type_expr, self.binder.scope_of(decl), symbol)
			finally:
				self._file = previous_file
				self._resolving.pop()
			self._alias_properties[id(symbol)] = properties
			return properties
		return None

	def _properties_of_type_node(self, node: ast.TypeNode, scope: Scope, owner: Symbol) -> Optional[List[Symbol]]:
		"""Properties of an object-like type expression, or None when it is not one."""
		if isinstance(node, ast.ObjectType):
			table: Dict[str, Symbol] = {}
			self._add_members(table, node.members, scope, owner)
			return list(table.values())
		if isinstance(node, ast.IntersectionType):
			parts = [self._properties_of_type_node(part, scope, owner) for part in node.types]
			if any(part is None for part in parts):
				return None
			return _intersect_properties(parts, owner)
		if isinstance(node, ast.TypeRef):
			target = self._resolve_type_name(node.name, scope)
			if target is None and node.dotted in INTRINSICS:
				return None
			if target is None:
				self._warn(f"Cannot find name '{node.dotted}'.", node.loc, "TS2304")
				return []
			if target in self._resolving:
				self._warn(f"Type '{target.name}' recursively references itself as a base type.", node.loc, "TS2310")
				return []
			return self._properties_of_type_symbol(target)
		if isinstance(node, ast.MappedType):
			keys = self._literal_keys(self._type_from_node(node.constraint, scope))
			if keys is None:
				return None
			properties = []
			for key in keys:
				prop = Symbol(key, SymbolFlags.PROPERTY, parent=owner)
				prop.declarations.append(node)
				properties.append(prop)
			return properties
		return None

	def _literal_keys(self, key_type: Type) -> Optional[List[str]]:
		parts = key_type.types if key_type.flags & TypeFlags.UNION else (key_type,)
		keys: List[str] = []
		for part in parts:
			if part.flags & TypeFlags.STRING_LITERAL:
				keys.append(part.value)
			elif part.flags & TypeFlags.NUMBER_LITERAL:
				keys.append(js_number_to_string(part.value))
			elif part.flags & TypeFlags.UNIQUE_ES_SYMBOL:
				keys.append(part.escaped_name)
			else:
				return None
		return keys

	# --- Name resolution ---------------------------------------------------

	def _resolve_type_name(self, name: Tuple[str, ...], scope: Scope) -> Optional[Symbol]:
		if len(name) == 1:
			symbol = self._resolve_alias(scope.lookup(name[0], SymbolFlags.TYPE))
			if symbol is not None and symbol.flags & SymbolFlags.TYPE:
				return symbol
			return None
		container = self._resolve_alias(scope.lookup(name[0], SymbolFlags.CONTAINER))
		for part in name[1:]:
			if container is None or not container.flags & SymbolFlags.CONTAINER:
				return None
			container = self._resolve_alias(self._export_of(container, part))
		if container is not None and container.flags & (SymbolFlags.TYPE | SymbolFlags.ENUM_MEMBER):
			return container
		return None

	def _resolve_entity(self, expr: ast.Expr, scope: Scope) -> Optional[Symbol]:
		"""Symbol named by an identifier or a dotted path through namespaces and enums."""
		if isinstance(expr, ast.Name):
			return self._resolve_alias(scope.lookup(expr.ident, SymbolFlags.VALUE | SymbolFlags.CONTAINER))
		if isinstance(expr, ast.Attr):
			container = self._resolve_entity(expr.value, scope)
			if container is not None and container.flags & SymbolFlags.CONTAINER:
				return self._resolve_alias(self._export_of(container, expr.attr))
		return None

	def _export_of(self, container: Symbol, name: str, seen: Optional[Set[int]] = None) -> Optional[Symbol]:
		symbol = container.exports.get(name)
		if symbol is not None:
			return symbol
		seen = seen if seen is not None else set()
		seen.add(id(container))
		for from_file, specifier in container.star_exports:
			target = self._resolve_module(from_file, specifier)
			if target is not None and id(target) not in seen:
				symbol = self._export_of(target, name, seen)
				if symbol is not None:
					return symbol
		return None

	def _resolve_alias(self, symbol: Optional[Symbol]) -> Optional[Symbol]:
		seen: Set[int] = set()
		while symbol is not None and symbol.flags & SymbolFlags.ALIAS and symbol.alias_target is not None:
			if id(symbol) in seen:
				return None
			seen.add(id(symbol))
			from_file, specifier, export_name = symbol.alias_target
			module = self._resolve_module(from_file, specifier)
			if module is None:
				decl = symbol.declarations[0] if symbol.declarations else None
				loc = getattr(decl, "loc", None)
				self._warn(f"Cannot find module '{specifier}'.", loc, "TS2307", file_name=from_file)
				return None
			symbol = module if export_name is None else self._export_of(module, export_name)
		return symbol

	def _resolve_module(self, from_file: str, specifier: str) -> Optional[Symbol]:
		if specifier.startswith(("./", "../", "/")):
			base = normalize_file_name(posixpath.join(posixpath.dirname(from_file), specifier))
			candidates = [base + suffix for suffix in _MODULE_SUFFIXES]
			if base.endswith(".js"):
				candidates.append(base[:-3] + ".ts")
			for candidate in candidates:
				symbol = self.binder.file_symbols.get(candidate)
				if symbol is not None:
					return symbol
			return None
		return self.binder.ambient_modules.get(specifier)

	# --- Expression and declaration types ----------------------------------

	def _type_of_name(self, expr: ast.Name, scope: Scope) -> Type:
		ident = expr.ident
		if ident == "undefined":
			return UNDEFINED
		if ident == "null":
			return NULL
		if ident in ("true", "false"):
			return literal_type(ident == "true")
		if ident in ("NaN", "Infinity"):
			return NUMBER
		symbol = self._resolve_alias(scope.lookup(ident, SymbolFlags.VALUE | SymbolFlags.CONTAINER))
		if symbol is None:
			if ident == "Symbol":
				return self._get_symbol_constructor()
			self._warn(f"Cannot find name '{ident}'.", expr.loc, "TS2304")
			return ANY
		return self.get_type_of_symbol(symbol)

	def _type_of_attr(self, expr: ast.Attr, scope: Scope) -> Type:
		container = self._resolve_entity(expr.value, scope)
		if container is not None and container.flags & SymbolFlags.CONTAINER:
			member = self._resolve_alias(self._export_of(container, expr.attr))
			if member is None:
				self._warn(f"Property '{expr.attr}' does not exist on '{container.name}'.", expr.loc, "TS2339")
				return ANY
			return self.get_type_of_symbol(member)
		return self._property_of(self.get_type_of_expression(expr.value, scope), expr.attr, expr)

	def _property_of(self, object_type: Type, name: str, expr: ast.Expr) -> Type:
		if object_type.flags & TypeFlags.ANY:
			return ANY
		prop = object_type.property_types.get(name)
		if prop is None:
			self._warn(f"Property '{name}' does not exist on type '{object_type}'.", expr.loc, "TS2339")
			return ANY
		return prop

	def _type_of_call(self, expr: ast.Call, scope: Scope) -> Type:
		if self._is_symbol_call(expr, scope):
			return ES_SYMBOL
		callee = self._resolve_entity(expr.func, scope)
		if callee is not None and callee.flags & SymbolFlags.FUNCTION:
			for decl in callee.declarations:
				if isinstance(decl, ast.FunctionDecl) and decl.return_type is not None:
					return self._type_from_node(decl.return_type, self.binder.scope_of(decl) or scope)
		return ANY

	def _is_symbol_call(self, expr: ast.Expr, scope: Scope) -> bool:
		"""`Symbol()`, `Symbol("desc")` or `Symbol.for(key)` on the built-in `Symbol`."""
		if not isinstance(expr, ast.Call):
			return False
		func = expr.func
		if isinstance(func, ast.Attr) and func.attr == "for":
			func = func.value
		if not isinstance(func, ast.Name) or func.ident != "Symbol":
			return False
		return scope.lookup("Symbol", SymbolFlags.VALUE | SymbolFlags.CONTAINER) is None

	def _compute_symbol_type(self, symbol: Symbol) -> Type:
		if symbol.flags & SymbolFlags.ENUM_MEMBER:
			value = self._enum_member_values(symbol.parent).get(symbol.name)
			return NUMBER if value is None else literal_type(value)
		if symbol.flags & SymbolFlags.VARIABLE:
			decl = symbol.declarations[0]
			if isinstance(decl, ast.Param):
				if decl.type_expr is None:
					return ANY
				return self._type_from_node(decl.type_expr, self.binder.scope_of(decl))
			return self._type_of_declarator(symbol, decl)
		return OBJECT

	def _type_of_declarator(self, symbol: Symbol, decl: ast.VariableDeclarator) -> Type:
		scope = self.binder.scope_of(decl)
		is_const = self.binder.declarator_kinds.get(id(decl)) == "const"
		if decl.type_expr is not None:
			return self._type_from_node(decl.type_expr, scope, owner=symbol if is_const else None)
		if decl.init is None:
			return ANY
		if is_const and self._is_symbol_call(decl.init, scope):
			return self._unique_symbol_type(symbol)
		init_type = self.get_type_of_expression(decl.init, scope)
		return init_type if is_const else widen_literal(init_type)

	def _const_type(self, expr: ast.Expr, scope: Scope) -> Type:
		if isinstance(expr, ast.ObjectLiteral):
			return self._object_literal_type(expr, scope, const=True)
		return self.get_type_of_expression(expr, scope)

	def _object_literal_type(self, expr: ast.ObjectLiteral, scope: Scope, const: bool) -> Type:
		properties: Dict[str, Type] = {}
		for entry in expr.entries:
			if entry.spread:
				properties.update(self.get_type_of_expression(entry.value, scope).property_types)
				continue
			key = entry.key
			if isinstance(key, ast.ComputedName):
				key_type = self.get_type_of_expression(key.expr, scope)
				keys = self._literal_keys(key_type)
				if keys is None or len(keys) != 1:
					continue
				name = keys[0]
			else:
				name = self._property_name(key, scope)
			value_type = self._const_type(entry.value, scope) if const else widen_literal(self.get_type_of_expression(entry.value, scope))
			properties[name] = value_type
		return Type(TypeFlags.OBJECT, name="object", property_types=properties)

	def _type_from_node(self, node: ast.TypeNode, scope: Scope, owner: Optional[Symbol] = None) -> Type:
		if isinstance(node, ast.TypeRef):
			if len(node.name) == 1 and not node.args:
				simple = node.name[0]
				if simple in INTRINSICS and scope.lookup(simple, SymbolFlags.TYPE) is None:
					return INTRINSICS[simple]
				if simple in ("true", "false"):
					return literal_type(simple == "true")
			target = self._resolve_type_name(node.name, scope)
			if target is None:
				return ANY
			return self._type_of_type_symbol(target)
		if isinstance(node, ast.LiteralType):
			return self.get_type_of_expression(node.literal, scope)
		if isinstance(node, ast.UnionType):
			return union_type(self._type_from_node(part, scope) for part in node.types)
		if isinstance(node, ast.TypeOperator):
			if node.operator == "unique":
				return self._unique_symbol_type(owner) if owner is not None else ES_SYMBOL
			if node.operator == "keyof":
				return self._keyof_type(node.operand, scope)
			if node.operator == "readonly":
				return self._type_from_node(node.operand, scope)
			return ANY
		if isinstance(node, ast.TypeQuery):
			entity: ast.Expr = ast.Name(loc=node.loc, ident=node.name[0])
			for part in node.name[1:]:
				entity = ast.Attr(loc=node.loc, value=entity, attr=part)
			return self.get_type_of_expression(entity, scope)
		if isinstance(node, (ast.IndexedAccessType, ast.ConditionalType)):
			return ANY
		return OBJECT

	def _type_of_type_symbol(self, symbol: Symbol) -> Type:
		if symbol.flags & SymbolFlags.ENUM_MEMBER:
			return self.get_type_of_symbol(symbol)
		if symbol.flags & SymbolFlags.ENUM:
			values = self._enum_member_values(symbol)
			return union_type(NUMBER if value is None else literal_type(value) for value in values.values())
		if symbol.flags & SymbolFlags.TYPE_ALIAS:
			if id(symbol) in self._resolving_values:
				return ANY
			decl = next(d for d in symbol.declarations if isinstance(d, ast.TypeAliasDecl))
			self._resolving_values.add(id(symbol))
			try:
				return self._type_from_node(decl.type_expr, self.binder.scope_of(decl))
			finally:
				self._resolving_values.discard(id(symbol))
		return Type(TypeFlags.OBJECT, name=symbol.name)

	def _keyof_type(self, operand: ast.TypeNode, scope: Scope) -> Type:
		if isinstance(operand, ast.TypeRef):
			target = self._resolve_type_name(operand.name, scope)
			if target is not None and target not in self._resolving:
				properties = self._properties_of_type_symbol(target)
				if properties is not None:
					return union_type(literal_type(prop.name) for prop in properties)
		return union_type((STRING, NUMBER, ES_SYMBOL))

	def _unique_symbol_type(self, symbol: Symbol) -> Type:
		unique = self._unique_symbols.get(id(symbol))
		if unique is None:
			unique = Type(
				TypeFlags.UNIQUE_ES_SYMBOL,
				name="unique symbol",
				escaped_name=f"__@{symbol.name}@{self._symbol_id(symbol)}",
			)
			self._unique_symbols[id(symbol)] = unique
		return unique

	def _get_symbol_constructor(self) -> Type:
		if self._symbol_constructor is None:
			properties = {}
			for name in WELL_KNOWN_SYMBOLS:
				builtin = Symbol(name, SymbolFlags.PROPERTY | SymbolFlags.READONLY)
				properties[name] = self._unique_symbol_type(builtin)
			self._symbol_constructor = Type(TypeFlags.OBJECT, name="SymbolConstructor", property_types=properties)
		return self._symbol_constructor

	def _enum_member_values(self, enum_symbol: Optional[Symbol]) -> Dict[str, object]:
		if enum_symbol is None:
			return {}
		values = self._enum_values.get(id(enum_symbol))
		if values is not None:
			return values
		values = {}
		self._enum_values[id(enum_symbol)] = values
		for decl in enum_symbol.declarations:
			if not isinstance(decl, ast.EnumDecl):
				continue
			scope = self.binder.scope_of(decl)
			previous: object = -1.0
			for member in decl.members:
				if member.init is None:
					value = previous + 1 if isinstance(previous, float) else None
				else:
					value = self._constant_value(member.init, enum_symbol, values, scope)
				values[member.name] = value
				previous = value
		return values

	def _constant_value(self, expr: ast.Expr, enum_symbol: Symbol, values: Dict[str, object], scope: Scope):
		if isinstance(expr, ast.StringLiteral):
			return expr.value
		if isinstance(expr, ast.NumericLiteral):
			return parse_numeric_literal(expr.text)
		if isinstance(expr, ast.Unary):
			operand = self._constant_value(expr.operand, enum_symbol, values, scope)
			if isinstance(operand, float):
				return -operand if expr.op == "-" else operand
			return None
		if isinstance(expr, ast.Name) and expr.ident in values:
			return values[expr.ident]
		if isinstance(expr, ast.Attr) and isinstance(expr.value, ast.Name) and expr.value.ident == enum_symbol.name:
			return values.get(expr.attr)
		result = self.get_type_of_expression(expr, scope)
		if result.flags & (TypeFlags.STRING_LITERAL | TypeFlags.NUMBER_LITERAL):
			return result.value
		return None

	# --- Bookkeeping -------------------------------------------------------

	def _symbol_id(self, symbol: Symbol) -> int:
		symbol_id = self._symbol_ids.get(id(symbol))
		if symbol_id is None:
			symbol_id = len(self._symbol_ids) + 1
			self._symbol_ids[id(symbol)] = symbol_id
		return symbol_id

	def _enter_file(self, file_name: str) -> str:
		previous = self._file
		self._file = file_name
		return previous

	def _warn(self, message: str, loc, code: Optional[str] = None, file_name: Optional[str] = None) -> None:
		file_name = file_name or self._file
		line = getattr(loc, "line", 0)
		column = getattr(loc, "column", 0)
		key = (file_name, line, column, message)
		if key in self._reported:
			return
		self._reported.add(key)
		self.diagnostics.append(
			Diagnostic(
				message=message,
				code=code,
				phase="checker",
				severity="warning",
				span=Span.from_loc(loc, file_name),
			)
		)


def _intersect_properties(parts: List[List[Symbol]], owner: Symbol) -> List[Symbol]:
	"""
	Properties of an intersection. A name present in several parts becomes one
	synthetic property carrying every declaration; it is optional only when
	optional in all of them.
	"""
	grouped: Dict[str, List[Symbol]] = {}
	for properties in parts:
		for prop in properties:
			grouped.setdefault(prop.name, []).append(prop)
	result = []
	for name, props in grouped.items():
		if len(props) == 1:
			result.append(props[0])
			continue
		flags = SymbolFlags.NONE
		for prop in props:
			flags |= prop.flags & ~SymbolFlags.OPTIONAL
		if all(prop.flags & SymbolFlags.OPTIONAL for prop in props):
			flags |= SymbolFlags.OPTIONAL
		merged = Symbol(name, flags, parent=owner)
		for prop in props:
			merged.declarations.extend(prop.declarations)
		result.append(merged)
	return result


__all__ = ["TypeChecker", "COMPUTED_PROPERTY_NAME", "WELL_KNOWN_SYMBOLS"]
