# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AST for the TypeScript declaration subset understood by the parser.

Nodes are plain dataclasses. Every statement, member and expression carries a
`Located`; `full_start` mirrors TypeScript's `node.pos` (the end of the
preceding token, so leading trivia belongs to the node). Offsets count code
points; `SourceFile.utf16_offset` converts them to the UTF-16 units
TypeScript reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ifacelist.core.jsnames import utf16_length


@dataclass(frozen=True)
class Located:
	line: int
	column: int
	start_pos: int = 0
	full_start: int = 0


# --- Expressions -----------------------------------------------------------


class Expr:
	loc: Located


@dataclass
class StringLiteral(Expr):
	loc: Located
	value: str


@dataclass
class NumericLiteral(Expr):
	loc: Located
	text: str


@dataclass
class Name(Expr):
	loc: Located
	ident: str


@dataclass
class Attr(Expr):
	loc: Located
	value: Expr
	attr: str


@dataclass
class Index(Expr):
	loc: Located
	value: Expr
	index: Expr


@dataclass
class Call(Expr):
	loc: Located
	func: Expr
	args: List[Expr]


@dataclass
class New(Expr):
	loc: Located
	target: Expr
	args: List[Expr]


@dataclass
class Unary(Expr):
	loc: Located
	op: str
	operand: Expr


@dataclass
class ArrayLiteral(Expr):
	loc: Located
	elements: List[Expr]


@dataclass
class ObjectEntry:
	key: Optional["PropertyName"]
	value: Optional[Expr]
	spread: bool = False


@dataclass
class ObjectLiteral(Expr):
	loc: Located
	entries: List[ObjectEntry]


@dataclass
class AsExpr(Expr):
	"""`value as T`, or `value as const` when `type_expr` is None."""

	loc: Located
	value: Expr
	type_expr: Optional["TypeNode"]


# --- Property names --------------------------------------------------------


class PropertyName:
	loc: Located


@dataclass
class IdentifierName(PropertyName):
	loc: Located
	text: str


@dataclass
class StringName(PropertyName):
	loc: Located
	value: str


@dataclass
class NumericName(PropertyName):
	loc: Located
	text: str


@dataclass
class ComputedName(PropertyName):
	"""`[expr]` key; `expr` is the expression between the brackets."""

	loc: Located
	expr: Expr


# --- Types -----------------------------------------------------------------


class TypeNode:
	loc: Located


@dataclass
class TypeRef(TypeNode):
	loc: Located
	name: Tuple[str, ...]
	args: List[TypeNode] = field(default_factory=list)

	@property
	def dotted(self) -> str:
		return ".".join(self.name)


@dataclass
class LiteralType(TypeNode):
	loc: Located
	literal: Expr


@dataclass
class UnionType(TypeNode):
	loc: Located
	types: List[TypeNode]


@dataclass
class IntersectionType(TypeNode):
	loc: Located
	types: List[TypeNode]


@dataclass
class ArrayType(TypeNode):
	loc: Located
	element: TypeNode


@dataclass
class IndexedAccessType(TypeNode):
	loc: Located
	object_type: TypeNode
	index_type: TypeNode


@dataclass
class TupleType(TypeNode):
	loc: Located
	elements: List[TypeNode]


@dataclass
class FunctionType(TypeNode):
	loc: Located
	params: List["Param"]
	return_type: TypeNode
	is_constructor: bool = False


@dataclass
class ObjectType(TypeNode):
	loc: Located
	members: List["TypeMember"]


@dataclass
class MappedType(TypeNode):
	loc: Located
	key_name: str
	constraint: TypeNode
	value_type: TypeNode


@dataclass
class ConditionalType(TypeNode):
	loc: Located
	check_type: TypeNode
	extends_type: TypeNode
	true_type: TypeNode
	false_type: TypeNode


@dataclass
class TypeOperator(TypeNode):
	"""`keyof T`, `readonly T`, `unique symbol`, `infer T`."""

	loc: Located
	operator: str
	operand: TypeNode


@dataclass
class TypeQuery(TypeNode):
	"""`typeof a.b`."""

	loc: Located
	name: Tuple[str, ...]


@dataclass
class TypeParam:
	name: str
	constraint: Optional[TypeNode] = None
	default: Optional[TypeNode] = None


@dataclass
class Param:
	name: str
	type_expr: Optional[TypeNode]
	optional: bool = False
	rest: bool = False


# --- Members ---------------------------------------------------------------


class TypeMember:
	loc: Located


@dataclass
class PropertySignature(TypeMember):
	loc: Located
	name: PropertyName
	type_expr: Optional[TypeNode]
	optional: bool = False
	readonly: bool = False


@dataclass
class MethodSignature(TypeMember):
	loc: Located
	name: PropertyName
	params: List[Param]
	return_type: Optional[TypeNode]
	optional: bool = False


@dataclass
class GetAccessor(TypeMember):
	loc: Located
	name: PropertyName
	return_type: Optional[TypeNode]


@dataclass
class SetAccessor(TypeMember):
	loc: Located
	name: PropertyName
	params: List[Param]


@dataclass
class CallSignature(TypeMember):
	loc: Located
	params: List[Param]
	return_type: Optional[TypeNode]
	is_construct: bool = False


@dataclass
class IndexSignature(TypeMember):
	loc: Located
	param_name: str
	key_type: TypeNode
	value_type: TypeNode
	readonly: bool = False


@dataclass
class MappedMember(TypeMember):
	"""`[K in T]: V` inside braces; only valid as the sole member of a type literal."""

	loc: Located
	key_name: str
	constraint: TypeNode
	value_type: TypeNode


# --- Statements ------------------------------------------------------------


class Stmt:
	loc: Located


@dataclass
class InterfaceDecl(Stmt):
	loc: Located
	name: str
	name_loc: Located
	type_params: List[TypeParam]
	heritage: List[TypeRef]
	members: List[TypeMember]
	modifiers: Tuple[str, ...] = ()


@dataclass
class TypeAliasDecl(Stmt):
	loc: Located
	name: str
	type_params: List[TypeParam]
	type_expr: TypeNode
	modifiers: Tuple[str, ...] = ()


@dataclass
class VariableDeclarator:
	loc: Located
	name: str
	type_expr: Optional[TypeNode]
	init: Optional[Expr]


@dataclass
class VariableStmt(Stmt):
	loc: Located
	kind: str
	declarators: List[VariableDeclarator]
	modifiers: Tuple[str, ...] = ()


@dataclass
class Block(Stmt):
	loc: Located
	statements: List[Stmt]


@dataclass
class FunctionDecl(Stmt):
	loc: Located
	name: str
	params: List[Param]
	return_type: Optional[TypeNode]
	body: Optional[Block]
	modifiers: Tuple[str, ...] = ()


@dataclass
class NamespaceDecl(Stmt):
	"""`namespace A.B {}`, `module A {}`, `declare module "x" {}` or `declare global {}`."""

	loc: Located
	name: Tuple[str, ...]
	body: Optional[Block]
	modifiers: Tuple[str, ...] = ()
	is_global: bool = False
	is_ambient_module: bool = False


@dataclass
class EnumMember:
	loc: Located
	name: str
	init: Optional[Expr]


@dataclass
class EnumDecl(Stmt):
	loc: Located
	name: str
	members: List[EnumMember]
	is_const: bool = False
	modifiers: Tuple[str, ...] = ()


@dataclass
class ImportSpec:
	name: str
	alias: Optional[str] = None
	type_only: bool = False


@dataclass
class ImportDecl(Stmt):
	loc: Located
	module: str
	default: Optional[str] = None
	namespace: Optional[str] = None
	specs: List[ImportSpec] = field(default_factory=list)
	type_only: bool = False


@dataclass
class ExportDecl(Stmt):
	"""`export {a, b as c}`, `export * from "x"`, `export type {T}`."""

	loc: Located
	specs: List[ImportSpec] = field(default_factory=list)
	module: Optional[str] = None
	star: bool = False
	star_alias: Optional[str] = None
	type_only: bool = False


@dataclass
class ExportAssignment(Stmt):
	loc: Located
	value: Expr


@dataclass
class ReturnStmt(Stmt):
	loc: Located
	value: Optional[Expr]


@dataclass
class ExprStmt(Stmt):
	loc: Located
	value: Expr
	assigned: Optional[Expr] = None


@dataclass
class SourceFile:
	file_name: str
	text: str
	statements: Sequence[Stmt]

	@property
	def is_module(self) -> bool:
		"""A file with a top-level import or export is a module, otherwise a script."""
		for stmt in self.statements:
			if isinstance(stmt, (ImportDecl, ExportDecl, ExportAssignment)):
				return True
			if "export" in getattr(stmt, "modifiers", ()):
				return True
		return False

	def utf16_offset(self, index: int) -> int:
		return utf16_length(self.text[:index])
