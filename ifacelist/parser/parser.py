# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Tuple

from lark import Lark, Token, Tree

from .ast import (
	ArrayLiteral,
	ArrayType,
	AsExpr,
	Attr,
	Block,
	Call,
	CallSignature,
	ComputedName,
	ConditionalType,
	EnumDecl,
	EnumMember,
	ExportAssignment,
	ExportDecl,
	Expr,
	ExprStmt,
	FunctionDecl,
	FunctionType,
	GetAccessor,
	IdentifierName,
	ImportDecl,
	ImportSpec,
	Index,
	IndexedAccessType,
	IndexSignature,
	InterfaceDecl,
	IntersectionType,
	LiteralType,
	Located,
	MappedMember,
	MappedType,
	MethodSignature,
	Name,
	NamespaceDecl,
	New,
	NumericLiteral,
	NumericName,
	ObjectEntry,
	ObjectLiteral,
	ObjectType,
	Param,
	PropertyName,
	PropertySignature,
	ReturnStmt,
	SetAccessor,
	SourceFile,
	Stmt,
	StringLiteral,
	StringName,
	TupleType,
	TypeAliasDecl,
	TypeMember,
	TypeNode,
	TypeOperator,
	TypeParam,
	TypeQuery,
	TypeRef,
	Unary,
	UnionType,
	VariableDeclarator,
	VariableStmt,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)


class ParseError(ValueError):
	"""Source parsed, but a construct is invalid where it appears (bad modifier, stray mapped member...)."""

	def __init__(self, message: str, loc: Optional[Located] = None) -> None:
		super().__init__(message)
		self.message = message
		self.loc = loc


def parse_source(text: str, file_name: str = "<memory>") -> SourceFile:
	"""
	Parse TypeScript source text into a `SourceFile`.

	Raises `lark.exceptions.UnexpectedInput` on syntax errors and `ParseError`
	when a construct parses but is not valid where it appears.
	"""
	tree = _PARSER.parse(text)
	statements = _build_statements(tree.children, container_start=0)
	return SourceFile(file_name=file_name, text=text, statements=statements)


# --- Statements ------------------------------------------------------------


def _build_statements(children, container_start: int) -> List[Stmt]:
	"""
	Build a statement list. A statement's full start is the end of whatever came
	before it: the previous statement (empty ones included) or the opening
	brace of the enclosing block.

	Statements that do not end in a block must be followed by `;`, a line
	break or the end of the list, as automatic semicolon insertion requires.
	"""
	statements: List[Stmt] = []
	prev_end = container_start
	prev: Optional[Tree] = None
	for child in children:
		if not isinstance(child, Tree):
			continue
		if (
			prev is not None
			and _name(child) != "empty_stmt"
			and _needs_terminator(prev)
			and child.meta.line == prev.meta.end_line
		):
			raise ParseError("';' expected", _loc(child))
		full_start = prev_end
		prev_end = child.meta.end_pos
		prev = child
		if _name(child) == "empty_stmt":
			continue
		statements.append(_build_stmt(child, full_start))
	return statements


_BLOCK_BODIED = ("interface_decl", "namespace_decl", "global_decl", "enum_decl")


def _needs_terminator(tree: Tree) -> bool:
	kind = _name(tree)
	if kind in ("block", "empty_stmt"):
		return False
	if kind == "declaration":
		body = _trees(tree)[0]
		if _name(body) in _BLOCK_BODIED:
			return False
		if _name(body) in ("function_decl", "module_decl"):
			parts = _trees(body)
			return not parts or _name(parts[-1]) != "block"
	return True


def _build_stmt(tree: Tree, full_start: int) -> Stmt:
	kind = _name(tree)
	loc = _loc(tree, full_start)
	if kind == "declaration":
		return _build_declaration(tree, loc)
	if kind == "block":
		return _build_block(tree, loc)
	if kind == "import_decl":
		return _build_import(tree, loc)
	if kind == "export_decl":
		return _build_export_clause(tree, loc)
	if kind == "export_star":
		strings = _tokens(tree, "STRING")
		names = _tokens(tree, "NAME")
		return ExportDecl(
			loc=loc,
			module=_decode_string(strings[0].value),
			star=True,
			star_alias=names[0].value if names else None,
		)
	if kind == "export_assignment":
		return ExportAssignment(loc=loc, value=_build_expr(_trees(tree)[0]))
	if kind == "return_stmt":
		values = _trees(tree)
		return ReturnStmt(loc=loc, value=_build_expr(values[0]) if values else None)
	if kind == "expr_stmt":
		parts = [_build_expr(child) for child in _trees(tree)]
		keyword = _leading_name(parts[0])
		if keyword in _STATEMENT_KEYWORDS:
			raise ParseError(f"'{keyword}' statements are not supported", loc)
		return ExprStmt(loc=loc, value=parts[0], assigned=parts[1] if len(parts) > 1 else None)
	raise ParseError(f"unsupported statement: {kind}", loc)


# Names that start statements outside the supported subset; the grammar would
# otherwise read them as plain identifiers.
_STATEMENT_KEYWORDS = frozenset({
	"break", "catch", "class", "continue", "debugger", "do", "else", "finally",
	"for", "if", "switch", "throw", "try", "while", "with",
})


def _leading_name(expr: Expr) -> Optional[str]:
	while True:
		if isinstance(expr, Name):
			return expr.ident
		if isinstance(expr, (Attr, Index)):
			expr = expr.value
		elif isinstance(expr, Call):
			expr = expr.func
		else:
			return None


def _build_block(tree: Tree, loc: Located) -> Block:
	statements = _build_statements(tree.children, container_start=tree.meta.start_pos + 1)
	return Block(loc=loc, statements=statements)


def _build_declaration(tree: Tree, loc: Located) -> Stmt:
	modifiers = tuple(child.value for child in tree.children if isinstance(child, Token))
	body = _trees(tree)[0]
	kind = _name(body)
	if kind == "interface_decl":
		return _build_interface(body, loc, modifiers)
	if kind == "type_alias":
		name_token = _tokens(body, "NAME")[0]
		rest = _trees(body)
		type_params: List[TypeParam] = []
		if _name(rest[0]) == "type_params":
			type_params = _build_type_params(rest[0])
			rest = rest[1:]
		return TypeAliasDecl(
			loc=loc,
			name=name_token.value,
			type_params=type_params,
			type_expr=_build_type(rest[0]),
			modifiers=modifiers,
		)
	if kind == "type_export":
		if "export" not in modifiers:
			raise ParseError("'type' export list requires 'export'", loc)
		return _build_export_clause(body, loc, type_only=True)
	if kind == "variable_decl":
		var_kind = _trees(body)[0].children[0].value
		declarators = [_build_declarator(child) for child in _trees(body)[1:]]
		return VariableStmt(loc=loc, kind=var_kind, declarators=declarators, modifiers=modifiers)
	if kind == "function_decl":
		return _build_function(body, loc, modifiers)
	if kind == "namespace_decl":
		names = tuple(token.value for token in _tokens(body, "NAME"))
		block = _trees(body)[0]
		return NamespaceDecl(
			loc=loc,
			name=names,
			body=_build_block(block, _loc(block)),
			modifiers=modifiers,
		)
	if kind == "module_decl":
		module_name = _decode_string(_tokens(body, "STRING")[0].value)
		blocks = _trees(body)
		return NamespaceDecl(
			loc=loc,
			name=(module_name,),
			body=_build_block(blocks[0], _loc(blocks[0])) if blocks else None,
			modifiers=modifiers,
			is_ambient_module=True,
		)
	if kind == "global_decl":
		block = _trees(body)[0]
		return NamespaceDecl(
			loc=loc,
			name=("global",),
			body=_build_block(block, _loc(block)),
			modifiers=modifiers,
			is_global=True,
		)
	if kind == "enum_decl":
		return _build_enum(body, loc, modifiers)
	raise ParseError(f"unsupported declaration: {kind}", loc)


def _build_interface(tree: Tree, loc: Located, modifiers: Tuple[str, ...]) -> InterfaceDecl:
	name_token = _tokens(tree, "NAME")[0]
	type_params: List[TypeParam] = []
	heritage: List[TypeRef] = []
	members: List[TypeMember] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "type_params":
			type_params = _build_type_params(child)
		elif kind == "heritage":
			heritage = [_build_type_ref(ref) for ref in _trees(child)]
		elif kind == "object_body":
			members = _build_members(child)
	if any(isinstance(member, MappedMember) for member in members):
		raise ParseError("a mapped type may not be used in an interface", loc)
	return InterfaceDecl(
		loc=loc,
		name=name_token.value,
		name_loc=_loc_from_token(name_token),
		type_params=type_params,
		heritage=heritage,
		members=members,
		modifiers=modifiers,
	)


def _build_declarator(tree: Tree) -> VariableDeclarator:
	name_token = _tokens(tree, "NAME")[0]
	type_expr = None
	init = None
	for child in _trees(tree):
		if _name(child) == "type_annotation":
			type_expr = _build_annotation(child)
		elif _name(child) == "initializer":
			init = _build_initializer(child)
	return VariableDeclarator(loc=_loc(tree), name=name_token.value, type_expr=type_expr, init=init)


def _build_function(tree: Tree, loc: Located, modifiers: Tuple[str, ...]) -> FunctionDecl:
	name_token = _tokens(tree, "NAME")[0]
	params: List[Param] = []
	return_type = None
	body = None
	for child in _trees(tree):
		kind = _name(child)
		if kind == "params":
			params = _build_params(child)
		elif kind == "type_annotation":
			return_type = _build_annotation(child)
		elif kind == "block":
			body = _build_block(child, _loc(child))
	return FunctionDecl(
		loc=loc,
		name=name_token.value,
		params=params,
		return_type=return_type,
		body=body,
		modifiers=modifiers,
	)


def _build_enum(tree: Tree, loc: Located, modifiers: Tuple[str, ...]) -> EnumDecl:
	name_token = _tokens(tree, "NAME")[0]
	members: List[EnumMember] = []
	for child in _trees(tree):
		key = child.children[0]
		name = _decode_string(key.value) if key.type == "STRING" else key.value
		inits = _trees(child)
		members.append(
			EnumMember(
				loc=_loc(child),
				name=name,
				init=_build_initializer(inits[0]) if inits else None,
			)
		)
	return EnumDecl(
		loc=loc,
		name=name_token.value,
		members=members,
		is_const=bool(_tokens(tree, "CONST")),
		modifiers=modifiers,
	)


def _build_import(tree: Tree, loc: Located) -> ImportDecl:
	module = _decode_string(_tokens(tree, "STRING")[0].value)
	decl = ImportDecl(loc=loc, module=module, type_only=bool(_tokens(tree, "TYPE")))
	for clause in _trees(tree):
		kind = _name(clause)
		if kind == "default_import":
			decl.default = _tokens(clause, "NAME")[0].value
			nested = _trees(clause)
			if nested:
				_apply_import_clause(decl, nested[0])
		else:
			_apply_import_clause(decl, clause)
	return decl


def _apply_import_clause(decl: ImportDecl, clause: Tree) -> None:
	if _name(clause) == "namespace_import":
		decl.namespace = _tokens(clause, "NAME")[0].value
	else:
		decl.specs = [_build_import_spec(spec) for spec in _trees(clause)]


def _build_import_spec(tree: Tree) -> ImportSpec:
	names = _tokens(tree, "NAME")
	return ImportSpec(
		name=names[0].value,
		alias=names[1].value if len(names) > 1 else None,
		type_only=bool(_tokens(tree, "TYPE")),
	)


def _build_export_clause(tree: Tree, loc: Located, type_only: bool = False) -> ExportDecl:
	clause = next(child for child in _trees(tree) if _name(child) == "export_clause")
	strings = _tokens(tree, "STRING")
	return ExportDecl(
		loc=loc,
		specs=[_build_import_spec(spec) for spec in _trees(clause)],
		module=_decode_string(strings[0].value) if strings else None,
		type_only=type_only,
	)


# --- Members ---------------------------------------------------------------


def _build_members(tree: Tree) -> List[TypeMember]:
	members: List[TypeMember] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "call_signature" or kind == "construct_signature":
			params, return_type = _build_signature_parts(child)
			members.append(
				CallSignature(
					loc=_loc(child),
					params=params,
					return_type=return_type,
					is_construct=kind == "construct_signature",
				)
			)
		elif kind == "modified_member":
			members.append(_build_modified_member(child))
	return members


def _build_modified_member(tree: Tree) -> TypeMember:
	modifiers: List[Tuple[str, str]] = []
	main = None
	for child in _trees(tree):
		if _name(child) == "member_modifier":
			tokens = [token for token in child.children if isinstance(token, Token)]
			sign = tokens[0].value if len(tokens) == 2 else ""
			modifiers.append((sign, tokens[-1].value))
		else:
			main = child
	assert main is not None
	loc = _loc(tree)
	kind = _name(main)
	words = [word for _, word in modifiers]

	if kind == "mapped_member":
		_check_modifiers(modifiers, {"readonly"}, loc, allow_sign=True)
		return _build_mapped_member(main, loc)
	if any(sign for sign, _ in modifiers):
		raise ParseError("'+' and '-' modifiers are only allowed in mapped types", loc)
	if kind == "index_sig":
		_check_modifiers(modifiers, {"readonly"}, loc)
		param_name = _tokens(main, "NAME")[0].value
		key_node, annotation = _trees(main)
		return IndexSignature(
			loc=loc,
			param_name=param_name,
			key_type=_build_type(key_node),
			value_type=_build_annotation(annotation),
			readonly="readonly" in words,
		)
	if kind == "property_sig":
		_check_modifiers(modifiers, {"readonly"}, loc)
		name_node, *rest = _trees(main)
		optional = any(_name(child) == "optional" for child in rest)
		return PropertySignature(
			loc=loc,
			name=_build_property_name(name_node),
			type_expr=_build_annotation(rest[-1]),
			optional=optional,
			readonly="readonly" in words,
		)
	if kind == "method_sig":
		_check_modifiers(modifiers, {"get", "set"}, loc)
		name_node, *rest = _trees(main)
		name = _build_property_name(name_node)
		optional = any(_name(child) == "optional" for child in rest)
		params, return_type = _build_signature_parts(main)
		if "get" in words:
			if params:
				raise ParseError("a 'get' accessor cannot have parameters", loc)
			return GetAccessor(loc=loc, name=name, return_type=return_type)
		if "set" in words:
			if len(params) != 1:
				raise ParseError("a 'set' accessor must have exactly one parameter", loc)
			return SetAccessor(loc=loc, name=name, params=params)
		return MethodSignature(
			loc=loc,
			name=name,
			params=params,
			return_type=return_type,
			optional=optional,
		)
	raise ParseError(f"unsupported type member: {kind}", loc)


def _check_modifiers(modifiers, allowed, loc: Located, allow_sign: bool = False) -> None:
	seen = set()
	for sign, word in modifiers:
		if word not in allowed:
			raise ParseError(f"'{word}' modifier cannot appear on this type member", loc)
		if sign and not allow_sign:
			raise ParseError(f"'{sign}{word}' is only allowed in mapped types", loc)
		if word in seen:
			raise ParseError(f"'{word}' modifier already seen", loc)
		seen.add(word)
	if "get" in seen and "set" in seen:
		raise ParseError("a member cannot be both 'get' and 'set'", loc)


def _build_mapped_member(tree: Tree, loc: Located) -> MappedMember:
	key_name = _tokens(tree, "NAME")[0].value
	types = [child for child in _trees(tree) if _name(child) not in {"mapped_optional", "type_annotation"}]
	annotation = next(child for child in _trees(tree) if _name(child) == "type_annotation")
	return MappedMember(
		loc=loc,
		key_name=key_name,
		constraint=_build_type(types[0]),
		value_type=_build_annotation(annotation),
	)


def _build_signature_parts(tree: Tree) -> Tuple[List[Param], Optional[TypeNode]]:
	params: List[Param] = []
	return_type = None
	for child in _trees(tree):
		kind = _name(child)
		if kind == "params":
			params = _build_params(child)
		elif kind == "type_annotation":
			return_type = _build_annotation(child)
	return params, return_type


def _build_params(tree: Tree) -> List[Param]:
	params = []
	for child in _trees(tree):
		type_expr = None
		for part in _trees(child):
			if _name(part) == "type_annotation":
				type_expr = _build_annotation(part)
		params.append(
			Param(
				name=_tokens(child, "NAME")[0].value,
				type_expr=type_expr,
				optional=any(_name(part) == "optional" for part in _trees(child)),
				rest=bool(_tokens(child, "DOTS")),
			)
		)
	return params


def _build_property_name(tree: Tree) -> PropertyName:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "ident_name":
		return IdentifierName(loc=loc, text=tree.children[0].value)
	if kind == "string_name":
		return StringName(loc=loc, value=_decode_string(tree.children[0].value))
	if kind == "numeric_name":
		return NumericName(loc=loc, text=tree.children[0].value)
	if kind == "computed_name":
		return ComputedName(loc=loc, expr=_build_expr(_trees(tree)[0]))
	raise ParseError(f"unsupported property name: {kind}", loc)


def _build_type_params(tree: Tree) -> List[TypeParam]:
	params = []
	for child in _trees(tree):
		param = TypeParam(name=_tokens(child, "NAME")[0].value)
		for part in _trees(child):
			if _name(part) == "type_constraint":
				param.constraint = _build_type(_trees(part)[0])
			elif _name(part) == "type_default":
				param.default = _build_type(_trees(part)[0])
		params.append(param)
	return params


# --- Types -----------------------------------------------------------------


def _build_annotation(tree: Tree) -> TypeNode:
	return _build_type(_trees(tree)[0])


def _build_type_ref(tree: Tree) -> TypeRef:
	entity, *rest = _trees(tree)
	args: List[TypeNode] = []
	if rest:
		args = [_build_type(arg) for arg in _trees(rest[0])]
	return TypeRef(loc=_loc(tree), name=_entity_name(entity), args=args)


def _entity_name(tree: Tree) -> Tuple[str, ...]:
	return tuple(token.value for token in _tokens(tree, "NAME"))


def _build_type(tree: Tree) -> TypeNode:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "type_ref":
		return _build_type_ref(tree)
	if kind == "object_type":
		members = _build_members(_trees(tree)[0])
		mapped = [member for member in members if isinstance(member, MappedMember)]
		if mapped:
			if len(members) != 1:
				raise ParseError("a mapped type must be the only member of its type literal", loc)
			return MappedType(
				loc=loc,
				key_name=mapped[0].key_name,
				constraint=mapped[0].constraint,
				value_type=mapped[0].value_type,
			)
		return ObjectType(loc=loc, members=members)
	if kind == "union_type":
		return UnionType(loc=loc, types=[_build_type(child) for child in _trees(tree)])
	if kind == "intersection_type":
		return IntersectionType(loc=loc, types=[_build_type(child) for child in _trees(tree)])
	if kind == "literal_type":
		tokens = [token for token in tree.children if isinstance(token, Token)]
		last = tokens[-1]
		if last.type == "STRING":
			return LiteralType(loc=loc, literal=StringLiteral(loc=loc, value=_decode_string(last.value)))
		literal: Expr = NumericLiteral(loc=_loc_from_token(last), text=last.value)
		if len(tokens) == 2:
			literal = Unary(loc=loc, op="-", operand=literal)
		return LiteralType(loc=loc, literal=literal)
	if kind == "array_type":
		return ArrayType(loc=loc, element=_build_type(_trees(tree)[0]))
	if kind == "indexed_access_type":
		object_node, index_node = _trees(tree)
		return IndexedAccessType(loc=loc, object_type=_build_type(object_node), index_type=_build_type(index_node))
	if kind == "tuple_type":
		return TupleType(loc=loc, elements=[_build_tuple_element(child) for child in _trees(tree)])
	if kind == "paren_type":
		items = _trees(tree)
		if len(items) != 1 or _name(items[0]) == "param_item":
			raise ParseError("expected a type", loc)
		return _build_type(items[0])
	if kind == "type_query":
		return TypeQuery(loc=loc, name=_entity_name(_trees(tree)[0]))
	if kind == "keyof_type":
		return TypeOperator(loc=loc, operator="keyof", operand=_build_type(_trees(tree)[0]))
	if kind == "readonly_type":
		return TypeOperator(loc=loc, operator="readonly", operand=_build_type(_trees(tree)[0]))
	if kind == "unique_type":
		name_token = _tokens(tree, "NAME")[0]
		if name_token.value != "symbol":
			raise ParseError("'unique' may only be applied to 'symbol'", loc)
		operand = TypeRef(loc=_loc_from_token(name_token), name=("symbol",))
		return TypeOperator(loc=loc, operator="unique", operand=operand)
	if kind == "infer_type":
		name_token = _tokens(tree, "NAME")[0]
		operand = TypeRef(loc=_loc_from_token(name_token), name=(name_token.value,))
		return TypeOperator(loc=loc, operator="infer", operand=operand)
	if kind == "conditional_type":
		check, extends, true_type, false_type = (_build_type(child) for child in _trees(tree))
		return ConditionalType(
			loc=loc,
			check_type=check,
			extends_type=extends,
			true_type=true_type,
			false_type=false_type,
		)
	if kind == "function_type" or kind == "constructor_type":
		parts = _trees(tree)
		paren = next(child for child in parts if _name(child) == "paren_type")
		return FunctionType(
			loc=loc,
			params=[_build_function_type_param(item) for item in _trees(paren)],
			return_type=_build_type(parts[-1]),
			is_constructor=kind == "constructor_type",
		)
	raise ParseError(f"unsupported type: {kind}", loc)


def _build_tuple_element(tree: Tree) -> TypeNode:
	kind = _name(tree)
	if kind == "named_element" or kind == "rest_element":
		return _build_type(_trees(tree)[-1])
	return _build_type(tree)


def _build_function_type_param(tree: Tree) -> Param:
	"""A function type parameter is `name: T`, `...name: T`, or a bare name of type any."""
	if _name(tree) == "param_item":
		annotations = [child for child in _trees(tree) if _name(child) == "type_annotation"]
		return Param(
			name=_tokens(tree, "NAME")[0].value,
			type_expr=_build_annotation(annotations[0]) if annotations else None,
			optional=any(_name(child) == "optional" for child in _trees(tree)),
			rest=bool(_tokens(tree, "DOTS")),
		)
	if _name(tree) == "type_ref":
		ref = _build_type_ref(tree)
		if len(ref.name) == 1 and not ref.args:
			return Param(name=ref.name[0], type_expr=None)
	raise ParseError("parameter declaration expected", _loc(tree))


# --- Expressions -----------------------------------------------------------


def _build_initializer(tree: Tree) -> Expr:
	return _build_expr(_trees(tree)[0])


def _build_expr(tree: Tree) -> Expr:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "name_expr":
		return Name(loc=loc, ident=tree.children[0].value)
	if kind == "string_expr":
		return StringLiteral(loc=loc, value=_decode_string(tree.children[0].value))
	if kind == "number_expr":
		return NumericLiteral(loc=loc, text=tree.children[0].value)
	if kind == "unary_expr":
		op_token, operand = tree.children
		return Unary(loc=loc, op=op_token.value, operand=_build_expr(operand))
	if kind == "attr_expr":
		value, attr = tree.children
		return Attr(loc=loc, value=_build_expr(value), attr=attr.value)
	if kind == "index_expr":
		value, index = _trees(tree)
		return Index(loc=loc, value=_build_expr(value), index=_build_expr(index))
	if kind == "call_expr":
		func, arguments = _trees(tree)
		return Call(loc=loc, func=_build_expr(func), args=[_build_expr(arg) for arg in _trees(arguments)])
	if kind == "new_expr":
		entity, arguments = _trees(tree)
		return New(
			loc=loc,
			target=_entity_expr(entity),
			args=[_build_expr(arg) for arg in _trees(arguments)],
		)
	if kind == "as_type":
		value, type_node = _trees(tree)
		return AsExpr(loc=loc, value=_build_expr(value), type_expr=_build_type(type_node))
	if kind == "as_const":
		return AsExpr(loc=loc, value=_build_expr(_trees(tree)[0]), type_expr=None)
	if kind == "array_literal":
		return ArrayLiteral(loc=loc, elements=[_build_expr(child) for child in _trees(tree)])
	if kind == "object_literal":
		return ObjectLiteral(loc=loc, entries=[_build_object_entry(child) for child in _trees(tree)])
	raise ParseError(f"unsupported expression: {kind}", loc)


def _entity_expr(tree: Tree) -> Expr:
	tokens = _tokens(tree, "NAME")
	expr: Expr = Name(loc=_loc_from_token(tokens[0]), ident=tokens[0].value)
	for token in tokens[1:]:
		expr = Attr(loc=_loc_from_token(token), value=expr, attr=token.value)
	return expr


def _build_object_entry(tree: Tree) -> ObjectEntry:
	kind = _name(tree)
	if kind == "keyed_entry":
		key, value = _trees(tree)
		return ObjectEntry(key=_build_property_name(key), value=_build_expr(value))
	if kind == "shorthand_entry":
		token = tree.children[0]
		loc = _loc_from_token(token)
		return ObjectEntry(key=IdentifierName(loc=loc, text=token.value), value=Name(loc=loc, ident=token.value))
	if kind == "spread_entry":
		return ObjectEntry(key=None, value=_build_expr(_trees(tree)[0]), spread=True)
	raise ParseError(f"unsupported object entry: {kind}", _loc(tree))


_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = {"\n", "\r\n", "\r", "\u2028", "\u2029"}


def _decode_string(raw: str) -> str:
	"""Decode a quoted JavaScript string literal, joining escaped surrogate pairs."""

	def replace(match: re.Match) -> str:
		escape = match.group(1)
		if escape.startswith("u{"):
			return chr(int(escape[2:-1], 16))
		if len(escape) > 1 and escape[0] in "ux":
			return chr(int(escape[1:], 16))
		if escape in _LINE_CONTINUATIONS:
			return ""
		return _SIMPLE_ESCAPES.get(escape, escape)

	decoded = _ESCAPE_RE.sub(replace, raw[1:-1])
	return decoded.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


# --- Helpers ---------------------------------------------------------------


def _trees(tree: Tree) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree)]


def _tokens(tree: Tree, token_type: str) -> List[Token]:
	return [child for child in tree.children if isinstance(child, Token) and child.type == token_type]


def _loc(tree: Tree, full_start: Optional[int] = None) -> Located:
	meta = tree.meta
	if meta.empty:
		return Located(line=0, column=0)
	return Located(
		line=meta.line,
		column=meta.column,
		start_pos=meta.start_pos,
		full_start=meta.start_pos if full_start is None else full_start,
	)


def _loc_from_token(token: Token) -> Located:
	return Located(
		line=token.line,
		column=token.column,
		start_pos=token.start_pos,
		full_start=token.start_pos,
	)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)
