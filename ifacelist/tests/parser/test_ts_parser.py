# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest
from lark.exceptions import UnexpectedInput

from ifacelist.parser import ParseError, ast, parse_file, parse_source


def _parse(src: str) -> ast.SourceFile:
	return parse_source(src, file_name="main.ts")


def _only(src: str) -> ast.Stmt:
	statements = _parse(src).statements
	assert len(statements) == 1
	return statements[0]


def test_interface_members_are_classified() -> None:
	src = """
interface Sample<T> extends Base, ns.Other<T> {
	readonly a: string;
	b?: number
	c(x: number, ...rest: string[]): void
	get d(): T;
	set e(value: T);
	[key: string]: unknown;
	(call: number): string;
	new (arg: string): Sample<T>;
	"quoted": 1,
	42: true
}
"""
	decl = _only(src)
	assert isinstance(decl, ast.InterfaceDecl)
	assert decl.name == "Sample"
	assert [p.name for p in decl.type_params] == ["T"]
	assert [ref.name for ref in decl.heritage] == [("Base",), ("ns", "Other")]
	assert [type(m).__name__ for m in decl.members] == [
		"PropertySignature",
		"PropertySignature",
		"MethodSignature",
		"GetAccessor",
		"SetAccessor",
		"IndexSignature",
		"CallSignature",
		"CallSignature",
		"PropertySignature",
		"PropertySignature",
	]
	a, b, c = decl.members[:3]
	assert a.readonly and not a.optional
	assert b.optional and isinstance(b.type_expr, ast.TypeRef)
	assert [p.name for p in c.params] == ["x", "rest"]
	assert c.params[1].rest
	assert isinstance(c.params[1].type_expr, ast.ArrayType)
	assert not decl.members[6].is_construct
	assert decl.members[7].is_construct
	assert decl.members[8].name == ast.StringName(loc=decl.members[8].name.loc, value="quoted")
	assert isinstance(decl.members[9].name, ast.NumericName)
	assert decl.members[9].name.text == "42"


def test_contextual_keywords_are_member_names() -> None:
	src = """
interface Words {
	type: string;
	interface: number;
	readonly readonly: boolean;
	get: string;
	declare(): void;
}
"""
	decl = _only(src)
	names = [m.name.text for m in decl.members]
	assert names == ["type", "interface", "readonly", "get", "declare"]
	assert decl.members[2].readonly
	assert isinstance(decl.members[3], ast.PropertySignature)


def test_bracket_on_new_line_starts_a_member() -> None:
	src = """
interface K {
	a: string
	[b]: number
	c: string[]
}
"""
	decl = _only(src)
	assert len(decl.members) == 3
	assert isinstance(decl.members[0].type_expr, ast.TypeRef)
	assert isinstance(decl.members[1].name, ast.ComputedName)
	assert decl.members[1].name.expr == ast.Name(loc=decl.members[1].name.expr.loc, ident="b")
	assert isinstance(decl.members[2].type_expr, ast.ArrayType)


def test_full_start_includes_leading_trivia() -> None:
	src = (
		"interface A { a: string }\n"
		"// lead\n"
		"interface B { b: string };\n"
		"{\n"
		"  interface C { c: string }\n"
		"}\n"
		"interface D { d: string }\n"
	)
	a, b, block, d = _parse(src).statements
	assert a.loc.full_start == 0
	assert b.loc.full_start == src.index("\n// lead")
	assert b.loc.start_pos == src.index("interface B")
	assert b.loc.line == 3
	# The empty statement after B is skipped but still ends B's trivia run.
	assert block.loc.full_start == src.index(";") + 1
	assert isinstance(block, ast.Block)
	assert block.statements[0].loc.full_start == src.index("{\n  interface C") + 1
	assert d.loc.full_start == src.index("}\ninterface D") + 1


def test_string_names_decode_escapes() -> None:
	src = r"""
interface S {
	"aA\x42\n": string;
	'it\'s': number;
	"\u{1F600}": boolean;
}
"""
	decl = _only(src)
	assert [m.name.value for m in decl.members] == ["aAB\n", "it's", "\U0001F600"]


def test_declarations_and_modifiers() -> None:
	src = """
declare module "pkg" {
	export interface P { p: string }
}
namespace A.B { interface Q { q: number } }
declare global { interface G { g: string } }
export const enum E { X, Y = 5, "Z" }
export default function f(a?: string): void {}
declare const sym: unique symbol;
let x = 1, y: string;
type Alias<T extends object = {}> = T | null;
"""
	module, namespace, global_decl, enum, func, const, lets, alias = _parse(src).statements
	assert module.is_ambient_module and module.name == ("pkg",)
	assert module.body.statements[0].modifiers == ("export",)
	assert namespace.name == ("A", "B")
	assert global_decl.is_global
	assert enum.is_const and enum.modifiers == ("export",)
	assert [m.name for m in enum.members] == ["X", "Y", "Z"]
	assert func.modifiers == ("export", "default")
	assert func.params[0].optional and func.body is not None
	assert const.modifiers == ("declare",) and const.kind == "const"
	assert isinstance(const.declarators[0].type_expr, ast.TypeOperator)
	assert const.declarators[0].type_expr.operator == "unique"
	assert [d.name for d in lets.declarators] == ["x", "y"]
	assert isinstance(alias, ast.TypeAliasDecl)
	assert alias.type_params[0].constraint is not None
	assert isinstance(alias.type_expr, ast.UnionType)


def test_imports_and_exports() -> None:
	src = """
import Def, { a, type B as C } from "./mod";
import * as ns from "./ns";
import "./side-effect";
export { a as b };
export * from "./all";
export * as everything from "./all";
export type { T } from "./types";
"""
	default_import, star_import, bare, export_list, star, star_alias, type_export = _parse(src).statements
	assert default_import.default == "Def"
	assert [(s.name, s.alias, s.type_only) for s in default_import.specs] == [("a", None, False), ("B", "C", True)]
	assert star_import.namespace == "ns"
	assert bare.module == "./side-effect"
	assert [(s.name, s.alias) for s in export_list.specs] == [("a", "b")]
	assert star.star and star.module == "./all" and star.star_alias is None
	assert star_alias.star_alias == "everything"
	assert type_export.type_only and type_export.module == "./types"
	assert _parse(src).is_module


def test_types_and_expressions() -> None:
	src = """
type F = (a: string, b?: number) => void;
type P = (string | number)[];
type Ctor = new () => F;
type M = { readonly [K in "a" | "b"]?: K };
type Tup = [string, name: number, ...rest: boolean[]];
type Q = keyof typeof value;
const value = { a: 1, "b": [2, 3], [KEY]: -4, ...other } as const;
"""
	f, p, ctor, mapped, tup, query, value = _parse(src).statements
	assert isinstance(f.type_expr, ast.FunctionType)
	assert [param.name for param in f.type_expr.params] == ["a", "b"]
	assert isinstance(p.type_expr, ast.ArrayType)
	assert isinstance(p.type_expr.element, ast.UnionType)
	assert ctor.type_expr.is_constructor
	assert isinstance(mapped.type_expr, ast.MappedType)
	assert mapped.type_expr.key_name == "K"
	assert len(tup.type_expr.elements) == 3
	assert query.type_expr.operator == "keyof"
	assert isinstance(query.type_expr.operand, ast.TypeQuery)
	init = value.declarators[0].init
	assert isinstance(init, ast.AsExpr) and init.type_expr is None
	entries = init.value.entries
	assert [type(e.key).__name__ for e in entries[:3]] == ["IdentifierName", "StringName", "ComputedName"]
	assert entries[3].spread


def test_script_file_is_not_a_module() -> None:
	assert not _parse("interface A { a: string }\n").is_module
	assert _parse("export interface A { a: string }\n").is_module


def test_syntax_error_raises_unexpected_input() -> None:
	with pytest.raises(UnexpectedInput):
		_parse("interface A { a: string\n")


@pytest.mark.parametrize(
	"src, message",
	[
		("interface X { public a: string }", "'public' modifier"),
		("interface X { get a(x: number): string }", "cannot have parameters"),
		("interface X { set a(): void }", "exactly one parameter"),
		("interface X { +readonly a: string }", "only allowed in mapped types"),
		('interface X { [K in "a"]: string }', "mapped type may not be used in an interface"),
		("type T = { [K in string]: K; b: string };", "only member"),
		("type U = unique string;", "'unique'"),
		("type W = (a: string);", "expected a type"),
	],
)
def test_invalid_constructs_raise_parse_error(src: str, message: str) -> None:
	with pytest.raises(ParseError) as exc:
		_parse(src)
	assert message in exc.value.message


def test_type_export_requires_export_keyword() -> None:
	with pytest.raises(ParseError):
		_parse('type { T } from "./t";')


def test_parse_file_records_posix_name(tmp_path: Path) -> None:
	path = tmp_path / "dir" / "main.ts"
	path.parent.mkdir()
	path.write_text("interface A { a: string }\n", encoding="utf-8")
	source = parse_file(path)
	assert source.file_name == path.as_posix()
	assert source.statements[0].name == "A"


def test_bare_name_in_function_type_is_untyped_parameter() -> None:
	alias = _only("type V = (number) => void;")
	(param,) = alias.type_expr.params
	assert param.name == "number" and param.type_expr is None


@pytest.mark.parametrize(
	"src",
	[
		"class C { x = 1 }\n",
		"if (true) { }\n",
		"const a = 1 const b = 2\n",
		"type A = string type B = number\n",
		"declare function f(): void interface I {}\n",
	],
)
def test_statements_on_one_line_need_a_separator(src: str) -> None:
	with pytest.raises(ParseError) as exc:
		_parse(src)
	assert exc.value.message == "';' expected"


def test_line_breaks_and_blocks_separate_statements() -> None:
	src = "foo()\nbar()\ntype A = {}\ntype B = {}\ninterface I {} interface J {}\n{ } declare const c: number\n"
	kinds = [type(stmt).__name__ for stmt in _parse(src).statements]
	assert kinds == ["ExprStmt", "ExprStmt", "TypeAliasDecl", "TypeAliasDecl", "InterfaceDecl", "InterfaceDecl", "Block", "VariableStmt"]


@pytest.mark.parametrize("keyword", ["if", "while", "switch", "with"])
def test_control_flow_statements_are_rejected(keyword: str) -> None:
	with pytest.raises(ParseError) as exc:
		_parse(f"{keyword} (ready)\n  go();\n")
	assert exc.value.message == f"'{keyword}' statements are not supported"
