# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

from ifacelist.checker import Program, SymbolFlags, create_program
from ifacelist.parser import ast


def _load(tmp_path: Path, src: str) -> Program:
	path = tmp_path / "main.ts"
	path.write_text(src, encoding="utf-8")
	return create_program([path])


def _decls(statements, name: str) -> list[ast.InterfaceDecl]:
	found = []
	for stmt in statements:
		if isinstance(stmt, ast.InterfaceDecl) and stmt.name == name:
			found.append(stmt)
		elif isinstance(stmt, ast.Block):
			found.extend(_decls(stmt.statements, name))
		elif isinstance(stmt, (ast.NamespaceDecl, ast.FunctionDecl)) and stmt.body is not None:
			found.extend(_decls(stmt.body.statements, name))
	return found


def _props(program: Program, name: str) -> list[str]:
	decl = _decls(program.get_source_files()[0].statements, name)[0]
	return [prop.name for prop in program.get_type_checker().get_type_at_location(decl).get_properties()]


def _codes(program: Program) -> list[str]:
	return [d.code for d in program.diagnostics]


def test_own_members_come_before_inherited_ones(tmp_path: Path) -> None:
	program = _load(
		tmp_path,
		"""
interface Base { x: number; shared: string }
interface Mid extends Base { y: number }
interface Leaf extends Mid { z: number; shared: number }
""",
	)
	assert _props(program, "Base") == ["x", "shared"]
	assert _props(program, "Mid") == ["y", "x", "shared"]
	assert _props(program, "Leaf") == ["z", "shared", "y", "x"]
	assert program.diagnostics == []


def test_declarations_merge_into_one_type(tmp_path: Path) -> None:
	program = _load(
		tmp_path,
		"""
interface Foo { a: string }
interface Foo { b: string; a: string }
""",
	)
	first, second = _decls(program.get_source_files()[0].statements, "Foo")
	checker = program.get_type_checker()
	assert checker.get_symbol_at_location(first) is checker.get_symbol_at_location(second)
	assert [p.name for p in checker.get_type_at_location(second).get_properties()] == ["a", "b"]
	a = checker.get_type_at_location(first).get_property("a")
	assert len(a.declarations) == 2


def test_member_flags(tmp_path: Path) -> None:
	program = _load(
		tmp_path,
		"""
interface Flags {
	readonly r: string;
	o?: number;
	m(): void;
	om?(): void;
	get g(): string;
	set s(v: string);
	[key: string]: unknown;
	(): void;
	new (): Flags;
}
""",
	)
	decl = _decls(program.get_source_files()[0].statements, "Flags")[0]
	props = {p.name: p.flags for p in program.get_type_checker().get_type_at_location(decl).get_properties()}
	assert list(props) == ["r", "o", "m", "om", "g", "s"]
	assert props["r"] & SymbolFlags.READONLY
	assert props["o"] & SymbolFlags.OPTIONAL
	assert props["m"] & SymbolFlags.METHOD and not props["m"] & SymbolFlags.OPTIONAL
	assert props["om"] & SymbolFlags.OPTIONAL
	assert props["g"] & SymbolFlags.GET_ACCESSOR
	assert props["s"] & SymbolFlags.SET_ACCESSOR


def test_object_type_aliases_and_intersections_as_bases(tmp_path: Path) -> None:
	program = _load(
		tmp_path,
		"""
type Obj = { a: string; b?: number };
type Both = Obj & { c: string };
interface I extends Both { d: string }

type L = { a?: string };
type R = { a: string };
type LR = L & R;
type LL = L & L;
interface J extends LR { own: number }
interface K extends LL { own: number }
""",
	)
	assert _props(program, "I") == ["d", "a", "b", "c"]
	checker = program.get_type_checker()
	statements = program.get_source_files()[0].statements
	j = checker.get_type_at_location(_decls(statements, "J")[0])
	k = checker.get_type_at_location(_decls(statements, "K")[0])
	assert not j.get_property("a").flags & SymbolFlags.OPTIONAL
	assert k.get_property("a").flags & SymbolFlags.OPTIONAL


def test_mapped_type_with_literal_keys_as_base(tmp_path: Path) -> None:
	program = _load(
		tmp_path,
		"""
type Keys = "p" | "q";
type M = { [K in Keys]: string };
interface N extends M { r: number }
interface FromKeyof extends Pick { s: string }
type Pick = { [K in keyof N]: boolean };
""",
	)
	assert _props(program, "N") == ["r", "p", "q"]
	assert _props(program, "FromKeyof") == ["s", "r", "p", "q"]


def test_qualified_bases_through_namespaces(tmp_path: Path) -> None:
	program = _load(
		tmp_path,
		"""
namespace NS { export interface Inner { i: number } }
namespace A.B { export interface C { c: number } }
interface Outer extends NS.Inner, A.B.C { o: number }
""",
	)
	assert _props(program, "Outer") == ["o", "i", "c"]


def test_unresolved_and_circular_bases_warn(tmp_path: Path) -> None:
	program = _load(
		tmp_path,
		"""
interface X extends Missing { x: number }
interface A extends B { a: string }
interface B extends A { b: string }
type S = string;
interface Y extends S { y: number }
""",
	)
	assert _props(program, "X") == ["x"]
	assert _props(program, "A") == ["a", "b"]
	assert _props(program, "Y") == ["y"]
	codes = _codes(program)
	assert "TS2304" in codes
	assert "TS2310" in codes
	assert "TS2312" in codes
	assert all(d.severity == "warning" and d.phase == "checker" for d in program.diagnostics)
