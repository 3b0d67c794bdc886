# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

from ifacelist.checker import ProgramOptions, create_program
from ifacelist.lister import InterfaceRecord, Location, is_array_index_name, resolve_interface
from ifacelist.parser import ast


def _load(tmp_path: Path, src: str, options: Optional[ProgramOptions] = None):
	path = tmp_path / "r.ts"
	path.write_text(src, encoding="utf-8")
	return create_program([path], options)


def _resolve(tmp_path: Path, src: str, name: str, options: Optional[ProgramOptions] = None) -> Optional[InterfaceRecord]:
	program = _load(tmp_path, src, options)
	checker = program.get_type_checker()
	decl = next(s for s in program.get_source_files()[0].statements if isinstance(s, ast.InterfaceDecl) and s.name == name)
	return resolve_interface(checker, checker.get_symbol_at_location(decl), decl)


@pytest.mark.parametrize(
	"name, expected",
	[
		("0", True),
		("1", True),
		("4294967294", True),
		("4294967295", False),
		("01", False),
		("-1", False),
		("1.5", False),
		("1e3", False),
		("", False),
		("abc", False),
	],
)
def test_array_index_names(name: str, expected: bool) -> None:
	assert is_array_index_name(name) is expected


def test_required_properties_in_declaration_order(tmp_path: Path) -> None:
	src = "interface Base { x: number }\ninterface Derived extends Base {\n\ty: string;\n\tz?: number;\n\tm(): void;\n\t[k: string]: unknown;\n\t(): void;\n}\n"
	record = _resolve(tmp_path, src, "Derived")
	assert record == InterfaceRecord(
		name="Derived",
		properties=("y", "m", "x"),
		location=Location(file_name=(tmp_path / "r.ts").as_posix(), position=src.index("\ninterface Derived")),
	)


@pytest.mark.parametrize(
	"member",
	["0: string;", "1.0: string;", '"7": string;', "[2]: string;", "0x10: string;"],
)
def test_array_index_keys_reject_the_interface(tmp_path: Path, member: str) -> None:
	assert _resolve(tmp_path, f"interface Indexed {{ a: string; {member} }}\n", "Indexed") is None


def test_non_canonical_index_names_are_kept(tmp_path: Path) -> None:
	record = _resolve(tmp_path, 'interface Big { 4294967295: string; "01": string; "-0": string }\n', "Big")
	assert record is not None
	assert record.properties == ("4294967295", "01", "-0")


def test_numeric_literal_names_are_normalized_before_the_index_check(tmp_path: Path) -> None:
	# `01` as a numeric literal is the number 1.
	assert _resolve(tmp_path, "interface Legacy { 01: string; a: string }\n", "Legacy") is None


def test_optional_array_index_does_not_reject(tmp_path: Path) -> None:
	record = _resolve(tmp_path, "interface Opt { 0?: string; a: string }\n", "Opt")
	assert record is not None and record.properties == ("a",)


@pytest.mark.parametrize(
	"decls, member",
	[
		("const sym = Symbol();", "[sym]: string;"),
		("declare const tag: unique symbol;", "readonly [tag]: 'hi';"),
		("", "[Symbol.species]: string;"),
		("let s = Symbol();", "[s]: string;"),
		("declare const anything: any;", "[anything]: string;"),
	],
)
def test_symbol_keyed_properties_reject_the_interface(tmp_path: Path, decls: str, member: str) -> None:
	src = f"{decls}\ninterface WithSymbols {{\n\tx: number;\n\t{member}\n}}\n"
	assert _resolve(tmp_path, src, "WithSymbols") is None


def test_optional_symbol_property_is_skipped(tmp_path: Path) -> None:
	src = "const sym = Symbol();\ninterface MaybeSymbol { x: number; [sym]?: string }\n"
	record = _resolve(tmp_path, src, "MaybeSymbol")
	assert record is not None and record.properties == ("x",)


def test_inherited_symbol_property_rejects_the_derived_interface(tmp_path: Path) -> None:
	src = "const sym = Symbol();\ninterface Base { [sym]: string }\ninterface Derived extends Base { d: string }\n"
	assert _resolve(tmp_path, src, "Derived") is None


def test_empty_interface_resolves_to_no_properties(tmp_path: Path) -> None:
	record = _resolve(tmp_path, "interface Empty {}\n", "Empty")
	assert record is not None and record.properties == ()


def test_explicit_file_name_overrides_binder(tmp_path: Path) -> None:
	path = tmp_path / "r.ts"
	path.write_text("interface A { a: string }\n", encoding="utf-8")
	program = create_program([path])
	checker = program.get_type_checker()
	decl = program.get_source_files()[0].statements[0]
	record = resolve_interface(checker, checker.get_symbol_at_location(decl), decl, "other.ts")
	assert record.location.describe() == "other.ts:0"


def _resolve_in(program, name: str) -> Optional[InterfaceRecord]:
	checker = program.get_type_checker()
	decl = next(s for s in program.get_source_files()[0].statements if isinstance(s, ast.InterfaceDecl) and s.name == name)
	return resolve_interface(checker, checker.get_symbol_at_location(decl), decl)


@pytest.mark.parametrize("base", ["Error", "TypeError", "RangeError"])
def test_error_bases_come_from_the_default_library(tmp_path: Path, base: str) -> None:
	program = _load(tmp_path, f"interface MyError extends {base} {{ code: string }}\n")
	record = _resolve_in(program, "MyError")
	assert record is not None
	assert record.properties == ("code", "name", "message")
	assert program.diagnostics == []


def test_object_base_contributes_its_methods(tmp_path: Path) -> None:
	record = _resolve(tmp_path, "interface Plain extends Object { own: string }\n", "Plain")
	assert record is not None
	assert record.properties == (
		"own",
		"constructor",
		"toString",
		"toLocaleString",
		"valueOf",
		"hasOwnProperty",
		"isPrototypeOf",
		"propertyIsEnumerable",
	)


@pytest.mark.parametrize(
	"base",
	["Array<string>", "ReadonlyArray<number>", "Map<string, number>", "Set<string>", "Promise<void>", "Function", "Date"],
)
def test_library_bases_with_symbol_keyed_members_reject_the_interface(tmp_path: Path, base: str) -> None:
	program = _load(tmp_path, f"interface Derived extends {base} {{ extra: string }}\n")
	assert _resolve_in(program, "Derived") is None
	assert program.diagnostics == []


def test_module_interface_shadows_the_library_one(tmp_path: Path) -> None:
	src = "export {};\ninterface Error { own: string }\ninterface MyError extends Error { code: string }\n"
	record = _resolve(tmp_path, src, "MyError")
	assert record is not None and record.properties == ("code", "own")


def test_script_interface_merges_with_the_library_one(tmp_path: Path) -> None:
	record = _resolve(tmp_path, "interface Error { code: number }\n", "Error")
	assert record is not None and record.properties == ("name", "message", "code")


def test_without_default_library_error_is_unresolved(tmp_path: Path) -> None:
	program = _load(tmp_path, "interface MyError extends Error { code: string }\n", ProgramOptions(no_default_lib=True))
	record = _resolve_in(program, "MyError")
	assert record is not None and record.properties == ("code",)
	(diag,) = program.diagnostics
	assert diag.code == "TS2304" and diag.message == "Cannot find name 'Error'."


def test_position_counts_utf16_code_units(tmp_path: Path) -> None:
	src = 'export const e = "\U0001F600";\ninterface R { r: string }\n'
	record = _resolve(tmp_path, src, "R")
	assert src.index("\ninterface R") == 21
	assert record is not None and record.location.position == 22
