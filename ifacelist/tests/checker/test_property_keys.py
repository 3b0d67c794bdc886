# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

from ifacelist.checker import COMPUTED_PROPERTY_NAME, TypeFlags, create_program
from ifacelist.parser import ast


def _property_names(tmp_path: Path, src: str, name: str = "Keys"):
	path = tmp_path / "keys.ts"
	path.write_text(src, encoding="utf-8")
	program = create_program([path])
	decl = next(s for s in program.get_source_files()[0].statements if isinstance(s, ast.InterfaceDecl) and s.name == name)
	checker = program.get_type_checker()
	return [p.name for p in checker.get_type_at_location(decl).get_properties()], program


def test_literal_keys_become_property_names(tmp_path: Path) -> None:
	names, program = _property_names(
		tmp_path,
		"""
const KEY = "dyn";
const NUM = 1e3;
enum E { A = "ea", B = 7, C }
const OBJ = { inner: "nested" } as const;
interface Keys {
	[KEY]: string;
	[NUM]: string;
	[E.A]: string;
	[E.B]: string;
	[E.C]: string;
	["lit"]: string;
	[-1]: string;
	[OBJ.inner]: string;
	0x10: string;
	1.50: string;
}
""",
	)
	assert names == ["dyn", "1000", "ea", "7", "8", "lit", "-1", "nested", "16", "1.5"]
	assert program.diagnostics == []


def test_unique_symbols_get_escaped_names(tmp_path: Path) -> None:
	names, _ = _property_names(
		tmp_path,
		"""
const sym = Symbol();
declare const tag: unique symbol;
interface Keys {
	[sym]: number;
	[tag]: number;
	[Symbol.iterator](): void;
	[Symbol.asyncIterator](): void;
}
""",
	)
	assert names[0].startswith("__@sym@")
	assert names[1].startswith("__@tag@")
	assert names[2].startswith("__@iterator@")
	assert names[3].startswith("__@asyncIterator@")
	assert len(set(names)) == 4


def test_non_literal_keys_fall_back_to_computed_name(tmp_path: Path) -> None:
	names, program = _property_names(
		tmp_path,
		"""
declare const anyKey: any;
let widened = "w";
interface Keys {
	[anyKey]: number;
	ok: string;
	[widened]: number;
}
""",
	)
	assert names == [COMPUTED_PROPERTY_NAME, "ok"]
	assert [d.code for d in program.diagnostics] == ["TS1169", "TS1169"]


def test_key_expression_types(tmp_path: Path) -> None:
	path = tmp_path / "types.ts"
	path.write_text(
		"""
const s = Symbol("desc");
let plain = Symbol();
declare const a: any;
const lit = "x";
interface Keys {
	[s]: number;
	[plain]: number;
	[a]: number;
	[lit]: number;
}
""",
		encoding="utf-8",
	)
	program = create_program([path])
	checker = program.get_type_checker()
	decl = program.get_source_files()[0].statements[-1]
	checker.get_type_at_location(decl).get_properties()
	key_types = [checker.get_type_at_location(member.name.expr) for member in decl.members]
	es_symbol = checker.get_es_symbol_type()
	assert key_types[0].flags & TypeFlags.UNIQUE_ES_SYMBOL
	# `let` bindings widen to plain `symbol`.
	assert key_types[1] is es_symbol
	assert key_types[2].flags & TypeFlags.ANY
	assert key_types[3].flags & TypeFlags.STRING_LITERAL
	assignable = [checker.is_type_assignable_to(t, es_symbol) for t in key_types]
	assert assignable == [True, True, True, False]
