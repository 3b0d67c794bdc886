# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

from ifacelist.checker import create_program
from ifacelist.lister import collect_interfaces


def _collect(tmp_path: Path, *sources: str):
	paths = []
	for index, src in enumerate(sources):
		path = tmp_path / f"file{index}.ts"
		path.write_text(src, encoding="utf-8")
		paths.append(path)
	return collect_interfaces(create_program(paths)), paths


def test_collects_nested_declarations_in_document_order(tmp_path: Path) -> None:
	src = """
interface Top { t: string }
function f() {
	interface InFunction { f: string }
	{ interface InBlock { b: string } }
}
namespace N {
	export interface InNamespace { n: string }
	namespace Deeper { interface Deepest { d: string } }
}
declare global { interface InGlobal { g: string } }
declare module "ambient" { interface InModule { m: string } }
interface Last { l: string }
"""
	records, _ = _collect(tmp_path, src)
	assert isinstance(records, tuple)
	assert [r.name for r in records] == [
		"Top",
		"InFunction",
		"InBlock",
		"InNamespace",
		"Deepest",
		"InGlobal",
		"InModule",
		"Last",
	]


def test_skips_empty_and_rejected_interfaces(tmp_path: Path) -> None:
	src = """
const sym = Symbol();
interface Empty {}
interface OnlyOptional { a?: string; b?(): void }
interface OnlySignatures { [k: string]: number; (): void }
interface Symbolic { x: string; [sym]: number }
interface Indexed { x: string; 0: number }
interface Kept { k: string }
"""
	records, _ = _collect(tmp_path, src)
	assert [r.name for r in records] == ["Kept"]


def test_merged_declarations_each_produce_a_record(tmp_path: Path) -> None:
	src = "interface Foo { a: string }\ninterface Foo { b: string }\n"
	records, (path,) = _collect(tmp_path, src)
	first, second = records
	assert first.properties == second.properties == ("a", "b")
	assert first.location.position == 0
	assert second.location.position == src.index("\ninterface Foo { b")
	assert first.location.file_name == path.as_posix()


def test_unbound_declarations_are_skipped(tmp_path: Path) -> None:
	records, _ = _collect(tmp_path, "type Dup = { a: string };\ninterface Dup { b: string }\n")
	assert records == ()


def test_files_are_visited_in_the_given_order(tmp_path: Path) -> None:
	records, paths = _collect(
		tmp_path,
		"export interface Second { s: string }\n",
		"export interface First { f: string }\n",
	)
	assert [(r.name, r.location.file_name) for r in records] == [
		("Second", paths[0].as_posix()),
		("First", paths[1].as_posix()),
	]


def test_library_interfaces_are_resolvable_but_not_collected(tmp_path: Path) -> None:
	records, _ = _collect(tmp_path, "interface AppError extends Error { code: string }\n")
	assert [(r.name, r.properties) for r in records] == [("AppError", ("code", "name", "message"))]
