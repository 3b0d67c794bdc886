# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: load sources, list their interfaces, write the file.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ifacelist.checker import ProgramLoadError, ProgramOptions, create_program
from ifacelist.core.diagnostics import Diagnostic
from ifacelist.core.span import Span
from ifacelist.lister import DEFAULT_OUTPUT, OutputError, collect_interfaces, deduplicate, write_interface_file


def _report(diagnostics: List[Diagnostic], exit_code: int, as_json: bool, interfaces: Optional[int] = None) -> int:
	if as_json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [d.to_json() for d in diagnostics],
		}
		if interfaces is not None:
			payload["interfaces"] = interfaces
		print(json.dumps(payload))
	else:
		for d in diagnostics:
			print(d.render(), file=sys.stderr)
	return exit_code


def main(argv: list[str] | None = None) -> int:
	"""
	List the interfaces declared in SOURCE files into an interface definition file.

	Syntax errors and unreadable inputs are fatal and nothing is written.
	Semantic problems are reported as warnings and the run continues. With
	--json, prints `{"exit_code", "diagnostics", "interfaces"}` on stdout;
	otherwise prints human-readable diagnostics to stderr.
	"""
	parser = argparse.ArgumentParser(prog="ifacelist", description="List TypeScript interfaces as property-name sets")
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to TypeScript source file(s)")
	parser.add_argument(
		"-o",
		"--output",
		type=Path,
		default=DEFAULT_OUTPUT,
		help=f"Path of the interface definition file (default: {DEFAULT_OUTPUT})",
	)
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/file/line/column)",
	)
	parser.add_argument(
		"--no-warnings",
		dest="warnings",
		action="store_false",
		help="Suppress checker warnings",
	)
	parser.add_argument("--encoding", default="utf-8", help="Source file encoding (default: utf-8)")
	parser.add_argument(
		"--no-default-lib",
		action="store_true",
		help="Do not load the bundled ECMAScript core interfaces (Error, Array, Promise, ...)",
	)
	args = parser.parse_args(argv)

	options = ProgramOptions(
		encoding=args.encoding,
		keep_warnings=args.warnings,
		no_default_lib=args.no_default_lib,
	)
	try:
		program = create_program(args.source, options)
	except ProgramLoadError as err:
		return _report(err.diagnostics, 1, args.json)

	mapping = deduplicate(collect_interfaces(program))
	# The checker reports lazily, so diagnostics are complete only after collection.
	diagnostics = program.diagnostics
	try:
		write_interface_file(mapping, args.output)
	except OutputError as err:
		failure = Diagnostic(message=str(err), phase="output", span=Span(file=str(err.path)))
		return _report(diagnostics + [failure], 1, args.json)
	return _report(diagnostics, 0, args.json, interfaces=len(mapping))


__all__ = ["main"]
