# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Program loading: read, parse and bind a fixed set of source files.

Loading is all-or-nothing. Every file is read and parsed before any binding
happens; an unreadable file or a syntax error anywhere raises
`ProgramLoadError` carrying one diagnostic per failing file.

The bundled `lib.d.ts` is bound first, into the global scope, so user code can
extend `Error`, `Array` and the other core interfaces. It is not one of the
program's source files and is never listed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Iterable, List, Optional

from lark.exceptions import UnexpectedInput

from ifacelist.core.diagnostics import Diagnostic, has_errors
from ifacelist.core.span import Span
from ifacelist.parser import ParseError, parse_source
from ifacelist.parser.ast import SourceFile

from .binder import Binder, normalize_file_name
from .type_checker import TypeChecker

DEFAULT_LIB_PATH = Path(__file__).with_name("lib.d.ts")


@dataclass
class ProgramOptions:
	"""Loader settings."""

	encoding: str = "utf-8"
	# Keep checker-phase warnings in `Program.diagnostics`.
	keep_warnings: bool = True
	# Skip the bundled ECMAScript library; bases like `Error` then go unresolved.
	no_default_lib: bool = False


class ProgramLoadError(Exception):
	"""Raised when any input cannot be read or parsed."""

	def __init__(self, diagnostics: List[Diagnostic]) -> None:
		super().__init__("; ".join(diag.render() for diag in diagnostics))
		self.diagnostics = diagnostics


@dataclass
class Program:
	source_files: List[SourceFile]
	binder: Binder
	checker: TypeChecker
	options: ProgramOptions = field(default_factory=ProgramOptions)

	def get_source_files(self) -> List[SourceFile]:
		return list(self.source_files)

	def get_type_checker(self) -> TypeChecker:
		return self.checker

	@property
	def diagnostics(self) -> List[Diagnostic]:
		"""Semantic diagnostics reported so far (the checker reports lazily)."""
		if not self.options.keep_warnings:
			return [diag for diag in self.binder.diagnostics + self.checker.diagnostics if diag.severity == "error"]
		return self.binder.diagnostics + self.checker.diagnostics


def create_program(paths: Iterable, options: Optional[ProgramOptions] = None) -> Program:
	options = options or ProgramOptions()
	diagnostics: List[Diagnostic] = []
	sources: List[SourceFile] = []
	seen = set()
	for path in paths:
		file_name = PurePath(path).as_posix()
		if normalize_file_name(file_name) in seen:
			continue
		seen.add(normalize_file_name(file_name))
		try:
			text = Path(path).read_text(encoding=options.encoding)
		except (OSError, UnicodeDecodeError) as err:
			diagnostics.append(
				Diagnostic(
					message=f"cannot read source file: {err}",
					phase="loader",
					span=Span(file=file_name),
				)
			)
			continue
		try:
			sources.append(parse_source(text, file_name=file_name))
		except UnexpectedInput as err:
			span = Span(
				file=file_name,
				line=getattr(err, "line", None),
				column=getattr(err, "column", None),
				raw=err,
			)
			diagnostics.append(Diagnostic(message=str(err), phase="parser", severity="error", span=span))
		except ParseError as err:
			diagnostics.append(
				Diagnostic(
					message=err.message,
					phase="parser",
					severity="error",
					span=Span.from_loc(err.loc, file_name),
				)
			)
	if has_errors(diagnostics):
		raise ProgramLoadError(diagnostics)

	binder = Binder()
	if not options.no_default_lib:
		binder.bind_file(parse_source(DEFAULT_LIB_PATH.read_text(encoding="utf-8"), file_name=DEFAULT_LIB_PATH.as_posix()))
	for source in sources:
		binder.bind_file(source)
	return Program(source_files=sources, binder=binder, checker=TypeChecker(binder), options=options)


__all__ = ["ProgramOptions", "ProgramLoadError", "Program", "create_program"]
