# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
TypeScript declaration parser.

`parse_source` turns text into a `SourceFile` AST; `parse_file` reads a path
first. Syntax errors surface as `lark.exceptions.UnexpectedInput`, invalid
constructs as `ParseError`.
"""

from __future__ import annotations

from pathlib import Path

from . import ast
from .parser import ParseError, parse_source


def parse_file(path: Path, encoding: str = "utf-8", file_name: str | None = None) -> ast.SourceFile:
	text = Path(path).read_text(encoding=encoding)
	return parse_source(text, file_name=file_name or Path(path).as_posix())


__all__ = ["ast", "ParseError", "parse_source", "parse_file"]
