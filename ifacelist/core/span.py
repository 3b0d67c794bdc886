# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source positions attached to diagnostics.

A Span is a file name plus 1-based line and column, any of which may be
unknown. Parser locations (`Located`) and lark errors both convert into spans.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	# Underlying parser object (a lark exception for syntax errors), if any.
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
		"""Span for a parser `Located` in `file`; a missing or unpositioned loc keeps only the file."""
		if loc is None or not getattr(loc, "line", 0):
			return cls(file=file)
		return cls(file=file, line=loc.line, column=loc.column)

	def describe(self) -> str:
		"""Render as `file:line:column`, dropping unknown trailing parts."""
		parts = [self.file or "<unknown>"]
		if self.line is not None:
			parts.append(str(self.line))
			if self.column is not None:
				parts.append(str(self.column))
		return ":".join(parts)


__all__ = ["Span"]
