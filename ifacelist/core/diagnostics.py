# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the loader, parser and checker.

A diagnostic is a message plus a phase label, a severity and a span. The CLI
renders diagnostics either as text on stderr or as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a front-end diagnostic (error/warning)."""

	message: str
	code: str | None = None
	# Phase that produced the diagnostic: "loader", "parser", "checker" or "output".
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def render(self) -> str:
		"""Human-readable one-line form: `file:line:col: severity: message [code]`."""
		text = f"{self.span.describe()}: {self.severity}: {self.message}"
		if self.code:
			text += f" [{self.code}]"
		return text

	def to_json(self, default_phase: str | None = None) -> dict:
		"""Render to a JSON-friendly dict (phase/message/severity/file/line/column)."""
		return {
			"phase": self.phase or default_phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
	return any(d.severity == "error" for d in diagnostics)


__all__ = ["Diagnostic", "has_errors"]
