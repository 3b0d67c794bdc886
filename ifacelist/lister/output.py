# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Interface definition file writer.

The file is a single JSON object mapping interface names to sorted property
lists, indented by two spaces, non-ASCII text kept verbatim and no trailing
newline. It is staged next to the destination and moved into place, so a
failed write never leaves a truncated file behind.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Mapping, Sequence

DEFAULT_OUTPUT = Path("interfaces.json")


class OutputError(Exception):
	"""Raised when the interface definition file cannot be written."""

	def __init__(self, path: Path, cause: OSError) -> None:
		super().__init__(f"cannot write {path}: {cause}")
		self.path = path
		self.cause = cause


def render_interface_file(mapping: Mapping[str, Sequence[str]]) -> str:
	return json.dumps({name: list(props) for name, props in mapping.items()}, indent=2, ensure_ascii=False)


def write_interface_file(mapping: Mapping[str, Sequence[str]], path: Path = DEFAULT_OUTPUT) -> Path:
	path = Path(path)
	tmp = path.with_name(path.name + f".tmp.{os.getpid()}")
	try:
		tmp.write_text(render_interface_file(mapping), encoding="utf-8")
		os.replace(tmp, path)
	except OSError as err:
		if tmp.exists():
			tmp.unlink()
		raise OutputError(path, err) from err
	return path


__all__ = ["DEFAULT_OUTPUT", "OutputError", "render_interface_file", "write_interface_file"]
