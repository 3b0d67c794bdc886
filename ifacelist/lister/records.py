# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ifacelist.core.jsnames import js_sorted


@dataclass(frozen=True)
class Location:
	file_name: str
	# Full start of the declaration in UTF-16 code units; leading trivia belongs to it.
	position: int

	def describe(self) -> str:
		return f"{self.file_name}:{self.position}"


@dataclass(frozen=True)
class InterfaceRecord:
	"""One interface declaration with the property names it guarantees at runtime."""

	name: str
	properties: Tuple[str, ...]
	location: Location

	def shape_key(self) -> Tuple[str, ...]:
		"""Sorted, deduplicated property names; equal keys mean equal shapes."""
		return tuple(js_sorted(set(self.properties)))


__all__ = ["Location", "InterfaceRecord"]
