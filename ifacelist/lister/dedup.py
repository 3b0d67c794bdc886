# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Deduplicator: collapse interfaces by shape, then disambiguate by name.

Phase 1 groups records whose sorted property lists are equal. The first
record of a group is kept; when the group holds several names it is renamed
to those names, sorted and joined with "|" (`X|Y|Z`).

Phase 2 groups the surviving records by name. A name held by one record is
emitted as is; a name held by several records with different shapes is
emitted once per record with a `" from <file>:<position>"` suffix. Each
declaration has its own location, so suffixed keys never collide.
"""

from __future__ import annotations

import dataclasses
from typing import Dict, Iterable, List, Tuple

from ifacelist.core.jsnames import js_sorted

from .records import InterfaceRecord

NAME_SEPARATOR = "|"


def group_by_shape(records: Iterable[InterfaceRecord]) -> Dict[Tuple[str, ...], List[InterfaceRecord]]:
	groups: Dict[Tuple[str, ...], List[InterfaceRecord]] = {}
	for record in records:
		groups.setdefault(record.shape_key(), []).append(record)
	return groups


def primary_of(group: List[InterfaceRecord]) -> InterfaceRecord:
	"""First record of a shape group, renamed after every distinct name in the group."""
	primary = group[0]
	names = js_sorted({record.name for record in group})
	if len(names) > 1:
		primary = dataclasses.replace(primary, name=NAME_SEPARATOR.join(names))
	return primary


def group_by_name(records: Iterable[InterfaceRecord]) -> Dict[str, List[InterfaceRecord]]:
	groups: Dict[str, List[InterfaceRecord]] = {}
	for record in records:
		groups.setdefault(record.name, []).append(record)
	return groups


def deduplicate(records: Iterable[InterfaceRecord]) -> Dict[str, List[str]]:
	primaries = [primary_of(group) for group in group_by_shape(records).values()]
	result: Dict[str, List[str]] = {}
	for name, group in group_by_name(primaries).items():
		for record in group:
			key = name if len(group) == 1 else f"{name} from {record.location.describe()}"
			result[key] = js_sorted(record.properties)
	return result


__all__ = ["NAME_SEPARATOR", "group_by_shape", "group_by_name", "primary_of", "deduplicate"]
