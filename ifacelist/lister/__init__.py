# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Interface lister: turn a loaded program into an interface definition file.

Pipeline: `collect_interfaces` -> `deduplicate` -> `write_interface_file`.
"""

from .collector import collect_interfaces
from .dedup import deduplicate
from .output import DEFAULT_OUTPUT, OutputError, render_interface_file, write_interface_file
from .records import InterfaceRecord, Location
from .resolver import is_array_index_name, is_symbol_property, resolve_interface

__all__ = [
	"DEFAULT_OUTPUT",
	"InterfaceRecord",
	"Location",
	"OutputError",
	"collect_interfaces",
	"deduplicate",
	"is_array_index_name",
	"is_symbol_property",
	"render_interface_file",
	"write_interface_file",
	"resolve_interface",
]
