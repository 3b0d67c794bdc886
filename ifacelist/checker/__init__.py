# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binder and type checker for the parsed TypeScript subset.

`create_program` loads sources into a `Program`; its `TypeChecker` answers
symbol, property and key-type queries.
"""

from .program import Program, ProgramLoadError, ProgramOptions, create_program
from .symbols import Scope, Symbol, SymbolFlags
from .type_checker import COMPUTED_PROPERTY_NAME, TypeChecker
from .types import InterfaceType, Type, TypeFlags

__all__ = [
	"COMPUTED_PROPERTY_NAME",
	"InterfaceType",
	"Program",
	"ProgramLoadError",
	"ProgramOptions",
	"Scope",
	"Symbol",
	"SymbolFlags",
	"Type",
	"TypeChecker",
	"TypeFlags",
	"create_program",
]
