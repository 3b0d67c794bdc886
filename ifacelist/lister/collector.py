# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Interface collector: walk every loaded source file in document order and
resolve each interface declaration found along the way.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from ifacelist.checker import Program, TypeChecker
from ifacelist.parser import ast

from .records import InterfaceRecord
from .resolver import resolve_interface

Records = Tuple[InterfaceRecord, ...]


def collect_interfaces(program: Program) -> Records:
	checker = program.get_type_checker()
	acc: Records = ()
	for source in program.get_source_files():
		acc = _collect_statements(checker, source.file_name, source.statements, acc)
	return acc


def _collect_statements(checker: TypeChecker, file_name: str, statements: Iterable[ast.Stmt], acc: Records) -> Records:
	for stmt in statements:
		acc = _collect_stmt(checker, file_name, stmt, acc)
	return acc


def _collect_stmt(checker: TypeChecker, file_name: str, stmt: ast.Stmt, acc: Records) -> Records:
	if isinstance(stmt, ast.InterfaceDecl):
		return _collect_interface(checker, file_name, stmt, acc)
	if isinstance(stmt, ast.Block):
		return _collect_statements(checker, file_name, stmt.statements, acc)
	if isinstance(stmt, (ast.FunctionDecl, ast.NamespaceDecl)) and stmt.body is not None:
		return _collect_statements(checker, file_name, stmt.body.statements, acc)
	return acc


def _collect_interface(checker: TypeChecker, file_name: str, decl: ast.InterfaceDecl, acc: Records) -> Records:
	symbol = checker.get_symbol_at_location(decl)
	if symbol is None:
		return acc
	record = resolve_interface(checker, symbol, decl, file_name)
	if record is None or not record.properties:
		return acc
	return acc + (record,)


__all__ = ["collect_interfaces"]
