# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binder: walks parsed source files and declares every named entity into its
scope.

Script files (no top-level import or export) share the global scope; module
files get a scope of their own whose exports hang off a module symbol. Blocks,
function bodies and namespace bodies open nested scopes. `var` declarations
hoist to the nearest function-like scope.

A declaration that collides with an existing one of an incompatible kind is
reported as a "Duplicate identifier" warning and left unbound.
"""

from __future__ import annotations

import posixpath
from typing import Dict, List, Optional, Tuple

from ifacelist.core.diagnostics import Diagnostic
from ifacelist.core.span import Span
from ifacelist.parser import ast

from .symbols import EXCLUDES, Scope, Symbol, SymbolFlags


def normalize_file_name(file_name: str) -> str:
	return posixpath.normpath(file_name)


class Binder:
	def __init__(self) -> None:
		self.global_scope = Scope("global")
		self.file_symbols: Dict[str, Symbol] = {}
		self.ambient_modules: Dict[str, Symbol] = {}
		self.diagnostics: List[Diagnostic] = []
		# Side tables keyed by id() of AST nodes; the nodes outlive the binder.
		self.node_symbols: Dict[int, Symbol] = {}
		self.node_scopes: Dict[int, Scope] = {}
		self.declarator_kinds: Dict[int, str] = {}
		self.node_files: Dict[int, str] = {}
		self.source_files: Dict[str, ast.SourceFile] = {}
		self._file = ""

	def bind_file(self, source: ast.SourceFile) -> None:
		self._file = source.file_name
		self.source_files[source.file_name] = source
		if source.is_module:
			module_symbol = Symbol(source.file_name, SymbolFlags.MODULE)
			module_symbol.declarations.append(source)
			self.file_symbols[normalize_file_name(source.file_name)] = module_symbol
			scope = Scope("module", self.global_scope, container=module_symbol)
		else:
			scope = self.global_scope
		self._bind_statements(source.statements, scope)

	def symbol_of(self, node) -> Optional[Symbol]:
		return self.node_symbols.get(id(node))

	def scope_of(self, node) -> Optional[Scope]:
		return self.node_scopes.get(id(node))

	# --- Declarations ------------------------------------------------------

	def _bind_statements(self, statements, scope: Scope) -> None:
		deferred: List[ast.Stmt] = []
		for stmt in statements:
			if isinstance(stmt, (ast.ExportDecl, ast.ExportAssignment)):
				deferred.append(stmt)
				continue
			self._bind_stmt(stmt, scope)
		# Export lists may name declarations that come later in the file.
		for stmt in deferred:
			self._bind_export(stmt, scope)

	def _bind_stmt(self, stmt: ast.Stmt, scope: Scope) -> None:
		if isinstance(stmt, ast.InterfaceDecl):
			self._declare_statement(scope, stmt.name, SymbolFlags.INTERFACE, stmt, stmt.modifiers)
		elif isinstance(stmt, ast.TypeAliasDecl):
			self._declare_statement(scope, stmt.name, SymbolFlags.TYPE_ALIAS, stmt, stmt.modifiers)
		elif isinstance(stmt, ast.VariableStmt):
			self._bind_variables(stmt, scope)
		elif isinstance(stmt, ast.FunctionDecl):
			self._declare_statement(scope, stmt.name, SymbolFlags.FUNCTION, stmt, stmt.modifiers)
			body_scope = Scope("function", scope)
			for param in stmt.params:
				self._declare(body_scope.symbols, param.name, SymbolFlags.FUNCTION_SCOPED_VARIABLE, param, stmt.loc)
				self.node_scopes[id(param)] = body_scope
			if stmt.body is not None:
				self._bind_statements(stmt.body.statements, body_scope)
		elif isinstance(stmt, ast.NamespaceDecl):
			self._bind_namespace(stmt, scope)
		elif isinstance(stmt, ast.EnumDecl):
			self._bind_enum(stmt, scope)
		elif isinstance(stmt, ast.Block):
			self._bind_statements(stmt.statements, Scope("block", scope, ambient=scope.ambient))
		elif isinstance(stmt, ast.ImportDecl):
			self._bind_import(stmt, scope)

	def _bind_variables(self, stmt: ast.VariableStmt, scope: Scope) -> None:
		if stmt.kind == "var":
			flag = SymbolFlags.FUNCTION_SCOPED_VARIABLE
			target = scope
			while not target.is_function_scope:
				target = target.parent
		else:
			flag = SymbolFlags.BLOCK_SCOPED_VARIABLE
			target = scope
		for declarator in stmt.declarators:
			self.declarator_kinds[id(declarator)] = stmt.kind
			symbol = self._declare_statement(target, declarator.name, flag, declarator, stmt.modifiers)
			if symbol is not None:
				# Initializers evaluate in the enclosing block, not the hoisting target.
				self.node_scopes[id(declarator)] = scope

	def _bind_namespace(self, stmt: ast.NamespaceDecl, scope: Scope) -> None:
		if stmt.body is None:
			return
		if stmt.is_global:
			self._bind_statements(stmt.body.statements, self.global_scope)
			return
		if stmt.is_ambient_module:
			module_name = stmt.name[0]
			symbol = self.ambient_modules.get(module_name)
			if symbol is None:
				symbol = Symbol(module_name, SymbolFlags.MODULE)
				self.ambient_modules[module_name] = symbol
			symbol.declarations.append(stmt)
			self.node_symbols[id(stmt)] = symbol
			body_scope = Scope("module", self.global_scope, container=symbol, ambient=True)
			self._bind_statements(stmt.body.statements, body_scope)
			return

		ambient = scope.ambient or "declare" in stmt.modifiers
		outer = scope
		container = self._declare_statement(scope, stmt.name[0], SymbolFlags.NAMESPACE, stmt, stmt.modifiers)
		if container is None:
			container = Symbol(stmt.name[0], SymbolFlags.NAMESPACE)
		for part in stmt.name[1:]:
			outer = Scope("namespace", outer, container=container, ambient=ambient)
			inner = self._declare(container.exports, part, SymbolFlags.NAMESPACE, stmt, stmt.loc)
			container = inner if inner is not None else Symbol(part, SymbolFlags.NAMESPACE)
		body_scope = Scope("namespace", outer, container=container, ambient=ambient)
		self._bind_statements(stmt.body.statements, body_scope)

	def _bind_enum(self, stmt: ast.EnumDecl, scope: Scope) -> None:
		symbol = self._declare_statement(scope, stmt.name, SymbolFlags.ENUM, stmt, stmt.modifiers)
		if symbol is None:
			return
		for member in stmt.members:
			member_symbol = self._declare(symbol.exports, member.name, SymbolFlags.ENUM_MEMBER, member, member.loc)
			if member_symbol is not None:
				member_symbol.parent = symbol
				self.node_scopes[id(member)] = scope

	def _bind_import(self, stmt: ast.ImportDecl, scope: Scope) -> None:
		bindings: List[Tuple[str, Optional[str]]] = []
		if stmt.default is not None:
			bindings.append((stmt.default, "default"))
		if stmt.namespace is not None:
			bindings.append((stmt.namespace, None))
		for spec in stmt.specs:
			bindings.append((spec.alias or spec.name, spec.name))
		for local_name, export_name in bindings:
			symbol = self._declare(scope.symbols, local_name, SymbolFlags.ALIAS, stmt, stmt.loc)
			if symbol is not None:
				symbol.alias_target = (self._file, stmt.module, export_name)

	def _bind_export(self, stmt: ast.Stmt, scope: Scope) -> None:
		container = scope.container
		if container is None:
			return
		if isinstance(stmt, ast.ExportAssignment):
			if isinstance(stmt.value, ast.Name):
				self._export_local(container, scope, stmt.value.ident, "export=", stmt)
			return
		if stmt.star:
			if stmt.star_alias is None:
				container.star_exports.append((self._file, stmt.module))
				return
			symbol = self._declare(container.exports, stmt.star_alias, SymbolFlags.ALIAS, stmt, stmt.loc)
			if symbol is not None:
				symbol.alias_target = (self._file, stmt.module, None)
			return
		for spec in stmt.specs:
			exported_name = spec.alias or spec.name
			if stmt.module is not None:
				symbol = self._declare(container.exports, exported_name, SymbolFlags.ALIAS, stmt, stmt.loc)
				if symbol is not None:
					symbol.alias_target = (self._file, stmt.module, spec.name)
			else:
				self._export_local(container, scope, spec.name, exported_name, stmt)

	def _export_local(self, container: Symbol, scope: Scope, name: str, exported_name: str, stmt: ast.Stmt) -> None:
		local = scope.symbols.get(name) or scope.lookup(name, SymbolFlags.VALUE | SymbolFlags.TYPE | SymbolFlags.CONTAINER)
		if local is None:
			self._warn(f"Cannot find name '{name}'.", stmt.loc, "TS2304")
			return
		if container.exports.get(exported_name, local) is not local:
			self._warn(f"Duplicate identifier '{exported_name}'.", stmt.loc, "TS2300")
			return
		container.exports[exported_name] = local

	# --- Symbol tables -----------------------------------------------------

	def _declare_statement(
		self,
		scope: Scope,
		name: str,
		flag: SymbolFlags,
		node,
		modifiers: Tuple[str, ...],
	) -> Optional[Symbol]:
		exported = "export" in modifiers or scope.ambient
		if exported and scope.container is not None:
			table = scope.container.exports
		else:
			table = scope.symbols
		symbol = self._declare(table, name, flag, node, node.loc)
		if symbol is None:
			return None
		symbol.parent = scope.container
		self.node_scopes[id(node)] = scope
		if "default" in modifiers and scope.container is not None:
			scope.container.exports.setdefault("default", symbol)
		return symbol

	def _declare(self, table: Dict[str, Symbol], name: str, flag: SymbolFlags, node, loc) -> Optional[Symbol]:
		symbol = table.get(name)
		if symbol is None:
			symbol = Symbol(name, flag)
			table[name] = symbol
		elif symbol.flags & EXCLUDES[flag]:
			self._warn(f"Duplicate identifier '{name}'.", loc, "TS2300")
			return None
		else:
			symbol.flags |= flag
		symbol.declarations.append(node)
		self.node_symbols[id(node)] = symbol
		self.node_files[id(node)] = self._file
		return symbol

	def _warn(self, message: str, loc, code: Optional[str] = None) -> None:
		self.diagnostics.append(
			Diagnostic(
				message=message,
				code=code,
				phase="checker",
				severity="warning",
				span=Span.from_loc(loc, self._file),
			)
		)


__all__ = ["Binder", "normalize_file_name"]
