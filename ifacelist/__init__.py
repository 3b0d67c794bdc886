# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
ifacelist package: list TypeScript interfaces as runtime property-name sets.

Packages:
  core: spans, diagnostics and JavaScript naming helpers
  parser: lark grammar and dataclass AST
  checker: binder, type checker and program loading
  lister: property resolver, collector, deduplicator and output writer
"""

__version__ = "0.1.0"

__all__ = ["core", "parser", "checker", "lister"]
