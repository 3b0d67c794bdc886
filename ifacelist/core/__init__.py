# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
ifacelist.core: shared helpers used across the front end and the lister.

Modules:
  - span: source locations attached to diagnostics
  - diagnostics: Diagnostic records and rendering helpers
  - jsnames: JavaScript property-name canonicalization and ordering
"""

__all__ = [
	"span",
	"diagnostics",
	"jsnames",
]
