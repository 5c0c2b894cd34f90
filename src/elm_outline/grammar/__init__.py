"""Leaf grammars used by the manifest decoder.

Exports the value types for versions, constraints, package names and
licenses, the module-name validator, and the shared ``GrammarError``.
"""
from __future__ import annotations

from elm_outline.grammar.constraint import Constraint, Op
from elm_outline.grammar.errors import GrammarError
from elm_outline.grammar.licenses import OSI_APPROVED, License
from elm_outline.grammar.module_name import is_module_name, parse_module_name
from elm_outline.grammar.package import PackageName
from elm_outline.grammar.version import Version

__all__ = [
    "Constraint",
    "Op",
    "GrammarError",
    "License",
    "OSI_APPROVED",
    "PackageName",
    "Version",
    "is_module_name",
    "parse_module_name",
]
