"""Manifest data model and JSON encoder.

Exports the outline node types, ``flatten_exposed``, and the
serializer that turns an ``Outline`` back into manifest JSON.
"""
from __future__ import annotations

from elm_outline.outline.nodes import (
    DEFAULT_SUMMARY,
    MAX_HEADER_LENGTH,
    MAX_SUMMARY_LENGTH,
    AppOutline,
    DependencyMap,
    Exposed,
    ExposedList,
    ExposedSections,
    Outline,
    PkgOutline,
    flatten_exposed,
)
from elm_outline.outline.serializer import OutlineSerializer, encode, to_json

__all__ = [
    # Node types
    "Outline",
    "AppOutline",
    "PkgOutline",
    "DependencyMap",
    "Exposed",
    "ExposedList",
    "ExposedSections",
    # Constants
    "DEFAULT_SUMMARY",
    "MAX_HEADER_LENGTH",
    "MAX_SUMMARY_LENGTH",
    # Helpers
    "flatten_exposed",
    # Serializer
    "OutlineSerializer",
    "encode",
    "to_json",
]
