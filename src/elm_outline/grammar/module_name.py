"""Module names such as ``Json.Decode``.

A module name is one or more dot-separated segments.  Each segment
starts with an uppercase letter followed by letters, digits or ``_``.
"""
from __future__ import annotations

import re
from typing import Final

from elm_outline.grammar.errors import GrammarError

_SEGMENT_RE: Final[re.Pattern[str]] = re.compile(r"[A-Z][A-Za-z0-9_]*")


def parse_module_name(text: str) -> str:
    """Return ``text`` unchanged if it is a valid module name, else raise ``GrammarError``."""
    if not text:
        raise GrammarError(text, "expecting a module name like Json.Decode")
    for segment in text.split("."):
        if not _SEGMENT_RE.fullmatch(segment):
            raise GrammarError(
                text,
                f"segment {segment!r} must start with an uppercase letter and"
                " contain only letters, digits and underscores",
            )
    return text


def is_module_name(text: str) -> bool:
    """Return True if ``text`` is a valid module name."""
    try:
        parse_module_name(text)
    except GrammarError:
        return False
    return True
