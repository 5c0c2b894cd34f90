"""Semantic versions of the form ``MAJOR.MINOR.PATCH``.

Each component is a non-negative decimal integer without leading
zeros and must fit in an unsigned 16-bit integer.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from elm_outline.grammar.errors import GrammarError

MAX_COMPONENT: Final[int] = 0xFFFF

_VERSION_RE: Final[re.Pattern[str]] = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)")


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """An exact version such as ``1.0.5``."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if any(part < 0 or part > MAX_COMPONENT for part in (self.major, self.minor, self.patch)):
            raise GrammarError(
                f"{self.major}.{self.minor}.{self.patch}",
                f"version numbers must be between 0 and {MAX_COMPONENT}",
            )

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``text`` or raise ``GrammarError``."""
        match = _VERSION_RE.fullmatch(text)
        if match is None:
            raise GrammarError(text, "expecting a version like 1.0.0")
        parts = tuple(int(group) for group in match.groups())
        if any(part > MAX_COMPONENT for part in parts):
            raise GrammarError(text, f"version numbers must be at most {MAX_COMPONENT}")
        return cls(*parts)
