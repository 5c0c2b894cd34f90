"""Package names of the form ``author/project``.

Authors are GitHub-style user names.  Projects are lowercase, may use
dashes between words, and must start with a letter.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from elm_outline.grammar.errors import GrammarError

MAX_PROJECT_LENGTH: Final[int] = 256

_AUTHOR_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9]+(-[A-Za-z0-9]+)*")
_PROJECT_RE: Final[re.Pattern[str]] = re.compile(r"[a-z][a-z0-9]*(-[a-z0-9]+)*")


@dataclass(frozen=True, slots=True, order=True)
class PackageName:
    """The identity of a published package, e.g. ``elm/core``."""

    author: str
    project: str

    def __str__(self) -> str:
        return f"{self.author}/{self.project}"

    @classmethod
    def parse(cls, text: str) -> "PackageName":
        """Parse ``text`` or raise ``GrammarError``."""
        author, slash, project = text.partition("/")
        if not slash:
            raise GrammarError(text, "expecting a name like author/project")
        if not _AUTHOR_RE.fullmatch(author):
            raise GrammarError(
                text,
                "the author may only contain letters, digits and single dashes between them",
            )
        if len(project) >= MAX_PROJECT_LENGTH:
            raise GrammarError(text, f"the project name must be under {MAX_PROJECT_LENGTH} characters")
        if not _PROJECT_RE.fullmatch(project):
            raise GrammarError(
                text,
                "the project must start with a lowercase letter and use only"
                " lowercase letters, digits and single dashes",
            )
        return cls(author, project)
