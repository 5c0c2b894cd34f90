"""Error types for the manifest decoder.

JSON decoding is fail-fast: the first problem aborts the whole decode
and is raised as a single ``DecodeError``.  Every error carries the JSON
path of the value that failed and, for grammar failures, the offending
literal, so that the CLI can print a precise message.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

PathPart = Union[str, int]


class OutlineError(Exception):
    """Base class for every recoverable manifest failure."""


class ErrorKind(Enum):
    """The structural category of a ``DecodeError``.

    BAD_JSON
        The input is not well-formed JSON (or not UTF-8).
    EXPECTING
        A value had the wrong JSON type.
    MISSING_FIELD
        A required object field is absent.
    PROBLEM
        The value had the right shape but broke a manifest rule; see
        ``DecodeError.problem``.
    ONE_OF
        None of several alternative shapes matched; see
        ``DecodeError.alternatives``.
    """

    BAD_JSON = auto()
    EXPECTING = auto()
    MISSING_FIELD = auto()
    PROBLEM = auto()
    ONE_OF = auto()


class OutlineProblem(Enum):
    """Field-specific manifest problems."""

    BAD_TYPE = auto()
    BAD_PKG_NAME = auto()
    BAD_LICENSE = auto()
    BAD_SUMMARY_TOO_LONG = auto()
    NO_SRC_DIRS = auto()
    BAD_DEPENDENCY_NAME = auto()
    BAD_VERSION = auto()
    BAD_CONSTRAINT = auto()
    BAD_MODULE_NAME = auto()
    BAD_MODULE_HEADER_TOO_LONG = auto()


@dataclass(frozen=True)
class DecodeError(OutlineError):
    """A single manifest decoding failure.

    Parameters
    ----------
    kind:
        Structural category of the failure.
    message:
        Human-readable description of the failure.
    path:
        JSON path from the document root to the failing value.
    problem:
        The field-specific problem, set when ``kind`` is ``PROBLEM``.
    literal:
        The offending literal value, when there is one.
    alternatives:
        The errors of each attempted shape, when ``kind`` is ``ONE_OF``.
    suggestions:
        Close matches for the offending literal, if any are known.
    """

    kind: ErrorKind
    message: str
    path: tuple[PathPart, ...] = field(default=())
    problem: OutlineProblem | None = field(default=None)
    literal: str | None = field(default=None)
    alternatives: tuple["DecodeError", ...] = field(default=())
    suggestions: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))

    def __str__(self) -> str:
        where = format_path(self.path)
        lines = [f"{where}: {self.message}" if where else self.message]
        if self.suggestions:
            lines.append("  maybe you want one of: " + ", ".join(self.suggestions))
        for index, alternative in enumerate(self.alternatives, start=1):
            lines.append(f"  ({index}) {alternative}")
        return "\n".join(lines)

    def find_problem(self) -> OutlineProblem | None:
        """Return the first field-specific problem in this error tree."""
        if self.problem is not None:
            return self.problem
        for alternative in self.alternatives:
            found = alternative.find_problem()
            if found is not None:
                return found
        return None


def format_path(path: tuple[PathPart, ...]) -> str:
    """Render a JSON path such as ``dependencies.direct['elm/core']``."""
    out = ""
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        elif part.replace("-", "").replace("_", "").isalnum():
            out += f".{part}" if out else part
        else:
            out += f"[{part!r}]"
    return out
