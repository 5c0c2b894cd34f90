"""Version constraints of the form ``1.0.0 <= v < 2.0.0``.

Both comparison operators are either ``<`` or ``<=``.  A constraint is
only valid when it can be satisfied: the lower bound must be below the
upper bound, or equal to it with both operators inclusive.  Words are
separated by exactly one space.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

from elm_outline.grammar.errors import GrammarError
from elm_outline.grammar.version import Version

# Exactly one space between words, no leading or trailing whitespace.
_CONSTRAINT_RE: Final[re.Pattern[str]] = re.compile(r"(\S+) (<=|<) v (<=|<) (\S+)")


class Op(Enum):
    """Comparison operator used on either side of ``v``."""

    LESS_THAN = "<"
    LESS_OR_EQUAL = "<="

    def allows(self, lower: Version, upper: Version) -> bool:
        if self is Op.LESS_THAN:
            return lower < upper
        return lower <= upper


@dataclass(frozen=True, slots=True)
class Constraint:
    """A version range ``lower <op> v <op> upper``."""

    lower: Version
    lower_op: Op
    upper_op: Op
    upper: Version

    def __post_init__(self) -> None:
        if not _is_satisfiable(self.lower, self.lower_op, self.upper_op, self.upper):
            raise GrammarError(str(self), "the lower bound must be below the upper bound")

    def __str__(self) -> str:
        return f"{self.lower} {self.lower_op.value} v {self.upper_op.value} {self.upper}"

    @classmethod
    def parse(cls, text: str) -> "Constraint":
        """Parse ``text`` or raise ``GrammarError``."""
        match = _CONSTRAINT_RE.fullmatch(text)
        if match is None:
            raise GrammarError(text, "expecting a constraint like 1.0.0 <= v < 2.0.0")
        try:
            lower = Version.parse(match.group(1))
            lower_op = Op(match.group(2))
            upper_op = Op(match.group(3))
            upper = Version.parse(match.group(4))
        except GrammarError:
            raise GrammarError(text, "expecting a constraint like 1.0.0 <= v < 2.0.0") from None
        if not _is_satisfiable(lower, lower_op, upper_op, upper):
            raise GrammarError(text, "the lower bound must be below the upper bound")
        return cls(lower, lower_op, upper_op, upper)

    def satisfies(self, version: Version) -> bool:
        """Return True if ``version`` lies inside this range."""
        return self.lower_op.allows(self.lower, version) and self.upper_op.allows(
            version, self.upper
        )


def _is_satisfiable(lower: Version, lower_op: Op, upper_op: Op, upper: Version) -> bool:
    if lower < upper:
        return True
    return lower == upper and lower_op is Op.LESS_OR_EQUAL and upper_op is Op.LESS_OR_EQUAL
