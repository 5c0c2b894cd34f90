"""Error type shared by the leaf grammars.

Every grammar in this package raises ``GrammarError`` when a literal
does not match.  The JSON decoder converts these into field-specific
``OutlineProblem`` codes so that callers know *which* manifest field
held the bad value.
"""
from __future__ import annotations


class GrammarError(ValueError):
    """Raised when a literal does not match a leaf grammar.

    Parameters
    ----------
    literal:
        The exact text that failed to parse.
    reason:
        Human-readable explanation of the mismatch.
    suggestions:
        Optional close matches, used by the license grammar.
    """

    def __init__(
        self,
        literal: str,
        reason: str,
        suggestions: tuple[str, ...] = (),
    ) -> None:
        self.literal = literal
        self.reason = reason
        self.suggestions = suggestions
        super().__init__(f"{literal!r}: {reason}")
