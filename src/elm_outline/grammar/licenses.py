"""OSI-approved SPDX license identifiers.

Unknown identifiers fail with suggestions so that a typo such as
``bsd-3-clause`` can be answered with ``BSD-3-Clause``.
"""
from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Final, NoReturn

from elm_outline.grammar.errors import GrammarError

OSI_APPROVED: Final[dict[str, str]] = {
    "0BSD": "BSD Zero Clause License",
    "AFL-3.0": "Academic Free License v3.0",
    "AGPL-3.0": "GNU Affero General Public License v3.0",
    "Apache-2.0": "Apache License 2.0",
    "APSL-2.0": "Apple Public Source License 2.0",
    "Artistic-2.0": "Artistic License 2.0",
    "BSD-2-Clause": 'BSD 2-clause "Simplified" License',
    "BSD-3-Clause": 'BSD 3-clause "New" or "Revised" License',
    "BSL-1.0": "Boost Software License 1.0",
    "CDDL-1.0": "Common Development and Distribution License 1.0",
    "EFL-2.0": "Eiffel Forum License v2.0",
    "EPL-1.0": "Eclipse Public License 1.0",
    "EPL-2.0": "Eclipse Public License 2.0",
    "EUPL-1.1": "European Union Public License 1.1",
    "EUPL-1.2": "European Union Public License 1.2",
    "GPL-2.0": "GNU General Public License v2.0 only",
    "GPL-3.0": "GNU General Public License v3.0 only",
    "ISC": "ISC License",
    "LGPL-2.1": "GNU Lesser General Public License v2.1 only",
    "LGPL-3.0": "GNU Lesser General Public License v3.0 only",
    "LPPL-1.3c": "LaTeX Project Public License v1.3c",
    "MIT": "MIT License",
    "MPL-1.1": "Mozilla Public License 1.1",
    "MPL-2.0": "Mozilla Public License 2.0",
    "MS-PL": "Microsoft Public License",
    "MS-RL": "Microsoft Reciprocal License",
    "NCSA": "University of Illinois/NCSA Open Source License",
    "OFL-1.1": "SIL Open Font License 1.1",
    "OSL-3.0": "Open Software License 3.0",
    "PostgreSQL": "PostgreSQL License",
    "UPL-1.0": "Universal Permissive License v1.0",
    "Unlicense": "The Unlicense",
    "W3C": "W3C Software Notice and License (2002-12-31)",
    "Zlib": "zlib License",
    "ZPL-2.0": "Zope Public License 2.0",
}

_BY_LOWER: Final[dict[str, str]] = {code.lower(): code for code in OSI_APPROVED}


@dataclass(frozen=True, slots=True)
class License:
    """An SPDX license identifier, e.g. ``BSD-3-Clause``."""

    code: str

    def __str__(self) -> str:
        return self.code

    @property
    def name(self) -> str:
        """Return the full license name."""
        return OSI_APPROVED[self.code]

    @classmethod
    def parse(cls, text: str) -> "License":
        """Parse ``text`` or raise ``GrammarError`` with suggestions."""
        if text in OSI_APPROVED:
            return cls(text)
        return _fail(text)


def _fail(text: str) -> NoReturn:
    exact = _BY_LOWER.get(text.lower())
    if exact is not None:
        suggestions: tuple[str, ...] = (exact,)
    else:
        suggestions = tuple(difflib.get_close_matches(text, list(OSI_APPROVED), n=4, cutoff=0.5))
    raise GrammarError(text, "expecting an OSI-approved SPDX license identifier", suggestions)
