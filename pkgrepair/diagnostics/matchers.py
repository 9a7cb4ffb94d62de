"""Diagnostic matchers — one regex shape plus the extractor that turns it into an alias."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import unquote

AliasExtractor = Callable[[str], str | None]


def alias_from_path(raw: str) -> str | None:
    """Percent-decode *raw* and keep everything before the first ``/``.

    ``left-pad`` -> ``left-pad``; ``%40scope%2Fpkg`` -> ``@scope``.
    Returns ``None`` when nothing precedes the separator.
    """
    decoded = unquote(raw)
    alias = decoded.split("/", 1)[0]
    return alias or None


@dataclass(frozen=True)
class DiagnosticMatcher:
    """A single known failure shape.

    *pattern* must have exactly one capture group: the package path or name
    as it appears in the diagnostic (possibly percent-encoded).
    """

    name: str
    pattern: re.Pattern[str]
    extractor: AliasExtractor = alias_from_path

    def search(self, text: str) -> str | None:
        """Return the raw captured substring, or ``None`` when the shape is absent."""
        m = self.pattern.search(text)
        if not m:
            return None
        return m.group(1)

    def match(self, text: str) -> str | None:
        """Return the alias this matcher derives from *text*, if any."""
        raw = self.search(text)
        if raw is None:
            return None
        return self.extractor(raw)
