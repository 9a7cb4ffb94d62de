"""Diagnostic grammars — auto-registered on import."""

from pkgrepair.diagnostics.grammars import (
    npm,  # noqa: F401
    yarn,  # noqa: F401
)
