"""Error classifier — pure classification of install failure output."""

from __future__ import annotations

import logging

# Ensure grammars are registered before any lookup runs.
import pkgrepair.diagnostics.grammars  # noqa: F401
from pkgrepair.diagnostics.registry import DiagnosticGrammar, get_grammar
from pkgrepair.models import InstallOutcome

logger = logging.getLogger(__name__)

DEFAULT_GRAMMAR = "yarn"


def payload_text(payload: object) -> str:
    """Flatten an install failure payload into searchable text.

    Accepts plain text, raw bytes, an :class:`InstallOutcome`, or an
    exception (its message plus any captured ``output``/``stdout``/``stderr``).
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, bytes):
        return payload.decode("utf-8", errors="replace")
    if isinstance(payload, InstallOutcome):
        return payload.diagnostic
    if isinstance(payload, BaseException):
        parts = [str(payload)]
        for attr in ("output", "stdout", "stderr"):
            value = getattr(payload, attr, None)
            if isinstance(value, bytes):
                value = value.decode("utf-8", errors="replace")
            if isinstance(value, str) and value and value not in parts:
                parts.append(value)
        return "\n".join(parts)
    return str(payload)


def classify(payload: object, grammar: DiagnosticGrammar | str = DEFAULT_GRAMMAR) -> str | None:
    """Return the package alias implicated by *payload*, or ``None`` for no signal.

    ``None`` means the failure cannot be attributed to a single package and
    the caller must stop retrying.
    """
    if isinstance(grammar, str):
        grammar = get_grammar(grammar)

    text = payload_text(payload)
    for matcher in grammar.matchers:
        alias = matcher.match(text)
        if alias is not None:
            logger.debug("diagnostic matched %s/%s: alias=%s", grammar.name, matcher.name, alias)
            return alias

    logger.debug("no %s matcher recognized the diagnostic", grammar.name)
    return None
