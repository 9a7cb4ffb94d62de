"""Grammar registry — diagnostic grammars per package manager, looked up by name."""

from __future__ import annotations

from dataclasses import dataclass

from pkgrepair.diagnostics.matchers import DiagnosticMatcher


@dataclass(frozen=True)
class DiagnosticGrammar:
    """An ordered list of matchers for one package manager's install output.

    Order matters: the first matcher that yields an alias wins.
    """

    name: str
    matchers: tuple[DiagnosticMatcher, ...]


GRAMMAR_REGISTRY: dict[str, DiagnosticGrammar] = {}


def register_grammar(grammar: DiagnosticGrammar) -> None:
    """Register a grammar instance by its name."""
    GRAMMAR_REGISTRY[grammar.name] = grammar


def get_grammar(name: str) -> DiagnosticGrammar:
    """Look up a registered grammar, raising ``ValueError`` for unknown names."""
    try:
        return GRAMMAR_REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(GRAMMAR_REGISTRY)) or "none"
        raise ValueError(f"unknown diagnostic grammar '{name}' (registered: {known})") from None
