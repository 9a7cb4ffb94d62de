"""Install diagnostics — map failure output to the package alias to prune."""

from pkgrepair.diagnostics.classifier import DEFAULT_GRAMMAR, classify, payload_text
from pkgrepair.diagnostics.matchers import DiagnosticMatcher, alias_from_path
from pkgrepair.diagnostics.registry import (
    GRAMMAR_REGISTRY,
    DiagnosticGrammar,
    get_grammar,
    register_grammar,
)

__all__ = [
    "DEFAULT_GRAMMAR",
    "GRAMMAR_REGISTRY",
    "DiagnosticGrammar",
    "DiagnosticMatcher",
    "alias_from_path",
    "classify",
    "get_grammar",
    "payload_text",
    "register_grammar",
]
