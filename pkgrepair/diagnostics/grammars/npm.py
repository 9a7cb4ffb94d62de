"""npm install failure shapes."""

from __future__ import annotations

import re

from pkgrepair.diagnostics.matchers import DiagnosticMatcher
from pkgrepair.diagnostics.registry import DiagnosticGrammar, register_grammar

# e.g. "npm ERR! 404 Not Found - GET https://registry.npmjs.org/@acme%2finternal-lib - Not found"
# Only the last path segment is the (encoded) package name.
REGISTRY_NOT_FOUND = DiagnosticMatcher(
    name="registry-not-found",
    pattern=re.compile(r"404 Not Found - GET https?://\S*/([^/\s]+) - Not found"),
)

# e.g. "npm ERR! notarget No matching version found for lodash@^99.0.0."
NO_MATCHING_VERSION = DiagnosticMatcher(
    name="no-matching-version",
    pattern=re.compile(r"No matching version found for ((?:@[^/\s]+/)?[^@\s]+)@"),
)

# e.g. "npm ERR! 404  'left-pad@^1.0.0' is not in this registry."
NOT_IN_REGISTRY = DiagnosticMatcher(
    name="not-in-registry",
    pattern=re.compile(r"'((?:@[^/\s']+/)?[^@\s']+)@[^']*' is not in (?:this|the npm) registry"),
)

NPM_GRAMMAR = DiagnosticGrammar(
    name="npm",
    matchers=(REGISTRY_NOT_FOUND, NO_MATCHING_VERSION, NOT_IN_REGISTRY),
)

register_grammar(NPM_GRAMMAR)
