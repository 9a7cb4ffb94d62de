"""Yarn (classic) install failure shapes."""

from __future__ import annotations

import re

from pkgrepair.diagnostics.matchers import DiagnosticMatcher
from pkgrepair.diagnostics.registry import DiagnosticGrammar, register_grammar

# e.g. "https://registry.yarnpkg.com/@acme%2finternal-lib: Not found"
REGISTRY_NOT_FOUND = DiagnosticMatcher(
    name="registry-not-found",
    pattern=re.compile(r"https?://[^/\s]+/([^:\s]+): Not found"),
)

# e.g. 'error Couldn't find package "left-pad@1.0.0" required by "app@1.0.0"'
# The @range suffix is not part of the name.
PACKAGE_NOT_FOUND = DiagnosticMatcher(
    name="package-not-found",
    pattern=re.compile(r"error Couldn't find package \"((?:@[^/\"]+/)?[^@\"]+)"),
)

# e.g. 'error Couldn't find any versions for "lodash" that matches "^99.0.0"'
NO_MATCHING_VERSION = DiagnosticMatcher(
    name="no-matching-version",
    pattern=re.compile(
        r"error Couldn't find any versions for \"((?:@[^/\"]+/)?[^@\"]+)[^\"]*\" that matches"
    ),
)

YARN_GRAMMAR = DiagnosticGrammar(
    name="yarn",
    matchers=(REGISTRY_NOT_FOUND, PACKAGE_NOT_FOUND, NO_MATCHING_VERSION),
)

register_grammar(YARN_GRAMMAR)
