"""Glob matching for branch and path filters in workflow triggers.

Only the small wildcard grammar that trigger filters commonly use is supported:
- `*` / `**` on their own match everything
- a trailing `/**` matches anything under the given prefix
- `*` elsewhere matches any run of characters, `?` exactly one character

Matching is case-sensitive because GitHub ref names and paths are.
"""

from __future__ import annotations

import re
from functools import lru_cache

MATCH_ALL = "*"
_RECURSIVE_SUFFIX = "/**"


def is_wildcard(pattern: str) -> bool:
    """Return True when the pattern uses `*` and is therefore glob-evaluated."""

    return "*" in pattern


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str]:
    translated = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(translated)


def matches(candidate: str, pattern: str) -> bool:
    """Return True if `candidate` (a branch name or file path) matches `pattern`.

    Patterns without `*` only match by exact equality.
    """

    if not pattern:
        return False
    if pattern in ("*", "**"):
        return True

    if pattern.endswith(_RECURSIVE_SUFFIX):
        prefix = pattern[: -len(_RECURSIVE_SUFFIX)]
        if not prefix:
            return True
        if is_wildcard(prefix):
            return matches(candidate, prefix) or matches(candidate, prefix + "/*")
        return candidate == prefix or candidate.startswith(prefix + "/")

    if is_wildcard(pattern):
        return _compile(pattern).fullmatch(candidate) is not None

    return candidate == pattern
