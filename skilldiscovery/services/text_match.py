"""Case-insensitive substring and token helpers used by the ranking stages."""

import re
from typing import Iterable, Optional, Set

TOKEN_RE = re.compile(r"[a-z0-9+#]+")

NAME_EXACT_SCORE = 100.0
NAME_PREFIX_SCORE = 60.0
NAME_CONTAINS_SCORE = 40.0


def contains(value: Optional[str], term: str) -> bool:
    """`term` must already be lower-cased."""
    return bool(value) and term in value.lower()


def any_contains(values: Optional[Iterable[str]], term: str) -> bool:
    return any(contains(value, term) for value in values or ())


def any_equals(values: Optional[Iterable[str]], term: str) -> bool:
    return any((value or "").strip().lower() == term for value in values or ())


def tokenize(*values: Optional[str]) -> Set[str]:
    tokens: Set[str] = set()
    for value in values:
        if value:
            tokens.update(TOKEN_RE.findall(value.lower()))
    return tokens


def name_score(name: Optional[str], term: str) -> float:
    lowered = (name or "").strip().lower()
    if not lowered or not term:
        return 0.0
    if lowered == term:
        return NAME_EXACT_SCORE
    if lowered.startswith(term):
        return NAME_PREFIX_SCORE
    if term in lowered:
        return NAME_CONTAINS_SCORE
    return 0.0


def timestamp(value) -> float:
    """Sortable number for an optional datetime; missing sorts oldest."""
    if value is None:
        return float("-inf")
    return value.timestamp()
