"""
Query Normalizer
Turns raw, possibly malformed filter input into a canonical SearchQuery.

Pure: no I/O and no side effects. Every downstream stage relies on the
shape produced here.
"""

import logging
import math
from typing import Any, Iterable, Mapping, Optional, Tuple

from skilldiscovery.config import settings
from skilldiscovery.models.skill import PROFICIENCY_LEVELS
from skilldiscovery.schemas.search import SORT_MODES, SearchQuery
from skilldiscovery.services.errors import ValidationError

logger = logging.getLogger(__name__)

MIN_RATING = 0.0
MAX_RATING = 5.0

INTENT_ALIASES = {
    "": "both",
    "both": "both",
    "all": "both",
    "teaching": "teaching",
    "teach": "teaching",
    "learning": "learning",
    "learn": "learning",
}

# Raw keys accepted per canonical field, in lookup order.
FIELD_ALIASES = {
    "query": ("query", "q"),
    "category": ("category",),
    "level": ("level", "levels"),
    "type": ("type", "intent"),
    "location": ("location",),
    "rating": ("rating", "minRating", "min_rating"),
    "sortBy": ("sortBy", "sort_by"),
    "page": ("page",),
    "limit": ("limit", "pageSize", "page_size"),
}


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _as_text(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, set, dict)):
        # Query strings sometimes repeat a scalar key; one value is unambiguous.
        if isinstance(value, (list, tuple)) and len(value) == 1:
            return _as_text(value[0], field)
        raise ValidationError(field, "expected a single text value")
    if isinstance(value, bool):
        raise ValidationError(field, "expected a text value")
    return str(value).strip()


def _as_int(value: Any, field: str, default: int) -> int:
    if isinstance(value, (list, tuple)) and len(value) == 1:
        value = value[0]
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(field, "must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValidationError(field, "must be an integer")
    text = str(value).strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        raise ValidationError(field, f"must be an integer, got {text!r}") from None


def _as_float(value: Any, field: str, default: float) -> float:
    if isinstance(value, (list, tuple)) and len(value) == 1:
        value = value[0]
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            raise ValidationError(field, f"must be a number, got {text!r}") from None
    if math.isnan(number):
        raise ValidationError(field, "must be a number")
    return number


def _clamp(value, low, high):
    return max(low, min(value, high))


def _iter_level_values(value: Any) -> Iterable[Any]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = [value]
    expanded = []
    for item in items:
        if isinstance(item, str):
            expanded.extend(item.split(","))
        else:
            expanded.append(item)
    return expanded


def normalize_levels(value: Any) -> Tuple[str, ...]:
    requested = set()
    for item in _iter_level_values(value):
        if item is None:
            continue
        if not isinstance(item, str):
            raise ValidationError("level", "levels must be text")
        key = item.strip().lower()
        if not key:
            continue
        if key not in PROFICIENCY_LEVELS:
            raise ValidationError(
                "level",
                f"unknown level {item.strip()!r}; use one of: {', '.join(PROFICIENCY_LEVELS)}",
            )
        requested.add(key)
    return tuple(level for level in PROFICIENCY_LEVELS if level in requested)


def normalize_intent(value: Any) -> str:
    key = _as_text(value, "type").lower()
    if key not in INTENT_ALIASES:
        raise ValidationError("type", "must be one of: teaching, learning, both")
    return INTENT_ALIASES[key]


def normalize_sort(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        distinct = {str(item).strip().lower() for item in value if item is not None}
        if len(distinct) > 1:
            raise ValidationError("sortBy", "only one sort key may be given")
        value = distinct.pop() if distinct else None
    key = _as_text(value, "sortBy").lower()
    if key in SORT_MODES:
        return key
    if key:
        logger.debug("Unknown sortBy %r, falling back to relevance", key)
    return "relevance"


def normalize_search_query(raw: Optional[Mapping[str, Any]] = None) -> SearchQuery:
    """
    Build a SearchQuery from raw request filters.

    Raises:
        ValidationError: naming the first offending field.
    """
    raw = raw or {}

    category = _as_text(_lookup(raw, "category"), "category") or None
    page = _as_int(_lookup(raw, "page"), "page", 1)
    page_size = _as_int(_lookup(raw, "limit"), "limit", settings.SEARCH_DEFAULT_PAGE_SIZE)
    min_rating = _as_float(_lookup(raw, "rating"), "rating", MIN_RATING)

    normalized = SearchQuery(
        query=_as_text(_lookup(raw, "query"), "query"),
        category=category,
        levels=normalize_levels(_lookup(raw, "level")),
        intent=normalize_intent(_lookup(raw, "type")),
        location=_as_text(_lookup(raw, "location"), "location"),
        min_rating=_clamp(min_rating, MIN_RATING, MAX_RATING),
        sort_by=normalize_sort(_lookup(raw, "sortBy")),
        page=max(1, page),
        page_size=_clamp(page_size, 1, settings.SEARCH_MAX_PAGE_SIZE),
    )
    logger.debug("Normalized search query: %s", normalized)
    return normalized
