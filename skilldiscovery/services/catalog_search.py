"""
Catalog Search Stage
Filters and ranks active catalog skills against a SearchQuery.

Relevance score for a non-empty term:
    name score (100 exact, 60 prefix, 40 substring)
  + 25 exact tag/keyword, else 15 tag/keyword substring
  + 10 description substring
  +  5 category/subcategory substring
  +  3 per distinct query token found in the skill's own tokens
Ties fall back to popularity_score, total_users, then id.
"""

from typing import Callable, Dict, Iterable, List, Tuple

from skilldiscovery import models
from skilldiscovery.schemas.search import CatalogMatch, SearchQuery
from skilldiscovery.services.text_match import (
    any_contains,
    any_equals,
    contains,
    name_score,
    timestamp,
    tokenize,
)

TAG_EXACT_SCORE = 25.0
TAG_CONTAINS_SCORE = 15.0
DESCRIPTION_SCORE = 10.0
CATEGORY_SCORE = 5.0
TOKEN_OVERLAP_SCORE = 3.0


def matches_term(skill: models.Skill, term: str) -> bool:
    if not term:
        return True
    return (
        contains(skill.name, term)
        or contains(skill.description, term)
        or any_contains(skill.tags, term)
        or any_contains(skill.search_keywords, term)
        or contains(skill.category, term)
        or contains(skill.subcategory, term)
    )


def matches_filters(skill: models.Skill, query: SearchQuery) -> bool:
    if not skill.is_active:
        return False
    if not matches_term(skill, query.term):
        return False
    if query.category and skill.category != query.category:
        return False
    if query.levels:
        available = {(level or "").lower() for level in skill.available_levels or ()}
        if available.isdisjoint(query.levels):
            return False
    if query.intent == "teaching" and (skill.teaching_users or 0) <= 0:
        return False
    if query.intent == "learning" and (skill.learning_users or 0) <= 0:
        return False
    return (skill.average_rating or 0.0) >= query.min_rating


def relevance_score(skill: models.Skill, term: str) -> float:
    if not term:
        return 0.0
    score = name_score(skill.name, term)

    labels = list(skill.tags or ()) + list(skill.search_keywords or ())
    if any_equals(labels, term):
        score += TAG_EXACT_SCORE
    elif any_contains(labels, term):
        score += TAG_CONTAINS_SCORE
    if contains(skill.description, term):
        score += DESCRIPTION_SCORE
    if contains(skill.category, term) or contains(skill.subcategory, term):
        score += CATEGORY_SCORE

    skill_tokens = tokenize(skill.name, skill.description, *labels)
    overlap = tokenize(term) & skill_tokens
    score += TOKEN_OVERLAP_SCORE * len(overlap)
    return score


SortKey = Callable[[Tuple[models.Skill, float]], tuple]

SORT_KEYS: Dict[str, SortKey] = {
    "relevance": lambda row: (
        -row[1],
        -(row[0].popularity_score or 0.0),
        -(row[0].total_users or 0),
        row[0].id,
    ),
    "rating": lambda row: (
        -(row[0].average_rating or 0.0),
        -(row[0].total_users or 0),
        row[0].id,
    ),
    "popularity": lambda row: (
        -(row[0].total_users or 0),
        -(row[0].average_rating or 0.0),
        row[0].id,
    ),
    "recent": lambda row: (
        -timestamp(row[0].created_at),
        row[0].id,
    ),
    "experience": lambda row: (
        -(row[0].total_sessions or 0),
        -(row[0].average_rating or 0.0),
        row[0].id,
    ),
}


def to_catalog_match(skill: models.Skill, score: float = 0.0) -> CatalogMatch:
    levels = list(skill.available_levels or [])
    return CatalogMatch(
        id=skill.id,
        name=skill.name,
        category=skill.category,
        subcategory=skill.subcategory,
        description=skill.description or "",
        tags=list(skill.tags or []),
        available_levels=levels,
        user_count=skill.total_users or 0,
        rating=skill.average_rating or 0.0,
        is_teaching=(skill.teaching_users or 0) > 0,
        is_learning=(skill.learning_users or 0) > 0,
        level=levels[0] if levels else "intermediate",
        trending=bool(skill.trending),
        popularity_score=skill.popularity_score or 0.0,
        score=score,
        created_at=skill.created_at,
    )


def search_catalog(skills: Iterable[models.Skill], query: SearchQuery) -> List[CatalogMatch]:
    """Return every matching skill, ranked; pagination happens later."""
    term = query.term
    scored = [
        (skill, relevance_score(skill, term))
        for skill in skills
        if matches_filters(skill, query)
    ]
    scored.sort(key=SORT_KEYS[query.sort_by])
    return [to_catalog_match(skill, score) for skill, score in scored]
