"""Autocomplete suggestions and popular search terms from the catalog."""

from typing import List, Optional

from sqlalchemy.orm import Session

from skilldiscovery import models
from skilldiscovery.config import settings
from skilldiscovery.crud import skill as skill_crud
from skilldiscovery.schemas.skill import SuggestionEntry
from skilldiscovery.services.text_match import any_contains, contains


def _popularity_key(skill: models.Skill) -> tuple:
    return (-(skill.total_users or 0), -(skill.popularity_score or 0.0), skill.id)


def matches_suggestion(skill: models.Skill, term: str) -> bool:
    return (
        contains(skill.name, term)
        or any_contains(skill.tags, term)
        or any_contains(skill.search_keywords, term)
        or contains(skill.category, term)
    )


def get_suggestions(db: Session, term: Optional[str]) -> List[SuggestionEntry]:
    # Short prefixes would scan the whole catalog on every keystroke.
    needle = (term or "").strip().lower()
    if len(needle) < settings.SUGGESTION_MIN_CHARS:
        return []

    matches = [
        skill
        for skill in skill_crud.find_active_skills(db)
        if matches_suggestion(skill, needle)
    ]
    matches.sort(key=_popularity_key)
    return [
        SuggestionEntry(
            text=skill.name,
            type="skill",
            category=skill.category,
            user_count=skill.total_users or 0,
        )
        for skill in matches[:settings.SUGGESTION_LIMIT]
    ]


def get_popular_searches(db: Session) -> List[str]:
    used = [skill for skill in skill_crud.find_active_skills(db) if (skill.total_users or 0) >= 1]
    used.sort(key=_popularity_key)
    return [skill.name for skill in used[:settings.POPULAR_SEARCH_LIMIT]]
