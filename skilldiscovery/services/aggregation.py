"""
Aggregation Jobs
Read-side trending and per-category views over the catalog, computed
fresh on every call.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from skilldiscovery import models
from skilldiscovery.config import settings
from skilldiscovery.crud import skill as skill_crud
from skilldiscovery.schemas.skill import CategorySummary, SkillSummary
from skilldiscovery.services.errors import ValidationError

logger = logging.getLogger(__name__)


def _parse_limit(limit: Any, default: int, maximum: int) -> int:
    if limit is None or (isinstance(limit, str) and not limit.strip()):
        return default
    if isinstance(limit, bool):
        raise ValidationError("limit", "must be an integer")
    try:
        value = int(str(limit).strip()) if not isinstance(limit, int) else limit
    except ValueError:
        raise ValidationError("limit", f"must be an integer, got {limit!r}") from None
    return max(1, min(value, maximum))


def trending_sort_key(skill: models.Skill) -> tuple:
    return (
        0 if skill.trending else 1,
        -(skill.popularity_score or 0.0),
        -(skill.total_users or 0),
        -(skill.average_rating or 0.0),
        skill.id,
    )


def to_skill_summary(skill: models.Skill) -> SkillSummary:
    return SkillSummary(
        id=skill.id,
        name=skill.name,
        category=skill.category,
        description=skill.description or "",
        user_count=skill.total_users or 0,
        avg_rating=skill.average_rating or 0.0,
        teacher_count=skill.teaching_users or 0,
        learner_count=skill.learning_users or 0,
        trending=bool(skill.trending),
        popularity_score=skill.popularity_score or 0.0,
        created_at=skill.created_at,
    )


def get_trending_skills(db: Session, limit: Any = None) -> List[SkillSummary]:
    """
    Trending catalog skills.

    Candidates are flagged trending or have at least one user; ordered by
    trending flag, popularity, user count, then rating.
    """
    capped = _parse_limit(limit, settings.TRENDING_DEFAULT_LIMIT, settings.TRENDING_MAX_LIMIT)
    candidates = [
        skill
        for skill in skill_crud.find_active_skills(db)
        if skill.trending or (skill.total_users or 0) >= 1
    ]
    candidates.sort(key=trending_sort_key)
    logger.info("Trending skills: %s candidates, returning up to %s", len(candidates), capped)
    return [to_skill_summary(skill) for skill in candidates[:capped]]


def summarize_categories(
    skills: List[models.Skill],
    *,
    sample_size: Optional[int] = None,
    include_empty: bool = False,
) -> List[CategorySummary]:
    sample_size = settings.CATEGORY_SAMPLE_SIZE if sample_size is None else sample_size
    groups: Dict[str, List[models.Skill]] = {}
    for skill in skills:
        if not skill.is_active:
            continue
        groups.setdefault(skill.category, []).append(skill)

    if include_empty:
        for category in models.SKILL_CATEGORIES:
            groups.setdefault(category, [])

    summaries = []
    for category, members in groups.items():
        ratings = [skill.average_rating or 0.0 for skill in members]
        average = round(sum(ratings) / len(ratings), 1) if ratings else 0.0
        ranked = sorted(
            members,
            key=lambda skill: (-(skill.popularity_score or 0.0), skill.id),
        )
        summaries.append(
            CategorySummary(
                name=category,
                count=len(members),
                total_users=sum(skill.total_users or 0 for skill in members),
                teaching_users=sum(skill.teaching_users or 0 for skill in members),
                learning_users=sum(skill.learning_users or 0 for skill in members),
                average_rating=average,
                skills=[skill.name for skill in ranked[:sample_size]],
            )
        )

    summaries.sort(key=lambda summary: (-summary.count, summary.name))
    return summaries


def get_category_summary(db: Session, *, include_empty: bool = False) -> List[CategorySummary]:
    return summarize_categories(
        skill_crud.find_active_skills(db),
        include_empty=include_empty,
    )
