# skilldiscovery/services/skill_stats.py
"""
Catalog stat refresh.

Called by the profile-management layer after a member adds, edits or
removes a listing. The search engine never calls it, so catalog stats may
lag behind member listings until the refresh runs.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from skilldiscovery import models
from skilldiscovery.crud import skill as skill_crud
from skilldiscovery.crud import user as user_crud

logger = logging.getLogger(__name__)

USER_WEIGHT = 1.0
TEACHER_WEIGHT = 2.0
RATING_WEIGHT = 10.0
SESSION_WEIGHT = 0.1
REVIEW_WEIGHT = 0.5


def compute_popularity_score(
    *,
    total_users: int = 0,
    teaching_users: int = 0,
    average_rating: float = 0.0,
    total_sessions: int = 0,
    total_reviews: int = 0,
) -> float:
    """Weighted sum; never decreases when any single stat grows."""
    score = (
        USER_WEIGHT * max(total_users, 0)
        + TEACHER_WEIGHT * max(teaching_users, 0)
        + RATING_WEIGHT * max(average_rating, 0.0)
        + SESSION_WEIGHT * max(total_sessions, 0)
        + REVIEW_WEIGHT * max(total_reviews, 0)
    )
    return round(score, 2)


def refresh_skill_stats(db: Session, skill: models.Skill, *, commit: bool = True) -> models.Skill:
    """
    Recompute user counts, rating and popularity for one catalog skill.

    Session and review totals are owned by the session workflow and are
    left untouched.
    """
    key = skill.name.strip().lower()
    holders = user_crud.find_members_with_listing(db, skill.name)

    teaching = learning = 0
    ratings = []
    for member in holders:
        listings = [row for row in member.skills if (row.name or "").strip().lower() == key]
        if any(row.is_teaching for row in listings):
            teaching += 1
        if any(row.is_learning for row in listings):
            learning += 1
        if (member.rating or 0.0) > 0:
            ratings.append(member.rating)

    skill.total_users = len(holders)
    skill.teaching_users = teaching
    skill.learning_users = learning
    if ratings:
        skill.average_rating = round(sum(ratings) / len(ratings), 2)
    skill.popularity_score = compute_popularity_score(
        total_users=skill.total_users,
        teaching_users=teaching,
        average_rating=skill.average_rating or 0.0,
        total_sessions=skill.total_sessions or 0,
        total_reviews=skill.total_reviews or 0,
    )

    if commit:
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(skill)
    logger.info(
        "Refreshed stats for skill %s (%s): users=%s teaching=%s learning=%s",
        skill.id,
        skill.name,
        skill.total_users,
        teaching,
        learning,
    )
    return skill


def refresh_stats_for_name(db: Session, skill_name: str) -> Optional[models.Skill]:
    """Refresh the catalog entry matching a listing name, if one exists."""
    skill = skill_crud.get_skill_by_name(db, skill_name)
    if skill is None:
        return None
    return refresh_skill_stats(db, skill)
