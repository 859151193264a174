import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skilldiscovery import models
from skilldiscovery.services.errors import StoreError

logger = logging.getLogger(__name__)


# ============================
# CATALOG STORE (read only)
# ============================

def find_active_skills(
    db: Session,
    *,
    category: Optional[str] = None,
    min_rating: Optional[float] = None,
) -> List[models.Skill]:
    """
    Fetch active catalog skills.

    Category equality and the rating floor run in SQL; text, level-set and
    intent predicates are applied in memory by the catalog search stage.
    """
    try:
        query = db.query(models.Skill).filter(models.Skill.is_active.is_(True))
        if category:
            query = query.filter(models.Skill.category == category)
        if min_rating:
            query = query.filter(models.Skill.average_rating >= min_rating)
        return query.order_by(models.Skill.id.asc()).all()
    except SQLAlchemyError as exc:
        logger.warning("Catalog read failed (category=%r): %s", category, exc)
        raise StoreError("catalog", str(exc), cause=exc) from exc


def get_skill(db: Session, skill_id: int) -> Optional[models.Skill]:
    try:
        return db.query(models.Skill).filter(models.Skill.id == skill_id).first()
    except SQLAlchemyError as exc:
        logger.warning("Catalog read failed (skill_id=%s): %s", skill_id, exc)
        raise StoreError("catalog", str(exc), cause=exc) from exc


def get_skill_by_name(db: Session, name: str) -> Optional[models.Skill]:
    try:
        return db.query(models.Skill).filter(
            func.lower(models.Skill.name) == (name or "").strip().lower()
        ).first()
    except SQLAlchemyError as exc:
        logger.warning("Catalog read failed (name=%r): %s", name, exc)
        raise StoreError("catalog", str(exc), cause=exc) from exc
