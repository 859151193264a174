import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from skilldiscovery import models
from skilldiscovery.services.errors import StoreError

logger = logging.getLogger(__name__)


# ============================
# MEMBER STORE (read only)
# ============================

def find_active_members(
    db: Session,
    *,
    min_rating: Optional[float] = None,
) -> List[models.User]:
    """Active members with their full listing collections loaded."""
    try:
        query = (
            db.query(models.User)
            .options(selectinload(models.User.skills))
            .filter(models.User.is_active.is_(True))
        )
        if min_rating:
            query = query.filter(models.User.rating >= min_rating)
        return query.order_by(models.User.id.asc()).all()
    except SQLAlchemyError as exc:
        logger.warning("Member read failed (min_rating=%r): %s", min_rating, exc)
        raise StoreError("members", str(exc), cause=exc) from exc


def find_members_with_listing(
    db: Session,
    skill_name: str,
    *,
    limit: Optional[int] = None,
) -> List[models.User]:
    """Active members holding a listing named `skill_name` (case-insensitive)."""
    key = (skill_name or "").strip().lower()
    try:
        holder_ids = select(models.SkillListing.user_id).where(
            func.lower(models.SkillListing.name) == key
        )
        query = (
            db.query(models.User)
            .options(selectinload(models.User.skills))
            .filter(
                models.User.id.in_(holder_ids),
                models.User.is_active.is_(True),
            )
            .order_by(models.User.id.asc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()
    except SQLAlchemyError as exc:
        logger.warning("Member read failed (skill_name=%r): %s", skill_name, exc)
        raise StoreError("members", str(exc), cause=exc) from exc
