from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from skilldiscovery.database import get_db
from skilldiscovery.schemas import (
    CategorySummary,
    SearchResponse,
    SkillDetail,
    SkillSummary,
    SuggestionEntry,
)
from skilldiscovery.services import aggregation, search_service, skill_detail, suggestions
from skilldiscovery.services.errors import SkillNotFoundError, StoreError, ValidationError

router = APIRouter(prefix="/skills", tags=["Skills"])


def _validation_failed(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=400, detail=exc.to_detail())


def _store_failed(exc: StoreError) -> HTTPException:
    return HTTPException(
        status_code=503,
        detail=f"Skill search is temporarily unavailable ({exc.store} store)",
    )


# ======================
# GET: Multi-criteria search
# ======================
@router.get("/search", response_model=SearchResponse)
def search_skills(
    db: Session = Depends(get_db),
    query: Optional[str] = None,
    category: Optional[str] = None,
    level: Optional[List[str]] = Query(None),
    type: Optional[str] = None,
    location: Optional[str] = None,
    rating: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    """
    Search catalog skills and member skill listings.

    Numeric filters arrive as raw strings so malformed values are reported
    by the normalizer with the offending field name.
    """
    raw = {
        "query": query,
        "category": category,
        "level": level,
        "type": type,
        "location": location,
        "rating": rating,
        "sortBy": sort_by,
        "page": page,
        "limit": limit,
    }
    try:
        return search_service.search(db, raw)
    except ValidationError as exc:
        raise _validation_failed(exc)
    except StoreError as exc:
        raise _store_failed(exc)


@router.get("/trending", response_model=List[SkillSummary])
def get_trending_skills(
    db: Session = Depends(get_db),
    limit: Optional[str] = None,
):
    try:
        return aggregation.get_trending_skills(db, limit)
    except ValidationError as exc:
        raise _validation_failed(exc)
    except StoreError as exc:
        raise _store_failed(exc)


@router.get("/categories", response_model=List[CategorySummary])
def get_skill_categories(
    db: Session = Depends(get_db),
    include_empty: bool = False,
):
    try:
        return aggregation.get_category_summary(db, include_empty=include_empty)
    except StoreError as exc:
        raise _store_failed(exc)


@router.get("/suggestions", response_model=List[SuggestionEntry])
def get_search_suggestions(
    db: Session = Depends(get_db),
    q: Optional[str] = None,
):
    try:
        return suggestions.get_suggestions(db, q)
    except StoreError as exc:
        raise _store_failed(exc)


@router.get("/popular-searches", response_model=List[str])
def get_popular_searches(db: Session = Depends(get_db)):
    try:
        return suggestions.get_popular_searches(db)
    except StoreError as exc:
        raise _store_failed(exc)


# Registered last so the fixed paths above take precedence.
@router.get("/{skill_id}", response_model=SkillDetail)
def get_skill_by_id(
    skill_id: int,
    db: Session = Depends(get_db),
):
    try:
        return skill_detail.get_skill_detail(db, skill_id)
    except SkillNotFoundError:
        raise HTTPException(status_code=404, detail="Skill not found")
    except StoreError as exc:
        raise _store_failed(exc)
