from __future__ import annotations

import pytest
from factories import create_member, create_skill, listing

# API modules depend on FastAPI; skip this suite when dependency is unavailable.
pytest.importorskip("fastapi")

from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from skilldiscovery.api.skills import (
    get_popular_searches,
    get_search_suggestions,
    get_skill_by_id,
    get_skill_categories,
    get_trending_skills,
    router,
    search_skills,
)


def _search(db, **overrides):
    params = {
        "query": None,
        "category": None,
        "level": None,
        "type": None,
        "location": None,
        "rating": None,
        "sort_by": None,
        "page": None,
        "limit": None,
    }
    params.update(overrides)
    return search_skills(db=db, **params)


def test_search_endpoint_returns_both_channels(db_session):
    create_skill(db_session, name="Guitar", category="Music & Arts", teaching_users=2)
    create_member(db_session, name="Strummer", city="Austin", country="USA",
                  listings=[listing("Guitar", category="Music & Arts")])

    result = _search(db_session, query="guitar", level=["intermediate"], sort_by="rating")

    assert [row.name for row in result.skills.items] == ["Guitar"]
    assert [row.user.name for row in result.user_skills.items] == ["Strummer"]
    assert result.user_skills.items[0].user.location.city == "Austin"
    assert result.filters.levels == ("intermediate",)
    assert result.filters.sort_by == "rating"


def test_search_endpoint_maps_validation_error_to_400(db_session):
    with pytest.raises(HTTPException) as excinfo:
        _search(db_session, page="first")

    assert excinfo.value.status_code == 400
    assert excinfo.value.detail["field"] == "page"


def test_search_endpoint_maps_store_error_to_503(db_session, monkeypatch):
    def broken_query(*entities, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("down"))

    monkeypatch.setattr(db_session, "query", broken_query)

    with pytest.raises(HTTPException) as excinfo:
        _search(db_session, query="python")

    assert excinfo.value.status_code == 503


def test_trending_and_categories_endpoints(db_session):
    create_skill(db_session, name="Python", trending=True, popularity_score=92, total_users=3)

    assert [row.name for row in get_trending_skills(db=db_session, limit="5")] == ["Python"]
    categories = get_skill_categories(db=db_session, include_empty=False)
    assert [row.name for row in categories] == ["Programming & Development"]

    with pytest.raises(HTTPException) as excinfo:
        get_trending_skills(db=db_session, limit="many")
    assert excinfo.value.status_code == 400


def test_suggestion_endpoints(db_session):
    create_skill(db_session, name="Java", total_users=4)

    assert get_search_suggestions(db=db_session, q="j") == []
    assert [entry.text for entry in get_search_suggestions(db=db_session, q="ja")] == ["Java"]
    assert get_popular_searches(db=db_session) == ["Java"]


def test_skill_detail_lists_holders(db_session):
    skill = create_skill(db_session, name="Guitar", category="Music & Arts", total_users=2)
    teacher = create_member(db_session, name="Teacher", rating=4.5,
                            listings=[listing("guitar", category="Music & Arts", level="expert", years=10)])
    create_member(db_session, name="Learner",
                  listings=[listing("Guitar", category="Music & Arts", teaching=False, learning=True,
                                    level="beginner")])
    create_member(db_session, name="Pianist", listings=[listing("Piano", category="Music & Arts")])

    detail = get_skill_by_id(skill.id, db=db_session)

    assert detail.skill.name == "Guitar"
    assert detail.user_count == 2
    first = detail.user_skills[0]
    assert first.user.id == teacher.id
    assert first.level == "expert"
    assert first.years_of_experience == 10
    assert first.rating == 4.5
    assert first.id == f"{teacher.id}:{teacher.skills[0].id}"


def test_skill_detail_missing_is_404(db_session):
    with pytest.raises(HTTPException) as excinfo:
        get_skill_by_id(999, db=db_session)

    assert excinfo.value.status_code == 404


def test_router_exposes_only_skill_routes():
    paths = {route.path for route in router.routes}

    assert paths == {
        "/skills/search",
        "/skills/trending",
        "/skills/categories",
        "/skills/suggestions",
        "/skills/popular-searches",
        "/skills/{skill_id}",
    }
