from __future__ import annotations

import pytest
from factories import create_skill

from skilldiscovery.models import SKILL_CATEGORIES
from skilldiscovery.services import aggregation
from skilldiscovery.services.errors import ValidationError


def test_trending_orders_by_flag_then_popularity(db_session):
    create_skill(db_session, name="Python", trending=True, popularity_score=92, total_users=1156)
    create_skill(db_session, name="JavaScript", trending=True, popularity_score=95, total_users=1245)
    create_skill(db_session, name="Excel", popularity_score=99, total_users=2000)
    create_skill(db_session, name="Origami", category="Crafts & DIY", popularity_score=1, total_users=0)
    create_skill(db_session, name="Retired", trending=True, popularity_score=100, is_active=False)

    rows = aggregation.get_trending_skills(db_session, limit=10)

    assert [row.name for row in rows] == ["JavaScript", "Python", "Excel"]
    assert rows[0].trending is True
    assert rows[0].user_count == 1245


def test_trending_ties_fall_back_to_users_then_rating(db_session):
    create_skill(db_session, name="A", trending=True, popularity_score=50, total_users=10, average_rating=4.0)
    create_skill(db_session, name="B", trending=True, popularity_score=50, total_users=10, average_rating=4.5)
    create_skill(db_session, name="C", trending=True, popularity_score=50, total_users=20, average_rating=3.0)

    assert [row.name for row in aggregation.get_trending_skills(db_session)] == ["C", "B", "A"]


def test_trending_limit_is_capped(db_session):
    for index in range(60):
        create_skill(db_session, name=f"Skill {index}", total_users=1)

    assert len(aggregation.get_trending_skills(db_session, limit=3)) == 3
    assert len(aggregation.get_trending_skills(db_session, limit="500")) == 50
    assert len(aggregation.get_trending_skills(db_session, limit=0)) == 1
    assert len(aggregation.get_trending_skills(db_session)) == 10


def test_trending_rejects_non_numeric_limit(db_session):
    with pytest.raises(ValidationError) as excinfo:
        aggregation.get_trending_skills(db_session, limit="lots")
    assert excinfo.value.field == "limit"


def test_category_summary_aggregates_active_skills(db_session):
    create_skill(db_session, name="Python", total_users=10, teaching_users=3, learning_users=7,
                 average_rating=5.0, popularity_score=90)
    create_skill(db_session, name="Rust", total_users=4, teaching_users=1, learning_users=3,
                 average_rating=4.0, popularity_score=95)
    create_skill(db_session, name="Guitar", category="Music & Arts", total_users=2, average_rating=4.0)
    create_skill(db_session, name="Fortran", total_users=99, is_active=False)

    summary = {row.name: row for row in aggregation.get_category_summary(db_session)}

    programming = summary["Programming & Development"]
    assert programming.count == 2
    assert programming.total_users == 14
    assert programming.teaching_users == 4
    assert programming.learning_users == 10
    assert programming.average_rating == 4.5
    assert programming.skills == ["Rust", "Python"]
    assert list(summary) == ["Programming & Development", "Music & Arts"]


def test_category_sample_is_capped(db_session):
    for index in range(8):
        create_skill(db_session, name=f"Lang {index}", category="Languages", popularity_score=index)

    row = aggregation.get_category_summary(db_session)[0]

    assert row.count == 8
    assert row.skills == ["Lang 7", "Lang 6", "Lang 5", "Lang 4", "Lang 3"]


def test_categories_without_users_do_not_divide_by_zero(db_session):
    create_skill(db_session, name="Sourdough", category="Cooking & Lifestyle")

    rows = aggregation.get_category_summary(db_session, include_empty=True)
    by_name = {row.name: row for row in rows}

    assert set(by_name) == set(SKILL_CATEGORIES)
    assert by_name["Cooking & Lifestyle"].average_rating == 0.0
    assert by_name["Cooking & Lifestyle"].total_users == 0
    empty = by_name["Sports & Fitness"]
    assert empty.count == 0
    assert empty.average_rating == 0.0
    assert empty.skills == []


def test_empty_catalog_summary(db_session):
    assert aggregation.get_category_summary(db_session) == []
