from __future__ import annotations

import pydantic
import pytest

from skilldiscovery.services.errors import ValidationError
from skilldiscovery.services.query_normalizer import normalize_search_query


def test_defaults_when_nothing_is_given():
    query = normalize_search_query({})

    assert query.query == ""
    assert query.category is None
    assert query.levels == ()
    assert query.intent == "both"
    assert query.location == ""
    assert query.min_rating == 0.0
    assert query.sort_by == "relevance"
    assert query.page == 1
    assert query.page_size == 12


def test_strings_are_trimmed_and_empty_category_is_unset():
    query = normalize_search_query(
        {"query": "  Java  ", "category": "   ", "location": " Berlin "}
    )

    assert query.query == "Java"
    assert query.term == "java"
    assert query.category is None
    assert query.location == "Berlin"


def test_scalar_level_is_wrapped_and_ordered():
    assert normalize_search_query({"level": "Advanced"}).levels == ("advanced",)
    assert normalize_search_query(
        {"level": ["expert", "beginner", "EXPERT", ""]}
    ).levels == ("beginner", "expert")
    assert normalize_search_query({"level": "beginner,advanced"}).levels == (
        "beginner",
        "advanced",
    )


def test_unknown_level_names_the_field():
    with pytest.raises(ValidationError) as excinfo:
        normalize_search_query({"level": ["beginner", "wizard"]})

    assert excinfo.value.field == "level"


@pytest.mark.parametrize(
    "raw_size, expected",
    [("0", 1), ("-5", 1), ("1", 1), ("50", 50), ("100", 100), ("500", 100), (None, 12)],
)
def test_page_size_is_clamped(raw_size, expected):
    assert normalize_search_query({"limit": raw_size}).page_size == expected


def test_page_below_one_is_coerced():
    assert normalize_search_query({"page": "0"}).page == 1
    assert normalize_search_query({"page": -3}).page == 1
    assert normalize_search_query({"page": "4"}).page == 4


def test_non_numeric_page_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        normalize_search_query({"page": "two"})
    assert excinfo.value.field == "page"


def test_min_rating_is_clamped_and_validated():
    assert normalize_search_query({"rating": "7"}).min_rating == 5.0
    assert normalize_search_query({"rating": "-1"}).min_rating == 0.0
    assert normalize_search_query({"minRating": 3.5}).min_rating == 3.5

    with pytest.raises(ValidationError) as excinfo:
        normalize_search_query({"rating": "high"})
    assert excinfo.value.field == "rating"

    with pytest.raises(ValidationError):
        normalize_search_query({"rating": "nan"})


def test_unknown_sort_falls_back_to_relevance():
    assert normalize_search_query({"sortBy": "cheapest"}).sort_by == "relevance"
    assert normalize_search_query({"sortBy": "Rating"}).sort_by == "rating"
    assert normalize_search_query({"sort_by": ["recent"]}).sort_by == "recent"


def test_conflicting_sort_keys_are_ambiguous():
    with pytest.raises(ValidationError) as excinfo:
        normalize_search_query({"sortBy": ["rating", "recent"]})
    assert excinfo.value.field == "sortBy"


def test_intent_aliases_and_rejection():
    assert normalize_search_query({"type": "teach"}).intent == "teaching"
    assert normalize_search_query({"type": "LEARNING"}).intent == "learning"
    assert normalize_search_query({"type": ""}).intent == "both"

    with pytest.raises(ValidationError) as excinfo:
        normalize_search_query({"type": "mentoring"})
    assert excinfo.value.field == "type"


def test_query_object_is_immutable():
    query = normalize_search_query({"query": "guitar"})

    with pytest.raises(pydantic.ValidationError):
        query.query = "piano"
