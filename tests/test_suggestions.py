from __future__ import annotations

from factories import create_skill

from skilldiscovery.services.suggestions import get_popular_searches, get_suggestions


def test_single_character_returns_nothing(db_session):
    create_skill(db_session, name="Java", total_users=5)

    assert get_suggestions(db_session, "a") == []
    assert get_suggestions(db_session, " j ") == []
    assert get_suggestions(db_session, None) == []


def test_suggestions_capped_and_sorted_by_users(db_session):
    for index in range(14):
        create_skill(db_session, name=f"Java Topic {index}", total_users=index)
    create_skill(db_session, name="Ninja Moves", category="Sports & Fitness", total_users=500)
    create_skill(db_session, name="Jazz Piano", category="Music & Arts", total_users=900)

    entries = get_suggestions(db_session, "ja")

    assert len(entries) == 10
    counts = [entry.user_count for entry in entries]
    assert counts == sorted(counts, reverse=True)
    assert entries[0].text == "Jazz Piano"
    assert entries[1].text == "Ninja Moves"
    assert all(entry.type == "skill" for entry in entries)


def test_suggestions_match_tags_keywords_and_category(db_session):
    create_skill(db_session, name="React", tags=["frontend"], total_users=3)
    create_skill(db_session, name="Vue", keywords=["frontend"], total_users=2)
    create_skill(db_session, name="Yoga", category="Sports & Fitness", total_users=1)
    create_skill(db_session, name="Hidden", tags=["frontend"], is_active=False)

    assert [entry.text for entry in get_suggestions(db_session, "Frontend")] == ["React", "Vue"]
    assert [entry.text for entry in get_suggestions(db_session, "fitness")] == ["Yoga"]


def test_popular_searches_skip_unused_skills(db_session):
    create_skill(db_session, name="Python", total_users=1156, popularity_score=92)
    create_skill(db_session, name="JavaScript", total_users=1245, popularity_score=95)
    create_skill(db_session, name="Scratch", total_users=0)
    create_skill(db_session, name="Perl", total_users=1156, popularity_score=40)

    assert get_popular_searches(db_session) == ["JavaScript", "Python", "Perl"]


def test_popular_searches_capped_at_ten(db_session):
    for index in range(15):
        create_skill(db_session, name=f"Skill {index}", total_users=index + 1)

    names = get_popular_searches(db_session)

    assert len(names) == 10
    assert names[0] == "Skill 14"
