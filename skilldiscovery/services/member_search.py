"""
Member Search Stage
Filters member records down to individual skill listings.

A member contributes one row per listing that survives the filter, never
one row per member. A hit on the member's name or bio lets every listing
of that member through the text check, so searching for a person
surfaces all of their skills.

Relevance ties fall back to popularity (completed sessions), then rating.
"""

from typing import Dict, Iterable, List, Tuple

from skilldiscovery import models
from skilldiscovery.schemas.search import (
    ListingMatch,
    ListingSnapshot,
    MemberLocation,
    MemberSnapshot,
    SearchQuery,
)
from skilldiscovery.services.text_match import (
    any_contains,
    contains,
    name_score,
    timestamp,
)

TAG_SCORE = 15.0
DESCRIPTION_SCORE = 10.0
MEMBER_HIT_SCORE = 5.0


def member_matches_location(member: models.User, location: str) -> bool:
    if not location:
        return True
    needle = location.lower()
    return contains(member.city, needle) or contains(member.country, needle)


def member_text_hit(member: models.User, term: str) -> bool:
    return bool(term) and (contains(member.name, term) or contains(member.bio, term))


def member_passes(member: models.User, query: SearchQuery) -> bool:
    if not member.is_active:
        return False
    if (member.rating or 0.0) < query.min_rating:
        return False
    return member_matches_location(member, query.location)


def listing_text_hit(listing: models.SkillListing, term: str) -> bool:
    return (
        contains(listing.name, term)
        or contains(listing.description, term)
        or any_contains(listing.tags, term)
    )


def listing_passes(
    listing: models.SkillListing,
    query: SearchQuery,
    member_hit: bool,
) -> bool:
    term = query.term
    if term and not (member_hit or listing_text_hit(listing, term)):
        return False
    if query.category and listing.category != query.category:
        return False
    if query.levels and (listing.level or "").lower() not in query.levels:
        return False
    if query.intent == "teaching" and not listing.is_teaching:
        return False
    if query.intent == "learning" and not listing.is_learning:
        return False
    return True


def listing_score(listing: models.SkillListing, term: str, member_hit: bool) -> float:
    if not term:
        return 0.0
    score = name_score(listing.name, term)
    if any_contains(listing.tags, term):
        score += TAG_SCORE
    if contains(listing.description, term):
        score += DESCRIPTION_SCORE
    if member_hit:
        score += MEMBER_HIT_SCORE
    return score


def composite_id(member: models.User, listing: models.SkillListing) -> str:
    return f"{member.id}:{listing.id}"


def member_snapshot(member: models.User) -> MemberSnapshot:
    return MemberSnapshot(
        id=member.id,
        name=member.name,
        email=member.email,
        avatar=member.avatar,
        bio=member.bio,
        location=MemberLocation(city=member.city, country=member.country),
    )


def listing_snapshot(listing: models.SkillListing) -> ListingSnapshot:
    return ListingSnapshot(
        id=listing.id,
        name=listing.name,
        category=listing.category,
        level=(listing.level or "beginner").lower(),
        description=listing.description or "",
        tags=list(listing.tags or []),
        years_of_experience=listing.years_of_experience or 0,
        is_teaching=bool(listing.is_teaching),
        is_learning=bool(listing.is_learning),
    )


Row = Tuple[models.User, models.SkillListing, float]


def _tiebreak(row: Row) -> tuple:
    return (row[0].id, row[1].id)


SORT_KEYS = {
    "relevance": lambda row: (
        -row[2],
        -(row[0].total_sessions or 0),
        -(row[0].rating or 0.0),
    ) + _tiebreak(row),
    "rating": lambda row: (
        -(row[0].rating or 0.0),
        -(row[0].total_sessions or 0),
    ) + _tiebreak(row),
    "popularity": lambda row: (
        -(row[0].total_sessions or 0),
        -(row[0].rating or 0.0),
    ) + _tiebreak(row),
    "recent": lambda row: (
        -timestamp(row[0].created_at),
    ) + _tiebreak(row),
    "experience": lambda row: (
        -(row[0].total_sessions or 0),
        -(row[1].years_of_experience or 0),
    ) + _tiebreak(row),
}


def search_members(members: Iterable[models.User], query: SearchQuery) -> List[ListingMatch]:
    """Return one ranked row per matching listing across all members."""
    term = query.term
    rows: List[Row] = []
    per_member: Dict[int, int] = {}

    for member in members:
        if not member_passes(member, query):
            continue
        hit = member_text_hit(member, term)
        for listing in member.skills or ():
            if not listing_passes(listing, query, hit):
                continue
            rows.append((member, listing, listing_score(listing, term, hit)))
            per_member[member.id] = per_member.get(member.id, 0) + 1

    rows.sort(key=SORT_KEYS[query.sort_by])

    snapshots: Dict[int, MemberSnapshot] = {}
    results = []
    for member, listing, score in rows:
        if member.id not in snapshots:
            snapshots[member.id] = member_snapshot(member)
        results.append(
            ListingMatch(
                id=composite_id(member, listing),
                user=snapshots[member.id],
                skill=listing_snapshot(listing),
                rating=member.rating or 0.0,
                total_sessions=member.total_sessions or 0,
                total_reviews=member.total_reviews or 0,
                total_user_skills=per_member[member.id],
                member_skill_count=len(member.skills or ()),
                score=score,
                created_at=member.created_at,
            )
        )
    return results
