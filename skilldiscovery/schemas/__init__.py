# skilldiscovery/schemas/__init__.py

# Search schemas
from .search import (
    SearchQuery,
    CatalogMatch,
    MemberLocation,
    MemberSnapshot,
    ListingSnapshot,
    ListingMatch,
    Page,
    SearchResponse,
)

# Catalog views
from .skill import (
    Skill,
    SkillSummary,
    CategorySummary,
    SuggestionEntry,
    SkillHolder,
    SkillDetail,
)

__all__ = [
    "SearchQuery",
    "CatalogMatch",
    "MemberLocation",
    "MemberSnapshot",
    "ListingSnapshot",
    "ListingMatch",
    "Page",
    "SearchResponse",
    "Skill",
    "SkillSummary",
    "CategorySummary",
    "SuggestionEntry",
    "SkillHolder",
    "SkillDetail",
]
