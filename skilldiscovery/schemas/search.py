from datetime import datetime
from typing import Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

INTENTS = ("teaching", "learning", "both")
SORT_MODES = ("relevance", "rating", "popularity", "recent", "experience")

# ======================
# SEARCH REQUEST MODEL
# ======================

class SearchQuery(BaseModel):
    """Canonical, immutable filter set shared by every search stage."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    category: Optional[str] = None
    levels: Tuple[str, ...] = ()
    intent: str = "both"
    location: str = ""
    min_rating: float = 0.0
    sort_by: str = "relevance"
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1)

    @property
    def term(self) -> str:
        return self.query.lower()


# ======================
# CATALOG CHANNEL
# ======================

class CatalogMatch(BaseModel):
    id: int
    name: str
    category: str
    subcategory: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    available_levels: List[str] = []
    user_count: int = 0
    rating: float = 0.0
    is_teaching: bool = False
    is_learning: bool = False
    level: str = "intermediate"
    trending: bool = False
    popularity_score: float = 0.0
    score: float = 0.0
    created_at: Optional[datetime] = None


# ======================
# LISTING CHANNEL
# ======================

class MemberLocation(BaseModel):
    city: Optional[str] = None
    country: Optional[str] = None


class MemberSnapshot(BaseModel):
    id: int
    name: str
    email: str
    avatar: Optional[str] = None
    bio: Optional[str] = None
    location: MemberLocation


class ListingSnapshot(BaseModel):
    id: int
    name: str
    category: str
    level: str
    description: Optional[str] = None
    tags: List[str] = []
    years_of_experience: int = 0
    is_teaching: bool = False
    is_learning: bool = False


class ListingMatch(BaseModel):
    # "<member id>:<listing id>"
    id: str
    user: MemberSnapshot
    skill: ListingSnapshot
    rating: float = 0.0
    total_sessions: int = 0
    total_reviews: int = 0
    total_user_skills: int = 0
    member_skill_count: int = 0
    score: float = 0.0
    created_at: Optional[datetime] = None


# ======================
# PAGINATED RESPONSE
# ======================

class Page(BaseModel, Generic[T]):
    items: List[T]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int
    has_more: bool


class SearchResponse(BaseModel):
    skills: Page[CatalogMatch]
    user_skills: Page[ListingMatch]
    current_page: int
    has_more: bool
    filters: SearchQuery
