from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from skilldiscovery.schemas.search import MemberSnapshot

# ======================
# AGGREGATE VIEWS
# ======================

class SkillSummary(BaseModel):
    id: int
    name: str
    category: str
    description: Optional[str] = None
    user_count: int = 0
    avg_rating: float = 0.0
    teacher_count: int = 0
    learner_count: int = 0
    trending: bool = False
    popularity_score: float = 0.0
    created_at: Optional[datetime] = None


class CategorySummary(BaseModel):
    name: str
    count: int = 0
    total_users: int = 0
    teaching_users: int = 0
    learning_users: int = 0
    average_rating: float = 0.0
    skills: List[str] = []


# ======================
# AUTOCOMPLETE
# ======================

class SuggestionEntry(BaseModel):
    text: str
    type: str = "skill"
    category: str
    user_count: int = 0


# ======================
# SKILL DETAIL
# ======================

class Skill(BaseModel):
    id: int
    name: str
    category: str
    subcategory: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    search_keywords: List[str] = []
    available_levels: List[str] = []
    total_users: int = 0
    teaching_users: int = 0
    learning_users: int = 0
    average_rating: float = 0.0
    total_sessions: int = 0
    total_reviews: int = 0
    trending: bool = False
    popularity_score: float = 0.0
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SkillHolder(BaseModel):
    id: str
    user: MemberSnapshot
    level: str
    is_teaching: bool = False
    is_learning: bool = False
    years_of_experience: int = 0
    rating: float = 0.0


class SkillDetail(BaseModel):
    skill: Skill
    user_skills: List[SkillHolder]
    user_count: int
