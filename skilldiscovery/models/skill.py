from sqlalchemy import (
    ARRAY,
    JSON,
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    Column,
    Float,
    Index,
    Integer,
    String,
    Text,
    func,
)
from skilldiscovery.database import Base

SKILL_CATEGORIES = (
    "Programming & Development",
    "Design & Creative",
    "Business & Marketing",
    "Data & Analytics",
    "Languages",
    "Music & Arts",
    "Sports & Fitness",
    "Cooking & Lifestyle",
    "Academic & Education",
    "Crafts & DIY",
    "Other",
)

# Ordered from least to most proficient.
PROFICIENCY_LEVELS = ("beginner", "intermediate", "advanced", "expert")

# SQLite (used by tests) does not support ARRAY; store as JSON there.
StringList = ARRAY(String).with_variant(JSON, "sqlite")


# skilldiscovery/models/skill.py
class Skill(Base):
    """Canonical catalog entry with aggregate usage stats.

    Stats and popularity_score are maintained by the profile layer
    (see services/skill_stats.py); the search engine only reads them.
    """

    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    category = Column(String(50), nullable=False, default="Other", index=True)
    subcategory = Column(String(100))
    description = Column(Text)
    tags = Column(StringList, default=list)
    search_keywords = Column(StringList, default=list)
    available_levels = Column(StringList, default=list)

    # Aggregate stats
    total_users = Column(Integer, default=0, nullable=False)
    teaching_users = Column(Integer, default=0, nullable=False)
    learning_users = Column(Integer, default=0, nullable=False)
    average_rating = Column(Float, default=0.0, nullable=False)
    total_sessions = Column(Integer, default=0, nullable=False)
    total_reviews = Column(Integer, default=0, nullable=False)

    trending = Column(Boolean, default=False, nullable=False)
    popularity_score = Column(Float, default=0.0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "average_rating >= 0 AND average_rating <= 5",
            name="check_skill_rating_range",
        ),
    )

    def __repr__(self):
        return f"<Skill id={self.id} name={self.name!r}>"


# Display names are unique regardless of case.
Index("uq_skills_name_lower", func.lower(Skill.name), unique=True)
