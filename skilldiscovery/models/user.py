from sqlalchemy import (
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import relationship
from skilldiscovery.database import Base
from skilldiscovery.models.skill import StringList


# ---------------- USER (MEMBER) ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    avatar = Column(String(255))
    bio = Column(String(500))
    city = Column(String(100))
    country = Column(String(100))

    # Stats
    rating = Column(Float, default=0.0, nullable=False)
    total_sessions = Column(Integer, default=0, nullable=False)
    total_reviews = Column(Integer, default=0, nullable=False)

    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, onupdate=func.now())

    skills = relationship(
        "SkillListing",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="SkillListing.id",
    )

    @property
    def location(self):
        return {"city": self.city, "country": self.country}


# ---------------- SKILL LISTING (owned by one user) ----------------
class SkillListing(Base):
    __tablename__ = "user_skills"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    # Free text; matched against Skill.name case-insensitively but never
    # required to exist in the catalog.
    name = Column(String(100), nullable=False, index=True)
    category = Column(String(50), nullable=False, default="Other", index=True)
    level = Column(String(20), nullable=False, default="beginner")
    description = Column(String(500))
    tags = Column(StringList, default=list)
    years_of_experience = Column(Integer, default=0, nullable=False)
    is_teaching = Column(Boolean, default=False, nullable=False)
    is_learning = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        CheckConstraint("years_of_experience >= 0", name="check_listing_experience"),
    )

    user = relationship("User", back_populates="skills")
