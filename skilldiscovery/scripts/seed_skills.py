import logging
import sys
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from skilldiscovery import models
from skilldiscovery.database import Base, SessionLocal, engine
from skilldiscovery.services.skill_stats import compute_popularity_score

logger = logging.getLogger(__name__)

ALL_LEVELS = list(models.PROFICIENCY_LEVELS)
SCORED_STATS = ("total_users", "teaching_users", "average_rating", "total_sessions", "total_reviews")

STARTER_SKILLS: List[Dict] = [
    {
        "name": "JavaScript",
        "description": "Popular programming language for web development, both frontend and backend.",
        "category": "Programming & Development",
        "subcategory": "Web Development",
        "tags": ["programming", "web", "frontend", "backend", "nodejs", "react"],
        "search_keywords": ["js", "javascript", "programming", "web development"],
        "trending": True,
        "stats": {"total_users": 1245, "teaching_users": 234, "learning_users": 1011,
                  "average_rating": 4.5, "total_sessions": 5420, "total_reviews": 892},
    },
    {
        "name": "Python",
        "description": "Versatile programming language great for beginners and experts alike.",
        "category": "Programming & Development",
        "subcategory": "Data Science",
        "tags": ["programming", "data science", "machine learning", "automation"],
        "search_keywords": ["python", "programming", "data science", "ml"],
        "trending": True,
        "stats": {"total_users": 1156, "teaching_users": 198, "learning_users": 958,
                  "average_rating": 4.6, "total_sessions": 4890, "total_reviews": 756},
    },
    {
        "name": "UI/UX Design",
        "description": "Designing usable, accessible and attractive digital products.",
        "category": "Design & Creative",
        "subcategory": "Product Design",
        "tags": ["design", "figma", "prototyping", "user research"],
        "search_keywords": ["ux", "ui", "design", "figma"],
        "trending": True,
        "stats": {"total_users": 642, "teaching_users": 120, "learning_users": 522,
                  "average_rating": 4.3, "total_sessions": 1830, "total_reviews": 401},
    },
    {
        "name": "Spanish",
        "description": "Conversational and written Spanish for travel, work and study.",
        "category": "Languages",
        "tags": ["language", "conversation", "grammar"],
        "search_keywords": ["espanol", "spanish", "language"],
        "stats": {"total_users": 534, "teaching_users": 88, "learning_users": 446,
                  "average_rating": 4.7, "total_sessions": 2210, "total_reviews": 530},
    },
    {
        "name": "Guitar",
        "description": "Acoustic and electric guitar from first chords to improvisation.",
        "category": "Music & Arts",
        "subcategory": "Instruments",
        "tags": ["music", "instrument", "chords"],
        "search_keywords": ["guitar", "music", "acoustic"],
        "stats": {"total_users": 410, "teaching_users": 95, "learning_users": 315,
                  "average_rating": 4.5, "total_sessions": 1320, "total_reviews": 298},
    },
    {
        "name": "SQL",
        "description": "Querying and modelling relational databases.",
        "category": "Data & Analytics",
        "tags": ["database", "queries", "analytics"],
        "search_keywords": ["sql", "postgres", "mysql", "database"],
        "stats": {"total_users": 388, "teaching_users": 77, "learning_users": 311,
                  "average_rating": 4.4, "total_sessions": 1105, "total_reviews": 240},
    },
]


def _skill_from_seed(entry: Dict) -> models.Skill:
    stats = dict(entry.get("stats") or {})
    return models.Skill(
        name=entry["name"],
        description=entry.get("description", ""),
        category=entry.get("category", "Other"),
        subcategory=entry.get("subcategory"),
        tags=[tag.lower() for tag in entry.get("tags", [])],
        search_keywords=[word.lower() for word in entry.get("search_keywords", [])],
        available_levels=entry.get("available_levels", ALL_LEVELS),
        trending=entry.get("trending", False),
        popularity_score=compute_popularity_score(
            **{key: value for key, value in stats.items() if key in SCORED_STATS}
        ),
        is_active=True,
        **stats,
    )


def seed_skills(db: Session, entries: Optional[List[Dict]] = None) -> int:
    """Insert catalog entries whose name (case-insensitive) is not present yet."""
    created = 0
    for entry in entries if entries is not None else STARTER_SKILLS:
        existing = db.query(models.Skill).filter(
            func.lower(models.Skill.name) == entry["name"].strip().lower()
        ).first()
        if existing:
            continue
        db.add(_skill_from_seed(entry))
        created += 1
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return created


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    try:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            created = seed_skills(db)
        finally:
            db.close()
        print(f"Seeded {created} skill(s)")
        return 0
    except Exception as exc:
        print(f"Skill seeding failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
