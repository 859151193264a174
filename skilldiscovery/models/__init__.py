# skilldiscovery/models/__init__.py
# Import models in dependency order
from .skill import Skill, SKILL_CATEGORIES, PROFICIENCY_LEVELS
from .user import User, SkillListing

__all__ = ["Skill", "User", "SkillListing", "SKILL_CATEGORIES", "PROFICIENCY_LEVELS"]
