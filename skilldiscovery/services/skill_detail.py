from sqlalchemy.orm import Session

from skilldiscovery.config import settings
from skilldiscovery.crud import skill as skill_crud
from skilldiscovery.crud import user as user_crud
from skilldiscovery.schemas.skill import Skill, SkillDetail, SkillHolder
from skilldiscovery.services.errors import SkillNotFoundError
from skilldiscovery.services.member_search import composite_id, member_snapshot


def get_skill_detail(db: Session, skill_id: int) -> SkillDetail:
    """Catalog skill plus the members who list a skill of the same name."""
    skill = skill_crud.get_skill(db, skill_id)
    if not skill:
        raise SkillNotFoundError(skill_id)

    key = skill.name.strip().lower()
    holders = []
    for member in user_crud.find_members_with_listing(
        db, skill.name, limit=settings.SKILL_DETAIL_HOLDER_LIMIT
    ):
        listing = next(
            (row for row in member.skills if (row.name or "").strip().lower() == key),
            None,
        )
        if listing is None:
            continue
        holders.append(
            SkillHolder(
                id=composite_id(member, listing),
                user=member_snapshot(member),
                level=(listing.level or "intermediate").lower(),
                is_teaching=bool(listing.is_teaching),
                is_learning=bool(listing.is_learning),
                years_of_experience=listing.years_of_experience or 0,
                rating=member.rating or 0.0,
            )
        )

    return SkillDetail(
        skill=Skill.model_validate(skill),
        user_skills=holders,
        user_count=len(holders),
    )
