"""
Profile updates driven by AI skill extraction.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.db.models.user import User
from app.db.models.extracted_skill import ExtractedSkill, AIExtraction

logger = logging.getLogger(__name__)


def _list_field(extracted: Dict[str, Any], key: str) -> List[Any]:
    """The field's value when it is a JSON array, otherwise an empty list."""
    value = extracted.get(key)
    return value if isinstance(value, list) else []


def skill_names(extracted: Dict[str, Any]) -> List[str]:
    """
    Names from `technical_skills`, which may hold objects with a `name`
    field or plain strings. Anything else is skipped.
    """
    names = []
    for skill in _list_field(extracted, "technical_skills"):
        if isinstance(skill, dict) and isinstance(skill.get("name"), str):
            names.append(skill["name"])
        elif isinstance(skill, str):
            names.append(skill)
    return names


def role_names(extracted: Dict[str, Any]) -> List[str]:
    return [role for role in _list_field(extracted, "roles") if isinstance(role, str)]


def merge_unique(existing: Optional[List[str]], new_items: List[str]) -> List[str]:
    """Append new items to existing ones, keeping order and dropping duplicates."""
    merged = list(existing or [])
    for item in new_items:
        if item not in merged:
            merged.append(item)
    return merged


def upsert_extracted_skills(db: Session, user_id: int, extracted: Dict[str, Any]) -> int:
    """
    Insert or refresh one ExtractedSkill row per technical skill.

    A skill named more than once keeps its first occurrence.

    Returns:
        Number of skills written
    """
    written = 0
    seen = set()
    for skill in _list_field(extracted, "technical_skills"):
        if isinstance(skill, dict):
            name = skill.get("name")
            proficiency = skill.get("proficiency")
            category = skill.get("category")
        else:
            name, proficiency, category = skill, None, None
        if not isinstance(name, str) or not name or name in seen:
            continue
        seen.add(name)

        row = db.query(ExtractedSkill).filter(
            ExtractedSkill.user_id == user_id,
            ExtractedSkill.skill_name == name
        ).first()
        if row is None:
            row = ExtractedSkill(user_id=user_id, skill_name=name)
            db.add(row)
        row.proficiency = proficiency if isinstance(proficiency, str) else None
        row.category = category if isinstance(category, str) else None
        written += 1
    return written


def record_extraction(
    db: Session,
    user_id: int,
    extraction_type: str,
    input_text: str,
    extracted_data: Any,
    provider: str,
) -> AIExtraction:
    """Store one extraction run in the history table."""
    extraction = AIExtraction(
        user_id=user_id,
        extraction_type=extraction_type,
        input_text=input_text,
        extracted_data=extracted_data,
        provider=provider,
    )
    db.add(extraction)
    return extraction


def apply_extracted_profile(
    db: Session,
    user: User,
    extracted: Dict[str, Any],
    cv_text: str,
    provider: str,
) -> User:
    """
    Merge extracted skills and roles into the user's profile.

    Existing entries are kept; new ones are appended without duplicates. The
    CV text is stored and every technical skill is upserted into
    extracted_skills. Commits the session.
    """
    skills = skill_names(extracted)
    roles = role_names(extracted)
    logger.info(f"Extracted {len(skills)} technical skills and {len(roles)} roles for user {user.id}")

    # Assign new lists so SQLAlchemy sees the JSON columns as changed
    user.skills = merge_unique(user.skills, skills)
    user.target_roles = merge_unique(user.target_roles, roles)
    user.raw_cv_text = cv_text

    upsert_extracted_skills(db, user.id, extracted)
    record_extraction(db, user.id, "cv_skills", cv_text, extracted, provider)

    db.commit()
    db.refresh(user)
    logger.info(f"Updated profile for user {user.id}: {len(user.skills)} skills, {len(user.target_roles)} roles")
    return user


def profile_context(user: User) -> str:
    """Short profile description embedded in mentor questions."""
    return (
        f"User's current skills: {', '.join(user.skills or [])}\n"
        f"Target roles: {', '.join(user.target_roles or [])}\n"
        f"Experience level: {user.experience_level or 'Not specified'}"
    )
