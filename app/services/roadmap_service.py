"""
Persistence for AI-generated career roadmaps.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.db.models.career_roadmap import CareerRoadmap
from app.llm.prompts import DEFAULT_JOB_APPLICATION_TIMING

logger = logging.getLogger(__name__)


def create_roadmap(
    db: Session,
    user_id: int,
    target_role: str,
    roadmap_data: Any,
    provider: str,
    timeframe_months: int,
    learning_hours_per_week: int,
    current_skills: List[str],
) -> CareerRoadmap:
    """
    Save a generated roadmap.

    `project_suggestions` and `job_application_timing` are lifted out of the
    provider output, with an empty list and a default timing when absent.
    """
    data = roadmap_data if isinstance(roadmap_data, dict) else {}
    project_suggestions = data.get("project_suggestions")
    if project_suggestions is None:
        project_suggestions = []
    timing = data.get("job_application_timing")
    if not isinstance(timing, str) or not timing:
        timing = DEFAULT_JOB_APPLICATION_TIMING

    roadmap = CareerRoadmap(
        user_id=user_id,
        title=f"Roadmap to {target_role}",
        target_role=target_role,
        roadmap_data=roadmap_data,
        ai_provider=provider,
        timeframe_months=timeframe_months,
        learning_hours_per_week=learning_hours_per_week,
        current_skills=current_skills,
        project_suggestions=project_suggestions,
        job_application_timing=timing,
    )
    db.add(roadmap)
    db.commit()
    db.refresh(roadmap)
    logger.info(f"Saved roadmap {roadmap.id} for user {user_id} ({target_role}, {provider})")
    return roadmap


def list_roadmaps(db: Session, user_id: int) -> List[CareerRoadmap]:
    """Caller's roadmaps, newest first."""
    return (
        db.query(CareerRoadmap)
        .filter(CareerRoadmap.user_id == user_id)
        .order_by(CareerRoadmap.created_at.desc(), CareerRoadmap.id.desc())
        .all()
    )


def get_roadmap(db: Session, user_id: int, roadmap_id: int) -> CareerRoadmap:
    roadmap = db.query(CareerRoadmap).filter(
        CareerRoadmap.id == roadmap_id,
        CareerRoadmap.user_id == user_id
    ).first()
    if not roadmap:
        raise NotFoundError("Roadmap not found")
    return roadmap


def delete_roadmap(db: Session, user_id: int, roadmap_id: int) -> None:
    roadmap = get_roadmap(db, user_id, roadmap_id)
    db.delete(roadmap)
    db.commit()
    logger.info(f"Deleted roadmap {roadmap_id} for user {user_id}")


def update_progress(
    db: Session,
    user_id: int,
    roadmap_id: int,
    progress_percentage: Optional[int] = None,
    completed_phases: Optional[List[int]] = None,
    notes: Optional[str] = None,
) -> CareerRoadmap:
    """
    Update progress fields that were provided; the others are left untouched.

    Raises:
        ValidationError: progress_percentage outside 0-100
        NotFoundError: Roadmap missing or owned by another user
    """
    if progress_percentage is not None and not 0 <= progress_percentage <= 100:
        raise ValidationError("Progress percentage must be between 0 and 100")

    roadmap = get_roadmap(db, user_id, roadmap_id)
    if progress_percentage is not None:
        roadmap.progress_percentage = progress_percentage
    if completed_phases is not None:
        roadmap.completed_phases = list(completed_phases)
    if notes is not None:
        roadmap.notes = notes

    db.commit()
    db.refresh(roadmap)
    return roadmap


def serialize_roadmap(roadmap: CareerRoadmap) -> Dict[str, Any]:
    return {
        "id": roadmap.id,
        "title": roadmap.title,
        "target_role": roadmap.target_role,
        "roadmap": roadmap.roadmap_data,
        "ai_provider": roadmap.ai_provider,
        "timeframe_months": roadmap.timeframe_months,
        "learning_hours_per_week": roadmap.learning_hours_per_week,
        "current_skills": roadmap.current_skills,
        "project_suggestions": roadmap.project_suggestions,
        "job_application_timing": roadmap.job_application_timing,
        "progress_percentage": roadmap.progress_percentage,
        "completed_phases": roadmap.completed_phases,
        "notes": roadmap.notes,
        "created_at": roadmap.created_at.isoformat() if roadmap.created_at else None,
        "updated_at": roadmap.updated_at.isoformat() if roadmap.updated_at else None,
    }
