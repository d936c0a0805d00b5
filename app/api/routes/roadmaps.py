"""
Saved roadmap endpoints.
"""
from fastapi import APIRouter, Depends, Body
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.core.auth_dependency import get_current_user, get_db
from app.schemas.ai import RoadmapProgressUpdate
from app.services import roadmap_service

router = APIRouter(prefix="/api/ai/roadmaps", tags=["Roadmaps"])


@router.get("")
def get_my_roadmaps(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """All saved roadmaps of the caller, newest first."""
    roadmaps = [
        roadmap_service.serialize_roadmap(r)
        for r in roadmap_service.list_roadmaps(db, current_user.id)
    ]
    return {
        "success": True,
        "roadmaps": roadmaps,
        "count": len(roadmaps)
    }


@router.get("/{roadmap_id}")
def get_roadmap_by_id(
    roadmap_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    roadmap = roadmap_service.get_roadmap(db, current_user.id, roadmap_id)
    return {
        "success": True,
        "roadmap": roadmap_service.serialize_roadmap(roadmap)
    }


@router.delete("/{roadmap_id}")
def delete_roadmap(
    roadmap_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    roadmap_service.delete_roadmap(db, current_user.id, roadmap_id)
    return {
        "success": True,
        "message": "Roadmap deleted successfully"
    }


@router.put("/{roadmap_id}/progress")
def update_roadmap_progress(
    roadmap_id: int,
    payload: RoadmapProgressUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update progress percentage (0-100), completed phases and notes."""
    roadmap_service.update_progress(
        db,
        current_user.id,
        roadmap_id,
        progress_percentage=payload.progress_percentage,
        completed_phases=payload.completed_phases,
        notes=payload.notes,
    )
    return {
        "success": True,
        "message": "Roadmap progress updated successfully"
    }
