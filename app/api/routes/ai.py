"""
AI endpoints: generic action dispatch plus convenience wrappers that read
the caller's profile and persist results.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Body
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.core.auth_dependency import get_current_user, get_db
from app.core.errors import ExternalServiceError, ValidationError
from app.services.ai_service import AIService, get_ai_service
from app.services import profile_service, roadmap_service
from app.schemas.ai import (
    ActionKind,
    ActionRequest,
    ActionResponse,
    AskMentorRequest,
    ExtractSkillsRequest,
    ImproveProjectsRequest,
    ProfileSuggestionsRequest,
    Provider,
    ProviderOnlyRequest,
    RoadmapRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])


def _require_success(response: ActionResponse, fallback: str) -> None:
    if not response.success:
        logger.error(f"AI action failed: {response.message}")
        raise ExternalServiceError(response.message or fallback)


# ============================================
# Generic action
# ============================================

@router.post("/action", response_model=ActionResponse)
def process_ai_action(
    request: ActionRequest = Body(...),
    current_user: User = Depends(get_current_user),
    ai_service: AIService = Depends(get_ai_service)
):
    """
    Run one AI action.

    Actions: extract_skills, generate_roadmap, ask_question, generate_content.
    Providers: gemini (default), groq.
    Provider failures come back as success=false with data.error.

    Known parameters are type-checked before any provider call: a wrong type
    or out-of-range value (e.g. current_skills sent as a list, or
    timeframe_months=0) is rejected with 400 instead of being ignored.
    Unknown parameters are ignored.
    """
    return ai_service.process_action(request)


# ============================================
# Convenience endpoints
# ============================================

@router.post("/extract-skills")
def extract_and_save_skills(
    payload: ExtractSkillsRequest = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai_service: AIService = Depends(get_ai_service)
):
    """
    Extract skills from a CV and optionally merge them into the profile.
    """
    if not payload.cv_text.strip():
        raise ValidationError("cv_text is required")

    provider = Provider.from_name(payload.provider)
    logger.info(f"Extracting skills for user {current_user.id}, update_profile={payload.update_profile}")
    response = ai_service.process_action(ActionRequest(
        action=ActionKind.EXTRACT_SKILLS,
        provider=provider,
        input=payload.cv_text,
    ))
    _require_success(response, "AI extraction failed")

    extracted_data = response.data
    if payload.update_profile:
        if not isinstance(extracted_data, dict):
            raise ExternalServiceError("AI extraction returned an unexpected shape")
        profile_service.apply_extracted_profile(
            db, current_user, extracted_data, payload.cv_text, provider.value
        )

    return {
        "success": True,
        "extracted_data": extracted_data,
        "profile_updated": payload.update_profile,
        "provider": provider.value,
        "message": "Skills extracted successfully"
    }


@router.post("/roadmap")
def generate_roadmap(
    payload: RoadmapRequest = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai_service: AIService = Depends(get_ai_service)
):
    """
    Generate a personalized learning roadmap and save it.
    """
    target_role = (payload.target_role or payload.tech_stack or "").strip()
    if not target_role:
        raise ValidationError("target_role is required")

    provider = Provider.from_name(payload.provider)
    user_skills = list(current_user.skills or []) if payload.include_current_skills else []

    parameters = {
        "timeframe_months": payload.timeframe_months,
        "learning_hours_per_week": payload.learning_hours_per_week,
    }
    if payload.include_current_skills:
        parameters["current_skills"] = ", ".join(user_skills)

    response = ai_service.process_action(ActionRequest(
        action=ActionKind.GENERATE_ROADMAP,
        provider=provider,
        input=target_role,
        parameters=parameters,
    ))
    _require_success(response, "Roadmap generation failed")

    roadmap = roadmap_service.create_roadmap(
        db,
        user_id=current_user.id,
        target_role=target_role,
        roadmap_data=response.data,
        provider=response.provider.value,
        timeframe_months=payload.timeframe_months,
        learning_hours_per_week=payload.learning_hours_per_week,
        current_skills=user_skills,
    )

    return {
        "success": True,
        "roadmap": response.data,
        "roadmap_id": roadmap.id,
        "provider": response.provider.value,
        "message": "Roadmap generated and saved successfully",
        "metadata": {
            "timeframe_months": payload.timeframe_months,
            "learning_hours_per_week": payload.learning_hours_per_week,
            "job_application_timing": roadmap.job_application_timing
        }
    }


@router.post("/generate-summary")
def generate_professional_summary(
    payload: Optional[ProviderOnlyRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    ai_service: AIService = Depends(get_ai_service)
):
    """Generate a CV/LinkedIn professional summary from the profile."""
    payload = payload or ProviderOnlyRequest()
    profile = (
        "User Profile:\n"
        f"Skills: {', '.join(current_user.skills or [])}\n"
        f"Projects: {', '.join(current_user.projects or [])}\n"
        f"Target Roles: {', '.join(current_user.target_roles or [])}\n"
        f"Education: {current_user.education_level or 'Not specified'}\n"
        f"Experience Level: {current_user.experience_level or 'Not specified'}"
    )
    prompt = (
        "Generate a professional summary for a CV/LinkedIn profile based on the following information:\n\n"
        f"{profile}\n\n"
        "Create a compelling 2-3 sentence professional summary that highlights key strengths, "
        "experience, and career goals. Make it engaging and professional."
    )

    response = ai_service.process_action(ActionRequest(
        action=ActionKind.GENERATE_CONTENT,
        provider=Provider.from_name(payload.provider),
        input=prompt,
        parameters={"content_type": "professional_summary", "tone": "professional", "length": "short"},
    ))
    return {
        "success": response.success,
        "summary": response.data,
        "provider": response.provider.value
    }


@router.post("/improve-projects")
def improve_project_descriptions(
    payload: ImproveProjectsRequest = Body(...),
    current_user: User = Depends(get_current_user),
    ai_service: AIService = Depends(get_ai_service)
):
    """Rewrite project descriptions for a CV."""
    projects_text = "\n- ".join(payload.projects)
    prompt = (
        "Improve these project descriptions for a professional CV. Make them more impactful using "
        "action verbs and quantifiable achievements where possible. "
        f"User's skills: {', '.join(current_user.skills or [])}\n\n"
        f"Projects:\n- {projects_text}\n\n"
        "Return a JSON array of improved descriptions in the same order."
    )

    response = ai_service.process_action(ActionRequest(
        action=ActionKind.GENERATE_CONTENT,
        provider=Provider.from_name(payload.provider),
        input=prompt,
        parameters={"content_type": "project_descriptions", "format": "bullet_points"},
    ))
    return {
        "success": response.success,
        "improved_projects": response.data,
        "provider": response.provider.value
    }


@router.post("/profile-suggestions")
def get_profile_suggestions(
    payload: Optional[ProfileSuggestionsRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    ai_service: AIService = Depends(get_ai_service)
):
    """Suggestions to improve a LinkedIn/portfolio profile."""
    payload = payload or ProfileSuggestionsRequest()
    prompt = (
        f"Provide 5 specific, actionable suggestions to improve a {payload.platform} profile for a job "
        "seeker with the following background:\n\n"
        f"Skills: {', '.join(current_user.skills or [])}\n"
        f"Target Roles: {', '.join(current_user.target_roles or [])}\n"
        f"Experience Level: {current_user.experience_level or 'Not specified'}\n"
        f"Education: {current_user.education_level or 'Not specified'}\n\n"
        "Return suggestions as a JSON array of objects with 'category' and 'suggestion' fields."
    )

    response = ai_service.process_action(ActionRequest(
        action=ActionKind.GENERATE_CONTENT,
        provider=Provider.from_name(payload.provider),
        input=prompt,
        parameters={"content_type": "profile_suggestions", "platform": payload.platform},
    ))
    return {
        "success": response.success,
        "suggestions": response.data,
        "platform": payload.platform,
        "provider": response.provider.value
    }


@router.post("/ask-mentor")
def ask_career_mentor(
    payload: AskMentorRequest = Body(...),
    current_user: User = Depends(get_current_user),
    ai_service: AIService = Depends(get_ai_service)
):
    """Career chatbot: answer a question with the caller's profile as context."""
    if not payload.question.strip():
        raise ValidationError("question is required")

    response = ai_service.process_action(ActionRequest(
        action=ActionKind.ASK_QUESTION,
        provider=Provider.from_name(payload.provider),
        input=payload.question,
        parameters={"context": profile_service.profile_context(current_user)},
    ))
    return {
        "success": response.success,
        "answer": response.data,
        "provider": response.provider.value
    }
