"""
Pydantic schemas for AI actions.
"""
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Provider(str, Enum):
    """Remote AI provider handling a request."""
    GEMINI = "gemini"
    GROQ = "groq"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Provider":
        """Lenient lookup used by convenience endpoints: only "groq" selects Groq."""
        return cls.GROQ if (name or "").lower() == cls.GROQ.value else cls.GEMINI


class ActionKind(str, Enum):
    """Task type; selects the prompt template and expected response shape."""
    EXTRACT_SKILLS = "extract_skills"
    GENERATE_ROADMAP = "generate_roadmap"
    ASK_QUESTION = "ask_question"
    GENERATE_CONTENT = "generate_content"


class ActionRequest(BaseModel):
    """Request model for the generic AI action endpoint."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "action": "extract_skills",
                "provider": "gemini",
                "input": "Senior Python developer, 5 years, AWS",
                "parameters": None
            }
        },
    )

    action: ActionKind = Field(..., description="Action to perform")
    provider: Provider = Field(Provider.GEMINI, description="AI provider (defaults to gemini)")
    input: str = Field(..., description="Input text for the action")
    parameters: Optional[Dict[str, Any]] = Field(None, description="Optional action-specific parameters")

    @field_validator("input")
    @classmethod
    def input_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("input must not be empty")
        return value


class ActionResponse(BaseModel):
    """Uniform success/failure envelope returned by the AI service."""
    success: bool
    data: Any = Field(..., description="Parsed provider output, or {'error': message} on failure")
    provider: Provider
    message: Optional[str] = None


# ============================================
# Typed per-action options
# ============================================

class _ActionOptions(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ExtractSkillsOptions(_ActionOptions):
    pass


class RoadmapOptions(_ActionOptions):
    current_skills: Optional[str] = None
    timeframe_months: Optional[int] = Field(None, ge=1, le=120)
    learning_hours_per_week: Optional[int] = Field(None, ge=1, le=168)


class QuestionOptions(_ActionOptions):
    context: Optional[str] = None


class ContentOptions(_ActionOptions):
    content_type: str = "generic"
    # The full parameters map is shown to the model verbatim
    parameters: Optional[Dict[str, Any]] = None


# ============================================
# Convenience endpoint payloads
# ============================================

class ExtractSkillsRequest(BaseModel):
    cv_text: str = Field(..., min_length=1, description="CV / resume text")
    provider: Optional[str] = Field(None, description="gemini or groq")
    update_profile: bool = Field(False, description="Merge extracted skills and roles into the profile")


class RoadmapRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "target_role": "Full Stack Developer",
                "timeframe_months": 6,
                "learning_hours_per_week": 10,
                "provider": "gemini",
                "include_current_skills": True
            }
        },
    )

    target_role: Optional[str] = Field(None, description="Role or tech stack to learn")
    tech_stack: Optional[str] = Field(None, description="Alias of target_role")
    timeframe_months: int = Field(6, ge=1, le=120)
    learning_hours_per_week: int = Field(10, ge=1, le=168)
    provider: Optional[str] = None
    include_current_skills: bool = True


class ProviderOnlyRequest(BaseModel):
    provider: Optional[str] = None


class ImproveProjectsRequest(BaseModel):
    projects: List[str] = Field(..., min_length=1)
    provider: Optional[str] = None


class ProfileSuggestionsRequest(BaseModel):
    platform: str = "linkedin"
    provider: Optional[str] = None


class AskMentorRequest(BaseModel):
    question: str = Field(..., min_length=1)
    provider: Optional[str] = None


class RoadmapProgressUpdate(BaseModel):
    progress_percentage: Optional[int] = None
    completed_phases: Optional[List[int]] = None
    notes: Optional[str] = None
