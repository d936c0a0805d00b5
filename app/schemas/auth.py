"""
Pydantic schemas for authentication endpoints.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """Request schema for user signup."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "full_name": "Jane Doe",
                "email": "jane.doe@example.com",
                "password": "SecurePass123",
                "skills": ["Python", "SQL"],
                "target_roles": ["Backend Developer"],
                "experience_level": "junior"
            }
        },
    )

    full_name: str = Field(..., min_length=1, max_length=200, description="User's full name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, description="User's password (min 8 characters)")
    skills: List[str] = Field(default_factory=list, description="Known skills")
    target_roles: List[str] = Field(default_factory=list, description="Roles the user is aiming for")
    projects: List[str] = Field(default_factory=list, description="Short project descriptions")
    education_level: Optional[str] = None
    experience_level: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """bcrypt only hashes the first 72 bytes."""
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password too long (bcrypt limit 72 bytes)")
        return v


class SignupResponse(BaseModel):
    message: str
    user_id: int


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
