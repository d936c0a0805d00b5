"""
Models for AI skill extraction results.
"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Text, JSON, Index, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class ExtractedSkill(Base):
    """
    A skill extracted from a user's CV.

    One row per (user, skill name); re-extraction refreshes proficiency and category.
    """
    __tablename__ = "extracted_skills"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_name = Column(String(255), nullable=False)
    proficiency = Column(String(50), nullable=True)  # beginner, intermediate, advanced, expert
    category = Column(String(100), nullable=True, index=True)  # programming_language, framework, ...
    source = Column(String(50), nullable=False, default="ai_extraction")
    is_verified = Column(Boolean, nullable=False, default=False)
    extracted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", backref="extracted_skills")

    __table_args__ = (
        UniqueConstraint("user_id", "skill_name", name="uq_extracted_skills_user_skill"),
    )

    def __repr__(self):
        return f"<ExtractedSkill(user_id={self.user_id}, skill_name={self.skill_name})>"


class AIExtraction(Base):
    """History of AI extraction runs with the full provider output."""
    __tablename__ = "ai_extractions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    extraction_type = Column(String(50), nullable=False, index=True)  # e.g. "cv_skills"
    input_text = Column(Text, nullable=True)
    extracted_data = Column(JSON, nullable=True)
    provider = Column(String(50), nullable=True)  # gemini, groq
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_ai_extractions_user_type", "user_id", "extraction_type"),
    )
