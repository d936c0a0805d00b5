"""
CareerRoadmap model for AI-generated learning roadmaps.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class CareerRoadmap(Base):
    """
    A learning roadmap generated for a user and a target role.

    roadmap_data holds the provider's full JSON (phases, topics, resources).
    """
    __tablename__ = "career_roadmaps"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    target_role = Column(String(255), nullable=False)
    roadmap_data = Column(JSON, nullable=False)
    ai_provider = Column(String(50), nullable=False)  # "gemini" or "groq"

    # Generation inputs
    timeframe_months = Column(Integer, nullable=True)
    learning_hours_per_week = Column(Integer, nullable=True)
    current_skills = Column(JSON, nullable=False, default=list)

    # Fields lifted out of roadmap_data
    project_suggestions = Column(JSON, nullable=False, default=list)
    job_application_timing = Column(Text, nullable=True)

    # Progress tracking
    progress_percentage = Column(Integer, nullable=False, default=0)
    completed_phases = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", backref="career_roadmaps")

    __table_args__ = (
        Index("idx_roadmaps_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<CareerRoadmap(id={self.id}, user_id={self.user_id}, target_role={self.target_role})>"
