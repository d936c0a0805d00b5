"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from app.db.models.user import User
from app.db.models.extracted_skill import ExtractedSkill, AIExtraction
from app.db.models.career_roadmap import CareerRoadmap

__all__ = [
    "User",
    "ExtractedSkill",
    "AIExtraction",
    "CareerRoadmap",
]
