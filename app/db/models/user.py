from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from sqlalchemy.sql import func
from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String)

    # Career profile (lists are replaced wholesale, never mutated in place)
    skills = Column(JSON, nullable=False, default=list)
    target_roles = Column(JSON, nullable=False, default=list)
    projects = Column(JSON, nullable=False, default=list)
    education_level = Column(String, nullable=True)
    experience_level = Column(String, nullable=True)  # e.g. "junior", "mid", "senior"
    raw_cv_text = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
