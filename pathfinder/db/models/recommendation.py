from sqlalchemy import Column, Integer, String, JSON, DateTime
from datetime import datetime
from pathfinder.db.declarative import Base


class Recommendation(Base):
    """
    AI-generated guidance stored against exactly one profile.

    profile_id points at school_profiles or college_profiles depending on
    profile_type, so it is not declared as a foreign key.
    """
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, nullable=False, index=True)
    profile_type = Column(String(10), nullable=False)  # "school" | "college"
    recommendation_data = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
