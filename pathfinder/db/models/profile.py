from sqlalchemy import Column, Integer, String, Float, ForeignKey, JSON, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from pathfinder.db.declarative import Base


class SchoolProfile(Base):
    __tablename__ = "school_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    name = Column(String, nullable=False)
    class_level = Column(String(2), nullable=False)  # "10" | "11" | "12"
    board = Column(String, nullable=True)            # e.g. "CBSE", "State Board"

    favorite_subjects = Column(JSON, default=list, nullable=False)
    interests = Column(JSON, default=list, nullable=False)
    average_mark = Column(Float, nullable=False)     # percentage, 0-100
    achievements = Column(JSON, default=list)

    # --- Preferences ---
    preferred_location = Column(String, nullable=True)
    budget_range = Column(String, nullable=True)         # low | medium | high
    distance_preference = Column(String, nullable=True)  # nearby | same-state | anywhere
    personality_type = Column(String, nullable=True)     # RIASEC letter, filled from the recommendation

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="school_profiles")

    def to_prompt_data(self) -> dict:
        return {
            "name": self.name,
            "class_level": self.class_level,
            "board": self.board,
            "favorite_subjects": list(self.favorite_subjects or []),
            "interests": list(self.interests or []),
            "average_mark": self.average_mark,
            "preferred_location": self.preferred_location,
            "achievements": list(self.achievements or []),
            "budget_range": self.budget_range,
            "distance_preference": self.distance_preference,
        }


class CollegeProfile(Base):
    __tablename__ = "college_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    name = Column(String, nullable=False)
    degree = Column(String, nullable=False)       # e.g. "B.Tech CSE"
    year = Column(String(1), nullable=False)      # "1".."4"
    cgpa = Column(Float, nullable=True)           # 0-10

    career_goal = Column(String, nullable=False)
    current_skills = Column(JSON, default=list, nullable=False)
    certificates = Column(JSON, default=list)
    achievements = Column(JSON, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="college_profiles")

    def to_prompt_data(self) -> dict:
        return {
            "name": self.name,
            "degree": self.degree,
            "year": self.year,
            "cgpa": self.cgpa,
            "career_goal": self.career_goal,
            "current_skills": list(self.current_skills or []),
            "certificates": list(self.certificates or []),
            "achievements": list(self.achievements or []),
        }
