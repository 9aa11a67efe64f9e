from sqlalchemy import Column, Integer, String, Float, Boolean, JSON, Text
from pathfinder.db.declarative import Base


class College(Base):
    __tablename__ = "colleges"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)

    # Annual fees in INR
    budget_min = Column(Integer, nullable=True)
    budget_max = Column(Integer, nullable=True)
    fee_type = Column(String, nullable=True)  # government | private | deemed

    min_mark = Column(Float, nullable=True)
    placement_percentage = Column(Float, nullable=True)
    scholarship_available = Column(Boolean, default=False)
    courses_offered = Column(JSON, default=list)
    facilities = Column(JSON, default=list)


class Career(Base):
    __tablename__ = "careers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    required_skills = Column(JSON, default=list, nullable=False)
    recommended_certifications = Column(JSON, default=list)


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    stream = Column(String, nullable=False)  # Science | Commerce | Arts
    description = Column(Text, nullable=True)
    related_subjects = Column(JSON, default=list)
    related_interests = Column(JSON, default=list)


class InternshipRole(Base):
    __tablename__ = "internship_roles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    experience_level = Column(String, nullable=False)  # beginner | intermediate | advanced
    required_skills = Column(JSON, default=list, nullable=False)
    recommended_for = Column(JSON, default=list)
