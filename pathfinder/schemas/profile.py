from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

SCHOOL_SUBJECTS = [
    "Mathematics", "Physics", "Chemistry", "Biology", "Computer Science",
    "Commerce", "Economics", "English", "History", "Art",
]
SCHOOL_INTERESTS = [
    "coding", "design", "medicine", "business", "arts",
    "engineering", "teaching", "research", "sports", "social-work",
]
COLLEGE_SKILLS = [
    "Programming", "Data Structures", "Web Development", "Python",
    "JavaScript", "SQL", "Machine Learning", "Design", "Communication",
    "Excel", "Java", "React", "Node.js", "Cloud Computing",
]
CAREER_GOALS = [
    "Software Developer", "Data Scientist", "UI/UX Designer",
    "Digital Marketer", "Business Analyst", "Product Manager",
    "DevOps Engineer", "Full Stack Developer", "AI/ML Engineer",
]


def split_csv(value) -> list[str]:
    """Form fields like achievements arrive as "a, b, c"; API callers may send a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


class _ProfileIn(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SchoolProfileIn(_ProfileIn):
    name: str = Field(min_length=2)
    class_level: Literal["10", "11", "12"] = "12"
    board: Optional[str] = None
    favorite_subjects: list[str] = Field(min_length=1)
    interests: list[str] = Field(min_length=1)
    average_mark: float = Field(ge=0, le=100)
    preferred_location: Optional[str] = None
    achievements: list[str] = []
    budget_range: Optional[str] = None
    distance_preference: Optional[str] = None

    @field_validator("achievements", mode="before")
    @classmethod
    def parse_achievements(cls, v):
        return split_csv(v)


class CollegeProfileIn(_ProfileIn):
    name: str = Field(min_length=2)
    degree: str = Field(min_length=2)
    year: Literal["1", "2", "3", "4"] = "2"
    cgpa: Optional[float] = Field(default=None, ge=0, le=10)
    career_goal: str = Field(min_length=2)
    current_skills: list[str] = Field(min_length=1)
    certificates: list[str] = []
    achievements: list[str] = []

    @field_validator("certificates", "achievements", mode="before")
    @classmethod
    def parse_lists(cls, v):
        return split_csv(v)


FIELD_MESSAGES = {
    "name": "Name must be at least 2 characters",
    "degree": "Degree is required",
    "career_goal": "Career goal is required",
    "favorite_subjects": "Select at least one subject",
    "interests": "Select at least one interest",
    "current_skills": "Select at least one skill",
    "average_mark": "Mark must be between 0 and 100",
    "cgpa": "CGPA must be between 0 and 10",
}


def errors_by_field(exc) -> dict[str, str]:
    """Flattens a pydantic ValidationError into {field: message} for inline form errors."""
    errors = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__all__"
        errors.setdefault(field, FIELD_MESSAGES.get(field, error["msg"]))
    return errors
