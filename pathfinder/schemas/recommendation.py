"""
Typed shapes of the JSON the AI gateway returns for each profile kind.

Gateway output is untrusted: it is parsed and validated here, once, and the
rest of the app (persistence, result pages) only handles validated models.
"""
import json
from dataclasses import dataclass
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator


class _GatewayModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _clamp_score(v):
    # Models sometimes answer 85.5 or "85"
    if isinstance(v, str):
        v = v.strip().rstrip("%")
    try:
        return max(0, min(100, round(float(v))))
    except (TypeError, ValueError, OverflowError):
        # left for the int validator to reject (includes inf and nan)
        return v


Score = Annotated[int, BeforeValidator(_clamp_score), Field(ge=0, le=100)]


# --- School ---

class CourseSuggestion(_GatewayModel):
    name: str
    stream: str = ""
    reason: str = ""
    match_score: Score = 0
    career_outcomes: list[str] = []
    entrance_exams: list[str] = []


class Milestone(_GatewayModel):
    stage: str
    focus: str = ""
    timeline: str = ""


class Roadmap(_GatewayModel):
    milestones: list[Milestone] = []


class CollegePreferences(_GatewayModel):
    suggested_budget: Optional[str] = None
    location_importance: Optional[str] = None


class SchoolRecommendation(_GatewayModel):
    personality_type: str
    personality_description: str = ""
    recommended_streams: list[str] = []
    courses: list[CourseSuggestion] = Field(min_length=1)
    roadmap: Roadmap = Roadmap()
    college_preferences: Optional[CollegePreferences] = None
    guidance: str = ""


# --- College ---

class SkillToLearn(_GatewayModel):
    skill: str
    priority: Literal["high", "medium", "low"] = "medium"
    reason: str = ""

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class Certification(_GatewayModel):
    name: str
    provider: str = ""
    reason: str = ""


class CollegeRecommendation(_GatewayModel):
    career_role: str
    required_skills: list[str] = []
    skills_you_have: list[str] = []
    skills_to_learn: list[SkillToLearn] = []
    recommended_certifications: list[Certification] = []
    readiness_percentage: Score = 0
    guidance: str = ""


RECOMMENDATION_MODELS = {
    "school": SchoolRecommendation,
    "college": CollegeRecommendation,
}


# --- Result union ---

@dataclass(frozen=True)
class ValidRecommendation:
    kind: str
    data: Union[SchoolRecommendation, CollegeRecommendation]

    def to_json(self) -> dict:
        return self.data.model_dump(mode="json")


@dataclass(frozen=True)
class InvalidRecommendation:
    reason: str


RecommendationResult = Union[ValidRecommendation, InvalidRecommendation]


def parse_recommendation(kind: str, raw) -> RecommendationResult:
    """
    Validates raw gateway output (a JSON string or an already decoded dict)
    against the schema for `kind`. Never raises for bad input.
    """
    model = RECOMMENDATION_MODELS.get(kind)
    if model is None:
        return InvalidRecommendation(f"Unknown recommendation type: {kind}")

    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            return InvalidRecommendation("AI response was not valid JSON")

    if not isinstance(raw, dict):
        return InvalidRecommendation("AI response was not a JSON object")

    try:
        return ValidRecommendation(kind=kind, data=model.model_validate(raw))
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        return InvalidRecommendation(f"AI response is missing or has invalid fields: {', '.join(fields)}")
