"""Canned gateway answers shared by the recommendation tests."""
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from pathfinder.ai.gateway import RecommendationClient

SCHOOL_RECOMMENDATION = {
    "personality_type": "I",
    "personality_description": "Investigative: curious, analytical and enjoys solving problems.",
    "recommended_streams": ["Science"],
    "courses": [
        {
            "name": "B.Tech CSE",
            "stream": "Science",
            "reason": "Strong maths and a coding interest.",
            "match_score": 88,
            "career_outcomes": ["Software Developer", "Data Scientist"],
            "entrance_exams": ["JEE Main"],
        },
        {
            "name": "B.Sc Physics",
            "stream": "Science",
            "reason": "Enjoys physics.",
            "match_score": 64,
            "career_outcomes": ["Researcher"],
            "entrance_exams": ["CUET"],
        },
    ],
    "roadmap": {
        "milestones": [
            {"stage": "12th Grade", "focus": "Board exams and maths", "timeline": "now"},
            {"stage": "Entrance Prep", "focus": "JEE preparation", "timeline": "6-12 months"},
        ]
    },
    "college_preferences": {"suggested_budget": "medium", "location_importance": "low"},
    "guidance": "Build small coding projects alongside exam prep.",
}

COLLEGE_RECOMMENDATION = {
    "career_role": "Data Scientist",
    "required_skills": ["Python", "SQL", "Statistics", "Machine Learning"],
    "skills_you_have": ["Python", "SQL"],
    "skills_to_learn": [
        {"skill": "Statistics", "priority": "High", "reason": "Core of every model."},
        {"skill": "Machine Learning", "priority": "medium", "reason": "Needed for modelling roles."},
    ],
    "recommended_certifications": [
        {"name": "Google Data Analytics", "provider": "Coursera", "reason": "Recognised entry credential."},
    ],
    "readiness_percentage": 55,
    "guidance": "Do two end-to-end data projects this semester.",
}

SCHOOL_FORM = {
    "name": "Asha Verma",
    "class_level": "12",
    "board": "CBSE",
    "favorite_subjects": ["Mathematics", "Physics"],
    "interests": ["coding", "research"],
    "average_mark": "91.5",
    "preferred_location": "Pune",
    "achievements": "Science olympiad, Coding club lead",
    "budget_range": "medium",
    "distance_preference": "same-state",
}

COLLEGE_FORM = {
    "name": "Rahul Nair",
    "degree": "B.Tech CSE",
    "year": "3",
    "cgpa": "8.2",
    "career_goal": "Data Scientist",
    "current_skills": ["Python", "SQL"],
    "certificates": "",
    "achievements": "Hackathon finalist",
}


def completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content=None, side_effect=None) -> RecommendationClient:
    """A RecommendationClient whose gateway answers `content` (dict is JSON-encoded) or raises."""
    if isinstance(content, dict):
        content = json.dumps(content)
    async_client = MagicMock()
    async_client.chat.completions.create = AsyncMock(return_value=completion(content), side_effect=side_effect)
    return RecommendationClient(async_client=async_client, model="test-model")
