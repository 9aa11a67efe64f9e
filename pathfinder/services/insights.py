"""Small derived views used by the form and result pages."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompletionStep:
    id: str
    label: str
    completed: bool


def profile_completion(steps: list[CompletionStep]) -> tuple[int, Optional[CompletionStep]]:
    """Returns (percentage complete, next incomplete step or None)."""
    if not steps:
        return 100, None
    done = sum(1 for s in steps if s.completed)
    next_step = next((s for s in steps if not s.completed), None)
    return round(done / len(steps) * 100), next_step


def school_completion_steps(values: dict) -> list[CompletionStep]:
    return [
        CompletionStep("name", "Add your name", bool(values.get("name"))),
        CompletionStep("subjects", "Select favorite subjects", bool(values.get("favorite_subjects"))),
        CompletionStep("interests", "Choose interests", bool(values.get("interests"))),
        CompletionStep("mark", "Enter average mark", _positive(values.get("average_mark"))),
        CompletionStep("budget", "Set budget preference", bool(values.get("budget_range"))),
    ]


def college_completion_steps(values: dict) -> list[CompletionStep]:
    return [
        CompletionStep("name", "Add your name", bool(values.get("name"))),
        CompletionStep("degree", "Enter degree/program", bool(values.get("degree"))),
        CompletionStep("career_goal", "Select career goal", bool(values.get("career_goal"))),
        CompletionStep("current_skills", "Choose skills", bool(values.get("current_skills"))),
        CompletionStep("certificates", "Add certificates (optional)", bool(values.get("certificates"))),
    ]


def _positive(value) -> bool:
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


def match_label(score: int) -> str:
    if score >= 80:
        return "Excellent Match"
    if score >= 60:
        return "Good Match"
    return "Building Match"


def match_tone(score: int) -> str:
    if score >= 80:
        return "success"
    if score >= 60:
        return "warning"
    return "accent"
