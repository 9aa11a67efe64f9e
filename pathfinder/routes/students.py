import logging
from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from pathfinder.ai.gateway import RecommendationClient, RecommendationError, get_recommendation_client
from pathfinder.core.config import settings
from pathfinder.core.dependencies import require_user
from pathfinder.core.limiter import limiter
from pathfinder.core.templates import templates, flash
from pathfinder.db.crud.profiles import get_owned_profile
from pathfinder.db.crud.recommendations import get_latest_recommendation
from pathfinder.db.models.user import User
from pathfinder.db.session import get_db
from pathfinder.schemas.profile import (
    SchoolProfileIn, CollegeProfileIn, errors_by_field,
    SCHOOL_SUBJECTS, SCHOOL_INTERESTS, COLLEGE_SKILLS, CAREER_GOALS,
)
from pathfinder.schemas.recommendation import ValidRecommendation, parse_recommendation
from pathfinder.services.explore import list_colleges
from pathfinder.services.insights import (
    profile_completion, school_completion_steps, college_completion_steps, match_label, match_tone,
)
from pathfinder.services.recommendation import submit_school_profile, submit_college_profile

logger = logging.getLogger(__name__)

router = APIRouter()

SCHOOL_LIST_FIELDS = ("favorite_subjects", "interests")
COLLEGE_LIST_FIELDS = ("current_skills",)


async def _read_form(request: Request, list_fields) -> dict:
    form = await request.form()
    values = {key: form.get(key) for key in form.keys() if key not in list_fields}
    for key in list_fields:
        values[key] = form.getlist(key)
    return values


def _form_page(request: Request, user: User, kind: str, values: dict, errors: dict, status_code: int = 200):
    if kind == "school":
        template = "school_student.html"
        steps = school_completion_steps(values)
        options = {"subjects": SCHOOL_SUBJECTS, "interests": SCHOOL_INTERESTS}
    else:
        template = "college_student.html"
        steps = college_completion_steps(values)
        options = {"skills": COLLEGE_SKILLS, "career_goals": CAREER_GOALS}

    percent, next_step = profile_completion(steps)
    return templates.TemplateResponse(
        template,
        {
            "request": request,
            "user": user,
            "values": values,
            "errors": errors,
            "options": options,
            "completion": percent,
            "completion_steps": steps,
            "next_step": next_step,
        },
        status_code=status_code
    )


def _load_result(db: Session, kind: str, profile_id: int, user: User):
    """Returns (profile, validated recommendation) or None when there is nothing to show."""
    profile = get_owned_profile(db, kind, profile_id, user.id)
    if not profile:
        return None

    stored = get_latest_recommendation(db, profile.id, kind)
    if not stored:
        return None

    result = parse_recommendation(kind, stored.recommendation_data)
    if not isinstance(result, ValidRecommendation):
        logger.error(f"Stored {kind} recommendation {stored.id} no longer validates: {result.reason}")
        return None
    return profile, result.data


# -------------------------------------------------
# SCHOOL STUDENT
# -------------------------------------------------
@router.get("/school-student", response_class=HTMLResponse)
def school_form(request: Request, user: User = Depends(require_user)):
    return _form_page(request, user, "school", {"name": user.full_name or "", "class_level": "12"}, {})


@router.post("/school-student", response_class=HTMLResponse)
@limiter.limit(settings.RECOMMENDATION_RATE_LIMIT)
async def school_submit(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
    client: RecommendationClient = Depends(get_recommendation_client)
):
    values = await _read_form(request, SCHOOL_LIST_FIELDS)

    try:
        payload = SchoolProfileIn(**values)
    except ValidationError as e:
        return _form_page(request, user, "school", values, errors_by_field(e), status_code=422)

    try:
        profile, _ = await submit_school_profile(db, user, payload, client)
    except RecommendationError as e:
        flash(request, e.message, "error")
        return _form_page(request, user, "school", values, {}, status_code=e.status_code)

    flash(request, "Your recommendations are ready! +100 XP", "success")
    return RedirectResponse(f"/school-results/{profile.id}", status_code=303)


@router.get("/school-results/{profile_id}", response_class=HTMLResponse)
def school_results(
    request: Request,
    profile_id: int,
    location: str = "",
    budget: str = "",
    db: Session = Depends(get_db),
    user: User = Depends(require_user)
):
    loaded = _load_result(db, "school", profile_id, user)
    if not loaded:
        flash(request, "No recommendations found for this profile.", "error")
        return RedirectResponse("/school-student", status_code=302)

    profile, recommendation = loaded
    return templates.TemplateResponse(
        "school_results.html",
        {
            "request": request,
            "user": user,
            "profile": profile,
            "recommendation": recommendation,
            "colleges": list_colleges(db, location=location, budget=budget),
            "location": location,
            "budget": budget,
            "match_label": match_label,
            "match_tone": match_tone,
        }
    )


# -------------------------------------------------
# COLLEGE STUDENT
# -------------------------------------------------
@router.get("/college-student", response_class=HTMLResponse)
def college_form(request: Request, user: User = Depends(require_user)):
    return _form_page(request, user, "college", {"name": user.full_name or "", "year": "2"}, {})


@router.post("/college-student", response_class=HTMLResponse)
@limiter.limit(settings.RECOMMENDATION_RATE_LIMIT)
async def college_submit(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
    client: RecommendationClient = Depends(get_recommendation_client)
):
    values = await _read_form(request, COLLEGE_LIST_FIELDS)

    try:
        payload = CollegeProfileIn(**values)
    except ValidationError as e:
        return _form_page(request, user, "college", values, errors_by_field(e), status_code=422)

    try:
        profile, _ = await submit_college_profile(db, user, payload, client)
    except RecommendationError as e:
        flash(request, e.message, "error")
        return _form_page(request, user, "college", values, {}, status_code=e.status_code)

    flash(request, "Your skill gap analysis is ready! +100 XP", "success")
    return RedirectResponse(f"/college-results/{profile.id}", status_code=303)


@router.get("/college-results/{profile_id}", response_class=HTMLResponse)
def college_results(
    request: Request,
    profile_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_user)
):
    loaded = _load_result(db, "college", profile_id, user)
    if not loaded:
        flash(request, "No recommendations found for this profile.", "error")
        return RedirectResponse("/college-student", status_code=302)

    profile, recommendation = loaded
    return templates.TemplateResponse(
        "college_results.html",
        {
            "request": request,
            "user": user,
            "profile": profile,
            "recommendation": recommendation,
            "match_label": match_label,
            "match_tone": match_tone,
        }
    )
