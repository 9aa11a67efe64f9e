import asyncio
import logging
from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from pathfinder.core.config import settings
from pathfinder.core.dependencies import require_user
from pathfinder.core.templates import templates
from pathfinder.db.models.user import User
from pathfinder.db.session import get_db
from pathfinder.services.gamification import BADGE_DEFINITIONS
from pathfinder.services.quiz import QUIZ_CATEGORIES, get_quiz, complete_quiz

logger = logging.getLogger(__name__)

router = APIRouter()

BADGE_NAMES = {b["slug"]: b["name"] for b in BADGE_DEFINITIONS}


def _quiz_or_404(quiz_id: str):
    if not settings.FEATURES.get("ENABLE_QUIZ", True):
        raise HTTPException(status_code=404)
    quiz = get_quiz(quiz_id)
    if not quiz:
        raise HTTPException(status_code=404)
    return quiz


@router.get("/quiz", response_class=HTMLResponse)
def quiz_list(request: Request, user: User = Depends(require_user)):
    if not settings.FEATURES.get("ENABLE_QUIZ", True):
        raise HTTPException(status_code=404)

    return templates.TemplateResponse(
        "quiz_list.html",
        {"request": request, "user": user, "quizzes": QUIZ_CATEGORIES}
    )


@router.get("/quiz/{quiz_id}", response_class=HTMLResponse)
def quiz_page(request: Request, quiz_id: str, user: User = Depends(require_user)):
    quiz = _quiz_or_404(quiz_id)
    return templates.TemplateResponse(
        "quiz.html",
        {"request": request, "user": user, "quiz": quiz, "answers": {}}
    )


@router.post("/quiz/{quiz_id}", response_class=HTMLResponse)
async def quiz_submit(
    request: Request,
    quiz_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user)
):
    quiz = _quiz_or_404(quiz_id)
    form = await request.form()

    # One radio group per question: q0, q1, ...
    raw = [form.get(f"q{i}") for i in range(len(quiz.questions))]
    try:
        answers = [int(a) for a in raw]
        score, new_badges = await asyncio.to_thread(complete_quiz, db, user, quiz, answers)
    except (TypeError, ValueError):
        return templates.TemplateResponse(
            "quiz.html",
            {
                "request": request,
                "user": user,
                "quiz": quiz,
                "answers": {i: a for i, a in enumerate(raw) if a is not None},
                "error": "Please answer every question before submitting.",
            },
            status_code=422
        )

    logger.info(f"User {user.id} completed quiz {quiz.id}: {score.correct}/{score.total}")
    return templates.TemplateResponse(
        "quiz_result.html",
        {
            "request": request,
            "user": user,
            "quiz": quiz,
            "score": score,
            "answers": answers,
            "new_badges": [BADGE_NAMES.get(slug, slug) for slug in new_badges],
        }
    )
