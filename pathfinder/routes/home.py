from typing import Optional
from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from pathfinder.core.dependencies import get_current_user
from pathfinder.core.templates import templates
from pathfinder.db.crud.recommendations import list_recent_for_user
from pathfinder.db.models.user import User
from pathfinder.db.session import get_db
from pathfinder.services.gamification import level_progress, is_on_fire
from pathfinder.services.highlights import pick_tip, next_tip_index, TRENDING_CAREERS, SUCCESS_STORIES

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    tip: Optional[int] = None,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_current_user)
):
    tip_index, tip_text = pick_tip(tip)
    context = {
        "request": request,
        "user": user,
        "tip": tip_text,
        "next_tip": next_tip_index(tip_index),
        "trending_careers": TRENDING_CAREERS,
        "success_stories": SUCCESS_STORIES,
    }

    if user:
        context.update({
            "progress": level_progress(user.xp_points),
            "on_fire": is_on_fire(user.streak_count),
            "recent": list_recent_for_user(db, user.id, limit=3),
        })

    return templates.TemplateResponse("index.html", context)
