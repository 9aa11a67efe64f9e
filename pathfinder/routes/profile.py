from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from pathfinder.core.dependencies import require_user
from pathfinder.core.templates import templates
from pathfinder.db.crud.profiles import get_latest_profile
from pathfinder.db.crud.recommendations import list_recent_for_user
from pathfinder.db.models.user import User
from pathfinder.db.session import get_db
from pathfinder.services.gamification import level_progress, is_on_fire, badge_board, recent_activity
from pathfinder.services.insights import profile_completion, school_completion_steps, college_completion_steps

router = APIRouter()


def _completion(profile, steps_for):
    if not profile:
        return None
    values = {column.name: getattr(profile, column.name) for column in profile.__table__.columns}
    percent, next_step = profile_completion(steps_for(values))
    return {"percent": percent, "next_step": next_step}


@router.get("/profile", response_class=HTMLResponse)
def profile_page(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_user)
):
    school = get_latest_profile(db, "school", user.id)
    college = get_latest_profile(db, "college", user.id)

    return templates.TemplateResponse(
        "profile.html",
        {
            "request": request,
            "user": user,
            "progress": level_progress(user.xp_points),
            "on_fire": is_on_fire(user.streak_count),
            "badges": badge_board(db, user),
            "activity": recent_activity(db, user.id),
            "recommendations": list_recent_for_user(db, user.id),
            "school_profile": school,
            "college_profile": college,
            "school_completion": _completion(school, school_completion_steps),
            "college_completion": _completion(college, college_completion_steps),
        }
    )
