from typing import Optional
from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.orm import Session

from pathfinder.core.dependencies import get_current_user
from pathfinder.core.templates import templates
from pathfinder.db.models.user import User
from pathfinder.db.session import get_db
from pathfinder.services.explore import search_catalog, serialize_catalog

router = APIRouter()


@router.get("/explore", response_class=HTMLResponse)
def explore_page(
    request: Request,
    q: str = "",
    state: str = "",
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_current_user)
):
    return templates.TemplateResponse(
        "explore.html",
        {
            "request": request,
            "user": user,
            "q": q,
            "state": state,
            "results": search_catalog(db, query=q, state=state),
        }
    )


@router.get("/api/explore", response_class=JSONResponse)
def explore_api(q: str = "", state: str = "", db: Session = Depends(get_db)):
    return JSONResponse(serialize_catalog(search_catalog(db, query=q, state=state)))
