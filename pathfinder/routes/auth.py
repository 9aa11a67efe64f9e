import logging
from fastapi import APIRouter, Request, Form, Depends
from fastapi.responses import RedirectResponse, HTMLResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from pathfinder.core.config import settings
from pathfinder.core.security import verify_password, hash_password
from pathfinder.core.jwt import create_access_token
from pathfinder.core.limiter import limiter
from pathfinder.core.templates import templates, flash
from pathfinder.db.crud.users import get_user_by_email, create_user
from pathfinder.db.models.user import User
from pathfinder.db.session import get_db
from pathfinder.schemas.user import UserCreate
from pathfinder.services.gamification import record_activity

logger = logging.getLogger(__name__)

router = APIRouter()


def _login_response(user: User, target: str = "/") -> RedirectResponse:
    token = create_access_token({
        "sub": str(user.id),
        "email": user.email,
    })

    response = RedirectResponse(target, status_code=302)
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return response


# =====================================================
# LOGIN PAGE (GET)
# =====================================================
@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    return templates.TemplateResponse(
        "login.html",
        {
            "request": request,
            "email": "",
        }
    )


# =====================================================
# LOGIN (POST)
# =====================================================
@router.post("/login", response_class=HTMLResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db)
):
    user = get_user_by_email(db, email)

    if not user or not verify_password(password, user.hashed_password):
        logger.info(f"Failed login attempt for {email}")
        return templates.TemplateResponse(
            "login.html",
            {
                "request": request,
                "email": email,
                "error": "Invalid email or password",
            },
            status_code=401
        )

    record_activity(db, user)
    flash(request, f"Welcome back, {user.display_name}!", "success")
    return _login_response(user)


# =====================================================
# SIGNUP PAGE (GET)
# =====================================================
@router.get("/signup", response_class=HTMLResponse)
def signup_page(request: Request):
    if not settings.FEATURES.get("ENABLE_REGISTRATION", True):
        return RedirectResponse("/login", status_code=302)

    return templates.TemplateResponse(
        "signup.html",
        {
            "request": request,
            "values": {},
            "errors": {},
        }
    )


# =====================================================
# SIGNUP (POST)
# =====================================================
@router.post("/signup", response_class=HTMLResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def signup(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db)
):
    if not settings.FEATURES.get("ENABLE_REGISTRATION", True):
        return RedirectResponse("/login", status_code=302)

    values = {"full_name": full_name, "email": email}

    try:
        data = UserCreate(full_name=full_name, email=email, password=password)
    except ValidationError as e:
        errors = {str(err["loc"][0]): err["msg"] for err in e.errors()}
        return templates.TemplateResponse(
            "signup.html",
            {"request": request, "values": values, "errors": errors},
            status_code=422
        )

    if get_user_by_email(db, data.email):
        return templates.TemplateResponse(
            "signup.html",
            {"request": request, "values": values, "errors": {"email": "An account with this email already exists"}},
            status_code=409
        )

    user = create_user(
        db=db,
        email=data.email,
        hashed_password=hash_password(data.password),
        full_name=data.full_name.strip(),
    )
    logger.info(f"New user registered: {user.id}")

    record_activity(db, user)
    flash(request, "Account created. Let's find your path!", "success")
    return _login_response(user)


# =====================================================
# LOGOUT
# =====================================================
@router.get("/logout")
def logout(request: Request):
    request.session.clear()
    response = RedirectResponse(url="/login", status_code=302)
    response.delete_cookie("access_token")
    return response
