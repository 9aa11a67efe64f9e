import logging
from contextlib import asynccontextmanager
from pathlib import Path

import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.sessions import SessionMiddleware

# 1. Load .env and configure logging
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

from pathfinder.core.config import settings
from pathfinder.core.auth_guard import NotAuthenticatedError
from pathfinder.core.limiter import limiter
from pathfinder.core.templates import templates
from pathfinder.db.base import Base
from pathfinder.db.session import engine, SessionLocal
from pathfinder.db.seed import seed_catalog
from pathfinder.services.gamification import init_badges
from pathfinder.routes import auth, home, students, explore, quiz, profile, chat, api


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'self'; img-src 'self' data: https:; style-src 'self' 'unsafe-inline'; script-src 'self' 'unsafe-inline';"
        return response


# 2. Sentry (only when a DSN is configured)
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2,
    )

BASE_DIR = Path(__file__).resolve().parent


# 3. Lifespan (database)
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)

        db = SessionLocal()
        try:
            init_badges(db)
            if settings.SEED_CATALOG:
                seed_catalog(db)
        finally:
            db.close()

        logger.info("Database ready")
    except Exception as e:
        logger.error(f"CRITICAL DATABASE ERROR: {e}")
        raise
    yield
    logger.info("Shutting down...")


# 4. App
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _is_api(request: Request) -> bool:
    return request.url.path.startswith("/api/")


# 5. Exception handlers
@app.exception_handler(NotAuthenticatedError)
async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
    if _is_api(request):
        return JSONResponse({"error": exc.message}, status_code=401)
    return RedirectResponse("/login", status_code=302)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = sorted({".".join(str(p) for p in err["loc"] if p != "body") for err in exc.errors()})
    return JSONResponse({"error": f"Invalid request: {', '.join(f for f in fields if f)}"}, status_code=422)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and not _is_api(request):
        return templates.TemplateResponse("404.html", {"request": request}, status_code=404)
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


# 6. Middlewares
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY,
    session_cookie="pathfinder_session",
    same_site="lax",
    https_only=settings.ENVIRONMENT == "production",
)

# 7. Static files
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

# 8. Routes
app.include_router(home.router)
app.include_router(auth.router)
app.include_router(students.router)
app.include_router(explore.router)
app.include_router(quiz.router)
app.include_router(profile.router)
app.include_router(chat.router)
app.include_router(api.router)
