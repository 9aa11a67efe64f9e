from pathlib import Path
from fastapi.templating import Jinja2Templates
from pathfinder.core.config import settings
from pathfinder.ai.chat_session import QUICK_PROMPTS

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["app_name"] = settings.APP_NAME
templates.env.globals["features"] = settings.FEATURES
templates.env.globals["quick_prompts"] = QUICK_PROMPTS


def pop_flash(request):
    """Returns and clears the pending notification stored in the session."""
    return request.session.pop("flash", None)


def flash(request, message: str, level: str = "info"):
    request.session["flash"] = {"message": message, "level": level}


templates.env.globals["pop_flash"] = pop_flash
