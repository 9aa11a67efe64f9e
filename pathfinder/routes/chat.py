import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from pathfinder.ai.chatbot import ChatbotService, get_chatbot_service
from pathfinder.ai.gateway import RecommendationError
from pathfinder.core.config import settings
from pathfinder.schemas.chat import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/ai-chat")
async def ai_chat(
    payload: ChatRequest,
    service: ChatbotService = Depends(get_chatbot_service)
):
    if not settings.FEATURES.get("ENABLE_CHATBOT", True):
        return JSONResponse({"error": "Chat is disabled"}, status_code=404)

    history = [turn.model_dump() for turn in payload.messages]
    try:
        frames = await service.open_stream(history)
    except RecommendationError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    return StreamingResponse(
        frames,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
