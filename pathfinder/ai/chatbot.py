import asyncio
import logging
from typing import AsyncIterator, List

import openai

from pathfinder.core.config import settings
from pathfinder.ai.gateway import create_gateway_client, translate_gateway_error
from pathfinder.ai.prompts import CAREER_COACH_SYSTEM_PROMPT
from pathfinder.ai.sse import DONE_FRAME, format_delta_frame

logger = logging.getLogger(__name__)

SIMULATED_REPLIES = [
    (("resume", "cv"),
     "A strong resume is one page, leads with projects and measurable results, "
     "and lists the skills the job post asks for. Ask a senior or mentor to review it!"),
    (("skill", "learn"),
     "Start with one core skill for your goal (for example Python for data roles or "
     "JavaScript for web), build two small projects with it, then add SQL and Git."),
    (("interview",),
     "Practise explaining two of your projects out loud, revise fundamentals for your "
     "field, and prepare a short answer to 'Tell me about yourself'."),
    (("career", "path", "course"),
     "Fill in the School or College form and I'll generate a personalised roadmap. "
     "Meanwhile, the Explore page lists careers, courses and internships you can browse."),
]

SIMULATED_DEFAULT = (
    "That's a great question! Based on your profile, I'd recommend focusing on "
    "strengthening your technical skills and building a portfolio of projects. "
    "Would you like specific resources?"
)


class ChatbotService:
    """
    Streams career-coach replies as SSE frames.

    Without AI_API_KEY the service runs in simulated mode and streams a
    canned reply through the same framing.
    """

    def __init__(self, async_client=None, model: str = None):
        self.async_client = async_client if async_client is not None else create_gateway_client()
        self.simulated = self.async_client is None
        self.model = model or settings.AI_MODEL

    async def open_stream(self, history: List[dict]) -> AsyncIterator[str]:
        """
        Starts a completion and returns an async iterator of SSE frames.

        Gateway failures that happen before the first byte are raised here
        (as RecommendationError subclasses) so the route can still answer
        with a proper status code.
        """
        if self.simulated:
            return self._simulated_frames(history)

        messages = [{"role": "system", "content": CAREER_COACH_SYSTEM_PROMPT.strip()}] + history
        try:
            stream = await self.async_client.chat.completions.create(
                model=self.model,
                messages=messages,
                stream=True,
            )
        except openai.APIError as e:
            logger.error(f"AI chat gateway error: {e}")
            raise translate_gateway_error(e) from e

        return self._relay_frames(stream)

    async def _relay_frames(self, stream) -> AsyncIterator[str]:
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield format_delta_frame(content)
        except openai.APIError as e:
            # Headers are already sent; end the stream and let the client keep what it has
            logger.error(f"AI chat stream interrupted: {e}")
        yield DONE_FRAME

    async def _simulated_frames(self, history: List[dict]) -> AsyncIterator[str]:
        last_user = next((m["content"] for m in reversed(history) if m["role"] == "user"), "")
        reply = self._simulated_response(last_user)
        for word in reply.split(" "):
            yield format_delta_frame(word + " ")
            await asyncio.sleep(0)
        yield DONE_FRAME

    def _simulated_response(self, message: str) -> str:
        msg = message.lower()
        for keywords, reply in SIMULATED_REPLIES:
            if any(k in msg for k in keywords):
                return reply
        return SIMULATED_DEFAULT


chatbot_service = ChatbotService()


def get_chatbot_service() -> ChatbotService:
    return chatbot_service
