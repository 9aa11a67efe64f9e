"""
Client-side model of the chat widget: an ordered, in-memory conversation
that sends history to the chat endpoint and applies streamed deltas to a
single growing assistant message.
"""
import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import httpx

from pathfinder.ai.sse import iter_deltas

logger = logging.getLogger(__name__)

GREETING = "Hi! I'm PathFinder AI, your career coach. Ask me anything about careers, skills, or education!"
FALLBACK_REPLY = "Sorry, I'm having trouble connecting. Please try again!"

QUICK_PROMPTS = [
    "How can I improve my resume?",
    "What skills should I learn?",
    "Tips for interview prep",
    "Career path suggestions",
]


class ChatState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"


class ChatBusyError(Exception):
    """Raised when send() is called while a reply is still in flight."""


class ChatUnavailableError(Exception):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Chat endpoint answered {status_code}")


@dataclass
class ChatMessage:
    id: int
    text: str
    is_bot: bool

    @property
    def role(self) -> str:
        return "assistant" if self.is_bot else "user"


Listener = Callable[[List[ChatMessage]], None]


class ChatSession:
    def __init__(self, client: httpx.AsyncClient, url: str, headers: Optional[dict] = None):
        self.client = client
        self.url = url
        self.headers = headers or {}
        self.state = ChatState.IDLE
        self._ids = itertools.count(1)
        self._listeners: List[Listener] = []
        self.greeting = self._new_message(GREETING, is_bot=True)
        self.messages: List[ChatMessage] = [self.greeting]

    # -------------------------------------------------
    # Listeners
    # -------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registers a change listener and returns the matching unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener(list(self.messages))

    # -------------------------------------------------
    # Sending
    # -------------------------------------------------
    @property
    def is_busy(self) -> bool:
        return self.state != ChatState.IDLE

    def history(self) -> List[dict]:
        """Conversation as sent to the server. The greeting is never sent."""
        return [
            {"role": m.role, "content": m.text}
            for m in self.messages
            if m is not self.greeting
        ]

    async def send(self, text: str) -> Optional[ChatMessage]:
        """
        Sends one user message and streams the reply into a new assistant
        message, which is returned. Blank input is ignored (returns None).

        Network failures and error statuses never raise: the reply becomes
        FALLBACK_REPLY.
        """
        if self.is_busy:
            raise ChatBusyError("A reply is still streaming")
        if not text or not text.strip():
            return None

        self.state = ChatState.SENDING
        self._append(self._new_message(text, is_bot=False))
        reply = None

        try:
            async with self.client.stream("POST", self.url, json={"messages": self.history()}, headers=self.headers) as response:
                if response.is_error:
                    raise ChatUnavailableError(response.status_code)

                self.state = ChatState.STREAMING
                reply = self._append(self._new_message("", is_bot=True))
                async for delta in iter_deltas(response.aiter_bytes()):
                    reply.text += delta
                    self._notify()
        except (httpx.HTTPError, ChatUnavailableError) as e:
            logger.error(f"Chat error: {e}")
            if reply is not None and not reply.text:
                self.messages.remove(reply)
            reply = self._append(self._new_message(FALLBACK_REPLY, is_bot=True))
        finally:
            self.state = ChatState.IDLE

        return reply

    def _new_message(self, text: str, is_bot: bool) -> ChatMessage:
        return ChatMessage(id=next(self._ids), text=text, is_bot=is_bot)

    def _append(self, message: ChatMessage) -> ChatMessage:
        self.messages.append(message)
        self._notify()
        return message
