"""C++ tutor chat: a personalised roadmap followed by open questions."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from llm_gateway import ChatFn, CompletionError
from observability import log_event, span
from viva.models import Message

from .models import CoursePreferences

logger = logging.getLogger(__name__)

ROADMAP_REQUEST = "Please create a personalized C++ learning roadmap and initial guidance based on my background"
ROADMAP_ERROR = (
    "I apologize, but I encountered an error while generating your personalized roadmap. "
    "Please try again or contact support."
)
TURN_ERROR = "I apologize, but I encountered an error. Please try again or contact support."
TUTOR_ROLE = "You're a C++ tutor."


class TutorSession:
    """Conversation with the tutor for one learner.

    ``open`` asks for the roadmap with the learner's background as the system
    instruction. Every later question replays the roadmap request and the
    whole visible transcript, so the model sees the conversation from its
    first user turn. Failures add an apology message and never raise.
    """

    def __init__(self, chat: ChatFn, preferences: CoursePreferences, *, session_id: Optional[str] = None) -> None:
        self.session_id = session_id or uuid4().hex
        self.preferences = preferences
        self.events: List[Dict[str, Any]] = []
        self._chat = chat
        self._transcript: List[Message] = []
        self._roadmap: Optional[str] = None
        self._busy = False

    @property
    def transcript(self) -> Sequence[Message]:
        return tuple(self._transcript)

    @property
    def roadmap(self) -> Optional[str]:
        return self._roadmap

    @property
    def busy(self) -> bool:
        return self._busy

    def can_open(self) -> bool:
        return not self._busy and self._roadmap is None

    def can_ask(self, text: Optional[str]) -> bool:
        return not self._busy and bool((text or "").strip())

    async def open(self) -> bool:
        """Request the roadmap; on success it becomes the first tutor message."""

        if not self.can_open():
            return False
        self._busy = True
        self._transcript = []
        try:
            with span(self, "roadmap"):
                reply = await self._chat([Message(role="user", content=ROADMAP_REQUEST)], self.preferences.background())
        except CompletionError as exc:
            self._fail("roadmap", ROADMAP_ERROR, exc)
            return False
        finally:
            self._busy = False

        self._roadmap = reply
        self._transcript.append(Message(role="assistant", content=reply))
        log_event("tutor.roadmap", self.session_id, messages=len(self._transcript))
        return True

    async def ask(self, text: Optional[str]) -> bool:
        if not self.can_ask(text):
            return False
        self._transcript.append(Message(role="user", content=(text or "").strip()))
        turns = [Message(role="user", content=ROADMAP_REQUEST), *self._transcript]
        self._busy = True
        try:
            with span(self, "ask"):
                reply = await self._chat(turns, f"{TUTOR_ROLE} {self.preferences.background()}")
        except CompletionError as exc:
            self._fail("ask", TURN_ERROR, exc)
            return False
        finally:
            self._busy = False

        self._transcript.append(Message(role="assistant", content=reply))
        log_event("tutor.turn", self.session_id, messages=len(self._transcript))
        return True

    def _fail(self, action: str, apology: str, exc: CompletionError) -> None:
        logger.error("Tutor %s failed for session %s: %s", action, self.session_id, exc)
        log_event("tutor.error", self.session_id, level=logging.ERROR, outcome=action, reason=str(exc))
        self._transcript.append(Message(role="assistant", content=apology))


__all__ = ["ROADMAP_ERROR", "ROADMAP_REQUEST", "TURN_ERROR", "TUTOR_ROLE", "TutorSession"]
