"""Mock viva session controller: lifecycle, transcript, timer and report commit."""
from __future__ import annotations

import logging
import sqlite3
from datetime import date
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Protocol, Sequence, Union
from uuid import uuid4

from llm_gateway import CompletionError, CompletionFn
from observability import log_event, span

from .errors import ReportFormatError
from .models import (
    DEFAULT_DIFFICULTY,
    TOPICS,
    Difficulty,
    InterviewSession,
    Message,
    Phase,
    Report,
)
from .prompts import followup_prompt, opening_prompt, report_prompt
from .report_parser import parse_report

if TYPE_CHECKING:
    from session_history import HistoryStore

logger = logging.getLogger(__name__)

START_ERROR = "I apologize, but I encountered an error while starting the viva. Please try again."
TURN_ERROR = "I apologize, but I encountered an error. Please try again."
REPORT_ERROR = "I apologize, but there was an error generating your performance report. Please try again."

MIN_MESSAGES_FOR_REPORT = 2


class Speaker(Protocol):  # Text-to-speech port; expected to queue and return quickly
    def speak(self, text: str) -> None: ...


class VivaSession:
    """One mock viva, from topic selection to the scored report.

    Actions that call the completion service (``start``, ``submit``, ``end``)
    hold a busy flag for the duration of the request; any action arriving
    while it is set is ignored. Guard violations never raise: the action
    returns ``False``/``None`` and the ``can_*`` predicates tell a front end
    which controls to disable. Completion and report-format failures leave
    the phase unchanged and add an apology message to the transcript.
    """

    def __init__(
        self,
        complete: CompletionFn,
        history: "HistoryStore",
        *,
        speaker: Optional[Speaker] = None,
        session_id: Optional[str] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.session_id = session_id or uuid4().hex
        self.events: List[Dict[str, Any]] = []
        self._complete = complete
        self._history = history
        self._speaker = speaker
        self._today = today

        self._phase = Phase.NOT_STARTED
        self._topic: Optional[str] = None
        self._difficulty = DEFAULT_DIFFICULTY
        self._transcript: List[Message] = []
        self._elapsed = 0
        self._busy = False
        self._report: Optional[Report] = None
        self._record: Optional[InterviewSession] = None
        self._voice_mode = False
        self._draft = ""

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def topic(self) -> Optional[str]:
        return self._topic

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def transcript(self) -> Sequence[Message]:
        return tuple(self._transcript)

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def report(self) -> Optional[Report]:
        return self._report

    @property
    def record(self) -> Optional[InterviewSession]:
        return self._record

    @property
    def voice_mode(self) -> bool:
        return self._voice_mode

    @property
    def draft(self) -> str:
        return self._draft

    def can_start(self, topic: Optional[str]) -> bool:
        return self._phase is Phase.NOT_STARTED and not self._busy and topic in TOPICS

    def can_submit(self, text: Optional[str]) -> bool:
        return self._phase is Phase.IN_PROGRESS and not self._busy and bool((text or "").strip())

    @property
    def can_end(self) -> bool:
        return (
            self._phase is Phase.IN_PROGRESS
            and not self._busy
            and len(self._transcript) >= MIN_MESSAGES_FOR_REPORT
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    async def start(self, topic: Optional[str], difficulty: Union[Difficulty, str] = DEFAULT_DIFFICULTY) -> bool:
        """Ask the opening question. Returns ``True`` once the viva is in progress.

        The phase changes, and the timer starts counting, only when the first
        question arrives; ticks received while it is being generated are dropped.
        """

        try:
            level = Difficulty(difficulty)
        except ValueError:
            logger.info("Ignoring start with unknown difficulty %r", difficulty)
            return False
        if not self.can_start(topic):
            logger.info("Ignoring start phase=%s busy=%s topic=%r", self._phase.value, self._busy, topic)
            return False

        self._topic = topic
        self._difficulty = level
        self._elapsed = 0
        self._transcript = []
        self._busy = True
        try:
            with span(self, "start"):
                reply = await self._complete(opening_prompt(topic, level))
        except CompletionError as exc:
            self._fail("start", START_ERROR, exc)
            return False
        finally:
            self._busy = False

        self._phase = Phase.IN_PROGRESS
        self._say(reply)
        log_event(
            "viva.start",
            self.session_id,
            phase=self._phase.value,
            topic=self._topic,
            difficulty=self._difficulty.value,
        )
        return True

    async def submit(self, answer: Optional[str]) -> bool:
        """Record an answer and append the interviewer's feedback and next question."""

        if not self.can_submit(answer):
            return False
        text = (answer or "").strip()
        prior = list(self._transcript)
        self._transcript.append(Message(role="user", content=text))
        self._busy = True
        try:
            with span(self, "submit"):
                reply = await self._complete(followup_prompt(self._topic or "", self._difficulty, prior, text))
        except CompletionError as exc:
            self._fail("submit", TURN_ERROR, exc)
            return False
        finally:
            self._busy = False

        self._say(reply)
        log_event("viva.turn", self.session_id, phase=self._phase.value, messages=len(self._transcript))
        return True

    async def end(self) -> Optional[Report]:
        """Request the scored report; on success the viva ends and is added to history."""

        if not self.can_end:
            logger.info(
                "Ignoring end phase=%s busy=%s messages=%d",
                self._phase.value,
                self._busy,
                len(self._transcript),
            )
            return None

        self._busy = True
        try:
            with span(self, "report"):
                text = await self._complete(report_prompt(self._topic or "", self._difficulty, self._transcript))
        except CompletionError as exc:
            self._fail("report", REPORT_ERROR, exc)
            return None
        finally:
            self._busy = False

        result = parse_report(text)
        report = result.report
        if report is None:
            self._fail("report", REPORT_ERROR, result.error)
            return None

        self._report = report
        self._phase = Phase.ENDED
        self._record = InterviewSession(
            id=uuid4().hex,
            topic=self._topic or "",
            date=self._today().isoformat(),
            duration=self._elapsed,
            score=report.score,
            difficulty=self._difficulty,
        )
        try:
            self._history.append(self._record)
        except (sqlite3.Error, OSError) as exc:
            # The report stands; only the history entry is lost.
            logger.error("Saving viva history failed for session %s: %s", self.session_id, exc)
            log_event(
                "viva.error",
                self.session_id,
                level=logging.ERROR,
                phase=self._phase.value,
                outcome="history",
                reason=str(exc),
            )
        log_event(
            "viva.report",
            self.session_id,
            phase=self._phase.value,
            score=report.score,
            duration=self._elapsed,
        )
        return report

    def tick(self) -> int:
        """Advance the timer by one second while the viva is in progress."""

        if self._phase is Phase.IN_PROGRESS:
            self._elapsed += 1
        return self._elapsed

    def toggle_voice_mode(self) -> bool:
        self._voice_mode = not self._voice_mode
        return self._voice_mode

    def set_draft(self, text: str) -> None:
        self._draft = text

    async def submit_draft(self) -> bool:
        """Send the transcribed draft, as when the student stops listening."""

        if not self.can_submit(self._draft):
            return False
        text, self._draft = self._draft, ""
        return await self.submit(text)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _say(self, text: str) -> None:
        self._transcript.append(Message(role="assistant", content=text))
        if self._voice_mode and self._speaker is not None:
            try:
                self._speaker.speak(text)
            except Exception:  # noqa: BLE001
                logger.exception("Speech output failed for session %s", self.session_id)

    def _fail(self, action: str, apology: str, exc: Optional[Union[CompletionError, ReportFormatError]]) -> None:
        logger.error("Viva %s failed for session %s: %s", action, self.session_id, exc)
        log_event(
            "viva.error",
            self.session_id,
            level=logging.ERROR,
            phase=self._phase.value,
            outcome=action,
            reason=str(exc),
        )
        self._transcript.append(Message(role="assistant", content=apology))


__all__ = [
    "MIN_MESSAGES_FOR_REPORT",
    "REPORT_ERROR",
    "START_ERROR",
    "Speaker",
    "TURN_ERROR",
    "VivaSession",
]
