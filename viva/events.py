"""Background event sources and the queue-driven session driver."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, List, Optional, Protocol, Set, Union

from .controller import VivaSession
from .models import DEFAULT_DIFFICULTY, Difficulty

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Transcript:
    text: str


@dataclass(frozen=True)
class Start:
    topic: str
    difficulty: Difficulty = DEFAULT_DIFFICULTY


@dataclass(frozen=True)
class Submit:
    text: Optional[str] = None  # None sends the current transcription draft


@dataclass(frozen=True)
class End:
    pass


@dataclass(frozen=True)
class Stop:
    pass


VivaEvent = Union[Tick, Transcript, Start, Submit, End, Stop]


class Transcriber(Protocol):  # Speech-to-text port
    def stream(self) -> AsyncIterator[str]:
        """Yield the running transcript; the iterator ends when listening stops."""
        ...


async def tick_source(
    queue: "asyncio.Queue[VivaEvent]",
    *,
    interval: float = 1.0,
    sleep: SleepFn = asyncio.sleep,
    limit: Optional[int] = None,
) -> None:
    sent = 0
    while limit is None or sent < limit:
        await sleep(interval)
        await queue.put(Tick())
        sent += 1


async def transcription_source(
    queue: "asyncio.Queue[VivaEvent]",
    transcriber: Transcriber,
    *,
    auto_send: bool = True,
) -> None:
    async for text in transcriber.stream():
        await queue.put(Transcript(text))
    if auto_send:
        await queue.put(Submit())


class SessionDriver:
    """Feed queued events to a ``VivaSession``.

    Ticks and transcripts are applied inline. Start, submit and end are run
    as tasks so the timer keeps advancing while a request is outstanding;
    the controller's busy flag rejects overlapping actions.
    """

    def __init__(self, session: VivaSession, queue: Optional["asyncio.Queue[VivaEvent]"] = None) -> None:
        self.session = session
        self.queue: "asyncio.Queue[VivaEvent]" = queue if queue is not None else asyncio.Queue()
        self._actions: Set["asyncio.Task[object]"] = set()
        self._sources: List["asyncio.Task[None]"] = []

    def add_source(self, coro: Awaitable[None]) -> "asyncio.Task[None]":
        task = asyncio.ensure_future(coro)
        self._sources.append(task)
        return task

    async def run(
        self,
        *,
        tick_interval: Optional[float] = None,
        transcriber: Optional[Transcriber] = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        """Consume events until ``Stop``; background sources are cancelled on exit."""

        if tick_interval is not None:
            self.add_source(tick_source(self.queue, interval=tick_interval, sleep=sleep))
        if transcriber is not None:
            self.add_source(transcription_source(self.queue, transcriber))
        try:
            while True:
                event = await self.queue.get()
                try:
                    if isinstance(event, Stop):
                        break
                    self.dispatch(event)
                finally:
                    self.queue.task_done()
            if self._actions:
                await asyncio.gather(*self._actions)
        finally:
            for task in self._sources:
                task.cancel()
            await asyncio.gather(*self._sources, return_exceptions=True)
            self._sources.clear()

    async def settle(self) -> None:
        """Wait until queued events are dispatched and scheduled actions have finished."""

        await self.queue.join()
        while self._actions:
            await asyncio.gather(*list(self._actions))

    def dispatch(self, event: VivaEvent) -> None:
        session = self.session
        if isinstance(event, Tick):
            session.tick()
        elif isinstance(event, Transcript):
            session.set_draft(event.text)
        elif isinstance(event, Start):
            self._schedule(session.start(event.topic, event.difficulty))
        elif isinstance(event, Submit):
            if event.text is None:
                self._schedule(session.submit_draft())
            else:
                self._schedule(session.submit(event.text))
        elif isinstance(event, End):
            self._schedule(session.end())
        else:
            logger.warning("Unhandled viva event %r", event)

    def _schedule(self, coro: Awaitable[object]) -> None:
        task = asyncio.ensure_future(coro)
        self._actions.add(task)
        task.add_done_callback(self._actions.discard)


__all__ = [
    "End",
    "SessionDriver",
    "Start",
    "Stop",
    "Submit",
    "Tick",
    "Transcriber",
    "Transcript",
    "VivaEvent",
    "tick_source",
    "transcription_source",
]
