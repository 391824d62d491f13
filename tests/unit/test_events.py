from __future__ import annotations

import asyncio
from datetime import date

from session_history import LocalHistoryStore
from storage import MemoryKeyValueStore
from viva.controller import VivaSession
from viva.events import (
    End,
    SessionDriver,
    Start,
    Stop,
    Submit,
    Tick,
    Transcript,
    tick_source,
    transcription_source,
)
from viva.models import Difficulty, Phase

VALID_REPORT = (
    '{"strengths":["clear","concise"],"improvements":["depth","examples"],'
    '"overallPerformance":"Good","score":70}'
)


class FakeTranscriber:
    def __init__(self, chunks) -> None:
        self.chunks = list(chunks)

    async def stream(self):
        for chunk in self.chunks:
            yield chunk


def _session(completion) -> VivaSession:
    return VivaSession(completion, LocalHistoryStore(MemoryKeyValueStore()), today=lambda: date(2026, 1, 1))


def _drain(queue: asyncio.Queue) -> list:
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


def test_tick_source_emits_one_tick_per_interval():
    waits: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        waits.append(seconds)

    async def scenario():
        queue: asyncio.Queue = asyncio.Queue()
        await tick_source(queue, interval=1.0, sleep=fake_sleep, limit=3)
        return _drain(queue)

    assert asyncio.run(scenario()) == [Tick(), Tick(), Tick()]
    assert waits == [1.0, 1.0, 1.0]


def test_transcription_source_streams_then_submits():
    async def scenario():
        queue: asyncio.Queue = asyncio.Queue()
        await transcription_source(queue, FakeTranscriber(["A stack", "A stack is LIFO"]))
        return _drain(queue)

    assert asyncio.run(scenario()) == [Transcript("A stack"), Transcript("A stack is LIFO"), Submit()]


def test_driver_runs_full_session_from_events(scripted):
    completion = scripted(["Q1", "Q2", VALID_REPORT])
    session = _session(completion)

    async def scenario():
        driver = SessionDriver(session)
        runner = asyncio.ensure_future(driver.run())
        await driver.queue.put(Start("Data Structures", Difficulty.EASY))
        await driver.settle()
        for _ in range(4):
            await driver.queue.put(Tick())
        await driver.queue.put(Transcript("A stack is LIFO"))
        await driver.queue.put(Submit())
        await driver.settle()
        await driver.queue.put(End())
        await driver.queue.put(Stop())
        await runner

    asyncio.run(scenario())
    assert session.phase is Phase.ENDED
    assert [m.content for m in session.transcript] == ["Q1", "A stack is LIFO", "Q2"]
    assert session.elapsed == 4
    assert session.report is not None and session.report.score == 70


def test_ticks_apply_while_request_outstanding():
    gate: dict[str, asyncio.Event] = {}
    prompts: list[str] = []

    async def slow(prompt: str) -> str:
        prompts.append(prompt)
        if len(prompts) == 2:
            await gate["release"].wait()
        return f"reply {len(prompts)}"

    session = _session(slow)

    async def scenario():
        gate["release"] = asyncio.Event()
        driver = SessionDriver(session)
        runner = asyncio.ensure_future(driver.run())
        await driver.queue.put(Start("Algorithms"))
        await driver.settle()
        await driver.queue.put(Submit("first"))
        await driver.queue.put(Submit("second"))
        await driver.queue.put(Tick())
        await driver.queue.put(Tick())
        await driver.queue.join()
        for _ in range(3):
            await asyncio.sleep(0)
        assert session.busy
        assert session.elapsed == 2
        gate["release"].set()
        await driver.queue.put(Stop())
        await runner

    asyncio.run(scenario())
    assert len(prompts) == 2
    assert [m.content for m in session.transcript] == ["reply 1", "first", "reply 2"]
    assert not session.busy


def test_driver_cancels_background_sources():
    async def scenario():
        session = _session(lambda prompt: None)
        driver = SessionDriver(session)

        async def never_ending(seconds: float) -> None:
            await asyncio.sleep(3600)

        runner = asyncio.ensure_future(driver.run(tick_interval=1.0, sleep=never_ending))
        await asyncio.sleep(0)
        await driver.queue.put(Stop())
        await runner
        return driver

    driver = asyncio.run(scenario())
    assert driver._sources == []
