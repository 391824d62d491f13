from __future__ import annotations  # Terminal front end for the mock viva

import argparse
import asyncio
import sys
from typing import Awaitable, Callable, Optional, Sequence

from config import VIVA_GENERATION, route_from_settings, settings
from llm_gateway import bind_completion
from observability import configure_logging
from session_history import LocalHistoryStore
from storage import SqliteKeyValueStore
from viva.controller import VivaSession
from viva.events import End, SessionDriver, Start, Stop, Submit
from viva.models import TOPICS, Difficulty, Phase, Report, format_duration


ReadLine = Callable[[str], Awaitable[Optional[str]]]
Write = Callable[[str], None]

HELP = "Type your answer and press Enter. Commands: /end (finish and get report), /time, /quit"


async def read_stdin(prompt: str) -> Optional[str]:  # input() on a worker thread; None on EOF
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return None


def render_report(report: Report, duration: int) -> str:
    lines = [f"Score: {report.score}/100   Duration: {format_duration(duration)}", "Strengths:"]
    lines.extend(f"  - {item}" for item in report.strengths)
    lines.append("Areas for improvement:")
    lines.extend(f"  - {item}" for item in report.improvements)
    lines.append("Overall performance:")
    lines.append(f"  {report.overallPerformance}")
    return "\n".join(lines)


async def run_console(
    session: VivaSession,
    topic: str,
    difficulty: Difficulty,
    *,
    tick_interval: Optional[float] = 1.0,
    read_line: ReadLine = read_stdin,
    write: Write = print,
) -> int:
    """Drive one viva from the terminal; returns a process exit code."""

    driver = SessionDriver(session)
    runner = asyncio.ensure_future(driver.run(tick_interval=tick_interval))
    shown = 0

    async def flush() -> None:
        nonlocal shown
        await driver.settle()
        for message in session.transcript[shown:]:
            speaker = "Interviewer" if message.role == "assistant" else "You"
            write(f"{speaker}: {message.content}")
        shown = len(session.transcript)

    try:
        await driver.queue.put(Start(topic, difficulty))
        await flush()
        if session.phase is not Phase.IN_PROGRESS:
            return 1
        write(HELP)
        while session.phase is Phase.IN_PROGRESS:
            line = await read_line("> ")
            command = "/quit" if line is None else line.strip()
            if command == "/quit":
                break
            if command == "/time":
                write(format_duration(session.elapsed))
                continue
            if command == "/end":
                if not session.can_end:
                    write("Answer at least one question before ending the viva.")
                    continue
                await driver.queue.put(End())
            elif session.can_submit(command):
                shown += 1  # the answer is echoed by the terminal already
                await driver.queue.put(Submit(command))
            else:
                continue
            await flush()
    finally:
        await driver.queue.put(Stop())
        await runner

    if session.report is not None:
        write(render_report(session.report, session.elapsed))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Practice a C++ mock viva in the terminal")
    parser.add_argument("--topic", required=True, choices=TOPICS)
    parser.add_argument(
        "--difficulty",
        default=Difficulty.MEDIUM.value,
        choices=[level.value for level in Difficulty],
    )
    parser.add_argument("--db", help="SQLite path for history (defaults to DB_PATH)")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    route = route_from_settings()
    if not route.api_key:
        print("Missing API key. Set GEMINI_API_KEY in the environment or .env file.", file=sys.stderr)
        return 2

    history = LocalHistoryStore(
        SqliteKeyValueStore(args.db or settings.DB_PATH),
        key=settings.HISTORY_KEY,
        limit=settings.HISTORY_LIMIT,
    )
    session = VivaSession(bind_completion(route, VIVA_GENERATION), history)
    return asyncio.run(
        run_console(session, args.topic, Difficulty(args.difficulty), tick_interval=settings.TICK_SECONDS)
    )


if __name__ == "__main__":
    sys.exit(main())
