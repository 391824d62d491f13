"""Terminal questionnaire and tutor chat."""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Awaitable, Callable, Optional, Sequence

from config import TUTOR_GENERATION, route_from_settings, settings
from console import read_stdin
from llm_gateway import ChatFn, bind_chat
from observability import configure_logging
from storage import SqliteKeyValueStore

from .models import QUESTIONNAIRE, CoursePreferences
from .preferences import PreferenceStore
from .session import TutorSession

ReadLine = Callable[[str], Awaitable[Optional[str]]]
Write = Callable[[str], None]

HELP = "Ask the tutor anything about C++. Type /quit to leave."


async def collect_preferences(read_line: ReadLine, write: Write) -> Optional[CoursePreferences]:
    """Ask each questionnaire item until a listed option number is chosen; ``None`` on EOF."""

    answers = {}
    for step, item in enumerate(QUESTIONNAIRE, start=1):
        write(f"Question {step} of {len(QUESTIONNAIRE)}: {item.question}")
        for number, option in enumerate(item.options, start=1):
            write(f"  {number}. {option}")
        while item.id not in answers:
            line = await read_line("> ")
            if line is None:
                return None
            choice = line.strip()
            if choice.isdigit() and 1 <= int(choice) <= len(item.options):
                answers[item.id] = item.options[int(choice) - 1]
            else:
                write(f"Choose a number from 1 to {len(item.options)}.")
    return CoursePreferences.from_answers(answers)


async def run_tutor(session: TutorSession, *, read_line: ReadLine = read_stdin, write: Write = print) -> int:
    shown = 0

    def flush() -> None:
        nonlocal shown
        for message in session.transcript[shown:]:
            if message.role == "assistant":
                write(f"Tutor: {message.content}")
        shown = len(session.transcript)

    await session.open()
    flush()
    write(HELP)
    while True:
        line = await read_line("> ")
        text = "/quit" if line is None else line.strip()
        if text == "/quit":
            return 0
        await session.ask(text)
        flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Chat with a C++ tutor tailored to your background")
    parser.add_argument("--db", help="SQLite path for stored preferences (defaults to DB_PATH)")
    parser.add_argument("--reset", action="store_true", help="Answer the questionnaire again")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    route = route_from_settings()
    if not route.api_key:
        print("Missing API key. Set GEMINI_API_KEY in the environment or .env file.", file=sys.stderr)
        return 2

    store = PreferenceStore(SqliteKeyValueStore(args.db or settings.DB_PATH), key=settings.PREFERENCES_KEY)
    return asyncio.run(start_tutor(store, bind_chat(route, TUTOR_GENERATION), reset=args.reset))


async def start_tutor(
    store: PreferenceStore,
    chat: ChatFn,
    *,
    reset: bool = False,
    read_line: ReadLine = read_stdin,
    write: Write = print,
) -> int:
    """Reuse stored preferences (or ask the questionnaire first), then chat."""

    preferences = None if reset else store.load()
    if preferences is None:
        preferences = await collect_preferences(read_line, write)
        if preferences is None:
            return 1
        store.save(preferences)
    return await run_tutor(TutorSession(chat, preferences), read_line=read_line, write=write)


if __name__ == "__main__":
    sys.exit(main())
