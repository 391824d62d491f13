"""Lightweight CLI helpers for inspecting stored viva history."""
from __future__ import annotations

import argparse
from typing import Optional, Sequence

from config.settings import settings
from session_history import LocalHistoryStore
from storage import SqliteKeyValueStore
from viva.models import TOPICS, format_duration


def tail_history(limit: int = 10, *, db_path: Optional[str] = None) -> None:
    store = LocalHistoryStore(
        SqliteKeyValueStore(db_path or settings.DB_PATH),
        key=settings.HISTORY_KEY,
        limit=settings.HISTORY_LIMIT,
    )
    sessions = store.load()
    if not sessions:
        print("No past sessions.")
        return
    for session in sessions[:limit]:
        print(
            f"[{session.date}] {session.topic} ({session.difficulty.value}) "
            f"score={session.score} duration={format_duration(session.duration)}"
        )


def list_topics() -> None:
    for topic in TOPICS:
        print(topic)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--history", type=int, help="Show the latest viva sessions")
    parser.add_argument("--topics", action="store_true", help="List the viva topics")
    parser.add_argument("--db", help="SQLite path (defaults to DB_PATH)")
    args = parser.parse_args(argv)

    if args.topics:
        list_topics()
    if args.history:
        tail_history(args.history, db_path=args.db)


if __name__ == "__main__":
    main()
