import sys
from pathlib import Path
from typing import Iterable, List, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import settings
from storage.migrate import migrate


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch, tmp_path):
    db_path = str(tmp_path / "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    yield db_path


class ScriptedCompletion:
    """Async completion stand-in returning queued replies (or raising queued errors)."""

    def __init__(self, replies: Iterable[Union[str, Exception]] = ()) -> None:
        self.replies: List[Union[str, Exception]] = list(replies)
        self.prompts: List[str] = []

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            raise AssertionError("unexpected completion call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def scripted():
    return ScriptedCompletion
