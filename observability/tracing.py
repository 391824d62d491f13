"""Simple span helper for recording action timings."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator


@contextmanager
def span(owner: Any, name: str) -> Iterator[None]:
    """Append ``{"span": name, "ms": elapsed}`` to ``owner.events`` once the block exits."""

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        owner.events.append({"span": name, "ms": elapsed_ms})


__all__ = ["span"]
