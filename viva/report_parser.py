"""Parse and validate the interviewer's JSON performance report."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from .errors import ReportFormatError
from .models import Report

_OPEN_FENCE_RE = re.compile(r"\A\s*```[A-Za-z]*[ \t]*\n?")
_CLOSE_FENCE_RE = re.compile(r"\n?\s*```\s*\Z")

_SMART_QUOTES = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'"})


@dataclass(frozen=True)
class ReportResult:
    report: Optional[Report] = None
    error: Optional[ReportFormatError] = None

    @property
    def ok(self) -> bool:
        return self.report is not None


def clean_report_text(text: str) -> str:  # Only a fence wrapping the whole reply is removed
    unfenced = text.strip()
    if unfenced.startswith("```"):
        unfenced = _CLOSE_FENCE_RE.sub("", _OPEN_FENCE_RE.sub("", unfenced, count=1), count=1)
    return unfenced.translate(_SMART_QUOTES).strip()


def parse_report(text: str) -> ReportResult:
    try:
        return ReportResult(report=parse_report_or_raise(text))
    except ReportFormatError as exc:
        return ReportResult(error=exc)


def parse_report_or_raise(text: str) -> Report:
    cleaned = clean_report_text(text or "")
    if not cleaned:
        raise ReportFormatError("empty response")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ReportFormatError(f"not valid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise ReportFormatError("expected a JSON object")
    try:
        return Report.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        raise ReportFormatError(f"schema mismatch in {fields}") from exc


__all__ = ["ReportResult", "clean_report_text", "parse_report", "parse_report_or_raise"]
