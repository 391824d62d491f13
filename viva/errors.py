from __future__ import annotations  # Viva-specific errors


class ReportFormatError(ValueError):  # Completion text was not a valid Report
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid report: {reason}")


__all__ = ["ReportFormatError"]
