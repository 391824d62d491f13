from __future__ import annotations  # Completion gateway error taxonomy

from typing import Optional


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


class CompletionError(LlmGatewayError):  # Completion call failed; carries HTTP status when known
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        if status_code is None:
            super().__init__(message)
        else:
            super().__init__(f"{status_code}: {message}")


class NetworkError(CompletionError):  # Request not sent, or non-2xx after retries
    pass


class MalformedResponseError(CompletionError):  # 2xx without candidates[0].content.parts[0].text
    pass


class MissingCredentialError(CompletionError):  # No API key configured
    pass


__all__ = [
    "CompletionError",
    "LlmGatewayError",
    "MalformedResponseError",
    "MissingCredentialError",
    "NetworkError",
]
