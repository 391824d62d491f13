from __future__ import annotations  # Re-export llm_gateway public API

from .errors import CompletionError, LlmGatewayError, MalformedResponseError, MissingCredentialError, NetworkError
from .llm_gateway import (
    ChatFn,
    ChatTurn,
    CompletionFn,
    HttpClient,
    HttpResponse,
    bind_chat,
    bind_completion,
    build_chat_payload,
    build_payload,
    complete,
    complete_chat,
    extract_text,
    strip_code_fences,
)
from .retry import RetryOutcome, RetryPolicy, linear_backoff, retry_async

__all__ = [
    "ChatFn",
    "ChatTurn",
    "CompletionError",
    "CompletionFn",
    "HttpClient",
    "HttpResponse",
    "LlmGatewayError",
    "MalformedResponseError",
    "MissingCredentialError",
    "NetworkError",
    "RetryOutcome",
    "RetryPolicy",
    "bind_chat",
    "bind_completion",
    "build_chat_payload",
    "build_payload",
    "complete",
    "complete_chat",
    "extract_text",
    "linear_backoff",
    "retry_async",
    "strip_code_fences",
]
