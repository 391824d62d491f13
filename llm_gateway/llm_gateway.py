from __future__ import annotations  # Completion request gateway module

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Sequence

from config import TUTOR_GENERATION, VIVA_GENERATION, CompletionRoute, GenerationConfig

from .errors import CompletionError, MalformedResponseError, MissingCredentialError, NetworkError
from .retry import RetryPolicy, linear_backoff, retry_async


logger = logging.getLogger(__name__)  # Module logger setup

RATE_LIMIT_STATUS = 429
_WIRE_ROLES = {"assistant": "model"}

CompletionFn = Callable[[str], Awaitable[str]]
ChatFn = Callable[..., Awaitable[str]]  # (turns, system=None) -> reply
SleepFn = Callable[[float], Awaitable[None]]


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class HttpClient(Protocol):  # Minimal async HTTP client protocol
    async def post(
        self,
        url: str,
        *,
        params: Dict[str, str],
        json: Dict[str, Any],
        headers: Dict[str, str],
        timeout: float,
    ) -> HttpResponse: ...


class ChatTurn(Protocol):  # Anything with a role ("user"/"assistant") and text content
    @property
    def role(self) -> str: ...

    @property
    def content(self) -> str: ...


def build_payload(prompt: str, generation: GenerationConfig) -> Dict[str, Any]:  # Request body for generateContent
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": generation.to_payload(),
    }


def build_chat_payload(
    turns: Sequence[ChatTurn],
    generation: GenerationConfig,
    system: Optional[str] = None,
) -> Dict[str, Any]:  # Multi-turn body; assistant turns are sent with the API's "model" role
    payload: Dict[str, Any] = {
        "contents": [
            {"role": _WIRE_ROLES.get(turn.role, turn.role), "parts": [{"text": turn.content}]} for turn in turns
        ],
        "generationConfig": generation.to_payload(),
    }
    if system:
        payload["systemInstruction"] = {"parts": [{"text": system}]}
    return payload


async def complete(
    prompt: str,
    *,
    route: CompletionRoute,
    generation: GenerationConfig = VIVA_GENERATION,
    client: Optional[HttpClient] = None,
    sleep: SleepFn = asyncio.sleep,
) -> str:  # Send one prompt and return the model's text
    return await _generate(build_payload(prompt, generation), _preview(prompt), route=route, client=client, sleep=sleep)


async def complete_chat(
    turns: Sequence[ChatTurn],
    *,
    system: Optional[str] = None,
    route: CompletionRoute,
    generation: GenerationConfig = TUTOR_GENERATION,
    client: Optional[HttpClient] = None,
    sleep: SleepFn = asyncio.sleep,
) -> str:  # Replay a whole conversation and return the next model turn
    if not turns:
        raise ValueError("chat completion needs at least one turn")
    payload = build_chat_payload(turns, generation, system)
    return await _generate(payload, _preview(turns[-1].content), route=route, client=client, sleep=sleep)


async def _generate(
    payload: Dict[str, Any],
    preview: str,
    *,
    route: CompletionRoute,
    client: Optional[HttpClient],
    sleep: SleepFn,
) -> str:
    if not route.api_key:
        logger.error("Completion route %s has no API key configured", route.name)
        raise MissingCredentialError("API key is not configured; set GEMINI_API_KEY")

    headers = {"Content-Type": "application/json"}
    params = {"key": route.api_key}
    policy = RetryPolicy(max_attempts=route.max_retries + 1, delay=linear_backoff(route.backoff_s))

    logger.info(
        "Completion request start route=%s model=%s attempts=%d preview=%s",
        route.name,
        route.model,
        policy.max_attempts,
        preview,
    )

    async def _send(http: HttpClient) -> Any:
        try:
            response = await http.post(route.url, params=params, json=payload, headers=headers, timeout=route.timeout_s)
        except Exception as exc:  # noqa: BLE001
            logger.error("Completion transport failure: %s", exc)
            raise NetworkError(f"Completion transport failed: {exc}") from exc
        if response.status_code >= 400:
            logger.error("Completion error status: %s", response.status_code)
            raise NetworkError(f"API call failed: {response.text}", status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Invalid JSON payload from completion service: %s", exc)
            raise MalformedResponseError("Completion payload was not JSON", status_code=response.status_code) from exc

    async def _run(http: HttpClient) -> Any:
        outcome = await retry_async(
            lambda: _send(http),
            policy=policy,
            should_retry=_is_rate_limited,
            sleep=sleep,
        )
        if not outcome.ok:
            error = outcome.error
            if isinstance(error, CompletionError):
                raise error
            raise NetworkError(str(error)) from error
        logger.info("Completion request done route=%s attempts=%d", route.name, outcome.attempts)
        return outcome.value

    if client is not None:
        data = await _run(client)
    else:
        import httpx

        async with httpx.AsyncClient(timeout=route.timeout_s) as http_client:
            data = await _run(http_client)
    return extract_text(data)


def bind_completion(
    route: CompletionRoute,
    generation: GenerationConfig = VIVA_GENERATION,
    *,
    client: Optional[HttpClient] = None,
    sleep: SleepFn = asyncio.sleep,
) -> CompletionFn:  # Fix route and sampling so callers only pass a prompt
    async def _complete(prompt: str) -> str:
        return await complete(prompt, route=route, generation=generation, client=client, sleep=sleep)

    return _complete


def bind_chat(
    route: CompletionRoute,
    generation: GenerationConfig = TUTOR_GENERATION,
    *,
    client: Optional[HttpClient] = None,
    sleep: SleepFn = asyncio.sleep,
) -> ChatFn:
    async def _chat(turns: Sequence[ChatTurn], system: Optional[str] = None) -> str:
        return await complete_chat(turns, system=system, route=route, generation=generation, client=client, sleep=sleep)

    return _chat



def extract_text(data: Any) -> str:  # Pull candidates[0].content.parts[0].text out of a response
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        logger.error("Invalid completion response structure: %s", _preview(str(data)))
        raise MalformedResponseError("Invalid API response structure") from exc
    if not isinstance(text, str) or not text:
        raise MalformedResponseError("Invalid API response structure")
    return text


def strip_code_fences(content: str) -> str:  # Remove common markdown fences from LLM output
    text = content.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        if lines:
            lines = lines[1:]
            while lines and lines[0].strip() == "":
                lines = lines[1:]
            while lines and lines[-1].strip() == "":
                lines = lines[:-1]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines).strip()
    return text


def _is_rate_limited(exc: BaseException) -> bool:
    return isinstance(exc, NetworkError) and exc.status_code == RATE_LIMIT_STATUS


def _preview(text: str) -> str:  # Build preview string for logging
    for line in text.splitlines():
        line = line.strip()
        if line:
            return line if len(line) <= 120 else line[:117] + "..."
    return ""
