from __future__ import annotations  # Completion route and generation parameter schemas

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .settings import Settings, settings as default_settings


class GenerationConfig(BaseModel):  # Sampling parameters sent with every completion request
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_k: int = Field(default=40, ge=1)
    top_p: float = Field(default=0.8, gt=0.0, le=1.0)
    max_output_tokens: int = Field(default=1024, ge=1)
    candidate_count: int = Field(default=1, ge=1)

    def to_payload(self) -> Dict[str, Any]:  # Wire names expected by generateContent
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
            "candidateCount": self.candidate_count,
        }


class CompletionRoute(BaseModel):  # Completion endpoint configuration
    name: str = "gemini"
    base_url: str
    model: str
    timeout_s: float = Field(default=30.0, ge=0.1)
    max_retries: int = Field(default=2, ge=0)
    backoff_s: float = Field(default=1.0, ge=0.0)
    api_key: Optional[str] = None

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"


VIVA_GENERATION = GenerationConfig(temperature=0.7, top_k=40, top_p=0.8, max_output_tokens=1024)
RUN_CODE_GENERATION = GenerationConfig(temperature=0.0, top_k=1, top_p=1.0, max_output_tokens=1024)
CHECK_CODE_GENERATION = GenerationConfig(temperature=0.0, top_k=1, top_p=1.0, max_output_tokens=128)
QUESTION_GENERATION = GenerationConfig(temperature=0.8, top_k=40, top_p=0.95, max_output_tokens=1024)
TUTOR_GENERATION = GenerationConfig(temperature=1.0, top_k=40, top_p=0.95, max_output_tokens=8192)


def route_from_settings(cfg: Optional[Settings] = None) -> CompletionRoute:  # Build the default route from settings
    cfg = cfg or default_settings
    return CompletionRoute(
        base_url=cfg.COMPLETION_BASE_URL,
        model=cfg.COMPLETION_MODEL,
        timeout_s=cfg.COMPLETION_TIMEOUT_S,
        max_retries=cfg.COMPLETION_MAX_RETRIES,
        backoff_s=cfg.COMPLETION_BACKOFF_S,
        api_key=cfg.GEMINI_API_KEY,
    )


__all__ = [
    "CHECK_CODE_GENERATION",
    "CompletionRoute",
    "GenerationConfig",
    "QUESTION_GENERATION",
    "RUN_CODE_GENERATION",
    "TUTOR_GENERATION",
    "VIVA_GENERATION",
    "route_from_settings",
]
