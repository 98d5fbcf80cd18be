import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: Optional[str]
    base_url: Optional[str]
    timeout_s: float
    max_retries: int
    temperature: float


def _env_number(name: str, default, cast):
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


def load_ai_config() -> AIConfig:
    return AIConfig(
        provider=os.getenv("AI_PROVIDER", "openai").strip().lower(),
        model=os.getenv("AI_MODEL", "gpt-4o-mini").strip(),
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip() or None,
        base_url=(os.getenv("OPENAI_BASE_URL") or "").strip() or None,
        timeout_s=_env_number("OPENAI_TIMEOUT_S", 60.0, float),
        # No retry loop: a rate-limited call is reported to the caller instead.
        max_retries=max(0, _env_number("OPENAI_MAX_RETRIES", 0, int)),
        temperature=_env_number("AI_TEMPERATURE", 0.7, float),
    )
