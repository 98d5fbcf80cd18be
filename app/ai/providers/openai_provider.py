from __future__ import annotations

import logging
from typing import Optional, Sequence

import openai
from openai import AsyncOpenAI

from app.ai.types import ChatMessage
from app.career.errors import UpstreamBillingExhausted, UpstreamFailure, UpstreamRateLimited

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """Chat completions against OpenAI or any OpenAI-compatible gateway."""

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        max_retries: int = 0,
        temperature: float = 0.7,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self._temperature = temperature
        if client is not None:
            self._client = client
            return

        key = (api_key or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=base_url or None,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=self._temperature,
            )
        except openai.RateLimitError as exc:
            logger.warning("completion_rate_limited model=%s: %s", self.model, exc)
            raise UpstreamRateLimited() from exc
        except openai.APIStatusError as exc:
            if exc.status_code == 402:
                logger.error("completion_credits_exhausted model=%s: %s", self.model, exc)
                raise UpstreamBillingExhausted() from exc
            logger.warning("completion_failed model=%s status=%s: %s", self.model, exc.status_code, exc)
            raise UpstreamFailure() from exc
        except openai.APIError as exc:
            logger.warning("completion_failed model=%s: %s", self.model, exc)
            raise UpstreamFailure() from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content:
            logger.warning("completion_empty model=%s", self.model)
            raise UpstreamFailure("AI response was empty")
        return content
