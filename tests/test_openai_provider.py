import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from app.ai.providers.openai_provider import OpenAIProvider
from app.ai.types import ChatMessage
from app.career.errors import UpstreamBillingExhausted, UpstreamFailure, UpstreamRateLimited

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class _Completions:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.result


def _provider(completions: _Completions) -> OpenAIProvider:
    fake = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIProvider(model="gpt-test", client=fake)


def _reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _status_error(cls, status: int):
    return cls("boom", response=httpx.Response(status, request=_REQUEST), body=None)


MESSAGES = [ChatMessage("system", "sys"), ChatMessage("user", "hello")]


def test_complete_returns_text_and_sends_messages() -> None:
    completions = _Completions(result=_reply("Be a teacher."))

    text = asyncio.run(_provider(completions).complete(MESSAGES))

    assert text == "Be a teacher."
    assert completions.kwargs["model"] == "gpt-test"
    assert completions.kwargs["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hello"},
    ]


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (_status_error(openai.RateLimitError, 429), UpstreamRateLimited),
        (_status_error(openai.APIStatusError, 402), UpstreamBillingExhausted),
        (_status_error(openai.InternalServerError, 500), UpstreamFailure),
        (openai.APIConnectionError(request=_REQUEST), UpstreamFailure),
    ],
)
def test_provider_errors_are_mapped(error, expected) -> None:
    with pytest.raises(expected):
        asyncio.run(_provider(_Completions(error=error)).complete(MESSAGES))


def test_empty_reply_is_upstream_failure() -> None:
    with pytest.raises(UpstreamFailure):
        asyncio.run(_provider(_Completions(result=_reply(""))).complete(MESSAGES))


def test_missing_api_key_raises() -> None:
    with pytest.raises(RuntimeError):
        OpenAIProvider(model="gpt-test")
