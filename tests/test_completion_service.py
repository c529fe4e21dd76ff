import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from career_match_ai.errors import GenerationError
from career_match_ai.schemas.prompt import PromptPayload
from career_match_ai.services.completion_service import CompletionService

PAYLOAD = PromptPayload(system="instructions", user="profile")


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        choices = [] if self.content is None else [SimpleNamespace(message=SimpleNamespace(content=self.content))]
        return SimpleNamespace(choices=choices)


def _service(completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return CompletionService(endpoint="https://models.example.com", api_key="k", model="Phi-4", client=client)


def test_request_carries_messages_budget_and_model():
    completions = FakeCompletions(content="[]")
    assert asyncio.run(_service(completions).complete(PAYLOAD)) == "[]"
    call = completions.calls[0]
    assert call["model"] == "Phi-4"
    assert call["max_tokens"] == 1500
    assert call["messages"] == [
        {"role": "system", "content": "instructions"},
        {"role": "user", "content": "profile"},
    ]


def test_no_choices_is_generation_error():
    with pytest.raises(GenerationError):
        asyncio.run(_service(FakeCompletions(content=None)).complete(PAYLOAD))


def test_sdk_error_is_generation_error():
    request = httpx.Request("POST", "https://models.example.com/chat/completions")
    completions = FakeCompletions(error=APIConnectionError(request=request))
    with pytest.raises(GenerationError):
        asyncio.run(_service(completions).complete(PAYLOAD))


def test_missing_configuration_is_generation_error():
    service = CompletionService(endpoint="", api_key="")
    with pytest.raises(GenerationError):
        asyncio.run(service.complete(PAYLOAD))
