import asyncio
import json

import httpx
import pytest

from ink_atlas.data_sources.errors import MalformedResponseError, ProviderRequestError
from ink_atlas.data_sources.openai_compatible_provider import OpenAICompatibleProvider
from ink_atlas.models.schemas import AIProvider
from tests.conftest import make_landmark


def _provider(handler, provider_id=AIProvider.OPENAI, base_url="https://api.openai.com/v1", model="gpt-4o"):
    return OpenAICompatibleProvider(
        provider_id,
        base_url=base_url,
        model=model,
        display_name="OpenAI",
        transport=httpx.MockTransport(handler),
    )


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_sends_chat_completion_request():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion(json.dumps([make_landmark()])))

    drafts = asyncio.run(_provider(handler).find_landmarks("Paris", "sk-test"))

    assert len(drafts) == 1
    assert seen["url"] == "https://api.openai.com/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    body = seen["body"]
    assert body["model"] == "gpt-4o"
    assert body["temperature"] == 0.7
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert body["messages"][0]["content"].endswith("Output strictly raw JSON.")
    assert '"Paris"' in body["messages"][1]["content"]


def test_deepseek_uses_its_own_base_url_and_model():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["model"] = json.loads(request.content)["model"]
        return httpx.Response(200, json=_completion("[]"))

    provider = _provider(handler, AIProvider.DEEPSEEK, "https://api.deepseek.com", "deepseek-chat")
    assert asyncio.run(provider.find_landmarks("Paris", "ds")) == []
    assert seen == {"url": "https://api.deepseek.com/chat/completions", "model": "deepseek-chat"}


def test_strips_markdown_fences():
    fenced = "```json\n" + json.dumps([make_landmark()]) + "\n```"
    provider = _provider(lambda request: httpx.Response(200, json=_completion(fenced)))
    assert asyncio.run(provider.find_landmarks("Paris", "k"))[0].author.en == "Ernest Hemingway"


def test_error_status_uses_embedded_message():
    provider = _provider(lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))
    with pytest.raises(ProviderRequestError) as exc_info:
        asyncio.run(provider.find_landmarks("Paris", "k"))
    assert exc_info.value.message == "bad key"


def test_error_status_without_message_is_generic():
    provider = _provider(lambda request: httpx.Response(500, text="upstream exploded"))
    with pytest.raises(ProviderRequestError) as exc_info:
        asyncio.run(provider.find_landmarks("Paris", "k"))
    assert exc_info.value.message == "API request failed"


def test_transport_error_is_request_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderRequestError):
        asyncio.run(_provider(handler).find_landmarks("Paris", "k"))


@pytest.mark.parametrize("body", [{"choices": []}, {"unexpected": True}, _completion("no json here")])
def test_malformed_bodies(body):
    provider = _provider(lambda request: httpx.Response(200, json=body))
    with pytest.raises(MalformedResponseError):
        asyncio.run(provider.find_landmarks("Paris", "k"))
