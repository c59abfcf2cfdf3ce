import io
import json
import sys
from pathlib import Path
from types import SimpleNamespace

import httpx
import pytest
from openai import OpenAI
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from snapcard.config import API_KEY_ENV_VARS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer keys and overrides out of the tests."""
    for name in API_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in ("SNAPCARD_MODEL", "SNAPCARD_BASE_URL", "SNAPCARD_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def card_payload():
    return {
        "name": "Sir Whiskers",
        "category": "Animal",
        "stats": {
            "Nap Power": {"value": 88, "iconHint": "sleep"},
            "Zoomies": {"value": 73, "iconHint": "lightning"},
            "Cuteness Overload": {"value": 95, "iconHint": "heart"},
            "Weird Flex": {"value": "Once out-stared a vacuum cleaner", "iconHint": "eye"},
        },
        "lore": "Two sentences. Both about naps.",
        "rarity": "Rare",
    }


@pytest.fixture
def png_bytes():
    img = Image.new("RGB", (64, 48), (200, 40, 40))
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def responses_reply(text):
    content = SimpleNamespace(type="output_text", text=text)
    message = SimpleNamespace(type="message", content=[content])
    return SimpleNamespace(output=[message])


def chat_reply(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeModelClient:
    """Stands in for ``openai.OpenAI`` and records every request."""

    def __init__(self, response_text="", *, error=None):
        self.response_text = response_text
        self.error = error
        self.requests = []
        self.responses = SimpleNamespace(create=self._responses_create)
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._chat_create))
        self.models = SimpleNamespace(list=self._list_models)

    def _responses_create(self, **kwargs):
        self.requests.append(("responses", kwargs))
        if self.error is not None:
            raise self.error
        return responses_reply(self.response_text)

    def _chat_create(self, **kwargs):
        self.requests.append(("chat", kwargs))
        if self.error is not None:
            raise self.error
        return chat_reply(self.response_text)

    def _list_models(self, **kwargs):
        self.requests.append(("models", kwargs))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(id="gpt-4o")])


class ChatOnlyClient(FakeModelClient):
    """A client whose SDK predates the ``text`` argument of the Responses API."""

    def _responses_create(self, **kwargs):
        self.requests.append(("responses", kwargs))
        raise TypeError("create() got an unexpected keyword argument 'text'")


class RecordingFactory:
    """Client factory that remembers the arguments it was built with."""

    def __init__(self, client):
        self.client = client
        self.calls = []

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return self.client


@pytest.fixture
def fake_client(card_payload):
    return FakeModelClient(json.dumps(card_payload))


@pytest.fixture
def factory(fake_client):
    return RecordingFactory(fake_client)


class MockTransportFactory:
    """Builds a real ``openai.OpenAI`` whose HTTP layer always answers with one canned reply."""

    def __init__(self, status, body, content_type="application/json"):
        self.status = status
        self.body = body
        self.content_type = content_type
        self.requests = []

    def _handle(self, request):
        self.requests.append(request)
        return httpx.Response(
            self.status,
            content=self.body.encode("utf-8"),
            headers={"content-type": self.content_type},
        )

    def __call__(self, *, api_key, base_url=None, timeout=None):
        return OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=httpx.Client(transport=httpx.MockTransport(self._handle)),
        )
