import httpx
import openai
import pytest

from conftest import FakeModelClient, MockTransportFactory, RecordingFactory
from snapcard.keys import check_api_key

MODELS_URL = "https://api.openai.com/v1/models"


def _status_error(error_class, status):
    request = httpx.Request("GET", MODELS_URL)
    return error_class("rejected", response=httpx.Response(status, request=request), body=None)


def test_blank_key_is_invalid_without_network():
    factory = RecordingFactory(FakeModelClient())

    assert check_api_key("") is False
    assert check_api_key("   ", client_factory=factory) is False
    assert check_api_key(None, client_factory=factory) is False
    assert factory.calls == []


def test_listing_models_means_valid():
    client = FakeModelClient()
    factory = RecordingFactory(client)

    assert check_api_key("  sk-good ", timeout=3.0, client_factory=factory) is True
    assert factory.calls[0]["api_key"] == "sk-good"
    assert factory.calls[0]["timeout"] == 3.0
    assert [api for api, _ in client.requests] == ["models"]


def test_unauthorized_key_is_invalid():
    client = FakeModelClient(error=_status_error(openai.AuthenticationError, 401))

    assert check_api_key("sk-bad", client_factory=RecordingFactory(client)) is False


def test_forbidden_key_is_invalid():
    client = FakeModelClient(error=_status_error(openai.PermissionDeniedError, 403))

    assert check_api_key("sk-bad", client_factory=RecordingFactory(client)) is False


def test_other_status_is_invalid():
    client = FakeModelClient(error=_status_error(openai.InternalServerError, 503))

    assert check_api_key("sk-maybe", client_factory=RecordingFactory(client)) is False


def test_network_failures_are_invalid():
    request = httpx.Request("GET", MODELS_URL)
    for error in (
        openai.APIConnectionError(request=request),
        openai.APITimeoutError(request=request),
    ):
        client = FakeModelClient(error=error)
        assert check_api_key("sk-offline", client_factory=RecordingFactory(client)) is False
        assert len(client.requests) == 1


@pytest.mark.parametrize(
    "body, content_type",
    [
        ("<html>gateway</html>", "text/html"),
        ("[1,2]", "application/json"),
        ("not json", "application/json"),
    ],
)
def test_unreadable_models_list_is_invalid(body, content_type):
    factory = MockTransportFactory(200, body, content_type)

    assert check_api_key("sk-x", client_factory=factory) is False
    assert len(factory.requests) == 1
    assert factory.requests[0].url.path.endswith("/models")
