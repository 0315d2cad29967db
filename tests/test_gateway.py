import io
import json

import httpx
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from google.genai import errors as genai_errors
from google.genai import types

from chat_gateway.core.errors import ConfigurationError, GatewayError
from chat_gateway.core.settings import Settings
from chat_gateway.models.chat import Message
from chat_gateway.services.extraction import parse_response
from chat_gateway.services.gateway import (
    BedrockGateway,
    GeminiGateway,
    build_gateway,
    build_messages_payload,
)

HISTORY = (
    Message(role="user", content="hi"),
    Message(role="assistant", content="hello"),
    Message(role="user", content="how are you?"),
)


class _FakeBedrockClient:
    def __init__(self, body=b'{"content": [{"type": "text", "text": "fine"}]}', error=None):
        self._body = body
        self._error = error
        self.requests = []

    def invoke_model(self, **kwargs):
        self.requests.append(kwargs)
        if self._error is not None:
            raise self._error
        return {"body": io.BytesIO(self._body), "contentType": "application/json"}


class _FakeModels:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.requests = []

    def generate_content(self, **kwargs):
        self.requests.append(kwargs)
        if self._error is not None:
            raise self._error
        return self._response


class _FakeGeminiClient:
    def __init__(self, **kwargs):
        self.models = _FakeModels(**kwargs)


def test_build_messages_payload(settings):
    payload = build_messages_payload(HISTORY, settings)

    assert payload == {
        "anthropic_version": "bedrock-2023-05-31",
        "max_tokens": 1024,
        "temperature": 0.3,
        "messages": [
            {"role": "user", "content": [{"type": "text", "text": "hi"}]},
            {"role": "assistant", "content": [{"type": "text", "text": "hello"}]},
            {"role": "user", "content": [{"type": "text", "text": "how are you?"}]},
        ],
    }


def test_build_messages_payload_uses_configured_parameters():
    settings = Settings(
        model_id="m", max_tokens=256, temperature=0.9, anthropic_version="v9", _env_file=None
    )
    payload = build_messages_payload(HISTORY[:1], settings)
    assert payload["max_tokens"] == 256
    assert payload["temperature"] == 0.9
    assert payload["anthropic_version"] == "v9"


def test_bedrock_invoke_returns_raw_body(settings):
    client = _FakeBedrockClient()
    gateway = BedrockGateway(settings, client=client)

    raw = gateway.invoke(HISTORY)

    assert parse_response(raw) == "fine"
    request = client.requests[0]
    assert request["modelId"] == "test-model"
    assert request["contentType"] == "application/json"
    assert json.loads(request["body"]) == build_messages_payload(HISTORY, settings)


@pytest.mark.parametrize(
    "error",
    [
        ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "slow down"}},
            "InvokeModel",
        ),
        EndpointConnectionError(endpoint_url="https://bedrock-runtime.us-east-1.amazonaws.com"),
    ],
)
def test_bedrock_errors_become_gateway_errors(settings, error):
    gateway = BedrockGateway(settings, client=_FakeBedrockClient(error=error))

    with pytest.raises(GatewayError) as exc_info:
        gateway.invoke(HISTORY)
    assert exc_info.value.provider == "bedrock"


def test_gemini_invoke_maps_roles_and_dumps_response(settings):
    response = types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text="bonjour")])
            )
        ]
    )
    client = _FakeGeminiClient(response=response)
    gateway = GeminiGateway(settings, client=client)

    raw = gateway.invoke(HISTORY)

    assert parse_response(raw) == "bonjour"
    request = client.models.requests[0]
    assert request["model"] == "test-model"
    assert [c.role for c in request["contents"]] == ["user", "model", "user"]
    assert request["config"].max_output_tokens == 1024
    assert request["config"].temperature == 0.3


def test_gemini_api_errors_become_gateway_errors(settings):
    error = genai_errors.APIError(503, {"error": {"message": "unavailable", "status": "UNAVAILABLE"}})
    gateway = GeminiGateway(settings, client=_FakeGeminiClient(error=error))

    with pytest.raises(GatewayError) as exc_info:
        gateway.invoke(HISTORY)
    assert exc_info.value.provider == "gemini"


def test_build_gateway_picks_provider(monkeypatch):
    created = {}

    class _Recorder:
        def __init__(self, settings, client=None):
            created["settings"] = settings

    import chat_gateway.services.gateway as gateway_module

    monkeypatch.setattr(gateway_module, "GeminiGateway", _Recorder)
    settings = Settings(
        model_id="gemini-2.5-flash",
        gateway_provider="gemini",
        gemini_api_key="key",
        _env_file=None,
    )

    assert isinstance(build_gateway(settings), _Recorder)
    assert created["settings"] is settings


def test_build_gateway_defaults_to_bedrock(settings):
    gateway = build_gateway(settings)
    assert isinstance(gateway, BedrockGateway)


def test_gemini_without_key_is_a_configuration_error():
    settings = Settings(model_id="m", gemini_api_key=None, _env_file=None)

    with pytest.raises(ConfigurationError):
        GeminiGateway(settings)


@pytest.mark.parametrize(
    "error",
    [
        httpx.ReadTimeout("timed out"),
        httpx.ConnectError("connection refused"),
    ],
)
def test_gemini_transport_errors_become_gateway_errors(settings, error):
    gateway = GeminiGateway(settings, client=_FakeGeminiClient(error=error))

    with pytest.raises(GatewayError) as exc_info:
        gateway.invoke(HISTORY)
    assert exc_info.value.provider == "gemini"
