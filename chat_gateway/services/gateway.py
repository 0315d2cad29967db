from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import boto3
import httpx
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from chat_gateway.core.errors import ConfigurationError, GatewayError
from chat_gateway.core.settings import Settings
from chat_gateway.models.chat import Message

logger = logging.getLogger(__name__)


class ModelGateway(Protocol):
    def invoke(self, history: Sequence[Message]) -> bytes: ...


def build_messages_payload(history: Sequence[Message], settings: Settings) -> dict[str, Any]:
    """Anthropic Messages body as accepted by Bedrock ``InvokeModel``."""
    return {
        "anthropic_version": settings.anthropic_version,
        "max_tokens": settings.max_tokens,
        "temperature": settings.temperature,
        "messages": [
            {
                "role": msg.role,
                "content": [{"type": "text", "text": msg.content}],
            }
            for msg in history
        ],
    }


class BedrockGateway:
    def __init__(self, settings: Settings, client: Any | None = None):
        self._settings = settings
        self._client = client or boto3.client(
            "bedrock-runtime",
            region_name=settings.aws_region,
            config=Config(
                read_timeout=settings.request_timeout_seconds,
                connect_timeout=10,
                retries={"total_max_attempts": 1, "mode": "standard"},
            ),
        )

    def invoke(self, history: Sequence[Message]) -> bytes:
        body = json.dumps(build_messages_payload(history, self._settings))
        try:
            out = self._client.invoke_model(
                modelId=self._settings.model_id,
                body=body,
                contentType="application/json",
                accept="application/json",
            )
            return out["body"].read()
        except (ClientError, BotoCoreError) as e:
            logger.exception("InvokeModel failed (model=%s)", self._settings.model_id)
            raise GatewayError(f"InvokeModel failed: {e}", provider="bedrock") from e


class GeminiGateway:
    def __init__(self, settings: Settings, client: Any | None = None):
        self._settings = settings

        if client is None:
            if not settings.gemini_api_key:
                raise ConfigurationError("GEMINI_API_KEY is not configured")
            client = genai.Client(
                api_key=settings.gemini_api_key,
                http_options=types.HttpOptions(
                    timeout=int(settings.request_timeout_seconds * 1000)
                ),
            )
        self._client = client

    def invoke(self, history: Sequence[Message]) -> bytes:
        contents = [
            types.Content(
                # Gemini names the assistant role "model".
                role="model" if msg.role == "assistant" else "user",
                parts=[types.Part.from_text(text=msg.content)],
            )
            for msg in history
        ]
        try:
            response = self._client.models.generate_content(
                model=self._settings.model_id,
                contents=contents,
                config=types.GenerateContentConfig(
                    max_output_tokens=self._settings.max_tokens,
                    temperature=self._settings.temperature,
                ),
            )
        except genai_errors.APIError as e:
            logger.exception("Gemini request failed (model=%s)", self._settings.model_id)
            raise GatewayError(f"Gemini request failed: {e}", provider="gemini") from e
        except httpx.HTTPError as e:
            logger.exception("Gemini transport failure (model=%s)", self._settings.model_id)
            raise GatewayError(f"Gemini transport failure: {e}", provider="gemini") from e

        return response.model_dump_json(exclude_none=True).encode("utf-8")


def build_gateway(settings: Settings) -> ModelGateway:
    if settings.gateway_provider == "gemini":
        return GeminiGateway(settings)
    return BedrockGateway(settings)
