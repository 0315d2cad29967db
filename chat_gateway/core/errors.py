"""Exceptions raised across the service.

Route handlers map these onto HTTP responses; nothing below the API layer
knows about status codes.
"""

from __future__ import annotations


class ChatGatewayError(Exception):
    """Base class for errors raised by chat_gateway."""


class GatewayError(ChatGatewayError):
    """The model gateway call failed or returned nothing usable."""

    def __init__(self, message: str, *, provider: str | None = None):
        super().__init__(message)
        self.message = message
        self.provider = provider


class ConfigurationError(ChatGatewayError):
    """Startup configuration is missing or invalid."""
