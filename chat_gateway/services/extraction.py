"""Locate the assistant's reply inside a provider response body.

Where the text lives depends on the model family behind the gateway, so the
known shapes are listed in priority order and the first one that yields a
string wins.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Final

from chat_gateway.core.errors import GatewayError

logger = logging.getLogger(__name__)

# Returned when no known shape matches.
NO_TEXT: Final = ""

PathStep = str | int


@dataclass(frozen=True)
class ResponseShape:
    """A known response layout: the path of keys/indices down to the text."""

    name: str
    path: tuple[PathStep, ...]

    def match(self, document: Any) -> str | None:
        node = document
        for step in self.path:
            if isinstance(step, int):
                if not isinstance(node, list) or len(node) <= step:
                    return None
            elif not isinstance(node, dict) or step not in node:
                return None
            node = node[step]
        return node if isinstance(node, str) else None


RESPONSE_SHAPES: tuple[ResponseShape, ...] = (
    ResponseShape("text", ("text",)),
    ResponseShape("completion", ("completion",)),
    ResponseShape("generation", ("generation",)),
    ResponseShape("choices-message-blocks", ("choices", 0, "message", "content", 0, "text")),
    ResponseShape("choices-message-string", ("choices", 0, "message", "content")),
    ResponseShape("choices-text", ("choices", 0, "text")),
    ResponseShape("message-blocks", ("message", "content", 0, "text")),
    ResponseShape("content-blocks", ("content", 0, "text")),
    ResponseShape("output-message-blocks", ("output", "message", "content", 0, "text")),
    ResponseShape("results-output-text", ("results", 0, "outputText")),
    ResponseShape("candidates-parts", ("candidates", 0, "content", "parts", 0, "text")),
)


def extract_text(
    document: Any,
    shapes: tuple[ResponseShape, ...] = RESPONSE_SHAPES,
) -> str:
    for shape in shapes:
        text = shape.match(document)
        if text:
            logger.debug("Reply text found via %s shape", shape.name)
            return text
    return NO_TEXT


def parse_response(raw: bytes) -> str:
    try:
        document = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise GatewayError(f"Model response is not valid JSON: {e}") from e
    return extract_text(document)
