from __future__ import annotations

import asyncio
import logging

from chat_gateway.core.errors import GatewayError
from chat_gateway.models.chat import DEFAULT_SESSION_ID, Message
from chat_gateway.services.conversation_store import ConversationStore
from chat_gateway.services.extraction import NO_TEXT, parse_response
from chat_gateway.services.gateway import ModelGateway

logger = logging.getLogger(__name__)


class ChatService:
    """Runs one conversation turn against the model gateway.

    The user message is stored before the gateway is called and the reply
    after it returns. If the call fails the user message is retracted, so a
    session never keeps a question without its answer.
    """

    def __init__(self, store: ConversationStore, gateway: ModelGateway):
        self._store = store
        self._gateway = gateway

    async def reply(self, message: str, session_id: str | None = None) -> str:
        key = session_id if session_id is not None else DEFAULT_SESSION_ID

        user_message = Message(role="user", content=message)
        self._store.append(key, user_message)
        history = self._store.snapshot(key)

        try:
            raw = await asyncio.to_thread(self._gateway.invoke, history)
            text = parse_response(raw)
            if text == NO_TEXT:
                raise GatewayError("Model response contained no text")
        except BaseException:
            # Includes cancellation of the inbound request.
            self._store.retract(key, user_message)
            raise

        self._store.append(key, Message(role="assistant", content=text))
        logger.info(
            "Completed turn for session %r (history=%d messages)", key, len(history) + 1
        )
        return text
