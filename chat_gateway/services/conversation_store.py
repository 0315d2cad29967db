from __future__ import annotations

import logging
import threading
from typing import Protocol

from chat_gateway.models.chat import Message

logger = logging.getLogger(__name__)


class ConversationStore(Protocol):
    def append(self, session_id: str, message: Message) -> None: ...

    def snapshot(self, session_id: str) -> tuple[Message, ...]: ...

    def retract(self, session_id: str, message: Message) -> bool: ...

    def session_ids(self) -> list[str]: ...


class _Conversation:
    __slots__ = ("lock", "messages")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.messages: list[Message] = []


class InMemoryConversationStore:
    """Process-local conversation history, one lock per session.

    The registry lock is held only while looking up or creating a session
    entry, so appends and snapshots for different sessions never wait on
    each other. History lives as long as the process; there is no eviction.
    """

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._conversations: dict[str, _Conversation] = {}

    def _get(self, session_id: str, create: bool) -> _Conversation | None:
        with self._registry_lock:
            conversation = self._conversations.get(session_id)
            if conversation is None and create:
                conversation = _Conversation()
                self._conversations[session_id] = conversation
            return conversation

    def append(self, session_id: str, message: Message) -> None:
        conversation = self._get(session_id, create=True)
        with conversation.lock:
            conversation.messages.append(message)

    def snapshot(self, session_id: str) -> tuple[Message, ...]:
        conversation = self._get(session_id, create=False)
        if conversation is None:
            return ()
        with conversation.lock:
            return tuple(conversation.messages)

    def retract(self, session_id: str, message: Message) -> bool:
        """Remove the most recent entry that is ``message`` itself.

        Compares by identity so that an identical message appended by a
        concurrent request on the same session is left alone.
        """
        conversation = self._get(session_id, create=False)
        if conversation is None:
            return False
        with conversation.lock:
            for index in range(len(conversation.messages) - 1, -1, -1):
                if conversation.messages[index] is message:
                    del conversation.messages[index]
                    return True
        logger.warning("Message to retract not found in session %r", session_id)
        return False

    def session_ids(self) -> list[str]:
        with self._registry_lock:
            return list(self._conversations)
