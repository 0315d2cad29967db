from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from chat_gateway.core.settings import get_settings
from chat_gateway.services.chat_service import ChatService
from chat_gateway.services.conversation_store import (
    ConversationStore,
    InMemoryConversationStore,
)
from chat_gateway.services.gateway import ModelGateway, build_gateway


@lru_cache
def get_conversation_store() -> ConversationStore:
    return InMemoryConversationStore()


@lru_cache
def get_model_gateway() -> ModelGateway:
    return build_gateway(get_settings())


def get_chat_service(
    store: ConversationStore = Depends(get_conversation_store),
    gateway: ModelGateway = Depends(get_model_gateway),
) -> ChatService:
    return ChatService(store=store, gateway=gateway)
