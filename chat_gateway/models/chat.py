from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

# Key used when a request carries no session id: every such request shares
# one conversation.
DEFAULT_SESSION_ID = ""

Role = Literal["user", "assistant"]


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    session_id: str | None = None
    message: str


class ChatResponse(BaseModel):
    session_id: str | None = None
    reply: str
