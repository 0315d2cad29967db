import logging

from fastapi import APIRouter, Depends, HTTPException

from chat_gateway.core.errors import GatewayError
from chat_gateway.dependencies import get_chat_service
from chat_gateway.models.chat import ChatRequest, ChatResponse
from chat_gateway.services.chat_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat_endpoint(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    try:
        reply = await chat_service.reply(
            message=request.message,
            session_id=request.session_id,
        )
        return ChatResponse(session_id=request.session_id, reply=reply)
    except GatewayError as e:
        logger.error("Chat endpoint gateway failure: %s", e.message)
        raise HTTPException(status_code=500, detail="model error")
    except Exception:
        logger.exception("Chat endpoint failed")
        raise HTTPException(status_code=500, detail="Internal server error")
