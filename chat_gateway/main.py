from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chat_gateway.api import chat, health
from chat_gateway.core.logging import configure_logging
from chat_gateway.core.settings import Settings, get_settings


async def _bad_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed or incomplete bodies are client errors, reported as 400.
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name)

    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    app.add_exception_handler(RequestValidationError, _bad_request_handler)

    app.include_router(chat.router)

    app.include_router(health.router)

    return app


app = create_app()
