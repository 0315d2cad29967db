from __future__ import annotations

import logging
import sys

import uvicorn
from pydantic import ValidationError

from chat_gateway.core.settings import get_settings

logger = logging.getLogger("chat_gateway")


def run() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.critical("Invalid configuration: %s", e)
        sys.exit(1)

    # Imported after validation so a bad environment exits cleanly.
    from chat_gateway.main import app

    logger.info(
        "listening on %s:%d (provider=%s model=%s region=%s)",
        settings.host,
        settings.port,
        settings.gateway_provider,
        settings.model_id,
        settings.aws_region,
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
