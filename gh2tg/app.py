"""the beautiful world start from here."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from gh2tg.config import Settings
from gh2tg.routers import gh, info
from gh2tg.services.routing import RoutingTable
from gh2tg.services.signature import SignatureVerifier
from gh2tg.services.telegram import TelegramNotifier

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    notifier: Optional[TelegramNotifier] = None,
) -> FastAPI:
    """
    Build the relay app.

    Settings are read once here; request handlers only see the components
    stored on ``app.state``.
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="GitHub → Telegram")

    app.state.settings = settings
    app.state.verifier = SignatureVerifier(settings.github_webhook_secret)
    app.state.routing = RoutingTable.from_settings(settings)
    app.state.notifier = notifier or TelegramNotifier(
        settings.telegram_bot_token,
        timeout=settings.http_timeout_seconds,
    )

    app.include_router(info.router)
    app.include_router(gh.router)

    logger.debug(
        "Loaded %d repository route(s), default chat %s",
        len(app.state.routing.routes),
        settings.telegram_chat_id or "-",
    )
    return app


def main() -> None:
    import uvicorn

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Webhook endpoint: http://%s:%d/webhook/github", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
