"""Ruter Ingfo?"""

from __future__ import annotations

import hmac
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query, Request

from gh2tg.schemas import HealthResponse, WebhookResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["info"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_admin_key(expected: str, key_from_request: Optional[str]) -> bool:
    return hmac.compare_digest(expected.encode(), (key_from_request or "").encode())


@router.get("/", response_model=HealthResponse, response_model_exclude_none=True)
async def root(request: Request) -> HealthResponse:
    """Health check, including whether the Telegram bot token works."""
    reachable = await request.app.state.notifier.probe()
    return HealthResponse(
        status="ok" if reachable else "degraded",
        timestamp=_now_iso(),
        telegram=reachable,
    )


@router.post("/webhook/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=_now_iso())


@router.post("/webhook/test", response_model=WebhookResponse, response_model_exclude_none=True)
async def send_test_message(
    request: Request,
    chat_id: Optional[str] = Query(None),
    x_admin_key: Optional[str] = Header(None),
) -> WebhookResponse:
    """
    Send the fixed test message to ``chat_id`` (default chat when omitted).

    Disabled unless ``ADMIN_HTTP_KEY`` is set.
    """
    state = request.app.state
    if not state.settings.admin_http_key:
        raise HTTPException(404, "Not Found")
    if not _check_admin_key(state.settings.admin_http_key, x_admin_key):
        raise HTTPException(403, "Invalid admin key")

    target = chat_id or state.routing.default_chat_id
    sent = await state.notifier.send_test_message(target)
    if not sent:
        logger.error("Failed to send test message to chat %s", target)
        return WebhookResponse(success=False, message="Test message failed")
    return WebhookResponse(success=True, message="Test message sent")
