"""Ruter GH?"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Header, HTTPException, Request

from gh2tg.models import EventKind
from gh2tg.schemas import WebhookResponse
from gh2tg.services.formatter import format_message
from gh2tg.services.github import normalize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["github"])

FILTERED_MESSAGE = "Event processed (filtered out)"
SENT_MESSAGE = "Webhook processed and notification sent"
FAILED_MESSAGE = "Webhook processed but notification failed"


@router.post(
    "/github",
    response_model=WebhookResponse,
    response_model_exclude_none=True,
)
async def github_webhook(
    request: Request,
    x_hub_signature_256: str | None = Header(None),
    x_github_event: str | None = Header(None),
) -> WebhookResponse:
    """
    GitHub webhook endpoint.

    The signature is checked against the exact request bytes before anything
    else is read. Unsupported, filtered and malformed events are acknowledged
    without sending a notification.
    """
    state = request.app.state
    event = x_github_event or "unknown"
    logger.info("Received GitHub webhook: %s", event)

    body = await request.body()
    if not state.verifier.verify(body, x_hub_signature_256):
        logger.warning("Invalid webhook signature for %s event", event)
        raise HTTPException(401, "Invalid webhook signature")

    try:
        payload = json.loads(body)
    except ValueError:
        logger.debug("Body of %s event is not valid JSON", event)
        payload = None

    kind = EventKind.from_header(x_github_event)
    summary = normalize(kind, payload)
    if summary is None:
        logger.debug("Event %s filtered out", event)
        return WebhookResponse(success=True, message=FILTERED_MESSAGE, eventType=event)

    text, buttons = format_message(summary, kind)
    chat_id = state.routing.resolve_chat(summary.repository_name)
    sent = await state.notifier.send(text, buttons, chat_id)

    if not sent:
        logger.error(
            "Failed to send %s notification for %s to chat %s",
            event,
            summary.repository_name,
            chat_id,
        )
        return WebhookResponse(success=False, message=FAILED_MESSAGE, eventType=event)

    logger.info(
        "Webhook notification sent for %s (%s) to chat %s",
        summary.repository_name,
        event,
        chat_id,
    )
    return WebhookResponse(success=True, message=SENT_MESSAGE, eventType=event)
