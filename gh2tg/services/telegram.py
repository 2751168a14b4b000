"""Yet another tele services"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from gh2tg.models import Button, ButtonLayout

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"
HTTP_TIMEOUT_SECONDS = 10

JSONDict = dict[str, Any]

PROJECT_URL = "https://github.com/jayremnt/gh2t"


def _normalize_newlines(s: str) -> str:
    return (s or "").replace("\r\n", "\n").replace("\r", "\n")


def _describe_failure(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return f"{resp.status_code} {resp.text}"
    if isinstance(data, dict) and data.get("description"):
        return f"{resp.status_code} {data['description']}"
    return f"{resp.status_code} {resp.text}"


class TelegramNotifier:
    """
    Outbound-only Telegram Bot API client.

    Every call is a single request with a bounded timeout; failures are
    logged and reported as ``False``.
    """

    def __init__(
        self,
        bot_token: str,
        *,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        api_base: str = TELEGRAM_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._token = bot_token or ""
        self._timeout = timeout
        self._api_base = api_base.rstrip("/")
        self._transport = transport

    def _url(self, method: str) -> str:
        return f"{self._api_base}/bot{self._token}/{method}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _call(self, method: str, payload: Optional[JSONDict] = None) -> Optional[JSONDict]:
        """GET ``method`` (POST when ``payload`` is given); decoded body, or None on failure."""
        try:
            async with self._client() as client:
                if payload is None:
                    resp = await client.get(self._url(method))
                else:
                    resp = await client.post(self._url(method), json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Telegram %s request failed: %s", method, exc)
            return None

        try:
            data = resp.json()
        except ValueError:
            data = None
        if resp.status_code >= 300 or not isinstance(data, dict) or not data.get("ok"):
            logger.error("Telegram %s error: %s", method, _describe_failure(resp))
            return None
        return data

    async def send(
        self,
        text: str,
        buttons: Optional[ButtonLayout],
        chat_id: str,
    ) -> bool:
        """Send ``text`` (HTML) with an optional inline keyboard to ``chat_id``."""
        if not self._token:
            logger.error("Telegram bot token not configured")
            return False
        if not chat_id:
            logger.error("Telegram chat ID not configured")
            return False

        payload: JSONDict = {
            "chat_id": chat_id,
            "text": _normalize_newlines(text),
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }
        if buttons is not None and buttons.rows:
            payload["reply_markup"] = buttons.to_reply_markup()

        data = await self._call("sendMessage", payload)
        if data is None:
            logger.error("Failed to send message to chat %s", chat_id)
            return False
        logger.info("Message sent successfully to chat %s", chat_id)
        return True

    async def probe(self) -> bool:
        """Check the bot token with ``getMe``."""
        if not self._token:
            logger.error("Telegram bot token not configured")
            return False
        data = await self._call("getMe")
        if data is None:
            return False
        username = (data.get("result") or {}).get("username", "")
        logger.info("Bot connected successfully: %s", username)
        return True

    async def send_test_message(self, chat_id: str) -> bool:
        """Send a fixed message confirming the relay can reach ``chat_id``."""
        now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        text = (
            "🔧 <b>Test Message</b>\n\n"
            f"⏰ <b>Time:</b> {now}\n"
            "✅ <b>Status:</b> Webhook is working correctly!\n"
            "🤖 <b>Bot:</b> Connection established\n\n"
            "🎯 <b>Supported Events:</b>\n"
            "• 🚀 Push notifications\n"
            "• ⭐ Star/unstar events\n"
            "• 🍴 Fork events\n"
            "• 🐛 Issues (opened/closed/reopened)\n"
            "• 🔀 Pull requests (opened/closed/reopened)"
        )
        keyboard = ButtonLayout(
            rows=(
                (
                    Button("🔗 GitHub Repository", PROJECT_URL),
                    Button("📚 Documentation", f"{PROJECT_URL}#readme"),
                ),
            )
        )
        return await self.send(text, keyboard, chat_id)
