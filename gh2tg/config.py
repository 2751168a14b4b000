"""the beautiful world start from here."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

REPO_KEY_PREFIX = "REPO_"
REPO_KEY_SUFFIX = "_CHAT_ID"


def parse_repository_routes(environ: Mapping[str, str]) -> dict[str, str]:
    """
    Collect ``REPO_<name>_CHAT_ID`` overrides.

    The segment between the prefix and the suffix is kept verbatim as the
    repository key; it is not split into owner and repo.
    """
    routes: dict[str, str] = {}
    for key, value in environ.items():
        if not (key.startswith(REPO_KEY_PREFIX) and key.endswith(REPO_KEY_SUFFIX)):
            continue
        name = key[len(REPO_KEY_PREFIX) : len(key) - len(REPO_KEY_SUFFIX)]
        chat_id = (value or "").strip()
        if name and chat_id:
            routes[name] = chat_id
    return routes


def _int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value not in (None, "") else default
    except ValueError:
        return default


def _log_level(value: Optional[str], default: str = "INFO") -> str:
    name = (value or "").strip().upper()
    if name and isinstance(logging.getLevelName(name), int):
        return name
    return default


def _float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value not in (None, "") else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """App Settings"""

    github_webhook_secret: str = ""
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    repositories: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    http_timeout_seconds: float = 10.0
    admin_http_key: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            github_webhook_secret=env.get("GITHUB_WEBHOOK_SECRET", ""),
            telegram_bot_token=env.get("TELEGRAM_BOT_TOKEN", ""),
            telegram_chat_id=env.get("TELEGRAM_CHAT_ID", ""),
            repositories=MappingProxyType(parse_repository_routes(env)),
            host=env.get("HOST", "0.0.0.0"),
            port=_int(env.get("PORT"), 3000),
            log_level=_log_level(env.get("LOG_LEVEL")),
            http_timeout_seconds=_float(env.get("TELEGRAM_TIMEOUT_SECONDS"), 10.0),
            admin_http_key=env.get("ADMIN_HTTP_KEY", ""),
        )
