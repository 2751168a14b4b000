"""Pick the Telegram chat for a repository."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from gh2tg.config import Settings


class RoutingTable:
    """
    Exact, case-sensitive ``repository full name -> chat id`` lookup with a
    default chat for everything else.
    """

    def __init__(self, routes: Mapping[str, str], default_chat_id: str) -> None:
        self._routes = MappingProxyType(dict(routes))
        self._default_chat_id = default_chat_id or ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "RoutingTable":
        return cls(settings.repositories, settings.telegram_chat_id)

    @property
    def default_chat_id(self) -> str:
        return self._default_chat_id

    @property
    def routes(self) -> Mapping[str, str]:
        return self._routes

    def resolve_chat(self, repository_full_name: str) -> str:
        return self._routes.get(repository_full_name, self._default_chat_id)
