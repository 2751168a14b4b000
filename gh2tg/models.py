"""Normalized event summaries and Telegram button layouts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Union


class EventKind(str, Enum):
    """GitHub event types handled by the relay."""

    PUSH = "push"
    STAR = "star"
    FORK = "fork"
    ISSUES = "issues"
    PULL_REQUEST = "pull_request"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_header(cls, value: Optional[str]) -> "EventKind":
        """Map an ``X-GitHub-Event`` value to a kind, ``UNSUPPORTED`` otherwise."""
        if isinstance(value, cls):
            return value
        try:
            kind = cls((value or "").strip())
        except ValueError:
            return cls.UNSUPPORTED
        return kind


class OrderedSet:
    """Insertion-ordered collection that drops repeated entries."""

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items: dict[str, None] = {}
        for item in items:
            self.add(item)

    def add(self, item: str) -> None:
        self._items.setdefault(item, None)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def as_tuple(self) -> tuple[str, ...]:
        return tuple(self._items)


@dataclass(frozen=True)
class PushSummary:
    repository_name: str
    repository_url: str
    branch_name: str
    commit_messages: tuple[str, ...]
    authors: tuple[str, ...]
    changed_files: tuple[str, ...]
    compare_url: str
    pusher: str


@dataclass(frozen=True)
class StarSummary:
    repository_name: str
    repository_url: str
    action: str
    user_login: str
    user_url: str
    star_count: int


@dataclass(frozen=True)
class ForkSummary:
    repository_name: str
    repository_url: str
    fork_name: str
    fork_url: str
    user_login: str
    user_url: str
    fork_count: int


@dataclass(frozen=True)
class IssueSummary:
    repository_name: str
    repository_url: str
    number: int
    title: str
    url: str
    action: str
    user_login: str
    user_url: str
    labels: tuple[str, ...] = ()
    assignees: tuple[str, ...] = ()
    body: str = ""


@dataclass(frozen=True)
class PullRequestSummary(IssueSummary):
    base_branch: str = ""
    head_branch: str = ""
    draft: bool = False
    merged: bool = False
    changed_files: Optional[int] = None
    additions: Optional[int] = None
    deletions: Optional[int] = None


Summary = Union[PushSummary, StarSummary, ForkSummary, IssueSummary, PullRequestSummary]


@dataclass(frozen=True)
class Button:
    text: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "url": self.url}


@dataclass(frozen=True)
class ButtonLayout:
    """Rows of link buttons rendered as a Telegram inline keyboard."""

    rows: tuple[tuple[Button, ...], ...]

    def to_reply_markup(self) -> dict[str, Any]:
        return {
            "inline_keyboard": [[button.to_dict() for button in row] for row in self.rows]
        }
