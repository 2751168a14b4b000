"""Normalize GitHub webhook payloads into compact summaries."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from gh2tg.models import (
    EventKind,
    ForkSummary,
    IssueSummary,
    OrderedSet,
    PullRequestSummary,
    PushSummary,
    StarSummary,
    Summary,
)
from gh2tg.schemas import (
    ForkEvent,
    IssuesEvent,
    PullRequestEvent,
    PushEvent,
    StarEvent,
)
from gh2tg.utils import truncate

logger = logging.getLogger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"
NOTIFIABLE_ACTIONS = frozenset({"opened", "closed", "reopened"})
MAX_BODY_LENGTH = 200

Normalizer = Callable[[Mapping[str, Any]], Optional[Summary]]


def _parse(model: type[BaseModel], payload: Mapping[str, Any]) -> Optional[BaseModel]:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.debug(
            "Invalid %s payload: %d validation error(s)", model.__name__, exc.error_count()
        )
        return None


def _has(payload: Mapping[str, Any], *keys: str) -> bool:
    return all(payload.get(key) for key in keys)


def _normalize_push(payload: Mapping[str, Any]) -> Optional[PushSummary]:
    ref = payload.get("ref")
    if not isinstance(ref, str) or not ref.startswith(BRANCH_REF_PREFIX):
        logger.debug("Skipping push to non-branch ref %r", ref)
        return None
    event = _parse(PushEvent, payload)
    if event is None:
        return None

    authors = OrderedSet(commit.author.name for commit in event.commits)
    changed_files = OrderedSet()
    for commit in event.commits:
        for path in commit.added:
            changed_files.add(f"+ {path}")
        for path in commit.removed:
            changed_files.add(f"- {path}")
        for path in commit.modified:
            changed_files.add(f"~ {path}")

    return PushSummary(
        repository_name=event.repository.full_name,
        repository_url=event.repository.html_url,
        branch_name=event.ref[len(BRANCH_REF_PREFIX) :],
        commit_messages=tuple(commit.message for commit in event.commits),
        authors=authors.as_tuple(),
        changed_files=changed_files.as_tuple(),
        compare_url=event.compare,
        pusher=event.pusher.name,
    )


def _normalize_star(payload: Mapping[str, Any]) -> Optional[StarSummary]:
    if not _has(payload, "action", "repository", "sender"):
        logger.debug("Invalid star event data")
        return None
    event = _parse(StarEvent, payload)
    if event is None:
        return None
    return StarSummary(
        repository_name=event.repository.full_name,
        repository_url=event.repository.html_url,
        action=event.action,
        user_login=event.sender.login,
        user_url=event.sender.html_url,
        star_count=event.repository.stargazers_count,
    )


def _normalize_fork(payload: Mapping[str, Any]) -> Optional[ForkSummary]:
    if not _has(payload, "forkee", "repository", "sender"):
        logger.debug("Invalid fork event data")
        return None
    event = _parse(ForkEvent, payload)
    if event is None:
        return None
    return ForkSummary(
        repository_name=event.repository.full_name,
        repository_url=event.repository.html_url,
        fork_name=event.forkee.full_name,
        fork_url=event.forkee.html_url,
        user_login=event.sender.login,
        user_url=event.sender.html_url,
        fork_count=event.repository.forks_count,
    )


def _filtered_action(payload: Mapping[str, Any], subject: str) -> bool:
    if not _has(payload, "action", subject, "repository", "sender"):
        logger.debug("Invalid %s event data", subject)
        return True
    action = payload.get("action")
    if action not in NOTIFIABLE_ACTIONS:
        logger.debug("Ignoring %s action %r", subject, action)
        return True
    return False


def _normalize_issues(payload: Mapping[str, Any]) -> Optional[IssueSummary]:
    if _filtered_action(payload, "issue"):
        return None
    event = _parse(IssuesEvent, payload)
    if event is None:
        return None
    issue = event.issue
    return IssueSummary(
        repository_name=event.repository.full_name,
        repository_url=event.repository.html_url,
        number=issue.number,
        title=issue.title,
        url=issue.html_url,
        action=event.action,
        user_login=event.sender.login,
        user_url=event.sender.html_url,
        labels=tuple(label.name for label in issue.labels),
        assignees=tuple(user.login for user in issue.assignees),
        body=truncate(issue.body or "", MAX_BODY_LENGTH, ellipsis=""),
    )


def _normalize_pull_request(payload: Mapping[str, Any]) -> Optional[PullRequestSummary]:
    if _filtered_action(payload, "pull_request"):
        return None
    event = _parse(PullRequestEvent, payload)
    if event is None:
        return None
    pr = event.pull_request
    return PullRequestSummary(
        repository_name=event.repository.full_name,
        repository_url=event.repository.html_url,
        number=pr.number,
        title=pr.title,
        url=pr.html_url,
        action=event.action,
        user_login=event.sender.login,
        user_url=event.sender.html_url,
        labels=tuple(label.name for label in pr.labels),
        assignees=tuple(user.login for user in pr.assignees),
        body=truncate(pr.body or "", MAX_BODY_LENGTH, ellipsis=""),
        base_branch=pr.base.ref,
        head_branch=pr.head.ref,
        draft=pr.draft,
        merged=bool(pr.merged),
        changed_files=pr.changed_files,
        additions=pr.additions,
        deletions=pr.deletions,
    )


NORMALIZERS: dict[EventKind, Normalizer] = {
    EventKind.PUSH: _normalize_push,
    EventKind.STAR: _normalize_star,
    EventKind.FORK: _normalize_fork,
    EventKind.ISSUES: _normalize_issues,
    EventKind.PULL_REQUEST: _normalize_pull_request,
}


def normalize(event_type: str | EventKind, payload: Any) -> Optional[Summary]:
    """
    Turn a raw webhook payload into a summary.

    Returns None for unsupported event types, filtered actions and payloads
    missing a required field. Malformed input never raises.
    """
    kind = EventKind.from_header(event_type)
    normalizer = NORMALIZERS.get(kind)
    if normalizer is None:
        logger.debug("Unsupported event type: %s", event_type)
        return None
    if not isinstance(payload, Mapping):
        logger.debug("Payload for %s is not an object", kind.value)
        return None
    return normalizer(payload)
