"""Render event summaries as Telegram HTML messages with link buttons."""

from __future__ import annotations

from html import escape as _esc
from typing import Any, Callable, Optional

from gh2tg.models import (
    Button,
    ButtonLayout,
    EventKind,
    ForkSummary,
    IssueSummary,
    PullRequestSummary,
    PushSummary,
    StarSummary,
    Summary,
)
from gh2tg.utils import first_line, repo_tag, truncate

MAX_COMMITS = 5  # Show up to five commits in push summaries.
MAX_COMMIT_LENGTH = 80
MAX_FILES = 8
MAX_BODY_PREVIEW = 150

UNKNOWN_EVENT_TEXT = "Unknown event type"

ISSUE_STYLES = {
    "opened": ("🆕", "opened"),
    "closed": ("✅", "closed"),
    "reopened": ("🔄", "reopened"),
}

PULL_REQUEST_STYLES = {
    "opened": ("🔀", "opened"),
    "closed": ("❌", "closed"),
    "merged": ("🟣", "merged"),
    "reopened": ("🔄", "reopened"),
}

Rendered = tuple[str, Optional[ButtonLayout]]


def _esc_html(value: Any) -> str:
    return _esc(str(value if value is not None else ""), quote=True)


def _more_line(hidden: int) -> str:
    return f"└─ ...and {hidden} more\n"


def _plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"


def _format_push(data: PushSummary) -> str:
    tag = repo_tag(data.repository_name)
    message = f"🚀 <b>{_esc_html(data.pusher)} just pushed to {_esc_html(tag)}</b>\n\n"
    message += f"🌿 <b>Branch:</b> <code>{_esc_html(data.branch_name)}</code>\n"
    message += f"👥 <b>Authors:</b> {_esc_html(', '.join(data.authors))}\n\n"

    commits = data.commit_messages
    if commits:
        message += f"📦 <b>Commits ({len(commits)})</b>\n"
        for commit in commits[:MAX_COMMITS]:
            line = truncate(first_line(commit), MAX_COMMIT_LENGTH)
            message += f"└─ {_esc_html(line)}\n"
        if len(commits) > MAX_COMMITS:
            message += _more_line(len(commits) - MAX_COMMITS)
        message += "\n"

    files = data.changed_files
    if files:
        message += f"🛠️ <b>Changed {len(files)} {_plural(len(files), 'file')}</b>\n"
        for path in files[:MAX_FILES]:
            message += f"└─ <code>{_esc_html(path)}</code>\n"
        if len(files) > MAX_FILES:
            message += _more_line(len(files) - MAX_FILES)

    return message.rstrip("\n")


def _format_star(data: StarSummary) -> str:
    starred = data.action == "created"
    emoji = "⭐" if starred else "💫"
    verb = "starred" if starred else "unstarred"
    tag = repo_tag(data.repository_name)
    return (
        f"{emoji} <b>{_esc_html(data.user_login)} {verb} {_esc_html(tag)}</b>\n\n"
        f"📊 <b>Total Stars:</b> {data.star_count}\n"
        f"👤 <b>User:</b> @{_esc_html(data.user_login)}"
    )


def _format_fork(data: ForkSummary) -> str:
    tag = repo_tag(data.repository_name)
    return (
        f"🍴 <b>{_esc_html(data.user_login)} forked {_esc_html(tag)}</b>\n\n"
        f"🔗 <b>New Fork:</b> {_esc_html(data.fork_name)}\n"
        f"📊 <b>Total Forks:</b> {data.fork_count}\n"
        f"👤 <b>User:</b> @{_esc_html(data.user_login)}"
    )


def _body_preview(body: str) -> str:
    if len(body) > MAX_BODY_PREVIEW:
        return body[:MAX_BODY_PREVIEW] + "..."
    return body


def _detail_lines(data: IssueSummary) -> list[str]:
    lines = [f"📌 <b>Title:</b> {_esc_html(data.title)}"]
    if data.labels:
        labels = ", ".join(f"<code>{_esc_html(label)}</code>" for label in data.labels)
        lines.append(f"🏷️ <b>Labels:</b> {labels}")
    if data.assignees:
        assignees = ", ".join(f"@{_esc_html(login)}" for login in data.assignees)
        lines.append(f"🙋 <b>Assignees:</b> {assignees}")
    return lines


def _body_lines(data: IssueSummary) -> list[str]:
    if not data.body:
        return []
    return ["", f"📝 <i>{_esc_html(_body_preview(data.body))}</i>"]


def _format_issue(data: IssueSummary) -> str:
    emoji, verb = ISSUE_STYLES.get(data.action, ("📋", data.action))
    tag = repo_tag(data.repository_name)
    header = (
        f"{emoji} <b>{_esc_html(data.user_login)} {_esc_html(verb)} issue"
        f" #{data.number} in {_esc_html(tag)}</b>"
    )
    lines = [header, ""] + _detail_lines(data) + _body_lines(data)
    return "\n".join(lines)


def _stats_line(data: PullRequestSummary) -> str:
    parts = []
    if data.changed_files is not None:
        parts.append(f"{data.changed_files} {_plural(data.changed_files, 'file')}")
    if data.additions is not None:
        parts.append(f"+{data.additions}")
    if data.deletions is not None:
        parts.append(f"-{data.deletions}")
    if not parts:
        return ""
    return f"📊 <b>Changes:</b> {' / '.join(parts)}"


def _format_pull_request(data: PullRequestSummary) -> str:
    state = "merged" if data.action == "closed" and data.merged else data.action
    emoji, verb = PULL_REQUEST_STYLES.get(state, ("📋", state))
    tag = repo_tag(data.repository_name)
    header = (
        f"{emoji} <b>{_esc_html(data.user_login)} {_esc_html(verb)} pull request"
        f" #{data.number} in {_esc_html(tag)}</b>"
    )
    lines = [header, ""] + _detail_lines(data)
    lines.insert(
        3,
        f"🌿 <b>Branch:</b> <code>{_esc_html(data.head_branch)}</code>"
        f" → <code>{_esc_html(data.base_branch)}</code>",
    )
    if data.draft:
        lines.append("🚧 <i>Draft</i>")
    if data.action in ("opened", "reopened"):
        stats = _stats_line(data)
        if stats:
            lines.append(stats)
    lines.extend(_body_lines(data))
    return "\n".join(lines)


def _push_buttons(data: PushSummary) -> ButtonLayout:
    return ButtonLayout(
        rows=(
            (
                Button("🔍 View Changes", data.compare_url),
                Button("📚 Repository", data.repository_url),
            ),
        )
    )


def _star_buttons(data: StarSummary) -> ButtonLayout:
    return ButtonLayout(
        rows=(
            (
                Button("📚 Repository", data.repository_url),
                Button("👤 User Profile", data.user_url),
            ),
        )
    )


def _fork_buttons(data: ForkSummary) -> ButtonLayout:
    return ButtonLayout(
        rows=(
            (
                Button("📚 Original Repo", data.repository_url),
                Button("🍴 Fork", data.fork_url),
            ),
            (Button("👤 User Profile", data.user_url),),
        )
    )


def _issue_buttons(data: IssueSummary) -> ButtonLayout:
    return ButtonLayout(
        rows=(
            (
                Button("🔗 View Issue", data.url),
                Button("📚 Repository", data.repository_url),
            ),
            (Button("👤 User Profile", data.user_url),),
        )
    )


def _pull_request_buttons(data: PullRequestSummary) -> ButtonLayout:
    return ButtonLayout(
        rows=(
            (
                Button("🔗 View Pull Request", data.url),
                Button("📚 Repository", data.repository_url),
            ),
            (Button("👤 User Profile", data.user_url),),
        )
    )


# kind -> (summary type, text renderer, button builder)
RENDERERS: dict[EventKind, tuple[type, Callable[[Any], str], Callable[[Any], ButtonLayout]]] = {
    EventKind.PUSH: (PushSummary, _format_push, _push_buttons),
    EventKind.STAR: (StarSummary, _format_star, _star_buttons),
    EventKind.FORK: (ForkSummary, _format_fork, _fork_buttons),
    EventKind.ISSUES: (IssueSummary, _format_issue, _issue_buttons),
    EventKind.PULL_REQUEST: (PullRequestSummary, _format_pull_request, _pull_request_buttons),
}


def _renderer(summary: Summary, event_type: str | EventKind):
    entry = RENDERERS.get(EventKind.from_header(event_type))
    if entry is None or type(summary) is not entry[0]:
        return None
    return entry


def build_buttons(summary: Summary, event_type: str | EventKind) -> Optional[ButtonLayout]:
    entry = _renderer(summary, event_type)
    if entry is None:
        return None
    return entry[2](summary)


def format_message(summary: Summary, event_type: str | EventKind) -> Rendered:
    """
    Render ``summary`` into Telegram HTML plus its inline keyboard.

    Unknown event types fall back to a fixed text without buttons.
    """
    entry = _renderer(summary, event_type)
    if entry is None:
        return UNKNOWN_EVENT_TEXT, None
    _, render, buttons = entry
    return render(summary), buttons(summary)
