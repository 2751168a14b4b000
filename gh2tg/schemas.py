"""Request/response schemas and the GitHub payload shapes we accept."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Repository(BaseModel):
    full_name: str
    html_url: str


class StarredRepository(Repository):
    stargazers_count: int


class ForkedRepository(Repository):
    forks_count: int


class Account(BaseModel):
    """``sender`` / ``user`` / ``assignee`` objects; only login and profile."""

    login: str
    html_url: str


class Pusher(BaseModel):
    name: str


class CommitAuthor(BaseModel):
    name: str


class Commit(BaseModel):
    message: str
    author: CommitAuthor
    added: list[str]
    removed: list[str]
    modified: list[str]


class Label(BaseModel):
    name: str


class BranchRef(BaseModel):
    ref: str


class PushEvent(BaseModel):
    ref: str
    compare: str
    commits: list[Commit]
    repository: Repository
    pusher: Pusher


class StarEvent(BaseModel):
    action: str
    repository: StarredRepository
    sender: Account


class ForkEvent(BaseModel):
    forkee: Repository
    repository: ForkedRepository
    sender: Account


class Issue(BaseModel):
    number: int
    title: str
    html_url: str
    body: Optional[str] = None
    labels: list[Label] = []
    assignees: list[Account] = []


class PullRequest(Issue):
    base: BranchRef
    head: BranchRef
    draft: bool = False
    merged: Optional[bool] = None
    changed_files: Optional[int] = None
    additions: Optional[int] = None
    deletions: Optional[int] = None


class IssuesEvent(BaseModel):
    action: str
    issue: Issue
    repository: Repository
    sender: Account


class PullRequestEvent(BaseModel):
    action: str
    pull_request: PullRequest
    repository: Repository
    sender: Account


class WebhookResponse(BaseModel):
    success: bool
    message: str
    eventType: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    telegram: Optional[bool] = None
