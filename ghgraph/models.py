"""Typed records returned by the GitHub GraphQL client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union


# --- Owner / target variants ---


@dataclass(frozen=True)
class UserOwner:
    login: str

    root_field = "user"

    def variables(self) -> dict[str, Any]:
        return {"login": self.login}


@dataclass(frozen=True)
class OrgOwner:
    login: str

    root_field = "organization"

    def variables(self) -> dict[str, Any]:
        return {"login": self.login}


@dataclass(frozen=True)
class RepoTarget:
    owner: str
    name: str

    root_field = "repository"

    @classmethod
    def parse(cls, slug: str) -> RepoTarget:
        """Split an "owner/name" slug."""
        owner, sep, name = slug.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Expected 'owner/name', got {slug!r}")
        return cls(owner=owner, name=name)

    def variables(self) -> dict[str, Any]:
        return {"owner": self.owner, "name": self.name}

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


Owner = Union[UserOwner, OrgOwner]


# --- Entity records ---


@dataclass(frozen=True)
class Actor:
    login: str
    id: str = ""
    name: str | None = None
    url: str = ""
    kind: str = "User"  # "User" | "Organization" | "Bot" | "Mannequin"


@dataclass(frozen=True)
class Repository:
    id: str
    name: str
    name_with_owner: str
    owner_login: str
    url: str
    description: str | None = None
    is_private: bool = False
    is_archived: bool = False
    is_fork: bool = False
    stargazer_count: int = 0
    fork_count: int = 0
    default_branch: str | None = None
    primary_language: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Branch:
    name: str
    commit_oid: str | None = None


@dataclass(frozen=True)
class Label:
    id: str
    name: str
    color: str
    description: str | None = None
    url: str = ""


@dataclass(frozen=True)
class Milestone:
    id: str
    number: int
    title: str
    state: str  # "OPEN" | "CLOSED"
    description: str | None = None
    url: str = ""
    due_on: datetime | None = None
    closed_at: datetime | None = None


@dataclass(frozen=True)
class Issue:
    id: str
    number: int
    title: str
    state: str  # "OPEN" | "CLOSED"
    url: str
    body: str = ""
    author: str | None = None  # login; None for deleted accounts
    labels: tuple[str, ...] = field(default_factory=tuple)  # first 100 names
    assignees: tuple[str, ...] = field(default_factory=tuple)  # first 100 logins
    milestone: str | None = None  # milestone title
    comment_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None


@dataclass(frozen=True)
class IssueComment:
    id: str
    body: str
    url: str = ""
    author: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class PullRequest:
    id: str
    number: int
    title: str
    state: str  # "OPEN" | "CLOSED" | "MERGED"
    url: str
    body: str = ""
    author: str | None = None
    base_ref: str = ""
    head_ref: str = ""
    is_draft: bool = False
    merged: bool = False
    mergeable: str | None = None  # "MERGEABLE" | "CONFLICTING" | "UNKNOWN"
    labels: tuple[str, ...] = field(default_factory=tuple)  # first 100 names
    created_at: datetime | None = None
    updated_at: datetime | None = None
    merged_at: datetime | None = None
    closed_at: datetime | None = None


@dataclass(frozen=True)
class Review:
    id: str
    state: str  # "PENDING" | "COMMENTED" | "APPROVED" | "CHANGES_REQUESTED" | "DISMISSED"
    body: str = ""
    url: str = ""
    author: str | None = None
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class Project:
    id: str
    number: int
    title: str
    url: str
    short_description: str | None = None
    closed: bool = False
    public: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProjectItem:
    id: str
    kind: str  # "ISSUE" | "PULL_REQUEST" | "DRAFT_ISSUE" | "REDACTED"
    content_id: str | None = None


@dataclass(frozen=True)
class Organization:
    id: str
    login: str
    url: str
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SearchResult:
    kind: str  # GraphQL __typename of the matched node
    item: Union[Issue, PullRequest, Repository, Actor]


@dataclass(frozen=True)
class RateLimit:
    limit: int
    remaining: int
    used: int
    cost: int
    reset_at: datetime | None = None
