"""Convert GraphQL response nodes into typed records.

Null handling is uniform: a field that is present but null means "empty"
(None for a single node, an empty terminal page for a connection). A field
that is missing, or a value of the wrong type, raises SchemaError.
"""

from __future__ import annotations

import functools
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from ghgraph.errors import SchemaError
from ghgraph.github.pagination import Page, PageInfo
from ghgraph.github.queries import SEARCH_ALIASES
from ghgraph.models import (
    Actor,
    Branch,
    Issue,
    IssueComment,
    Label,
    Milestone,
    Organization,
    Project,
    ProjectItem,
    PullRequest,
    RateLimit,
    Repository,
    Review,
    SearchResult,
)

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


def _shape(fn: F) -> F:
    """Turn lookups on malformed nodes into SchemaError."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SchemaError(f"Unexpected shape in {fn.__name__}: {e!r}", payload=args[0] if args else None) from e

    return wrapper  # type: ignore[return-value]


def dig(data: Any, *path: str) -> Any:
    """Walk `path` into a response. Returns None at the first null field."""
    node = data
    walked: list[str] = []
    for key in path:
        if node is None:
            return None
        if not isinstance(node, dict):
            raise SchemaError(f"Expected an object at {'.'.join(walked) or '<root>'}", payload=data)
        if key not in node:
            raise SchemaError(f"Missing field {'.'.join(walked + [key])}", payload=data)
        node = node[key]
        walked.append(key)
    return node


def timestamp(value: str | None) -> datetime | None:
    """Parse a GitHub ISO-8601 timestamp ("2024-06-01T10:00:00Z")."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _login(actor: dict | None) -> str | None:
    return actor["login"] if actor else None


def _names(connection: dict | None, key: str = "name") -> tuple[str, ...]:
    if not connection:
        return ()
    return tuple(node[key] for node in connection["nodes"] if node)


def _name(node: dict | None) -> str | None:
    return node["name"] if node else None


@_shape
def to_page(connection: dict | None, mapper: Callable[[dict], Optional[T]]) -> Page[T]:
    """Map one page of a connection. A null connection is an empty last page.

    Null nodes (items the token cannot see) and nodes the mapper returns
    None for are skipped.
    """
    if connection is None:
        return Page(items=[], page_info=PageInfo(None, False))
    info = connection["pageInfo"]
    items = []
    for node in connection["nodes"]:
        if node is None:
            continue
        item = mapper(node)
        if item is not None:
            items.append(item)
    return Page(
        items=items,
        page_info=PageInfo(end_cursor=info["endCursor"], has_next_page=bool(info["hasNextPage"])),
        total_count=connection.get("totalCount"),
    )


@_shape
def actor(node: dict) -> Actor:
    return Actor(
        login=node["login"],
        id=node.get("id", ""),
        name=node.get("name"),
        url=node.get("url", ""),
        kind=node.get("__typename", "User"),
    )


@_shape
def repository(node: dict) -> Repository:
    return Repository(
        id=node["id"],
        name=node["name"],
        name_with_owner=node["nameWithOwner"],
        owner_login=node["owner"]["login"],
        url=node["url"],
        description=node.get("description"),
        is_private=bool(node.get("isPrivate")),
        is_archived=bool(node.get("isArchived")),
        is_fork=bool(node.get("isFork")),
        stargazer_count=node.get("stargazerCount") or 0,
        fork_count=node.get("forkCount") or 0,
        default_branch=_name(node.get("defaultBranchRef")),
        primary_language=_name(node.get("primaryLanguage")),
        created_at=timestamp(node.get("createdAt")),
        updated_at=timestamp(node.get("updatedAt")),
    )


@_shape
def branch(node: dict) -> Branch:
    target = node.get("target")
    return Branch(name=node["name"], commit_oid=target["oid"] if target else None)


@_shape
def label(node: dict) -> Label:
    return Label(
        id=node["id"],
        name=node["name"],
        color=node["color"],
        description=node.get("description"),
        url=node.get("url", ""),
    )


@_shape
def milestone(node: dict) -> Milestone:
    return Milestone(
        id=node["id"],
        number=node["number"],
        title=node["title"],
        state=node["state"],
        description=node.get("description"),
        url=node.get("url", ""),
        due_on=timestamp(node.get("dueOn")),
        closed_at=timestamp(node.get("closedAt")),
    )


@_shape
def issue(node: dict) -> Issue:
    milestone_node = node.get("milestone")
    comments = node.get("comments") or {}
    return Issue(
        id=node["id"],
        number=node["number"],
        title=node["title"],
        state=node["state"],
        url=node["url"],
        body=node.get("body") or "",
        author=_login(node.get("author")),
        labels=_names(node.get("labels")),
        assignees=_names(node.get("assignees"), key="login"),
        milestone=milestone_node["title"] if milestone_node else None,
        comment_count=comments.get("totalCount") or 0,
        created_at=timestamp(node.get("createdAt")),
        updated_at=timestamp(node.get("updatedAt")),
        closed_at=timestamp(node.get("closedAt")),
    )


@_shape
def comment(node: dict) -> IssueComment:
    return IssueComment(
        id=node["id"],
        body=node.get("body") or "",
        url=node.get("url", ""),
        author=_login(node.get("author")),
        created_at=timestamp(node.get("createdAt")),
        updated_at=timestamp(node.get("updatedAt")),
    )


@_shape
def pull_request(node: dict) -> PullRequest:
    return PullRequest(
        id=node["id"],
        number=node["number"],
        title=node["title"],
        state=node["state"],
        url=node["url"],
        body=node.get("body") or "",
        author=_login(node.get("author")),
        base_ref=node.get("baseRefName", ""),
        head_ref=node.get("headRefName", ""),
        is_draft=bool(node.get("isDraft")),
        merged=bool(node.get("merged")),
        mergeable=node.get("mergeable"),
        labels=_names(node.get("labels")),
        created_at=timestamp(node.get("createdAt")),
        updated_at=timestamp(node.get("updatedAt")),
        merged_at=timestamp(node.get("mergedAt")),
        closed_at=timestamp(node.get("closedAt")),
    )


@_shape
def review(node: dict) -> Review:
    return Review(
        id=node["id"],
        state=node["state"],
        body=node.get("body") or "",
        url=node.get("url", ""),
        author=_login(node.get("author")),
        submitted_at=timestamp(node.get("submittedAt")),
    )


@_shape
def project(node: dict) -> Project:
    return Project(
        id=node["id"],
        number=node["number"],
        title=node["title"],
        url=node["url"],
        short_description=node.get("shortDescription"),
        closed=bool(node.get("closed")),
        public=bool(node.get("public")),
        created_at=timestamp(node.get("createdAt")),
        updated_at=timestamp(node.get("updatedAt")),
    )


@_shape
def project_item(node: dict) -> ProjectItem:
    content = node.get("content")
    return ProjectItem(id=node["id"], kind=node["type"], content_id=content["id"] if content else None)


@_shape
def organization(node: dict) -> Organization:
    return Organization(
        id=node["id"],
        login=node["login"],
        url=node["url"],
        name=node.get("name"),
        description=node.get("description"),
    )


@_shape
def rate_limit(node: dict) -> RateLimit:
    return RateLimit(
        limit=node["limit"],
        remaining=node["remaining"],
        used=node["used"],
        cost=node["cost"],
        reset_at=timestamp(node.get("resetAt")),
    )


_SEARCH_MAPPERS: dict[str, Callable[[dict], Any]] = {
    "Issue": issue,
    "PullRequest": pull_request,
    "Repository": repository,
    "User": actor,
    "Organization": actor,
}


@_shape
def search_result(node: dict) -> SearchResult | None:
    """Map a search hit; node types without a record (e.g. Discussion) give None."""
    kind = node["__typename"]
    mapper = _SEARCH_MAPPERS.get(kind)
    if mapper is None:
        return None
    aliases = SEARCH_ALIASES.get(kind)
    if aliases:
        node = dict(node)
        for field_name, alias in aliases.items():
            node[field_name] = node.pop(alias)
    return SearchResult(kind=kind, item=mapper(node))
