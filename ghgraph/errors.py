"""Exceptions raised by ghgraph.

Every failure surfaces as a GitHubError subclass, so callers can catch one
type. Nothing here is retried.
"""

from __future__ import annotations

from typing import Any


class GitHubError(Exception):
    """Base error carrying the remote payload (if any) and HTTP status.

    `partial_items` holds what PagedStream.take collected before the failure.
    """

    def __init__(
        self,
        message: str,
        payload: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload
        self.status_code = status_code
        self.partial_items: list[Any] = []

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class TransportError(GitHubError):
    """Network failure, timeout, non-2xx status or a non-JSON body."""


class GraphQLError(GitHubError):
    """The server answered with an `errors` array."""

    @property
    def errors(self) -> list[dict]:
        if isinstance(self.payload, dict):
            return self.payload.get("errors") or []
        return []

    @property
    def types(self) -> list[str]:
        return [e.get("type", "") for e in self.errors if isinstance(e, dict)]


class NotFoundError(GraphQLError):
    """Every reported GraphQL error has type NOT_FOUND."""


class SchemaError(GitHubError):
    """The response JSON does not have the expected shape."""
