"""Shared test fixtures for ghgraph."""

from __future__ import annotations

from typing import Any

import pytest

from ghgraph.client import GitHubGraphQL
from ghgraph.config import Config
from ghgraph.models import RepoTarget


class FakeTransport:
    """Stands in for GraphQLTransport: replays queued `data` objects or raises queued errors."""

    def __init__(self) -> None:
        self.responses: list[Any] = []
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def execute(self, document: str, variables: dict | None = None) -> dict:
        self.calls.append((document, variables or {}))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {document[:60]}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def gh(transport: FakeTransport) -> GitHubGraphQL:
    return GitHubGraphQL(Config(token="ghp_test", page_size=2), transport=transport)


@pytest.fixture
def target() -> RepoTarget:
    return RepoTarget(owner="acme", name="webapp")
