"""Lazy, forward-only iteration over GitHub GraphQL connections.

A connection is fetched one page at a time through a `fetch(cursor)`
callable. The stream buffers a single page, hands items out one by one,
and asks for the next page only when the buffer is drained and the
server reported `hasNextPage`.

States: not started -> buffered -> exhausted (terminal). A failed fetch
closes the stream: the error propagates once and later pulls stop
without touching the network, like a generator that raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, TypeVar

from ghgraph.errors import GitHubError, SchemaError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PageInfo:
    end_cursor: str | None
    has_next_page: bool


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=lambda: PageInfo(None, False))
    total_count: int | None = None


class PagedStream(Generic[T]):
    """Iterator over every item of a paginated connection."""

    def __init__(self, fetch: Callable[[str | None], Page[T]], label: str = "connection") -> None:
        self._fetch = fetch
        self._label = label
        self._buffer: list[T] = []
        self._position = 0
        self._cursor: str | None = None
        self._terminal = False
        self._closed = False
        self.pages_fetched = 0
        self.total_count: int | None = None
        self.error: GitHubError | None = None

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        while True:
            if self._position < len(self._buffer):
                item = self._buffer[self._position]
                self._position += 1
                return item
            if self._terminal or self._closed:
                raise StopIteration
            self._load_next_page()

    @property
    def exhausted(self) -> bool:
        """True once no item can be produced anymore."""
        drained = self._position >= len(self._buffer)
        return drained and (self._terminal or self._closed)

    def take(self, n: int) -> list[T]:
        """Return up to n items, fetching no page past the one holding the n-th.

        If a page fetch fails, the items pulled by this call so far are
        attached to the raised error as `partial_items`.
        """
        items: list[T] = []
        try:
            while len(items) < n:
                items.append(next(self))
        except StopIteration:
            pass
        except GitHubError as e:
            e.partial_items = items
            raise
        return items

    def _load_next_page(self) -> None:
        logger.debug(f"Fetching page {self.pages_fetched + 1} of {self._label} (after={self._cursor})")
        try:
            page = self._fetch(self._cursor)
            info = page.page_info
            if info.has_next_page and not info.end_cursor:
                raise SchemaError(f"{self._label}: hasNextPage is true but endCursor is missing")
        except GitHubError as e:
            logger.debug(f"Closing {self._label} stream after error: {e}")
            self.error = e
            self._closed = True
            raise

        self.pages_fetched += 1
        self._buffer = list(page.items)
        self._position = 0
        self._cursor = info.end_cursor
        self._terminal = not info.has_next_page
        if page.total_count is not None:
            self.total_count = page.total_count
