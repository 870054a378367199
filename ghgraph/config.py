"""Configuration loading for ghgraph.

Config sources (in priority order):
1. Explicit arguments passed to Config(...)
2. Environment variables (GHGRAPH_TOKEN, GITHUB_TOKEN, etc.)
3. .env file in current directory
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ENDPOINT = "https://api.github.com/graphql"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100  # GitHub rejects first/last above 100


@dataclass
class Config:
    token: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE
    user_agent: str = "ghgraph"

    @classmethod
    def load(cls) -> Config:
        return cls(
            token=os.getenv("GHGRAPH_TOKEN") or os.getenv("GITHUB_TOKEN", ""),
            endpoint=os.getenv("GHGRAPH_ENDPOINT", DEFAULT_ENDPOINT),
            timeout=float(os.getenv("GHGRAPH_TIMEOUT", str(DEFAULT_TIMEOUT))),
            page_size=int(os.getenv("GHGRAPH_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))),
        )

    def validate(self) -> list[str]:
        """Return a list of config issues. Advisory only; the client never calls this."""
        issues = []
        if not self.token:
            issues.append("GitHub token not set (GHGRAPH_TOKEN or GITHUB_TOKEN)")
        if not self.endpoint.startswith(("http://", "https://")):
            issues.append(f"Endpoint is not an http(s) URL: {self.endpoint}")
        if self.timeout <= 0:
            issues.append(f"Timeout must be positive, got {self.timeout}")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            issues.append(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}")
        return issues


def clamp_page_size(page_size: int) -> int:
    return max(1, min(MAX_PAGE_SIZE, page_size))
