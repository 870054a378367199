"""Manual verification: run read-only calls against the real GitHub API.

Usage:
    GHGRAPH_TOKEN=ghp_... uv run python scripts/smoke_github.py owner/repo

Uses a public repo by default if no argument given.
"""

from __future__ import annotations

import sys

from ghgraph.client import GitHubGraphQL
from ghgraph.config import Config
from ghgraph.errors import NotFoundError
from ghgraph.models import RepoTarget, UserOwner

DEFAULT_REPO = "octocat/Hello-World"


def main() -> None:
    config = Config.load()

    if not config.token:
        print("ERROR: Set GHGRAPH_TOKEN (or GITHUB_TOKEN) environment variable")
        sys.exit(1)

    target = RepoTarget.parse(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_REPO)
    print(f"Connecting to {target}...")

    with GitHubGraphQL(config) as gh:
        me = gh.viewer()
        print(f"Authenticated as {me.login}")

        try:
            repo = gh.get_repository(target)
        except NotFoundError:
            repo = None
        if repo is None:
            print(f"ERROR: {target} not found or not visible to this token")
            sys.exit(1)
        print(f"\n--- {repo.name_with_owner} ---")
        print(f"  Default branch: {repo.default_branch}")
        print(f"  Stars: {repo.stargazer_count}, forks: {repo.fork_count}")

        # Small pages on purpose, so more than one request is made
        print("\n--- Issues (first 7, page size 3) ---")
        issues = gh.list_issues(target, page_size=3)
        for issue in issues.take(7):
            print(f"  #{issue.number} [{issue.state}] {issue.title}")
        print(f"  ({issues.pages_fetched} pages fetched, {issues.total_count} issues total)")

        print("\n--- Labels ---")
        labels = list(gh.list_labels(target, page_size=10))
        for label in labels:
            print(f"  {label.name} #{label.color}")

        print("\n--- Branches (first 5) ---")
        for branch in gh.list_branches(target).take(5):
            print(f"  {branch.name} @ {(branch.commit_oid or '')[:8]}")

        print(f"\n--- Repositories of {target.owner} (first 5) ---")
        for r in gh.list_repositories(UserOwner(target.owner)).take(5):
            print(f"  {r.name_with_owner}")

        limit = gh.rate_limit()
        print(f"\nRate limit: {limit.remaining}/{limit.limit} remaining")


if __name__ == "__main__":
    main()
