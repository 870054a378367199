"""CLI entry point for ghgraph."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Iterable, List, Optional

import typer
from rich import print as rprint
from rich.logging import RichHandler

from ghgraph.client import GitHubGraphQL
from ghgraph.config import Config
from ghgraph.errors import GitHubError
from ghgraph.models import OrgOwner, RepoTarget, SearchResult, UserOwner

app = typer.Typer(help="Query GitHub's GraphQL API from the command line.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr"),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


def _client() -> GitHubGraphQL:
    config = Config.load()
    issues = config.validate()
    if issues:
        for issue in issues:
            rprint(f"[red]Config error: {issue}[/red]")
        raise typer.Exit(1)
    return GitHubGraphQL(config)


def _parse_target(slug: str) -> RepoTarget:
    try:
        return RepoTarget.parse(slug)
    except ValueError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def _emit(records: Iterable[Any], format: str, render) -> int:
    """Print records as text lines or a JSON array. Returns the count."""
    records = list(records)
    if format == "json":
        typer.echo(json.dumps([asdict(r) for r in records], indent=2, default=_json_default))
    else:
        for record in records:
            rprint(render(record))
    return len(records)


def _run(command) -> None:
    try:
        command()
    except GitHubError as e:
        rprint(f"[red]GitHub error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def whoami() -> None:
    """Show the authenticated user."""

    def command() -> None:
        with _client() as gh:
            me = gh.viewer()
            rprint(f"[bold]{me.login}[/bold] {me.name or ''}")
            rprint(f"  {me.url}")

    _run(command)


@app.command()
def repos(
    owner: str = typer.Argument(help="User or organization login"),
    org: bool = typer.Option(False, "--org", help="Treat OWNER as an organization"),
    limit: int = typer.Option(30, help="Max number of repositories to show"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: text or json"),
) -> None:
    """List repositories of a user or organization, most recently updated first."""
    owner_ref = OrgOwner(owner) if org else UserOwner(owner)

    def command() -> None:
        with _client() as gh:
            stream = gh.list_repositories(owner_ref, page_size=min(limit, 100))
            _emit(
                stream.take(limit),
                format,
                lambda r: f"{r.name_with_owner}  [dim]★ {r.stargazer_count}[/dim]"
                + (" [yellow](archived)[/yellow]" if r.is_archived else ""),
            )
            if format == "text" and stream.total_count is not None:
                rprint(f"\n{stream.total_count} repositories in total")

    _run(command)


@app.command()
def issues(
    repo: str = typer.Argument(help="GitHub repository (owner/repo)"),
    state: Optional[str] = typer.Option(None, help="OPEN or CLOSED"),
    label: Optional[List[str]] = typer.Option(None, "--label", "-l", help="Only issues with this label"),
    limit: int = typer.Option(30, help="Max number of issues to show"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: text or json"),
) -> None:
    """List issues of a repository, newest first."""
    target = _parse_target(repo)

    def command() -> None:
        with _client() as gh:
            stream = gh.list_issues(
                target,
                states=[state.upper()] if state else None,
                labels=label or None,
                page_size=min(limit, 100),
            )
            _emit(
                stream.take(limit),
                format,
                lambda i: f"#{i.number} [{_state_color(i.state)}]{i.state}[/] {i.title}",
            )

    _run(command)


@app.command()
def prs(
    repo: str = typer.Argument(help="GitHub repository (owner/repo)"),
    state: Optional[str] = typer.Option(None, help="OPEN, CLOSED or MERGED"),
    limit: int = typer.Option(30, help="Max number of pull requests to show"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: text or json"),
) -> None:
    """List pull requests of a repository, newest first."""
    target = _parse_target(repo)

    def command() -> None:
        with _client() as gh:
            stream = gh.list_pull_requests(
                target, states=[state.upper()] if state else None, page_size=min(limit, 100)
            )
            _emit(
                stream.take(limit),
                format,
                lambda p: f"#{p.number} [{_state_color(p.state)}]{p.state}[/] {p.title} "
                f"[dim]{p.head_ref} → {p.base_ref}[/dim]",
            )

    _run(command)


@app.command()
def search(
    query: str = typer.Argument(help="GitHub search query"),
    type: str = typer.Option("ISSUE", "--type", "-t", help="ISSUE, REPOSITORY, USER or DISCUSSION"),
    limit: int = typer.Option(20, help="Max number of results"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: text or json"),
) -> None:
    """Search issues, pull requests, repositories or users."""

    def command() -> None:
        with _client() as gh:
            stream = gh.search(query, kind=type, page_size=min(limit, 100))
            _emit(stream.take(limit), format, _render_hit)
            if format == "text" and stream.total_count is not None:
                rprint(f"\n{stream.total_count} matches")

    try:
        _run(command)
    except ValueError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command("rate-limit")
def rate_limit() -> None:
    """Show the GraphQL rate limit budget for the token."""

    def command() -> None:
        with _client() as gh:
            limit = gh.rate_limit()
            rprint("[bold]GraphQL rate limit:[/bold]")
            rprint(f"  Remaining: {limit.remaining}/{limit.limit}")
            rprint(f"  Used:      {limit.used}")
            if limit.reset_at:
                rprint(f"  Resets at: {limit.reset_at.isoformat()}")

    _run(command)


def _state_color(state: str) -> str:
    return {"OPEN": "green", "CLOSED": "red", "MERGED": "magenta"}.get(state, "white")


def _render_hit(hit: SearchResult) -> str:
    item = hit.item
    if hit.kind in ("Issue", "PullRequest"):
        return f"[dim]{hit.kind}[/dim] #{item.number} {item.title}  {item.url}"
    if hit.kind == "Repository":
        return f"[dim]Repository[/dim] {item.name_with_owner}  ★ {item.stargazer_count}"
    return f"[dim]{hit.kind}[/dim] {item.login}  {item.url}"


if __name__ == "__main__":
    app()
