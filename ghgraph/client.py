"""Typed facade over the GitHub GraphQL API.

Usage:
    with GitHubGraphQL(Config(token="ghp_...")) as gh:
        repo = gh.get_repository(RepoTarget.parse("octocat/hello-world"))
        for issue in gh.list_issues(RepoTarget.parse("octocat/hello-world"), states=["OPEN"]):
            print(issue.number, issue.title)

Gets return the record or None when the server returns null for it.
Mutations return the changed record. List operations return a lazy
PagedStream that performs one request per page as it is consumed.
Nothing is cached: every call and every page pull hits the network.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

from ghgraph.config import Config, clamp_page_size
from ghgraph.errors import SchemaError
from ghgraph.github import mappers, queries
from ghgraph.github.pagination import PagedStream
from ghgraph.github.transport import GraphQLTransport
from ghgraph.models import (
    Actor,
    Branch,
    Issue,
    IssueComment,
    Label,
    Milestone,
    Organization,
    OrgOwner,
    Owner,
    Project,
    ProjectItem,
    PullRequest,
    RateLimit,
    RepoTarget,
    Repository,
    Review,
    SearchResult,
    UserOwner,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GitHubGraphQL:
    """Single entry point holding the configuration and the transport."""

    def __init__(self, config: Config | None = None, transport: GraphQLTransport | None = None) -> None:
        self.config = config or Config.load()
        self._transport = transport or GraphQLTransport(
            token=self.config.token,
            endpoint=self.config.endpoint,
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
        )

    def __enter__(self) -> GitHubGraphQL:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    def execute(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a raw GraphQL document and return its `data` object."""
        return self._transport.execute(document, variables)

    # --- plumbing ---

    def _get(self, request: queries.Request, path: tuple[str, ...], mapper: Callable[[dict], T]) -> Optional[T]:
        node = mappers.dig(self._transport.execute(*request), *path)
        return mapper(node) if node is not None else None

    def _required(self, request: queries.Request, path: tuple[str, ...], mapper: Callable[[dict], T]) -> T:
        node = mappers.dig(self._transport.execute(*request), *path)
        if node is None:
            raise SchemaError(f"Response has null {'.'.join(path)}")
        return mapper(node)

    def _run(self, request: queries.Request) -> None:
        self._transport.execute(*request)

    def _stream(
        self,
        label: str,
        build: Callable[[int, Optional[str]], queries.Request],
        path: tuple[str, ...],
        mapper: Callable[[dict], Optional[T]],
        page_size: int | None,
    ) -> PagedStream[T]:
        size = clamp_page_size(page_size or self.config.page_size)

        def fetch(cursor: str | None):
            data = self._transport.execute(*build(size, cursor))
            return mappers.to_page(mappers.dig(data, *path), mapper)

        return PagedStream(fetch, label=label)

    # --- viewer / users ---

    def viewer(self) -> Actor:
        return self._required(queries.viewer(), ("viewer",), mappers.actor)

    def get_user(self, login: str) -> Actor | None:
        return self._get(queries.user(login), ("user",), mappers.actor)

    def rate_limit(self) -> RateLimit:
        return self._required(queries.rate_limit(), ("rateLimit",), mappers.rate_limit)

    # --- repositories ---

    def get_repository(self, target: RepoTarget) -> Repository | None:
        return self._get(queries.repository(target), ("repository",), mappers.repository)

    def list_repositories(
        self, owner: Owner, *, privacy: str | None = None, page_size: int | None = None
    ) -> PagedStream[Repository]:
        return self._stream(
            f"repositories of {owner.login}",
            lambda first, after: queries.repositories(owner, first, after, privacy),
            (owner.root_field, "repositories"),
            mappers.repository,
            page_size,
        )

    def create_repository(
        self,
        name: str,
        *,
        visibility: str = "PRIVATE",
        description: str | None = None,
        owner_id: str | None = None,
        has_issues: bool = True,
    ) -> Repository:
        request = queries.create_repository(name, visibility, description, owner_id, has_issues)
        logger.info(f"Creating repository {name} ({visibility})")
        return self._required(request, ("createRepository", "repository"), mappers.repository)

    def update_repository(
        self,
        repository_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        homepage_url: str | None = None,
        has_issues: bool | None = None,
    ) -> Repository:
        request = queries.update_repository(
            repository_id,
            name=name,
            description=description,
            homepage_url=homepage_url,
            has_issues=has_issues,
        )
        return self._required(request, ("updateRepository", "repository"), mappers.repository)

    def archive_repository(self, repository_id: str) -> Repository:
        request = queries.archive_repository(repository_id, archived=True)
        return self._required(request, ("archiveRepository", "repository"), mappers.repository)

    def unarchive_repository(self, repository_id: str) -> Repository:
        request = queries.archive_repository(repository_id, archived=False)
        return self._required(request, ("unarchiveRepository", "repository"), mappers.repository)

    def list_collaborators(self, target: RepoTarget, page_size: int | None = None) -> PagedStream[Actor]:
        return self._stream(
            f"collaborators of {target}",
            lambda first, after: queries.collaborators(target, first, after),
            ("repository", "collaborators"),
            mappers.actor,
            page_size,
        )

    def list_branches(self, target: RepoTarget, page_size: int | None = None) -> PagedStream[Branch]:
        return self._stream(
            f"branches of {target}",
            lambda first, after: queries.branches(target, first, after),
            ("repository", "refs"),
            mappers.branch,
            page_size,
        )

    # --- issues and comments ---

    def get_issue(self, target: RepoTarget, number: int) -> Issue | None:
        return self._get(queries.issue(target, number), ("repository", "issue"), mappers.issue)

    def list_issues(
        self,
        target: RepoTarget,
        *,
        states: list[str] | None = None,
        labels: list[str] | None = None,
        page_size: int | None = None,
    ) -> PagedStream[Issue]:
        return self._stream(
            f"issues of {target}",
            lambda first, after: queries.issues(target, first, after, states, labels),
            ("repository", "issues"),
            mappers.issue,
            page_size,
        )

    def create_issue(
        self,
        repository_id: str,
        title: str,
        *,
        body: str | None = None,
        label_ids: list[str] | None = None,
        assignee_ids: list[str] | None = None,
        milestone_id: str | None = None,
    ) -> Issue:
        request = queries.create_issue(repository_id, title, body, label_ids, assignee_ids, milestone_id)
        return self._required(request, ("createIssue", "issue"), mappers.issue)

    def update_issue(
        self,
        issue_id: str,
        *,
        title: str | None = None,
        body: str | None = None,
        state: str | None = None,
        label_ids: list[str] | None = None,
        assignee_ids: list[str] | None = None,
        milestone_id: str | None = None,
    ) -> Issue:
        request = queries.update_issue(
            issue_id,
            title=title,
            body=body,
            state=state,
            label_ids=label_ids,
            assignee_ids=assignee_ids,
            milestone_id=milestone_id,
        )
        return self._required(request, ("updateIssue", "issue"), mappers.issue)

    def close_issue(self, issue_id: str) -> Issue:
        return self._required(queries.close_issue(issue_id), ("closeIssue", "issue"), mappers.issue)

    def reopen_issue(self, issue_id: str) -> Issue:
        return self._required(queries.reopen_issue(issue_id), ("reopenIssue", "issue"), mappers.issue)

    def delete_issue(self, issue_id: str) -> None:
        logger.info(f"Deleting issue {issue_id}")
        self._run(queries.delete_issue(issue_id))

    def list_issue_comments(
        self, target: RepoTarget, number: int, page_size: int | None = None
    ) -> PagedStream[IssueComment]:
        return self._stream(
            f"comments on {target}#{number}",
            lambda first, after: queries.issue_comments(target, number, first, after),
            ("repository", "issue", "comments"),
            mappers.comment,
            page_size,
        )

    def add_comment(self, subject_id: str, body: str) -> IssueComment:
        return self._required(
            queries.add_comment(subject_id, body),
            ("addComment", "commentEdge", "node"),
            mappers.comment,
        )

    def update_comment(self, comment_id: str, body: str) -> IssueComment:
        return self._required(
            queries.update_comment(comment_id, body),
            ("updateIssueComment", "issueComment"),
            mappers.comment,
        )

    def delete_comment(self, comment_id: str) -> None:
        self._run(queries.delete_comment(comment_id))

    # --- labels ---

    def get_label(self, target: RepoTarget, name: str) -> Label | None:
        return self._get(queries.label(target, name), ("repository", "label"), mappers.label)

    def list_labels(self, target: RepoTarget, page_size: int | None = None) -> PagedStream[Label]:
        return self._stream(
            f"labels of {target}",
            lambda first, after: queries.labels(target, first, after),
            ("repository", "labels"),
            mappers.label,
            page_size,
        )

    def create_label(
        self, repository_id: str, name: str, color: str, *, description: str | None = None
    ) -> Label:
        request = queries.create_label(repository_id, name, color, description)
        return self._required(request, ("createLabel", "label"), mappers.label)

    def update_label(
        self,
        label_id: str,
        *,
        name: str | None = None,
        color: str | None = None,
        description: str | None = None,
    ) -> Label:
        request = queries.update_label(label_id, name, color, description)
        return self._required(request, ("updateLabel", "label"), mappers.label)

    def delete_label(self, label_id: str) -> None:
        self._run(queries.delete_label(label_id))

    def add_labels(self, labelable_id: str, label_ids: list[str]) -> None:
        self._run(queries.add_labels(labelable_id, label_ids))

    def remove_labels(self, labelable_id: str, label_ids: list[str]) -> None:
        self._run(queries.remove_labels(labelable_id, label_ids))

    # --- milestones ---

    def get_milestone(self, target: RepoTarget, number: int) -> Milestone | None:
        return self._get(queries.milestone(target, number), ("repository", "milestone"), mappers.milestone)

    def list_milestones(
        self, target: RepoTarget, *, states: list[str] | None = None, page_size: int | None = None
    ) -> PagedStream[Milestone]:
        return self._stream(
            f"milestones of {target}",
            lambda first, after: queries.milestones(target, first, after, states),
            ("repository", "milestones"),
            mappers.milestone,
            page_size,
        )

    # --- pull requests and reviews ---

    def get_pull_request(self, target: RepoTarget, number: int) -> PullRequest | None:
        return self._get(
            queries.pull_request(target, number), ("repository", "pullRequest"), mappers.pull_request
        )

    def list_pull_requests(
        self,
        target: RepoTarget,
        *,
        states: list[str] | None = None,
        base_ref: str | None = None,
        page_size: int | None = None,
    ) -> PagedStream[PullRequest]:
        return self._stream(
            f"pull requests of {target}",
            lambda first, after: queries.pull_requests(target, first, after, states, base_ref),
            ("repository", "pullRequests"),
            mappers.pull_request,
            page_size,
        )

    def create_pull_request(
        self,
        repository_id: str,
        base_ref: str,
        head_ref: str,
        title: str,
        *,
        body: str | None = None,
        draft: bool = False,
    ) -> PullRequest:
        request = queries.create_pull_request(repository_id, base_ref, head_ref, title, body, draft)
        return self._required(request, ("createPullRequest", "pullRequest"), mappers.pull_request)

    def update_pull_request(
        self,
        pull_request_id: str,
        *,
        title: str | None = None,
        body: str | None = None,
        base_ref: str | None = None,
        state: str | None = None,
    ) -> PullRequest:
        request = queries.update_pull_request(
            pull_request_id, title=title, body=body, base_ref=base_ref, state=state
        )
        return self._required(request, ("updatePullRequest", "pullRequest"), mappers.pull_request)

    def merge_pull_request(
        self, pull_request_id: str, *, method: str = "MERGE", commit_headline: str | None = None
    ) -> PullRequest:
        logger.info(f"Merging pull request {pull_request_id} ({method})")
        request = queries.merge_pull_request(pull_request_id, method, commit_headline)
        return self._required(request, ("mergePullRequest", "pullRequest"), mappers.pull_request)

    def close_pull_request(self, pull_request_id: str) -> PullRequest:
        request = queries.close_pull_request(pull_request_id)
        return self._required(request, ("closePullRequest", "pullRequest"), mappers.pull_request)

    def list_reviews(self, target: RepoTarget, number: int, page_size: int | None = None) -> PagedStream[Review]:
        return self._stream(
            f"reviews on {target}#{number}",
            lambda first, after: queries.reviews(target, number, first, after),
            ("repository", "pullRequest", "reviews"),
            mappers.review,
            page_size,
        )

    def add_review(self, pull_request_id: str, *, event: str = "COMMENT", body: str | None = None) -> Review:
        request = queries.add_review(pull_request_id, event, body)
        return self._required(request, ("addPullRequestReview", "pullRequestReview"), mappers.review)

    def request_reviews(self, pull_request_id: str, user_ids: list[str]) -> PullRequest:
        request = queries.request_reviews(pull_request_id, user_ids)
        return self._required(request, ("requestReviews", "pullRequest"), mappers.pull_request)

    # --- projects ---

    def get_project(self, owner: Owner, number: int) -> Project | None:
        return self._get(queries.project(owner, number), (owner.root_field, "projectV2"), mappers.project)

    def list_projects(self, owner: Owner, page_size: int | None = None) -> PagedStream[Project]:
        return self._stream(
            f"projects of {owner.login}",
            lambda first, after: queries.projects(owner, first, after),
            (owner.root_field, "projectsV2"),
            mappers.project,
            page_size,
        )

    def create_project(self, owner_id: str, title: str) -> Project:
        request = queries.create_project(owner_id, title)
        return self._required(request, ("createProjectV2", "projectV2"), mappers.project)

    def update_project(
        self,
        project_id: str,
        *,
        title: str | None = None,
        short_description: str | None = None,
        closed: bool | None = None,
        public: bool | None = None,
    ) -> Project:
        request = queries.update_project(
            project_id, title=title, short_description=short_description, closed=closed, public=public
        )
        return self._required(request, ("updateProjectV2", "projectV2"), mappers.project)

    def delete_project(self, project_id: str) -> None:
        logger.info(f"Deleting project {project_id}")
        self._run(queries.delete_project(project_id))

    def add_project_item(self, project_id: str, content_id: str) -> ProjectItem:
        request = queries.add_project_item(project_id, content_id)
        return self._required(request, ("addProjectV2ItemById", "item"), mappers.project_item)

    # --- organizations ---

    def get_organization(self, login: str) -> Organization | None:
        return self._get(queries.organization(login), ("organization",), mappers.organization)

    def list_organizations(
        self, owner: UserOwner | None = None, page_size: int | None = None
    ) -> PagedStream[Organization]:
        root = owner.root_field if owner else "viewer"
        return self._stream(
            f"organizations of {owner.login if owner else 'viewer'}",
            lambda first, after: queries.organizations(owner, first, after),
            (root, "organizations"),
            mappers.organization,
            page_size,
        )

    def list_members(self, org: OrgOwner, page_size: int | None = None) -> PagedStream[Actor]:
        return self._stream(
            f"members of {org.login}",
            lambda first, after: queries.members(org, first, after),
            (org.root_field, "membersWithRole"),
            mappers.actor,
            page_size,
        )

    # --- search ---

    def search(self, query: str, *, kind: str = "ISSUE", page_size: int | None = None) -> PagedStream[SearchResult]:
        kind = kind.upper()
        if kind not in queries.SEARCH_TOTALS:
            raise ValueError(f"Unknown search type {kind!r}; expected one of {sorted(queries.SEARCH_TOTALS)}")
        return self._stream(
            f"search {query!r}",
            lambda first, after: queries.search(query, kind, first, after),
            ("search",),
            mappers.search_result,
            page_size,
        )
