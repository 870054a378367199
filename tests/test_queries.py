"""Tests for ghgraph.github.queries: document and variable building."""

from __future__ import annotations

import pytest

from ghgraph.github import queries
from ghgraph.models import OrgOwner, RepoTarget, UserOwner


class TestOwnerVariants:
    def test_user_repositories_select_user_root(self):
        document, variables = queries.repositories(UserOwner("octocat"), 50, None)
        assert "user(login: $login)" in document
        assert "$login: String!" in document
        assert variables == {"login": "octocat", "first": 50}

    def test_org_repositories_select_organization_root(self):
        document, variables = queries.repositories(OrgOwner("acme"), 10, "c1", privacy="PUBLIC")
        assert "organization(login: $login)" in document
        assert variables == {"login": "acme", "first": 10, "after": "c1", "privacy": "PUBLIC"}

    def test_repository_target(self):
        document, variables = queries.issues(RepoTarget("acme", "webapp"), 25, None)
        assert "repository(owner: $owner, name: $name)" in document
        assert variables == {"owner": "acme", "name": "webapp", "first": 25}

    def test_projects_follow_owner_variant(self):
        user_doc, _ = queries.projects(UserOwner("octocat"), 5, None)
        org_doc, _ = queries.projects(OrgOwner("acme"), 5, None)
        assert "user(login: $login)" in user_doc
        assert "organization(login: $login)" in org_doc


class TestDocuments:
    def test_connection_queries_request_page_info(self):
        document, _ = queries.labels(RepoTarget("acme", "webapp"), 10, None)
        assert "pageInfo { endCursor hasNextPage }" in document
        assert "fragment LabelFields on Label" in document

    def test_only_used_fragments_are_included(self):
        document, _ = queries.branches(RepoTarget("acme", "webapp"), 10, None)
        assert "fragment" not in document

    def test_label_name_does_not_clash_with_repo_name(self):
        document, variables = queries.label(RepoTarget("acme", "webapp"), "bug")
        assert "label(name: $labelName)" in document
        assert variables == {"owner": "acme", "name": "webapp", "labelName": "bug"}

    def test_filters_left_out_when_none(self):
        _, variables = queries.pull_requests(RepoTarget("acme", "webapp"), 10, None)
        assert "states" not in variables
        assert "baseRefName" not in variables

    def test_filters_passed_when_given(self):
        _, variables = queries.issues(
            RepoTarget("acme", "webapp"), 10, None, states=["OPEN"], labels=["bug"]
        )
        assert variables["states"] == ["OPEN"]
        assert variables["labels"] == ["bug"]

    def test_viewer_organizations(self):
        document, variables = queries.organizations(None, 20, None)
        assert "viewer {" in document
        assert "ListOrganizations($first: Int!" in document
        assert variables == {"first": 20}

    def test_user_organizations(self):
        document, variables = queries.organizations(UserOwner("octocat"), 20, None)
        assert "ListOrganizations($login: String!, $first: Int!" in document
        assert variables == {"login": "octocat", "first": 20}

    def test_nested_label_and_assignee_lists_ask_for_max_page(self):
        issue_doc, _ = queries.issue(RepoTarget("acme", "webapp"), 1)
        pr_doc, _ = queries.pull_request(RepoTarget("acme", "webapp"), 1)
        assert "labels(first: 100)" in issue_doc
        assert "assignees(first: 100)" in issue_doc
        assert "labels(first: 100)" in pr_doc


class TestMutations:
    def test_create_issue_input(self):
        document, variables = queries.create_issue("R_1", "Crash on start", body="Trace", label_ids=["L_1"])
        assert "createIssue(input: $input)" in document
        assert variables == {
            "input": {"repositoryId": "R_1", "title": "Crash on start", "body": "Trace", "labelIds": ["L_1"]}
        }

    def test_update_issue_only_sends_given_fields(self):
        _, variables = queries.update_issue("I_1", title="New title")
        assert variables == {"input": {"id": "I_1", "title": "New title"}}

    def test_create_label_strips_hash(self):
        _, variables = queries.create_label("R_1", "bug", "#d73a4a")
        assert variables["input"]["color"] == "d73a4a"

    def test_archive_and_unarchive(self):
        archive, _ = queries.archive_repository("R_1")
        unarchive, _ = queries.archive_repository("R_1", archived=False)
        assert "archiveRepository(input: $input)" in archive
        assert "unarchiveRepository(input: $input)" in unarchive
        assert "UnarchiveRepositoryInput!" in unarchive

    def test_merge_defaults_to_merge_commit(self):
        _, variables = queries.merge_pull_request("PR_1")
        assert variables == {"input": {"pullRequestId": "PR_1", "mergeMethod": "MERGE"}}

    def test_create_pull_request_keeps_draft_false(self):
        _, variables = queries.create_pull_request("R_1", "main", "feature", "Add X")
        assert variables["input"]["draft"] is False


class TestSearch:
    def test_total_count_alias_per_kind(self):
        document, variables = queries.search("is:open", "REPOSITORY", 10, None)
        assert "totalCount: repositoryCount" in document
        assert variables == {"query": "is:open", "type": "REPOSITORY", "first": 10}

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown search type"):
            queries.search("x", "COMMIT", 10, None)
