"""GraphQL documents for every remote operation.

Each builder returns a `(document, variables)` pair ready for
`GraphQLTransport.execute`. Connection builders take `first` and `after`
so the pagination stream can drive them page by page. Optional filters
that are None are left out of the variables, which GraphQL treats as
"not given".
"""

from __future__ import annotations

import re
from typing import Any, Union

from ghgraph.models import Owner, RepoTarget

Request = tuple[str, dict[str, Any]]
Target = Union[Owner, RepoTarget]

PAGE_INFO = "pageInfo { endCursor hasNextPage }"

USER_FIELDS = """
fragment UserFields on User {
  __typename
  id
  login
  name
  url
}
"""

REPOSITORY_FIELDS = """
fragment RepositoryFields on Repository {
  id
  name
  nameWithOwner
  url
  description
  isPrivate
  isArchived
  isFork
  stargazerCount
  forkCount
  owner { login }
  defaultBranchRef { name }
  primaryLanguage { name }
  createdAt
  updatedAt
}
"""

LABEL_FIELDS = """
fragment LabelFields on Label {
  id
  name
  color
  description
  url
}
"""

MILESTONE_FIELDS = """
fragment MilestoneFields on Milestone {
  id
  number
  title
  state
  description
  url
  dueOn
  closedAt
}
"""

ISSUE_FIELDS = """
fragment IssueFields on Issue {
  id
  number
  title
  body
  state
  url
  author { login }
  labels(first: 100) { nodes { name } }
  assignees(first: 100) { nodes { login } }
  milestone { title }
  comments { totalCount }
  createdAt
  updatedAt
  closedAt
}
"""

COMMENT_FIELDS = """
fragment CommentFields on IssueComment {
  id
  body
  url
  author { login }
  createdAt
  updatedAt
}
"""

PULL_REQUEST_FIELDS = """
fragment PullRequestFields on PullRequest {
  id
  number
  title
  body
  state
  url
  author { login }
  baseRefName
  headRefName
  isDraft
  merged
  mergeable
  labels(first: 100) { nodes { name } }
  createdAt
  updatedAt
  mergedAt
  closedAt
}
"""

REVIEW_FIELDS = """
fragment ReviewFields on PullRequestReview {
  id
  state
  body
  url
  author { login }
  submittedAt
}
"""

PROJECT_FIELDS = """
fragment ProjectFields on ProjectV2 {
  id
  number
  title
  shortDescription
  url
  closed
  public
  createdAt
  updatedAt
}
"""

ORGANIZATION_FIELDS = """
fragment OrganizationFields on Organization {
  id
  login
  name
  description
  url
}
"""

SEARCH_TOTALS = {
    "ISSUE": "issueCount",
    "REPOSITORY": "repositoryCount",
    "USER": "userCount",
    "DISCUSSION": "discussionCount",
}

# Search nodes share one selection set, where same-named fields must have
# the same type: Issue.state vs PullRequest.state, Repository.name vs User.name.
SEARCH_ALIASES = {
    "PullRequest": {"state": "pullRequestState"},
    "User": {"name": "userName"},
}


def _search_fragment(fragment: str, aliases: dict[str, str]) -> str:
    """Copy of `fragment` named Search<Name>, with `aliases` applied to top-level fields."""
    text = fragment.replace("fragment ", "fragment Search", 1)
    for field_name, alias in aliases.items():
        text = re.sub(rf"^  {field_name}$", f"  {alias}: {field_name}", text, count=1, flags=re.MULTILINE)
    return text


SEARCH_PULL_REQUEST_FIELDS = _search_fragment(PULL_REQUEST_FIELDS, SEARCH_ALIASES["PullRequest"])
SEARCH_USER_FIELDS = _search_fragment(USER_FIELDS, SEARCH_ALIASES["User"])


def _document(body: str, *fragments: str) -> str:
    return body.strip() + "\n" + "".join(fragments)


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def _root(target: Target) -> tuple[str, str]:
    """Variable declarations and root selection for an owner/repo variant."""
    names = list(target.variables())
    declarations = ", ".join(f"${n}: String!" for n in names)
    arguments = ", ".join(f"{n}: ${n}" for n in names)
    return declarations, f"{target.root_field}({arguments})"


def _page_vars(target: Target, first: int, after: str | None, **extra: Any) -> dict[str, Any]:
    return _compact({**target.variables(), "first": first, "after": after, **extra})


# --- Viewer / users ---


def viewer() -> Request:
    return _document("query Viewer { viewer { ...UserFields } }", USER_FIELDS), {}


def user(login: str) -> Request:
    return (
        _document("query GetUser($login: String!) { user(login: $login) { ...UserFields } }", USER_FIELDS),
        {"login": login},
    )


def rate_limit() -> Request:
    return "query RateLimit { rateLimit { limit remaining used cost resetAt } }", {}


# --- Repositories ---


def repository(target: RepoTarget) -> Request:
    declarations, root = _root(target)
    body = f"query GetRepository({declarations}) {{ {root} {{ ...RepositoryFields }} }}"
    return _document(body, REPOSITORY_FIELDS), target.variables()


def repositories(owner: Owner, first: int, after: str | None, privacy: str | None = None) -> Request:
    declarations, root = _root(owner)
    body = f"""
query ListRepositories({declarations}, $first: Int!, $after: String, $privacy: RepositoryPrivacy) {{
  {root} {{
    repositories(first: $first, after: $after, privacy: $privacy,
                 orderBy: {{field: UPDATED_AT, direction: DESC}}) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...RepositoryFields }}
    }}
  }}
}}"""
    return _document(body, REPOSITORY_FIELDS), _page_vars(owner, first, after, privacy=privacy)


def create_repository(
    name: str,
    visibility: str,
    description: str | None,
    owner_id: str | None,
    has_issues: bool,
) -> Request:
    body = """
mutation CreateRepository($input: CreateRepositoryInput!) {
  createRepository(input: $input) { repository { ...RepositoryFields } }
}"""
    input_ = _compact(
        {
            "name": name,
            "visibility": visibility,
            "description": description,
            "ownerId": owner_id,
            "hasIssuesEnabled": has_issues,
        }
    )
    return _document(body, REPOSITORY_FIELDS), {"input": input_}


def update_repository(repository_id: str, **fields: Any) -> Request:
    body = """
mutation UpdateRepository($input: UpdateRepositoryInput!) {
  updateRepository(input: $input) { repository { ...RepositoryFields } }
}"""
    input_ = _compact(
        {
            "repositoryId": repository_id,
            "name": fields.get("name"),
            "description": fields.get("description"),
            "homepageUrl": fields.get("homepage_url"),
            "hasIssuesEnabled": fields.get("has_issues"),
        }
    )
    return _document(body, REPOSITORY_FIELDS), {"input": input_}


def archive_repository(repository_id: str, archived: bool = True) -> Request:
    mutation = "archiveRepository" if archived else "unarchiveRepository"
    name = "ArchiveRepository" if archived else "UnarchiveRepository"
    body = f"""
mutation {name}($input: {name}Input!) {{
  {mutation}(input: $input) {{ repository {{ ...RepositoryFields }} }}
}}"""
    return _document(body, REPOSITORY_FIELDS), {"input": {"repositoryId": repository_id}}


def collaborators(target: RepoTarget, first: int, after: str | None) -> Request:
    declarations, root = _root(target)
    body = f"""
query ListCollaborators({declarations}, $first: Int!, $after: String) {{
  {root} {{
    collaborators(first: $first, after: $after) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...UserFields }}
    }}
  }}
}}"""
    return _document(body, USER_FIELDS), _page_vars(target, first, after)


def branches(target: RepoTarget, first: int, after: str | None) -> Request:
    declarations, root = _root(target)
    body = f"""
query ListBranches({declarations}, $first: Int!, $after: String) {{
  {root} {{
    refs(refPrefix: "refs/heads/", first: $first, after: $after) {{
      totalCount
      {PAGE_INFO}
      nodes {{ name target {{ oid }} }}
    }}
  }}
}}"""
    return body.strip(), _page_vars(target, first, after)


# --- Issues and comments ---


def issue(target: RepoTarget, number: int) -> Request:
    declarations, root = _root(target)
    body = f"query GetIssue({declarations}, $number: Int!) {{ {root} {{ issue(number: $number) {{ ...IssueFields }} }} }}"
    return _document(body, ISSUE_FIELDS), {**target.variables(), "number": number}


def issues(
    target: RepoTarget,
    first: int,
    after: str | None,
    states: list[str] | None = None,
    labels: list[str] | None = None,
) -> Request:
    declarations, root = _root(target)
    body = f"""
query ListIssues({declarations}, $first: Int!, $after: String, $states: [IssueState!], $labels: [String!]) {{
  {root} {{
    issues(first: $first, after: $after, states: $states, labels: $labels,
           orderBy: {{field: CREATED_AT, direction: DESC}}) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...IssueFields }}
    }}
  }}
}}"""
    return _document(body, ISSUE_FIELDS), _page_vars(target, first, after, states=states, labels=labels)


def create_issue(
    repository_id: str,
    title: str,
    body: str | None = None,
    label_ids: list[str] | None = None,
    assignee_ids: list[str] | None = None,
    milestone_id: str | None = None,
) -> Request:
    document = """
mutation CreateIssue($input: CreateIssueInput!) {
  createIssue(input: $input) { issue { ...IssueFields } }
}"""
    input_ = _compact(
        {
            "repositoryId": repository_id,
            "title": title,
            "body": body,
            "labelIds": label_ids,
            "assigneeIds": assignee_ids,
            "milestoneId": milestone_id,
        }
    )
    return _document(document, ISSUE_FIELDS), {"input": input_}


def update_issue(issue_id: str, **fields: Any) -> Request:
    document = """
mutation UpdateIssue($input: UpdateIssueInput!) {
  updateIssue(input: $input) { issue { ...IssueFields } }
}"""
    input_ = _compact(
        {
            "id": issue_id,
            "title": fields.get("title"),
            "body": fields.get("body"),
            "state": fields.get("state"),
            "labelIds": fields.get("label_ids"),
            "assigneeIds": fields.get("assignee_ids"),
            "milestoneId": fields.get("milestone_id"),
        }
    )
    return _document(document, ISSUE_FIELDS), {"input": input_}


def close_issue(issue_id: str) -> Request:
    document = """
mutation CloseIssue($input: CloseIssueInput!) {
  closeIssue(input: $input) { issue { ...IssueFields } }
}"""
    return _document(document, ISSUE_FIELDS), {"input": {"issueId": issue_id}}


def reopen_issue(issue_id: str) -> Request:
    document = """
mutation ReopenIssue($input: ReopenIssueInput!) {
  reopenIssue(input: $input) { issue { ...IssueFields } }
}"""
    return _document(document, ISSUE_FIELDS), {"input": {"issueId": issue_id}}


def delete_issue(issue_id: str) -> Request:
    document = """
mutation DeleteIssue($input: DeleteIssueInput!) {
  deleteIssue(input: $input) { clientMutationId }
}"""
    return document.strip(), {"input": {"issueId": issue_id}}


def issue_comments(target: RepoTarget, number: int, first: int, after: str | None) -> Request:
    declarations, root = _root(target)
    body = f"""
query ListIssueComments({declarations}, $number: Int!, $first: Int!, $after: String) {{
  {root} {{
    issue(number: $number) {{
      comments(first: $first, after: $after) {{
        totalCount
        {PAGE_INFO}
        nodes {{ ...CommentFields }}
      }}
    }}
  }}
}}"""
    return _document(body, COMMENT_FIELDS), _page_vars(target, first, after, number=number)


def add_comment(subject_id: str, body: str) -> Request:
    document = """
mutation AddComment($input: AddCommentInput!) {
  addComment(input: $input) { commentEdge { node { ...CommentFields } } }
}"""
    return _document(document, COMMENT_FIELDS), {"input": {"subjectId": subject_id, "body": body}}


def update_comment(comment_id: str, body: str) -> Request:
    document = """
mutation UpdateComment($input: UpdateIssueCommentInput!) {
  updateIssueComment(input: $input) { issueComment { ...CommentFields } }
}"""
    return _document(document, COMMENT_FIELDS), {"input": {"id": comment_id, "body": body}}


def delete_comment(comment_id: str) -> Request:
    document = """
mutation DeleteComment($input: DeleteIssueCommentInput!) {
  deleteIssueComment(input: $input) { clientMutationId }
}"""
    return document.strip(), {"input": {"id": comment_id}}


# --- Labels ---


def label(target: RepoTarget, name: str) -> Request:
    declarations, root = _root(target)
    # $name is taken by the repository name
    body = f"query GetLabel({declarations}, $labelName: String!) {{ {root} {{ label(name: $labelName) {{ ...LabelFields }} }} }}"
    return _document(body, LABEL_FIELDS), {**target.variables(), "labelName": name}


def labels(target: RepoTarget, first: int, after: str | None) -> Request:
    declarations, root = _root(target)
    body = f"""
query ListLabels({declarations}, $first: Int!, $after: String) {{
  {root} {{
    labels(first: $first, after: $after, orderBy: {{field: NAME, direction: ASC}}) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...LabelFields }}
    }}
  }}
}}"""
    return _document(body, LABEL_FIELDS), _page_vars(target, first, after)


def create_label(repository_id: str, name: str, color: str, description: str | None = None) -> Request:
    document = """
mutation CreateLabel($input: CreateLabelInput!) {
  createLabel(input: $input) { label { ...LabelFields } }
}"""
    input_ = _compact(
        {
            "repositoryId": repository_id,
            "name": name,
            "color": color.lstrip("#"),
            "description": description,
        }
    )
    return _document(document, LABEL_FIELDS), {"input": input_}


def update_label(
    label_id: str,
    name: str | None = None,
    color: str | None = None,
    description: str | None = None,
) -> Request:
    document = """
mutation UpdateLabel($input: UpdateLabelInput!) {
  updateLabel(input: $input) { label { ...LabelFields } }
}"""
    input_ = _compact(
        {
            "id": label_id,
            "name": name,
            "color": color.lstrip("#") if color else None,
            "description": description,
        }
    )
    return _document(document, LABEL_FIELDS), {"input": input_}


def delete_label(label_id: str) -> Request:
    document = """
mutation DeleteLabel($input: DeleteLabelInput!) {
  deleteLabel(input: $input) { clientMutationId }
}"""
    return document.strip(), {"input": {"id": label_id}}


def add_labels(labelable_id: str, label_ids: list[str]) -> Request:
    document = """
mutation AddLabels($input: AddLabelsToLabelableInput!) {
  addLabelsToLabelable(input: $input) { clientMutationId }
}"""
    return document.strip(), {"input": {"labelableId": labelable_id, "labelIds": list(label_ids)}}


def remove_labels(labelable_id: str, label_ids: list[str]) -> Request:
    document = """
mutation RemoveLabels($input: RemoveLabelsFromLabelableInput!) {
  removeLabelsFromLabelable(input: $input) { clientMutationId }
}"""
    return document.strip(), {"input": {"labelableId": labelable_id, "labelIds": list(label_ids)}}


# --- Milestones ---


def milestone(target: RepoTarget, number: int) -> Request:
    declarations, root = _root(target)
    body = f"query GetMilestone({declarations}, $number: Int!) {{ {root} {{ milestone(number: $number) {{ ...MilestoneFields }} }} }}"
    return _document(body, MILESTONE_FIELDS), {**target.variables(), "number": number}


def milestones(
    target: RepoTarget, first: int, after: str | None, states: list[str] | None = None
) -> Request:
    declarations, root = _root(target)
    body = f"""
query ListMilestones({declarations}, $first: Int!, $after: String, $states: [MilestoneState!]) {{
  {root} {{
    milestones(first: $first, after: $after, states: $states,
               orderBy: {{field: DUE_DATE, direction: ASC}}) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...MilestoneFields }}
    }}
  }}
}}"""
    return _document(body, MILESTONE_FIELDS), _page_vars(target, first, after, states=states)


# --- Pull requests and reviews ---


def pull_request(target: RepoTarget, number: int) -> Request:
    declarations, root = _root(target)
    body = f"query GetPullRequest({declarations}, $number: Int!) {{ {root} {{ pullRequest(number: $number) {{ ...PullRequestFields }} }} }}"
    return _document(body, PULL_REQUEST_FIELDS), {**target.variables(), "number": number}


def pull_requests(
    target: RepoTarget,
    first: int,
    after: str | None,
    states: list[str] | None = None,
    base_ref: str | None = None,
) -> Request:
    declarations, root = _root(target)
    body = f"""
query ListPullRequests({declarations}, $first: Int!, $after: String, $states: [PullRequestState!], $baseRefName: String) {{
  {root} {{
    pullRequests(first: $first, after: $after, states: $states, baseRefName: $baseRefName,
                 orderBy: {{field: CREATED_AT, direction: DESC}}) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...PullRequestFields }}
    }}
  }}
}}"""
    variables = _page_vars(target, first, after, states=states, baseRefName=base_ref)
    return _document(body, PULL_REQUEST_FIELDS), variables


def create_pull_request(
    repository_id: str,
    base_ref: str,
    head_ref: str,
    title: str,
    body: str | None = None,
    draft: bool = False,
) -> Request:
    document = """
mutation CreatePullRequest($input: CreatePullRequestInput!) {
  createPullRequest(input: $input) { pullRequest { ...PullRequestFields } }
}"""
    input_ = _compact(
        {
            "repositoryId": repository_id,
            "baseRefName": base_ref,
            "headRefName": head_ref,
            "title": title,
            "body": body,
            "draft": draft,
        }
    )
    return _document(document, PULL_REQUEST_FIELDS), {"input": input_}


def update_pull_request(pull_request_id: str, **fields: Any) -> Request:
    document = """
mutation UpdatePullRequest($input: UpdatePullRequestInput!) {
  updatePullRequest(input: $input) { pullRequest { ...PullRequestFields } }
}"""
    input_ = _compact(
        {
            "pullRequestId": pull_request_id,
            "title": fields.get("title"),
            "body": fields.get("body"),
            "baseRefName": fields.get("base_ref"),
            "state": fields.get("state"),
        }
    )
    return _document(document, PULL_REQUEST_FIELDS), {"input": input_}


def merge_pull_request(
    pull_request_id: str, method: str = "MERGE", commit_headline: str | None = None
) -> Request:
    document = """
mutation MergePullRequest($input: MergePullRequestInput!) {
  mergePullRequest(input: $input) { pullRequest { ...PullRequestFields } }
}"""
    input_ = _compact(
        {
            "pullRequestId": pull_request_id,
            "mergeMethod": method,
            "commitHeadline": commit_headline,
        }
    )
    return _document(document, PULL_REQUEST_FIELDS), {"input": input_}


def close_pull_request(pull_request_id: str) -> Request:
    document = """
mutation ClosePullRequest($input: ClosePullRequestInput!) {
  closePullRequest(input: $input) { pullRequest { ...PullRequestFields } }
}"""
    return _document(document, PULL_REQUEST_FIELDS), {"input": {"pullRequestId": pull_request_id}}


def reviews(target: RepoTarget, number: int, first: int, after: str | None) -> Request:
    declarations, root = _root(target)
    body = f"""
query ListReviews({declarations}, $number: Int!, $first: Int!, $after: String) {{
  {root} {{
    pullRequest(number: $number) {{
      reviews(first: $first, after: $after) {{
        totalCount
        {PAGE_INFO}
        nodes {{ ...ReviewFields }}
      }}
    }}
  }}
}}"""
    return _document(body, REVIEW_FIELDS), _page_vars(target, first, after, number=number)


def add_review(pull_request_id: str, event: str = "COMMENT", body: str | None = None) -> Request:
    document = """
mutation AddReview($input: AddPullRequestReviewInput!) {
  addPullRequestReview(input: $input) { pullRequestReview { ...ReviewFields } }
}"""
    input_ = _compact({"pullRequestId": pull_request_id, "event": event, "body": body})
    return _document(document, REVIEW_FIELDS), {"input": input_}


def request_reviews(pull_request_id: str, user_ids: list[str]) -> Request:
    document = """
mutation RequestReviews($input: RequestReviewsInput!) {
  requestReviews(input: $input) { pullRequest { ...PullRequestFields } }
}"""
    input_ = {"pullRequestId": pull_request_id, "userIds": list(user_ids)}
    return _document(document, PULL_REQUEST_FIELDS), {"input": input_}


# --- Projects (v2) ---


def project(owner: Owner, number: int) -> Request:
    declarations, root = _root(owner)
    body = f"query GetProject({declarations}, $number: Int!) {{ {root} {{ projectV2(number: $number) {{ ...ProjectFields }} }} }}"
    return _document(body, PROJECT_FIELDS), {**owner.variables(), "number": number}


def projects(owner: Owner, first: int, after: str | None) -> Request:
    declarations, root = _root(owner)
    body = f"""
query ListProjects({declarations}, $first: Int!, $after: String) {{
  {root} {{
    projectsV2(first: $first, after: $after) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...ProjectFields }}
    }}
  }}
}}"""
    return _document(body, PROJECT_FIELDS), _page_vars(owner, first, after)


def create_project(owner_id: str, title: str) -> Request:
    document = """
mutation CreateProject($input: CreateProjectV2Input!) {
  createProjectV2(input: $input) { projectV2 { ...ProjectFields } }
}"""
    return _document(document, PROJECT_FIELDS), {"input": {"ownerId": owner_id, "title": title}}


def update_project(project_id: str, **fields: Any) -> Request:
    document = """
mutation UpdateProject($input: UpdateProjectV2Input!) {
  updateProjectV2(input: $input) { projectV2 { ...ProjectFields } }
}"""
    input_ = _compact(
        {
            "projectId": project_id,
            "title": fields.get("title"),
            "shortDescription": fields.get("short_description"),
            "closed": fields.get("closed"),
            "public": fields.get("public"),
        }
    )
    return _document(document, PROJECT_FIELDS), {"input": input_}


def delete_project(project_id: str) -> Request:
    document = """
mutation DeleteProject($input: DeleteProjectV2Input!) {
  deleteProjectV2(input: $input) { projectV2 { id } }
}"""
    return document.strip(), {"input": {"projectId": project_id}}


def add_project_item(project_id: str, content_id: str) -> Request:
    document = """
mutation AddProjectItem($input: AddProjectV2ItemByIdInput!) {
  addProjectV2ItemById(input: $input) {
    item {
      id
      type
      content {
        ... on Issue { id }
        ... on PullRequest { id }
        ... on DraftIssue { id }
      }
    }
  }
}"""
    return document.strip(), {"input": {"projectId": project_id, "contentId": content_id}}


# --- Organizations ---


def organization(login: str) -> Request:
    body = "query GetOrganization($login: String!) { organization(login: $login) { ...OrganizationFields } }"
    return _document(body, ORGANIZATION_FIELDS), {"login": login}


def organizations(owner: Owner | None, first: int, after: str | None) -> Request:
    if owner is None:
        declarations, root, variables = "", "viewer", {}
    else:
        declarations, root = _root(owner)
        declarations += ", "
        variables = owner.variables()
    body = f"""
query ListOrganizations({declarations}$first: Int!, $after: String) {{
  {root} {{
    organizations(first: $first, after: $after) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...OrganizationFields }}
    }}
  }}
}}"""
    return _document(body, ORGANIZATION_FIELDS), _compact({**variables, "first": first, "after": after})


def members(org: Owner, first: int, after: str | None) -> Request:
    declarations, root = _root(org)
    body = f"""
query ListMembers({declarations}, $first: Int!, $after: String) {{
  {root} {{
    membersWithRole(first: $first, after: $after) {{
      totalCount
      {PAGE_INFO}
      nodes {{ ...UserFields }}
    }}
  }}
}}"""
    return _document(body, USER_FIELDS), _page_vars(org, first, after)


# --- Search ---


def search(query: str, kind: str, first: int, after: str | None) -> Request:
    if kind not in SEARCH_TOTALS:
        raise ValueError(f"Unknown search type {kind!r}; expected one of {sorted(SEARCH_TOTALS)}")
    body = f"""
query Search($query: String!, $type: SearchType!, $first: Int!, $after: String) {{
  search(query: $query, type: $type, first: $first, after: $after) {{
    totalCount: {SEARCH_TOTALS[kind]}
    {PAGE_INFO}
    nodes {{
      __typename
      ... on Issue {{ ...IssueFields }}
      ... on PullRequest {{ ...SearchPullRequestFields }}
      ... on Repository {{ ...RepositoryFields }}
      ... on User {{ ...SearchUserFields }}
      ... on Organization {{ login url }}
    }}
  }}
}}"""
    fragments = (ISSUE_FIELDS, SEARCH_PULL_REQUEST_FIELDS, REPOSITORY_FIELDS, SEARCH_USER_FIELDS)
    return _document(body, *fragments), _compact(
        {"query": query, "type": kind, "first": first, "after": after}
    )
