"""Tests for ghgraph.github.transport: HTTP and GraphQL error mapping (no network)."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from ghgraph.errors import GitHubError, GraphQLError, NotFoundError, SchemaError, TransportError
from ghgraph.github.transport import GraphQLTransport, operation_name


def _response(status: int = 200, body=None, json_error: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.text = "<html>Bad gateway</html>" if json_error else ""
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = body
    return response


def _transport(response=None, token: str = "ghp_test", **kwargs) -> tuple[GraphQLTransport, MagicMock]:
    session = MagicMock()
    session.headers = {}
    if isinstance(response, Exception):
        session.post.side_effect = response
    else:
        session.post.return_value = response
    return GraphQLTransport(token=token, session=session, **kwargs), session


class TestSuccess:
    def test_returns_data_object(self):
        transport, _ = _transport(_response(body={"data": {"viewer": {"login": "octocat"}}}))
        assert transport.execute("query Viewer { viewer { login } }") == {"viewer": {"login": "octocat"}}

    def test_posts_query_and_variables(self):
        transport, session = _transport(_response(body={"data": {}}), timeout=5.0)
        transport.execute("query GetUser($login: String!) { user(login: $login) { id } }", {"login": "x"})
        args, kwargs = session.post.call_args
        assert args[0] == "https://api.github.com/graphql"
        assert kwargs["json"]["variables"] == {"login": "x"}
        assert kwargs["timeout"] == 5.0

    def test_omits_empty_variables(self):
        transport, session = _transport(_response(body={"data": {}}))
        transport.execute("query { viewer { login } }")
        assert "variables" not in session.post.call_args.kwargs["json"]

    def test_custom_endpoint(self):
        transport, session = _transport(
            _response(body={"data": {}}), endpoint="https://ghe.example.com/api/graphql"
        )
        transport.execute("query { viewer { login } }")
        assert session.post.call_args.args[0] == "https://ghe.example.com/api/graphql"


class TestHeaders:
    def test_bearer_token(self):
        _, session = _transport(token="ghp_abc")
        assert session.headers["Authorization"] == "Bearer ghp_abc"

    def test_empty_token_sends_no_authorization(self):
        _, session = _transport(token="")
        assert "Authorization" not in session.headers
        assert session.headers["User-Agent"] == "ghgraph"


class TestTransportErrors:
    def test_connection_error(self):
        transport, _ = _transport(requests.ConnectionError("connection refused"))
        with pytest.raises(TransportError, match="connection refused"):
            transport.execute("query Viewer { viewer { login } }")

    def test_timeout(self):
        transport, _ = _transport(requests.Timeout("read timed out"))
        with pytest.raises(TransportError):
            transport.execute("query Viewer { viewer { login } }")

    def test_unauthorized_keeps_payload_and_status(self):
        body = {"message": "Bad credentials", "documentation_url": "https://docs.github.com/graphql"}
        transport, _ = _transport(_response(401, body))
        with pytest.raises(TransportError) as exc_info:
            transport.execute("query Viewer { viewer { login } }")
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Bad credentials"
        assert exc_info.value.payload == body

    def test_non_json_body(self):
        transport, _ = _transport(_response(502, json_error=True))
        with pytest.raises(TransportError) as exc_info:
            transport.execute("query Viewer { viewer { login } }")
        assert exc_info.value.status_code == 502
        assert "Bad gateway" in exc_info.value.payload

    def test_all_errors_share_base_class(self):
        transport, _ = _transport(_response(500, {"message": "boom"}))
        with pytest.raises(GitHubError):
            transport.execute("query { viewer { login } }")


class TestGraphQLErrors:
    def test_errors_array_raises(self):
        body = {"data": None, "errors": [{"type": "FORBIDDEN", "message": "Resource not accessible"}]}
        transport, _ = _transport(_response(body=body))
        with pytest.raises(GraphQLError) as exc_info:
            transport.execute("mutation CreateIssue { createIssue { clientMutationId } }")
        err = exc_info.value
        assert not isinstance(err, NotFoundError)
        assert "CreateIssue: Resource not accessible" in str(err)
        assert err.types == ["FORBIDDEN"]
        assert err.errors == body["errors"]

    def test_not_found(self):
        body = {
            "data": {"repository": None},
            "errors": [{"type": "NOT_FOUND", "path": ["repository"], "message": "Could not resolve"}],
        }
        transport, _ = _transport(_response(body=body))
        with pytest.raises(NotFoundError):
            transport.execute("query GetRepository { repository { id } }")

    def test_mixed_error_types_are_not_not_found(self):
        body = {"errors": [{"type": "NOT_FOUND", "message": "a"}, {"message": "b"}]}
        transport, _ = _transport(_response(body=body))
        with pytest.raises(GraphQLError) as exc_info:
            transport.execute("query { viewer { login } }")
        assert not isinstance(exc_info.value, NotFoundError)

    def test_errors_raise_even_with_partial_data(self):
        body = {"data": {"viewer": {"login": "octocat"}}, "errors": [{"message": "partial"}]}
        transport, _ = _transport(_response(body=body))
        with pytest.raises(GraphQLError):
            transport.execute("query { viewer { login } }")


class TestSchemaErrors:
    def test_missing_data(self):
        transport, _ = _transport(_response(body={"something": "else"}))
        with pytest.raises(SchemaError):
            transport.execute("query { viewer { login } }")

    def test_null_data_without_errors(self):
        transport, _ = _transport(_response(body={"data": None}))
        with pytest.raises(SchemaError):
            transport.execute("query { viewer { login } }")

    def test_body_not_an_object(self):
        transport, _ = _transport(_response(body=["not", "an", "object"]))
        with pytest.raises(SchemaError):
            transport.execute("query { viewer { login } }")


class TestOperationName:
    def test_named_query(self):
        assert operation_name("query ListIssues($first: Int!) { x }") == "ListIssues"

    def test_named_mutation_with_leading_whitespace(self):
        assert operation_name("\n  mutation AddComment($input: AddCommentInput!) { x }") == "AddComment"

    def test_anonymous(self):
        assert operation_name("{ viewer { login } }") == "anonymous"


def test_close_closes_session():
    transport, session = _transport()
    transport.close()
    session.close.assert_called_once()
