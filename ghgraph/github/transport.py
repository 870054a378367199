"""Thin wrapper around requests for authenticated GitHub GraphQL calls."""

from __future__ import annotations

import logging
import re
from typing import Any

import requests

from ghgraph.config import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT
from ghgraph.errors import GraphQLError, NotFoundError, SchemaError, TransportError

logger = logging.getLogger(__name__)

_OPERATION_RE = re.compile(r"^\s*(query|mutation)\s+(\w+)")


def operation_name(document: str) -> str:
    """Return the operation name of a GraphQL document, or "anonymous"."""
    match = _OPERATION_RE.match(document)
    return match.group(2) if match else "anonymous"


class GraphQLTransport:
    """Sends GraphQL documents to a single endpoint over one HTTP session.

    Usage:
        transport = GraphQLTransport(token="ghp_...")
        data = transport.execute("query { viewer { login } }")
        data["viewer"]["login"]

    An empty token is accepted; GitHub rejects the request on first use.
    """

    def __init__(
        self,
        token: str = "",
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "ghgraph",
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Content-Type": "application/json",
                "User-Agent": user_agent,
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def execute(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST a query or mutation and return the response's `data` object.

        Raises TransportError for network/HTTP failures, GraphQLError (or
        NotFoundError) when the response lists errors, and SchemaError when
        the body is not a GraphQL response.
        """
        name = operation_name(document)
        payload: dict[str, Any] = {"query": document}
        if variables:
            payload["variables"] = variables
        logger.debug(f"POST {self.endpoint} operation={name} variables={sorted(variables or {})}")

        try:
            response = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request for {name} failed: {e}")
            raise TransportError(f"Request for {name} failed: {e}") from e

        body = _decode_body(response, name)

        if not 200 <= response.status_code < 300:
            message = body.get("message") if isinstance(body, dict) else None
            logger.warning(f"{name} returned HTTP {response.status_code}")
            raise TransportError(
                message or f"{name} returned HTTP {response.status_code}",
                payload=body,
                status_code=response.status_code,
            )

        if not isinstance(body, dict):
            raise SchemaError(f"{name} response is not a JSON object", payload=body)

        errors = body.get("errors")
        if errors:
            raise _graphql_error(name, body, response.status_code)

        if "data" not in body or body["data"] is None:
            raise SchemaError(f"{name} response has no data", payload=body)
        if not isinstance(body["data"], dict):
            raise SchemaError(f"{name} response data is not an object", payload=body)

        return body["data"]

    def close(self) -> None:
        self._session.close()


def _decode_body(response: requests.Response, name: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        text = response.text[:500] if response.text else ""
        logger.warning(f"{name} returned a non-JSON body (HTTP {response.status_code})")
        raise TransportError(
            f"{name} returned a non-JSON body",
            payload=text,
            status_code=response.status_code,
        ) from e


def _graphql_error(name: str, body: dict[str, Any], status_code: int) -> GraphQLError:
    errors = body["errors"] if isinstance(body["errors"], list) else [body["errors"]]
    messages = [
        e.get("message", "unknown error") if isinstance(e, dict) else str(e) for e in errors
    ]
    message = f"{name}: " + "; ".join(messages)
    types = [e.get("type") for e in errors if isinstance(e, dict)]
    if types and len(types) == len(errors) and all(t == "NOT_FOUND" for t in types):
        logger.debug(message)
        return NotFoundError(message, payload=body, status_code=status_code)
    logger.warning(message)
    return GraphQLError(message, payload=body, status_code=status_code)
