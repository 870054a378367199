"""Tests for scripts/smoke_github.py, run against a fake transport."""

from __future__ import annotations

import importlib.util
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from factories import user_node
from ghgraph.client import GitHubGraphQL
from ghgraph.errors import NotFoundError

SCRIPT = Path(__file__).parent.parent / "scripts" / "smoke_github.py"


@pytest.fixture
def smoke():
    spec = importlib.util.spec_from_file_location("smoke_github", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _run(smoke, transport, argv):
    def factory(config):
        return GitHubGraphQL(config, transport=transport)

    with patch.dict(os.environ, {"GHGRAPH_TOKEN": "ghp_x"}), patch.object(
        smoke, "GitHubGraphQL", side_effect=factory
    ), patch.object(sys, "argv", argv):
        smoke.main()


def test_missing_repo_exits_with_message(smoke, transport, capsys):
    transport.queue(
        {"viewer": user_node("octocat")},
        NotFoundError("GetRepository: Could not resolve to a Repository with the name 'acme/gone'."),
    )
    with pytest.raises(SystemExit) as exc_info:
        _run(smoke, transport, ["smoke_github.py", "acme/gone"])
    assert exc_info.value.code == 1
    assert "acme/gone not found" in capsys.readouterr().out
    assert transport.closed


def test_null_repo_exits_with_message(smoke, transport, capsys):
    transport.queue({"viewer": user_node("octocat")}, {"repository": None})
    with pytest.raises(SystemExit):
        _run(smoke, transport, ["smoke_github.py", "acme/hidden"])
    assert "acme/hidden not found" in capsys.readouterr().out
