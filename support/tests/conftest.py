"""
Shared pytest fixtures and configuration for the linear-cli test suite.

This module provides:
- Marker registration and a test-mode environment (plain tables, no real key)
- A LinearClient whose gql client is replaced by a MagicMock
- Sample workspace data: teams, projects and issues shaped like API responses

Usage:
    Fixtures are automatically discovered by pytest.
"""

from unittest.mock import MagicMock

import pytest

from linear_cli.api.client import LinearClient
from linear_cli.config import LinearCliConfig

LINEAR_ENV_VARS = [
    "LINEAR_API_KEY",
    "LINEAR_API_URL",
    "LINEAR_DEFAULT_TEAM",
    "LINEAR_CLI_CONFIG",
    "LINEAR_LOG_LEVEL",
]


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, mocked)")
    config.addinivalue_line("markers", "cli: Tests driving linear_cli.cli.main end to end")


@pytest.fixture(autouse=True)
def linear_test_env(monkeypatch):
    """Isolate every test from the developer's Linear settings."""
    for name in LINEAR_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LINEAR_CLI_ENV", "test")


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def linear_client():
    """LinearClient in safe mode with a mocked gql client."""
    client = LinearClient("lin_api_test_key")
    client.client = MagicMock()
    return client


@pytest.fixture
def mutable_client():
    """LinearClient with safe mode disabled and a mocked gql client."""
    client = LinearClient("lin_api_test_key", safe_mode=False)
    client.client = MagicMock()
    return client


@pytest.fixture
def cli_config():
    return LinearCliConfig(api_key="lin_api_test_key")


# ============================================================================
# Sample Workspace Data
# ============================================================================


def _make_issue(
    identifier,
    team=("team-eng", "Engineering"),
    state="Todo",
    assignee=None,
    project=None,
    labels=(),
    estimate=None,
    created_at="2024-01-10T09:00:00.000Z",
    completed_at=None,
    started_at=None,
):
    """Build an issue dict the way the analytics query returns it."""
    return {
        "id": f"uuid-{identifier}",
        "identifier": identifier,
        "title": f"Issue {identifier}",
        "state": {"name": state},
        "team": {"id": team[0], "name": team[1]} if team else None,
        "assignee": {"id": assignee[0], "name": assignee[1], "email": assignee[2]} if assignee else None,
        "project": {"id": project[0], "name": project[1]} if project else None,
        "labels": {"nodes": [{"name": name} for name in labels]},
        "estimate": estimate,
        "createdAt": created_at,
        "startedAt": started_at,
        "completedAt": completed_at,
    }


ALICE = ("user-alice", "Alice", "alice@example.com")
BOB = ("user-bob", "Bob", "bob@example.com")


@pytest.fixture
def make_issue():
    """Factory for issue dicts shaped like analytics query nodes."""
    return _make_issue


@pytest.fixture
def sample_teams():
    return [
        {"id": "team-eng", "name": "Engineering", "key": "ENG"},
        {"id": "team-des", "name": "Design", "key": "DES"},
    ]


@pytest.fixture
def sample_projects():
    return [
        {
            "id": "proj-platform",
            "name": "Platform Rebuild",
            "state": "started",
            "labels": {"nodes": [{"name": "CapEx"}]},
            "teams": {"nodes": [{"id": "team-eng", "name": "Engineering"}]},
        },
        {
            "id": "proj-brand",
            "name": "Brand Refresh",
            "state": "planned",
            "labels": {"nodes": []},
            "teams": {"nodes": [{"id": "team-des", "name": "Design"}]},
        },
    ]


@pytest.fixture
def sample_issues():
    return [
        _make_issue("ENG-1", state="Done", assignee=ALICE, project=("proj-platform", "Platform Rebuild"),
                    estimate=3, completed_at="2024-02-01T12:00:00.000Z"),
        _make_issue("ENG-2", state="In Progress", assignee=ALICE, labels=("Bug",), estimate=2),
        _make_issue("ENG-3", state="Todo", assignee=BOB, labels=("capitalization",), estimate=5),
        _make_issue("DES-1", team=("team-des", "Design"), state="Done", assignee=BOB,
                    project=("proj-brand", "Brand Refresh"), estimate=1,
                    completed_at="2024-02-03T12:00:00.000Z"),
        _make_issue("DES-2", team=("team-des", "Design"), state="Todo"),
    ]
