"""
Data Fetcher - full workspace snapshots for analytics

Every fetch walks all pages of its connection. Issues are filtered by team on
the server; projects can span several teams and Linear cannot filter them by
team, so they are filtered here after fetching.
"""

import logging
from typing import Any, Dict, List, Optional

from linear_cli.api.client import LinearClient
from linear_cli.api.queries import analytics as analytics_queries
from linear_cli.api.queries.issues import build_issue_filter
from linear_cli.records import nodes

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


class DataFetcher:
    """Fetch teams, projects and issues for analytics commands."""

    def __init__(self, client: LinearClient, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def _fetch_all(self, document: str, nodes_path: str, **variables: Any) -> List[Dict[str, Any]]:
        variables["first"] = self.page_size
        items = self.client.fetch_paginated(document, variables, nodes_path, fetch_all=True)
        logger.info(f"Fetched {len(items)} {nodes_path}")
        return items

    def fetch_teams(self) -> List[Dict[str, Any]]:
        return self._fetch_all(analytics_queries.LIST_TEAMS, "teams")

    def fetch_team_by_name(self, team_name: str) -> Optional[Dict[str, Any]]:
        """Find a team by name (case insensitive); None when there is no match."""
        wanted = team_name.lower()
        for team in self.fetch_teams():
            if (team.get("name") or "").lower() == wanted:
                return team
        return None

    def fetch_projects(self, team_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch projects, optionally keeping only those linked to team_id.

        Args:
            team_id: Team UUID to scope to

        Returns:
            List of project dicts
        """
        projects = self._fetch_all(analytics_queries.LIST_PROJECTS, "projects")
        if not team_id:
            return projects
        return [p for p in projects if any(t["id"] == team_id for t in nodes(p, "teams"))]

    def fetch_issues(self, team_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch issues, optionally scoped to one team.

        Args:
            team_id: Team UUID to scope to

        Returns:
            List of issue dicts
        """
        issue_filter = build_issue_filter(team_id=team_id)
        if issue_filter:
            return self._fetch_all(analytics_queries.LIST_ISSUES, "issues", filter=issue_filter)
        return self._fetch_all(analytics_queries.LIST_ISSUES, "issues")
