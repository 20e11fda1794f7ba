"""Static GraphQL documents for the Linear API, grouped by resource."""

from linear_cli.api.queries import analytics, issues, projects, teams, users

__all__ = ["analytics", "issues", "projects", "teams", "users"]
