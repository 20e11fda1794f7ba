"""Linear GraphQL API access."""

from linear_cli.api.client import LinearClient

__all__ = ["LinearClient"]
