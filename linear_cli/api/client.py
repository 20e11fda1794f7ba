"""
Linear API Client - GraphQL access with a read-only safe mode

Handles:
- Executing GraphQL queries and mutations against the Linear endpoint
- Blocking mutations client-side while safe mode is enabled
- Mapping transport and GraphQL failures onto linear_cli.errors
- Walking cursor-paginated connections
- Resolving team, user, workflow state and label names to IDs

Usage:
    from linear_cli.api.client import LinearClient

    client = LinearClient(api_key, safe_mode=True)
    teams = client.query(queries.teams.LIST_TEAMS)["teams"]["nodes"]
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from gql import Client, gql
from gql.transport.exceptions import (
    TransportError as GQLTransportError,
    TransportQueryError,
    TransportServerError,
)
from gql.transport.requests import RequestsHTTPTransport

from linear_cli.api.queries import teams as team_queries
from linear_cli.api.queries import users as user_queries
from linear_cli.config import DEFAULT_API_URL
from linear_cli.errors import (
    AuthenticationError,
    ConfigurationError,
    LinearAPIError,
    MutationBlockedError,
    ResourceNotFoundError,
    TransportError,
)
from linear_cli.records import dig, nodes
from linear_cli.validators import is_email

logger = logging.getLogger(__name__)

MUTATION_KEYWORD = "mutation"

# Page size for the full listings behind name -> ID resolution
LOOKUP_PAGE_SIZE = 100

HTTP_ERROR_MESSAGES = {
    403: "Access denied. Your API key doesn't have permission to perform this action.",
    404: "Resource not found. Please check the ID or name you provided.",
    429: "Rate limit exceeded. Please try again in a few minutes.",
}


class LinearClient:
    """
    Linear GraphQL client with a read-only guard.

    Safe mode is fixed at construction time. While it is on, any document whose
    leading keyword is `mutation` is rejected before it reaches the transport.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = DEFAULT_API_URL,
        safe_mode: bool = True,
        timeout: int = 30,
    ):
        """
        Initialize Linear client.

        Args:
            api_key: Linear personal API key
            api_url: GraphQL endpoint
            safe_mode: Reject mutations when True
            timeout: HTTP timeout in seconds
        """
        if not api_key:
            raise ConfigurationError(
                "Linear API key is required! Please set LINEAR_API_KEY in your .env file."
            )

        self.api_url = api_url
        self.safe_mode = safe_mode

        transport = RequestsHTTPTransport(
            url=api_url,
            headers={"Authorization": api_key, "Content-Type": "application/json"},
            use_json=True,
            timeout=timeout,
            retries=0,
        )

        self.client = Client(transport=transport, fetch_schema_from_transport=False)

        logger.info(f"Linear client initialized (endpoint: {api_url}, safe_mode: {safe_mode})")

    # ========================================
    # Query execution
    # ========================================

    @staticmethod
    def is_mutation(document: str) -> bool:
        """True when the document's leading keyword is `mutation`."""
        return document.strip().startswith(MUTATION_KEYWORD)

    def query(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL document.

        Args:
            document: GraphQL query or mutation string
            variables: Optional variables

        Returns:
            The response `data` object

        Raises:
            MutationBlockedError: Mutation attempted with safe mode on
            AuthenticationError: API key missing or rejected
            LinearAPIError: GraphQL or HTTP error reported by Linear
            TransportError: Network failure or unreadable response
        """
        if self.safe_mode and self.is_mutation(document):
            logger.warning("Blocked mutation while safe mode is enabled")
            raise MutationBlockedError()

        try:
            result = self.client.execute(gql(document), variable_values=variables or {})
        except TransportQueryError as e:
            raise _query_error(e) from e
        except TransportServerError as e:
            raise _server_error(e) from e
        except GQLTransportError as e:
            raise TransportError(f"Linear API request failed: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Could not reach Linear API at {self.api_url}: {e}") from e

        return result or {}

    def fetch_paginated(
        self,
        document: str,
        variables: Optional[Dict[str, Any]],
        nodes_path: str,
        fetch_all: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Collect nodes from a cursor-paginated connection.

        Pages are fetched one after another. Without fetch_all only the first
        page is returned.

        Args:
            document: Query accepting an `$after` cursor variable
            variables: Initial variables (e.g. {"first": 50})
            nodes_path: Dotted path to the connection in `data`, e.g. "issues"
            fetch_all: Follow pageInfo.hasNextPage until exhausted
            limit: Stop once this many nodes have been collected

        Returns:
            List of node dicts
        """
        current_variables = dict(variables or {})
        items: List[Dict[str, Any]] = []
        page = 0

        while True:
            page += 1
            result = self.query(document, current_variables)
            connection = dig(result, nodes_path) or {}
            items.extend(nodes(connection))

            logger.debug(f"Fetched page {page} of {nodes_path}: {len(items)} items so far")

            if limit is not None and len(items) >= limit:
                return items[:limit]

            page_info = connection.get("pageInfo") or {}
            if not (fetch_all and page_info.get("hasNextPage")):
                break

            current_variables = {**current_variables, "after": page_info.get("endCursor")}

        return items

    # ========================================
    # Name resolution
    # ========================================

    def get_team_id_by_name(self, team_name: str) -> str:
        """
        Get team ID by name (case insensitive).

        Raises:
            ResourceNotFoundError: If no team matches; the message lists all teams
        """
        teams = self.fetch_paginated(
            team_queries.TEAM_NAMES, {"first": LOOKUP_PAGE_SIZE}, "teams", fetch_all=True
        )

        if not teams:
            raise ResourceNotFoundError(
                "No teams found in your Linear workspace. Please create a team first."
            )

        wanted = team_name.lower()
        for team in teams:
            if (team.get("name") or "").lower() == wanted:
                return team["id"]

        available = ", ".join(f"{t['name']} ({t['key']})" for t in teams)
        raise ResourceNotFoundError(f"Team '{team_name}' not found. Available teams: {available}")

    def get_user_id(self, name_or_email: str) -> str:
        """
        Resolve an assignee given as email or (display) name.

        Raises:
            ResourceNotFoundError: If no user matches; the message lists users
        """
        users = self.fetch_paginated(
            user_queries.LIST_USERS, {"first": LOOKUP_PAGE_SIZE}, "users", fetch_all=True
        )
        wanted = name_or_email.lower()
        fields = ("email",) if is_email(name_or_email) else ("name", "displayName")

        for user in users:
            if any((user.get(f) or "").lower() == wanted for f in fields):
                return user["id"]

        available = ", ".join(f"{u.get('name')} <{u.get('email')}>" for u in users) or "none"
        raise ResourceNotFoundError(f"User '{name_or_email}' not found. Available users: {available}")

    def get_state_id(self, team_id: str, state_name: str) -> str:
        """
        Resolve a workflow state name within a team (case insensitive).

        Raises:
            ResourceNotFoundError: If the team has no such state
        """
        result = self.query(team_queries.TEAM_STATES, {"id": team_id})
        states = nodes(result, "team.states")
        wanted = state_name.lower()

        for state in states:
            if (state.get("name") or "").lower() == wanted:
                return state["id"]

        team_label = dig(result, "team.name", team_id)
        available = ", ".join(s["name"] for s in states) or "none"
        raise ResourceNotFoundError(
            f"Status '{state_name}' not found for team {team_label}. Available statuses: {available}"
        )

    def get_label_ids(self, team_id: str, label_names: List[str]) -> List[str]:
        """
        Resolve issue label names usable by a team (team and workspace labels).

        Raises:
            ResourceNotFoundError: If any name does not match; lists the missing ones
        """
        labels = self.fetch_paginated(
            user_queries.LIST_ISSUE_LABELS, {"first": LOOKUP_PAGE_SIZE}, "issueLabels", fetch_all=True
        )
        usable = {
            label["name"].lower(): label["id"]
            for label in labels
            if dig(label, "team.id") in (None, team_id)
        }

        missing = [name for name in label_names if name.lower() not in usable]
        if missing:
            raise ResourceNotFoundError(
                f"Labels not found: {', '.join(missing)}. "
                f"Available labels: {', '.join(sorted(usable)) or 'none'}"
            )

        return [usable[name.lower()] for name in label_names]


def _query_error(error: TransportQueryError) -> Exception:
    messages = ", ".join(
        (e.get("message") if isinstance(e, dict) else str(e)) or "" for e in (error.errors or [])
    ) or str(error)

    lowered = messages.lower()
    if "authentication" in lowered or "not authenticated" in lowered:
        return AuthenticationError()

    return LinearAPIError(f"Linear API Error: {messages}")


def _server_error(error: TransportServerError) -> Exception:
    code = error.code
    if code == 401:
        return AuthenticationError()
    if code in HTTP_ERROR_MESSAGES:
        return LinearAPIError(HTTP_ERROR_MESSAGES[code], status_code=code)
    return LinearAPIError(f"Linear API Error ({code}): {error}", status_code=code)
