"""
Issue commands: list, view, create, update, comment.

Input is validated before any request is made. Write commands additionally
refuse to start while safe mode is on, so no lookups are spent on a mutation
that would be blocked anyway.
"""

import logging
import sys
from typing import Any, Dict, List, Optional

from rich.markup import escape

from linear_cli.api.client import LinearClient
from linear_cli.api.queries import issues as issue_queries
from linear_cli.config import LinearCliConfig
from linear_cli.errors import InvalidInputError, LinearAPIError, MutationBlockedError, ResourceNotFoundError
from linear_cli.records import dig, label_names, nodes
from linear_cli.ui.console import console, heading, info, success
from linear_cli.ui.tables import print_table
from linear_cli.validators import (
    validate_comment_body,
    validate_description,
    validate_issue_id,
    validate_limit,
    validate_priority,
    validate_team_name,
    validate_title,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20

PRIORITY_NAMES = {0: "No priority", 1: "Urgent", 2: "High", 3: "Medium", 4: "Low"}

BASIC_HEADERS = ["ID", "Title", "Status", "Assignee", "Team"]
DETAIL_HEADERS = ["ID", "Title", "Status", "Assignee", "Priority", "Estimate", "Cycle", "Labels", "Team"]


def register(subparsers) -> None:
    parser = subparsers.add_parser("issues", help="Manage Linear issues")
    commands = parser.add_subparsers(dest="subcommand", metavar="COMMAND", required=True)

    list_parser = commands.add_parser("list", help="List Linear issues")
    list_parser.add_argument("--team", help="Filter by team name")
    list_parser.add_argument("--assignee", help="Filter by assignee email or name")
    list_parser.add_argument("--status", help="Filter by status name")
    list_parser.add_argument("--limit", default=DEFAULT_LIMIT, help=f"Number of issues to fetch (default: {DEFAULT_LIMIT})")
    list_parser.add_argument("--all", action="store_true", help="Fetch every page instead of stopping at --limit")
    list_parser.add_argument("--detail", action="store_true", help="Show priority, estimate, cycle and labels")
    list_parser.set_defaults(handler=list_issues)

    view_parser = commands.add_parser("view", help="View details of a specific issue")
    view_parser.add_argument("id", help="Issue identifier, e.g. ENG-123")
    view_parser.set_defaults(handler=view_issue)

    create_parser = commands.add_parser("create", help="Create a new issue")
    create_parser.add_argument("--title", required=True, help="Issue title")
    create_parser.add_argument("--team", help="Team name (default: LINEAR_DEFAULT_TEAM)")
    create_parser.add_argument("--description", help="Issue description")
    create_parser.add_argument("--assignee", help="Assignee email or name")
    create_parser.add_argument("--status", help="Status name")
    create_parser.add_argument("--priority", help="Priority (0-4)")
    create_parser.add_argument("--labels", help="Comma-separated list of label names")
    create_parser.set_defaults(handler=create_issue)

    update_parser = commands.add_parser("update", help="Update an existing issue")
    update_parser.add_argument("id", help="Issue identifier, e.g. ENG-123")
    update_parser.add_argument("--title", help="Issue title")
    update_parser.add_argument("--description", help="Issue description")
    update_parser.add_argument("--assignee", help="Assignee email or name")
    update_parser.add_argument("--status", help="Status name")
    update_parser.add_argument("--priority", help="Priority (0-4)")
    update_parser.set_defaults(handler=update_issue)

    comment_parser = commands.add_parser("comment", help="Add a comment to an issue")
    comment_parser.add_argument("id", help="Issue identifier, e.g. ENG-123")
    comment_parser.add_argument("text", nargs="?", help="Comment body (read from stdin when omitted)")
    comment_parser.set_defaults(handler=comment_issue)


def _require_mutations(client: LinearClient) -> None:
    if client.safe_mode:
        raise MutationBlockedError()


def _split_labels(labels: Optional[str]) -> List[str]:
    if not labels:
        return []
    return [name.strip() for name in labels.split(",") if name.strip()]


def _issue_row(issue: Dict[str, Any], detail: bool) -> List[Any]:
    assignee = dig(issue, "assignee.name", "Unassigned")
    team = dig(issue, "team.name", "Unknown")
    status = dig(issue, "state.name", "Unknown")

    if not detail:
        return [issue.get("identifier"), issue.get("title"), status, assignee, team]

    priority = issue.get("priority")
    estimate = issue.get("estimate")
    return [
        issue.get("identifier"),
        issue.get("title"),
        status,
        assignee,
        PRIORITY_NAMES.get(priority, "Not set") if priority is not None else "Not set",
        estimate if estimate is not None else "Not set",
        dig(issue, "cycle.name", "No cycle"),
        ", ".join(label_names(issue)),
        team,
    ]


# ========================================
# Read commands
# ========================================


def list_issues(args, client: LinearClient, config: LinearCliConfig) -> None:
    limit = None if args.all else validate_limit(args.limit, config.max_limit)

    team_id = client.get_team_id_by_name(validate_team_name(args.team)) if args.team else None
    assignee_id = client.get_user_id(args.assignee.strip()) if args.assignee else None

    variables: Dict[str, Any] = {"first": config.page_size if limit is None else min(limit, config.page_size)}
    issue_filter = issue_queries.build_issue_filter(team_id=team_id, assignee_id=assignee_id, status=args.status)
    if issue_filter:
        variables["filter"] = issue_filter

    issues = client.fetch_paginated(
        issue_queries.LIST_ISSUES, variables, "issues", fetch_all=args.all or limit > variables["first"], limit=limit
    )

    if not issues:
        info("No issues found matching your criteria.")
        return

    heading(f"Linear Issues ({len(issues)}):")
    headers = DETAIL_HEADERS if args.detail else BASIC_HEADERS
    print_table(headers, [_issue_row(issue, args.detail) for issue in issues])


def view_issue(args, client: LinearClient, config: LinearCliConfig) -> None:
    issue_id = validate_issue_id(args.id)
    issue = client.query(issue_queries.GET_ISSUE, {"id": issue_id}).get("issue")
    if not issue:
        raise ResourceNotFoundError(f"Issue not found: {issue_id}")

    console.print(f"[bold]{escape(issue['identifier'])}: {escape(issue['title'])}[/bold]")
    info(f"Status: {dig(issue, 'state.name', 'Unknown')}")
    info(f"Team: {dig(issue, 'team.name', 'Unknown')}")
    info(f"Assignee: {dig(issue, 'assignee.name', 'Unassigned')}")
    info(f"Priority: {PRIORITY_NAMES.get(issue.get('priority'), 'Not set')}")
    if issue.get("estimate") is not None:
        info(f"Estimate: {issue['estimate']}")
    if label_names(issue):
        info(f"Labels: {', '.join(label_names(issue))}")
    if issue.get("url"):
        info(f"URL: {issue['url']}")

    heading("Description:")
    info(issue.get("description") or "No description provided.")

    comments = nodes(issue, "comments")
    if comments:
        heading("Comments:")
        for comment in comments:
            info(f"{dig(comment, 'user.name', 'Unknown')} at {comment.get('createdAt')}")
            info(comment.get("body") or "")
            info("---")


# ========================================
# Write commands
# ========================================


def create_issue(args, client: LinearClient, config: LinearCliConfig) -> None:
    title = validate_title(args.title)
    team_name = args.team or config.default_team
    if not team_name:
        raise InvalidInputError("Team is required. Pass --team or set LINEAR_DEFAULT_TEAM.")
    team_name = validate_team_name(team_name)
    description = validate_description(args.description)
    priority = validate_priority(args.priority) if args.priority is not None else None
    labels = _split_labels(args.labels)

    _require_mutations(client)

    team_id = client.get_team_id_by_name(team_name)
    issue_input: Dict[str, Any] = {"title": title, "teamId": team_id}
    if description:
        issue_input["description"] = description
    if args.assignee:
        issue_input["assigneeId"] = client.get_user_id(args.assignee.strip())
    if args.status:
        issue_input["stateId"] = client.get_state_id(team_id, args.status.strip())
    if priority is not None:
        issue_input["priority"] = priority
    if labels:
        issue_input["labelIds"] = client.get_label_ids(team_id, labels)

    result = client.query(issue_queries.CREATE_ISSUE, {"input": issue_input}).get("issueCreate") or {}
    if not result.get("success"):
        raise LinearAPIError("Failed to create issue.")

    issue = result["issue"]
    logger.info(f"Created issue {issue['identifier']}")
    success(f"Issue created successfully: {issue['identifier']} - {issue['title']}")
    info(f"URL: {issue.get('url')}")


def update_issue(args, client: LinearClient, config: LinearCliConfig) -> None:
    issue_id = validate_issue_id(args.id)

    issue_input: Dict[str, Any] = {}
    if args.title is not None:
        issue_input["title"] = validate_title(args.title)
    if args.description is not None:
        issue_input["description"] = validate_description(args.description)
    if args.priority is not None:
        issue_input["priority"] = validate_priority(args.priority)

    if not (issue_input or args.assignee or args.status):
        raise InvalidInputError("No update parameters provided.")

    _require_mutations(client)

    if args.assignee:
        issue_input["assigneeId"] = client.get_user_id(args.assignee.strip())
    if args.status:
        issue = _fetch_issue_team(client, issue_id)
        issue_input["stateId"] = client.get_state_id(issue["team"]["id"], args.status.strip())

    result = client.query(issue_queries.UPDATE_ISSUE, {"id": issue_id, "input": issue_input}).get("issueUpdate") or {}
    if not result.get("success"):
        raise LinearAPIError("Failed to update issue.")

    issue = result["issue"]
    logger.info(f"Updated issue {issue['identifier']}: {sorted(issue_input)}")
    success(f"Issue updated successfully: {issue['identifier']} - {issue['title']}")
    info(f"URL: {issue.get('url')}")


def comment_issue(args, client: LinearClient, config: LinearCliConfig) -> None:
    issue_id = validate_issue_id(args.id)
    text = args.text if args.text is not None else sys.stdin.read()
    body = validate_comment_body(text)

    _require_mutations(client)

    issue = _fetch_issue_team(client, issue_id)
    result = client.query(issue_queries.CREATE_COMMENT, {"issueId": issue["id"], "body": body}).get("commentCreate") or {}
    if not result.get("success"):
        raise LinearAPIError("Failed to add comment.")

    success(f"Comment added to {issue_id} successfully.")


def _fetch_issue_team(client: LinearClient, issue_id: str) -> Dict[str, Any]:
    issue = client.query(issue_queries.ISSUE_TEAM, {"id": issue_id}).get("issue")
    if not issue:
        raise ResourceNotFoundError(f"Issue not found: {issue_id}")
    return issue
