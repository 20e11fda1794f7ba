"""Team commands: list, view."""

from rich.markup import escape

from linear_cli.api.client import LinearClient
from linear_cli.api.queries import teams as team_queries
from linear_cli.config import LinearCliConfig
from linear_cli.errors import ResourceNotFoundError
from linear_cli.records import nodes
from linear_cli.ui.console import console, heading, info
from linear_cli.ui.tables import output_table, print_table


def register(subparsers) -> None:
    parser = subparsers.add_parser("teams", help="Manage Linear teams")
    commands = parser.add_subparsers(dest="subcommand", metavar="COMMAND", required=True)

    list_parser = commands.add_parser("list", help="List Linear teams")
    list_parser.set_defaults(handler=list_teams)

    view_parser = commands.add_parser("view", help="View details of a specific team")
    view_parser.add_argument("id", help="Team ID or key")
    view_parser.set_defaults(handler=view_team)


def list_teams(args, client: LinearClient, config: LinearCliConfig) -> None:
    teams = nodes(client.query(team_queries.LIST_TEAMS), "teams")
    if not teams:
        info("No teams found.")
        return

    rows = [
        [team.get("key"), team.get("name"), len(nodes(team, "members")), len(nodes(team, "states"))]
        for team in teams
    ]
    output_table(
        f"Linear Teams ({len(teams)}):",
        ["Key", "Name", "Members", "States"],
        rows,
        widths={"Key": 8, "Name": 25, "Members": 10, "States": 10},
    )


def view_team(args, client: LinearClient, config: LinearCliConfig) -> None:
    team = client.query(team_queries.GET_TEAM, {"id": args.id}).get("team")
    if not team:
        raise ResourceNotFoundError(f"Team not found: {args.id}")

    console.print(f"[bold]{escape(str(team.get('key')))}: {escape(str(team.get('name')))}[/bold]")
    info(f"Description: {team.get('description') or 'No description provided.'}")

    heading("Members:")
    members = nodes(team, "members")
    for member in members:
        info(f"- {member.get('name')} ({member.get('email')})")
    if not members:
        info("No members.")

    _section(
        "States:",
        ["Name", "Color", "Position"],
        [[s.get("name"), s.get("color"), s.get("position")] for s in nodes(team, "states")],
        "No states.",
    )
    _section(
        "Labels:",
        ["Name", "Color"],
        [[label.get("name"), label.get("color")] for label in nodes(team, "labels")],
        "No labels.",
    )
    _section(
        "Cycles:",
        ["Name", "Start Date", "End Date"],
        [[c.get("name") or f"Cycle {c.get('number')}", c.get("startsAt"), c.get("endsAt")] for c in nodes(team, "cycles")],
        "No cycles.",
    )


def _section(title, headers, rows, empty_message) -> None:
    heading(title)
    if rows:
        print_table(headers, rows)
    else:
        info(empty_message)
