"""Project commands: list, view."""

from typing import Any, Dict

from rich.markup import escape

from linear_cli.api.client import LinearClient
from linear_cli.api.queries import projects as project_queries
from linear_cli.config import LinearCliConfig
from linear_cli.errors import ResourceNotFoundError
from linear_cli.records import dig, nodes
from linear_cli.ui.console import console, heading, info
from linear_cli.ui.tables import output_table, print_table


def register(subparsers) -> None:
    parser = subparsers.add_parser("projects", help="Manage Linear projects")
    commands = parser.add_subparsers(dest="subcommand", metavar="COMMAND", required=True)

    list_parser = commands.add_parser("list", help="List Linear projects")
    list_parser.set_defaults(handler=list_projects)

    view_parser = commands.add_parser("view", help="View details of a specific project")
    view_parser.add_argument("id", help="Project ID")
    view_parser.set_defaults(handler=view_project)


def format_progress(project: Dict[str, Any]) -> str:
    """Linear reports progress as a 0..1 fraction."""
    return f"{round((project.get('progress') or 0) * 100)}%"


def list_projects(args, client: LinearClient, config: LinearCliConfig) -> None:
    projects = nodes(client.query(project_queries.LIST_PROJECTS), "projects")
    if not projects:
        info("No projects found.")
        return

    rows = [
        [
            project.get("name"),
            project.get("state"),
            format_progress(project),
            ", ".join(t["name"] for t in nodes(project, "teams")),
            dig(project, "lead.name", "None"),
        ]
        for project in projects
    ]
    output_table(
        f"Linear Projects ({len(projects)}):",
        ["Name", "State", "Progress", "Teams", "Lead"],
        rows,
        widths={"Name": 30, "State": 15, "Progress": 10, "Teams": 25, "Lead": 20},
    )


def view_project(args, client: LinearClient, config: LinearCliConfig) -> None:
    project = client.query(project_queries.GET_PROJECT, {"id": args.id}).get("project")
    if not project:
        raise ResourceNotFoundError(f"Project not found: {args.id}")

    console.print(f"[bold]{escape(str(project.get('name')))}[/bold]")
    info(f"State: {project.get('state')}")
    info(f"Progress: {format_progress(project)}")
    info(f"Lead: {dig(project, 'lead.name', 'None')}")
    info(f"Start Date: {project.get('startDate') or 'Not set'}")
    info(f"Target Date: {project.get('targetDate') or 'Not set'}")

    heading("Description:")
    info(project.get("description") or "No description provided.")

    for title, key, empty in (("Teams:", "teams", "No teams."), ("Members:", "members", "No members.")):
        heading(title)
        entries = nodes(project, key)
        for entry in entries:
            info(f"- {entry.get('name')}")
        if not entries:
            info(empty)

    heading("Issues:")
    issues = nodes(project, "issues")
    if issues:
        rows = [[i.get("identifier"), i.get("title"), dig(i, "state.name", "Unknown")] for i in issues]
        print_table(["ID", "Title", "Status"], rows, widths={"ID": 10, "Title": 40, "Status": 15})
    else:
        info("No issues.")
