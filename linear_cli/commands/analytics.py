"""
Analytics commands: report, capitalization, workload.

Each command pulls a full snapshot through DataFetcher, aggregates it with the
pure functions in linear_cli.analytics and prints tables or JSON.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from linear_cli.analytics import display
from linear_cli.analytics.data_fetcher import DataFetcher
from linear_cli.analytics.periods import PERIODS, PeriodFilter, process_monthly_data
from linear_cli.analytics.reporting import capitalization_metrics, generate_report
from linear_cli.analytics.workload import WorkloadCalculator
from linear_cli.api.client import LinearClient
from linear_cli.config import LinearCliConfig
from linear_cli.errors import ResourceNotFoundError
from linear_cli.ui.console import heading, status
from linear_cli.validators import validate_choice, validate_team_name

logger = logging.getLogger(__name__)

FORMATS = ["table", "json"]
VIEWS = ["detailed", "summary"]


def register(subparsers) -> None:
    parser = subparsers.add_parser("analytics", help="Analytics and reporting for Linear data")
    commands = parser.add_subparsers(dest="subcommand", metavar="COMMAND", required=True)

    report_parser = commands.add_parser("report", help="Generate a comprehensive workspace report")
    _add_common_options(report_parser)
    report_parser.set_defaults(handler=report)

    cap_parser = commands.add_parser("capitalization", help="Software capitalization metrics")
    _add_common_options(cap_parser)
    cap_parser.set_defaults(handler=capitalization)

    workload_parser = commands.add_parser(
        "engineer_workload",
        aliases=["workload"],
        help="Engineer contributions by project and team over time",
    )
    _add_common_options(workload_parser)
    workload_parser.add_argument("--period", default="all", help="all, month, quarter or year (default: all)")
    workload_parser.add_argument("--view", default="detailed", help="detailed or summary (default: detailed)")
    workload_parser.set_defaults(handler=workload)


def _add_common_options(parser) -> None:
    parser.add_argument("--format", default="table", help="Output format: table or json (default: table)")
    parser.add_argument("--team", help="Limit the analysis to one team")


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def fetch_snapshot(
    fetcher: DataFetcher, team_name: Optional[str]
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Fetch teams, projects and issues, optionally scoped to one team.

    Raises:
        ResourceNotFoundError: If team_name matches no team
    """
    if team_name:
        team = fetcher.fetch_team_by_name(validate_team_name(team_name))
        if team is None:
            available = ", ".join(t["name"] for t in fetcher.fetch_teams()) or "none"
            raise ResourceNotFoundError(f"Team '{team_name}' not found. Available teams: {available}")
        teams, team_id = [team], team["id"]
    else:
        status("Fetching teams data...")
        teams, team_id = fetcher.fetch_teams(), None

    status("Fetching projects data...")
    projects = fetcher.fetch_projects(team_id=team_id)
    status("Fetching issues data...")
    issues = fetcher.fetch_issues(team_id=team_id)

    logger.info(f"Snapshot: {len(teams)} teams, {len(projects)} projects, {len(issues)} issues")
    return teams, projects, issues


def report(args, client: LinearClient, config: LinearCliConfig) -> None:
    output_format = validate_choice(args.format, FORMATS, "format")
    teams, projects, issues = fetch_snapshot(DataFetcher(client, config.page_size), args.team)

    report_data = generate_report(teams, projects, issues, config.capitalization_labels)

    if output_format == "json":
        print_json(report_data)
        return

    display.display_teams(report_data["teams"])
    display.display_projects(report_data["projects"])
    display.display_summary_tables(report_data["summary"])


def capitalization(args, client: LinearClient, config: LinearCliConfig) -> None:
    output_format = validate_choice(args.format, FORMATS, "format")
    teams, projects, issues = fetch_snapshot(DataFetcher(client, config.page_size), args.team)

    metrics = capitalization_metrics(issues, projects, config.capitalization_labels)

    if output_format == "json":
        print_json(metrics)
        return

    heading("Software Capitalization Report")
    display.display_capitalization_metrics(metrics if metrics["total_issues"] else None)


def workload(args, client: LinearClient, config: LinearCliConfig) -> None:
    output_format = validate_choice(args.format, FORMATS, "format")
    period = validate_choice(args.period, PERIODS, "period")
    view = validate_choice(args.view, VIEWS, "view")

    teams, projects, all_issues = fetch_snapshot(DataFetcher(client, config.page_size), args.team)

    issues = PeriodFilter().filter_issues_by_period(all_issues, period)
    time_desc = "the past 6 months" if period == "all" else f"the current {period}"
    status(f"Analyzing {len(issues)} issues from {time_desc}...")

    if period == "all":
        monthly_reports = process_monthly_data(issues, teams, projects)
        if output_format == "json":
            print_json(monthly_reports)
        elif view == "detailed":
            display.display_monthly_workload(monthly_reports, teams)
        else:
            display.display_monthly_summary(monthly_reports, teams)
        return

    workload_data = WorkloadCalculator().calculate_engineer_project_workload(issues, teams, projects)
    if output_format == "json":
        print_json(workload_data)
    elif view == "detailed":
        display.display_period_workload(workload_data, teams, period)
    else:
        display.display_period_summary(workload_data, teams, period)
