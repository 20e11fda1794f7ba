"""
Display - render analytics results as terminal tables

Features:
- Teams and projects listings
- Report summary: counts, status/team distribution, completion rates
- Capitalization block: overall rate, capitalized projects, per-team rates,
  engineers per capitalized project, engineer workload
- Engineer workload reports, monthly or for a single period, detailed or summary

Empty sections are skipped. The only notices for missing data are
"No capitalization data available." and "No data available.".
"""

from typing import Any, Dict, List, Optional

from rich.markup import escape

from linear_cli.ui.console import console, heading, notice
from linear_cli.ui.tables import format_percentage, output_table, print_table

NO_CAPITALIZATION_DATA = "No capitalization data available."

RULE = "=" * 80

ENGINEER_HEADERS = ["Engineer", "Project Points", "Total Points", "Percentage"]
ENGINEER_WIDTHS = {"Engineer": 20, "Project Points": 15, "Total Points": 15, "Percentage": 15}


# ========================================
# Workspace listings
# ========================================


def display_teams(teams: List[Dict[str, Any]]) -> None:
    if not teams:
        return
    rows = [[t.get("name"), t.get("key"), t.get("id")] for t in teams]
    output_table("Teams:", ["Name", "Key", "ID"], rows, widths={"Name": 25, "Key": 8, "ID": 10})


def display_projects(projects: List[Dict[str, Any]]) -> None:
    if not projects:
        return
    rows = [[p.get("name"), p.get("state"), p.get("id")] for p in projects]
    output_table("Projects:", ["Name", "State", "ID"], rows, widths={"Name": 25, "State": 15, "ID": 10})


# ========================================
# Report summary
# ========================================


def display_summary_tables(summary: Dict[str, Any]) -> None:
    """Print the summary section of generate_report()."""
    heading("Summary:")
    console.print(f"Teams: {summary.get('teams_count', 0)}")
    console.print(f"Projects: {summary.get('projects_count', 0)}")
    console.print(f"Issues: {summary.get('issues_count', 0)}")

    if summary.get("issues_by_status"):
        display_status_table(summary["issues_by_status"])
    if summary.get("issues_by_team"):
        display_team_table(summary["issues_by_team"])
    if summary.get("team_completion_rates"):
        display_completion_table(summary["team_completion_rates"])
    if "capitalization_metrics" in summary:
        display_capitalization_metrics(summary["capitalization_metrics"])


def display_status_table(status_counts: Dict[str, int]) -> None:
    rows = [[status, count] for status, count in status_counts.items()]
    output_table("Issues by Status:", ["Status", "Count"], rows, widths={"Status": 25, "Count": 10})


def display_team_table(team_counts: Dict[str, int]) -> None:
    rows = [[team, count] for team, count in team_counts.items()]
    output_table("Issues by Team:", ["Team", "Count"], rows, widths={"Team": 20, "Count": 12})


def display_completion_table(completion_rates: Dict[str, Dict[str, Any]]) -> None:
    rows = [
        [team, data["completed"], data["total"], format_percentage(data["rate"])]
        for team, data in completion_rates.items()
    ]
    output_table("Team Completion Rates:", ["Team", "Completed", "Total", "Rate (%)"], rows)


# ========================================
# Capitalization
# ========================================


def display_capitalization_metrics(metrics: Optional[Dict[str, Any]]) -> None:
    """
    Print the capitalization block.

    Args:
        metrics: Output of capitalization_metrics(); None or {} prints a notice
    """
    if not metrics:
        notice(NO_CAPITALIZATION_DATA)
        return

    if "capitalization_rate" in metrics:
        _display_overall_rate(metrics)
    if metrics.get("capitalized_projects"):
        _display_capitalized_projects(metrics["capitalized_projects"])
    if metrics.get("team_capitalization"):
        _display_team_capitalization(metrics["team_capitalization"])
    if metrics.get("project_engineer_workload"):
        _display_project_engineers(metrics["project_engineer_workload"])
    if metrics.get("engineer_workload"):
        _display_engineer_workload(metrics["engineer_workload"])


def _display_overall_rate(metrics: Dict[str, Any]) -> None:
    heading("Overall Capitalization Rate:")
    rate = metrics["capitalization_rate"]
    line = format_percentage(rate)
    line.append(
        f" of issues ({metrics.get('capitalized_count', 0)}/{metrics.get('total_issues', 0)}) are capitalized",
        style="default",
    )
    console.print("  ", line, sep="")


def _display_capitalized_projects(projects: List[Dict[str, Any]]) -> None:
    heading("Capitalized Projects:")
    for project in projects:
        console.print(f"  - [green]{escape(str(project.get('name')))}[/green]")


def _display_team_capitalization(team_capitalization: Dict[str, Dict[str, Any]]) -> None:
    ordered = sorted(team_capitalization.items(), key=lambda item: -item[1]["capitalization_rate"])
    rows = [
        [
            team,
            data["capitalized"],
            data["non_capitalized"],
            data["total"],
            format_percentage(data["capitalization_rate"]),
        ]
        for team, data in ordered
    ]
    output_table("Team Capitalization Rates:", ["Team", "Capitalized", "Non-Cap", "Total", "Cap %"], rows)


def _display_project_engineers(project_workload: Dict[str, Dict[str, Any]]) -> None:
    heading("Engineers by Capitalized Project:")

    for project_name, project in project_workload.items():
        console.print(
            f"\n  [bold]Project:[/bold] [green]{escape(project_name)}[/green] "
            f"({project['assigned_issues']}/{project['total_issues']} assigned issues)"
        )
        if not project["engineers"]:
            continue

        engineers = sorted(project["engineers"].values(), key=lambda e: -e["issues_count"])
        rows = [[e["name"], e["email"], e["issues_count"], e["total_estimate"]] for e in engineers]
        print_table(["Engineer", "Email", "Issues", "Est. Points"], rows)


def _display_engineer_workload(engineer_workload: Dict[str, Dict[str, Any]]) -> None:
    ordered = sorted(engineer_workload.items(), key=lambda item: -item[1]["percentage"])
    rows = [
        [
            engineer,
            data["capitalized_issues"],
            data["total_issues"],
            format_percentage(data["percentage"]),
            data["capitalized_estimate"],
            data["total_estimate"],
            format_percentage(data["estimate_percentage"]),
        ]
        for engineer, data in ordered
    ]
    output_table(
        "Engineer Workload Summary:",
        ["Engineer", "Cap Issues", "Total", "Cap %", "Cap Points", "Total Points", "Cap Points %"],
        rows,
    )


# ========================================
# Engineer workload
# ========================================


def _team_banner(team_name: str) -> None:
    console.print(f"\n{RULE}", markup=False)
    console.print(f"Team: [bold]{escape(str(team_name))}[/bold]")
    console.print(RULE, markup=False)


def _period_label(period: str) -> str:
    return "All Time" if period == "all" else f"Current {period.capitalize()}"


def _display_team_projects(team: Dict[str, Any], empty_suffix: str = "") -> None:
    for project in team["projects"].values():
        console.print(
            f"\n  [bold]Project:[/bold] {escape(str(project['name']))} ({project['total_points']} points)"
        )
        if not project["engineers"]:
            console.print(f"    No engineer contributions to this project{empty_suffix}", markup=False)
            continue

        rows = []
        for engineer_id, engineer in project["engineers"].items():
            engineer_total = team["engineers"][engineer_id]["total_points"]
            rows.append(
                [
                    engineer["name"],
                    engineer["points"],
                    f"{engineer_total} points",
                    f"{engineer['percentage']}%",
                ]
            )
        rows.sort(key=lambda row: -row[1])
        print_table(ENGINEER_HEADERS, rows, ENGINEER_WIDTHS)


def display_monthly_workload(monthly_reports: Dict[str, Dict[str, Any]], teams: List[Dict[str, Any]]) -> None:
    """Detailed monthly view: per team, per month, per project engineer tables."""
    heading("Monthly Engineer Workload Report (Past 6 Months)")
    months = sorted(monthly_reports)

    for team in teams:
        team_id = team["id"]
        _team_banner(team.get("name"))

        active = [m for m in months if monthly_reports[m]["workload"].get(team_id, {}).get("projects")]
        if not active:
            console.print("  No data available for this team in the past 6 months.", markup=False)
            continue

        for month in active:
            report = monthly_reports[month]
            console.print(f"\n[bold]Month:[/bold] {escape(report['name'])} ({report['issue_count']} issues)")
            _display_team_projects(report["workload"][team_id], f" in {report['name']}")


def display_monthly_summary(monthly_reports: Dict[str, Dict[str, Any]], teams: List[Dict[str, Any]]) -> None:
    """Summary monthly view: engineers x months point totals per team."""
    heading("Monthly Engineer Workload Summary (Past 6 Months)")
    months = sorted(monthly_reports)

    for team in teams:
        team_id = team["id"]
        engineers: Dict[str, str] = {}
        for month in months:
            for engineer_id, engineer in monthly_reports[month]["workload"].get(team_id, {}).get("engineers", {}).items():
                engineers.setdefault(engineer_id, engineer["name"])

        if not engineers:
            continue

        rows = []
        for engineer_id, name in engineers.items():
            points = [
                _engineer_points(monthly_reports[month]["workload"].get(team_id, {}), engineer_id)
                for month in months
            ]
            if sum(points) > 0:
                rows.append([name, *points, sum(points)])
        rows.sort(key=lambda row: -row[-1])

        _team_banner(team.get("name"))
        headers = ["Engineer", *(monthly_reports[m]["name"] for m in months), "Total"]
        print_table(headers, rows)


def _engineer_points(team: Dict[str, Any], engineer_id: str) -> int:
    engineer = team.get("engineers", {}).get(engineer_id)
    return engineer["total_points"] if engineer else 0


def display_period_workload(workload: Dict[str, Dict[str, Any]], teams: List[Dict[str, Any]], period: str) -> None:
    """Detailed single period view."""
    heading(f"Engineer Workload Report ({_period_label(period)})")

    for team in teams:
        team_data = workload.get(team["id"])
        if not team_data or not team_data["projects"]:
            continue
        _team_banner(team.get("name"))
        _display_team_projects(team_data)


def display_period_summary(workload: Dict[str, Dict[str, Any]], teams: List[Dict[str, Any]], period: str) -> None:
    """Summary single period view: engineers x projects percentage matrix."""
    heading(f"Engineer Workload Summary ({_period_label(period)})")

    for team in teams:
        team_data = workload.get(team["id"])
        if not team_data or not team_data["engineers"]:
            continue
        _team_banner(team.get("name"))

        project_ids = list(team_data["projects"])
        headers = ["Engineer", "Total Points", *(team_data["projects"][p]["name"] for p in project_ids)]

        rows = []
        for engineer in team_data["engineers"].values():
            shares = [
                f"{engineer['projects'][p]['percentage']}%" if p in engineer["projects"] else "0%"
                for p in project_ids
            ]
            rows.append([engineer["name"], engineer["total_points"], *shares])
        rows.sort(key=lambda row: -row[1])

        print_table(headers, rows)
