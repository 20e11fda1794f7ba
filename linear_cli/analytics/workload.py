"""
Workload Calculator - estimate points per team, project and engineer

Builds, for every team, two mirrored views of the same point totals:
- projects -> engineers: who delivered the points of each project
- engineers -> projects: where each engineer's points went

Usage:
    from linear_cli.analytics.workload import WorkloadCalculator

    workload = WorkloadCalculator().calculate_engineer_project_workload(issues, teams, projects)
    for team_id, team in workload.items():
        print(team["name"], list(team["projects"]))
"""

import logging
from typing import Any, Dict, Iterable, Optional, Set

from linear_cli.analytics.reporting import percentage
from linear_cli.records import dig, nodes

logger = logging.getLogger(__name__)

NO_PROJECT_ID = "no_project"
NO_PROJECT_NAME = "No Project"
UNASSIGNED_ID = "unassigned"
UNASSIGNED_NAME = "Unassigned"


class WorkloadCalculator:
    """Aggregate issue estimates into per-team project/engineer workload."""

    def calculate_engineer_project_workload(
        self,
        issues: Optional[Iterable[Dict[str, Any]]],
        teams: Iterable[Dict[str, Any]],
        projects: Iterable[Dict[str, Any]],
    ) -> Dict[str, Dict[str, Any]]:
        """
        Calculate engineer workload across projects.

        Issues without a team or without a positive estimate are ignored, as are
        issues whose project is linked only to other teams. Every team passed in
        appears in the result, even when it has no matching issues.

        Args:
            issues: Issues with team, project, assignee and estimate
            teams: Teams to report on
            projects: Projects, used for their team links

        Returns:
            {team_id: {"name", "projects": {...}, "engineers": {...}}}
        """
        result: Dict[str, Dict[str, Any]] = {
            team["id"]: {"name": team.get("name"), "projects": {}, "engineers": {}} for team in teams
        }
        project_teams = self._project_team_map(projects)
        skipped = 0

        for issue in issues or []:
            team_id = dig(issue, "team.id")
            points = int(issue.get("estimate") or 0)
            if not team_id or points <= 0:
                skipped += 1
                continue

            if issue.get("project"):
                project_id = issue["project"]["id"]
                project_name = issue["project"].get("name")
                linked = project_teams.get(project_id)
                if linked and team_id not in linked:
                    skipped += 1
                    continue
            else:
                project_id, project_name = NO_PROJECT_ID, NO_PROJECT_NAME

            assignee = issue.get("assignee")
            engineer_id = assignee["id"] if assignee else UNASSIGNED_ID
            engineer_name = assignee.get("name") if assignee else UNASSIGNED_NAME

            team = result.setdefault(
                team_id, {"name": dig(issue, "team.name"), "projects": {}, "engineers": {}}
            )
            project = team["projects"].setdefault(
                project_id, {"name": project_name, "total_points": 0, "engineers": {}}
            )
            engineer = team["engineers"].setdefault(
                engineer_id, {"name": engineer_name, "total_points": 0, "projects": {}}
            )
            project["engineers"].setdefault(engineer_id, {"name": engineer_name, "points": 0})
            engineer["projects"].setdefault(project_id, {"name": project_name, "points": 0})

            project["total_points"] += points
            project["engineers"][engineer_id]["points"] += points
            engineer["total_points"] += points
            engineer["projects"][project_id]["points"] += points

        if skipped:
            logger.debug(f"Workload skipped {skipped} issues without team, estimate or matching project")

        self._add_percentages(result)
        return result

    @staticmethod
    def _project_team_map(projects: Iterable[Dict[str, Any]]) -> Dict[str, Set[str]]:
        return {project["id"]: {team["id"] for team in nodes(project, "teams")} for project in projects}

    @staticmethod
    def _add_percentages(result: Dict[str, Dict[str, Any]]) -> None:
        for team in result.values():
            for engineer in team["engineers"].values():
                for project in engineer["projects"].values():
                    project["percentage"] = percentage(project["points"], engineer["total_points"])

            for project in team["projects"].values():
                for engineer in project["engineers"].values():
                    engineer["percentage"] = percentage(engineer["points"], project["total_points"])
