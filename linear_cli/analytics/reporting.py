"""
Reporting - aggregate analytics over fetched Linear data

Features:
- Issue counts by status and by team
- Per-team completion rates
- Capitalization metrics (overall, per team, per engineer, per capitalized project)
- Full workspace report composition

All functions are pure: they read plain issue/team/project dicts as returned by
the API, never mutate them, and return zero-valued or empty structures for
empty input.

Usage:
    from linear_cli.analytics.reporting import generate_report

    report = generate_report(teams, projects, issues)
    print(report["summary"]["team_completion_rates"])
"""

from collections import Counter
from typing import AbstractSet, Any, Dict, Iterable, List, Optional, Sequence, Tuple

from linear_cli.config import DEFAULT_CAPITALIZATION_LABELS
from linear_cli.records import Path, dig, label_names

UNKNOWN = "Unknown"


def percentage(numerator: float, denominator: float) -> float:
    """numerator/denominator as a percentage rounded to 2 places; 0 when denominator is 0."""
    if not denominator:
        return 0.0
    return round(numerator / denominator * 100, 2)


def count_by(records: Iterable[Dict[str, Any]], key_path: Path, default_label: str = UNKNOWN) -> Dict[str, int]:
    """
    Count records by a possibly nested, possibly absent field.

    Args:
        records: Records to group
        key_path: Dotted path such as "state.name"
        default_label: Label used when the field is missing or null

    Returns:
        Mapping label -> count
    """
    return dict(Counter(dig(record, key_path, default_label) for record in records))


def count_issues_by_status(issues: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    return count_by(issues, "state.name")


def count_issues_by_team(issues: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    return count_by(issues, "team.name")


def group_by(records: Iterable[Dict[str, Any]], key_path: Path, default_label: str = UNKNOWN) -> Dict[str, List[Dict[str, Any]]]:
    """Group records by a nested field, keeping first-seen order."""
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for record in records:
        groups.setdefault(dig(record, key_path, default_label), []).append(record)
    return groups


def completion_rates(issues: Iterable[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Calculate team completion rates.

    An issue counts as completed when it has a completedAt timestamp.

    Returns:
        {team_name: {"total": int, "completed": int, "rate": float}}
    """
    rates = {}
    for team_name, team_issues in group_by(issues, "team.name").items():
        total = len(team_issues)
        completed = sum(1 for issue in team_issues if issue.get("completedAt"))
        rates[team_name] = {
            "total": total,
            "completed": completed,
            "rate": percentage(completed, total),
        }
    return rates


calculate_team_completion_rates = completion_rates


# ========================================
# Capitalization
# ========================================


def matches_marker(names: Iterable[str], markers: Sequence[str]) -> bool:
    """True when any name contains any marker, case-insensitively."""
    lowered_markers = [m.lower() for m in markers]
    return any(marker in name.lower() for name in names for marker in lowered_markers)


is_capitalized_label_set = matches_marker


def capitalized_projects(projects: Iterable[Dict[str, Any]], markers: Sequence[str]) -> List[Dict[str, Any]]:
    """Projects whose own labels carry a capitalization marker."""
    return [p for p in projects if matches_marker(label_names(p), markers)]


def is_capitalized(issue: Dict[str, Any], markers: Sequence[str], project_ids: AbstractSet[str] = frozenset()) -> bool:
    """
    Classify an issue as capitalized.

    An issue is capitalized when one of its labels contains a marker, or when it
    belongs to one of the given capitalized project IDs.
    """
    if matches_marker(label_names(issue), markers):
        return True
    return dig(issue, "project.id") in project_ids


def _estimate(issue: Dict[str, Any]) -> float:
    return float(issue.get("estimate") or 0)


def _group_classified(
    classified: Iterable[Tuple[Dict[str, Any], bool]], key_path: Path
) -> Dict[str, List[Tuple[Dict[str, Any], bool]]]:
    groups: Dict[str, List[Tuple[Dict[str, Any], bool]]] = {}
    for issue, flag in classified:
        groups.setdefault(dig(issue, key_path, UNKNOWN), []).append((issue, flag))
    return groups


def _team_capitalization(classified: List[Tuple[Dict[str, Any], bool]]) -> Dict[str, Dict[str, Any]]:
    result = {}
    for team_name, team_issues in _group_classified(classified, "team.name").items():
        total = len(team_issues)
        capitalized = sum(1 for _, flag in team_issues if flag)
        result[team_name] = {
            "capitalized": capitalized,
            "non_capitalized": total - capitalized,
            "total": total,
            "capitalization_rate": percentage(capitalized, total),
        }
    return result


def _engineer_workload(classified: List[Tuple[Dict[str, Any], bool]]) -> Dict[str, Dict[str, Any]]:
    workload = {}
    assigned = [(issue, flag) for issue, flag in classified if issue.get("assignee")]

    for engineer, eng_issues in _group_classified(assigned, "assignee.name").items():
        cap_issues = [issue for issue, flag in eng_issues if flag]

        total_issues = len(eng_issues)
        capitalized_count = len(cap_issues)
        total_estimate = sum(_estimate(issue) for issue, _ in eng_issues)
        capitalized_estimate = sum(_estimate(issue) for issue in cap_issues)

        workload[engineer] = {
            "total_issues": total_issues,
            "capitalized_issues": capitalized_count,
            "non_capitalized_issues": total_issues - capitalized_count,
            "percentage": percentage(capitalized_count, total_issues),
            "total_estimate": total_estimate,
            "capitalized_estimate": capitalized_estimate,
            "estimate_percentage": percentage(capitalized_estimate, total_estimate),
        }

    return workload


def _project_engineer_workload(
    issues: List[Dict[str, Any]], projects: List[Dict[str, Any]]
) -> Dict[str, Dict[str, Any]]:
    workload = {}

    for project in projects:
        project_issues = [issue for issue in issues if dig(issue, "project.id") == project["id"]]
        engineers: Dict[str, Dict[str, Any]] = {}

        for issue in project_issues:
            assignee = issue.get("assignee")
            if not assignee:
                continue

            engineer = engineers.setdefault(
                assignee.get("id") or assignee.get("name"),
                {
                    "name": assignee.get("name") or UNKNOWN,
                    "email": assignee.get("email") or "",
                    "issues_count": 0,
                    "total_estimate": 0.0,
                    "issues": [],
                },
            )
            engineer["issues_count"] += 1
            engineer["total_estimate"] += _estimate(issue)
            engineer["issues"].append(
                {
                    "identifier": issue.get("identifier"),
                    "title": issue.get("title"),
                    "estimate": issue.get("estimate"),
                    "started_at": issue.get("startedAt"),
                    "completed_at": issue.get("completedAt"),
                }
            )

        workload[project["name"]] = {
            "id": project["id"],
            "total_issues": len(project_issues),
            "assigned_issues": sum(e["issues_count"] for e in engineers.values()),
            "engineers": engineers,
        }

    return workload


def capitalization_metrics(
    issues: Iterable[Dict[str, Any]],
    projects: Iterable[Dict[str, Any]] = (),
    marker_labels: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """
    Calculate software capitalization metrics.

    Args:
        issues: Issues to classify
        projects: Projects; those labelled with a marker make their issues capitalized
        marker_labels: Label substrings marking capitalized work
            (default: capitalization, capex, fixed asset)

    Returns:
        Dict with overall counts and rate, team_capitalization,
        capitalized_projects, engineer_workload and project_engineer_workload
    """
    issues = list(issues)
    markers = list(marker_labels or DEFAULT_CAPITALIZATION_LABELS)

    cap_projects = capitalized_projects(projects, markers)
    cap_project_ids = {p["id"] for p in cap_projects}
    classified = [(issue, is_capitalized(issue, markers, cap_project_ids)) for issue in issues]

    total = len(classified)
    capitalized_count = sum(1 for _, flag in classified if flag)

    return {
        "capitalized_count": capitalized_count,
        "non_capitalized_count": total - capitalized_count,
        "total_issues": total,
        "capitalization_rate": percentage(capitalized_count, total),
        "team_capitalization": _team_capitalization(classified),
        "capitalized_projects": [{"id": p["id"], "name": p["name"]} for p in cap_projects],
        "engineer_workload": _engineer_workload(classified),
        "project_engineer_workload": _project_engineer_workload(issues, cap_projects),
    }


calculate_capitalization_metrics = capitalization_metrics


def generate_report(
    teams: Iterable[Dict[str, Any]],
    projects: Iterable[Dict[str, Any]],
    issues: Iterable[Dict[str, Any]],
    marker_labels: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """
    Generate complete report from workspace data.

    Returns:
        {"teams", "projects", "issues", "summary": {...}}
    """
    teams, projects, issues = list(teams), list(projects), list(issues)

    return {
        "teams": teams,
        "projects": projects,
        "issues": issues,
        "summary": {
            "teams_count": len(teams),
            "projects_count": len(projects),
            "issues_count": len(issues),
            "issues_by_status": count_issues_by_status(issues),
            "issues_by_team": count_issues_by_team(issues),
            "team_completion_rates": completion_rates(issues),
            "capitalization_metrics": capitalization_metrics(issues, projects, marker_labels),
        },
    }
