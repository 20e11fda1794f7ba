"""
Period filtering and monthly bucketing of issues.

An issue is dated by its completedAt timestamp, falling back to createdAt.
Issues with neither, or with an unparseable timestamp, fall outside every
period.

Periods:
- all:     the last 6 months up to today
- month:   the current calendar month
- quarter: the current calendar quarter
- year:    the current calendar year
"""

import calendar
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from linear_cli.analytics.workload import WorkloadCalculator

logger = logging.getLogger(__name__)

MONTHS_LOOKBACK = 6

PERIODS = ["all", "month", "quarter", "year"]


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a Linear ISO-8601 timestamp such as 2024-03-01T10:00:00.000Z."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        logger.debug(f"Ignoring invalid date: {value!r}")
        return None


def issue_date(issue: Dict[str, Any]) -> Optional[datetime]:
    return parse_timestamp(issue.get("completedAt") or issue.get("createdAt"))


def shift_months(day: date, months: int) -> date:
    """Move a date by whole calendar months, clamping to the month's last day."""
    index = day.year * 12 + day.month - 1 + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def quarter_of(month: int) -> int:
    return (month - 1) // 3 + 1


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


class PeriodFilter:
    """Select the issues that fall into a reporting period."""

    def filter_issues_by_period(
        self,
        issues: Optional[Iterable[Dict[str, Any]]],
        period: str,
        now: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        Filter issues by time period.

        Args:
            issues: Issues to filter
            period: One of all, month, quarter, year
            now: Reference time (defaults to the current UTC time)

        Returns:
            The matching issues in input order; unknown periods return the input
        """
        issues = list(issues or [])
        if period not in PERIODS:
            logger.debug(f"Unknown period '{period}', returning all {len(issues)} issues")
            return issues

        current = _now(now)
        cutoff = shift_months(current.date(), -MONTHS_LOOKBACK)
        selected = []

        for issue in issues:
            dated = issue_date(issue)
            if dated is None:
                continue

            if period == "all":
                keep = dated.date() >= cutoff
            elif period == "month":
                keep = (dated.year, dated.month) == (current.year, current.month)
            elif period == "quarter":
                keep = (dated.year, quarter_of(dated.month)) == (current.year, quarter_of(current.month))
            else:
                keep = dated.year == current.year

            if keep:
                selected.append(issue)

        logger.debug(f"Period '{period}' kept {len(selected)} of {len(issues)} issues")
        return selected


def group_issues_by_month(
    issues: Optional[Iterable[Dict[str, Any]]],
    now: Optional[datetime] = None,
    months: int = MONTHS_LOOKBACK,
) -> Dict[str, Dict[str, Any]]:
    """
    Bucket issues into the current and preceding calendar months.

    Returns:
        {"YYYY-MM": {"name": "Month YYYY", "issues": [...]}}, newest month first
    """
    issues = list(issues or [])
    current = _now(now).date().replace(day=1)
    buckets: Dict[str, Dict[str, Any]] = {}

    for months_ago in range(months):
        month_start = shift_months(current, -months_ago)
        buckets[month_start.strftime("%Y-%m")] = {
            "name": month_start.strftime("%B %Y"),
            "issues": [],
        }

    for issue in issues:
        dated = issue_date(issue)
        if dated is None:
            continue
        bucket = buckets.get(dated.strftime("%Y-%m"))
        if bucket is not None:
            bucket["issues"].append(issue)

    return buckets


def process_monthly_data(
    issues: Optional[Iterable[Dict[str, Any]]],
    teams: Iterable[Dict[str, Any]],
    projects: Iterable[Dict[str, Any]],
    now: Optional[datetime] = None,
    calculator: Optional[WorkloadCalculator] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Build one workload report per month.

    Returns:
        {"YYYY-MM": {"name", "issue_count", "workload": {team_id: ...}}}
    """
    calculator = calculator or WorkloadCalculator()
    teams, projects = list(teams), list(projects)
    reports = {}

    for month_key, bucket in group_issues_by_month(issues, now).items():
        reports[month_key] = {
            "name": bucket["name"],
            "issue_count": len(bucket["issues"]),
            "workload": calculator.calculate_engineer_project_workload(bucket["issues"], teams, projects),
        }

    return reports
