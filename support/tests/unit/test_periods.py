"""
Unit tests for linear_cli.analytics.periods

Tests:
- Period filtering (all, month, quarter, year, unknown)
- completedAt precedence over createdAt
- Invalid and missing dates
- Calendar-month bucketing and monthly workload reports
"""

from datetime import date, datetime, timezone

import pytest

from linear_cli.analytics.periods import (
    PeriodFilter,
    group_issues_by_month,
    process_monthly_data,
    shift_months,
)

pytestmark = pytest.mark.unit

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def dated(make_issue, identifier, created, completed=None, **kwargs):
    return make_issue(identifier, created_at=created, completed_at=completed, **kwargs)


class TestShiftMonths:
    """Test calendar month arithmetic."""

    def test_clamps_to_month_end(self):
        assert shift_months(date(2024, 8, 31), -6) == date(2024, 2, 29)

    def test_crosses_year(self):
        assert shift_months(date(2024, 1, 10), -1) == date(2023, 12, 10)


class TestPeriodFilter:
    """Test filter_issues_by_period."""

    @pytest.fixture
    def issues(self, make_issue):
        return [
            dated(make_issue, "A-1", "2024-05-02T00:00:00.000Z"),
            dated(make_issue, "A-2", "2023-12-01T00:00:00.000Z", "2024-04-20T00:00:00.000Z"),
            dated(make_issue, "A-3", "2024-02-01T00:00:00.000Z"),
            dated(make_issue, "A-4", "2023-06-01T00:00:00.000Z"),
            dated(make_issue, "A-5", "2023-11-16T00:00:00.000Z"),
        ]

    def _ids(self, issues):
        return [issue["identifier"] for issue in issues]

    def test_month(self, issues):
        """Only the current calendar month."""
        assert self._ids(PeriodFilter().filter_issues_by_period(issues, "month", NOW)) == ["A-1"]

    def test_quarter_uses_completed_at(self, issues):
        """A-2 was created last year but completed this quarter."""
        assert self._ids(PeriodFilter().filter_issues_by_period(issues, "quarter", NOW)) == ["A-1", "A-2"]

    def test_year(self, issues):
        assert self._ids(PeriodFilter().filter_issues_by_period(issues, "year", NOW)) == ["A-1", "A-2", "A-3"]

    def test_all_is_last_six_months(self, issues):
        """Cutoff is 2023-11-15; A-4 is older."""
        assert self._ids(PeriodFilter().filter_issues_by_period(issues, "all", NOW)) == [
            "A-1",
            "A-2",
            "A-3",
            "A-5",
        ]

    def test_unknown_period_returns_input(self, issues):
        assert PeriodFilter().filter_issues_by_period(issues, "decade", NOW) == issues

    def test_invalid_and_missing_dates_dropped(self, make_issue):
        """Unparseable or absent timestamps never match."""
        issues = [dated(make_issue, "B-1", "not-a-date"), dated(make_issue, "B-2", None)]
        assert PeriodFilter().filter_issues_by_period(issues, "year", NOW) == []

    def test_empty(self):
        assert PeriodFilter().filter_issues_by_period(None, "all", NOW) == []


class TestMonthlyGrouping:
    """Test group_issues_by_month and process_monthly_data."""

    def test_six_calendar_months(self):
        """Current month plus five preceding ones, newest first."""
        buckets = group_issues_by_month([], NOW)

        assert list(buckets) == ["2024-05", "2024-04", "2024-03", "2024-02", "2024-01", "2023-12"]
        assert buckets["2024-05"]["name"] == "May 2024"

    def test_issues_assigned_to_month(self, make_issue):
        issues = [
            dated(make_issue, "C-1", "2024-03-31T23:00:00.000Z"),
            dated(make_issue, "C-2", "2023-01-01T00:00:00.000Z"),
        ]
        buckets = group_issues_by_month(issues, NOW)

        assert [i["identifier"] for i in buckets["2024-03"]["issues"]] == ["C-1"]
        assert sum(len(b["issues"]) for b in buckets.values()) == 1

    def test_process_monthly_data(self, make_issue, sample_teams):
        """Each month carries its name, issue count and workload."""
        issues = [dated(make_issue, "ENG-1", "2024-04-03T00:00:00.000Z", estimate=3)]
        reports = process_monthly_data(issues, sample_teams, [], NOW)

        april = reports["2024-04"]
        assert april["name"] == "April 2024"
        assert april["issue_count"] == 1
        assert april["workload"]["team-eng"]["engineers"]["unassigned"]["total_points"] == 3
        assert reports["2024-05"]["issue_count"] == 0
