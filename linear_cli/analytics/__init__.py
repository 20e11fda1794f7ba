"""Aggregation and rendering of Linear workspace analytics."""

from linear_cli.analytics.periods import PeriodFilter, group_issues_by_month, process_monthly_data
from linear_cli.analytics.reporting import capitalization_metrics, completion_rates, count_by, generate_report
from linear_cli.analytics.workload import WorkloadCalculator

__all__ = [
    "PeriodFilter",
    "WorkloadCalculator",
    "capitalization_metrics",
    "completion_rates",
    "count_by",
    "generate_report",
    "group_issues_by_month",
    "process_monthly_data",
]
