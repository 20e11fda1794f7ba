"""
Table rendering shared by every command.

Interactive terminals get bordered rich tables. When stdout is redirected or
LINEAR_CLI_ENV=test, rows are printed as plain `a | b` lines under a `-+-`
separator so the output stays greppable.
"""

import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from rich import box
from rich.table import Table
from rich.text import Text

from linear_cli.ui.console import console, heading

NO_DATA = "No data available."

FAVOURABLE_THRESHOLD = 75
CAUTION_THRESHOLD = 50


def in_test_environment() -> bool:
    return os.getenv("LINEAR_CLI_ENV") == "test" or not sys.stdout.isatty()


def percentage_style(value: float) -> str:
    """green for >= 75, yellow for >= 50, red below."""
    if value >= FAVOURABLE_THRESHOLD:
        return "green"
    if value >= CAUTION_THRESHOLD:
        return "yellow"
    return "red"


def format_percentage(value: float) -> Text:
    return Text(f"{value}%", style=percentage_style(value))


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def render_simple_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    lines = [" | ".join(headers), "-+-".join("-" * len(h) for h in headers)]
    lines.extend(" | ".join(_cell(value) for value in row) for row in rows)
    return "\n".join(lines)


def build_rich_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    widths: Optional[Dict[str, int]] = None,
) -> Table:
    widths = widths or {}
    table = Table(box=box.ROUNDED, header_style="bold", show_lines=False)

    for header in headers:
        table.add_column(header, min_width=widths.get(header), overflow="fold")

    for row in rows:
        table.add_row(*(value if isinstance(value, Text) else Text(_cell(value)) for value in row))

    return table


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    widths: Optional[Dict[str, int]] = None,
) -> None:
    """Print a table without a title, in the mode matching the terminal."""
    if in_test_environment():
        console.print(render_simple_table(headers, rows), markup=False)
    else:
        console.print(build_rich_table(headers, rows, widths))


def output_table(
    title: Optional[str],
    headers: Sequence[str],
    rows: List[Sequence[Any]],
    widths: Optional[Dict[str, int]] = None,
) -> None:
    """
    Print a titled table, or the no-data notice when there are no rows.

    Args:
        title: Heading printed above the table
        headers: Column headers
        rows: Row values; rich Text cells keep their style in bordered mode
        widths: Optional minimum width per header
    """
    if title:
        heading(title)

    if not rows:
        console.print(NO_DATA, markup=False)
        return

    print_table(headers, rows, widths)
