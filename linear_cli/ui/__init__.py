"""Terminal output: consoles, status messages and tables."""

from linear_cli.ui.console import console, err_console
from linear_cli.ui.tables import format_percentage, output_table, percentage_style, print_table

__all__ = [
    "console",
    "err_console",
    "format_percentage",
    "output_table",
    "percentage_style",
    "print_table",
]
