"""
CLI command groups.

Every group module exposes register(subparsers); leaf parsers set a `handler`
default called as handler(args, client, config).
"""

from linear_cli.commands import analytics, issues, projects, teams

COMMAND_GROUPS = [issues, teams, projects, analytics]


def register_all(subparsers) -> None:
    for group in COMMAND_GROUPS:
        group.register(subparsers)
