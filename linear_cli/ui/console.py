"""Shared rich consoles and one-line status messages."""

from rich.console import Console
from rich.markup import escape

# stdout carries tables and JSON; status and error messages go to stderr
console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


def heading(text: str) -> None:
    console.print(f"\n[bold]{escape(text)}[/bold]")


def info(text: str) -> None:
    console.print(escape(text))


def success(text: str) -> None:
    console.print(f"[green]{escape(text)}[/green]")


def notice(text: str) -> None:
    console.print(f"[yellow]{escape(text)}[/yellow]")


def status(text: str) -> None:
    """Progress line on stderr, kept out of piped output."""
    err_console.print(f"[dim]{escape(text)}[/dim]")


def error(text: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(text)}")
