"""Rich console helpers for create-poly-app output."""

from rich.console import Console
from rich.panel import Panel

_console: Console | None = None


def get_console() -> Console:
    """Get the shared console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_info(message: str) -> None:
    get_console().print(f"[cyan]{message}[/cyan]")


def print_success(message: str) -> None:
    get_console().print(f"[green]✓ {message}[/green]")


def print_warning(message: str) -> None:
    get_console().print(f"[yellow]⚠ {message}[/yellow]")


def print_error(message: str) -> None:
    get_console().print(f"[red bold]✗ {message}[/red bold]")


def print_header(message: str) -> None:
    get_console().print(f"\n[bold cyan]{message}[/bold cyan]")


def print_panel(content: str, title: str | None = None, style: str = "cyan") -> None:
    get_console().print(Panel(content, title=title, border_style=style))
