"""Step tracker for displaying stage progress during a scaffold run."""

from rich.markup import escape

from create_poly_app.utils.console import get_console


class StepTracker:
    """Track and display progress through a known number of steps.

    Example:
        >>> tracker = StepTracker(2)
        >>> tracker.start_step("vite / scaffold-vite")
        >>> tracker.complete_step()
        >>> tracker.skip_step("tailwind / install-tailwind")
        >>> tracker.finish()
    """

    def __init__(self, total_steps: int):
        """Initialize step tracker.

        Args:
            total_steps: Total number of steps to track
        """
        self.total_steps = total_steps
        self.current_step = 0
        self.console = get_console()
        self._current_message: str | None = None

    @property
    def _prefix(self) -> str:
        return f"[{self.current_step}/{self.total_steps}]"

    def start_step(self, message: str) -> None:
        """Start a new step."""
        self.current_step += 1
        self._current_message = message
        self.console.print(f"[cyan bold]{self._prefix}[/cyan bold] {message}...", end="")

    def complete_step(self, message: str | None = None) -> None:
        """Mark current step as complete."""
        if message is None:
            message = self._current_message or "Done"

        self.console.print("\r", end="")
        self.console.print(f"[green]✓[/green] [cyan bold]{self._prefix}[/cyan bold] {message}")

    def fail_step(self, message: str | None = None, error: str | None = None) -> None:
        """Mark current step as failed, optionally printing error details."""
        if message is None:
            message = self._current_message or "Failed"

        self.console.print("\r", end="")
        self.console.print(f"[red]✗[/red] [cyan bold]{self._prefix}[/cyan bold] {message}")

        if error:
            self.console.print(f"  [red]{escape(error)}[/red]")

    def skip_step(self, message: str) -> None:
        """Record a step that was not run."""
        self.current_step += 1
        self.console.print(f"[yellow]○[/yellow] [cyan bold]{self._prefix}[/cyan bold] {message}")

    def finish(self, message: str = "All stages completed!") -> None:
        self.console.print(f"\n[green bold]✓ {message}[/green bold]")
