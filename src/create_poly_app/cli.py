"""Main CLI entry point for create-poly-app."""

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv

from create_poly_app.commands.create_cmd import create_command, plan_command
from create_poly_app.commands.features_cmd import features_command
from create_poly_app.config.messages import HELP_TEXT, PROJECT_TAGLINE
from create_poly_app.constants import VERSION
from create_poly_app.utils import get_console, print_error, print_panel

# Load .env file from current directory if it exists
load_dotenv(Path.cwd() / ".env", verbose=False)

# Create main Typer app
app = typer.Typer(
    name="create-poly-app",
    help=PROJECT_TAGLINE,
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

FEATURE_HELP = "Feature id to include (can specify multiple times). Selected from the answers when omitted"
ANSWERS_HELP = "YAML file mapping prompt ids to answers"
SET_HELP = "Answer as key=value, the value parsed as YAML (can specify multiple times)"
OUTPUT_DIR_HELP = "Directory the project is created in (defaults to the current directory)"
NO_INTERACTIVE_HELP = "Skip interactive prompts and use defaults"


@app.command("create")
def create(
    name: str = typer.Argument(..., help="Project name"),
    feature: list[str] = typer.Option(None, "--feature", "-f", help=FEATURE_HELP),
    answers: Path | None = typer.Option(None, "--answers", "-a", help=ANSWERS_HELP),
    set_values: list[str] = typer.Option(None, "--set", "-s", help=SET_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
    no_interactive: bool = typer.Option(False, "--no-interactive", help=NO_INTERACTIVE_HELP),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-d",
        help="Print the execution plan without writing anything",
    ),
) -> None:
    """Create a new project.

    Collects answers, resolves the selected features into ordered stages and
    runs them. Stops at the first failing stage without undoing earlier ones.
    """
    create_command(
        name=name,
        features=feature,
        answers_file=answers,
        set_values=set_values,
        output_dir=output_dir,
        no_interactive=no_interactive,
        dry_run=dry_run,
    )


@app.command("plan")
def plan(
    name: str = typer.Argument(..., help="Project name"),
    feature: list[str] = typer.Option(None, "--feature", "-f", help=FEATURE_HELP),
    answers: Path | None = typer.Option(None, "--answers", "-a", help=ANSWERS_HELP),
    set_values: list[str] = typer.Option(None, "--set", "-s", help=SET_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
    no_interactive: bool = typer.Option(False, "--no-interactive", help=NO_INTERACTIVE_HELP),
) -> None:
    """Show which features and stages would run."""
    plan_command(
        name=name,
        features=feature,
        answers_file=answers,
        set_values=set_values,
        output_dir=output_dir,
        no_interactive=no_interactive,
    )


@app.command("features")
def features(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Also list prompts and stages of every feature",
    ),
) -> None:
    """List the available features."""
    features_command(verbose=verbose)


@app.command("version")
def version() -> None:
    """Show version information."""
    print_panel(
        f"[bold cyan]create-poly-app[/bold cyan] version [green]{VERSION}[/green]\n\n"
        f"{PROJECT_TAGLINE}",
        title="Version",
        style="cyan",
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version information",
        is_eager=True,
    ),
) -> None:
    """create-poly-app - scaffold a pnpm monorepo from composable features."""
    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        get_console().print(HELP_TEXT)
        raise typer.Exit()


def cli_main() -> None:
    """Main entry point for the CLI.

    This is the function that gets called when running 'create-poly-app'.
    It handles exceptions and provides user-friendly error messages.
    """
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        if isinstance(e, typer.Exit):
            sys.exit(e.exit_code)

        print_error(f"Unexpected error: {e}")

        if "--debug" in sys.argv:
            import traceback

            get_console().print("\n[dim]Traceback:[/dim]")
            traceback.print_exc()

        sys.exit(1)


if __name__ == "__main__":
    cli_main()
