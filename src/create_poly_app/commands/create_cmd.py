"""Create and plan commands for scaffolding a new project."""

from pathlib import Path
from typing import Any

import typer
import yaml
from rich.markup import escape
from rich.table import Table

from create_poly_app.config.log_setup import configure_logging
from create_poly_app.config.messages import (
    ERROR_MESSAGES,
    INFO_MESSAGES,
    NEXT_STEPS,
    SUCCESS_MESSAGES,
)
from create_poly_app.config.settings import execution_settings, logging_settings
from create_poly_app.exceptions import ConfigurationError, ScaffoldError
from create_poly_app.models import ConfigurationModel, StageStatus
from create_poly_app.pipeline import (
    ExecutionPlan,
    PipelineContext,
    PlannedStage,
    StageExecutor,
    StageRecord,
)
from create_poly_app.services import get_answer_provider, get_feature_service
from create_poly_app.utils import (
    get_console,
    is_dir_empty,
    print_error,
    print_header,
    print_info,
    print_panel,
    print_success,
    print_warning,
)
from create_poly_app.utils.step_tracker import StepTracker


class TrackerObserver:
    """Forwards stage lifecycle events to a StepTracker."""

    def __init__(self, tracker: StepTracker):
        self.tracker = tracker

    def stage_started(self, planned: PlannedStage, record: StageRecord) -> None:
        self.tracker.start_step(planned.label)

    def stage_finished(self, planned: PlannedStage, record: StageRecord) -> None:
        if record.status == StageStatus.COMPLETED:
            self.tracker.complete_step(f"{planned.label}: {record.message}")
        elif record.status == StageStatus.FAILED:
            self.tracker.fail_step(f"{planned.label}: {record.message}", record.error)
        elif record.status == StageStatus.SKIPPED:
            self.tracker.skip_step(f"{planned.label} ({record.message})")


def create_command(
    name: str,
    features: list[str] | None,
    answers_file: Path | None,
    set_values: list[str] | None,
    output_dir: Path | None,
    no_interactive: bool,
    dry_run: bool,
) -> None:
    """Resolve the requested features and scaffold the project.

    Args:
        name: Project name, also the directory created under output_dir
        features: Explicitly requested feature ids (selected from answers if empty)
        answers_file: YAML file mapping prompt ids to answers
        set_values: key=value answer overrides
        output_dir: Directory the project is created in (defaults to cwd)
        no_interactive: Answer every prompt with its default
        dry_run: Print the plan without executing it
    """
    base_dir = (output_dir or Path.cwd()).resolve()
    project_root = base_dir / name
    configure_logging(logging_settings, base_dir=base_dir)

    if not dry_run and project_root.exists() and not is_dir_empty(project_root):
        print_error(ERROR_MESSAGES["project_exists"].format(project_root=project_root))
        raise typer.Exit(code=1)

    answers = load_answers(answers_file, set_values)
    plan = build_plan(name, project_root, answers, features, no_interactive)
    print_plan(plan)

    if dry_run:
        print_info(INFO_MESSAGES["dry_run"])
        return

    if plan.is_empty:
        print_error(ERROR_MESSAGES["no_stages"])
        raise typer.Exit(code=1)

    print_header(
        INFO_MESSAGES["creating"].format(
            project_name=name, features=", ".join(plan.activated_features)
        )
    )

    context = PipelineContext(
        project_root=project_root,
        project_name=name,
        answers=answers,
        settings=execution_settings,
    )
    tracker = StepTracker(len(plan))
    report = StageExecutor(context, observer=TrackerObserver(tracker)).execute(plan)

    if report.success:
        tracker.finish(
            SUCCESS_MESSAGES["project_created"].format(project_name=name, project_root=project_root)
        )
        print_panel(NEXT_STEPS.format(project_name=name), title="Next Steps", style="green")
        return

    failure = report.failure
    if failure is not None:
        _print_failure(failure)
    raise typer.Exit(code=1)


def plan_command(
    name: str,
    features: list[str] | None,
    answers_file: Path | None,
    set_values: list[str] | None,
    output_dir: Path | None,
    no_interactive: bool,
) -> None:
    """Resolve the requested features and print the plan."""
    base_dir = (output_dir or Path.cwd()).resolve()
    answers = load_answers(answers_file, set_values)
    plan = build_plan(name, base_dir / name, answers, features, no_interactive)
    print_plan(plan)
    print_success(
        SUCCESS_MESSAGES["plan_resolved"].format(
            stage_count=len(plan), feature_count=len(plan.activated_features)
        )
    )


# =============================================================================
# Helpers
# =============================================================================


def parse_set_option(value: str) -> tuple[str, Any]:
    """Parse a ``key=value`` option, the value as a YAML scalar or list.

    Raises:
        typer.BadParameter: If the option has no key
    """
    key, sep, raw = value.partition("=")
    key = key.strip()
    if not sep or not key:
        raise typer.BadParameter(ERROR_MESSAGES["invalid_set_option"].format(value=value))
    try:
        parsed = yaml.safe_load(raw) if raw.strip() else ""
    except yaml.YAMLError:
        parsed = raw
    return key, parsed


def load_answers(answers_file: Path | None, set_values: list[str] | None) -> ConfigurationModel:
    """Build the initial answers from an answers file and --set overrides."""
    data: dict[str, Any] = {}
    if answers_file is not None:
        if not answers_file.is_file():
            print_error(ERROR_MESSAGES["answers_not_found"].format(path=answers_file))
            raise typer.Exit(code=1)
        with open(answers_file, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            print_error(ERROR_MESSAGES["answers_not_mapping"].format(path=answers_file))
            raise typer.Exit(code=1)
        data.update(loaded)

    for value in set_values or []:
        key, parsed = parse_set_option(value)
        data[key] = parsed

    try:
        return ConfigurationModel(data)
    except ConfigurationError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def build_plan(
    name: str,
    project_root: Path,
    answers: ConfigurationModel,
    features: list[str] | None,
    no_interactive: bool,
) -> ExecutionPlan:
    """Collect global answers, select features and resolve the plan."""
    provider = get_answer_provider(interactive=not no_interactive)
    service = get_feature_service()
    try:
        service.collect_global_answers(answers, provider)
        requested = service.select_features(answers, features or [])
        return service.build_plan(
            answers,
            requested,
            provider=provider,
            project_name=name,
            project_root=project_root,
        )
    except ScaffoldError as e:
        print_error(ERROR_MESSAGES["resolve_failed"])
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def print_plan(plan: ExecutionPlan) -> None:
    """Print the planned stages as a table, followed by skipped features."""
    table = Table(title="Execution Plan", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Feature", style="cyan")
    table.add_column("Stage")
    table.add_column("Steps", style="dim")
    table.add_column("Condition", style="yellow")

    for index, planned in enumerate(plan, start=1):
        stage = planned.stage
        steps = ", ".join(step.value for step in stage.step_order if stage.has_work(step))
        condition = stage.activated_by.describe() if stage.activated_by is not None else ""
        table.add_row(str(index), planned.feature.id, stage.name, steps, condition)

    get_console().print(table)
    if plan.skipped_features:
        print_info(f"Skipped features: {', '.join(plan.skipped_features)}")


def _print_failure(failure: StageRecord) -> None:
    step = failure.failed_step.value if failure.failed_step else "unknown"
    print_error(
        ERROR_MESSAGES["stage_failed"].format(
            stage=failure.stage_name, feature=failure.feature_id, step=step
        )
    )
    if failure.error:
        print_error(escape(failure.error))
    if failure.output:
        print_panel(escape(failure.output), title="Captured output", style="red")
    print_warning(INFO_MESSAGES["no_rollback"])
