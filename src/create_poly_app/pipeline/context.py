"""Pipeline context shared by the stage executor and its step handlers."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from create_poly_app.config.settings import ExecutionSettings
from create_poly_app.models.feature import ScriptArgs


@dataclass
class PipelineContext:
    """Context shared across all stage executions of one run.

    Example:
        >>> ctx = PipelineContext(
        ...     project_root=Path.cwd() / "demo",
        ...     project_name="demo",
        ...     answers={"enableDevX": True},
        ... )
        >>> ctx.script_args.tokens()["projectName"]
        'demo'
    """

    # Immutable configuration
    project_root: Path
    project_name: str
    answers: Mapping[str, Any] = field(default_factory=dict)
    settings: ExecutionSettings = field(default_factory=ExecutionSettings)

    # Root for relative template sources (bundled features directory when None)
    templates_dir: Path | None = None

    # Features of the plan, exposed to templates and scripts as enabledFeatures
    enabled_features: tuple[str, ...] = ()

    # Ids of features that completed at least one stage in this run
    activated_features: set[str] = field(default_factory=set)

    # Step results keyed by "feature/stage:step"
    stage_results: dict[str, Any] = field(default_factory=dict)

    # Errors collected during execution
    errors: list[tuple[str, str]] = field(default_factory=list)  # (stage label, error_msg)

    @property
    def script_args(self) -> ScriptArgs:
        return ScriptArgs(
            project_name=self.project_name,
            project_root=self.project_root,
            enabled_features=self.enabled_features,
            answers=self.answers,
        )

    @property
    def tokens(self) -> dict[str, Any]:
        """Values for ``{{key}}`` substitution and template rendering."""
        return self.script_args.tokens()

    def add_error(self, stage_label: str, message: str) -> None:
        """Record an error from a stage."""
        self.errors.append((stage_label, message))

    def set_result(self, stage_label: str, result: Any) -> None:
        """Store the data a stage produced.

        Example:
            >>> ctx.set_result("tailwind/configure-tailwind:mods", {"mods": ["web/src/index.css"]})
        """
        self.stage_results[stage_label] = result
