"""Step abstraction used by the stage executor.

A feature stage is executed as a fixed sequence of steps (dependencies,
templates, scripts, mods). Each step is a small handler object with the
same should_run / execute shape, and reports a StageOutcome instead of
raising so the executor can record exactly which step failed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from create_poly_app.exceptions import ScaffoldError, ScriptError
from create_poly_app.models.enums import StageStep
from create_poly_app.pipeline.context import PipelineContext
from create_poly_app.pipeline.plan import PlannedStage

if TYPE_CHECKING:
    from create_poly_app.services.script_service import ScriptRunner
    from create_poly_app.services.template_service import TemplateService
    from create_poly_app.services.workspace_service import WorkspaceService


class StageResult(str, Enum):
    """Result of a step execution."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class StageOutcome:
    """Outcome of executing one step of a stage.

    Attributes:
        result: Whether the step succeeded or failed
        message: Human-readable message for UI display
        error: Error message if failed (for logging/debugging)
        data: Optional result data; for failed scripts this carries the
            captured output under "output"
    """

    result: StageResult
    message: str
    error: str | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def success(cls, message: str, data: dict[str, Any] | None = None) -> "StageOutcome":
        return cls(StageResult.SUCCESS, message, data=data)

    @classmethod
    def failed(
        cls,
        message: str,
        error: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> "StageOutcome":
        """Create a failed outcome.

        Args:
            message: User-facing failure message
            error: Optional technical error details for logging
            data: Optional diagnostics such as captured script output

        Returns:
            StageOutcome with FAILED result status
        """
        return cls(StageResult.FAILED, message, error=error, data=data)

    @property
    def is_failure(self) -> bool:
        return self.result == StageResult.FAILED


@runtime_checkable
class Step(Protocol):
    """Protocol defining a step handler."""

    @property
    def step(self) -> StageStep:
        """Which stage step this handler implements."""
        ...

    def should_run(self, planned: PlannedStage, context: PipelineContext) -> bool:
        """Whether the stage declares anything for this step."""
        ...

    def execute(self, planned: PlannedStage, context: PipelineContext) -> StageOutcome:
        """Run the step for one planned stage."""
        ...


class BaseStep(ABC):
    """Base class for step handlers with common functionality.

    Provides:
    - Default should_run based on what the stage declares
    - Error handling wrapper that converts exceptions into failed outcomes
    - Service instantiation helpers
    """

    step: StageStep
    display_name: str

    def should_run(self, planned: PlannedStage, context: PipelineContext) -> bool:
        return planned.stage.has_work(self.step)

    def execute(self, planned: PlannedStage, context: PipelineContext) -> StageOutcome:
        """Execute with error handling wrapper.

        Catches exceptions and converts them to StageOutcome.failed.
        """
        try:
            return self._execute(planned, context)
        except ScriptError as e:
            context.add_error(planned.label, str(e))
            return StageOutcome.failed(
                f"Script failed: {self.display_name}",
                error=str(e),
                data={
                    "command": e.command,
                    "returncode": e.returncode,
                    "timed_out": e.timed_out,
                    "output": e.output,
                },
            )
        except ScaffoldError as e:
            context.add_error(planned.label, str(e))
            return StageOutcome.failed(f"Failed: {self.display_name}", error=str(e))
        except PermissionError as e:
            error_msg = f"Permission denied: {e}"
            context.add_error(planned.label, error_msg)
            return StageOutcome.failed(
                f"Permission denied: {self.display_name}",
                error=error_msg,
            )
        except FileNotFoundError as e:
            error_msg = f"File not found: {e}"
            context.add_error(planned.label, error_msg)
            return StageOutcome.failed(
                f"File not found: {self.display_name}",
                error=error_msg,
            )
        except ValueError as e:
            error_msg = f"Invalid value: {e}"
            context.add_error(planned.label, error_msg)
            return StageOutcome.failed(
                f"Invalid value: {self.display_name}",
                error=error_msg,
            )
        except Exception as e:
            error_msg = f"{type(e).__name__}: {e}"
            context.add_error(planned.label, error_msg)
            return StageOutcome.failed(
                f"Failed: {self.display_name}",
                error=error_msg,
            )

    @abstractmethod
    def _execute(self, planned: PlannedStage, context: PipelineContext) -> StageOutcome:
        """Perform the actual step work."""
        ...

    # -------------------------------------------------------------------------
    # Service Helpers
    # -------------------------------------------------------------------------
    # Lazily imported to avoid circular dependencies. Each returns a service
    # scoped to the project root from context.

    def _get_workspace_service(self, context: PipelineContext) -> "WorkspaceService":
        from create_poly_app.services.workspace_service import WorkspaceService

        return WorkspaceService(context.project_root, use_catalog=context.settings.use_catalog)

    def _get_template_service(self, context: PipelineContext) -> "TemplateService":
        from create_poly_app.services.template_service import TemplateService

        return TemplateService(context.templates_dir)

    def _get_script_runner(self, context: PipelineContext) -> "ScriptRunner":
        from create_poly_app.services.script_service import ScriptRunner

        return ScriptRunner(
            context.project_root,
            timeout_seconds=context.settings.script_timeout_seconds,
            shell_executable=context.settings.shell_executable,
        )
