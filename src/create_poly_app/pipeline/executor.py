"""Stage executor.

Consumes an execution plan strictly in order, one stage at a time. Inside a
stage the steps run in the stage's step order. The first failure aborts the
rest of the plan; files written by stages that already completed are left
as they are.
"""

import logging
from typing import Protocol

from create_poly_app.activation.predicates import evaluate
from create_poly_app.models.enums import StageStep
from create_poly_app.pipeline.context import PipelineContext
from create_poly_app.pipeline.models import ExecutionReport, StageRecord
from create_poly_app.pipeline.plan import ExecutionPlan, PlannedStage
from create_poly_app.pipeline.stage import Step
from create_poly_app.pipeline.steps import get_step_handlers
from create_poly_app.pipeline.utils import format_count_message

logger = logging.getLogger(__name__)


class StageObserver(Protocol):
    """Receives stage lifecycle notifications (used for progress display)."""

    def stage_started(self, planned: PlannedStage, record: StageRecord) -> None: ...

    def stage_finished(self, planned: PlannedStage, record: StageRecord) -> None: ...


class StageExecutor:
    """Runs planned stages against a project directory.

    Example:
        >>> context = PipelineContext(project_root=root, project_name="demo", answers=answers)
        >>> report = StageExecutor(context).execute(plan)
        >>> report.success
        True
    """

    def __init__(
        self,
        context: PipelineContext,
        handlers: dict[StageStep, Step] | None = None,
        observer: StageObserver | None = None,
    ):
        """Initialize executor.

        Args:
            context: Run context (project root, answers, settings)
            handlers: Step handlers, defaults to the built-in ones
            observer: Optional progress observer
        """
        self.context = context
        self.handlers = handlers or get_step_handlers()
        self.observer = observer
        self._completed: set[tuple[str, str]] = set()

    def execute(self, plan: ExecutionPlan) -> ExecutionReport:
        """Execute every stage of the plan in order.

        Returns:
            Report with one record per planned stage. After a failure the
            failing record names the step, and later records stay pending.
        """
        if not self.context.enabled_features:
            self.context.enabled_features = tuple(plan.activated_features)

        report = ExecutionReport(
            records=[StageRecord(p.feature.id, p.stage.name) for p in plan],
        )

        for planned, record in zip(plan, report.records):
            if not self._run_stage(planned, record):
                logger.error(
                    f"Aborting after {record.label} failed during "
                    f"{record.failed_step.value if record.failed_step else 'unknown step'}"
                )
                break

        report.activated_features = [
            feature_id
            for feature_id in plan.feature_order
            if feature_id in self.context.activated_features
        ]
        logger.info(report.summary())
        return report

    def _notify_start(self, planned: PlannedStage, record: StageRecord) -> None:
        if self.observer is not None:
            self.observer.stage_started(planned, record)

    def _notify_finish(self, planned: PlannedStage, record: StageRecord) -> None:
        if self.observer is not None:
            self.observer.stage_finished(planned, record)

    def _run_stage(self, planned: PlannedStage, record: StageRecord) -> bool:
        """Run one stage. Returns False when the plan must stop."""
        context = self.context

        if planned.key in self._completed:
            record.skip("Already completed in this run")
            self._notify_finish(planned, record)
            return True

        if not evaluate(planned.stage.activated_by, context.answers, context.activated_features):
            record.skip("Activation condition not met")
            logger.info(f"Skipping {planned.label}: activation condition not met")
            self._notify_finish(planned, record)
            return True

        record.start()
        self._notify_start(planned, record)
        logger.info(f"Running stage {planned.label}")

        ran_steps = 0
        for step in planned.stage.step_order:
            handler = self.handlers[step]
            if not handler.should_run(planned, context):
                continue
            outcome = handler.execute(planned, context)
            record.outcomes[step] = outcome
            if outcome.is_failure:
                record.fail(step, outcome)
                logger.error(f"{planned.label} failed during {step.value}: {outcome.error}")
                self._notify_finish(planned, record)
                return False
            ran_steps += 1
            if outcome.data is not None:
                context.set_result(f"{planned.label}:{step.value}", outcome.data)

        record.complete(format_count_message("Ran", ran_steps, 0, "step"))
        self._completed.add(planned.key)
        context.activated_features.add(planned.feature.id)
        self._notify_finish(planned, record)
        return True
