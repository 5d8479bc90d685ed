"""Typed models for stage execution records and the execution report.

The module is organized as follows:
1. Step Result TypedDicts - data attached to successful step outcomes
2. Stage Records - per-stage state machine
3. Execution Report - aggregation returned by the executor
"""

from dataclasses import dataclass, field
from typing import TypedDict

from create_poly_app.models.enums import StageStatus, StageStep
from create_poly_app.pipeline.stage import StageOutcome
from create_poly_app.pipeline.utils import format_count_message

# =============================================================================
# Step Result TypedDicts
# =============================================================================


class StepData(TypedDict):
    """Files touched by a dependencies or templates step."""

    paths: list[str]


class ScriptsData(TypedDict):
    """Commands run by a scripts step and their captured output."""

    commands: list[str]
    output: list[str]


class ModsData(TypedDict):
    """Codemods applied by a mods step as "path:codemod"."""

    paths: list[str]
    mods: list[str]


# =============================================================================
# Stage Records
# =============================================================================

_TRANSITIONS: dict[StageStatus, frozenset[StageStatus]] = {
    StageStatus.PENDING: frozenset({StageStatus.RUNNING, StageStatus.SKIPPED}),
    StageStatus.RUNNING: frozenset({StageStatus.COMPLETED, StageStatus.FAILED}),
    StageStatus.COMPLETED: frozenset(),
    StageStatus.FAILED: frozenset(),
    StageStatus.SKIPPED: frozenset(),
}


@dataclass
class StageRecord:
    """Execution state of one planned stage.

    Attributes:
        feature_id: Owning feature
        stage_name: Stage name within the feature
        status: Current state (pending -> running -> completed|failed|skipped)
        failed_step: Step that failed, when status is failed
        message: Last user-facing message
        error: Technical error details when failed
        output: Captured script output when a script failed
        outcomes: Outcome of every step that ran
    """

    feature_id: str
    stage_name: str
    status: StageStatus = StageStatus.PENDING
    failed_step: StageStep | None = None
    message: str = ""
    error: str | None = None
    output: str = ""
    outcomes: dict[StageStep, StageOutcome] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return f"{self.feature_id}/{self.stage_name}"

    def _transition(self, status: StageStatus) -> None:
        if status not in _TRANSITIONS[self.status]:
            raise ValueError(
                f"Stage {self.label} cannot go from {self.status.value} to {status.value}"
            )
        self.status = status

    def start(self) -> None:
        self._transition(StageStatus.RUNNING)

    def complete(self, message: str = "Completed") -> None:
        self._transition(StageStatus.COMPLETED)
        self.message = message

    def skip(self, reason: str) -> None:
        self._transition(StageStatus.SKIPPED)
        self.message = reason

    def fail(self, step: StageStep, outcome: StageOutcome) -> None:
        self._transition(StageStatus.FAILED)
        self.failed_step = step
        self.message = outcome.message
        self.error = outcome.error
        if outcome.data:
            self.output = str(outcome.data.get("output") or "")


# =============================================================================
# Execution Report
# =============================================================================


@dataclass
class ExecutionReport:
    """Result of executing a plan.

    On failure the remaining stages stay pending and files written by the
    stages that completed are left in place.
    """

    records: list[StageRecord] = field(default_factory=list)
    activated_features: list[str] = field(default_factory=list)

    def _with_status(self, status: StageStatus) -> list[StageRecord]:
        return [record for record in self.records if record.status == status]

    @property
    def completed(self) -> list[StageRecord]:
        return self._with_status(StageStatus.COMPLETED)

    @property
    def skipped(self) -> list[StageRecord]:
        return self._with_status(StageStatus.SKIPPED)

    @property
    def pending(self) -> list[StageRecord]:
        return self._with_status(StageStatus.PENDING)

    @property
    def failure(self) -> StageRecord | None:
        """The first failed stage, if any."""
        failed = self._with_status(StageStatus.FAILED)
        return failed[0] if failed else None

    @property
    def success(self) -> bool:
        return self.failure is None and not self.pending

    def get(self, feature_id: str, stage_name: str) -> StageRecord | None:
        for record in self.records:
            if record.feature_id == feature_id and record.stage_name == stage_name:
                return record
        return None

    def summary(self) -> str:
        message = format_count_message(
            "Completed", len(self.completed), 1 if self.failure else 0, "stage"
        )
        if self.skipped:
            message += f", {len(self.skipped)} skipped"
        return message
