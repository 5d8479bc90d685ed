"""Execution plan produced by the resolver."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from create_poly_app.activation.predicates import Predicate
from create_poly_app.models.feature import Feature, FeatureStage


@dataclass(frozen=True)
class PlannedStage:
    """A stage scheduled for execution, tagged with its owning feature."""

    feature: Feature
    stage: FeatureStage

    @property
    def key(self) -> tuple[str, str]:
        return (self.feature.id, self.stage.name)

    @property
    def label(self) -> str:
        return f"{self.feature.id}/{self.stage.name}"


@dataclass(frozen=True)
class ExecutionPlan:
    """Immutable, ordered list of stages to run.

    Attributes:
        stages: Stages in execution order
        feature_order: Every feature of the dependency closure, topologically sorted
        activated_features: Features that contributed at least one stage
        skipped_features: Features whose predicate was false
        skipped_stages: (feature id, stage name) pairs whose predicate was false
        answers: Snapshot of the answers the plan was resolved against
    """

    stages: tuple[PlannedStage, ...]
    feature_order: tuple[str, ...] = ()
    activated_features: tuple[str, ...] = ()
    skipped_features: tuple[str, ...] = ()
    skipped_stages: tuple[tuple[str, str], ...] = ()
    answers: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "stages", tuple(self.stages))
        object.__setattr__(self, "answers", MappingProxyType(dict(self.answers)))

    def __iter__(self) -> Iterator[PlannedStage]:
        return iter(self.stages)

    def __len__(self) -> int:
        return len(self.stages)

    @property
    def is_empty(self) -> bool:
        return not self.stages

    def keys(self) -> list[tuple[str, str]]:
        """(feature id, stage name) pairs in execution order."""
        return [planned.key for planned in self.stages]

    def stages_for(self, feature_id: str) -> list[PlannedStage]:
        return [planned for planned in self.stages if planned.feature.id == feature_id]

    def describe(self) -> list[str]:
        """Human readable lines, one per feature of the closure."""
        lines: list[str] = []
        for feature_id in self.feature_order:
            if feature_id in self.skipped_features:
                lines.append(f"- {feature_id}: skipped")
                continue
            planned = self.stages_for(feature_id)
            if not planned:
                lines.append(f"- {feature_id}: no active stages")
                continue
            lines.append(f"- {feature_id}:")
            for item in planned:
                lines.append(f"    {item.stage.name}{_gate(item.stage.activated_by)}")
        return lines


def _gate(predicate: Predicate | None) -> str:
    return f"  [when {predicate.describe()}]" if predicate is not None else ""
