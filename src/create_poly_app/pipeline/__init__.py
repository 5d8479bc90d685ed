"""Resolution and staged execution of features.

The pipeline has two halves:
- resolver: requested ids + answers -> ExecutionPlan (pure, no writes)
- executor: ExecutionPlan -> ExecutionReport (writes files, runs scripts)
"""

from create_poly_app.pipeline.context import PipelineContext
from create_poly_app.pipeline.executor import StageExecutor, StageObserver
from create_poly_app.pipeline.models import ExecutionReport, StageRecord
from create_poly_app.pipeline.plan import ExecutionPlan, PlannedStage
from create_poly_app.pipeline.resolver import (
    dependency_closure,
    resolve,
    select_features_from_answers,
    sort_features,
)
from create_poly_app.pipeline.stage import BaseStep, StageOutcome, StageResult, Step

__all__ = [
    "BaseStep",
    "ExecutionPlan",
    "ExecutionReport",
    "PipelineContext",
    "PlannedStage",
    "StageExecutor",
    "StageObserver",
    "StageOutcome",
    "StageRecord",
    "StageResult",
    "Step",
    "dependency_closure",
    "resolve",
    "select_features_from_answers",
    "sort_features",
]
