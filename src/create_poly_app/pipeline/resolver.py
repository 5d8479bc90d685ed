"""Dependency resolver and scheduler.

Turns requested feature ids into an execution plan:

1. Close the request under ``depends_on`` (unknown ids are fatal).
2. Order the closure topologically; ties keep registry declaration order.
   A cycle is fatal.
3. Walk features in that order. Collect each feature's prompts, then check
   its predicate and each stage's predicate against the answers and the ids
   activated so far. A feature becomes activated once it contributes a stage.
4. Reject plans in which two features write the same file.

Nothing touches the filesystem here except reading template sources to
expand directory templates for the collision check.
"""

import heapq
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from create_poly_app.activation.predicates import evaluate
from create_poly_app.constants import ROOT_FEATURE_ID
from create_poly_app.exceptions import (
    CyclicDependencyError,
    DuplicateDestinationError,
    UnknownFeatureError,
)
from create_poly_app.features.registry import FeatureRegistry
from create_poly_app.models.answers import ConfigurationModel
from create_poly_app.models.feature import Feature, ScriptArgs
from create_poly_app.pipeline.plan import ExecutionPlan, PlannedStage
from create_poly_app.services.prompt_service import AnswerProvider, DefaultAnswerProvider
from create_poly_app.services.template_service import TemplateService

logger = logging.getLogger(__name__)


def dependency_closure(registry: FeatureRegistry, requested_ids: Iterable[str]) -> set[str]:
    """All requested ids plus everything they transitively depend on.

    Raises:
        UnknownFeatureError: If a requested or depended-upon id is not registered
    """
    closure: set[str] = set()
    stack: list[tuple[str, str | None]] = [(fid, None) for fid in requested_ids]
    while stack:
        feature_id, referenced_by = stack.pop()
        if feature_id in closure:
            continue
        if feature_id not in registry:
            raise UnknownFeatureError(feature_id, referenced_by)
        closure.add(feature_id)
        for dependency in registry.get(feature_id).depends_on:
            stack.append((dependency, feature_id))
    return closure


def _find_cycle(registry: FeatureRegistry, candidates: set[str]) -> list[str]:
    """Return one dependency cycle among candidates, first id repeated at the end."""
    visiting: list[str] = []
    visited: set[str] = set()

    def visit(feature_id: str) -> list[str] | None:
        if feature_id in visiting:
            return visiting[visiting.index(feature_id) :] + [feature_id]
        if feature_id in visited:
            return None
        visiting.append(feature_id)
        for dependency in registry.get(feature_id).depends_on:
            if dependency in candidates:
                cycle = visit(dependency)
                if cycle:
                    return cycle
        visiting.pop()
        visited.add(feature_id)
        return None

    for feature_id in sorted(candidates, key=registry.index_of):
        cycle = visit(feature_id)
        if cycle:
            return cycle
    return sorted(candidates, key=registry.index_of)


def sort_features(registry: FeatureRegistry, requested_ids: Iterable[str]) -> list[Feature]:
    """Topologically sort the dependency closure of requested_ids.

    Among features whose dependencies are all placed, the one declared first
    in the registry goes next, so the order is fully deterministic.

    Raises:
        UnknownFeatureError: If an id cannot be found
        CyclicDependencyError: If depends_on forms a cycle
    """
    closure = dependency_closure(registry, requested_ids)

    remaining = {fid: len(set(registry.get(fid).depends_on)) for fid in closure}
    dependents: dict[str, list[str]] = {fid: [] for fid in closure}
    for fid in closure:
        for dependency in set(registry.get(fid).depends_on):
            dependents[dependency].append(fid)

    ready = [(registry.index_of(fid), fid) for fid, count in remaining.items() if count == 0]
    heapq.heapify(ready)

    ordered: list[Feature] = []
    while ready:
        _, feature_id = heapq.heappop(ready)
        ordered.append(registry.get(feature_id))
        for dependent in dependents[feature_id]:
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                heapq.heappush(ready, (registry.index_of(dependent), dependent))

    if len(ordered) != len(closure):
        placed = {feature.id for feature in ordered}
        raise CyclicDependencyError(_find_cycle(registry, closure - placed))

    return ordered


def check_destinations(
    stages: Iterable[PlannedStage],
    tokens: Mapping[str, Any],
    template_service: TemplateService,
) -> None:
    """Reject plans where two features would write the same file.

    A feature may overwrite its own files from a later stage; different
    features may not.

    Raises:
        DuplicateDestinationError: On the first collision
    """
    owners: dict[str, PlannedStage] = {}
    for planned in stages:
        for spec in planned.stage.templates:
            for target in template_service.expand(spec, tokens, strict=False):
                owner = owners.get(target.destination)
                if owner is None:
                    owners[target.destination] = planned
                elif owner.feature.id != planned.feature.id:
                    raise DuplicateDestinationError(target.destination, owner.label, planned.label)


def resolve(
    registry: FeatureRegistry,
    answers: ConfigurationModel,
    requested_ids: Iterable[str],
    provider: AnswerProvider | None = None,
    project_name: str = "",
    project_root: Path | None = None,
    template_service: TemplateService | None = None,
) -> ExecutionPlan:
    """Build the execution plan for the requested features.

    Args:
        registry: Feature catalog
        answers: Configuration model, missing prompt answers are added to it
        requested_ids: Features the user asked for
        provider: Answers prompts that are still unanswered (defaults only
            when None)
        project_name: Used to substitute tokens in template destinations
        project_root: Used to substitute tokens in template destinations
        template_service: Expands template sources for the collision check

    Returns:
        An immutable plan. Raises before returning anything when the
        configuration is invalid, so there is never a partial plan.

    Raises:
        UnknownFeatureError: Unknown requested or depended-upon id
        CyclicDependencyError: Cycle in depends_on
        DuplicateDestinationError: Two features write the same file
        ConfigurationError: Invalid or missing required answers
    """
    provider = provider or DefaultAnswerProvider()
    ordered = sort_features(registry, list(requested_ids))

    activated: list[str] = []
    skipped_features: list[str] = []
    skipped_stages: list[tuple[str, str]] = []
    stages: list[PlannedStage] = []

    for feature in ordered:
        answers.collect(feature.configuration, provider)

        if not evaluate(feature.activated_by, answers, activated):
            logger.info(f"Skipping feature '{feature.id}': {feature.activated_by.describe()}")
            skipped_features.append(feature.id)
            continue

        for stage in feature.stages:
            if not evaluate(stage.activated_by, answers, activated):
                logger.info(f"Skipping stage '{feature.id}/{stage.name}'")
                skipped_stages.append((feature.id, stage.name))
                continue
            stages.append(PlannedStage(feature, stage))
            if feature.id not in activated:
                activated.append(feature.id)

        if feature.id not in activated:
            logger.info(f"Feature '{feature.id}' has no active stages")

    args = ScriptArgs(
        project_name=project_name,
        project_root=project_root or Path.cwd() / project_name,
        enabled_features=tuple(activated),
        answers=answers,
    )
    check_destinations(stages, args.tokens(), template_service or TemplateService())

    plan = ExecutionPlan(
        stages=tuple(stages),
        feature_order=tuple(feature.id for feature in ordered),
        activated_features=tuple(activated),
        skipped_features=tuple(skipped_features),
        skipped_stages=tuple(skipped_stages),
        answers=answers.as_dict(),
    )
    logger.info(f"Resolved {len(plan)} stage(s) from features {list(plan.activated_features)}")
    return plan


def select_features_from_answers(
    registry: FeatureRegistry,
    answers: Mapping[str, Any],
) -> list[str]:
    """Pick features whose own predicate already holds for the answers.

    The root feature is always included. Predicates that reference other
    features' activation are evaluated with nothing activated yet; the
    resolver re-checks everything with the real activation state.
    """
    selected = [
        feature.id
        for feature in registry
        if feature.id == ROOT_FEATURE_ID
        or (feature.activated_by is not None and evaluate(feature.activated_by, answers))
    ]
    if ROOT_FEATURE_ID in registry and ROOT_FEATURE_ID not in selected:
        selected.insert(0, ROOT_FEATURE_ID)
    return selected
