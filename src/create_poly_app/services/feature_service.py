"""Feature service for querying the feature catalog and building plans."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from create_poly_app.constants import ROOT_FEATURE_ID
from create_poly_app.exceptions import UnknownFeatureError
from create_poly_app.models.answers import ConfigurationModel
from create_poly_app.models.feature import Feature

if TYPE_CHECKING:
    from create_poly_app.features.registry import FeatureRegistry
    from create_poly_app.pipeline.plan import ExecutionPlan
    from create_poly_app.services.prompt_service import AnswerProvider

logger = logging.getLogger(__name__)


class FeatureService:
    """Service for feature lookup, dependency queries and plan resolution."""

    def __init__(self, registry: "FeatureRegistry | None" = None):
        """Initialize feature service.

        Args:
            registry: Feature catalog (defaults to the built-in features)
        """
        if registry is None:
            from create_poly_app.features import get_feature_registry

            registry = get_feature_registry()
        self.registry = registry

    def list_available_features(self) -> list[Feature]:
        """List all features in declaration order."""
        return list(self.registry)

    def get_feature(self, feature_id: str) -> Feature | None:
        """Get a feature by id.

        Args:
            feature_id: Feature id

        Returns:
            Feature or None if not registered
        """
        if feature_id not in self.registry:
            return None
        return self.registry.get(feature_id)

    def get_feature_dependencies(self, feature_id: str) -> list[str]:
        """Get direct dependencies for a feature.

        Args:
            feature_id: Feature id

        Returns:
            List of dependency feature ids
        """
        feature = self.get_feature(feature_id)
        if feature:
            return list(feature.depends_on)
        return []

    def get_all_dependencies(self, feature_id: str) -> list[str]:
        """Get all transitive dependencies for a feature, in execution order.

        Args:
            feature_id: Feature id

        Returns:
            List of dependency ids (the feature itself excluded)

        Raises:
            UnknownFeatureError: If the feature or a dependency is unknown
            CyclicDependencyError: If dependencies form a cycle
        """
        return [fid for fid in self.resolve_dependencies([feature_id]) if fid != feature_id]

    def resolve_dependencies(self, feature_ids: Iterable[str]) -> list[str]:
        """Add missing dependencies and return ids in execution order.

        Args:
            feature_ids: Requested feature ids

        Returns:
            Feature ids of the dependency closure, topologically sorted
        """
        from create_poly_app.pipeline.resolver import sort_features

        return [feature.id for feature in sort_features(self.registry, list(feature_ids))]

    def get_features_requiring(self, feature_id: str) -> list[str]:
        """Get features that directly depend on the given feature.

        Args:
            feature_id: Feature id

        Returns:
            List of feature ids that require this feature
        """
        return [feature.id for feature in self.registry if feature_id in feature.depends_on]

    def collect_global_answers(
        self,
        answers: ConfigurationModel,
        provider: "AnswerProvider",
    ) -> list[str]:
        """Ask the root feature's prompts.

        These answers decide which other features are selected, so they are
        needed before feature selection.

        Returns:
            Keys answered by this call
        """
        root = self.get_feature(ROOT_FEATURE_ID)
        if root is None:
            return []
        return answers.collect(root.configuration, provider)

    def select_features(
        self,
        answers: ConfigurationModel,
        requested: Iterable[str] = (),
    ) -> list[str]:
        """Features to resolve: explicit requests, or a selection from the answers.

        Raises:
            UnknownFeatureError: If an explicitly requested id is unknown
        """
        from create_poly_app.pipeline.resolver import select_features_from_answers

        requested = list(dict.fromkeys(requested))
        for feature_id in requested:
            if feature_id not in self.registry:
                raise UnknownFeatureError(feature_id)

        if not requested:
            selected = select_features_from_answers(self.registry, answers)
            logger.info(f"Selected features from answers: {selected}")
            return selected

        if ROOT_FEATURE_ID in self.registry and ROOT_FEATURE_ID not in requested:
            requested.insert(0, ROOT_FEATURE_ID)
        return requested

    def build_plan(
        self,
        answers: ConfigurationModel,
        requested: Iterable[str],
        provider: "AnswerProvider | None" = None,
        project_name: str = "",
        project_root: Path | None = None,
    ) -> "ExecutionPlan":
        """Resolve an execution plan for the requested features.

        Raises:
            ConfigurationError: On unknown ids, cycles, invalid answers or
                colliding template destinations
        """
        from create_poly_app.pipeline.resolver import resolve

        return resolve(
            self.registry,
            answers,
            requested,
            provider=provider,
            project_name=project_name,
            project_root=project_root,
        )


def get_feature_service(registry: "FeatureRegistry | None" = None) -> FeatureService:
    """Get a FeatureService instance.

    Args:
        registry: Feature catalog (defaults to the built-in features)

    Returns:
        FeatureService instance
    """
    return FeatureService(registry)
