"""Ordered catalog of feature descriptors."""

from collections.abc import Iterable, Iterator

from create_poly_app.exceptions import ConfigurationError, UnknownFeatureError
from create_poly_app.models.feature import Feature


class FeatureRegistry:
    """Static, ordered collection of features keyed by id.

    Declaration order is significant: the resolver uses it to break ties
    between features that have no ordering constraint between them.
    """

    def __init__(self, features: Iterable[Feature]):
        self._features: dict[str, Feature] = {}
        for feature in features:
            if feature.id in self._features:
                raise ConfigurationError("Duplicate feature id", feature_id=feature.id)
            self._features[feature.id] = feature
        self._order = {feature_id: index for index, feature_id in enumerate(self._features)}

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._features

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features.values())

    def __len__(self) -> int:
        return len(self._features)

    def get(self, feature_id: str) -> Feature:
        """Get a feature by id.

        Raises:
            UnknownFeatureError: If no feature has this id
        """
        try:
            return self._features[feature_id]
        except KeyError:
            raise UnknownFeatureError(feature_id) from None

    def ids(self) -> list[str]:
        return list(self._features)

    def index_of(self, feature_id: str) -> int:
        """Declaration position of a feature."""
        if feature_id not in self._order:
            raise UnknownFeatureError(feature_id)
        return self._order[feature_id]
