"""Built-in features.

Each feature lives in its own package next to the templates it copies.
Declaration order below is the tie-break order used by the resolver.
"""

from create_poly_app.features.apollo_server import feature as apollo_server
from create_poly_app.features.developer_experience import feature as developer_experience
from create_poly_app.features.graphql_client import feature as graphql_client
from create_poly_app.features.prisma import feature as prisma
from create_poly_app.features.project_dir import feature as project_dir
from create_poly_app.features.registry import FeatureRegistry
from create_poly_app.features.tailwind import feature as tailwind
from create_poly_app.features.ui_component_library import feature as ui_component_library
from create_poly_app.features.vite import feature as vite

FEATURES = FeatureRegistry(
    [
        project_dir,
        vite,
        tailwind,
        apollo_server,
        prisma,
        graphql_client,
        ui_component_library,
        developer_experience,
    ]
)


def get_feature_registry() -> FeatureRegistry:
    """Get the registry of built-in features."""
    return FEATURES


__all__ = ["FEATURES", "FeatureRegistry", "get_feature_registry"]
