"""Tailwind CSS feature for the web workspace."""

from create_poly_app.activation import includes_value
from create_poly_app.codemods import add_tailwind_import, add_vite_config
from create_poly_app.constants import WORKSPACE_REACT_WEBAPP
from create_poly_app.models import DependencySpec, DependencyType, Feature, FeatureStage

feature = Feature(
    id="tailwind",
    name="TailwindCSS",
    description="A utility-first CSS framework",
    depends_on=("vite",),
    activated_by=includes_value("projectWorkspaces", WORKSPACE_REACT_WEBAPP),
    stages=(
        FeatureStage(
            name="install-tailwind",
            dependencies=(
                DependencySpec(
                    ["tailwindcss", "@tailwindcss/vite"],
                    workspace="web",
                    type=DependencyType.DEV_DEPENDENCIES,
                ),
            ),
        ),
        FeatureStage(
            name="configure-tailwind",
            mods={
                "web/vite.config.ts": [add_vite_config],
                "web/src/index.css": [add_tailwind_import],
            },
        ),
    ),
)
