"""Vite feature: React + TypeScript web workspace."""

from create_poly_app.activation import includes_value
from create_poly_app.codemods import add_web_to_pnpm_workspace
from create_poly_app.constants import ROOT_FEATURE_ID, WORKSPACE_REACT_WEBAPP
from create_poly_app.models import Feature, FeatureStage, ScriptSpec

feature = Feature(
    id="vite",
    name="Vite",
    description="A modern frontend build tool",
    depends_on=(ROOT_FEATURE_ID,),
    activated_by=includes_value("projectWorkspaces", WORKSPACE_REACT_WEBAPP),
    stages=(
        FeatureStage(
            name="create-vite-app",
            scripts=(ScriptSpec("npm create vite@latest web -- --template react-ts"),),
            mods={"pnpm-workspace.yaml": [add_web_to_pnpm_workspace]},
        ),
    ),
)
