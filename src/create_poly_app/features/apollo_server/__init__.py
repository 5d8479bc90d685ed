"""Apollo Server feature: TypeScript GraphQL API workspace."""

from create_poly_app.activation import includes_value
from create_poly_app.codemods import add_api_to_pnpm_workspace, mod_package_json_apollo_server
from create_poly_app.constants import ROOT_FEATURE_ID, WORKSPACE_GRAPHQL_SERVER
from create_poly_app.models import Feature, FeatureStage, ScriptSpec, TemplateSpec

feature = Feature(
    id="apollo-server",
    name="Apollo Server",
    description="A GraphQL server for the API workspace",
    depends_on=(ROOT_FEATURE_ID,),
    activated_by=includes_value("projectWorkspaces", WORKSPACE_GRAPHQL_SERVER),
    stages=(
        FeatureStage(
            name="setup-api-structure",
            templates=(TemplateSpec("apollo_server/templates", "api"),),
            scripts=(
                ScriptSpec('pnpm init && pnpm pkg set type="module"', dir="api"),
                ScriptSpec("pnpm install -D typescript @types/node tsx", dir="api"),
            ),
            mods={
                "api/package.json": [mod_package_json_apollo_server],
                "pnpm-workspace.yaml": [add_api_to_pnpm_workspace],
            },
        ),
        FeatureStage(
            name="install-dependencies",
            scripts=(ScriptSpec("pnpm install --filter=api @apollo/server graphql", dir="api"),),
        ),
        FeatureStage(
            name="create-modules",
            scripts=(
                ScriptSpec(
                    "pnpm install --filter=api @graphql-tools/load-files @graphql-tools/merge "
                    "@graphql-tools/utils graphql-scalars",
                    dir="api",
                ),
            ),
        ),
    ),
)
