"""Prisma ORM feature for the API workspace."""

from create_poly_app.activation import and_, includes_value
from create_poly_app.codemods import mod_package_json_prisma
from create_poly_app.constants import WORKSPACE_GRAPHQL_SERVER
from create_poly_app.models import (
    ConfigurationPrompt,
    Feature,
    FeatureStage,
    PromptType,
    ScriptSpec,
    SelectOption,
    StageStep,
    TemplateSpec,
)

feature = Feature(
    id="prisma",
    name="Prisma ORM",
    description="Database ORM with schema management and type-safe client generation",
    depends_on=("apollo-server",),
    activated_by=and_(
        includes_value("projectWorkspaces", WORKSPACE_GRAPHQL_SERVER),
        includes_value("apiFeatures", "database"),
    ),
    configuration=(
        ConfigurationPrompt(
            id="databaseProvider",
            type=PromptType.SELECT,
            title="Which database should Prisma connect to?",
            default_value="sqlite",
            options=(
                SelectOption("SQLite", "sqlite"),
                SelectOption("PostgreSQL", "postgresql"),
                SelectOption("MySQL", "mysql"),
            ),
        ),
    ),
    stages=(
        FeatureStage(
            name="install-prisma-dependencies",
            scripts=(ScriptSpec("pnpm install prisma @prisma/client", dir="api"),),
        ),
        FeatureStage(
            name="setup-prisma-files",
            scripts=(
                ScriptSpec(
                    "npx prisma init --datasource-provider {{databaseProvider}} "
                    "--output ../generated/prisma",
                    dir="api",
                ),
            ),
            # prisma init writes prisma/schema.prisma, the template replaces it
            templates=(TemplateSpec("prisma/templates", "api"),),
            step_order=(StageStep.SCRIPTS, StageStep.TEMPLATES),
        ),
        FeatureStage(
            name="configure-prisma-scripts",
            mods={"api/package.json": [mod_package_json_prisma]},
        ),
        FeatureStage(
            name="generate-prisma-client",
            scripts=(ScriptSpec("pnpm prisma:generate", dir="api"),),
        ),
    ),
)
