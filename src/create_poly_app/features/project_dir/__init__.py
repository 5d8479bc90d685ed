"""Project directory feature.

Always scheduled first. It owns the global prompts that decide which other
features are selected, creates the project directory and writes the root
workspace files.
"""

from create_poly_app.activation import and_, includes_value
from create_poly_app.constants import (
    ROOT_FEATURE_ID,
    WORKSPACE_GRAPHQL_SERVER,
    WORKSPACE_REACT_WEBAPP,
)
from create_poly_app.models import (
    ConfigurationPrompt,
    Feature,
    FeatureStage,
    PromptType,
    ScriptSpec,
    SelectOption,
    TemplateSpec,
)

GLOBAL_PROMPTS = (
    ConfigurationPrompt(
        id="projectWorkspaces",
        type=PromptType.MULTISELECT,
        title="Which workspaces should the project contain?",
        required=True,
        default_value=[WORKSPACE_REACT_WEBAPP],
        options=(
            SelectOption("React web app (Vite)", WORKSPACE_REACT_WEBAPP),
            SelectOption("GraphQL server (Apollo)", WORKSPACE_GRAPHQL_SERVER),
        ),
    ),
    ConfigurationPrompt(
        id="apiFeatures",
        type=PromptType.MULTISELECT,
        title="Which API features do you need?",
        default_value=[],
        options=(SelectOption("Database (Prisma)", "database"),),
        show_if=includes_value("projectWorkspaces", WORKSPACE_GRAPHQL_SERVER),
    ),
    ConfigurationPrompt(
        id="graphqlClient",
        type=PromptType.SELECT,
        title="Which GraphQL client should the web app use?",
        default_value="none",
        options=(
            SelectOption("Apollo Client", "apollo-client"),
            SelectOption("urql", "urql"),
            SelectOption("graphql-request + TanStack Query", "graphql-request"),
            SelectOption("None", "none"),
        ),
        show_if=and_(
            includes_value("projectWorkspaces", WORKSPACE_REACT_WEBAPP),
            includes_value("projectWorkspaces", WORKSPACE_GRAPHQL_SERVER),
        ),
    ),
    ConfigurationPrompt(
        id="includeUiLibrary",
        type=PromptType.BOOLEAN,
        title="Add a shared UI component library?",
        default_value=False,
        show_if=includes_value("projectWorkspaces", WORKSPACE_REACT_WEBAPP),
    ),
    ConfigurationPrompt(
        id="enableDevX",
        type=PromptType.BOOLEAN,
        title="Add linting, formatting and commit tooling?",
        default_value=False,
    ),
)

feature = Feature(
    id=ROOT_FEATURE_ID,
    name="Project Directory",
    description="The root directory of the project",
    configuration=GLOBAL_PROMPTS,
    stages=(
        FeatureStage(
            name="setup-directory",
            scripts=(ScriptSpec("mkdir -p {{projectName}}", dir=".."),),
        ),
        FeatureStage(
            name="create-workspace",
            templates=(
                TemplateSpec("project_dir/templates/pnpm-workspace.yaml.j2", "pnpm-workspace.yaml"),
                TemplateSpec("project_dir/templates/package.json.j2", "package.json"),
                TemplateSpec("project_dir/templates/gitignore", ".gitignore"),
            ),
        ),
    ),
)
