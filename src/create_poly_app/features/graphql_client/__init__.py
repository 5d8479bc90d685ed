"""GraphQL client feature for the web workspace.

One stage per supported client; the ``graphqlClient`` answer picks which
one runs.
"""

from create_poly_app.activation import and_, equals, includes_value, is_one_of
from create_poly_app.codemods import (
    add_apollo_client_dependencies,
    add_graphql_request_dependencies,
    add_urql_dependencies,
)
from create_poly_app.constants import WORKSPACE_GRAPHQL_SERVER, WORKSPACE_REACT_WEBAPP
from create_poly_app.models import (
    CodeMod,
    ConfigurationPrompt,
    DependencySpec,
    DependencyType,
    Feature,
    FeatureStage,
    PromptType,
    TemplateSpec,
)

CODEGEN_PACKAGES = [
    "@graphql-codegen/cli",
    "@graphql-codegen/typescript",
    "@graphql-codegen/typescript-operations",
]


def _client_stage(
    client: str,
    packages: list[str],
    codegen_plugins: list[str],
    mod: CodeMod,
) -> FeatureStage:
    return FeatureStage(
        name=f"setup-{client}",
        activated_by=equals("graphqlClient", client),
        dependencies=(
            DependencySpec(packages, workspace="web"),
            DependencySpec(
                CODEGEN_PACKAGES + codegen_plugins,
                workspace="web",
                type=DependencyType.DEV_DEPENDENCIES,
            ),
        ),
        templates=(
            TemplateSpec(
                f"graphql_client/templates/{client}",
                "web",
                context={"clientType": client, "graphqlEndpoint": "{{graphqlEndpoint}}"},
            ),
        ),
        mods={"web/package.json": [mod]},
    )


feature = Feature(
    id="graphql-client",
    name="GraphQL Client",
    description="GraphQL client setup with Apollo Client, urql or graphql-request",
    depends_on=("vite",),
    activated_by=and_(
        includes_value("projectWorkspaces", WORKSPACE_REACT_WEBAPP),
        includes_value("projectWorkspaces", WORKSPACE_GRAPHQL_SERVER),
        is_one_of("graphqlClient", ["apollo-client", "urql", "graphql-request"]),
    ),
    configuration=(
        ConfigurationPrompt(
            id="graphqlEndpoint",
            type=PromptType.TEXT,
            title="GraphQL API endpoint",
            description="The URL of your GraphQL API endpoint",
            required=True,
            default_value="http://localhost:4000/graphql",
        ),
    ),
    stages=(
        _client_stage(
            "apollo-client",
            ["@apollo/client", "graphql"],
            ["@graphql-codegen/typescript-react-apollo"],
            add_apollo_client_dependencies,
        ),
        _client_stage(
            "urql",
            ["urql", "graphql"],
            ["@graphql-codegen/typescript-urql"],
            add_urql_dependencies,
        ),
        _client_stage(
            "graphql-request",
            ["graphql-request", "graphql", "@tanstack/react-query"],
            [],
            add_graphql_request_dependencies,
        ),
    ),
)
