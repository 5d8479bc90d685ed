"""Tests for the bundled feature catalog."""

import json
from pathlib import Path

import pytest
import yaml

from create_poly_app.constants import ROOT_FEATURE_ID
from create_poly_app.features import FEATURES, get_feature_registry
from create_poly_app.models import ConfigurationModel, StageStep
from create_poly_app.pipeline import (
    BaseStep,
    PipelineContext,
    StageExecutor,
    StageOutcome,
    resolve,
    select_features_from_answers,
    sort_features,
)
from create_poly_app.pipeline.steps import get_step_handlers
from create_poly_app.services import TemplateService

FULL_STACK = {
    "projectWorkspaces": ["react-webapp", "graphql-server"],
    "apiFeatures": ["database"],
    "graphqlClient": "urql",
    "databaseProvider": "postgresql",
    "enableDevX": True,
}


class NoScripts(BaseStep):
    """Leaves scripts out so the catalog runs without pnpm or network."""

    step = StageStep.SCRIPTS
    display_name = "Skip scripts"

    def should_run(self, planned, context) -> bool:
        return False

    def _execute(self, planned, context) -> StageOutcome:
        return StageOutcome.success("Scripts disabled")


def run_catalog(answer_values: dict, root: Path, settings) -> Path:
    """Resolve the bundled catalog for the answers and run it without scripts."""
    answers = ConfigurationModel(dict(answer_values))
    plan = resolve(
        FEATURES,
        answers,
        select_features_from_answers(FEATURES, answers),
        project_name=root.name,
        project_root=root,
    )
    handlers = get_step_handlers()
    handlers[StageStep.SCRIPTS] = NoScripts()
    context = PipelineContext(
        project_root=root,
        project_name=root.name,
        answers=answers,
        settings=settings,
    )
    report = StageExecutor(context, handlers=handlers).execute(plan)
    assert report.success, report.failure
    return root


class TestCatalogDeclarations:
    """Static checks over every bundled feature."""

    def test_root_feature_is_first(self) -> None:
        assert FEATURES.ids()[0] == ROOT_FEATURE_ID
        assert get_feature_registry() is FEATURES

    def test_whole_catalog_sorts(self) -> None:
        assert [f.id for f in sort_features(FEATURES, FEATURES.ids())] == [
            "project-dir",
            "vite",
            "tailwind",
            "apollo-server",
            "prisma",
            "graphql-client",
            "ui-component-library",
            "developer-experience",
        ]

    @pytest.mark.parametrize("feature", list(FEATURES), ids=lambda f: f.id)
    def test_template_sources_exist(self, feature) -> None:
        service = TemplateService()
        for stage in feature.stages:
            for spec in stage.templates:
                assert service.expand(spec, {"projectName": "demo"}), f"{feature.id}/{stage.name}"

    @pytest.mark.parametrize("client", ["apollo-client", "urql", "graphql-request"])
    def test_each_client_has_its_own_stage(self, client: str) -> None:
        answers = ConfigurationModel({**FULL_STACK, "graphqlClient": client})
        plan = resolve(FEATURES, answers, ["graphql-client"])
        assert [p.stage.name for p in plan.stages_for("graphql-client")] == [f"setup-{client}"]

    def test_no_client_skips_feature(self) -> None:
        answers = ConfigurationModel({**FULL_STACK, "graphqlClient": "none"})
        assert "graphql-client" not in select_features_from_answers(FEATURES, answers)
        plan = resolve(FEATURES, answers, ["graphql-client"])
        assert plan.skipped_features == ("graphql-client",)


class TestCatalogExecution:
    """Runs the full stack plan with scripts disabled."""

    @pytest.fixture
    def project(self, tmp_path: Path, execution_settings) -> Path:
        return run_catalog(FULL_STACK, tmp_path / "My_App", execution_settings)

    def test_root_manifest(self, project: Path) -> None:
        manifest = json.loads((project / "package.json").read_text())
        assert manifest["name"] == "my-app"
        assert manifest["private"] is True
        assert manifest["devDependencies"]["eslint"] == "latest"
        assert manifest["scripts"]["lint:fix"] == "eslint . --ext ts,tsx --fix"

    def test_workspace_packages(self, project: Path) -> None:
        workspace = yaml.safe_load((project / "pnpm-workspace.yaml").read_text())
        assert workspace["packages"] == ["web", "api"]

    def test_api_workspace(self, project: Path) -> None:
        manifest = json.loads((project / "api" / "package.json").read_text())
        assert manifest["type"] == "module"
        assert manifest["scripts"]["prisma:generate"] == "prisma generate"
        assert 'provider = "postgresql"' in (project / "api" / "prisma" / "schema.prisma").read_text()
        assert (project / "api" / "src" / "index.ts").exists()
        assert (project / "api" / "src" / "db.ts").exists()

    def test_web_workspace(self, project: Path) -> None:
        manifest = json.loads((project / "web" / "package.json").read_text())
        assert manifest["dependencies"]["urql"] == "latest"
        assert manifest["devDependencies"]["tailwindcss"] == "latest"
        assert "@graphql-codegen/typescript-urql" in manifest["devDependencies"]

        client = (project / "web" / "src" / "graphql" / "client.ts").read_text()
        assert "'http://localhost:4000/graphql'" in client
        codegen = (project / "web" / "codegen.ts").read_text()
        assert "typescript-urql" in codegen
        assert "typescript-react-apollo" not in codegen

        assert (project / "web" / "src" / "index.css").read_text().startswith('@import "tailwindcss";')
        assert "tailwindcss()" in (project / "web" / "vite.config.ts").read_text()

    def test_devx_files(self, project: Path) -> None:
        assert (project / ".prettierrc.json").exists()
        assert (project / ".lintstagedrc.json").exists()
        assert not (project / ".releaserc.json").exists()
        assert "jsx-a11y" in (project / "eslint.config.js").read_text()


class TestUiComponentLibraryExecution:
    """Runs the web app with a Mantine-based component package."""

    @pytest.fixture
    def project(self, tmp_path: Path, execution_settings) -> Path:
        answers = {
            "projectWorkspaces": ["react-webapp"],
            "includeUiLibrary": True,
            "componentLibrary": "package",
            "packageLibrary": "mantine",
            "integrations": ["storybook", "icons"],
            "enableDevX": False,
        }
        return run_catalog(answers, tmp_path / "My_App", execution_settings)

    def test_ui_manifest(self, project: Path) -> None:
        manifest = json.loads((project / "packages" / "ui" / "package.json").read_text())
        assert manifest["name"] == "@repo/ui"
        assert manifest["main"] == "./src/index.ts"
        assert manifest["dependencies"]["@mantine/core"] == "latest"
        assert "@chakra-ui/react" not in manifest["dependencies"]
        assert manifest["devDependencies"]["storybook"] == "latest"
        assert manifest["peerDependencies"]["react"]
        assert manifest["scripts"]["storybook"] == "storybook dev -p 6006"

    def test_ui_sources(self, project: Path) -> None:
        src = project / "packages" / "ui" / "src"
        provider = (src / "provider.tsx").read_text()
        assert "MantineProvider" in provider
        assert "ChakraProvider" not in provider

        index = (src / "index.ts").read_text()
        assert "export * from './provider'" in index
        assert "export * from './tokens'" in index
        assert "./lib/utils" not in index
        assert not (src / "lib" / "utils.ts").exists()
        assert "export const isWeb = true" in (src / "platform.ts").read_text()
        assert "colors.primary" in (src / "theme.ts").read_text()
        assert (project / "packages" / "ui" / ".storybook" / "main.ts").exists()

    def test_workspace_wiring(self, project: Path) -> None:
        workspace = yaml.safe_load((project / "pnpm-workspace.yaml").read_text())
        assert workspace["packages"] == ["web", "packages/ui"]

        web = json.loads((project / "web" / "package.json").read_text())
        assert web["dependencies"]["@repo/ui"] == "workspace:*"
        root = json.loads((project / "package.json").read_text())
        assert root["scripts"]["build:ui"] == "pnpm --filter @repo/ui build"
