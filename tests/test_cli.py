"""Tests for the create-poly-app command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from create_poly_app import __version__
from create_poly_app.cli import app
from create_poly_app.commands.create_cmd import parse_set_option
from create_poly_app.features.registry import FeatureRegistry
from create_poly_app.models import Feature, FeatureStage, ScriptSpec, TemplateSpec
from create_poly_app.services import FeatureService


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def stub_catalog(monkeypatch: pytest.MonkeyPatch, templates_dir: Path):
    """Replace the bundled catalog with one that needs no package manager."""

    def _install(*extra: Feature) -> FeatureRegistry:
        root = Feature(
            id="project-dir",
            name="Project",
            stages=(
                FeatureStage(
                    "write-readme",
                    templates=(TemplateSpec(str(templates_dir / "greeting.txt.j2"), "README.md"),),
                ),
            ),
        )
        registry = FeatureRegistry([root, *extra])
        monkeypatch.setattr(
            "create_poly_app.commands.create_cmd.get_feature_service",
            lambda: FeatureService(registry),
        )
        return registry

    return _install


class TestInfoCommands:
    """Tests for version and features."""

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["version"], catch_exceptions=False)
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"], catch_exceptions=False)
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_features(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["features"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "Available Features" in result.stdout
        assert "prisma" in result.stdout

    def test_features_verbose(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["features", "--verbose"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "databaseProvider" in result.stdout
        assert "vite is required by: tailwind, graphql-client" in result.stdout


class TestPlanCommand:
    """Tests for printing the plan."""

    def test_plan_from_set_values(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            app,
            [
                "plan",
                "demo",
                "--no-interactive",
                "--set",
                "projectWorkspaces=[react-webapp, graphql-server]",
                "--set",
                "apiFeatures=[database]",
                "-o",
                str(tmp_path),
            ],
            catch_exceptions=False,
        )
        assert result.exit_code == 0
        assert "Execution Plan" in result.stdout
        assert "Resolved 12 stage(s) from 5 feature(s)" in result.stdout
        assert not (tmp_path / "demo").exists()

    def test_plan_from_answers_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        answers = tmp_path / "answers.yaml"
        answers.write_text("projectWorkspaces:\n  - react-webapp\nenableDevX: false\n")
        result = cli_runner.invoke(
            app,
            ["plan", "demo", "--no-interactive", "-a", str(answers), "-o", str(tmp_path)],
            catch_exceptions=False,
        )
        assert result.exit_code == 0
        assert "Resolved 5 stage(s) from 3 feature(s)" in result.stdout

    def test_invalid_answer(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["plan", "demo", "--no-interactive", "--set", "enableDevX=maybe", "-o", str(tmp_path)],
            catch_exceptions=False,
        )
        assert result.exit_code == 1
        assert "Could not build an execution plan" in result.stdout

    def test_unknown_feature(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["plan", "demo", "--no-interactive", "-f", "storybook", "-o", str(tmp_path)],
            catch_exceptions=False,
        )
        assert result.exit_code == 1
        assert "storybook" in result.stdout

    def test_missing_answers_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["plan", "demo", "--no-interactive", "-a", str(tmp_path / "missing.yaml")],
            catch_exceptions=False,
        )
        assert result.exit_code == 1
        assert "Answers file not found" in result.stdout

    def test_answers_file_must_be_a_mapping(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        answers = tmp_path / "answers.yaml"
        answers.write_text("- react-webapp\n")
        result = cli_runner.invoke(
            app,
            ["plan", "demo", "--no-interactive", "-a", str(answers)],
            catch_exceptions=False,
        )
        assert result.exit_code == 1
        assert "must contain a mapping" in result.stdout

    def test_set_without_key(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["plan", "demo", "--no-interactive", "--set", "novalue"])
        assert result.exit_code == 2
        assert "novalue" in result.output


class TestCreateCommand:
    """Tests for running the plan."""

    def test_dry_run_writes_nothing(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["create", "demo", "--dry-run", "--no-interactive", "-o", str(tmp_path)],
            catch_exceptions=False,
        )
        assert result.exit_code == 0
        assert "Dry run" in result.stdout
        assert not (tmp_path / "demo").exists()

    def test_creates_project(self, cli_runner: CliRunner, tmp_path: Path, stub_catalog) -> None:
        stub_catalog()
        result = cli_runner.invoke(
            app,
            ["create", "demo", "--no-interactive", "-o", str(tmp_path)],
            catch_exceptions=False,
        )
        assert result.exit_code == 0
        assert "Next Steps" in result.stdout
        assert (tmp_path / "demo" / "README.md").read_text() == "Hello demo!\n"
        assert (tmp_path / "create-poly-app.log").exists()

    def test_output_dir_defaults_to_cwd(self, cli_runner: CliRunner, temp_project_dir: Path, stub_catalog) -> None:
        stub_catalog()
        result = cli_runner.invoke(app, ["create", "demo", "--no-interactive"], catch_exceptions=False)
        assert result.exit_code == 0
        assert (temp_project_dir / "demo" / "README.md").exists()

    def test_failing_stage(self, cli_runner: CliRunner, tmp_path: Path, stub_catalog) -> None:
        stub_catalog(
            Feature(
                id="broken",
                name="Broken",
                depends_on=("project-dir",),
                stages=(
                    FeatureStage("install", scripts=(ScriptSpec("echo resolving-packages; exit 4"),)),
                    FeatureStage("after", scripts=(ScriptSpec("touch after.txt"),)),
                ),
            )
        )
        result = cli_runner.invoke(
            app,
            ["create", "demo", "-f", "broken", "--no-interactive", "-o", str(tmp_path)],
            catch_exceptions=False,
        )
        assert result.exit_code == 1
        assert "Stage 'install' of feature 'broken' failed during scripts" in result.stdout
        assert "resolving-packages" in result.stdout
        assert "left in place" in result.stdout

        project = tmp_path / "demo"
        assert (project / "README.md").exists()
        assert not (project / "after.txt").exists()

    def test_refuses_non_empty_directory(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "demo").mkdir()
        (tmp_path / "demo" / "keep.txt").write_text("mine\n")
        result = cli_runner.invoke(
            app,
            ["create", "demo", "--no-interactive", "-o", str(tmp_path)],
            catch_exceptions=False,
        )
        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_no_stages(self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        registry = FeatureRegistry([Feature(id="project-dir", name="Project")])
        monkeypatch.setattr(
            "create_poly_app.commands.create_cmd.get_feature_service",
            lambda: FeatureService(registry),
        )
        result = cli_runner.invoke(
            app,
            ["create", "demo", "--no-interactive", "-o", str(tmp_path)],
            catch_exceptions=False,
        )
        assert result.exit_code == 1
        assert "No stages to run" in result.stdout


class TestParseSetOption:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("enableDevX=true", ("enableDevX", True)),
            ("databaseProvider=mysql", ("databaseProvider", "mysql")),
            ("projectWorkspaces=[react-webapp]", ("projectWorkspaces", ["react-webapp"])),
            ("graphqlEndpoint=http://localhost:4000/graphql", ("graphqlEndpoint", "http://localhost:4000/graphql")),
            ("name=", ("name", "")),
            ("odd=[unclosed", ("odd", "[unclosed")),
        ],
    )
    def test_values(self, value: str, expected: tuple) -> None:
        assert parse_set_option(value) == expected
