"""Tests for ScriptRunner."""

from pathlib import Path

import pytest

from create_poly_app.exceptions import ScriptError
from create_poly_app.models import ScriptArgs, ScriptSpec
from create_poly_app.services import ScriptRunner


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "demo"
    root.mkdir()
    return root


@pytest.fixture
def args(project_root: Path) -> ScriptArgs:
    return ScriptArgs(
        project_name="demo",
        project_root=project_root,
        enabled_features=("project-dir", "prisma"),
        answers={"databaseProvider": "sqlite", "enableDevX": False},
    )


class TestBuildCommand:
    """Tests for command construction."""

    def test_substitutes_tokens(self, project_root: Path, args: ScriptArgs) -> None:
        runner = ScriptRunner(project_root)
        spec = ScriptSpec("npx prisma init --datasource-provider {{databaseProvider}}")
        assert runner.build_command(spec, args) == "npx prisma init --datasource-provider sqlite"

    def test_lists_and_booleans(self, project_root: Path, args: ScriptArgs) -> None:
        runner = ScriptRunner(project_root)
        spec = ScriptSpec("echo {{enabledFeatures}} {{enableDevX}} {{unknownKey}}")
        assert runner.build_command(spec, args) == "echo project-dir,prisma false {{unknownKey}}"

    def test_callable_source(self, project_root: Path, args: ScriptArgs) -> None:
        runner = ScriptRunner(project_root)
        spec = ScriptSpec(lambda a: f"mkdir -p {a.project_name}")
        assert runner.build_command(spec, args) == "mkdir -p demo"

    def test_dir_is_relative_to_project_root(self, project_root: Path, args: ScriptArgs) -> None:
        runner = ScriptRunner(project_root)
        assert runner.resolve_dir(ScriptSpec("true", dir=".."), args) == project_root.parent.resolve()
        assert runner.resolve_dir(ScriptSpec("true", dir="api"), args) == (project_root / "api").resolve()


class TestRun:
    """Tests for running commands."""

    def test_captures_output(self, project_root: Path, args: ScriptArgs) -> None:
        result = ScriptRunner(project_root).run(ScriptSpec("echo out; echo err >&2"), args)
        assert result.returncode == 0
        assert result.stdout.strip() == "out"
        assert result.stderr.strip() == "err"
        assert result.output == "out\nerr"

    def test_runs_in_script_dir(self, project_root: Path, args: ScriptArgs) -> None:
        result = ScriptRunner(project_root).run(ScriptSpec("pwd", dir="web"), args)
        assert Path(result.stdout.strip()).resolve() == (project_root / "web").resolve()

    def test_non_zero_exit(self, project_root: Path, args: ScriptArgs) -> None:
        with pytest.raises(ScriptError) as exc_info:
            ScriptRunner(project_root).run(ScriptSpec("echo partial; exit 7"), args)
        error = exc_info.value
        assert error.returncode == 7
        assert error.command == "echo partial; exit 7"
        assert error.output == "partial"
        assert not error.timed_out
        assert "exited with code 7" in str(error)

    def test_timeout(self, project_root: Path, args: ScriptArgs) -> None:
        runner = ScriptRunner(project_root, timeout_seconds=0.5)
        with pytest.raises(ScriptError) as exc_info:
            runner.run(ScriptSpec("sleep 5"), args)
        assert exc_info.value.timed_out
        assert exc_info.value.returncode is None
        assert "timed out" in str(exc_info.value)
