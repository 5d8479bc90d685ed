"""Pytest configuration and fixtures for create-poly-app tests."""

import logging
import os
import shutil
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from create_poly_app.config.log_setup import PACKAGE_LOGGER
from create_poly_app.config.settings import ExecutionSettings
from create_poly_app.features.registry import FeatureRegistry
from create_poly_app.models import ConfigurationModel, Feature, FeatureStage
from create_poly_app.pipeline import PipelineContext


@pytest.fixture
def temp_project_dir() -> Iterator[Path]:
    """Create a temporary working directory and chdir into it.

    Yields:
        Path to temporary directory
    """
    temp_dir = Path(tempfile.mkdtemp(prefix="create-poly-app-test-"))
    original_cwd = Path.cwd()
    try:
        os.chdir(temp_dir)
        yield temp_dir
    finally:
        os.chdir(original_cwd)
        shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def execution_settings() -> ExecutionSettings:
    """Execution settings with a short script timeout."""
    return ExecutionSettings(script_timeout_seconds=10)


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """A small template tree used instead of the bundled features directory.

    Layout:
        single.txt
        greeting.txt.j2
        bundle/a.txt
        bundle/nested/b.json.j2
    """
    root = tmp_path / "templates"
    (root / "bundle" / "nested").mkdir(parents=True)
    (root / "single.txt").write_text("plain {{ not rendered }}\n", encoding="utf-8")
    (root / "greeting.txt.j2").write_text("Hello {{ projectName }}!\n", encoding="utf-8")
    (root / "bundle" / "a.txt").write_text("a\n", encoding="utf-8")
    (root / "bundle" / "nested" / "b.json.j2").write_text(
        '{"name": "{{ projectName | kebab_case }}"}\n', encoding="utf-8"
    )
    return root


@pytest.fixture
def make_context(
    tmp_path: Path,
    execution_settings: ExecutionSettings,
    templates_dir: Path,
) -> Callable[..., PipelineContext]:
    """Factory for pipeline contexts rooted at tmp_path/project."""

    def _make(answers: dict[str, Any] | None = None, **kwargs: Any) -> PipelineContext:
        project_root = kwargs.pop("project_root", tmp_path / "project")
        project_root.mkdir(parents=True, exist_ok=True)
        return PipelineContext(
            project_root=project_root,
            project_name=kwargs.pop("project_name", "demo"),
            answers=ConfigurationModel(answers or {}),
            settings=kwargs.pop("settings", execution_settings),
            templates_dir=kwargs.pop("templates_dir", templates_dir),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_registry() -> Callable[..., FeatureRegistry]:
    """Factory for registries of stub features.

    Each keyword maps a feature id to its depends_on ids. Every feature gets
    one empty stage named "run" unless a Feature is passed in ``extra``.
    """

    def _make(*extra: Feature, **depends: tuple[str, ...]) -> FeatureRegistry:
        features = [
            Feature(
                id=feature_id.replace("_", "-"),
                name=feature_id,
                depends_on=tuple(deps),
                stages=(FeatureStage(name="run"),),
            )
            for feature_id, deps in depends.items()
        ]
        return FeatureRegistry([*features, *extra])

    return _make


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo configure_logging so log capture works in every test."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
