"""Codemods for pnpm-workspace.yaml."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from create_poly_app.codemods.base import read_text_or_empty
from create_poly_app.constants import UI_PACKAGE_DIR
from create_poly_app.exceptions import CodeModError
from create_poly_app.utils import write_file

logger = logging.getLogger(__name__)


def read_workspace_file(file_path: Path) -> dict[str, Any]:
    """Load pnpm-workspace.yaml, a missing or empty file reads as ``{}``."""
    source = read_text_or_empty(file_path)
    try:
        data = yaml.safe_load(source) if source.strip() else {}
    except yaml.YAMLError as e:
        raise CodeModError(f"Failed to parse YAML: {e}", path=file_path) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CodeModError("Expected a mapping at the top level", path=file_path)
    return data


def write_workspace_file(file_path: Path, data: Mapping[str, Any]) -> None:
    content = yaml.safe_dump(dict(data), default_flow_style=False, sort_keys=False, width=1000)
    write_file(file_path, content)


def add_package_to_workspace(file_path: Path, package: str) -> None:
    """Append package to the ``packages`` list unless it is already listed."""
    data = read_workspace_file(file_path)
    packages = data.setdefault("packages", [])
    if not isinstance(packages, list):
        raise CodeModError("'packages' must be a list", path=file_path)
    if package in packages and file_path.exists():
        return
    if package not in packages:
        packages.append(package)
    write_workspace_file(file_path, data)
    logger.info(f"Added {package} to workspace packages in {file_path}")


def set_catalog_entries(file_path: Path, entries: Mapping[str, str]) -> None:
    """Set versions in the default ``catalog`` map, overwriting existing ones."""
    data = read_workspace_file(file_path)
    catalog = data.setdefault("catalog", {})
    if not isinstance(catalog, dict):
        raise CodeModError("'catalog' must be a mapping", path=file_path)
    if file_path.exists() and all(catalog.get(k) == v for k, v in entries.items()):
        return
    catalog.update(entries)
    write_workspace_file(file_path, data)


def add_api_to_pnpm_workspace(file_path: Path) -> None:
    """List the api package in the workspace."""
    add_package_to_workspace(file_path, "api")


def add_web_to_pnpm_workspace(file_path: Path) -> None:
    """List the web package in the workspace."""
    add_package_to_workspace(file_path, "web")


def add_ui_to_pnpm_workspace(file_path: Path) -> None:
    """List the shared UI component package in the workspace."""
    add_package_to_workspace(file_path, UI_PACKAGE_DIR)
