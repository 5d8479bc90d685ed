"""Workspace manifest service.

Merges declared package dependencies into the package.json of a workspace.
Merging overwrites keys, so applying the same declaration twice is a no-op.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from create_poly_app.codemods.base import read_json_file, update_json_file
from create_poly_app.codemods.workspace_yaml import set_catalog_entries
from create_poly_app.config.paths import PACKAGE_JSON, PNPM_WORKSPACE_FILE, ROOT_WORKSPACE_ALIASES
from create_poly_app.constants import CATALOG_REFERENCE, DEFAULT_DEPENDENCY_VERSION
from create_poly_app.exceptions import CodeModError
from create_poly_app.models.feature import DependencySpec
from create_poly_app.utils import normalize_relative, substitute_tokens

logger = logging.getLogger(__name__)


class WorkspaceService:
    """Service for reading and updating workspace manifests."""

    def __init__(self, project_root: Path, use_catalog: bool = False):
        """Initialize workspace service.

        Args:
            project_root: Generated project root
            use_catalog: Record versions in the pnpm catalog and reference
                them with "catalog:" from the manifests
        """
        self.project_root = project_root
        self.use_catalog = use_catalog

    def manifest_path(self, workspace: str) -> Path:
        """Path of the package.json for a workspace ("root" is the project root)."""
        normalized = normalize_relative(workspace) if workspace else ""
        if workspace in ROOT_WORKSPACE_ALIASES or normalized in ROOT_WORKSPACE_ALIASES:
            return self.project_root / PACKAGE_JSON
        return self.project_root / normalized / PACKAGE_JSON

    def read_manifest(self, workspace: str) -> dict[str, Any]:
        return read_json_file(self.manifest_path(workspace))

    def add_dependencies(
        self,
        spec: DependencySpec,
        tokens: Mapping[str, Any] | None = None,
    ) -> Path:
        """Merge a dependency declaration into its workspace manifest.

        Args:
            spec: Declared packages, section and workspace
            tokens: Values for ``{{key}}`` tokens in the workspace name

        Returns:
            Path of the manifest that was updated
        """
        workspace = substitute_tokens(spec.workspace, tokens or {})
        path = self.manifest_path(workspace)
        version = spec.version or DEFAULT_DEPENDENCY_VERSION
        section = spec.type.value

        if self.use_catalog:
            set_catalog_entries(
                self.project_root / PNPM_WORKSPACE_FILE,
                {name: version for name in spec.names},
            )
            version = CATALOG_REFERENCE

        entries = {name: version for name in spec.names}

        def _merge(data: dict[str, Any]) -> None:
            current = data.setdefault(section, {})
            if not isinstance(current, dict):
                raise CodeModError(f"'{section}' must be an object", path=path)
            current.update(entries)

        update_json_file(path, _merge)
        logger.info(f"Added {', '.join(spec.names)} to {section} of {path}")
        return path
