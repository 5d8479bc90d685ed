"""Shared helpers for codemods.

Every codemod has the same shape: take the absolute path of one file, read
it (a missing file counts as empty), transform it and write it back. They
must be idempotent: running one on its own output changes nothing.
"""

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from create_poly_app.constants import JSON_INDENT
from create_poly_app.exceptions import CodeModError
from create_poly_app.models.feature import CodeMod
from create_poly_app.utils import write_file

logger = logging.getLogger(__name__)

__all__ = [
    "CodeMod",
    "merge_manifest",
    "read_json_file",
    "read_text_or_empty",
    "update_json_file",
    "write_json_file",
]


def read_text_or_empty(path: Path) -> str:
    """Read a file, returning an empty string when it does not exist."""
    if not path.exists():
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise CodeModError(f"Failed to read file: {e}", path=path) from e


def read_json_file(path: Path) -> dict[str, Any]:
    """Read a JSON object from path.

    A missing or blank file reads as ``{}``.

    Raises:
        CodeModError: If the file is not valid JSON or not an object
    """
    source = read_text_or_empty(path)
    if not source.strip():
        return {}
    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        raise CodeModError(f"Failed to parse JSON: {e}", path=path) from e
    if not isinstance(data, dict):
        raise CodeModError("Expected a JSON object at the top level", path=path)
    return data


def write_json_file(path: Path, data: Mapping[str, Any]) -> None:
    """Write pretty-printed JSON with a trailing newline, creating parent dirs."""
    write_file(path, json.dumps(data, indent=JSON_INDENT, ensure_ascii=False) + "\n")


def update_json_file(path: Path, updater: Callable[[dict[str, Any]], None]) -> dict[str, Any]:
    """Read, mutate in place and write back a JSON object file.

    The file is only rewritten when the content would change, so applying
    the same update twice leaves the file untouched the second time.

    Returns:
        The updated data
    """
    data = read_json_file(path)
    original = json.dumps(data, sort_keys=False)
    updater(data)
    if not path.exists() or json.dumps(data, sort_keys=False) != original:
        write_json_file(path, data)
    return data


def _section(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    section = data.setdefault(key, {})
    if not isinstance(section, dict):
        raise CodeModError(f"'{key}' must be an object", path=path)
    return section


def merge_manifest(
    path: Path,
    fields: Mapping[str, Any] | None = None,
    scripts: Mapping[str, str] | None = None,
    dependencies: Mapping[str, str] | None = None,
    dev_dependencies: Mapping[str, str] | None = None,
    peer_dependencies: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Overwrite keys in a package.json, leaving everything else alone.

    Args:
        path: package.json path (created with parent dirs if missing)
        fields: Top level keys to set
        scripts: Entries to set under "scripts"
        dependencies: Entries to set under "dependencies"
        dev_dependencies: Entries to set under "devDependencies"
        peer_dependencies: Entries to set under "peerDependencies"

    Returns:
        The resulting manifest
    """

    def _apply(data: dict[str, Any]) -> None:
        for key, value in (fields or {}).items():
            data[key] = value
        for key, entries in (
            ("scripts", scripts),
            ("dependencies", dependencies),
            ("devDependencies", dev_dependencies),
            ("peerDependencies", peer_dependencies),
        ):
            if entries:
                _section(data, key, path).update(entries)

    result = update_json_file(path, _apply)
    logger.debug(f"Merged manifest keys into {path}")
    return result
