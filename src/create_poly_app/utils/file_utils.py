"""File system utilities for create-poly-app."""

import shutil
from pathlib import Path


def ensure_dir(path: Path) -> None:
    """Ensure directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
    """
    path.mkdir(parents=True, exist_ok=True)


def read_file(path: Path) -> str:
    """Read text file contents.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return path.read_text(encoding="utf-8")


def write_file(path: Path, content: str) -> None:
    """Write content to text file, creating parent directories."""
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")


def copy_file(src: Path, dst: Path) -> None:
    """Copy a file, overwriting the destination.

    Raises:
        FileNotFoundError: If source file doesn't exist
    """
    if not src.exists():
        raise FileNotFoundError(f"Source file not found: {src}")

    ensure_dir(dst.parent)
    shutil.copy2(src, dst)


def is_dir_empty(path: Path) -> bool:
    """Whether path is missing or an empty directory."""
    if not path.exists():
        return True
    return path.is_dir() and not any(path.iterdir())


def normalize_relative(path: str) -> str:
    """Normalise a project-relative path for comparisons.

    Collapses ``.`` and ``..`` segments and uses forward slashes.

    Example:
        >>> normalize_relative("./api/../api/src/")
        'api/src'
    """
    parts: list[str] = []
    for part in path.replace("\\", "/").split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            else:
                parts.append(part)
            continue
        parts.append(part)
    return "/".join(parts) or "."
