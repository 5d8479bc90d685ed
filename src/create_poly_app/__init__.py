"""create-poly-app: feature-driven scaffolding engine for polyglot monorepos."""

import tomllib
from pathlib import Path

try:
    # Prefer pyproject.toml so editable installs report the working version
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    __version__ = data["project"]["version"]
except (OSError, KeyError, tomllib.TOMLDecodeError):
    try:
        from importlib.metadata import PackageNotFoundError, version

        __version__ = version("create-poly-app")
    except PackageNotFoundError:
        __version__ = "0.0.0-dev"
