"""Manifest codemods for the shared UI component package."""

from pathlib import Path

from create_poly_app.codemods.base import merge_manifest
from create_poly_app.constants import UI_PACKAGE_NAME

UI_PACKAGE_SCRIPTS = {
    "build": "tsc -b",
    "dev": "tsc -b --watch",
    "type-check": "tsc --noEmit",
}

UI_ROOT_SCRIPTS = {
    "dev:ui": f"pnpm --filter {UI_PACKAGE_NAME} dev",
    "build:ui": f"pnpm --filter {UI_PACKAGE_NAME} build",
}

STORYBOOK_SCRIPTS = {
    "storybook": "storybook dev -p 6006",
    "build-storybook": "storybook build",
}

REACT_PEERS = {"react": "^18.0.0 || ^19.0.0", "react-dom": "^18.0.0 || ^19.0.0"}


def configure_ui_package_json(file_path: Path) -> None:
    """Point the UI package entry points at its TypeScript sources."""
    merge_manifest(
        file_path,
        fields={
            "name": UI_PACKAGE_NAME,
            "private": True,
            "main": "./src/index.ts",
            "types": "./src/index.ts",
            "sideEffects": False,
        },
        scripts=UI_PACKAGE_SCRIPTS,
    )


def add_web_peer_dependencies(file_path: Path) -> None:
    """Declare react and react-dom as peers of a web-only UI package."""
    merge_manifest(file_path, peer_dependencies=REACT_PEERS)


def add_react_native_peer_dependencies(file_path: Path) -> None:
    """Declare peers and the react-native entry point of a cross-platform package."""
    merge_manifest(
        file_path,
        fields={"react-native": "./src/index.ts"},
        peer_dependencies={"react": REACT_PEERS["react"], "react-native": "*"},
    )


def link_ui_package(file_path: Path) -> None:
    """Make a workspace package depend on the local UI package."""
    merge_manifest(file_path, dependencies={UI_PACKAGE_NAME: "workspace:*"})


def add_ui_root_scripts(file_path: Path) -> None:
    merge_manifest(file_path, scripts=UI_ROOT_SCRIPTS)


def add_storybook_scripts(file_path: Path) -> None:
    merge_manifest(file_path, scripts=STORYBOOK_SCRIPTS)
