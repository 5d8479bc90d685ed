"""Manifest codemods for package.json files."""

from pathlib import Path

from create_poly_app.codemods.base import merge_manifest

PRISMA_SCRIPTS = {
    "prisma:generate": "prisma generate",
    "prisma:push": "prisma db push",
    "prisma:migrate": "prisma migrate dev",
    "prisma:deploy": "prisma migrate deploy",
    "prisma:reset": "prisma migrate reset",
    "prisma:seed": "tsx prisma/seed.ts",
    "prisma:studio": "prisma studio",
}

APOLLO_SERVER_SCRIPTS = {
    "compile": "tsc",
    "build": "tsc -b tsconfig.build.json",
    "dev": 'tsx watch --include "./src/**/*" ./src/index.ts',
}

DEVX_SCRIPTS = {
    "lint": "eslint . --ext ts,tsx --report-unused-disable-directives --max-warnings 0",
    "lint:fix": "eslint . --ext ts,tsx --fix",
    "format": 'prettier --check "**/*.{ts,tsx,js,jsx,json,css,scss,md}"',
    "format:fix": 'prettier --write "**/*.{ts,tsx,js,jsx,json,css,scss,md}"',
    "type-check": "tsc --noEmit",
    "lint-staged": "lint-staged",
    "commitlint": "commitlint --edit",
}

GRAPHQL_CODEGEN_SCRIPTS = {
    "codegen": "graphql-codegen",
    "codegen:watch": "graphql-codegen --watch",
}


def mod_package_json_prisma(file_path: Path) -> None:
    """Add the prisma:* lifecycle scripts."""
    merge_manifest(file_path, scripts=PRISMA_SCRIPTS)


def mod_package_json_apollo_server(file_path: Path) -> None:
    """Make the API package an ES module with compile/build/dev scripts."""
    merge_manifest(file_path, fields={"type": "module"}, scripts=APOLLO_SERVER_SCRIPTS)


def add_devx_scripts(file_path: Path) -> None:
    """Add lint, format, type-check and commit hook scripts."""
    merge_manifest(file_path, scripts=DEVX_SCRIPTS)


def add_apollo_client_dependencies(file_path: Path) -> None:
    merge_manifest(
        file_path,
        scripts=GRAPHQL_CODEGEN_SCRIPTS,
        dependencies={"@apollo/client": "latest", "graphql": "latest"},
    )


def add_urql_dependencies(file_path: Path) -> None:
    merge_manifest(
        file_path,
        scripts=GRAPHQL_CODEGEN_SCRIPTS,
        dependencies={"urql": "latest", "graphql": "latest"},
    )


def add_graphql_request_dependencies(file_path: Path) -> None:
    merge_manifest(
        file_path,
        scripts=GRAPHQL_CODEGEN_SCRIPTS,
        dependencies={
            "graphql-request": "latest",
            "graphql": "latest",
            "@tanstack/react-query": "latest",
        },
    )
