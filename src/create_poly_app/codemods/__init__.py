"""Codemod library.

Each codemod takes the absolute path of the file it rewrites. All of them
tolerate a missing file and are idempotent.
"""

from create_poly_app.codemods.base import CodeMod, merge_manifest
from create_poly_app.codemods.css import add_tailwind_import
from create_poly_app.codemods.package_json import (
    add_apollo_client_dependencies,
    add_devx_scripts,
    add_graphql_request_dependencies,
    add_urql_dependencies,
    mod_package_json_apollo_server,
    mod_package_json_prisma,
)
from create_poly_app.codemods.ui_library import (
    add_react_native_peer_dependencies,
    add_storybook_scripts,
    add_ui_root_scripts,
    add_web_peer_dependencies,
    configure_ui_package_json,
    link_ui_package,
)
from create_poly_app.codemods.vite_config import add_vite_config
from create_poly_app.codemods.workspace_yaml import (
    add_api_to_pnpm_workspace,
    add_package_to_workspace,
    add_ui_to_pnpm_workspace,
    add_web_to_pnpm_workspace,
)

__all__ = [
    "CodeMod",
    "add_api_to_pnpm_workspace",
    "add_apollo_client_dependencies",
    "add_devx_scripts",
    "add_graphql_request_dependencies",
    "add_package_to_workspace",
    "add_react_native_peer_dependencies",
    "add_storybook_scripts",
    "add_tailwind_import",
    "add_ui_root_scripts",
    "add_ui_to_pnpm_workspace",
    "add_urql_dependencies",
    "add_vite_config",
    "add_web_peer_dependencies",
    "add_web_to_pnpm_workspace",
    "configure_ui_package_json",
    "link_ui_package",
    "merge_manifest",
    "mod_package_json_apollo_server",
    "mod_package_json_prisma",
]
