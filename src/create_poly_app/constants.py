"""Constants for create-poly-app.

For paths, messages, and runtime settings, import from:
- create_poly_app.config.paths
- create_poly_app.config.messages
- create_poly_app.config.settings

For type-safe enums, import from:
- create_poly_app.models.enums
"""

from create_poly_app import __version__

# =============================================================================
# Version
# =============================================================================

VERSION = __version__

# =============================================================================
# Manifests
# =============================================================================

JSON_INDENT = 2

# Version written for dependencies that do not pin one
DEFAULT_DEPENDENCY_VERSION = "latest"

# Reference written into a manifest when the version lives in the catalog
CATALOG_REFERENCE = "catalog:"

# =============================================================================
# Features
# =============================================================================

# Always scheduled: it creates the project directory and workspace file
ROOT_FEATURE_ID = "project-dir"

# Workspace kinds offered by the projectWorkspaces prompt
WORKSPACE_REACT_WEBAPP = "react-webapp"
WORKSPACE_GRAPHQL_SERVER = "graphql-server"

# Shared component package written by the ui-component-library feature
UI_PACKAGE_DIR = "packages/ui"
UI_PACKAGE_NAME = "@repo/ui"

# =============================================================================
# Tailwind / Vite
# =============================================================================

TAILWIND_IMPORT_SOURCE = "tailwindcss"
TAILWIND_VITE_PLUGIN_MODULE = "@tailwindcss/vite"
TAILWIND_VITE_PLUGIN_NAME = "tailwindcss"
