"""Path constants for create-poly-app.

File names the engine reads or writes inside a generated project, and the
location of the templates bundled with the tool.
"""

from pathlib import Path

# =============================================================================
# Generated Project Files
# =============================================================================

PACKAGE_JSON = "package.json"
PNPM_WORKSPACE_FILE = "pnpm-workspace.yaml"

# Workspace aliases that map to the project root manifest
ROOT_WORKSPACE_ALIASES: frozenset[str] = frozenset({"", ".", "root"})

# =============================================================================
# Bundled Templates
# =============================================================================

# Template sources in feature declarations are relative to this directory
FEATURES_DIR = Path(__file__).parent.parent / "features"

# Files with this suffix are rendered with Jinja2 and the suffix is stripped
TEMPLATE_SUFFIX = ".j2"

# =============================================================================
# Logging
# =============================================================================

LOG_FILE_NAME = "create-poly-app.log"
