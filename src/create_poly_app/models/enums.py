"""Enum types for create-poly-app.

Using enums instead of bare strings keeps prompt types, manifest sections,
stage steps and stage states checkable and iterable.
"""

from enum import Enum


class PromptType(str, Enum):
    """Kinds of configuration prompt a feature can declare."""

    BOOLEAN = "boolean"
    TOGGLE = "toggle"
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    MULTISELECT = "multiselect"

    @classmethod
    def values(cls) -> list[str]:
        """Return list of all prompt types."""
        return [t.value for t in cls]

    @property
    def has_options(self) -> bool:
        """Whether answers must come from a declared options list."""
        return self in (PromptType.SELECT, PromptType.MULTISELECT)


class DependencyType(str, Enum):
    """Manifest section a dependency is merged into."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"
    OPTIONAL_DEPENDENCIES = "optionalDependencies"


class StageStep(str, Enum):
    """Sub-steps executed inside a single stage."""

    DEPENDENCIES = "dependencies"
    TEMPLATES = "templates"
    SCRIPTS = "scripts"
    MODS = "mods"


class StageStatus(str, Enum):
    """Lifecycle of a planned stage during execution.

    pending -> running -> completed | failed | skipped
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self in (StageStatus.COMPLETED, StageStatus.FAILED, StageStatus.SKIPPED)


DEFAULT_STEP_ORDER: tuple[StageStep, ...] = (
    StageStep.DEPENDENCIES,
    StageStep.TEMPLATES,
    StageStep.SCRIPTS,
    StageStep.MODS,
)
