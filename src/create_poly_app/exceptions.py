"""Custom exceptions for create-poly-app.

All scaffolding errors inherit from ScaffoldError so callers (the CLI in
particular) can catch every engine failure with a single except clause.

Exception hierarchy:
    ScaffoldError (base)
    ├── ConfigurationError
    │   ├── UnknownFeatureError
    │   ├── CyclicDependencyError
    │   └── DuplicateDestinationError
    ├── PredicateError
    ├── StageExecutionError
    │   ├── ScriptError
    │   └── TemplateError
    └── CodeModError
"""

from pathlib import Path
from typing import Any


class ScaffoldError(Exception):
    """Base exception for all create-poly-app errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize scaffold error.

        Args:
            message: Error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ScaffoldError):
    """Raised when the feature catalog or the answers cannot produce a plan.

    Configuration errors are detected before any file is written.

    Examples:
        - A feature depends on itself through a chain of features
        - A required prompt has no answer and no default
        - Two features write the same file
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        feature_id: str | None = None,
    ):
        """Initialize configuration error.

        Args:
            message: Error description.
            key: The answer key that caused the error.
            feature_id: The feature whose declaration caused the error.
        """
        details: dict[str, Any] = {}
        if feature_id:
            details["feature"] = feature_id
        if key:
            details["key"] = key
        super().__init__(message, details)
        self.key = key
        self.feature_id = feature_id


class UnknownFeatureError(ConfigurationError):
    """Raised when a requested or depended-upon feature id is not registered."""

    def __init__(self, unknown_id: str, referenced_by: str | None = None):
        """Initialize unknown feature error.

        Args:
            unknown_id: The id that could not be found.
            referenced_by: Feature whose dependsOn named the id, if any.
        """
        if referenced_by:
            message = f"Feature '{referenced_by}' depends on unknown feature '{unknown_id}'"
        else:
            message = f"Feature not found: '{unknown_id}'"
        super().__init__(message, feature_id=referenced_by)
        self.unknown_id = unknown_id
        self.referenced_by = referenced_by


class CyclicDependencyError(ConfigurationError):
    """Raised when dependsOn declarations form a cycle."""

    def __init__(self, cycle: list[str]):
        """Initialize cyclic dependency error.

        Args:
            cycle: Feature ids along the cycle, first id repeated at the end.
        """
        path = " -> ".join(cycle)
        super().__init__(f"Circular dependency detected: {path}")
        self.cycle = cycle


class DuplicateDestinationError(ConfigurationError):
    """Raised when two features would write the same target file."""

    def __init__(self, destination: str, first_owner: str, second_owner: str):
        """Initialize duplicate destination error.

        Args:
            destination: Target path relative to the project root.
            first_owner: "feature/stage" that claimed the path first.
            second_owner: "feature/stage" that claimed it again.
        """
        super().__init__(
            f"Template destination '{destination}' is declared by both "
            f"'{first_owner}' and '{second_owner}'"
        )
        self.destination = destination
        self.owners = (first_owner, second_owner)


# =============================================================================
# Predicate Errors
# =============================================================================


class PredicateError(ScaffoldError):
    """Raised when an activation predicate is malformed.

    This is a programming error in a feature declaration and is raised when
    the predicate is built, never while evaluating well-formed predicates.
    """


# =============================================================================
# Stage Execution Errors
# =============================================================================


class StageExecutionError(ScaffoldError):
    """Raised when a step inside a stage fails.

    The error carries only what went wrong. The executor records which
    feature, stage and step failed on the StageRecord.
    """


class ScriptError(StageExecutionError):
    """Raised when a stage script exits non-zero or times out."""

    def __init__(
        self,
        command: str,
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
        cwd: Path | None = None,
        timed_out: bool = False,
    ):
        """Initialize script error.

        Args:
            command: The shell command line that was run.
            returncode: Process exit code, None when the process timed out.
            stdout: Captured standard output.
            stderr: Captured standard error.
            cwd: Working directory of the command.
            timed_out: Whether the command was killed by the timeout.
        """
        if timed_out:
            message = f"Script timed out: {command}"
        else:
            message = f"Script exited with code {returncode}: {command}"
        details: dict[str, Any] = {}
        if cwd is not None:
            details["cwd"] = str(cwd)
        super().__init__(message, details=details)
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.timed_out = timed_out

    @property
    def output(self) -> str:
        """Combined captured output for diagnostics."""
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


class TemplateError(StageExecutionError):
    """Raised when a template source is missing or fails to render."""


# =============================================================================
# Codemod Errors
# =============================================================================


class CodeModError(ScaffoldError):
    """Raised when a codemod cannot read, parse or rewrite its target file."""

    def __init__(self, message: str, path: Path | None = None):
        """Initialize codemod error.

        Args:
            message: Error description.
            path: Target file of the codemod.
        """
        details = {"path": str(path)} if path is not None else None
        super().__init__(message, details)
        self.path = path
