"""Script runner for stage shell commands."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from create_poly_app.exceptions import ScriptError
from create_poly_app.models.feature import ScriptArgs, ScriptSpec
from create_poly_app.utils import ensure_dir, substitute_tokens

logger = logging.getLogger(__name__)


@dataclass
class ScriptResult:
    """Outcome of a successful script run."""

    command: str
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class ScriptRunner:
    """Runs stage scripts one at a time with a timeout."""

    def __init__(
        self,
        project_root: Path,
        timeout_seconds: float | None = None,
        shell_executable: str | None = None,
    ):
        """Initialize script runner.

        Args:
            project_root: Generated project root, script dirs resolve against it
            timeout_seconds: Per-command time limit, None for no limit
            shell_executable: Shell to run commands with (platform default if None)
        """
        self.project_root = project_root
        self.timeout_seconds = timeout_seconds
        self.shell_executable = shell_executable

    def build_command(self, spec: ScriptSpec, args: ScriptArgs) -> str:
        """Produce the command line, calling ``src`` if it is callable."""
        command = spec.src(args) if callable(spec.src) else spec.src
        return substitute_tokens(command, args.tokens())

    def resolve_dir(self, spec: ScriptSpec, args: ScriptArgs) -> Path:
        directory = substitute_tokens(spec.dir or ".", args.tokens())
        return (self.project_root / directory).resolve()

    def run(self, spec: ScriptSpec, args: ScriptArgs) -> ScriptResult:
        """Run a script and capture its output.

        The working directory is created if missing.

        Raises:
            ScriptError: If the command exits non-zero or times out
        """
        command = self.build_command(spec, args)
        cwd = self.resolve_dir(spec, args)
        ensure_dir(cwd)

        logger.info(f"Running '{command}' in {cwd}")
        try:
            completed = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                executable=self.shell_executable,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ScriptError(
                command,
                None,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr),
                cwd=cwd,
                timed_out=True,
            ) from e

        if completed.stdout:
            logger.debug(f"stdout of '{command}':\n{completed.stdout}")
        if completed.stderr:
            logger.debug(f"stderr of '{command}':\n{completed.stderr}")

        if completed.returncode != 0:
            raise ScriptError(
                command,
                completed.returncode,
                stdout=completed.stdout,
                stderr=completed.stderr,
                cwd=cwd,
            )

        return ScriptResult(
            command=command,
            cwd=cwd,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
