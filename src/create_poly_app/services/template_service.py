"""Template service for copying and rendering feature templates with Jinja2."""

import glob
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Any

import jinja2
from jinja2 import Environment, FileSystemLoader

from create_poly_app.config.paths import FEATURES_DIR, TEMPLATE_SUFFIX
from create_poly_app.exceptions import TemplateError
from create_poly_app.models.feature import TemplateSpec
from create_poly_app.utils import (
    copy_file,
    normalize_relative,
    read_file,
    substitute_in_value,
    substitute_tokens,
    write_file,
)

logger = logging.getLogger(__name__)

GLOB_CHARS = frozenset("*?[")


@dataclass(frozen=True)
class TemplateTarget:
    """One file a template instruction will write.

    Attributes:
        source: Template file, None when the source does not exist
        destination: Target path relative to the project root
    """

    source: Path | None
    destination: str

    @property
    def render(self) -> bool:
        return self.source is not None and self.source.name.endswith(TEMPLATE_SUFFIX)


def _output_name(name: str) -> str:
    return name[: -len(TEMPLATE_SUFFIX)] if name.endswith(TEMPLATE_SUFFIX) else name


def _is_directory_destination(destination: str) -> bool:
    """A destination names a directory when it ends with "/" or has no suffix.

    Dotfiles such as ``.prettierrc`` are files.
    """
    if destination.endswith("/") or normalize_relative(destination) == ".":
        return True
    name = PurePosixPath(normalize_relative(destination)).name
    return not name.startswith(".") and PurePosixPath(name).suffix == ""


class TemplateService:
    """Service for expanding, rendering and copying templates."""

    def __init__(self, templates_dir: Path | None = None):
        """Initialize template service.

        Args:
            templates_dir: Root that relative template sources are resolved
                against (defaults to the bundled features directory)
        """
        self.templates_dir = templates_dir or FEATURES_DIR
        self.env = self._create_environment()

    def _create_environment(self) -> Environment:
        """Create Jinja2 environment with custom filters and globals."""
        loader = FileSystemLoader(str(self.templates_dir))
        env = Environment(
            loader=loader,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        env.filters["title_case"] = lambda x: x.replace("-", " ").replace("_", " ").title()
        env.filters["snake_case"] = lambda x: x.lower().replace("-", "_").replace(" ", "_")
        env.filters["kebab_case"] = lambda x: x.lower().replace("_", "-").replace(" ", "-")
        env.filters["camel_case"] = lambda x: "".join(
            word.capitalize() for word in x.replace("-", " ").replace("_", " ").split()
        )

        env.globals["now"] = datetime.now
        env.globals["year"] = datetime.now().year

        return env

    def resolve_source(self, source: str) -> Path:
        path = Path(source)
        return path if path.is_absolute() else self.templates_dir / path

    def expand(
        self,
        spec: TemplateSpec,
        tokens: Mapping[str, Any],
        strict: bool = True,
    ) -> list[TemplateTarget]:
        """List the files a template instruction writes.

        Args:
            spec: Template instruction
            tokens: Values for ``{{key}}`` tokens in the destination
            strict: Raise when the source is missing instead of reporting the
                declared destination with no source

        Returns:
            Targets in a stable order

        Raises:
            TemplateError: If strict and the source does not exist
        """
        destination = substitute_tokens(spec.destination, tokens)
        source = self.resolve_source(spec.source)

        if source.is_dir():
            files = sorted(p for p in source.rglob("*") if p.is_file())
            return [
                TemplateTarget(f, self._join(destination, f.relative_to(source))) for f in files
            ]

        if source.is_file():
            if _is_directory_destination(destination):
                return [TemplateTarget(source, self._join(destination, Path(source.name)))]
            return [TemplateTarget(source, normalize_relative(destination))]

        if GLOB_CHARS.intersection(spec.source):
            matches = sorted(Path(m) for m in glob.glob(str(source), recursive=True))
            files = [m for m in matches if m.is_file()]
            if files:
                base = self._glob_base(source)
                return [TemplateTarget(f, self._join(destination, f.relative_to(base))) for f in files]

        if strict:
            raise TemplateError(f"Template source not found: {spec.source}")
        return [TemplateTarget(None, normalize_relative(destination))]

    @staticmethod
    def _glob_base(pattern: Path) -> Path:
        parts: list[str] = []
        for part in pattern.parts:
            if GLOB_CHARS.intersection(part):
                break
            parts.append(part)
        return Path(*parts)

    @staticmethod
    def _join(destination: str, relative: Path) -> str:
        name = _output_name(relative.name)
        return normalize_relative(str(PurePosixPath(destination) / relative.parent.as_posix() / name))

    def build_context(self, spec: TemplateSpec, tokens: Mapping[str, Any]) -> dict[str, Any]:
        """Template context: declared context first, then run values and answers."""
        context: dict[str, Any] = substitute_in_value(dict(spec.context), tokens)
        context.update(tokens)
        return context

    def render_string(
        self,
        template_string: str,
        context: dict[str, Any] | None = None,
    ) -> str:
        """Render a template string with given context.

        Raises:
            TemplateError: If the template has a syntax or rendering error
        """
        if context is None:
            context = {}

        try:
            template = self.env.from_string(template_string)
            return template.render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to render template: {e}") from e

    def render_file(self, path: Path, context: dict[str, Any]) -> str:
        try:
            return self.render_string(read_file(path), context)
        except TemplateError as e:
            raise TemplateError(f"Failed to render {path.name}: {e.message}") from e

    def copy_template(
        self,
        spec: TemplateSpec,
        project_root: Path,
        tokens: Mapping[str, Any],
    ) -> list[Path]:
        """Copy a template instruction into the project, overwriting files.

        ``.j2`` files are rendered with the merged context and lose the
        suffix; other files are copied byte for byte.

        Returns:
            Paths written

        Raises:
            TemplateError: If the source is missing or fails to render
        """
        context = self.build_context(spec, tokens)
        written: list[Path] = []
        for target in self.expand(spec, tokens):
            if target.source is None:
                raise TemplateError(f"Template source not found: {spec.source}")
            output = project_root / target.destination
            if target.render:
                write_file(output, self.render_file(target.source, context))
            else:
                copy_file(target.source, output)
            written.append(output)
            logger.debug(f"Wrote template {target.source} -> {output}")
        return written
