"""Feature descriptor models.

Features are static data: they are declared once at import time and never
mutated during a run. Validation happens in ``__post_init__`` so that a
malformed declaration fails when the catalog is built.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from create_poly_app.activation.predicates import Predicate, validate_predicate
from create_poly_app.exceptions import ConfigurationError
from create_poly_app.models.enums import (
    DEFAULT_STEP_ORDER,
    DependencyType,
    PromptType,
    StageStep,
)

# A codemod receives the absolute path of the file it rewrites
CodeMod = Callable[[Path], None]


@dataclass(frozen=True)
class SelectOption:
    """One choice of a select or multiselect prompt."""

    label: str
    value: Any
    description: str | None = None


@dataclass(frozen=True)
class ConfigurationPrompt:
    """An answer a feature needs before its activation check.

    Attributes:
        id: Answer key in the configuration model
        type: Prompt type, controls answer validation
        title: Question shown to the user
        description: Optional longer help text
        required: Whether an answer must exist after prompting
        default_value: Answer used when running non-interactively
        options: Allowed values for select/multiselect prompts
        show_if: Only ask when this predicate holds for the answers so far
    """

    id: str
    type: PromptType
    title: str
    description: str | None = None
    required: bool = False
    default_value: Any = None
    options: tuple[SelectOption, ...] = ()
    show_if: Predicate | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ConfigurationError("Configuration prompt id must not be empty")
        validate_predicate(self.show_if, owner=f"prompt '{self.id}'")
        object.__setattr__(self, "type", PromptType(self.type))
        object.__setattr__(self, "options", tuple(self.options))
        if self.type.has_options and not self.options:
            raise ConfigurationError(
                f"Prompt '{self.id}' of type {self.type.value} needs options", key=self.id
            )
        if self.default_value is not None:
            object.__setattr__(self, "default_value", self.validate(self.default_value))

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    def option_values(self) -> list[Any]:
        return [option.value for option in self.options]

    def validate(self, value: Any) -> Any:
        """Check an answer against this prompt and normalise it.

        Args:
            value: Candidate answer

        Returns:
            The answer, with multiselect collections converted to a list

        Raises:
            ConfigurationError: If the answer does not fit the prompt type
        """
        if self.type in (PromptType.BOOLEAN, PromptType.TOGGLE):
            if not isinstance(value, bool):
                raise self._invalid(value, "expected true or false")
            return value

        if self.type == PromptType.NUMBER:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise self._invalid(value, "expected a number")
            return value

        if self.type == PromptType.TEXT:
            if not isinstance(value, str):
                raise self._invalid(value, "expected text")
            return value

        allowed = self.option_values()
        if self.type == PromptType.SELECT:
            if value not in allowed:
                raise self._invalid(value, f"expected one of {allowed}")
            return value

        # multiselect
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
            raise self._invalid(value, "expected a list")
        unknown = [item for item in value if item not in allowed]
        if unknown:
            raise self._invalid(value, f"unknown option(s) {unknown}, expected {allowed}")
        # Keep option declaration order so answers are deterministic
        return [option for option in allowed if option in value]

    def _invalid(self, value: Any, reason: str) -> ConfigurationError:
        return ConfigurationError(
            f"Invalid answer {value!r} for '{self.id}': {reason}", key=self.id
        )


@dataclass(frozen=True)
class DependencySpec:
    """Packages to merge into a workspace manifest section.

    Attributes:
        name: Package name or list of names
        workspace: Workspace directory ("root" for the project root)
        type: Manifest section to write into
        version: Version specifier, "latest" when omitted
    """

    name: str | Sequence[str]
    workspace: str = "root"
    type: DependencyType = DependencyType.DEPENDENCIES
    version: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", DependencyType(self.type))
        if not self.names:
            raise ConfigurationError("Dependency declaration has no package names")

    @property
    def names(self) -> tuple[str, ...]:
        if isinstance(self.name, str):
            return (self.name,) if self.name else ()
        return tuple(self.name)


@dataclass(frozen=True)
class TemplateSpec:
    """Copy instruction for a bundled template file or directory.

    ``source`` is relative to the bundled features directory unless absolute,
    ``destination`` is relative to the generated project root. Context values
    may contain ``{{key}}`` tokens that are filled from the answers.
    """

    source: str
    destination: str
    context: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ScriptArgs:
    """Run arguments handed to callable scripts and used for token substitution."""

    project_name: str
    project_root: Path
    enabled_features: tuple[str, ...]
    answers: Mapping[str, Any]

    def tokens(self) -> dict[str, Any]:
        """Token values, answers take precedence over run arguments."""
        values: dict[str, Any] = {
            "projectName": self.project_name,
            "projectDir": str(self.project_root),
            "enabledFeatures": list(self.enabled_features),
        }
        values.update(self.answers)
        return values


@dataclass(frozen=True)
class ScriptSpec:
    """Shell command run in ``dir`` relative to the project root.

    ``src`` may also be a callable that builds the command line from the
    run arguments.
    """

    src: str | Callable[[ScriptArgs], str]
    dir: str = "."


@dataclass(frozen=True, eq=False)
class FeatureStage:
    """Unit of execution belonging to one feature."""

    name: str
    activated_by: Predicate | None = None
    dependencies: tuple[DependencySpec, ...] = ()
    templates: tuple[TemplateSpec, ...] = ()
    scripts: tuple[ScriptSpec, ...] = ()
    mods: Mapping[str, Sequence[CodeMod]] = field(default_factory=dict)
    step_order: tuple[StageStep, ...] = DEFAULT_STEP_ORDER

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Stage name must not be empty")
        validate_predicate(self.activated_by, owner=f"stage '{self.name}'")
        object.__setattr__(self, "dependencies", tuple(self.dependencies))
        object.__setattr__(self, "templates", tuple(self.templates))
        object.__setattr__(self, "scripts", tuple(self.scripts))
        object.__setattr__(
            self, "mods", {path: tuple(mods) for path, mods in dict(self.mods).items()}
        )

        order = tuple(StageStep(step) for step in self.step_order)
        if len(set(order)) != len(order):
            raise ConfigurationError(f"Stage '{self.name}' repeats a step in its step order")
        for step in StageStep:
            if step not in order and self.has_work(step):
                raise ConfigurationError(
                    f"Stage '{self.name}' declares {step.value} but leaves it out of its step order"
                )
        object.__setattr__(self, "step_order", order)

    def has_work(self, step: StageStep) -> bool:
        """Whether the stage declares anything for the given step."""
        if step == StageStep.DEPENDENCIES:
            return bool(self.dependencies)
        if step == StageStep.TEMPLATES:
            return bool(self.templates)
        if step == StageStep.SCRIPTS:
            return bool(self.scripts)
        return bool(self.mods)


@dataclass(frozen=True, eq=False)
class Feature:
    """Static descriptor of a scaffoldable feature.

    Attributes:
        id: Unique registry key
        name: Display name
        description: One line summary
        depends_on: Feature ids that must be scheduled first
        activated_by: Optional predicate, absent means always active
        configuration: Prompts resolved before the activation check
        stages: Ordered stages
    """

    id: str
    name: str
    description: str = ""
    depends_on: tuple[str, ...] = ()
    activated_by: Predicate | None = None
    configuration: tuple[ConfigurationPrompt, ...] = ()
    stages: tuple[FeatureStage, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ConfigurationError("Feature id must not be empty")
        validate_predicate(self.activated_by, owner=f"feature '{self.id}'")
        object.__setattr__(self, "depends_on", tuple(self.depends_on))
        object.__setattr__(self, "configuration", tuple(self.configuration))
        object.__setattr__(self, "stages", tuple(self.stages))

        stage_names = [stage.name for stage in self.stages]
        duplicates = sorted({name for name in stage_names if stage_names.count(name) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Duplicate stage name(s) {duplicates}", feature_id=self.id
            )

        prompt_ids = [prompt.id for prompt in self.configuration]
        duplicates = sorted({pid for pid in prompt_ids if prompt_ids.count(pid) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Duplicate configuration prompt(s) {duplicates}", feature_id=self.id
            )
