"""Configuration model holding the user's answers for one run."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from create_poly_app.activation.predicates import evaluate, strict_equal
from create_poly_app.exceptions import ConfigurationError
from create_poly_app.models.feature import ConfigurationPrompt

if TYPE_CHECKING:
    from create_poly_app.services.prompt_service import AnswerProvider

logger = logging.getLogger(__name__)


class ConfigurationModel(Mapping[str, Any]):
    """Append-only mapping from prompt id to answer.

    Reading works like any mapping. Writing goes through ``answer`` which
    refuses to change a key that already holds a different value.

    Example:
        >>> model = ConfigurationModel({"enableDevX": True})
        >>> model.answer("projectWorkspaces", ["react-webapp"])
        >>> model["projectWorkspaces"]
        ['react-webapp']
    """

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._answers: dict[str, Any] = {}
        for key, value in (initial or {}).items():
            self.answer(key, value)

    def __getitem__(self, key: str) -> Any:
        return self._answers[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def __repr__(self) -> str:
        return f"ConfigurationModel({self._answers!r})"

    def has(self, key: str) -> bool:
        return key in self._answers

    def answer(self, key: str, value: Any) -> None:
        """Record an answer.

        Args:
            key: Prompt id
            value: Answer value

        Raises:
            ConfigurationError: If the key already holds a different value
        """
        if not isinstance(key, str) or not key:
            raise ConfigurationError(f"Answer key must be a non-empty string, got {key!r}")
        if key in self._answers:
            if not strict_equal(self._answers[key], value):
                raise ConfigurationError(
                    f"'{key}' is already answered with {self._answers[key]!r}", key=key
                )
            return
        self._answers[key] = value

    def collect(
        self,
        prompts: Iterable[ConfigurationPrompt],
        provider: "AnswerProvider",
    ) -> list[str]:
        """Ask the provider for every prompt whose key is still unanswered.

        Keys that are already answered are validated but never re-asked.

        Args:
            prompts: Prompts in declaration order
            provider: Source of answers (defaults, interactive, ...)

        Returns:
            Keys answered by this call

        Raises:
            ConfigurationError: If an answer is invalid, or a required prompt
                is left without one
        """
        answered: list[str] = []
        for prompt in prompts:
            if prompt.id in self._answers:
                # Answers supplied up front still have to fit the prompt
                prompt.validate(self._answers[prompt.id])
                continue
            if not evaluate(prompt.show_if, self):
                logger.debug(f"Prompt '{prompt.id}' not shown: {prompt.show_if.describe()}")
                continue
            value = provider.ask(prompt)
            if value is None:
                if prompt.required:
                    raise ConfigurationError(
                        f"No answer for required prompt '{prompt.id}'", key=prompt.id
                    )
                logger.debug(f"Prompt '{prompt.id}' left unanswered")
                continue
            self.answer(prompt.id, prompt.validate(value))
            answered.append(prompt.id)
        return answered

    def as_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the answers."""
        return dict(self._answers)
