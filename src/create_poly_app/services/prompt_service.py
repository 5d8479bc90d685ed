"""Answer providers used to fill in configuration prompts."""

import logging
from typing import Any, Protocol, runtime_checkable

from rich.console import Console
from rich.prompt import Confirm, FloatPrompt, Prompt

from create_poly_app.models.enums import PromptType
from create_poly_app.models.feature import ConfigurationPrompt
from create_poly_app.utils.console import get_console

logger = logging.getLogger(__name__)


@runtime_checkable
class AnswerProvider(Protocol):
    """Supplies an answer for a prompt whose key is still unanswered."""

    def ask(self, prompt: ConfigurationPrompt) -> Any:
        """Return the answer, or None to leave the key unanswered."""
        ...


class DefaultAnswerProvider:
    """Non-interactive provider that answers with each prompt's default."""

    def ask(self, prompt: ConfigurationPrompt) -> Any:
        if prompt.has_default:
            logger.info(f"Using default for '{prompt.id}': {prompt.default_value!r}")
        return prompt.default_value


class InteractiveAnswerProvider:
    """Asks on the terminal with rich prompts.

    Select answers are chosen by option number, multiselect answers as a
    comma separated list of numbers.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def ask(self, prompt: ConfigurationPrompt) -> Any:
        self.console.print(f"\n[bold]{prompt.title}[/bold]")
        if prompt.description:
            self.console.print(f"[dim]{prompt.description}[/dim]")

        if prompt.type in (PromptType.BOOLEAN, PromptType.TOGGLE):
            default = bool(prompt.default_value) if prompt.has_default else False
            return Confirm.ask(prompt.id, default=default, console=self.console)

        if prompt.type == PromptType.NUMBER:
            if prompt.has_default:
                return FloatPrompt.ask(
                    prompt.id, default=float(prompt.default_value), console=self.console
                )
            return FloatPrompt.ask(prompt.id, console=self.console)

        if prompt.type == PromptType.TEXT:
            if prompt.has_default:
                answer = Prompt.ask(prompt.id, default=prompt.default_value, console=self.console)
            else:
                answer = Prompt.ask(prompt.id, console=self.console)
            return answer or None

        return self._ask_options(prompt)

    def _ask_options(self, prompt: ConfigurationPrompt) -> Any:
        for index, option in enumerate(prompt.options, start=1):
            suffix = f" [dim]- {option.description}[/dim]" if option.description else ""
            self.console.print(f"  [cyan]{index}[/cyan]. {option.label}{suffix}")

        values = prompt.option_values()
        if prompt.type == PromptType.SELECT:
            default = None
            if prompt.has_default:
                default = str(values.index(prompt.default_value) + 1)
            choices = [str(i) for i in range(1, len(values) + 1)]
            if default is None:
                picked = Prompt.ask(prompt.id, choices=choices, console=self.console)
            else:
                picked = Prompt.ask(prompt.id, choices=choices, default=default, console=self.console)
            return values[int(picked) - 1]

        default_text = ""
        if prompt.has_default:
            default_text = ",".join(str(values.index(v) + 1) for v in prompt.default_value)
        while True:
            raw = Prompt.ask(prompt.id, default=default_text, console=self.console)
            picked_values = self._parse_picks(raw, values)
            if picked_values or not prompt.required:
                return picked_values
            self.console.print("[yellow]Pick at least one option[/yellow]")

    def _parse_picks(self, raw: str, values: list[Any]) -> list[Any]:
        picked_values = []
        for token in raw.replace(" ", "").split(","):
            if not token:
                continue
            if not token.isdigit() or not 1 <= int(token) <= len(values):
                self.console.print(f"[yellow]Ignoring unknown option {token!r}[/yellow]")
                continue
            picked_values.append(values[int(token) - 1])
        return picked_values


def get_answer_provider(interactive: bool) -> AnswerProvider:
    """Get the provider matching the interaction mode."""
    if interactive:
        return InteractiveAnswerProvider()
    return DefaultAnswerProvider()
