"""Token substitution for command lines, paths and template context values."""

import re
from collections.abc import Mapping
from typing import Any

TOKEN_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][\w.-]*)\s*\}\}")


def substitute_tokens(content: str, values: Mapping[str, Any]) -> str:
    """Replace ``{{key}}`` tokens with values.

    Unknown keys are left untouched so a missing answer stays visible in the
    output instead of silently becoming an empty string. Lists are joined
    with commas.

    Example:
        >>> substitute_tokens("mkdir -p {{projectName}}", {"projectName": "demo"})
        'mkdir -p demo'
    """

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        value = values[key]
        if isinstance(value, (list, tuple)):
            return ",".join(str(item) for item in value)
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    return TOKEN_PATTERN.sub(_replace, content)


def substitute_in_value(value: Any, values: Mapping[str, Any]) -> Any:
    """Apply token substitution to strings nested in dicts and lists."""
    if isinstance(value, str):
        return substitute_tokens(value, values)
    if isinstance(value, Mapping):
        return {k: substitute_in_value(v, values) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [substitute_in_value(item, values) for item in value]
    return value
