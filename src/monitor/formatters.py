"""Alert payload templating."""

from __future__ import annotations

import re
from typing import Any

from src.core.types import ReadingValue

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def format_reading(value: ReadingValue) -> str:
    """String form used in payloads; integral floats drop the ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _substitute(text: str, readings: dict[str, ReadingValue]) -> str:
    def repl(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in readings:
            return format_reading(readings[key])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(repl, text)


def render_template(template: Any, readings: dict[str, ReadingValue]) -> Any:
    """Return a copy of *template* with ``{name}`` placeholders filled in.

    Substitution applies to every string in the structure, mapping keys
    included. Placeholders without a matching reading are left verbatim.
    Non-string leaves are copied unchanged.
    """
    if isinstance(template, str):
        return _substitute(template, readings)
    if isinstance(template, dict):
        return {
            _substitute(k, readings) if isinstance(k, str) else k: render_template(v, readings)
            for k, v in template.items()
        }
    if isinstance(template, list):
        return [render_template(item, readings) for item in template]
    return template
