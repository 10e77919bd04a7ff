"""Turns modules into styled prompt text."""

from __future__ import annotations

from typing import Dict, Iterable

from jinja2 import Environment, TemplateSyntaxError
from rich.errors import StyleSyntaxError
from rich.style import Style

from .config import ConfigError, ModuleConfig, PromptConfig
from .models import Module

_ENV = Environment(autoescape=False, keep_trailing_newline=True)


def style_text(text: str, style: str, *, plain: bool = False) -> str:
    """Wrap ``text`` in the ANSI sequences for a rich style string."""
    if plain or not style or not text:
        return text
    try:
        parsed = Style.parse(style)
    except StyleSyntaxError as exc:
        raise ConfigError(f"Invalid style '{style}': {exc}") from exc
    return parsed.render(text)


def render_module(
    module: Module,
    config: PromptConfig | None = None,
    *,
    plain: bool = False,
) -> str:
    """Render one module through its format template, prefix and suffix."""
    config = config or PromptConfig()
    settings = config.module(module.name)

    values: Dict[str, str] = {
        segment.name: style_text(segment.text, module.style, plain=plain)
        for segment in module.segments
    }
    try:
        template = _ENV.from_string(settings.format)
    except TemplateSyntaxError as exc:
        raise ConfigError(f"Invalid format for module '{module.name}': {exc}") from exc
    body = template.render(**values)
    if not body:
        return ""

    prefix, suffix = _affixes(settings, config)
    return f"{prefix}{body}{suffix}"


def render_modules(
    modules: Iterable[Module],
    config: PromptConfig | None = None,
    *,
    plain: bool = False,
) -> str:
    return "".join(render_module(module, config, plain=plain) for module in modules)


def _affixes(settings: ModuleConfig, config: PromptConfig) -> tuple[str, str]:
    prefix = config.prefix if settings.prefix is None else settings.prefix
    suffix = config.suffix if settings.suffix is None else settings.suffix
    return prefix, suffix


__all__ = ["render_module", "render_modules", "style_text"]
