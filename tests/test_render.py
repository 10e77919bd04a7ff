"""Tests for module rendering."""

from __future__ import annotations

import pytest

from promptline.config import ConfigError, ModuleConfig, PromptConfig
from promptline.models import Module, Segment
from promptline.render import render_module, render_modules, style_text


def _dotnet_module(style: str = "bold blue") -> Module:
    return Module(
        name="dotnet",
        style=style,
        segments=[Segment("symbol", "•NET "), Segment("version", "v8.0.100")],
    )


def test_style_text_emits_bold_blue_sgr() -> None:
    assert style_text("v8.0.100", "bold blue") == "\x1b[1;34mv8.0.100\x1b[0m"


def test_style_text_plain_and_empty_passthrough() -> None:
    assert style_text("v8", "bold blue", plain=True) == "v8"
    assert style_text("v8", "") == "v8"
    assert style_text("", "bold blue") == ""


def test_style_text_rejects_invalid_style() -> None:
    with pytest.raises(ConfigError):
        style_text("v8", "bold not-a-colour")


def test_render_module_plain_uses_default_affixes() -> None:
    assert render_module(_dotnet_module(), plain=True) == "via •NET v8.0.100 "


def test_render_module_styles_each_segment() -> None:
    rendered = render_module(_dotnet_module())

    assert rendered == "via \x1b[1;34m•NET \x1b[0m\x1b[1;34mv8.0.100\x1b[0m "


def test_render_module_honours_format_and_module_affixes() -> None:
    settings = ModuleConfig(name="dotnet", format="[{{ version }}]", prefix="", suffix="|")
    config = PromptConfig(module_settings={"dotnet": settings})

    assert render_module(_dotnet_module(), config, plain=True) == "[v8.0.100]|"


def test_render_module_reports_bad_template() -> None:
    config = PromptConfig(module_settings={"dotnet": ModuleConfig(name="dotnet", format="{{ symbol ")})

    with pytest.raises(ConfigError):
        render_module(_dotnet_module(), config)


def test_render_modules_concatenates() -> None:
    other = Module(name="echo", segments=[Segment("symbol", "echo")])
    config = PromptConfig(module_settings={"echo": ModuleConfig(name="echo", format="{{ symbol }}")})

    assert render_modules([_dotnet_module(), other], config, plain=True) == "via •NET v8.0.100 via echo "
