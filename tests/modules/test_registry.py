"""Tests for prompt module discovery."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

import pytest

import promptline.modules as modules_pkg
from promptline.context import Context
from promptline.models import Module
from promptline.modules import DotNetModule, PromptModule, builtin_module_names, discover_modules


class _EchoModule(PromptModule):
    name = "echo"

    def render(self, context: Context) -> Optional[Module]:
        module = context.new_module(self.name)
        module.new_segment("symbol", "echo")
        return module


def _entry(name: str, obj: object) -> SimpleNamespace:
    return SimpleNamespace(name=name, load=lambda: obj)


def test_builtin_modules_include_dotnet() -> None:
    assert builtin_module_names() == ["dotnet"]


def test_discover_modules_returns_builtins_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(modules_pkg, "_iter_entry_points", lambda: [])

    found = discover_modules()

    assert len(found) == 1
    assert isinstance(found[0], DotNetModule)


def test_discover_modules_loads_entry_points_in_requested_order(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(modules_pkg, "_iter_entry_points", lambda: [_entry("echo", _EchoModule)])

    found = discover_modules(["Echo", "dotnet", "echo"])

    assert [module.name for module in found] == ["echo", "dotnet"]


def test_discover_modules_rejects_unknown_names(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(modules_pkg, "_iter_entry_points", lambda: [])

    with pytest.raises(ValueError, match="rust"):
        discover_modules(["dotnet", "rust"])


def test_discover_modules_rejects_bad_entry_points(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(modules_pkg, "_iter_entry_points", lambda: [_entry("broken", 42)])

    with pytest.raises(TypeError):
        discover_modules(["broken"])
