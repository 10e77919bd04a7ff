"""Tests for the per-render context and the process runner."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

from promptline.config import ModuleConfig, PromptConfig
from promptline.context import Context
from promptline.toolchain import run_command


def test_dir_files_lists_current_directory(tmp_path: Path) -> None:
    (tmp_path / "a.sln").touch()
    (tmp_path / "nested").mkdir()

    names = sorted(path.name for path in Context(tmp_path).dir_files)

    assert names == ["a.sln", "nested"]


def test_dir_files_is_memoized_per_context(tmp_path: Path) -> None:
    calls: List[Path] = []

    def _lister(path: Path) -> List[Path]:
        calls.append(path)
        return [path / "app.csproj"]

    context = Context(tmp_path, lister=_lister)
    context.dir_files
    context.dir_files

    assert calls == [tmp_path]


def test_dir_files_raises_for_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        Context(tmp_path / "missing").dir_files


def test_new_module_carries_configured_style(tmp_path: Path) -> None:
    config = PromptConfig(module_settings={"dotnet": ModuleConfig(name="dotnet", style="red")})

    module = Context(tmp_path, config=config).new_module("dotnet")

    assert module.name == "dotnet"
    assert module.style == "red"
    assert module.segments == []


def test_run_command_returns_raw_stdout() -> None:
    output = run_command([sys.executable, "-c", "print('8.0.100')"])

    assert output.strip() == b"8.0.100"


def test_run_command_ignores_exit_status() -> None:
    output = run_command([sys.executable, "-c", "import sys; print('partial'); sys.exit(3)"])

    assert output.strip() == b"partial"


def test_run_command_raises_for_missing_executable(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        run_command([str(tmp_path / "no-such-dotnet"), "--version"])
