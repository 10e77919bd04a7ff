"""Detects .NET projects and reports the active SDK version."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..config import ModuleConfig
from ..context import Context
from ..logging import get_logger
from ..models import Module
from ..toolchain import CommandRunner, run_command
from .base import PromptModule

logger = get_logger("modules.dotnet")

DOTNET_VERSION_COMMAND: Sequence[str] = ("dotnet", "--version")

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


class MarkerType(Enum):
    """Kinds of files that mark a directory as a .NET project."""

    PROJECT_CONFIG = "project_config"
    GLOBAL_CONFIG = "global_config"
    PROJECT_FILE = "project_file"
    SOLUTION_FILE = "solution_file"


# Checked in sequence; the first type present wins.
MARKER_PRIORITY: Sequence[MarkerType] = (
    MarkerType.PROJECT_CONFIG,
    MarkerType.GLOBAL_CONFIG,
    MarkerType.PROJECT_FILE,
    MarkerType.SOLUTION_FILE,
)

_MARKER_NAMES = {
    "global.json": MarkerType.GLOBAL_CONFIG,
    "project.json": MarkerType.PROJECT_CONFIG,
}

_MARKER_EXTENSIONS = {
    "sln": MarkerType.SOLUTION_FILE,
    "csproj": MarkerType.PROJECT_FILE,
    "fsproj": MarkerType.PROJECT_FILE,
    "xproj": MarkerType.PROJECT_FILE,
}

# Marker types whose file may pin an SDK version.
_PIN_BEARING = {MarkerType.GLOBAL_CONFIG}


@dataclass(frozen=True)
class DotNetFile:
    """A directory entry recognized as a .NET marker."""

    path: Path
    marker: MarkerType


@dataclass(frozen=True)
class Version:
    """Non-empty toolchain version identifier, e.g. ``6.0.100``."""

    text: str

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise ValueError("version string must not be empty")

    def __str__(self) -> str:
        return self.text


def classify_file(path: Path) -> Optional[MarkerType]:
    """Return the marker type for ``path`` or None when it is not a marker."""
    name = _to_ascii_lower(path.name)
    if name is None:
        return None

    marker = _MARKER_NAMES.get(name)
    if marker is not None:
        return marker

    extension = _to_ascii_lower(path.suffix[1:])
    if extension is None:
        return None
    return _MARKER_EXTENSIONS.get(extension)


def _to_ascii_lower(value: str) -> Optional[str]:
    if not value:
        return None
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # Undecodable bytes smuggled in as surrogates by os.fsdecode.
        return None
    return value.translate(_ASCII_LOWER)


def scan_dotnet_files(context: Context) -> List[DotNetFile]:
    """Classify every entry of the current directory.

    ``OSError`` from the directory listing propagates to the caller.
    """
    files: List[DotNetFile] = []
    for path in context.dir_files:
        marker = classify_file(path)
        if marker is not None:
            files.append(DotNetFile(path=path, marker=marker))
    return files


def select_relevant_file(files: Iterable[DotNetFile]) -> Optional[DotNetFile]:
    """Pick the single most relevant marker following ``MARKER_PRIORITY``."""
    candidates = list(files)
    for marker in MARKER_PRIORITY:
        for candidate in candidates:
            if candidate.marker is marker:
                return candidate
    return None


def read_pinned_sdk_version(path: Path) -> Optional[Version]:
    """Return ``sdk.version`` from a global.json-style file, if pinned."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError, RecursionError):
        # ValueError covers JSONDecodeError and oversized integer literals.
        return None

    if not isinstance(data, dict):
        return None
    sdk = data.get("sdk")
    if not isinstance(sdk, dict):
        return None
    version = sdk.get("version")
    if not isinstance(version, str):
        return None
    try:
        return Version(version)
    except ValueError:
        return None


def query_dotnet_version(runner: CommandRunner = run_command) -> Optional[str]:
    """Ask the installed toolchain for its version, formatted for display."""
    try:
        output = runner(DOTNET_VERSION_COMMAND)
    except OSError as exc:
        logger.debug("Unable to launch %s: %s", DOTNET_VERSION_COMMAND[0], exc)
        return None

    try:
        text = output.decode("utf-8").strip()
    except UnicodeDecodeError:
        logger.debug("dotnet --version produced undecodable output")
        return None

    if not text:
        return None
    return f"v{text}"


class DotNetModule(PromptModule):
    """Shows the .NET SDK version when the directory holds a .NET project.

    Displays when any of ``project.json``, ``global.json``, ``*.csproj``,
    ``*.fsproj``, ``*.xproj`` or ``*.sln`` is present in the current
    directory. By default the version always comes from ``dotnet --version``;
    with ``use_pinned_version`` enabled a version pinned in the selected
    ``global.json`` takes precedence.
    """

    name = "dotnet"

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or run_command

    def render(self, context: Context) -> Optional[Module]:
        try:
            dotnet_files = scan_dotnet_files(context)
        except OSError as exc:
            logger.debug("Unable to list %s: %s", context.current_dir, exc)
            return None

        relevant = select_relevant_file(dotnet_files)
        if relevant is None:
            return None

        settings = context.module_config(self.name)
        version = self._resolve_version(settings, relevant)
        if version is None:
            return None

        module = context.new_module(self.name)
        module.new_segment("symbol", settings.symbol)
        module.new_segment("version", version)
        return module

    def _resolve_version(self, settings: ModuleConfig, relevant: DotNetFile) -> Optional[str]:
        if settings.use_pinned_version and relevant.marker in _PIN_BEARING:
            pinned = read_pinned_sdk_version(relevant.path)
            if pinned is not None:
                return f"v{pinned}"
            logger.debug("No pinned SDK version in %s", relevant.path)
        return query_dotnet_version(self._runner)


__all__ = [
    "DOTNET_VERSION_COMMAND",
    "DotNetFile",
    "DotNetModule",
    "MARKER_PRIORITY",
    "MarkerType",
    "Version",
    "classify_file",
    "query_dotnet_version",
    "read_pinned_sdk_version",
    "scan_dotnet_files",
    "select_relevant_file",
]
