"""Configuration loading for promptline (promptline.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = "promptline.yml"
CONFIG_ENV_VAR = "PROMPTLINE_CONFIG"

_DEFAULT_PREFIX = "via "
_DEFAULT_SUFFIX = " "
_DEFAULT_FORMAT = "{{ symbol }}{{ version }}"

# Per-module defaults for the built-in detectors.
_MODULE_DEFAULTS: Dict[str, Dict[str, str]] = {
    "dotnet": {"symbol": "•NET ", "style": "bold blue"},
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ModuleConfig:
    """Settings shared by every prompt module."""

    name: str
    disabled: bool = False
    symbol: str = ""
    style: str = ""
    format: str = _DEFAULT_FORMAT
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    use_pinned_version: bool = False


@dataclass
class PromptConfig:
    """Represents the settings defined in promptline.yml."""

    path: Optional[Path] = None
    modules: List[str] = field(default_factory=list)
    prefix: str = _DEFAULT_PREFIX
    suffix: str = _DEFAULT_SUFFIX
    module_settings: Dict[str, ModuleConfig] = field(default_factory=dict)

    def module(self, name: str) -> ModuleConfig:
        """Return the settings for ``name``, falling back to built-in defaults."""
        settings = self.module_settings.get(name)
        if settings is not None:
            return settings
        return _default_module_config(name)


def default_config_path() -> Path:
    """Return the config path from the environment or the user config dir."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path("~/.config").expanduser() / CONFIG_FILENAME


def load_config(config_path: Path | None = None) -> PromptConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path or default_config_path())

    if not config_file.exists():
        return PromptConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    module_settings: Dict[str, ModuleConfig] = {}
    for name, value in data.items():
        if not isinstance(value, dict):
            continue
        module_settings[str(name)] = _parse_module(str(name), value)

    prefix = _as_str(data.get("prefix"))
    suffix = _as_str(data.get("suffix"))

    return PromptConfig(
        path=config_file,
        modules=_as_str_list(data.get("modules")),
        prefix=_DEFAULT_PREFIX if prefix is None else prefix,
        suffix=_DEFAULT_SUFFIX if suffix is None else suffix,
        module_settings=module_settings,
    )


def _parse_module(name: str, data: Dict[str, Any]) -> ModuleConfig:
    settings = _default_module_config(name)
    disabled = _as_bool(data.get("disabled"))
    if disabled is not None:
        settings.disabled = disabled
    symbol = _as_str(data.get("symbol"))
    if symbol is not None:
        settings.symbol = symbol
    style = _as_str(data.get("style"))
    if style is not None:
        settings.style = style
    fmt = _as_str(data.get("format"))
    if fmt:
        settings.format = fmt
    settings.prefix = _as_str(data.get("prefix"))
    settings.suffix = _as_str(data.get("suffix"))
    pinned = _as_bool(data.get("use_pinned_version"))
    if pinned is not None:
        settings.use_pinned_version = pinned
    return settings


def _default_module_config(name: str) -> ModuleConfig:
    defaults = _MODULE_DEFAULTS.get(name, {})
    return ModuleConfig(
        name=name,
        symbol=defaults.get("symbol", ""),
        style=defaults.get("style", ""),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
