"""Prompt module implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from .base import PromptModule
from .dotnet import DotNetModule

_ENTRY_POINT_GROUP = "promptline.modules"

_BUILTIN_FACTORIES: dict[str, Callable[[], PromptModule]] = {
    "dotnet": DotNetModule,
}


def builtin_module_names() -> List[str]:
    return list(_BUILTIN_FACTORIES)


def discover_modules(enabled: Sequence[str] | None = None) -> List[PromptModule]:
    """Return instantiated modules, honoring optional enabled names and their order."""

    enabled_list: List[str] | None = None
    if enabled is not None:
        enabled_list = [name.lower() for name in enabled]

    factories: dict[str, Callable[[], PromptModule]] = dict(_BUILTIN_FACTORIES)

    for entry in _iter_entry_points():
        key = entry.name.lower()
        if key in factories:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - depends on installed plugins
            raise RuntimeError(f"Failed to load module entry point '{entry.name}': {exc}") from exc

        def _factory(obj: object = loaded) -> PromptModule:
            return _coerce_module(obj)

        factories[key] = _factory

    order = enabled_list if enabled_list is not None else list(factories)
    missing = [name for name in order if name not in factories]
    if missing:
        raise ValueError(f"Unknown modules requested: {', '.join(sorted(missing))}")

    modules: List[PromptModule] = []
    seen: Set[str] = set()
    for name in order:
        if name in seen:
            continue
        instance = factories[name]()
        if not isinstance(instance, PromptModule):
            raise TypeError(f"Module factory for '{name}' did not return a PromptModule instance")
        modules.append(instance)
        seen.add(name)
    return modules


def _coerce_module(obj: object) -> PromptModule:
    if isinstance(obj, PromptModule):
        return obj
    if isinstance(obj, type) and issubclass(obj, PromptModule):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, PromptModule):
            return instance
    raise TypeError("Module entry point must be a PromptModule subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "DotNetModule",
    "PromptModule",
    "builtin_module_names",
    "discover_modules",
]
