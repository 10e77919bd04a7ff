"""Prompt assembly across all enabled modules."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from .config import PromptConfig, load_config
from .context import Context, DirLister
from .logging import get_logger
from .models import Module
from .modules import PromptModule, discover_modules
from .render import render_module, render_modules


class Prompt:
    """Runs prompt modules against a directory and renders the result."""

    def __init__(
        self,
        config: PromptConfig | None = None,
        *,
        modules: Sequence[PromptModule] | None = None,
        lister: DirLister | None = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        if modules is None:
            modules = discover_modules(self.config.modules or None)
        self.modules: List[PromptModule] = list(modules)
        self.lister = lister
        self.logger = get_logger("prompt")

    def context(self, path: str | Path = ".") -> Context:
        return Context(path, config=self.config, lister=self.lister)

    def collect(self, path: str | Path = ".") -> List[Module]:
        """Return every module present for ``path``, in configured order."""
        context = self.context(path)
        collected: List[Module] = []
        for module in self.modules:
            result = self._run(module, context)
            if result is not None:
                collected.append(result)
        self.logger.debug("Rendered %d of %d modules", len(collected), len(self.modules))
        return collected

    def module(self, name: str, path: str | Path = ".") -> Optional[Module]:
        """Run a single module by name.

        Raises ``KeyError`` when no such module is loaded.
        """
        for module in self.modules:
            if module.name == name:
                return self._run(module, self.context(path))
        raise KeyError(name)

    def render(self, path: str | Path = ".", *, plain: bool = False) -> str:
        return render_modules(self.collect(path), self.config, plain=plain)

    def render_one(self, name: str, path: str | Path = ".", *, plain: bool = False) -> str:
        result = self.module(name, path)
        if result is None:
            return ""
        return render_module(result, self.config, plain=plain)

    def _run(self, module: PromptModule, context: Context) -> Optional[Module]:
        if self.config.module(module.name).disabled:
            return None
        try:
            result = module.render(context)
        except Exception:
            # A failing module never breaks the prompt.
            self.logger.debug("Module %s failed", module.name, exc_info=True)
            return None
        if result is None or result.is_empty():
            return None
        return result


__all__ = ["Prompt"]
