"""Per-render view of the working directory handed to prompt modules."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

from .config import ModuleConfig, PromptConfig
from .models import Module

DirLister = Callable[[Path], List[Path]]


def list_directory(path: Path) -> List[Path]:
    """Return the entries of ``path`` in the order the filesystem reports them."""
    return list(path.iterdir())


class Context:
    """Holds the directory being rendered and lazily lists its entries.

    One context is built per render; the listing is memoized only for the
    lifetime of that context.
    """

    def __init__(
        self,
        current_dir: str | Path = ".",
        *,
        config: PromptConfig | None = None,
        lister: DirLister | None = None,
    ) -> None:
        self.current_dir = Path(current_dir).expanduser()
        self.config = config or PromptConfig()
        self._lister = lister or list_directory
        self._dir_files: Optional[List[Path]] = None

    @property
    def dir_files(self) -> List[Path]:
        """Entries of the current directory.

        Raises ``OSError`` when the directory cannot be listed.
        """
        if self._dir_files is None:
            self._dir_files = self._lister(self.current_dir)
        return self._dir_files

    def module_config(self, name: str) -> ModuleConfig:
        return self.config.module(name)

    def new_module(self, name: str) -> Module:
        """Return an empty module carrying the configured style for ``name``."""
        return Module(name=name, style=self.module_config(name).style)
