"""Base classes for prompt module plugins."""

from abc import ABC, abstractmethod
from typing import Optional

from ..context import Context
from ..models import Module


class PromptModule(ABC):
    """Contract for detectors that contribute segments to the prompt."""

    name: str = ""

    @abstractmethod
    def render(self, context: Context) -> Optional[Module]:
        """Return the module for this render, or None when not applicable."""
