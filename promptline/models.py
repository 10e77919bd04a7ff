"""Core data models shared across promptline components."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Segment:
    """Named piece of text contributed to the prompt."""

    name: str
    text: str


@dataclass
class Module:
    """Ordered segments plus the style a detector contributes to one render."""

    name: str
    style: str = ""
    segments: List[Segment] = field(default_factory=list)

    def new_segment(self, name: str, text: str) -> Segment:
        """Append a segment and return it."""
        segment = Segment(name=name, text=text)
        self.segments.append(segment)
        return segment

    def get_segment(self, name: str) -> Optional[Segment]:
        for segment in self.segments:
            if segment.name == name:
                return segment
        return None

    def is_empty(self) -> bool:
        return not any(segment.text for segment in self.segments)
