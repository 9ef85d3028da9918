from __future__ import annotations
from typing import Iterable, List


class LineBuilder:
    """Ordered list of text pieces joined with a fixed separator."""

    def __init__(self, sep: str = "\n", indent: str = "  ") -> None:
        self.sep = sep
        self.indent = indent
        self._parts: List[str] = []

    def add(self, text: str, level: int = 0) -> "LineBuilder":
        self._parts.append(self.indent * level + text)
        return self

    def extend(self, texts: Iterable[str], level: int = 0) -> "LineBuilder":
        for t in texts:
            self.add(t, level)
        return self

    @property
    def parts(self) -> List[str]:
        return list(self._parts)

    def __len__(self) -> int:
        return len(self._parts)

    def build(self) -> str:
        return self.sep.join(self._parts)

    __str__ = build
