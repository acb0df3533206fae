from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A concrete source position.

    Offsets are 0-based; line/column are 1-based for user-facing messages.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single file."""

    file: str
    start: Position
    end: Position

    def format(self) -> str:
        return f"{self.file}:{self.start.line}:{self.start.column}"


class LineIndex:
    """Maps offsets of one source text to line/column positions."""

    __slots__ = ("file", "_starts", "_size")

    def __init__(self, src: str, *, file: str = "<memory>") -> None:
        self.file = file
        self._size = len(src)
        starts = [0]
        i = src.find("\n")
        while i != -1:
            starts.append(i + 1)
            i = src.find("\n", i + 1)
        self._starts = starts

    def position(self, offset: int) -> Position:
        offset = max(0, min(offset, self._size))
        line = bisect_right(self._starts, offset)
        return Position(offset=offset, line=line, column=offset - self._starts[line - 1] + 1)

    def span(self, start: int, end: int) -> Span:
        return Span(file=self.file, start=self.position(start), end=self.position(end))
