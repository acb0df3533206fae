from __future__ import annotations

from dataclasses import dataclass

from .spans import Span


@dataclass(slots=True)
class ParseError(Exception):
    span: Span
    message: str
    expected: tuple[str, ...] = ()
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.span.format()}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


@dataclass(slots=True)
class SourceReadError(Exception):
    """A protocol file could not be read from disk."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: cannot read file: {self.reason}"


@dataclass(slots=True)
class UnknownSyntaxError(Exception):
    syntax: str
    choices: tuple[str, ...]

    def __str__(self) -> str:
        return f"unknown target syntax {self.syntax!r} (choose from: {', '.join(self.choices)})"
