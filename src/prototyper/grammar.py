from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Union

from .spans import Span


ActionFn = Callable[[list[object], Span], object]


@dataclass(frozen=True, slots=True)
class Literal:
    """Exact text, matched as a plain prefix of the remaining input."""

    text: str

    def display(self) -> str:
        return f'"{self.text}"'

    def __str__(self) -> str:
        return self.display()


@dataclass(frozen=True, slots=True)
class Pattern:
    """A regular expression anchored at the current position."""

    regex: re.Pattern[str]
    label: str

    def __str__(self) -> str:
        return f"<{self.label}>"


@dataclass(frozen=True, slots=True)
class Seq:
    items: tuple[Expr, ...]

    def __str__(self) -> str:
        return " ".join(_wrap(x) for x in self.items) if self.items else "ε"


@dataclass(frozen=True, slots=True)
class Choice:
    """Ordered choice: the first alternative that matches wins."""

    alts: tuple[Expr, ...]

    def __str__(self) -> str:
        return " / ".join(_wrap(x) for x in self.alts)


@dataclass(frozen=True, slots=True)
class Repeat:
    expr: Expr
    min: int = 0

    def __str__(self) -> str:
        return f"{_wrap(self.expr)}{'*' if self.min == 0 else '+'}"


@dataclass(frozen=True, slots=True)
class Optional:
    expr: Expr

    def __str__(self) -> str:
        return f"{_wrap(self.expr)}?"


@dataclass(frozen=True, slots=True)
class Not:
    """Negative lookahead; never consumes input."""

    expr: Expr

    def __str__(self) -> str:
        return f"!{_wrap(self.expr)}"


@dataclass(frozen=True, slots=True)
class Ref:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Action:
    """Runs ``fn(values, span)`` on a successful match of ``expr``."""

    expr: Expr
    fn: ActionFn = field(compare=False)

    def __str__(self) -> str:
        name = getattr(self.fn, "__name__", "action")
        return f"{self.expr} {{{name}}}"


@dataclass(frozen=True, slots=True)
class EndOfInput:
    def __str__(self) -> str:
        return "EOF"


Expr = Union[Literal, Pattern, Seq, Choice, Repeat, Optional, Not, Ref, Action, EndOfInput]


def _wrap(x: Expr) -> str:
    if isinstance(x, (Seq, Choice, Action)):
        return f"({x})"
    return str(x)


def refs_of(expr: Expr) -> set[str]:
    """All rule names referenced (transitively through sub-expressions) by ``expr``."""
    if isinstance(expr, Ref):
        return {expr.name}
    if isinstance(expr, (Seq, Choice)):
        out: set[str] = set()
        for x in expr.items if isinstance(expr, Seq) else expr.alts:
            out |= refs_of(x)
        return out
    if isinstance(expr, (Repeat, Optional, Not, Action)):
        return refs_of(expr.expr)
    return set()


@dataclass(frozen=True, slots=True)
class Rule:
    name: str
    expr: Expr

    def __str__(self) -> str:
        return f"{self.name} = {self.expr}"


@dataclass(frozen=True, slots=True)
class Grammar:
    start: str
    rules: tuple[Rule, ...]

    def rule(self, name: str) -> Rule:
        for r in self.rules:
            if r.name == name:
                return r
        raise KeyError(name)
