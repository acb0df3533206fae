from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ParseError
from .grammar import (
    Action,
    Choice,
    EndOfInput,
    Expr,
    Grammar,
    Literal,
    Not,
    Optional,
    Pattern,
    Ref,
    Repeat,
    Seq,
    refs_of,
)
from .spans import LineIndex
from .tokens import TokenKind


# Result of a successful match: (new position, semantic value). Failure is None.
Match = tuple[int, object]


def _describe_found(src: str, pos: int) -> str:
    if pos >= len(src):
        return TokenKind.EOF.value
    ch = src[pos]
    return repr(ch) if ch.isprintable() and not ch.isspace() else f"U+{ord(ch):04X}"


@dataclass(slots=True)
class _Run:
    """State of a single parse: the input, the rules and the furthest failure seen so far."""

    rules: dict[str, Expr]
    src: str
    file: str
    lines: LineIndex
    fail_pos: int = 0
    expected: set[str] = field(default_factory=set)
    silent: int = 0

    def fail(self, pos: int, what: str) -> None:
        if self.silent:
            return
        if pos > self.fail_pos:
            self.fail_pos = pos
            self.expected = {what}
        elif pos == self.fail_pos:
            self.expected.add(what)

    def match(self, expr: Expr, pos: int) -> Match | None:
        src = self.src

        if isinstance(expr, Literal):
            if src.startswith(expr.text, pos):
                return pos + len(expr.text), expr.text
            self.fail(pos, expr.display())
            return None

        if isinstance(expr, Pattern):
            m = expr.regex.match(src, pos)
            if m is None:
                self.fail(pos, expr.label)
                return None
            return m.end(), m.group(0)

        if isinstance(expr, Ref):
            return self.match(self.rules[expr.name], pos)

        if isinstance(expr, Seq):
            values: list[object] = []
            cur = pos
            for item in expr.items:
                r = self.match(item, cur)
                if r is None:
                    return None
                cur, v = r
                values.append(v)
            return cur, values

        if isinstance(expr, Choice):
            for alt in expr.alts:
                r = self.match(alt, pos)
                if r is not None:
                    return r
            return None

        if isinstance(expr, Repeat):
            out: list[object] = []
            cur = pos
            while True:
                r = self.match(expr.expr, cur)
                if r is None:
                    break
                nxt, v = r
                out.append(v)
                if nxt == cur:
                    # An empty match would repeat forever.
                    break
                cur = nxt
            if len(out) < expr.min:
                return None
            return cur, out

        if isinstance(expr, Optional):
            r = self.match(expr.expr, pos)
            if r is None:
                return pos, None
            return r

        if isinstance(expr, Not):
            self.silent += 1
            try:
                r = self.match(expr.expr, pos)
            finally:
                self.silent -= 1
            if r is not None:
                self.fail(pos, f"not {expr.expr}")
                return None
            return pos, None

        if isinstance(expr, Action):
            r = self.match(expr.expr, pos)
            if r is None:
                return None
            end, v = r
            xs = v if isinstance(v, list) else [v]
            return end, expr.fn(xs, self.lines.span(pos, end))

        if isinstance(expr, EndOfInput):
            if pos >= len(src):
                return pos, None
            self.fail(pos, TokenKind.EOF.value)
            return None

        raise TypeError(f"unknown grammar expression: {type(expr)!r}")

    def error(self) -> ParseError:
        pos = self.fail_pos
        span = self.lines.span(pos, min(pos + 1, len(self.src)))
        expected = tuple(sorted(self.expected))
        found = _describe_found(self.src, pos)

        close = f'"{TokenKind.BLOCK_COMMENT_CLOSE.value}"'
        if close in self.expected and pos >= len(self.src):
            return ParseError(
                span=span,
                message="unterminated block comment",
                expected=expected,
                hint="add closing */",
            )

        if not expected:
            return ParseError(span=span, message=f"unexpected {found}")
        if len(expected) == 1:
            exp_s = expected[0]
        else:
            exp_s = ", ".join(expected[:-1]) + " or " + expected[-1]
        return ParseError(
            span=span,
            message=f"unexpected {found}",
            expected=expected,
            hint=f"expected {exp_s}",
        )


@dataclass(frozen=True, slots=True)
class Parser:
    grammar: Grammar
    rules: dict[str, Expr]

    @classmethod
    def for_grammar(cls, grammar: Grammar) -> "Parser":
        rules = {r.name: r.expr for r in grammar.rules}
        if grammar.start not in rules:
            raise ValueError(f"start rule is not defined: {grammar.start}")
        for r in grammar.rules:
            missing = refs_of(r.expr) - rules.keys()
            if missing:
                raise ValueError(f"rule {r.name} references undefined rule(s): {', '.join(sorted(missing))}")
        return cls(grammar=grammar, rules=rules)

    def parse(self, src: str, *, file: str = "<memory>") -> object:
        run = _Run(rules=self.rules, src=src, file=file, lines=LineIndex(src, file=file))
        r = run.match(self.rules[self.grammar.start], 0)
        if r is None:
            raise run.error()
        end, value = r
        if end != len(src):
            # The start rule did not anchor itself at end of input.
            run.fail(end, TokenKind.EOF.value)
            raise run.error()
        return value
