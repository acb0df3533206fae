from __future__ import annotations

from dataclasses import dataclass, field

from .grammar import Action, Choice, EndOfInput, Expr, Grammar, Not, Optional, Ref, Repeat, Rule, Seq


@dataclass(frozen=True, slots=True)
class Rhs:
    syms: tuple[Expr, ...]

    def __and__(self, other):
        # Support: A & B & C @ act  (parses as A & B & (C @ act))
        if isinstance(other, Bound):
            return Bound(self.syms + other.syms, other.action)
        if isinstance(other, Sym):
            return Rhs(self.syms + (other.sym,))
        return NotImplemented

    def __matmul__(self, action):
        return Bound(self.syms, action)


@dataclass(frozen=True, slots=True)
class Bound:
    syms: tuple[Expr, ...]
    action: object

    def __and__(self, other):
        raise TypeError("cannot use & after @ action; put @ action at the end")


@dataclass(slots=True)
class Sym:
    sym: Expr

    def __and__(self, other):
        if isinstance(other, Bound):
            return Bound((self.sym,) + other.syms, other.action)
        if isinstance(other, Sym):
            return Rhs((self.sym, other.sym))
        return NotImplemented

    def __or__(self, other):
        # Support: A | B | C @ act  (parses as (A | B) | (C @ act))
        if isinstance(other, Bound):
            return BoundAlts(action=other.action, alts=[(self.sym,), other.syms])
        if isinstance(other, Sym):
            return Alts([(self.sym,), (other.sym,)])
        return NotImplemented

    def __matmul__(self, action):
        return Bound((self.sym,), action)


@dataclass(slots=True)
class RuleNt(Sym):
    """Rule that can be used as RHS symbol and as an LHS with `|=`.

    Each `|=` appends one more alternative; alternatives are tried in the order they were added.
    """

    _sink: "ProductionSink"

    def __ior__(self, rhs):
        if isinstance(rhs, Bound):
            self._sink.add(self.sym, Action(Seq(rhs.syms), rhs.action))
            return self
        if isinstance(rhs, BoundAlts):
            for body in rhs.alts:
                self._sink.add(self.sym, Action(Seq(body), rhs.action))
            return self
        if isinstance(rhs, Rhs):
            raise TypeError("production missing action: use `rhs @ action`")
        if isinstance(rhs, Alts):
            raise TypeError("alternation missing action: use `(a | b | c) @ action`")
        raise TypeError("production must be `rhs @ action`")


@dataclass(slots=True)
class ProductionSink:
    rules: dict[str, list[Expr]] = field(default_factory=dict)

    def add(self, head: Expr, body: Expr) -> None:
        if not isinstance(head, Ref):
            raise TypeError("head must be a rule reference")
        self.rules.setdefault(head.name, []).append(body)

    def grammar(self, start: RuleNt) -> Grammar:
        if not isinstance(start.sym, Ref):
            raise TypeError("start must be a rule")
        rules = tuple(
            Rule(name=name, expr=alts[0] if len(alts) == 1 else Choice(tuple(alts)))
            for name, alts in self.rules.items()
        )
        return Grammar(start=start.sym.name, rules=rules)


@dataclass(frozen=True, slots=True)
class Alts:
    alts: list[tuple[Expr, ...]]

    def __or__(self, other):
        if isinstance(other, Bound):
            return BoundAlts(action=other.action, alts=[*self.alts, other.syms])
        if isinstance(other, Sym):
            return Alts([*self.alts, (other.sym,)])
        return NotImplemented

    def __matmul__(self, action):
        return BoundAlts(action=action, alts=self.alts)


@dataclass(frozen=True, slots=True)
class BoundAlts:
    action: object
    alts: list[tuple[Expr, ...]]


# Grammar operators over a single symbol: `_*`, `_+`, `x?`, `!x` and end of input.


def many(v: Sym) -> Sym:
    return Sym(Repeat(v.sym, min=0))


def many1(v: Sym) -> Sym:
    return Sym(Repeat(v.sym, min=1))


def opt(v: Sym) -> Sym:
    return Sym(Optional(v.sym))


def not_(v: Sym) -> Sym:
    return Sym(Not(v.sym))


def eoi() -> Sym:
    return Sym(EndOfInput())
