"""
The IDL grammar in one place:

- **Lexical rules**: trivia (`_`), identifiers, numbers, keywords
- **Syntactic rules**: fields, enums, messages and the protocol file
- **Construction callbacks**: the `act_*` functions that build the AST bottom-up

Rules are ordered-choice: every `|=` adds an alternative after the existing ones, and the first
alternative that matches wins. This module is meant to be *human scannable*.
"""

from __future__ import annotations

from . import ast as A
from .grammar import Grammar, Ref
from .lexer import IDENTIFIER, NUMBER, TRIVIA, keyword, punct
from .production_dsl import ProductionSink, RuleNt, Sym, eoi, many, many1, opt
from .spans import Span
from .tokens import SCALAR_TYPES, TokenKind


def _str(v: object) -> str:
    if not isinstance(v, str):
        raise TypeError(f"expected str, got {type(v)!r}")
    return v


def _as_list(v: object) -> list[object]:
    if v is None:
        return []
    if isinstance(v, list):
        return v
    raise TypeError(f"expected list, got {type(v)!r}")


def _partition(items: list[object], *kinds: type) -> tuple[tuple[object, ...], ...]:
    """Stable partition of mixed nodes by type, one tuple per requested kind."""
    out: list[list[object]] = [[] for _ in kinds]
    for it in items:
        for i, kind in enumerate(kinds):
            if isinstance(it, kind):
                out[i].append(it)
                break
        else:
            raise TypeError(f"unexpected node in body: {type(it)!r}")
    return tuple(tuple(xs) for xs in out)


def build_idl_grammar() -> Grammar:
    # -----------------------------------------------------------------------
    # Symbols (single definition; directly DSL-concatenatable)
    # -----------------------------------------------------------------------
    sink = ProductionSink()

    def NT(name: str) -> RuleNt:
        return RuleNt(sym=Ref(name), _sink=sink)

    def T(kind: TokenKind) -> Sym:
        return Sym(sym=punct(kind))

    def K(kind: TokenKind) -> Sym:
        return Sym(sym=keyword(kind.value))

    # Terminals
    LBRACE = T(TokenKind.LBRACE)
    RBRACE = T(TokenKind.RBRACE)
    EQ = T(TokenKind.EQ)
    SEMI = T(TokenKind.SEMI)
    IDENT = Sym(IDENTIFIER)
    NUM = Sym(NUMBER)

    # Keywords
    MESSAGE = K(TokenKind.MESSAGE)
    ENUM = K(TokenKind.ENUM)
    REPEATED = K(TokenKind.REPEATED)
    SCALARS = [Sym(keyword(s)) for s in SCALAR_TYPES]

    # Nonterminals
    ProtocolFile = NT("ProtocolFile")
    MessageOrEnum = NT("MessageOrEnum")
    MessageDefinition = NT("MessageDefinition")
    MessageInternal = NT("MessageInternal")
    EnumDefinition = NT("EnumDefinition")
    EnumValue = NT("EnumValue")
    FieldDefinition = NT("FieldDefinition")
    Repeated = NT("Repeated")
    FieldType = NT("FieldType")
    _ = NT("_")

    # Trivia: `ws` is `_*`, `ws1` is `_+`.
    ws = many(_)
    ws1 = many1(_)

    # -----------------------------------------------------------------------
    # Construction callbacks
    # -----------------------------------------------------------------------
    def act_passthrough(xs: list[object], span: Span) -> object:
        return xs[0]

    def act_none(xs: list[object], span: Span) -> object:
        return None

    def act_true(xs: list[object], span: Span) -> object:
        return True

    def act_field(xs: list[object], span: Span) -> object:
        # [repeated?, type, _+, name, _*, "=", _*, number, _*, ";", _*]
        return A.Field(span=span, name=_str(xs[3]), type=_str(xs[1]), repeated=bool(xs[0]))

    def act_enum_value(xs: list[object], span: Span) -> object:
        # [name, _+, "=", _+, number, _*, ";", _*]
        return A.EnumValue(span=span, value=_str(xs[0]))

    def act_enum(xs: list[object], span: Span) -> object:
        # ["enum", _+, name, _*, "{", _*, values+, "}", _*]
        values = tuple(v for v in _as_list(xs[6]) if isinstance(v, A.EnumValue))
        return A.Enum(span=span, name=_str(xs[2]), values=values)

    def act_message(xs: list[object], span: Span) -> object:
        # ["message", _*, name, _*, "{", _*, internals*, "}", _*]
        fields, enums = _partition(_as_list(xs[6]), A.Field, A.Enum)
        return A.Message(span=span, name=_str(xs[2]), fields=fields, enums=enums)

    def act_file(xs: list[object], span: Span) -> object:
        # [_*, items*, EOF]
        messages, enums = _partition(_as_list(xs[1]), A.Message, A.Enum)
        return A.ProtocolFile(span=span, messages=messages, enums=enums)

    # -----------------------------------------------------------------------
    # Productions
    # -----------------------------------------------------------------------

    # Lexical
    _ |= Sym(TRIVIA) @ act_none

    # Fields
    Repeated |= REPEATED & ws1 @ act_true
    for scalar in SCALARS:
        FieldType |= scalar @ act_passthrough
    FieldType |= IDENT @ act_passthrough
    FieldDefinition |= (
        opt(Repeated) & FieldType & ws1 & IDENT & ws & EQ & ws & NUM & ws & SEMI & ws
    ) @ act_field

    # Enums
    EnumValue |= IDENT & ws1 & EQ & ws1 & NUM & ws & SEMI & ws @ act_enum_value
    EnumDefinition |= ENUM & ws1 & IDENT & ws & LBRACE & ws & many1(EnumValue) & RBRACE & ws @ act_enum

    # Messages
    MessageInternal |= FieldDefinition | EnumDefinition @ act_passthrough
    MessageDefinition |= (
        MESSAGE & ws & IDENT & ws & LBRACE & ws & many(MessageInternal) & RBRACE & ws
    ) @ act_message

    # Top-level
    MessageOrEnum |= MessageDefinition | EnumDefinition @ act_passthrough
    ProtocolFile |= ws & many(MessageOrEnum) & eoi() @ act_file

    return sink.grammar(ProtocolFile)
