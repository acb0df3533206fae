from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from prototyper import Enum, EnumValue, Field, Message, ProtocolFile, format_protocol_file, parse_source
from prototyper.tokens import SCALAR_TYPES, WHITESPACE_CHARS


_IDENT_START = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_$"
_IDENT_PART = _IDENT_START + "0123456789"
_COMMENT_CHARS = "abcXYZ019 \t{}=;_$.,'\"-"


def _ident() -> st.SearchStrategy[str]:
    head = st.sampled_from(list(_IDENT_START))
    tail = st.text(alphabet=list(_IDENT_PART), min_size=0, max_size=12)
    # Keywords are fine as names, but "repeated" in type position reads as the modifier.
    return st.builds(lambda h, t: h + t, head, tail).filter(lambda s: s not in {"message", "enum", "repeated"})


def _trivia(*, required: bool) -> st.SearchStrategy[str]:
    whitespace = st.text(alphabet=list(WHITESPACE_CHARS), min_size=1, max_size=3)
    line_comment = st.text(alphabet=list(_COMMENT_CHARS), max_size=10).map(lambda s: "//" + s + "\n")
    block_comment = st.text(alphabet=list(_COMMENT_CHARS + "\n*/"), max_size=10).filter(lambda s: "*/" not in s).map(lambda s: "/*" + s + "*/")
    piece = st.one_of(whitespace, line_comment, block_comment)
    return st.lists(piece, min_size=1 if required else 0, max_size=3).map("".join)


_ENUM = st.builds(
    lambda name, values: Enum(name=name, values=tuple(EnumValue(v) for v in values)),
    _ident(),
    st.lists(_ident(), min_size=1, max_size=5),
)

_FIELD = st.builds(
    lambda name, typ, rep: Field(name=name, type=typ, repeated=rep),
    _ident(),
    # A named type must not start with a scalar keyword, or the scalar wins as a prefix.
    st.one_of(st.sampled_from(SCALAR_TYPES), _ident().filter(lambda s: not s.startswith(SCALAR_TYPES))),
    st.booleans(),
)

# Message bodies keep fields and nested enums interleaved, as written in source.
_MESSAGE_BODY = st.lists(st.one_of(_FIELD, _ENUM), max_size=6)
_TOP_LEVEL = st.lists(st.one_of(st.tuples(_ident(), _MESSAGE_BODY), _ENUM), max_size=4)


@st.composite
def idl_sources(draw, *, noisy: bool) -> tuple[str, ProtocolFile]:
    """A source text plus the tree it must parse to."""
    parts: list[str] = []

    def tok(s: str) -> None:
        parts.append(s)

    def gap(plain: str, *, required: bool = False) -> None:
        parts.append(draw(_trivia(required=required)) if noisy else plain)

    def number() -> str:
        return str(draw(st.integers(min_value=0, max_value=10**30)))

    def emit_enum(en: Enum) -> None:
        tok("enum")
        gap(" ", required=True)
        tok(en.name)
        gap(" ")
        tok("{")
        for v in en.values:
            gap(" ")
            tok(v.value)
            gap(" ", required=True)
            tok("=")
            gap(" ", required=True)
            tok(number())
            gap("")
            tok(";")
        gap(" ")
        tok("}")

    def emit_field(f: Field) -> None:
        if f.repeated:
            tok("repeated")
            gap(" ", required=True)
        tok(f.type)
        gap(" ", required=True)
        tok(f.name)
        gap(" ")
        tok("=")
        gap(" ")
        tok(number())
        gap("")
        tok(";")

    messages: list[Message] = []
    enums: list[Enum] = []
    gap("")
    for item in draw(_TOP_LEVEL):
        if isinstance(item, Enum):
            emit_enum(item)
            enums.append(item)
        else:
            name, body = item
            tok("message")
            gap(" ", required=True)
            tok(name)
            gap(" ")
            tok("{")
            for elem in body:
                gap(" ")
                if isinstance(elem, Enum):
                    emit_enum(elem)
                else:
                    emit_field(elem)
            gap(" ")
            tok("}")
            messages.append(
                Message(
                    name=name,
                    fields=tuple(e for e in body if isinstance(e, Field)),
                    enums=tuple(e for e in body if isinstance(e, Enum)),
                )
            )
        gap("\n")

    return "".join(parts), ProtocolFile(messages=tuple(messages), enums=tuple(enums))


_SETTINGS = settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])


@given(idl_sources(noisy=False))
@_SETTINGS
def test_parse_builds_expected_tree(case: tuple[str, ProtocolFile]) -> None:
    src, expected = case
    assert parse_source(src, file="fuzz.proto") == expected


@given(idl_sources(noisy=True))
@_SETTINGS
def test_trivia_between_tokens_does_not_change_tree(case: tuple[str, ProtocolFile]) -> None:
    src, expected = case
    ast1 = parse_source(src, file="fuzz.proto")
    assert ast1 == expected
    # Deterministic: a second parse of the same text is identical.
    assert parse_source(src, file="fuzz.proto") == ast1


@given(idl_sources(noisy=True))
@_SETTINGS
def test_fuzz_roundtrip_stable_format(case: tuple[str, ProtocolFile]) -> None:
    # Parse -> format -> parse -> format should converge (idempotent formatting).
    src, expected = case
    out1 = format_protocol_file(parse_source(src, file="fuzz.proto"))
    ast2 = parse_source(out1, file="fuzz.proto")
    assert ast2 == expected
    assert format_protocol_file(ast2) == out1
