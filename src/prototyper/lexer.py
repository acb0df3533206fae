"""Lexical layer.

The parser is scannerless: instead of producing a token stream, this module builds the terminal
expressions the grammar is written in (trivia, identifiers, numbers and keywords).
"""

from __future__ import annotations

import re

from .grammar import Choice, Literal, Pattern, Seq
from .tokens import WHITESPACE_CHARS, TokenKind


_IDENT_RE = re.compile(r"[A-Za-z$_][A-Za-z0-9$_]*")
_NUMBER_RE = re.compile(r"[0-9]+")
_WHITESPACE_RE = re.compile("[" + re.escape(WHITESPACE_CHARS) + "]")
_LINE_COMMENT_RE = re.compile(r"//[^\n]*(?:\n|\Z)")
# Everything up to (not including) the first "*/", or to end of input when there is none.
_BLOCK_COMMENT_BODY_RE = re.compile(r"(?:[^*]|\*(?!/))*")


IDENTIFIER = Pattern(_IDENT_RE, TokenKind.IDENT.value)
NUMBER = Pattern(_NUMBER_RE, TokenKind.NUMBER.value)
WHITESPACE = Pattern(_WHITESPACE_RE, TokenKind.WHITESPACE.value)
LINE_COMMENT = Pattern(_LINE_COMMENT_RE, "comment")
BLOCK_COMMENT = Seq(
    (
        Literal(TokenKind.BLOCK_COMMENT_OPEN.value),
        Pattern(_BLOCK_COMMENT_BODY_RE, "comment text"),
        Literal(TokenKind.BLOCK_COMMENT_CLOSE.value),
    )
)

# One unit of inter-token trivia. The grammar repeats it as `_*` / `_+`.
TRIVIA = Choice((WHITESPACE, LINE_COMMENT, BLOCK_COMMENT))


def keyword(text: str) -> Literal:
    """A keyword literal.

    Keywords match as plain prefixes, like punctuation: `int32x` reads as `int32` followed by `x`,
    and `messageM` as `message` followed by the name `M`.
    """
    if not is_identifier(text):
        raise ValueError(f"keyword must be identifier-shaped: {text!r}")
    return Literal(text)


def punct(kind: TokenKind) -> Literal:
    return Literal(kind.value)


def is_identifier(s: str) -> bool:
    return _IDENT_RE.fullmatch(s) is not None
