from __future__ import annotations

from enum import Enum


class TokenKind(str, Enum):
    # Identifiers and literals
    IDENT = "identifier"
    NUMBER = "number"

    # Trivia
    WHITESPACE = "whitespace"
    BLOCK_COMMENT_OPEN = "/*"
    BLOCK_COMMENT_CLOSE = "*/"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    EQ = "="
    SEMI = ";"

    # Keywords
    MESSAGE = "message"
    ENUM = "enum"
    REPEATED = "repeated"

    EOF = "end of input"


# Order matters: the grammar tries these in sequence before falling back to an identifier.
SCALAR_TYPES: tuple[str, ...] = (
    "double",
    "float",
    "int32",
    "int64",
    "uint32",
    "uint64",
    "sint32",
    "sint64",
    "fixed32",
    "fixed64",
    "sfixed32",
    "sfixed64",
    "bool",
    "string",
    "bytes",
)

# ASCII whitespace plus the Unicode space separators accepted between tokens.
WHITESPACE_CHARS: str = (
    "\t\n\v\f\r \u00a0\ufeff\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u202f\u205f\u3000"
)
