from __future__ import annotations

from .api import parse_file, parse_source
from .ast import Enum, EnumValue, Field, Message, ProtocolFile
from .codegen import TargetSyntax, generate_type_definitions
from .errors import ParseError, SourceReadError, UnknownSyntaxError
from .format import format_protocol_file

__all__ = [
    "Enum",
    "EnumValue",
    "Field",
    "Message",
    "ParseError",
    "ProtocolFile",
    "SourceReadError",
    "TargetSyntax",
    "UnknownSyntaxError",
    "format_protocol_file",
    "generate_type_definitions",
    "parse_file",
    "parse_source",
]
