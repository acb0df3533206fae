from __future__ import annotations

from dataclasses import dataclass, field

from .spans import Span
from .tokens import SCALAR_TYPES


# A scalar keyword (see tokens.SCALAR_TYPES) or the unresolved name of a message/enum.
FieldType = str


def _span() -> Span | None:
    # Spans are informational: two trees that differ only in layout compare equal.
    return field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class EnumValue:
    value: str
    span: Span | None = _span()


@dataclass(frozen=True, slots=True)
class Enum:
    name: str
    values: tuple[EnumValue, ...] = ()
    span: Span | None = _span()


@dataclass(frozen=True, slots=True)
class Field:
    name: str
    type: FieldType
    repeated: bool = False
    span: Span | None = _span()

    @property
    def is_scalar(self) -> bool:
        return self.type in SCALAR_TYPES


@dataclass(frozen=True, slots=True)
class Message:
    name: str
    fields: tuple[Field, ...] = ()
    enums: tuple[Enum, ...] = ()  # nested enums only
    span: Span | None = _span()


@dataclass(frozen=True, slots=True)
class ProtocolFile:
    messages: tuple[Message, ...] = ()
    enums: tuple[Enum, ...] = ()  # top-level enums only
    # Absolute path of the parsed file; attached by parse_file, None for in-memory sources.
    full_path: str | None = None
    span: Span | None = _span()
