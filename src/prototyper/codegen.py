"""Type-definition emitters.

Turns a parsed protocol file into Flow or TypeScript type aliases. Scalars follow the protobuf
JSON mapping: 64-bit integers and bytes are carried as strings. Non-scalar field types are emitted
by name, unresolved, exactly as written in the IDL.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from . import ast as A
from .errors import UnknownSyntaxError


logger = logging.getLogger(__name__)


class TargetSyntax(str, Enum):
    FLOW = "flow"
    TYPESCRIPT = "typescript"


SCALAR_TS_TYPES: dict[str, str] = {
    "double": "number",
    "float": "number",
    "int32": "number",
    "uint32": "number",
    "sint32": "number",
    "fixed32": "number",
    "sfixed32": "number",
    "int64": "string",
    "uint64": "string",
    "sint64": "string",
    "fixed64": "string",
    "sfixed64": "string",
    "bool": "boolean",
    "string": "string",
    "bytes": "string",
}


def generate_type_definitions(pf: A.ProtocolFile, syntax: str | TargetSyntax) -> str:
    try:
        target = TargetSyntax(syntax)
    except ValueError:
        raise UnknownSyntaxError(syntax=str(syntax), choices=tuple(t.value for t in TargetSyntax)) from None
    logger.debug("emitting %s definitions for %s", target.value, pf.full_path or "<memory>")
    return _RENDERERS[target](pf)


def _render_flow(pf: A.ProtocolFile) -> str:
    return _render(pf, header=["// @flow"], array=lambda t: f"Array<{t}>")


def _render_typescript(pf: A.ProtocolFile) -> str:
    return _render(pf, header=[], array=lambda t: f"{t}[]")


_RENDERERS: dict[TargetSyntax, Callable[[A.ProtocolFile], str]] = {
    TargetSyntax.FLOW: _render_flow,
    TargetSyntax.TYPESCRIPT: _render_typescript,
}


def _render(pf: A.ProtocolFile, *, header: list[str], array: Callable[[str], str]) -> str:
    out = list(header)
    if pf.full_path:
        out.append(f"// Generated from {pf.full_path}")
    if out:
        out.append("")

    for en in pf.enums:
        out.append(_enum_alias(en))
        out.append("")

    for msg in pf.messages:
        # Nested enums are hoisted so field types can refer to them by their plain name.
        for en in msg.enums:
            out.append(_enum_alias(en))
            out.append("")
        out.extend(_message_alias(msg, array=array))
        out.append("")

    while out and out[-1] == "":
        out.pop()
    return "\n".join(out) + "\n" if out else ""


def _enum_alias(en: A.Enum) -> str:
    members = " | ".join(f"'{v.value}'" for v in en.values)
    return f"export type {en.name} = {members};"


def _message_alias(msg: A.Message, *, array: Callable[[str], str]) -> list[str]:
    if not msg.fields:
        return [f"export type {msg.name} = {{}};"]
    out = [f"export type {msg.name} = {{"]
    for f in msg.fields:
        typ = SCALAR_TS_TYPES.get(f.type, f.type)
        if f.repeated:
            typ = array(typ)
        out.append(f"  {f.name}: {typ};")
    out.append("};")
    return out
