from __future__ import annotations

from . import ast as A


def format_protocol_file(pf: A.ProtocolFile) -> str:
    """Render canonical IDL text for ``pf``.

    Numeric tags are not part of the AST, so fields are numbered from 1 and enum values from 0 in
    source order. Top-level enums come first, then messages.
    """
    out: list[str] = []

    for en in pf.enums:
        out.extend(_format_enum(en, indent=0))
        out.append("")

    for msg in pf.messages:
        out.extend(_format_message(msg, indent=0))
        out.append("")

    # Trim trailing blank lines
    while out and out[-1] == "":
        out.pop()
    return "\n".join(out) + "\n" if out else ""


def _format_message(msg: A.Message, *, indent: int) -> list[str]:
    if not msg.fields and not msg.enums:
        return [_indent(f"message {msg.name} {{}}", indent)]
    out = [_indent(f"message {msg.name} {{", indent)]
    for number, f in enumerate(msg.fields, start=1):
        out.append(_indent(_format_field(f, number) + ";", indent + 2))
    for en in msg.enums:
        out.extend(_format_enum(en, indent=indent + 2))
    out.append(_indent("}", indent))
    return out


def _format_field(f: A.Field, number: int) -> str:
    label = "repeated " if f.repeated else ""
    return f"{label}{f.type} {f.name} = {number}"


def _format_enum(en: A.Enum, *, indent: int) -> list[str]:
    out = [_indent(f"enum {en.name} {{", indent)]
    for number, v in enumerate(en.values):
        out.append(_indent(f"{v.value} = {number};", indent + 2))
    out.append(_indent("}", indent))
    return out


def _indent(s: str, n: int) -> str:
    return (" " * n) + s
