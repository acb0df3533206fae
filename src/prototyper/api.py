from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from .ast import ProtocolFile
from .errors import SourceReadError
from .idl import build_idl_grammar
from .parser import Parser


logger = logging.getLogger(__name__)

_PARSER: Parser | None = None


def _get_parser() -> Parser:
    global _PARSER
    if _PARSER is None:
        _PARSER = Parser.for_grammar(build_idl_grammar())
    return _PARSER


def parse_source(src: str, *, file: str = "<memory>") -> ProtocolFile:
    out = _get_parser().parse(src, file=file)
    if not isinstance(out, ProtocolFile):
        raise RuntimeError(f"parser returned unexpected value: {type(out)!r}")
    logger.debug("parsed %s: %d message(s), %d enum(s)", file, len(out.messages), len(out.enums))
    return out


def parse_file(path: str | Path, *, encoding: str = "utf-8") -> ProtocolFile:
    p = Path(path).expanduser().resolve()
    try:
        src = p.read_text(encoding=encoding)
    except OSError as e:
        raise SourceReadError(path=str(p), reason=e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise SourceReadError(path=str(p), reason=f"not valid {encoding}: {e.reason}") from e
    return replace(parse_source(src, file=str(p)), full_path=str(p))
