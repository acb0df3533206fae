from __future__ import annotations

import argparse
import json
import logging
from dataclasses import fields, is_dataclass
from pathlib import Path

from .api import parse_file
from .codegen import TargetSyntax, generate_type_definitions
from .errors import ParseError, SourceReadError


logger = logging.getLogger(__name__)


def _to_jsonable(obj):
    if is_dataclass(obj):
        return {f.name: _to_jsonable(getattr(obj, f.name)) for f in fields(obj) if f.name != "span"}
    if isinstance(obj, tuple):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, list):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    return obj


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="prototyper",
        description="Generate type definitions from a .proto message file",
        epilog=(
            "examples:\n"
            "  prototyper file.proto typeDef.js -s flow\n"
            "  prototyper file.proto typeDef.ts --syntax typescript"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("protocol_file", help="Input .proto file")
    ap.add_argument("type_definition_file", help="Output type definition file")
    ap.add_argument(
        "-s",
        "--syntax",
        required=True,
        choices=[t.value for t in TargetSyntax],
        help="Choose your language syntax",
    )
    ap.add_argument("--ast", action="store_true", help="Also print the parsed AST as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        pf = parse_file(args.protocol_file)
    except (ParseError, SourceReadError) as e:
        logger.error("%s", e)
        return 1

    if args.ast:
        print(json.dumps(_to_jsonable(pf), indent=2, sort_keys=True))

    out = Path(args.type_definition_file)
    try:
        out.write_text(generate_type_definitions(pf, args.syntax), encoding="utf-8")
    except OSError as e:
        logger.error("%s: cannot write file: %s", out, e.strerror or e)
        return 1
    logger.info("wrote %s", out)
    return 0
