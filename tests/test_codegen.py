from __future__ import annotations

from dataclasses import replace

import pytest

from prototyper import TargetSyntax, UnknownSyntaxError, generate_type_definitions, parse_source
from prototyper.codegen import SCALAR_TS_TYPES
from prototyper.tokens import SCALAR_TYPES


_SRC = """
enum Corpus { UNIVERSAL = 0; WEB = 1; }

message SearchRequest {
  string query = 1;
  repeated int64 ids = 2;
  Corpus corpus = 3;
  enum Order { ASC = 0; DESC = 1; }
  repeated Result results = 4;
}

message Empty {}
"""


def test_flow_output() -> None:
    out = generate_type_definitions(parse_source(_SRC), "flow")
    assert out == (
        "// @flow\n"
        "\n"
        "export type Corpus = 'UNIVERSAL' | 'WEB';\n"
        "\n"
        "export type Order = 'ASC' | 'DESC';\n"
        "\n"
        "export type SearchRequest = {\n"
        "  query: string;\n"
        "  ids: Array<string>;\n"
        "  corpus: Corpus;\n"
        "  results: Array<Result>;\n"
        "};\n"
        "\n"
        "export type Empty = {};\n"
    )


def test_typescript_output() -> None:
    out = generate_type_definitions(parse_source(_SRC), TargetSyntax.TYPESCRIPT)
    assert out == (
        "export type Corpus = 'UNIVERSAL' | 'WEB';\n"
        "\n"
        "export type Order = 'ASC' | 'DESC';\n"
        "\n"
        "export type SearchRequest = {\n"
        "  query: string;\n"
        "  ids: string[];\n"
        "  corpus: Corpus;\n"
        "  results: Result[];\n"
        "};\n"
        "\n"
        "export type Empty = {};\n"
    )


def test_source_path_is_noted_when_known() -> None:
    pf = replace(parse_source("message M {}"), full_path="/tmp/m.proto")
    assert generate_type_definitions(pf, "typescript") == (
        "// Generated from /tmp/m.proto\n"
        "\n"
        "export type M = {};\n"
    )


def test_empty_file() -> None:
    pf = parse_source("")
    assert generate_type_definitions(pf, "typescript") == ""
    assert generate_type_definitions(pf, "flow") == "// @flow\n"


def test_every_scalar_has_a_mapping() -> None:
    assert set(SCALAR_TS_TYPES) == set(SCALAR_TYPES)
    body = " ".join(f"{s} f{i} = {i + 1};" for i, s in enumerate(SCALAR_TYPES))
    out = generate_type_definitions(parse_source(f"message S {{ {body} }}"), "typescript")
    assert "  f0: number;" in out  # double
    assert "  f12: boolean;" in out  # bool
    assert "  f14: string;" in out  # bytes


@pytest.mark.parametrize("syntax", ["java", "Flow", ""])
def test_unknown_syntax_is_rejected(syntax: str) -> None:
    with pytest.raises(UnknownSyntaxError) as e:
        generate_type_definitions(parse_source("message M {}"), syntax)
    assert e.value.syntax == syntax
    assert e.value.choices == ("flow", "typescript")
