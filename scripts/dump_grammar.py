from __future__ import annotations

from prototyper.idl import build_idl_grammar


def main() -> None:
    g = build_idl_grammar()
    print(f"start: {g.start}")
    print(f"rules: {len(g.rules)}")
    for r in g.rules:
        print(r)


if __name__ == "__main__":
    main()
