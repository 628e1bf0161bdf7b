#!/usr/bin/env python
import argparse
from pathlib import Path

from riddlpy.compiler import LocalCompilerService
from riddlpy.lexer import dump_tokens, lex
from riddlpy.pipeline import run_validation


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump RIDDL tokens and reconciled diagnostics")
    parser.add_argument("path", type=Path, help="RIDDL source file")
    parser.add_argument("--no-diagnostics", action="store_true", help="Only print tokens")
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8")
    tokens, errors = lex(text)
    dump_tokens(tokens, errors)

    if not args.no_diagnostics:
        result = run_validation(text, LocalCompilerService(), origin=args.path.resolve().as_uri())
        print("\nDiagnostics:")
        for d in result.diagnostics:
            print(f"- {d.range!r} {d.severity.name} [{d.source}] {d.message}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
