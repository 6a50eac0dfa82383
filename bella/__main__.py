"""CLI entry point for the Bella interpreter.

Usage:
    python -m bella [-v|-vv|-vvv] <ast_json_file>
    python -m bella --dump <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --dump        Decode the AST JSON file and print it back instead of running it

The program is read as an AST JSON document (see bella.ast_json); each
printed value is written to stdout on its own line. Debug information is
written to `debug.txt` in the current directory when verbosity is greater
than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from .interpreter import Interpreter
from .ast_json import ast_to_obj, ast_from_obj
from .types import to_string


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Bella language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--dump', action='store_true', help='print the decoded AST as JSON instead of running it')
    parser.add_argument('program', help='Bella program as an AST JSON file')
    args = parser.parse_args(argv)

    ast_path = Path(args.program)
    if not ast_path.exists():
        print(f"Error: file {ast_path} not found", file=sys.stderr)
        sys.exit(1)
    with open(ast_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    ast_program = ast_from_obj(data)

    if args.dump:
        json.dump(ast_to_obj(ast_program), sys.stdout, ensure_ascii=False, indent=2)
        print()
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        output = interpreter.run(ast_program)
    except Exception as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    for value in output:
        print(to_string(value))

if __name__ == '__main__':
    main()
