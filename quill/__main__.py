"""CLI entry point for the Quill interpreter.

Usage:
    python -m quill [-v|-vv|-vvv] [program_file]
    python -m quill [-v...] --emit-ast <program_file>
    python -m quill [-v...] --ast <ast_json_file>

Options:
  -v                  Increase debug verbosity (can be repeated)
  --emit-ast          Parse the given .ql file and emit an AST JSON file
  --ast               Execute a previously emitted AST JSON file
  --max-call-depth N  Limit nesting of function calls (default 100)

Without a program file an interactive session is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import QuillError
from .interpreter import DEFAULT_MAX_CALL_DEPTH, Interpreter
from .parser import parse_program
from .repl import Repl, run_repl


def _read_source(path_arg: str) -> str:
    path = Path(path_arg)
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _execute(program, args) -> None:
    interpreter = Interpreter(debug_level=args.v, max_call_depth=args.max_call_depth)
    try:
        interpreter.run(program)
    except QuillError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='quill', description="Quill language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--max-call-depth', type=int, default=DEFAULT_MAX_CALL_DEPTH,
                        help='maximum nesting of function calls')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='QUILL_FILE', help='emit AST JSON for the given .ql file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Quill program file (.ql) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = _read_source(args.emit_ast)
        try:
            program = parse_program(source)
        except QuillError as e:
            print(f"Parse error: {e}", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        text = _read_source(args.ast)
        try:
            program = ast_from_obj(json.loads(text))
        except (ValueError, KeyError, TypeError, RecursionError) as e:
            # JSONDecodeError is a ValueError; a missing field is a KeyError
            print(f"Error: invalid AST file {args.ast}: {type(e).__name__}: {e}", file=sys.stderr)
            sys.exit(1)
        _execute(program, args)
        return

    # No program: interactive session
    if not args.program:
        run_repl(Repl(debug_level=args.v, max_call_depth=args.max_call_depth))
        return

    source = _read_source(args.program)
    try:
        program = parse_program(source)
    except QuillError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    _execute(program, args)


if __name__ == '__main__':
    main()
