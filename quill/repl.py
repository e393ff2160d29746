"""Interactive read-eval-print loop for Quill.

Each line is parsed into its own Program and evaluated against a global
environment that lives for the whole session. An empty line or ``exit``
ends the session; errors are reported and the loop keeps going.
"""

from __future__ import annotations

import json
import os
import sys
from typing import IO, Any, Optional

# Readline support for history
try:
    import readline
    READLINE_AVAILABLE = True
except ImportError:
    READLINE_AVAILABLE = False

from .ast_json import ast_to_obj
from .builtin_function import BuiltinRegistry
from .errors import QuillError
from .interpreter import DEFAULT_MAX_CALL_DEPTH, Interpreter
from .parser import Parser
from .values import NullVal, to_string

HISTORY_FILE = os.path.expanduser("~/.quill_history")

HELP_TEXT = """\
Commands:
  :ast <source>   show the parsed AST as JSON
  :vars           list variables declared in this session
  :reset          start over with a fresh global scope
  :help           show this help
  exit            leave (an empty line also exits)"""


class Repl:
    """Stateful session that keeps declarations across `eval` calls.

    Usage::

        repl = Repl()
        repl.eval("fn add(x, y) { x + y }")
        repl.eval("add(3, 4)")   # -> NumberVal(7)
    """

    def __init__(self, registry: Optional[BuiltinRegistry] = None, debug_level: int = 0,
                 max_call_depth: int = DEFAULT_MAX_CALL_DEPTH):
        self.registry = registry
        self.debug_level = debug_level
        self.max_call_depth = max_call_depth
        self.parser = Parser()
        self.interpreter = self._new_interpreter()
        self.builtin_names = set(self.interpreter.global_env.variables)

    def _new_interpreter(self) -> Interpreter:
        return Interpreter(registry=self.registry, debug_level=self.debug_level,
                           max_call_depth=self.max_call_depth)

    def eval(self, text: str) -> Any:
        program = self.parser.produce_ast(text)
        return self.interpreter.run(program)

    def user_variables(self) -> dict:
        variables = self.interpreter.global_env.variables
        return {k: v for k, v in variables.items() if k not in self.builtin_names}

    def reset(self):
        self.interpreter.close()
        self.interpreter = self._new_interpreter()

    def close(self):
        self.interpreter.close()


def _show_vars(repl: Repl, dest: IO[str]):
    entries = repl.user_variables()
    if not entries:
        print("  (no variables defined)", file=dest)
        return
    constants = repl.interpreter.global_env.constants
    width = max(len(k) for k in entries)
    for name, value in entries.items():
        kind = 'const' if name in constants else 'let'
        print(f"  {kind:<5} {name:<{width}} = {to_string(value)}", file=dest)


def process_line(repl: Repl, line: str, dest: IO[str]) -> bool:
    """Process one input line. Returns False when the session should end."""
    line = line.strip()
    if not line or line == 'exit':
        return False

    if line == ':help':
        print(HELP_TEXT, file=dest)
        return True

    if line == ':vars':
        _show_vars(repl, dest)
        return True

    if line == ':reset':
        repl.reset()
        return True

    try:
        if line.startswith(':ast '):
            program = repl.parser.produce_ast(line[5:])
            print(json.dumps(ast_to_obj(program), indent=2), file=dest)
            return True
        result = repl.eval(line)
    except QuillError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return True
    if not isinstance(result, NullVal):
        print(to_string(result), file=dest)
    return True


def setup_readline():
    """Load and persist line history when readline is available."""
    if not READLINE_AVAILABLE:
        return
    try:
        readline.read_history_file(HISTORY_FILE)
    except OSError:
        pass  # no history yet
    readline.set_history_length(1000)
    import atexit
    atexit.register(readline.write_history_file, HISTORY_FILE)


def run_repl(repl: Optional[Repl] = None, dest: IO[str] = None, prompt: str = "> "):
    """Read lines from stdin until an empty line, ``exit`` or end of input."""
    if repl is None:
        repl = Repl()
    if dest is None:
        dest = sys.stdout
    setup_readline()
    try:
        while True:
            try:
                line = input(prompt)
            except EOFError:
                print(file=dest)
                break
            except KeyboardInterrupt:
                print(file=dest)
                continue
            if not process_line(repl, line, dest):
                break
    finally:
        repl.close()
