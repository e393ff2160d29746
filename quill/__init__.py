# Quill language package
# This package provides a lexer, parser and tree-walking interpreter for the Quill language.
from .errors import QuillError, LexError, ParseError, EnvError, EvalError
from .environment import Environment, create_global_environment
from .interpreter import Interpreter, run_program
from .lexer import tokenize
from .parser import Parser, parse_program

__all__ = [
    'tokenize',
    'Parser',
    'parse_program',
    'Environment',
    'create_global_environment',
    'Interpreter',
    'run_program',
    'QuillError',
    'LexError',
    'ParseError',
    'EnvError',
    'EvalError',
]
