# Star language package
# This package provides a lexer and a token-stream interpreter for the Star language.
from .errors import StarError
from .interpreter import Interpreter, run_file, run_program
from .lexer import tokenize

__all__ = [
    'tokenize',
    'run_program',
    'run_file',
    'Interpreter',
    'StarError',
]
