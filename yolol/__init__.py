# YOLOL language package
# This package provides a parser and a line-at-a-time interpreter for YOLOL.
from .cursor import TokenCursor
from .environment import Environment
from .errors import YololError, LexError, ParseError, ParseErrorKind, ExpressionError, StatementError, YololRuntimeError
from .interpreter import Interpreter, evaluate_line, execute_line, run_program
from .lexer import tokenize
from .parser import parse_program, parse_line, parse_source
from .types import YololNumber

__all__ = [
    'TokenCursor',
    'Environment',
    'YololError',
    'LexError',
    'ParseError',
    'ParseErrorKind',
    'ExpressionError',
    'StatementError',
    'YololRuntimeError',
    'Interpreter',
    'evaluate_line',
    'execute_line',
    'run_program',
    'tokenize',
    'parse_program',
    'parse_line',
    'parse_source',
    'YololNumber',
]
