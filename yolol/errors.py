from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from .ast import ExpressionStatement


class YololError(Exception):
    """Base class for every error raised by the YOLOL toolchain."""


class LexError(YololError):
    """Raised when the source text cannot be split into tokens."""
    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(f"LexError: {message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column


class ParseErrorKind(Enum):
    # Nothing was recognized at all; lets a caller try another rule
    NO_PARSE_RULE_MATCH = 'NoParseRuleMatch'
    # An operator or keyword was found without its continuation
    NO_EXTENSION_AVAILABLE = 'NoExtensionAvailable'
    REPEATED_ELSE_TOKENS = 'RepeatedElseTokens'
    UNBALANCED_PARENTHESIS = 'UnbalancedParenthesis'


class ParseError(YololError):
    """A parse failure carrying the best-effort node built before it.

    `node` is the partially built syntax tree fragment (or None when
    nothing usable was built) so a host can show what did parse.
    """
    def __init__(self, node: Optional[Any], kind: ParseErrorKind, message: str):
        super().__init__(f"{kind.value}: {message}")
        self.node = node
        self.kind = kind
        self.message = message


class ExpressionError(ParseError):
    """Parse failure inside an expression; `node` is an expression."""


class StatementError(ParseError):
    """Parse failure of a statement; `node` is a statement."""

    @classmethod
    def from_expression_error(cls, err: ExpressionError) -> 'StatementError':
        node = ExpressionStatement(err.node) if err.node is not None else None
        return cls(node, err.kind, err.message)


class YololRuntimeError(YololError):
    """Raised when a statement fails while being evaluated.

    `name` classifies the failure (TypeError, ZeroDivisionError,
    DomainError, ValueError) the way YOLOL hosts report it.
    """
    def __init__(self, name: str, message: str):
        super().__init__(f"{name}: {message}")
        self.name = name
        self.message = message
