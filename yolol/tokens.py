"""Token definitions for YOLOL.

Tokens are produced by the lexer (see `lexer.py`) and consumed by the
parser through a `TokenCursor`. A token is a plain value: its kind plus
the source text for the kinds that carry one (comments, identifiers,
numbers and strings).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TokenKind(Enum):
    # Structure
    NEWLINE = 'newline'
    COMMENT = 'comment'

    # Keywords
    GOTO = 'goto'
    IF = 'if'
    THEN = 'then'
    ELSE = 'else'
    END = 'end'
    ABS = 'abs'
    SQRT = 'sqrt'
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    ARCSIN = 'arcsin'
    ARCCOS = 'arccos'
    ARCTAN = 'arctan'
    NOT = 'not'
    AND = 'and'
    OR = 'or'

    # Punctuation
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    SLASH = '/'
    PERCENT = '%'
    CARET = '^'
    EXCLAM = '!'
    EQUAL = '='
    LANGLE = '<'
    RANGLE = '>'
    LPAREN = '('
    RPAREN = ')'

    # Literals
    IDENTIFIER = 'identifier'
    NUMBER = 'number'
    STRING = 'string'


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    `value` holds the source text for comments (without the leading
    `//`), identifiers, numbers and strings (without quotes). The source
    position is informational and ignored by equality, so tests and the
    parser can compare tokens built by hand with lexed ones.
    """
    kind: TokenKind
    value: Optional[str] = None
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.kind.name})"
        return f"Token({self.kind.name}, {self.value!r})"
