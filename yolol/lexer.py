"""Lexer for YOLOL source text.

The token grammar is declared for Lark and only its basic lexer is used:
the structural parsing of YOLOL is done by the hand-written parser in
`parser.py`, which needs a plain token list rather than a parse tree.

Keywords are case-insensitive. Whitespace other than newlines is
ignored; newlines are significant because they separate program lines.
Every operator is tokenized as single characters, so `+=`, `++`, `==`
and `!=` reach the parser as two tokens.
"""

from __future__ import annotations

from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError
from .tokens import Token, TokenKind


YOLOL_TOKEN_GRAMMAR = r"""
    start: item*
    ?item: NEWLINE | COMMENT
         | GOTO | IF | THEN | ELSE | END
         | ABS | SQRT | SIN | COS | TAN | ARCSIN | ARCCOS | ARCTAN
         | NOT | AND | OR
         | PLUS | MINUS | STAR | SLASH | PERCENT | CARET | EXCLAM | EQUAL
         | LANGLE | RANGLE | LPAREN | RPAREN
         | IDENTIFIER | NUMBER | STRING

    NEWLINE: "\n"
    COMMENT: /\/\/[^\n]*/

    GOTO: "goto"i
    IF: "if"i
    THEN: "then"i
    ELSE: "else"i
    END: "end"i
    ABS: "abs"i
    SQRT: "sqrt"i
    SIN: "sin"i
    COS: "cos"i
    TAN: "tan"i
    ARCSIN: "arcsin"i
    ARCCOS: "arccos"i
    ARCTAN: "arctan"i
    NOT: "not"i
    AND: "and"i
    OR: "or"i

    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    CARET: "^"
    EXCLAM: "!"
    EQUAL: "="
    LANGLE: "<"
    RANGLE: ">"
    LPAREN: "("
    RPAREN: ")"

    IDENTIFIER: /:?[a-z_][a-z0-9_]*/i
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"\n]*"/

    WS: /[ \t\r]+/
    %ignore WS
"""


YOLOL_LEXER = Lark(
    YOLOL_TOKEN_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


def _token_value(kind: TokenKind, text: str):
    if kind is TokenKind.COMMENT:
        return text[2:]
    if kind is TokenKind.STRING:
        return text[1:-1]
    if kind in (TokenKind.IDENTIFIER, TokenKind.NUMBER):
        return text
    return None


def tokenize(source: str) -> List[Token]:
    """Convert YOLOL source code into a list of tokens.

    Raises `LexError` on the first character that starts no token (for
    example a stray `.` or an unterminated string literal).
    """
    tokens: List[Token] = []
    try:
        for lark_token in YOLOL_LEXER.lex(source):
            kind = TokenKind[lark_token.type]
            tokens.append(Token(
                kind,
                _token_value(kind, str(lark_token)),
                lark_token.line or 0,
                lark_token.column or 0,
            ))
    except UnexpectedCharacters as e:
        raise LexError(f"unexpected character {e.char!r}", e.line, e.column) from e
    return tokens
