"""Parser for YOLOL.

A hand-written recursive-descent parser over a `TokenCursor`. Each
precedence level is one method which first parses the next tighter
level and then checks whether the following tokens extend the result at
its own level. Same-precedence chains (`a + b + c`) are folded to the
left in a loop.

Between levels, "no rule matched" is signalled by returning None without
moving the cursor, so a caller can try an alternative. Hard failures are
raised as `ExpressionError` / `StatementError` and carry the partially
built node, letting a host show what did parse before the input became
unparsable.

Precedence, loosest to tightest:

    and
    or
    == !=
    < <= > >=
    + -
    * / %
    ^                     (right associative)
    abs sqrt sin cos tan arcsin arccos arctan not
    - (negation)
    postfix ! and ++ / -- on identifiers
    literal, identifier, ( group )

Note that `and` binds looser than `or`: `a or b and c` is
`(a or b) and c`.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple, Union

from .ast import (
    Program, Line, Comment, Goto, If, Assignment, ExpressionStatement,
    ValueExpr, UnaryOp, BinaryOp, NumberValue, StringValue, Identifier, Group,
    Operator, Expression, Statement, Value,
)
from .cursor import TokenCursor
from .debug import DebugLog, DebugTarget
from .errors import ExpressionError, StatementError, ParseErrorKind
from .lexer import tokenize
from .tokens import Token, TokenKind
from .types import YololNumber


COMPOUND_ASSIGN_TOKENS = {
    TokenKind.PLUS: Operator.ADD_ASSIGN,
    TokenKind.MINUS: Operator.SUB_ASSIGN,
    TokenKind.STAR: Operator.MUL_ASSIGN,
    TokenKind.SLASH: Operator.DIV_ASSIGN,
    TokenKind.PERCENT: Operator.MOD_ASSIGN,
}

KEYWORD_TOKENS = {
    TokenKind.ABS: Operator.ABS,
    TokenKind.SQRT: Operator.SQRT,
    TokenKind.SIN: Operator.SIN,
    TokenKind.COS: Operator.COS,
    TokenKind.TAN: Operator.TAN,
    TokenKind.ARCSIN: Operator.ARCSIN,
    TokenKind.ARCCOS: Operator.ARCCOS,
    TokenKind.ARCTAN: Operator.ARCTAN,
    TokenKind.NOT: Operator.NOT,
}

# (operator, number of tokens it spans) or None
OperatorMatch = Optional[Tuple[Operator, int]]


class Parser:
    def __init__(self, cursor: TokenCursor, debug_level: int = 0, debug_file: DebugTarget = None):
        self.cursor = cursor
        self.debug = DebugLog(debug_level, debug_file)

    def kind(self, offset: int = 0) -> Optional[TokenKind]:
        token = self.cursor.peek(offset)
        return token.kind if token is not None else None

    def describe_position(self) -> str:
        token = self.cursor.peek()
        return 'end of input' if token is None else repr(token)

    # Lines and programs

    def parse_program(self) -> Program:
        lines: List[Line] = []
        current: List[Statement] = []
        while self.cursor.remaining() > 0:
            if self.kind() is TokenKind.NEWLINE:
                self.cursor.advance()
                lines.append(Line(current))
                self.debug(f"[Parser] finished line {len(lines)}: {lines[-1]}")
                current = []
                continue
            current.append(self.parse_statement_in_line(current))
        if current:
            lines.append(Line(current))
            self.debug(f"[Parser] finished line {len(lines)}: {lines[-1]}")
        return Program(lines)

    def parse_line(self) -> Line:
        statements: List[Statement] = []
        while self.cursor.remaining() > 0:
            if self.kind() is TokenKind.NEWLINE:
                self.cursor.advance()
                break
            statements.append(self.parse_statement_in_line(statements))
        self.debug(f"[Parser] finished line: {Line(statements)}")
        return Line(statements)

    def parse_statement_in_line(self, line_so_far: List[Statement]) -> Statement:
        try:
            statement = self.parse_statement()
        except StatementError as e:
            self.debug(f"[Parser] erroring out, line so far: {Line(line_so_far)}", 2)
            self.debug(f"[Parser] erroring out, window: {self.cursor.peek_window(3)}", 2)
            self.debug(f"[Parser] {e}")
            raise
        self.debug(f"[Parser] parsed statement: {statement!r}", 2)
        return statement

    # Statements

    def parse_statement(self) -> Statement:
        try:
            return self.dispatch_statement()
        except ExpressionError as e:
            raise StatementError.from_expression_error(e) from e

    def dispatch_statement(self) -> Statement:
        first = self.cursor.peek()
        k0, k1, k2 = self.kind(0), self.kind(1), self.kind(2)

        if k0 is TokenKind.COMMENT:
            self.cursor.advance()
            return Comment(first.value or '')

        if k0 is TokenKind.GOTO:
            self.cursor.advance()
            return Goto(self.parse_expression())

        if k0 is TokenKind.IF:
            self.cursor.advance()
            return self.extend_if()

        if k0 is TokenKind.IDENTIFIER and k1 in COMPOUND_ASSIGN_TOKENS and k2 is TokenKind.EQUAL:
            target = Identifier.from_source(first.value)
            self.cursor.advance(3)
            return Assignment(target, COMPOUND_ASSIGN_TOKENS[k1], self.parse_expression())

        # `a = b` but not `a == b`
        if k0 is TokenKind.IDENTIFIER and k1 is TokenKind.EQUAL and k2 is not None and k2 is not TokenKind.EQUAL:
            target = Identifier.from_source(first.value)
            self.cursor.advance(2)
            return Assignment(target, Operator.ASSIGN, self.parse_expression())

        return ExpressionStatement(self.parse_expression())

    def extend_if(self) -> If:
        condition = self.parse_expression()
        self.debug(f"[Parse If] condition: {condition}", 3)

        if self.kind() is not TokenKind.THEN:
            raise StatementError(None, ParseErrorKind.NO_EXTENSION_AVAILABLE,
                                 f"can't find 'then' to extend if, found {self.describe_position()}")
        self.cursor.advance()

        body: List[Statement] = []
        else_body: List[Statement] = []
        parsing_else = False
        hit_end = False

        # An if never spans lines, so a newline ends the search for `end`
        while self.cursor.remaining() > 0 and self.kind() is not TokenKind.NEWLINE:
            kind = self.kind()
            if kind is TokenKind.ELSE:
                if parsing_else:
                    raise StatementError(If(condition, body, else_body),
                                         ParseErrorKind.REPEATED_ELSE_TOKENS,
                                         'found an else token after already finding one for this if')
                self.cursor.advance()
                parsing_else = True
                continue
            if kind is TokenKind.END:
                self.cursor.advance()
                hit_end = True
                break
            statement = self.parse_statement()
            if parsing_else:
                else_body.append(statement)
            else:
                body.append(statement)

        statement = If(condition, body, else_body or None)
        if not hit_end:
            raise StatementError(statement, ParseErrorKind.NO_EXTENSION_AVAILABLE,
                                 "didn't hit end while parsing if statement")
        return statement

    # Expressions

    def parse_expression(self) -> Expression:
        expr = self.expr_and()
        if expr is None:
            raise ExpressionError(None, ParseErrorKind.NO_PARSE_RULE_MATCH,
                                  f"expected an expression, found {self.describe_position()}")
        return expr

    def fold_left(self, operand: Callable[[], Optional[Expression]],
                  match_operator: Callable[[], OperatorMatch], rule: str) -> Optional[Expression]:
        left = operand()
        if left is None:
            return None
        while True:
            matched = match_operator()
            if matched is None:
                return left
            op, width = matched
            self.cursor.advance(width)
            try:
                right = operand()
            except ExpressionError as e:
                raise ExpressionError(left, ParseErrorKind.NO_EXTENSION_AVAILABLE,
                                      f"syntax error in parsing {rule}: bad operand after '{op.symbol}': {e}") from e
            if right is None:
                raise ExpressionError(left, ParseErrorKind.NO_EXTENSION_AVAILABLE,
                                      f"syntax error in parsing {rule}: nothing after '{op.symbol}'")
            left = BinaryOp(op, left, right)

    def expr_and(self) -> Optional[Expression]:
        return self.fold_left(self.expr_or, self.match_and, 'an and')

    def match_and(self) -> OperatorMatch:
        return (Operator.AND, 1) if self.kind() is TokenKind.AND else None

    def expr_or(self) -> Optional[Expression]:
        return self.fold_left(self.expr_equality, self.match_or, 'an or')

    def match_or(self) -> OperatorMatch:
        return (Operator.OR, 1) if self.kind() is TokenKind.OR else None

    def expr_equality(self) -> Optional[Expression]:
        return self.fold_left(self.expr_order, self.match_equality, 'an equality')

    def match_equality(self) -> OperatorMatch:
        if self.kind(1) is not TokenKind.EQUAL:
            return None
        if self.kind() is TokenKind.EQUAL:
            return Operator.EQUAL, 2
        if self.kind() is TokenKind.EXCLAM:
            return Operator.NOT_EQUAL, 2
        return None

    def expr_order(self) -> Optional[Expression]:
        return self.fold_left(self.expr_additive, self.match_order, 'an order')

    def match_order(self) -> OperatorMatch:
        or_equal = self.kind(1) is TokenKind.EQUAL
        if self.kind() is TokenKind.LANGLE:
            return (Operator.LESSER_EQ, 2) if or_equal else (Operator.LESSER, 1)
        if self.kind() is TokenKind.RANGLE:
            return (Operator.GREATER_EQ, 2) if or_equal else (Operator.GREATER, 1)
        return None

    def expr_additive(self) -> Optional[Expression]:
        return self.fold_left(self.expr_multiply, self.match_additive, 'an additive')

    def match_additive(self) -> OperatorMatch:
        if self.kind() is TokenKind.PLUS:
            return Operator.ADD, 1
        if self.kind() is TokenKind.MINUS:
            return Operator.SUB, 1
        return None

    def expr_multiply(self) -> Optional[Expression]:
        return self.fold_left(self.expr_exponent, self.match_multiply, 'a multiply')

    def match_multiply(self) -> OperatorMatch:
        kind = self.kind()
        if kind is TokenKind.STAR:
            return Operator.MUL, 1
        if kind is TokenKind.SLASH:
            return Operator.DIV, 1
        if kind is TokenKind.PERCENT:
            return Operator.MOD, 1
        return None

    def expr_exponent(self) -> Optional[Expression]:
        # Right associative, so recurse for the right operand instead of folding
        base = self.expr_postfix()
        if base is None or self.kind() is not TokenKind.CARET:
            return base
        self.cursor.advance()
        exponent = self.expr_exponent()
        if exponent is None:
            raise ExpressionError(base, ParseErrorKind.NO_EXTENSION_AVAILABLE,
                                  "syntax error in parsing an exponent: nothing after '^'")
        return BinaryOp(Operator.POW, base, exponent)

    def expr_postfix(self) -> Optional[Expression]:
        expr = self.expr_keyword()
        if expr is None:
            return None
        # `x!!` is allowed, the `!` of `!=` is not ours
        while self.kind() is TokenKind.EXCLAM and self.kind(1) is not TokenKind.EQUAL:
            self.cursor.advance()
            expr = UnaryOp(Operator.FACT, expr)
        return expr

    def expr_keyword(self) -> Optional[Expression]:
        expr = self.expr_neg()
        if expr is not None:
            return expr
        op = KEYWORD_TOKENS.get(self.kind())
        if op is None:
            return None
        self.cursor.advance()
        operand = self.expr_keyword()
        if operand is None:
            raise ExpressionError(None, ParseErrorKind.NO_EXTENSION_AVAILABLE,
                                  f"'{op.symbol}' is missing its operand, found {self.describe_position()}")
        return UnaryOp(op, operand)

    def expr_neg(self) -> Optional[Expression]:
        expr = self.expr_atom()
        if expr is not None or self.kind() is not TokenKind.MINUS:
            return expr
        self.cursor.advance()
        operand = self.expr_keyword()
        if operand is None:
            raise ExpressionError(None, ParseErrorKind.NO_EXTENSION_AVAILABLE,
                                  f"'-' is missing its operand, found {self.describe_position()}")
        return UnaryOp(Operator.NEGATE, operand)

    def expr_atom(self) -> Optional[Expression]:
        k0, k1, k2 = self.kind(0), self.kind(1), self.kind(2)

        # Postfix increment / decrement
        if k0 is TokenKind.IDENTIFIER and k1 is k2 and k1 in (TokenKind.PLUS, TokenKind.MINUS):
            target = Identifier.from_source(self.cursor.peek().value)
            self.cursor.advance(3)
            op = Operator.POST_INC if k1 is TokenKind.PLUS else Operator.POST_DEC
            return UnaryOp(op, ValueExpr(target))

        # Prefix increment / decrement
        if k2 is TokenKind.IDENTIFIER and k0 is k1 and k0 in (TokenKind.PLUS, TokenKind.MINUS):
            target = Identifier.from_source(self.cursor.peek(2).value)
            self.cursor.advance(3)
            op = Operator.PRE_INC if k0 is TokenKind.PLUS else Operator.PRE_DEC
            return UnaryOp(op, ValueExpr(target))

        value = self.parse_value()
        return ValueExpr(value) if value is not None else None

    def parse_value(self) -> Optional[Value]:
        token = self.cursor.peek()
        if token is None:
            return None
        if token.kind is TokenKind.STRING:
            self.cursor.advance()
            return StringValue(token.value or '')
        if token.kind is TokenKind.NUMBER:
            self.cursor.advance()
            return NumberValue(YololNumber.parse(token.value))
        if token.kind is TokenKind.IDENTIFIER:
            self.cursor.advance()
            return Identifier.from_source(token.value)
        if token.kind is TokenKind.LPAREN:
            self.cursor.advance()
            inner = self.parse_expression()
            if self.kind() is not TokenKind.RPAREN:
                raise ExpressionError(inner, ParseErrorKind.UNBALANCED_PARENTHESIS,
                                      f"saw '(' and parsed {inner}, found no ')'")
            self.cursor.advance()
            return Group(inner)
        return None


Tokens = Union[TokenCursor, Sequence[Token]]


def as_cursor(tokens: Tokens) -> TokenCursor:
    return tokens if isinstance(tokens, TokenCursor) else TokenCursor(tokens)


def parse_program(tokens: Tokens, debug_level: int = 0, debug_file: DebugTarget = None) -> Program:
    """Parse a whole token sequence into a Program, one Line per newline."""
    parser = Parser(as_cursor(tokens), debug_level=debug_level, debug_file=debug_file)
    try:
        return parser.parse_program()
    finally:
        parser.debug.close()


def parse_line(tokens: Tokens, debug_level: int = 0, debug_file: DebugTarget = None) -> Line:
    """Parse a single line, consuming up to and including its newline.

    Pass a `TokenCursor` to parse a program line by line; the cursor is
    left at the start of the next line.
    """
    parser = Parser(as_cursor(tokens), debug_level=debug_level, debug_file=debug_file)
    try:
        return parser.parse_line()
    finally:
        parser.debug.close()


def parse_source(source: str, debug_level: int = 0, debug_file: DebugTarget = None) -> Program:
    """Tokenize and parse YOLOL source text."""
    return parse_program(tokenize(source), debug_level=debug_level, debug_file=debug_file)
