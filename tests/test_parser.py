import pytest

from yolol.ast import (
    Assignment, Comment, ExpressionStatement, Goto, Group, Identifier, If, Line,
    Operator, ValueExpr,
)
from yolol.cursor import TokenCursor
from yolol.errors import ExpressionError, ParseErrorKind, StatementError
from yolol.lexer import tokenize
from yolol.parser import Parser, parse_line, parse_program, parse_source

from helpers import binary, expr, ident, num, string, unary


def statements(source):
    return parse_line(tokenize(source)).statements


# Precedence and associativity

def test_multiplication_binds_tighter_than_addition():
    assert expr('1 + 2 * 3') == binary(Operator.ADD, num(1), binary(Operator.MUL, num(2), num(3)))


def test_exponent_is_right_associative():
    assert expr('2 ^ 3 ^ 2') == binary(Operator.POW, num(2), binary(Operator.POW, num(3), num(2)))


def test_subtraction_is_left_associative():
    assert expr('1 - 2 - 3') == binary(Operator.SUB, binary(Operator.SUB, num(1), num(2)), num(3))


def test_and_is_looser_than_or():
    assert expr('a or b and c') == binary(Operator.AND, binary(Operator.OR, ident('a'), ident('b')), ident('c'))
    assert expr('a and b or c') == binary(Operator.AND, ident('a'), binary(Operator.OR, ident('b'), ident('c')))


def test_comparison_chain():
    assert expr('a < b == c >= d') == binary(
        Operator.EQUAL,
        binary(Operator.LESSER, ident('a'), ident('b')),
        binary(Operator.GREATER_EQ, ident('c'), ident('d')),
    )


def test_order_operators():
    assert expr('a <= b') == binary(Operator.LESSER_EQ, ident('a'), ident('b'))
    assert expr('a > b') == binary(Operator.GREATER, ident('a'), ident('b'))


def test_group_is_kept_in_the_tree():
    inner = binary(Operator.ADD, num(1), num(2))
    assert expr('(1 + 2) * 3') == binary(Operator.MUL, ValueExpr(Group(inner)), num(3))
    assert expr('(1 + 2)') == ValueExpr(Group(inner))


def test_negation_binds_tighter_than_exponent():
    assert expr('-2 ^ 2') == binary(Operator.POW, unary(Operator.NEGATE, num(2)), num(2))


def test_keyword_operators_stack():
    assert expr('not not x') == unary(Operator.NOT, unary(Operator.NOT, ident('x')))


def test_negated_keyword_operator():
    assert expr('-abs x') == unary(Operator.NEGATE, unary(Operator.ABS, ident('x')))


def test_factorial_applies_after_keyword():
    assert expr('abs x!') == unary(Operator.FACT, unary(Operator.ABS, ident('x')))


def test_repeated_factorial():
    assert expr('x!!!') == unary(Operator.FACT, unary(Operator.FACT, unary(Operator.FACT, ident('x'))))


def test_factorial_does_not_eat_not_equal():
    assert expr('x != 3') == binary(Operator.NOT_EQUAL, ident('x'), num(3))
    assert expr('x! != 3') == binary(Operator.NOT_EQUAL, unary(Operator.FACT, ident('x')), num(3))


def test_string_literal():
    assert expr('"a" + "b"') == binary(Operator.ADD, string('a'), string('b'))


# Increment and decrement

def test_postfix_increment():
    assert expr('a++') == unary(Operator.POST_INC, ident('a'))
    assert expr('a--') == unary(Operator.POST_DEC, ident('a'))


def test_prefix_increment_on_global():
    assert expr('++:a') == unary(Operator.PRE_INC, ValueExpr(Identifier('a', True)))
    assert expr('--b') == unary(Operator.PRE_DEC, ident('b'))


def test_increment_inside_expression():
    assert expr('1 + a++') == binary(Operator.ADD, num(1), unary(Operator.POST_INC, ident('a')))


# Statements

def test_plain_assignment():
    assert statements('a = 1') == [Assignment(Identifier('a'), Operator.ASSIGN, num(1))]


def test_equality_is_not_an_assignment():
    assert statements('a == b') == [ExpressionStatement(binary(Operator.EQUAL, ident('a'), ident('b')))]
    assert statements('a = b == c') == [
        Assignment(Identifier('a'), Operator.ASSIGN, binary(Operator.EQUAL, ident('b'), ident('c'))),
    ]


@pytest.mark.parametrize('symbol, op', [
    ('+', Operator.ADD_ASSIGN),
    ('-', Operator.SUB_ASSIGN),
    ('*', Operator.MUL_ASSIGN),
    ('/', Operator.DIV_ASSIGN),
    ('%', Operator.MOD_ASSIGN),
])
def test_compound_assignment(symbol, op):
    assert statements(f':x {symbol}= 2') == [Assignment(Identifier('x', True), op, num(2))]


def test_goto():
    assert statements('goto 2 + 1') == [Goto(binary(Operator.ADD, num(2), num(1)))]


def test_several_statements_and_comment():
    assert statements('a = 1 b++ // done') == [
        Assignment(Identifier('a'), Operator.ASSIGN, num(1)),
        ExpressionStatement(unary(Operator.POST_INC, ident('b'))),
        Comment(' done'),
    ]


def test_if_without_else():
    (stmt,) = statements('if x then y = 1 end')
    assert stmt == If(ident('x'), [Assignment(Identifier('y'), Operator.ASSIGN, num(1))], None)


def test_if_with_else():
    (stmt,) = statements('if x then y = 1 else y = 2 z = 3 end')
    assert stmt.body == [Assignment(Identifier('y'), Operator.ASSIGN, num(1))]
    assert stmt.else_body == [
        Assignment(Identifier('y'), Operator.ASSIGN, num(2)),
        Assignment(Identifier('z'), Operator.ASSIGN, num(3)),
    ]


def test_empty_else_collapses_to_none():
    (stmt,) = statements('if x then y = 1 else end')
    assert stmt.else_body is None


def test_nested_if():
    (stmt,) = statements('if a then if b then c = 1 end end')
    inner = If(ident('b'), [Assignment(Identifier('c'), Operator.ASSIGN, num(1))], None)
    assert stmt == If(ident('a'), [inner], None)


# Errors

def test_repeated_else_keeps_partial_if():
    with pytest.raises(StatementError) as excinfo:
        statements('if x then a = 1 else b = 2 else c = 3 end')
    err = excinfo.value
    assert err.kind is ParseErrorKind.REPEATED_ELSE_TOKENS
    assert err.node == If(
        ident('x'),
        [Assignment(Identifier('a'), Operator.ASSIGN, num(1))],
        [Assignment(Identifier('b'), Operator.ASSIGN, num(2))],
    )


def test_if_without_end_keeps_partial_if():
    with pytest.raises(StatementError) as excinfo:
        statements('if x then a = 1')
    err = excinfo.value
    assert err.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE
    assert err.node == If(ident('x'), [Assignment(Identifier('a'), Operator.ASSIGN, num(1))], None)


def test_if_does_not_continue_on_next_line():
    with pytest.raises(StatementError) as excinfo:
        parse_source('if x then a = 1\nend')
    assert excinfo.value.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE


def test_if_without_then_has_no_partial():
    with pytest.raises(StatementError) as excinfo:
        statements('if x a = 1 end')
    assert excinfo.value.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE
    assert excinfo.value.node is None


def test_unbalanced_parenthesis_carries_inner_expression():
    parser = Parser(TokenCursor(tokenize('( 1 + 2')))
    with pytest.raises(ExpressionError) as excinfo:
        parser.parse_expression()
    assert excinfo.value.kind is ParseErrorKind.UNBALANCED_PARENTHESIS
    assert excinfo.value.node == binary(Operator.ADD, num(1), num(2))


def test_unbalanced_parenthesis_as_statement():
    with pytest.raises(StatementError) as excinfo:
        statements('( 1 + 2')
    assert excinfo.value.kind is ParseErrorKind.UNBALANCED_PARENTHESIS
    assert excinfo.value.node == ExpressionStatement(binary(Operator.ADD, num(1), num(2)))


def test_missing_right_operand_keeps_left():
    with pytest.raises(StatementError) as excinfo:
        statements('a = 1 * 2 +')
    assert excinfo.value.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE
    assert excinfo.value.node == ExpressionStatement(binary(Operator.MUL, num(1), num(2)))


def test_missing_exponent():
    with pytest.raises(StatementError) as excinfo:
        statements('2 ^')
    assert excinfo.value.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE
    assert excinfo.value.node == ExpressionStatement(num(2))


def test_keyword_without_operand():
    with pytest.raises(StatementError) as excinfo:
        statements('a = abs')
    assert excinfo.value.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE


def test_nothing_recognized():
    with pytest.raises(StatementError) as excinfo:
        statements(')')
    assert excinfo.value.kind is ParseErrorKind.NO_PARSE_RULE_MATCH
    assert excinfo.value.node is None


def test_error_message_is_readable():
    with pytest.raises(StatementError) as excinfo:
        statements('if x then a = 1')
    assert str(excinfo.value).startswith('NoExtensionAvailable:')


# Lines and programs

def test_program_line_count_with_trailing_content():
    program = parse_source('a = 1\nb = 2\nc = 3')
    assert len(program.lines) == 3


def test_program_line_count_with_trailing_newline():
    program = parse_source('a = 1\nb = 2\n')
    assert len(program.lines) == 2


def test_empty_line_is_kept():
    program = parse_source('a = 1\n\nb = 2')
    assert program.lines[1] == Line([])
    assert len(program.lines) == 3


def test_parse_line_by_line_with_shared_cursor():
    cursor = TokenCursor(tokenize('a = 1\nb = 2\n'))
    first = parse_line(cursor)
    second = parse_line(cursor)
    assert first.statements == [Assignment(Identifier('a'), Operator.ASSIGN, num(1))]
    assert second.statements == [Assignment(Identifier('b'), Operator.ASSIGN, num(2))]
    assert cursor.remaining() == 0


def test_parse_program_accepts_token_list():
    program = parse_program(tokenize('goto 1'))
    assert program.lines == [Line([Goto(num(1))])]


# Unparse

@pytest.mark.parametrize('source', [
    'a = (1 + 2) * 3',
    'if :x > 2 then goto 1 else b++ end',
    'c = "hi" + d',
    'e = 2 ^ 3 ^ 2',
    'f = not (a and b or c)',
    'g = -abs x!',
    'h %= 4.5',
    '++i j-- // trailing',
    'k = a != b == (c <= d)',
])
def test_unparse_reparses_to_same_tree(source):
    program = parse_source(source)
    assert parse_source(str(program)) == program


def test_unparse_text():
    assert str(parse_source('a=(1+2)*3 :b+=1.50')) == 'a = (1 + 2) * 3 :b += 1.5'


def test_bad_right_operand_keeps_left():
    parser = Parser(TokenCursor(tokenize('1 + (2')))
    with pytest.raises(ExpressionError) as excinfo:
        parser.parse_expression()
    assert excinfo.value.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE
    assert excinfo.value.node == num(1)
    assert isinstance(excinfo.value.__cause__, ExpressionError)
    assert excinfo.value.__cause__.kind is ParseErrorKind.UNBALANCED_PARENTHESIS


def test_bad_right_operand_as_statement():
    with pytest.raises(StatementError) as excinfo:
        statements('x = 1 + (2')
    assert excinfo.value.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE
    assert excinfo.value.node == ExpressionStatement(num(1))


def test_bad_right_operand_reports_outermost_left():
    with pytest.raises(StatementError) as excinfo:
        statements('a and b + abs')
    assert excinfo.value.kind is ParseErrorKind.NO_EXTENSION_AVAILABLE
    assert excinfo.value.node == ExpressionStatement(ident('a'))


def test_bad_exponent_operand_keeps_its_kind():
    with pytest.raises(StatementError) as excinfo:
        statements('2 ^ (3')
    assert excinfo.value.kind is ParseErrorKind.UNBALANCED_PARENTHESIS
    assert excinfo.value.node == ExpressionStatement(num(3))
