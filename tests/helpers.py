from yolol.ast import ValueExpr, NumberValue, StringValue, Identifier, UnaryOp, BinaryOp, Operator
from yolol.environment import Environment
from yolol.interpreter import evaluate_line
from yolol.lexer import tokenize
from yolol.parser import parse_line, parse_source
from yolol.types import YololNumber


def expr(source):
    """Parse a single bare expression statement and return its expression."""
    line = parse_line(tokenize(source))
    (stmt,) = line.statements
    return stmt.expr


def num(text):
    return ValueExpr(NumberValue(YololNumber.parse(str(text))))


def string(text):
    return ValueExpr(StringValue(text))


def ident(name):
    return ValueExpr(Identifier.from_source(name))


def binary(op, left, right):
    return BinaryOp(op, left, right)


def unary(op, operand):
    return UnaryOp(op, operand)


def run(source, env=None):
    """Evaluate every line of `source` once, in order."""
    if env is None:
        env = Environment('test')
    for line in parse_source(source).lines:
        evaluate_line(env, line)
    return env


def var(env, name):
    return env.get(Identifier.from_source(name))


def n(text):
    return YololNumber.parse(str(text))


__all__ = ['expr', 'num', 'string', 'ident', 'binary', 'unary', 'run', 'var', 'n', 'Operator']
