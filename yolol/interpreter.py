"""Interpreter for YOLOL.

The interpreter executes one parsed `Line` at a time against an
`Environment`. Statements of a line run in order and the first failing
statement stops the line; whatever earlier statements did stays done.
Runtime failures are raised as `YololRuntimeError`.

Hosts that just want to feed raw source lines use `execute_line`, which
records failures into the environment instead of raising. `run_program`
is a minimal host loop that follows `goto`s for a bounded number of
steps.
"""

from __future__ import annotations

import math
from typing import Optional

from .ast import (
    Line, Program, Comment, Goto, If, Assignment, ExpressionStatement,
    ValueExpr, UnaryOp, BinaryOp, NumberValue, StringValue, Identifier, Group,
    Operator, COMPOUND_ASSIGNMENTS, Node,
)
from .debug import DebugLog, DebugTarget
from .environment import Environment
from .errors import LexError, ParseError, YololRuntimeError
from .lexer import tokenize
from .parser import parse_line
from .types import YololNumber, Value, ZERO, ONE, is_truthy, type_name, to_string

DEFAULT_MAX_STEPS = 1000

MUTATIONS = (Operator.PRE_INC, Operator.PRE_DEC, Operator.POST_INC, Operator.POST_DEC)


class Interpreter:
    """Core interpreter that executes YOLOL lines."""
    def __init__(self, debug_level: int = 0, debug_file: DebugTarget = None):
        self.debug_level = debug_level
        self.debug = DebugLog(debug_level, debug_file)

    # Public API
    def evaluate_line(self, env: Environment, line: Line):
        self.debug(f"[{env.name}] line {env.next_line}: {line}")
        for stmt in line.statements:
            self.execute(stmt, env)

    def run(self, program: Program, env: Optional[Environment] = None,
            max_steps: int = DEFAULT_MAX_STEPS) -> Environment:
        """Run `program` for at most `max_steps` lines.

        Before a line runs, `next_line` is advanced past it, so a `goto`
        in the line wins. Running off either end of the program goes back
        to line 1. A runtime error is recorded in `env.error` and execution
        carries on with the next line.
        """
        if env is None:
            env = Environment()
        try:
            if not program.lines:
                return env
            for _ in range(max_steps):
                if not 1 <= env.next_line <= len(program.lines):
                    env.next_line = 1
                line = program.lines[env.next_line - 1]
                env.next_line += 1
                try:
                    self.evaluate_line(env, line)
                except YololRuntimeError as e:
                    self.debug(f"[{env.name}] runtime error: {e}")
                    env.error = str(e)
            return env
        finally:
            self.debug.close()

    # Statements
    def execute(self, node: Node, env: Environment):
        if isinstance(node, Comment):
            return
        if isinstance(node, Goto):
            target = self.evaluate(node.expr, env)
            if not isinstance(target, YololNumber):
                raise YololRuntimeError('TypeError', f'goto expects a Number, got {type_name(target)}')
            env.next_line = target.truncate()
            self.debug(f"goto {env.next_line}", 2)
            return
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            self.debug(f"if condition {to_string(cond)} -> {truthy}", 3)
            if truthy:
                body = node.body
            elif node.else_body is not None:
                body = node.else_body
            else:
                return
            for stmt in body:
                self.execute(stmt, env)
            return
        if isinstance(node, Assignment):
            value = self.evaluate(node.expr, env)
            if node.op is not Operator.ASSIGN:
                current = env.get(node.target)
                if current is None:
                    current = ZERO
                value = self.apply_binary_op(COMPOUND_ASSIGNMENTS[node.op], current, value)
            env.set(node.target, value)
            self.debug(f"assign {node.target} = {to_string(value)}", 2)
            return
        if isinstance(node, ExpressionStatement):
            self.evaluate(node.expr, env)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    # Expressions
    def evaluate(self, node: Node, env: Environment) -> Value:
        if isinstance(node, ValueExpr):
            return self.evaluate(node.value, env)
        if isinstance(node, NumberValue):
            return node.number
        if isinstance(node, StringValue):
            return node.text
        if isinstance(node, Identifier):
            value = env.get(node)
            return ZERO if value is None else value
        if isinstance(node, Group):
            return self.evaluate(node.expr, env)
        if isinstance(node, UnaryOp):
            if node.op in MUTATIONS:
                return self.mutate(node.op, node.operand, env)
            return self.apply_unary_op(node.op, self.evaluate(node.operand, env))
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def mutate(self, op: Operator, operand: Node, env: Environment) -> Value:
        if not (isinstance(operand, ValueExpr) and isinstance(operand.value, Identifier)):
            raise YololRuntimeError('TypeError', f'{op.value} needs a variable')
        target = operand.value
        old = env.get(target)
        if old is None:
            old = ZERO
        if not isinstance(old, YololNumber):
            raise YololRuntimeError('TypeError', f'{op.value} expects a Number in {target}, got {type_name(old)}')
        new = old + ONE if op in (Operator.PRE_INC, Operator.POST_INC) else old - ONE
        env.set(target, new)
        return new if op in (Operator.PRE_INC, Operator.PRE_DEC) else old

    def apply_unary_op(self, op: Operator, value: Value) -> Value:
        if op is Operator.NOT:
            return YololNumber.from_bool(not is_truthy(value))
        if not isinstance(value, YololNumber):
            raise YololRuntimeError('TypeError', f'{op.value} expects a Number, got {type_name(value)}')
        try:
            if op is Operator.NEGATE:
                return -value
            if op is Operator.ABS:
                return abs(value)
            if op is Operator.FACT:
                return value.factorial()
            if op is Operator.SQRT:
                if value < ZERO:
                    raise ValueError(f'square root of negative number {value}')
                return YololNumber.from_float(math.sqrt(value.to_float()))
            if op is Operator.SIN:
                return YololNumber.from_float(math.sin(math.radians(value.to_float())))
            if op is Operator.COS:
                return YololNumber.from_float(math.cos(math.radians(value.to_float())))
            if op is Operator.TAN:
                return YololNumber.from_float(math.tan(math.radians(value.to_float())))
            if op in (Operator.ARCSIN, Operator.ARCCOS):
                x = value.to_float()
                if not -1.0 <= x <= 1.0:
                    raise ValueError(f'{op.symbol} of {value} is outside [-1, 1]')
                fn = math.asin if op is Operator.ARCSIN else math.acos
                return YololNumber.from_float(math.degrees(fn(x)))
            if op is Operator.ARCTAN:
                return YololNumber.from_float(math.degrees(math.atan(value.to_float())))
        except ValueError as e:
            raise YololRuntimeError('DomainError', str(e)) from e
        raise YololRuntimeError('TypeError', f'unsupported unary operator {op.value}')

    def apply_binary_op(self, op: Operator, a: Value, b: Value) -> Value:
        if op is Operator.EQUAL:
            return YololNumber.from_bool(self.equal_values(a, b))
        if op is Operator.NOT_EQUAL:
            return YololNumber.from_bool(not self.equal_values(a, b))
        if op is Operator.AND:
            return YololNumber.from_bool(is_truthy(a) and is_truthy(b))
        if op is Operator.OR:
            return YololNumber.from_bool(is_truthy(a) or is_truthy(b))
        if op is Operator.ADD and isinstance(a, str) and isinstance(b, str):
            return a + b
        if not (isinstance(a, YololNumber) and isinstance(b, YololNumber)):
            raise YololRuntimeError('TypeError', f'unsupported {op.symbol} for {type_name(a)} and {type_name(b)}')
        try:
            if op is Operator.ADD:
                return a + b
            if op is Operator.SUB:
                return a - b
            if op is Operator.MUL:
                return a * b
            if op is Operator.DIV:
                return a / b
            if op is Operator.MOD:
                return a % b
            if op is Operator.POW:
                return a ** b
        except ZeroDivisionError as e:
            raise YololRuntimeError('ZeroDivisionError', str(e)) from e
        except ValueError as e:
            raise YololRuntimeError('DomainError', f'{a} ^ {b}: {e}') from e
        if op is Operator.LESSER:
            return YololNumber.from_bool(a < b)
        if op is Operator.LESSER_EQ:
            return YololNumber.from_bool(a <= b)
        if op is Operator.GREATER:
            return YololNumber.from_bool(a > b)
        if op is Operator.GREATER_EQ:
            return YololNumber.from_bool(a >= b)
        raise YololRuntimeError('TypeError', f'unknown operator {op.value}')

    def equal_values(self, a: Value, b: Value) -> bool:
        # Values of different types are never equal
        if type(a) is not type(b):
            return False
        return a == b


def evaluate_line(env: Environment, line: Line, debug_level: int = 0):
    """Execute every statement of `line` against `env`.

    Raises `YololRuntimeError` from the first failing statement.
    """
    Interpreter(debug_level=debug_level).evaluate_line(env, line)


def execute_line(env: Environment, source: str, interpreter: Optional[Interpreter] = None) -> bool:
    """Tokenize, parse and run one line of source text against `env`.

    Any failure is stored as text in `env.error` instead of being raised.
    Lexical and parse failures also advance `env.next_line` by one since
    nothing ran; after a runtime failure the counter is left alone.
    Returns True when the line ran without error.
    """
    if interpreter is None:
        interpreter = Interpreter()
    try:
        line = parse_line(tokenize(source))
    except (LexError, ParseError) as e:
        env.error = str(e)
        env.next_line += 1
        return False
    try:
        interpreter.evaluate_line(env, line)
    except YololRuntimeError as e:
        env.error = str(e)
        return False
    return True


def run_program(program: Program, env: Optional[Environment] = None,
                max_steps: int = DEFAULT_MAX_STEPS, debug_level: int = 0) -> Environment:
    """Convenience function to run a parsed program with a fresh interpreter."""
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(program, env, max_steps)
