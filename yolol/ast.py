"""Abstract Syntax Tree (AST) definitions for YOLOL.

A `Program` is an ordered list of `Line`s and a `Line` an ordered list of
statements; lines are what `goto` addresses. Nodes are built once by the
parser and never mutated afterwards: the interpreter only ever changes
the `Environment`.

`str(node)` renders a node back to YOLOL source. Grouping parentheses
are part of the tree (`Group`), so rendering never needs to invent any.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .types import YololNumber


class Operator(Enum):
    # Arithmetic
    ADD = 'Add'
    SUB = 'Sub'
    MUL = 'Mul'
    DIV = 'Div'
    MOD = 'Mod'
    POW = 'Pow'

    # Comparison
    EQUAL = 'Equal'
    NOT_EQUAL = 'NotEqual'
    LESSER = 'Lesser'
    LESSER_EQ = 'LesserEq'
    GREATER = 'Greater'
    GREATER_EQ = 'GreaterEq'

    # Logical
    AND = 'And'
    OR = 'Or'
    NOT = 'Not'

    # Unary math
    NEGATE = 'Negate'
    ABS = 'Abs'
    SQRT = 'Sqrt'
    SIN = 'Sin'
    COS = 'Cos'
    TAN = 'Tan'
    ARCSIN = 'Arcsin'
    ARCCOS = 'Arccos'
    ARCTAN = 'Arctan'
    FACT = 'Fact'

    # Mutation
    PRE_INC = 'PreInc'
    PRE_DEC = 'PreDec'
    POST_INC = 'PostInc'
    POST_DEC = 'PostDec'

    # Assignment
    ASSIGN = 'Assign'
    ADD_ASSIGN = 'AddAssign'
    SUB_ASSIGN = 'SubAssign'
    MUL_ASSIGN = 'MulAssign'
    DIV_ASSIGN = 'DivAssign'
    MOD_ASSIGN = 'ModAssign'

    @property
    def symbol(self) -> str:
        return OPERATOR_SYMBOLS[self]


OPERATOR_SYMBOLS = {
    Operator.ADD: '+', Operator.SUB: '-', Operator.MUL: '*', Operator.DIV: '/',
    Operator.MOD: '%', Operator.POW: '^',
    Operator.EQUAL: '==', Operator.NOT_EQUAL: '!=', Operator.LESSER: '<',
    Operator.LESSER_EQ: '<=', Operator.GREATER: '>', Operator.GREATER_EQ: '>=',
    Operator.AND: 'and', Operator.OR: 'or', Operator.NOT: 'not',
    Operator.NEGATE: '-', Operator.ABS: 'abs', Operator.SQRT: 'sqrt',
    Operator.SIN: 'sin', Operator.COS: 'cos', Operator.TAN: 'tan',
    Operator.ARCSIN: 'arcsin', Operator.ARCCOS: 'arccos', Operator.ARCTAN: 'arctan',
    Operator.FACT: '!',
    Operator.PRE_INC: '++', Operator.PRE_DEC: '--',
    Operator.POST_INC: '++', Operator.POST_DEC: '--',
    Operator.ASSIGN: '=', Operator.ADD_ASSIGN: '+=', Operator.SUB_ASSIGN: '-=',
    Operator.MUL_ASSIGN: '*=', Operator.DIV_ASSIGN: '/=', Operator.MOD_ASSIGN: '%=',
}

# Operators written as a keyword in front of their operand
KEYWORD_OPERATORS = (
    Operator.NOT, Operator.ABS, Operator.SQRT, Operator.SIN, Operator.COS,
    Operator.TAN, Operator.ARCSIN, Operator.ARCCOS, Operator.ARCTAN,
)

# Compound assignment -> the binary operator it applies
COMPOUND_ASSIGNMENTS = {
    Operator.ADD_ASSIGN: Operator.ADD,
    Operator.SUB_ASSIGN: Operator.SUB,
    Operator.MUL_ASSIGN: Operator.MUL,
    Operator.DIV_ASSIGN: Operator.DIV,
    Operator.MOD_ASSIGN: Operator.MOD,
}

GLOBAL_MARKER = ':'


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


# Values

@dataclass(frozen=True)
class NumberValue(Node):
    number: YololNumber

    def __str__(self) -> str:
        return str(self.number)


@dataclass(frozen=True)
class StringValue(Node):
    text: str

    def __str__(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True)
class Identifier(Node):
    """A variable name; `is_global` marks a shared (`:name`) variable."""
    name: str
    is_global: bool = False

    @classmethod
    def from_source(cls, text: str) -> 'Identifier':
        if text.startswith(GLOBAL_MARKER):
            return cls(text[len(GLOBAL_MARKER):], True)
        return cls(text, False)

    def __str__(self) -> str:
        return f"{GLOBAL_MARKER}{self.name}" if self.is_global else self.name


@dataclass(frozen=True)
class Group(Node):
    expr: 'Expression'

    def __str__(self) -> str:
        return f"({self.expr})"


Value = Union[NumberValue, StringValue, Identifier, Group]


# Expressions

@dataclass(frozen=True)
class ValueExpr(Node):
    value: Value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UnaryOp(Node):
    op: Operator
    operand: 'Expression'

    def __str__(self) -> str:
        if self.op in (Operator.FACT, Operator.POST_INC, Operator.POST_DEC):
            return f"{self.operand}{self.op.symbol}"
        if self.op in KEYWORD_OPERATORS:
            return f"{self.op.symbol} {self.operand}"
        return f"{self.op.symbol}{self.operand}"


@dataclass(frozen=True)
class BinaryOp(Node):
    op: Operator
    left: 'Expression'
    right: 'Expression'

    def __str__(self) -> str:
        return f"{self.left} {self.op.symbol} {self.right}"


Expression = Union[ValueExpr, UnaryOp, BinaryOp]


# Statements

@dataclass(frozen=True)
class Comment(Node):
    text: str

    def __str__(self) -> str:
        return f"//{self.text}"


@dataclass(frozen=True)
class Goto(Node):
    expr: Expression

    def __str__(self) -> str:
        return f"goto {self.expr}"


@dataclass(frozen=True)
class If(Node):
    condition: Expression
    body: List['Statement']
    else_body: Optional[List['Statement']] = None

    def __str__(self) -> str:
        parts = ['if', str(self.condition), 'then']
        parts.extend(str(stmt) for stmt in self.body)
        if self.else_body is not None:
            parts.append('else')
            parts.extend(str(stmt) for stmt in self.else_body)
        parts.append('end')
        return ' '.join(parts)


@dataclass(frozen=True)
class Assignment(Node):
    target: Identifier
    op: Operator
    expr: Expression

    def __str__(self) -> str:
        return f"{self.target} {self.op.symbol} {self.expr}"


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expr: Expression

    def __str__(self) -> str:
        return str(self.expr)


Statement = Union[Comment, Goto, If, Assignment, ExpressionStatement]


@dataclass(frozen=True)
class Line(Node):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return ' '.join(str(stmt) for stmt in self.statements)


@dataclass(frozen=True)
class Program(Node):
    lines: List[Line] = field(default_factory=list)

    def __str__(self) -> str:
        return '\n'.join(str(line) for line in self.lines)
