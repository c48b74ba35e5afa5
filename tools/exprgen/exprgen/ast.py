from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import ClassVar, Union


class ExprKind(IntEnum):
    INTEGER_CONSTANT = 0
    DOUBLE_CONSTANT = 1
    VARIABLE_EXPR = 2
    BINARY_EXPR = 3
    UNARY_EXPR = 4


class TypeKind(IntEnum):
    SCALAR_TYPE = 0
    TAGGED_TYPE = 1
    POINTER_TYPE = 2
    VOID_POINTER_TYPE = 3
    NULLPTR_TYPE = 4


class BinOp(Enum):
    MUL = '*'
    DIV = '/'
    MOD = '%'
    ADD = '+'
    SUB = '-'
    SHL = '<<'
    SHR = '>>'
    LT = '<'
    LE = '<='
    GT = '>'
    GE = '>='
    EQ = '=='
    NE = '!='
    BIT_AND = '&'
    BIT_XOR = '^'
    BIT_OR = '|'
    LOGICAL_AND = '&&'
    LOGICAL_OR = '||'

    @property
    def bit(self) -> int:
        return _BIN_OPS.index(self)

    @property
    def precedence(self) -> int:
        return _BIN_OP_PRECEDENCE[self]

    def __str__(self) -> str:
        return self.value


class UnOp(Enum):
    PLUS = '+'
    NEG = '-'
    LOGICAL_NOT = '!'
    BIT_NOT = '~'

    @property
    def bit(self) -> int:
        return _UN_OPS.index(self)

    def __str__(self) -> str:
        return self.value


_BIN_OPS = list(BinOp)
_UN_OPS = list(UnOp)

# Levels from the C++ operator table; a smaller number binds tighter.
_BIN_OP_PRECEDENCE = {
    BinOp.MUL: 5,
    BinOp.DIV: 5,
    BinOp.MOD: 5,
    BinOp.ADD: 6,
    BinOp.SUB: 6,
    BinOp.SHL: 7,
    BinOp.SHR: 7,
    BinOp.LT: 9,
    BinOp.LE: 9,
    BinOp.GT: 9,
    BinOp.GE: 9,
    BinOp.EQ: 10,
    BinOp.NE: 10,
    BinOp.BIT_AND: 11,
    BinOp.BIT_XOR: 12,
    BinOp.BIT_OR: 13,
    BinOp.LOGICAL_AND: 14,
    BinOp.LOGICAL_OR: 15,
}


@dataclass(frozen=True)
class IntegerConstant:
    value: int

    PRECEDENCE: ClassVar[int] = 0

    @property
    def precedence(self) -> int:
        return self.PRECEDENCE

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DoubleConstant:
    value: float

    PRECEDENCE: ClassVar[int] = 0

    @property
    def precedence(self) -> int:
        return self.PRECEDENCE

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class VariableExpr:
    name: str

    PRECEDENCE: ClassVar[int] = 0

    @property
    def precedence(self) -> int:
        return self.PRECEDENCE

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class BinaryExpr:
    lhs: 'Expr'
    op: BinOp
    rhs: 'Expr'

    @property
    def precedence(self) -> int:
        return self.op.precedence

    def __str__(self) -> str:
        return f'{self.lhs} {self.op} {self.rhs}'


@dataclass(frozen=True)
class UnaryExpr:
    op: UnOp
    expr: 'Expr'

    PRECEDENCE: ClassVar[int] = 3

    @property
    def precedence(self) -> int:
        return self.PRECEDENCE

    def __str__(self) -> str:
        operand = str(self.expr)

        # Keep `- -x` from lexing as a decrement.
        if operand.startswith(('+', '-')):
            return f'{self.op} {operand}'
        else:
            return f'{self.op}{operand}'


@dataclass(frozen=True)
class ParenthesizedExpr:
    expr: 'Expr'

    PRECEDENCE: ClassVar[int] = 0

    @property
    def precedence(self) -> int:
        return self.PRECEDENCE

    def __str__(self) -> str:
        return f'({self.expr})'


Expr = Union[
    IntegerConstant,
    DoubleConstant,
    VariableExpr,
    BinaryExpr,
    UnaryExpr,
    ParenthesizedExpr,
]


def precedence(expr: Expr) -> int:
    return expr.precedence


def strip_parens(expr: Expr) -> Expr:
    """
    Remove every grouping node, leaving the operator-nesting shape.
    """

    match expr:
        case ParenthesizedExpr(inner):
            return strip_parens(inner)
        case BinaryExpr(lhs, _, rhs):
            return replace(expr, lhs=strip_parens(lhs), rhs=strip_parens(rhs))
        case UnaryExpr(_, inner):
            return replace(expr, expr=strip_parens(inner))
        case _:
            return expr
