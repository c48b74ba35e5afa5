"""Grammar-aware random expression generation for evaluator fuzzing."""

__version__ = '0.1'

__all__ = [
    'BinOp',
    'BinaryExpr',
    'ConfigError',
    'DefaultGeneratorRng',
    'DoubleConstant',
    'Expr',
    'ExprGenerator',
    'ExprKind',
    'GenConfig',
    'GeneratorRng',
    'IntegerConstant',
    'KindWeights',
    'ParenthesizedExpr',
    'TypeKind',
    'UnOp',
    'UnaryExpr',
    'VariableExpr',
    'generate',
]

from .ast import (
    BinaryExpr,
    BinOp,
    DoubleConstant,
    Expr,
    ExprKind,
    IntegerConstant,
    ParenthesizedExpr,
    TypeKind,
    UnaryExpr,
    UnOp,
    VariableExpr,
)
from .config import ConfigError, GenConfig, KindWeights
from .generator import ExprGenerator, generate
from .rng import DefaultGeneratorRng, GeneratorRng
