import logging
from typing import assert_never

from .ast import (
    BinaryExpr,
    DoubleConstant,
    Expr,
    ExprKind,
    IntegerConstant,
    ParenthesizedExpr,
    UnaryExpr,
    VariableExpr,
    precedence,
)
from .config import GenConfig
from .rng import GeneratorRng
from .weights import Weights

logger = logging.getLogger(__name__)

VAR = 'x'


class ExprGenerator:
    def __init__(self, rng: GeneratorRng, config: GenConfig):
        self.rng = rng
        self.config = config

    def generate(self) -> Expr:
        weights = Weights.initial(self.config)
        expr = self.maybe_parenthesized(self.gen_with_weights(weights))

        logger.debug('generated expression: %s', expr)

        return expr

    def gen_with_weights(self, weights: Weights) -> Expr:
        new_weights = weights.copy()

        kind = self.rng.gen_expr_kind(new_weights)
        new_weights.decay(
            kind, self.config.expr_kind_weights[kind].dampening_factor
        )

        expr: Expr

        match kind:
            case ExprKind.INTEGER_CONSTANT:
                expr = self.gen_integer_constant(new_weights)
            case ExprKind.DOUBLE_CONSTANT:
                expr = self.gen_double_constant(new_weights)
            case ExprKind.VARIABLE_EXPR:
                expr = self.gen_variable_expr(new_weights)
            case ExprKind.BINARY_EXPR:
                expr = self.gen_binary_expr(new_weights)
            case ExprKind.UNARY_EXPR:
                expr = self.gen_unary_expr(new_weights)
            case _:
                assert_never(kind)

        return self.maybe_parenthesized(expr)

    def gen_integer_constant(self, weights: Weights) -> IntegerConstant:
        cfg = self.config
        value = self.rng.uniform_integer(cfg.int_const_min, cfg.int_const_max)

        return IntegerConstant(value)

    def gen_double_constant(self, weights: Weights) -> DoubleConstant:
        cfg = self.config
        value = self.rng.uniform_real(
            cfg.double_constant_min, cfg.double_constant_max
        )

        return DoubleConstant(value)

    def gen_variable_expr(self, weights: Weights) -> VariableExpr:
        return VariableExpr(VAR)

    def gen_binary_expr(self, weights: Weights) -> BinaryExpr:
        op = self.rng.gen_bin_op(self.config.bin_op_mask)

        lhs = self.gen_with_weights(weights)
        rhs = self.gen_with_weights(weights)

        # Binary operators associate left to right, so a left operand of
        # equal precedence already groups as built: `3 - 4 + 5`.
        if precedence(lhs) > op.precedence:
            lhs = ParenthesizedExpr(lhs)

        # A right operand of equal precedence would regroup when re-parsed:
        # `3 - (4 + 5)` must not print as `3 - 4 + 5`.
        if precedence(rhs) >= op.precedence:
            rhs = ParenthesizedExpr(rhs)

        return BinaryExpr(lhs, op, rhs)

    def gen_unary_expr(self, weights: Weights) -> UnaryExpr:
        expr = self.gen_with_weights(weights)
        op = self.rng.gen_un_op(self.config.un_op_mask)

        if precedence(expr) > UnaryExpr.PRECEDENCE:
            expr = ParenthesizedExpr(expr)

        return UnaryExpr(op, expr)

    def maybe_parenthesized(self, expr: Expr) -> Expr:
        if self.rng.gen_parenthesize(self.config.parenthesize_prob):
            return ParenthesizedExpr(expr)

        return expr


def generate(config: GenConfig, rng: GeneratorRng) -> Expr:
    return ExprGenerator(rng, config).generate()
