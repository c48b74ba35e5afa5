from typing import Any, assert_never

from .ast import (
    BinaryExpr,
    DoubleConstant,
    Expr,
    IntegerConstant,
    ParenthesizedExpr,
    UnaryExpr,
    VariableExpr,
)


class Visitor:
    def visit_int(self, node: IntegerConstant) -> Any:
        pass

    def visit_double(self, node: DoubleConstant) -> Any:
        pass

    def visit_var(self, node: VariableExpr) -> Any:
        pass

    def visit_binary(self, node: BinaryExpr) -> Any:
        self.visit(node.lhs)
        self.visit(node.rhs)

    def visit_unary(self, node: UnaryExpr) -> Any:
        self.visit(node.expr)

    def visit_paren(self, node: ParenthesizedExpr) -> Any:
        self.visit(node.expr)

    def visit(self, node: Expr) -> Any:
        match node:
            case IntegerConstant():
                return self.visit_int(node)
            case DoubleConstant():
                return self.visit_double(node)
            case VariableExpr():
                return self.visit_var(node)
            case BinaryExpr():
                return self.visit_binary(node)
            case UnaryExpr():
                return self.visit_unary(node)
            case ParenthesizedExpr():
                return self.visit_paren(node)
            case _:
                assert_never(node)
