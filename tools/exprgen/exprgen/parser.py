from lark import Lark, Transformer, v_args

from . import ast


class ExprTransformer(Transformer):
    def __init__(self):
        super().__init__(False)

    @staticmethod
    def binary(children):
        lhs, op, rhs = children

        return ast.BinaryExpr(lhs, ast.BinOp(str(op)), rhs)

    @staticmethod
    def unary(children):
        op, expr = children

        return ast.UnaryExpr(ast.UnOp(str(op)), expr)

    @staticmethod
    def integer(children):
        (token,) = children

        return ast.IntegerConstant(int(token))

    @staticmethod
    def double(children):
        (token,) = children

        return ast.DoubleConstant(float(token))

    @staticmethod
    def variable(children):
        (token,) = children

        return ast.VariableExpr(str(token))

    parenthesized = v_args(True)(ast.ParenthesizedExpr)


class ExprParser:
    def __init__(self):
        self.parser = Lark.open(
            'syntax.lark',
            rel_to=__file__,
            parser='lalr',
            transformer=ExprTransformer(),
        )

    def parse(self, text: str) -> ast.Expr:
        return self.parser.parse(text)  # type: ignore
