import shlex
import subprocess
from typing import Union

from lark.exceptions import UnexpectedInput

from exprgen import Expr
from exprgen.ast import strip_parens
from exprgen.parser import ExprParser


def evaluate(text: str, cmd: Union[str, list[str]]) -> str:
    if isinstance(cmd, str):
        cmd = shlex.split(cmd)

    proc = subprocess.run(
        cmd, check=True, text=True, input=text, stdout=subprocess.PIPE
    )

    return proc.stdout.strip()


def check_round_trip(expr: Expr, parser: ExprParser) -> bool:
    try:
        parsed = parser.parse(str(expr))
    except UnexpectedInput:
        return False

    return parsed == expr and strip_parens(parsed) == strip_parens(expr)
