import math
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Union

import simplejson as json

from .ast import BinOp, ExprKind, TypeKind, UnOp


class ConfigError(RuntimeError):
    """
    A generation config violates a precondition of the generator.
    """


def bin_op_mask(*ops: BinOp) -> int:
    return sum(1 << op.bit for op in set(ops))


def un_op_mask(*ops: UnOp) -> int:
    return sum(1 << op.bit for op in set(ops))


ALL_BIN_OPS = bin_op_mask(*BinOp)
ALL_UN_OPS = un_op_mask(*UnOp)


@dataclass(frozen=True)
class KindWeights:
    initial_weight: float
    dampening_factor: float = 1.0


def default_expr_kind_weights() -> tuple[KindWeights, ...]:
    weights = {
        ExprKind.INTEGER_CONSTANT: KindWeights(1.0),
        ExprKind.DOUBLE_CONSTANT: KindWeights(1.0),
        ExprKind.VARIABLE_EXPR: KindWeights(1.0),
        ExprKind.BINARY_EXPR: KindWeights(3.0, 0.5),
        ExprKind.UNARY_EXPR: KindWeights(1.0, 0.6),
    }

    return tuple(weights[kind] for kind in ExprKind)


def default_type_kind_weights() -> tuple[KindWeights, ...]:
    return tuple(KindWeights(1.0) for _ in TypeKind)


@dataclass(frozen=True)
class GenConfig:
    int_const_min: int = 0
    int_const_max: int = 1000
    double_constant_min: float = 0.0
    double_constant_max: float = 10.0
    bin_op_mask: int = ALL_BIN_OPS
    un_op_mask: int = ALL_UN_OPS
    parenthesize_prob: float = 0.2
    expr_kind_weights: tuple[KindWeights, ...] = field(
        default_factory=default_expr_kind_weights
    )
    type_kind_weights: tuple[KindWeights, ...] = field(
        default_factory=default_type_kind_weights
    )

    def __post_init__(self):
        check_mask('bin_op_mask', self.bin_op_mask, len(BinOp))
        check_mask('un_op_mask', self.un_op_mask, len(UnOp))

        if not 0 <= self.int_const_min <= self.int_const_max:
            raise ConfigError(
                'invalid integer range '
                f'[{self.int_const_min}, {self.int_const_max}]'
            )

        lo, hi = self.double_constant_min, self.double_constant_max

        if not (math.isfinite(lo) and math.isfinite(hi) and 0 <= lo <= hi):
            raise ConfigError(f'invalid double range [{lo}, {hi}]')

        if not 0 <= self.parenthesize_prob <= 1:
            raise ConfigError(
                f'parenthesize_prob out of range: {self.parenthesize_prob}'
            )

        check_table('expr_kind_weights', self.expr_kind_weights, len(ExprKind))
        check_table('type_kind_weights', self.type_kind_weights, len(TypeKind))

        leaves = (
            ExprKind.INTEGER_CONSTANT,
            ExprKind.DOUBLE_CONSTANT,
            ExprKind.VARIABLE_EXPR,
        )

        if not any(self.expr_kind_weights[k].initial_weight > 0 for k in leaves):
            raise ConfigError('no leaf expression kind has a positive weight')

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'GenConfig':
        known = {f.name for f in fields(cls)} | {'bin_ops', 'un_ops'}

        if unknown := set(data) - known:
            raise ConfigError(f'unknown config keys: {sorted(unknown)}')

        opts = {
            key: val
            for key, val in data.items()
            if key not in ('bin_ops', 'un_ops', 'bin_op_mask', 'un_op_mask')
            and not key.endswith('_kind_weights')
        }

        if 'bin_ops' in data:
            opts['bin_op_mask'] = bin_op_mask(*parse_ops(BinOp, data['bin_ops']))
        elif 'bin_op_mask' in data:
            opts['bin_op_mask'] = data['bin_op_mask']

        if 'un_ops' in data:
            opts['un_op_mask'] = un_op_mask(*parse_ops(UnOp, data['un_ops']))
        elif 'un_op_mask' in data:
            opts['un_op_mask'] = data['un_op_mask']

        base = cls()

        if 'expr_kind_weights' in data:
            opts['expr_kind_weights'] = parse_kind_weights(
                ExprKind, base.expr_kind_weights, data['expr_kind_weights']
            )

        if 'type_kind_weights' in data:
            opts['type_kind_weights'] = parse_kind_weights(
                TypeKind, base.type_kind_weights, data['type_kind_weights']
            )

        return replace(base, **opts)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'GenConfig':
        with open(path) as f:
            return cls.from_dict(json.load(f))


def check_mask(name: str, mask: int, width: int):
    if mask <= 0:
        raise ConfigError(f'{name} must have at least one bit set')

    if mask >> width:
        raise ConfigError(f'{name} has bits beyond {width} operators')


def check_table(name: str, table: tuple[KindWeights, ...], size: int):
    if len(table) != size:
        raise ConfigError(f'{name} needs {size} entries, got {len(table)}')

    for kw in table:
        if kw.initial_weight < 0:
            raise ConfigError(f'negative weight in {name}: {kw}')

        if not 0 < kw.dampening_factor <= 1:
            raise ConfigError(f'dampening factor out of (0, 1] in {name}: {kw}')


def parse_ops(enum, symbols: list[str]) -> list:
    try:
        return [enum(sym) for sym in symbols]
    except ValueError as e:
        raise ConfigError(str(e)) from e


def parse_kind_weights(
    enum, base: tuple[KindWeights, ...], data: dict[str, Any]
) -> tuple[KindWeights, ...]:
    table = list(base)

    for name, entry in data.items():
        try:
            kind = enum[name.upper()]
        except KeyError:
            raise ConfigError(f'unknown kind: {name}') from None

        try:
            table[kind] = replace(table[kind], **entry)
        except TypeError as e:
            raise ConfigError(f'invalid weights for {name}: {e}') from e

    return tuple(table)
