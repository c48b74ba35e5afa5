from dataclasses import dataclass
from typing import Union

from .ast import ExprKind, TypeKind
from .config import GenConfig


@dataclass
class Weights:
    """
    Per-frame sampling weights, one slot per expression kind and one per
    type kind. Each recursive step works on its own copy.
    """

    expr_weights: list[float]
    type_weights: list[float]

    @classmethod
    def initial(cls, config: GenConfig) -> 'Weights':
        return cls(
            [kw.initial_weight for kw in config.expr_kind_weights],
            [kw.initial_weight for kw in config.type_kind_weights],
        )

    def copy(self) -> 'Weights':
        return Weights(self.expr_weights.copy(), self.type_weights.copy())

    def decay(self, kind: ExprKind, factor: float):
        self.expr_weights[kind] *= factor

    def __getitem__(self, kind: Union[ExprKind, TypeKind]) -> float:
        if isinstance(kind, TypeKind):
            return self.type_weights[kind]
        else:
            return self.expr_weights[kind]
