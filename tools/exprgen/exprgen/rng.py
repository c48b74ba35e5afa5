import random
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from enum import Flag, auto
from itertools import accumulate
from typing import Optional

from more_itertools import first_true, last

from .ast import BinOp, ExprKind, TypeKind, UnOp
from .config import ConfigError
from .weights import Weights


class CvQualifiers(Flag):
    """Qualifier draws for the companion type generator."""

    NONE = 0
    CONST = auto()
    VOLATILE = auto()


def pick_nth_set_bit(
    mask: int, width: int, draw: Callable[[int, int], int]
) -> int:
    """
    Select one of the set bits of `mask` uniformly.

    `draw(lo, hi)` must return an integer uniformly from the closed range.
    """

    count = bin(mask & ((1 << width) - 1)).count('1')

    if count == 0:
        raise ConfigError('mask must not be empty')

    choice = draw(1, count)
    running_ones = 0

    for i in range(width):
        if mask >> i & 1:
            running_ones += 1

        if running_ones == choice:
            return i

    # Unreachable: `choice` never exceeds the popcount.
    raise ConfigError('mask has no bits set')


def pick_weighted(weights: Sequence[float], val: float) -> int:
    """
    Index of the first running sum of `weights` exceeding `val`, or the last
    index if rounding leaves none.
    """

    fallback = (len(weights) - 1, 0.0)
    idx, _ = first_true(
        enumerate(accumulate(weights)),
        default=fallback,
        pred=lambda entry: val < entry[1],
    )

    return idx


class GeneratorRng(ABC):
    @abstractmethod
    def uniform_integer(self, min: int, max: int) -> int: ...

    @abstractmethod
    def uniform_real(self, min: float, max: float) -> float: ...

    @abstractmethod
    def bernoulli(self, probability: float) -> bool: ...

    @abstractmethod
    def choose_set_bit(self, mask: int, width: int) -> int: ...

    @abstractmethod
    def choose_weighted(self, weights: Sequence[float]) -> int: ...

    def gen_bin_op(self, mask: int) -> BinOp:
        return list(BinOp)[self.choose_set_bit(mask, len(BinOp))]

    def gen_un_op(self, mask: int) -> UnOp:
        return list(UnOp)[self.choose_set_bit(mask, len(UnOp))]

    def gen_expr_kind(self, weights: Weights) -> ExprKind:
        return ExprKind(self.choose_weighted(weights.expr_weights))

    def gen_type_kind(self, weights: Weights) -> TypeKind:
        """Type kind draw for the companion type generator."""

        return TypeKind(self.choose_weighted(weights.type_weights))

    def gen_parenthesize(self, probability: float) -> bool:
        return self.bernoulli(probability)

    def gen_cv_qualifiers(
        self, const_prob: float, volatile_prob: float
    ) -> CvQualifiers:
        """Qualifier draw for the companion type generator."""

        quals = CvQualifiers.NONE

        if self.bernoulli(const_prob):
            quals |= CvQualifiers.CONST
        if self.bernoulli(volatile_prob):
            quals |= CvQualifiers.VOLATILE

        return quals


class DefaultGeneratorRng(GeneratorRng):
    """
    A single seeded pseudo-random stream. Not safe to share between threads.
    """

    def __init__(self, seed: Optional[int] = None):
        self.random = random.Random(seed)

    def uniform_integer(self, min: int, max: int) -> int:
        return self.random.randint(min, max)

    def uniform_real(self, min: float, max: float) -> float:
        return self.random.uniform(min, max)

    def bernoulli(self, probability: float) -> bool:
        return self.random.random() < probability

    def choose_set_bit(self, mask: int, width: int) -> int:
        return pick_nth_set_bit(mask, width, self.random.randint)

    def choose_weighted(self, weights: Sequence[float]) -> int:
        # Same running sum the scan uses, so a draw never overshoots it.
        total = last(accumulate(weights), default=0.0)

        if not total > 0:
            raise ConfigError('weights must have a positive sum')

        return pick_weighted(weights, self.random.random() * total)
