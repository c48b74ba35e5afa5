"""
Pytest fixtures for exprgen tests.
"""

from collections import deque

import pytest

from exprgen import GenConfig
from exprgen.rng import GeneratorRng


class ScriptedRng(GeneratorRng):
    """
    A randomness source replaying fixed answers, so each generator branch
    can be driven exactly.
    """

    def __init__(self, kinds=(), ops=(), ints=(), reals=(), parens=()):
        self.kinds = deque(kinds)
        self.ops = deque(ops)
        self.ints = deque(ints)
        self.reals = deque(reals)
        self.parens = deque(parens)
        self.seen_weights: list[list[float]] = []

    def uniform_integer(self, min, max):
        return self.ints.popleft()

    def uniform_real(self, min, max):
        return self.reals.popleft()

    def bernoulli(self, probability):
        return self.parens.popleft() if self.parens else False

    def choose_set_bit(self, mask, width):
        op = self.ops.popleft()
        assert mask >> op.bit & 1, f'{op} is not enabled'

        return op.bit

    def choose_weighted(self, weights):
        self.seen_weights.append(list(weights))

        return int(self.kinds.popleft())

    def exhausted(self) -> bool:
        return not (self.kinds or self.ops or self.ints or self.reals)


@pytest.fixture
def scripted():
    return ScriptedRng


@pytest.fixture
def config() -> GenConfig:
    """Default config without gratuitous parentheses."""
    return GenConfig(parenthesize_prob=0.0)

