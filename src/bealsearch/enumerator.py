# -----------------------------------------------------------------------------
#  enumerator.py
#  The pruned (a, x, b, y) point space for one fixed "a"
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from sympy import totient

from bealsearch.numeric import gcd
from bealsearch.residues import MIN_EXP
from bealsearch.utility import require, require_int


class SearchPoint(NamedTuple):
    """Left-hand side a**x + b**y of a candidate."""
    a: int
    x: int
    b: int
    y: int


class SpaceEnumerator:
    """
    Lazily yields every point (a, x, b, y) with the given "a",
    3 <= x, y <= max_exp, 1 <= b <= a and gcd(a, b) == 1.

    Order is fixed: y varies fastest, then x, then b. Starting with (a, 3, 1, 3).
    b <= a drops the mirror image (b, y, a, x) of every pair; non-coprime b
    are skipped before any sieve work. Iterating twice replays the same
    sequence, so one instance can be handed to a worker as a unit of work.
    """

    def __init__(self, max_base: int, max_exp: int, a: int):
        require(require_int(max_base, "max_base") > 0, f"max_base must be > 0, got {max_base}")
        require(require_int(max_exp, "max_exp") > 2, f"max_exp must be > 2, got {max_exp}")
        require(require_int(a, "a") > 0, f"a must be > 0, got {a}")
        self.max_base = max_base
        self.max_exp = max_exp
        self.a = a

    def coprime_bases(self) -> Iterator[int]:
        a = self.a
        for b in range(1, a + 1):
            if gcd(a, b) == 1:
                yield b

    def __iter__(self) -> Iterator[SearchPoint]:
        a = self.a
        exps = range(MIN_EXP, self.max_exp + 1)
        for b in self.coprime_bases():
            for x in exps:
                for y in exps:
                    yield SearchPoint(a, x, b, y)

    def __len__(self) -> int:
        # one block of (x, y) pairs per coprime b, phi(a) of them
        width = self.max_exp - MIN_EXP + 1
        return int(totient(self.a)) * width * width

    def __repr__(self) -> str:
        return f"SpaceEnumerator(max_base={self.max_base}, max_exp={self.max_exp}, a={self.a})"
