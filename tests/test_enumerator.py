# tests/test_enumerator.py
from __future__ import annotations

import itertools
import math

import pytest

from bealsearch.enumerator import SearchPoint, SpaceEnumerator
from bealsearch.utility import PreconditionError


def test_slice_a6_skips_non_coprime_bases():
    pts = list(SpaceEnumerator(10, 5, 6))
    bases = {p.b for p in pts}
    assert bases == {1, 5}
    for b in (2, 3, 4, 6):  # gcd(6, b) > 1
        assert b not in bases


def test_first_point_is_the_starting_point():
    first = next(iter(SpaceEnumerator(10, 5, 7)))
    assert first == SearchPoint(7, 3, 1, 3)


def test_order_is_y_then_x_then_b():
    pts = list(SpaceEnumerator(10, 4, 3))
    assert pts == [
        (3, 3, 1, 3), (3, 3, 1, 4), (3, 4, 1, 3), (3, 4, 1, 4),
        (3, 3, 2, 3), (3, 3, 2, 4), (3, 4, 2, 3), (3, 4, 2, 4),
    ]
    assert all(isinstance(p, SearchPoint) for p in pts)


@pytest.mark.parametrize("a", [1, 2, 6, 12, 13, 30])
def test_every_valid_point_exactly_once(a):
    max_exp = 6
    pts = list(SpaceEnumerator(40, max_exp, a))
    assert all(p.a == a for p in pts)
    assert all(3 <= p.x <= max_exp and 3 <= p.y <= max_exp for p in pts)
    assert all(1 <= p.b <= a and math.gcd(a, p.b) == 1 for p in pts)

    expected = {
        (b, x, y)
        for b in range(1, a + 1) if math.gcd(a, b) == 1
        for x in range(3, max_exp + 1)
        for y in range(3, max_exp + 1)
    }
    got = [(p.b, p.x, p.y) for p in pts]
    assert len(got) == len(set(got))
    assert set(got) == expected
    assert len(SpaceEnumerator(40, max_exp, a)) == len(pts)


def test_each_coprime_pair_belongs_to_the_larger_slice_only():
    max_base, max_exp = 15, 4
    seen: dict[tuple[int, int], set[int]] = {}
    for a in range(1, max_base + 1):
        for p in SpaceEnumerator(max_base, max_exp, a):
            seen.setdefault(tuple(sorted((p.a, p.b))), set()).add(p.a)

    for (lo, hi), slices in seen.items():
        assert slices == {hi}
    expected_pairs = {
        (b, a) for a, b in itertools.product(range(1, max_base + 1), repeat=2)
        if b <= a and math.gcd(a, b) == 1
    }
    assert set(seen) == expected_pairs


def test_iteration_is_restartable_and_deterministic():
    e = SpaceEnumerator(20, 6, 18)
    assert list(e) == list(e)


def test_slice_of_one_is_a_single_block():
    pts = list(SpaceEnumerator(5, 5, 1))
    assert {p.b for p in pts} == {1}
    assert len(pts) == 9


@pytest.mark.parametrize("args", [(0, 5, 1), (10, 2, 1), (10, 5, 0), (10, 5, -2)])
def test_preconditions(args):
    with pytest.raises(PreconditionError):
        SpaceEnumerator(*args)
