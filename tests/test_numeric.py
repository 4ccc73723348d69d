# tests/test_numeric.py
from __future__ import annotations

import math

import pytest

from bealsearch.numeric import gcd, modpow
from bealsearch.utility import PreconditionError

MODPOW_CASES = [
    # (base, exponent, modulus, expected)
    (2, 3, 7, 1),
    (3, 3, 7, 6),
    (2, 10, 1000, 24),
    (5, 0, 13, 1),
    (7, 0, 1, 0),
    (0, 5, 11, 0),
    (4294967295, 2, 4294967291, pow(4294967295, 2, 4294967291)),
    (123456789, 987654321, 4294967295, pow(123456789, 987654321, 4294967295)),
]


@pytest.mark.parametrize("base,exponent,modulus,expected", MODPOW_CASES)
def test_modpow_matches_builtin_pow(base, exponent, modulus, expected):
    got = modpow(base, exponent, modulus)
    assert got == expected
    assert type(got) is int


def test_modpow_is_exact_near_the_top_of_32_bits():
    m = (1 << 32) - 5
    for c in (m - 1, m - 2, 65536, 65537):
        for z in range(3, 12):
            assert modpow(c, z, m) == pow(c, z, m)


@pytest.mark.parametrize("args", [(-1, 3, 7), (2, -3, 7), (2, 3, 0), (2, 3, -7), (2.0, 3, 7)])
def test_modpow_rejects_bad_inputs(args):
    with pytest.raises(PreconditionError):
        modpow(*args)


@pytest.mark.parametrize("u,v", [(0, 0), (0, 9), (9, 0), (12, 18), (17, 5), (6, 6), (2**31, 2**20)])
def test_gcd_matches_math_gcd(u, v):
    assert gcd(u, v) == math.gcd(u, v)


def test_gcd_of_zero_is_other_argument():
    assert gcd(0, 42) == 42


def test_gcd_rejects_negative():
    with pytest.raises(PreconditionError):
        gcd(-4, 6)
