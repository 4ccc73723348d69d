# tests/test_residues.py
from __future__ import annotations

import random

import pytest

from bealsearch.numeric import modpow
from bealsearch.residues import ExistenceSieve, ResidueTable
from bealsearch.runtime import APPLY
from bealsearch.utility import PreconditionError

# ---------- hand-computed sieve -----------------------------------------------
#
#   m = 7, c in 1..4, z in 3..4
#   1^3 = 1   2^3 = 8 = 1   3^3 = 27 = 6   4^3 = 64 = 1
#   1^4 = 1   2^4 = 16 = 2  3^4 = 81 = 4   4^4 = 256 = 4

HAND_TABLE = {
    (1, 3): 1, (2, 3): 1, (3, 3): 6, (4, 3): 1,
    (1, 4): 1, (2, 4): 2, (3, 4): 4, (4, 4): 4,
}
HAND_SIEVE = {1, 2, 4, 6}


@pytest.mark.parametrize("dense_limit", [1 << 24, 0], ids=["dense", "sparse"])
def test_hand_computed_mod_7(dense_limit):
    t = ResidueTable(4, 4, 7, dense_limit=dense_limit)
    assert t.modulus == 7
    for (c, z), v in HAND_TABLE.items():
        assert t.get(c, z) == v
    for v in range(7):
        assert t.exists(v) is (v in HAND_SIEVE), v
    assert t.residues() == sorted(HAND_SIEVE)
    assert len(t) == len(HAND_SIEVE)


def test_values_at_or_above_modulus_are_absent():
    t = ResidueTable(4, 4, 7)
    assert not t.exists(7)
    assert not t.exists(8)
    assert not t.exists((1 << 32) - 1)


@pytest.mark.parametrize("dense", [True, False])
def test_sieve_rejects_negative_values(dense):
    sieve = ExistenceSieve(7, [1, 2, 4, 6], dense=dense)
    assert -1 not in sieve
    assert -7 not in sieve
    assert 6 in sieve


@pytest.mark.parametrize("modulus", [97, 65521, 4294967291])
def test_get_matches_modpow_and_is_marked(modulus):
    t = ResidueTable(25, 8, modulus)
    for c in range(1, 26):
        for z in range(3, 9):
            v = t.get(c, z)
            assert v == modpow(c, z, modulus)
            assert t.exists(v)
            assert v in t


def test_unreached_values_are_absent_negative_sampling():
    m = 4294967291
    t = ResidueTable(20, 6, m)
    reached = {pow(c, z, m) for c in range(1, 21) for z in range(3, 7)}
    rng = random.Random(1234)
    for _ in range(2000):
        v = rng.randrange(m)
        assert t.exists(v) is (v in reached)


def test_dense_and_sparse_sieves_agree():
    dense = ResidueTable(12, 7, 1009, dense_limit=10_000)
    sparse = ResidueTable(12, 7, 1009, dense_limit=1000)
    assert dense.is_dense and not sparse.is_dense
    assert dense.residues() == sparse.residues()
    assert all(dense.exists(v) == sparse.exists(v) for v in range(1009))


def test_dense_limit_comes_from_profile_when_not_given():
    APPLY({"SIEVE": {"DENSE_LIMIT": 10}})
    assert not ResidueTable(3, 3, 11).is_dense
    APPLY({"SIEVE": {"DENSE_LIMIT": 11}})
    assert ResidueTable(3, 3, 11).is_dense


def test_modulus_one_maps_everything_to_zero():
    t = ResidueTable(3, 5, 1)
    assert t.residues() == [0]
    assert t.exists(0)
    assert not t.exists(1)


@pytest.mark.parametrize("c,z", [(0, 3), (5, 3), (1, 2), (1, 6), (-1, 3)])
def test_get_out_of_range_is_a_defined_fault(c, z):
    t = ResidueTable(4, 5, 97)
    with pytest.raises(PreconditionError):
        t.get(c, z)


@pytest.mark.parametrize("value", [-1, 1 << 32])
def test_exists_outside_32_bit_domain_faults(value):
    t = ResidueTable(4, 5, 97)
    with pytest.raises(PreconditionError):
        t.exists(value)


@pytest.mark.parametrize(
    "max_base,max_exp,modulus",
    [(0, 5, 97), (4, 2, 97), (4, 5, 0), (4, 5, -3), (4, 5, 1 << 32), (True, 5, 97)],
)
def test_construction_preconditions(max_base, max_exp, modulus):
    with pytest.raises(PreconditionError):
        ResidueTable(max_base, max_exp, modulus)


def test_precondition_error_is_an_assertion_error():
    with pytest.raises(AssertionError):
        ResidueTable(4, 2, 97)
