# tests/test_boundary.py
from __future__ import annotations

import pytest

from bealsearch import boundary
from bealsearch.enumerator import SearchPoint, SpaceEnumerator
from bealsearch.utility import PreconditionError


def _drain(h) -> list[SearchPoint]:
    pts = []
    while True:
        done, pt = boundary.axby_next(h)
        if done:
            assert pt is None
            return pts
        pts.append(pt)


# ---------- work_* ------------------------------------------------------------


def test_buffer_too_small_leaves_buffer_untouched():
    w = boundary.work_make(20, 6, [97, 101])
    try:
        full: list = []
        n = boundary.work_do_work(w, 20, full, 10_000)
        assert n == len(full) > 1

        sentinel = [SearchPoint(0, 0, 0, 0)]
        small = list(sentinel)
        n_small = boundary.work_do_work(w, 20, small, n - 1)
        assert n_small == n
        assert small == sentinel
    finally:
        boundary.work_free(w)


def test_exact_capacity_writes_everything():
    w = boundary.work_make(15, 5, [97])
    out: list = ["stale"] * 3
    n = boundary.work_do_work(w, 15, out, 10_000)
    exact: list = []
    assert boundary.work_do_work(w, 15, exact, n) == n
    assert exact == out
    assert "stale" not in out
    boundary.work_free(w)


def test_zero_capacity_just_counts():
    w = boundary.work_make(10, 4, [7])
    out: list = []
    n = boundary.work_do_work(w, 9, out, 0)
    assert n > 0
    assert out == []
    boundary.work_free(w)


def test_freed_work_handle_faults():
    w = boundary.work_make(5, 4, [97])
    boundary.work_free(w)
    with pytest.raises(PreconditionError):
        boundary.work_do_work(w, 3, [], 10)
    with pytest.raises(PreconditionError):
        boundary.work_free(w)


# ---------- cz_* --------------------------------------------------------------


def test_cz_calls_mirror_residue_table():
    h = boundary.cz_make(4, 4, 7)
    assert boundary.cz_modulus(h) == 7
    assert boundary.cz_get(h, 3, 3) == 6
    assert boundary.cz_get(h, 2, 4) == 2
    assert [v for v in range(7) if boundary.cz_exists(h, v)] == [1, 2, 4, 6]
    boundary.cz_free(h)
    with pytest.raises(PreconditionError):
        boundary.cz_get(h, 1, 3)


def test_wrong_handle_kind_faults():
    h = boundary.cz_make(4, 4, 7)
    with pytest.raises(PreconditionError):
        boundary.axby_next(h)


# ---------- axby_* ------------------------------------------------------------


@pytest.mark.parametrize("a", [1, 6, 9, 10, 17])
def test_step_cursor_agrees_with_lazy_enumerator(a):
    h = boundary.axby_make(20, 5, a)
    assert _drain(h) == list(SpaceEnumerator(20, 5, a))
    boundary.axby_free(h)


def test_step_cursor_a6_scenario():
    h = boundary.axby_make(10, 5, 6)
    pts = _drain(h)
    assert pts[0] == SearchPoint(6, 3, 1, 3)
    assert {p.b for p in pts} == {1, 5}


def test_step_cursor_stays_done():
    h = boundary.axby_make(3, 3, 1)
    assert boundary.axby_next(h) == (False, SearchPoint(1, 3, 1, 3))
    assert boundary.axby_next(h) == (True, None)
    assert boundary.axby_next(h) == (True, None)


# ---------- numeric -----------------------------------------------------------


def test_numeric_primitives_are_exposed():
    assert boundary.c_modpow(3, 4, 7) == 4
    assert boundary.c_gcd(0, 12) == 12
    assert boundary.c_gcd(12, 18) == 6
