# -----------------------------------------------------------------------------
#  boundary.py
#  Flat, handle-based calls for driving the engine from a test harness
# -----------------------------------------------------------------------------
"""
Every object is created by a *_make call, used through plain functions and
released with the matching *_free call. Calling anything on a released
handle raises PreconditionError.

work_do_work follows the fixed-capacity protocol: results are written into
the caller's list only when they all fit; the true count is returned either
way, so the caller can retry with a larger capacity.
"""

from __future__ import annotations

from collections.abc import Iterable

from bealsearch.enumerator import SearchPoint
from bealsearch.numeric import gcd, modpow
from bealsearch.orchestrator import SearchOrchestrator
from bealsearch.residues import MIN_EXP, ResidueTable
from bealsearch.utility import PreconditionError, require, require_int


class _Handle:
    __slots__ = ("obj",)

    def __init__(self, obj):
        self.obj = obj

    def get(self, kind: type):
        if self.obj is None:
            raise PreconditionError("handle used after free")
        if not isinstance(self.obj, kind):
            raise PreconditionError(f"expected a {kind.__name__} handle, got {type(self.obj).__name__}")
        return self.obj

    def free(self) -> None:
        if self.obj is None:
            raise PreconditionError("handle freed twice")
        self.obj = None


class EnumeratorCursor:
    """
    Step-at-a-time walk over one "a" slice.

    next() returns (done, point). While done is False the point is valid;
    the first done=True ends the slice and carries no point. The order is
    the same as iterating SpaceEnumerator: y fastest, then x, then b.
    """

    def __init__(self, max_base: int, max_exp: int, a: int):
        require(require_int(max_base, "max_base") > 0, f"max_base must be > 0, got {max_base}")
        require(require_int(max_exp, "max_exp") > 2, f"max_exp must be > 2, got {max_exp}")
        require(require_int(a, "a") > 0, f"a must be > 0, got {a}")
        self.max_base = max_base
        self.max_exp = max_exp
        self.a = a
        # one step before (a, 3, 1, 3) so the first next() lands on it
        self._x, self._b, self._y = MIN_EXP, 1, MIN_EXP - 1
        self._done = False

    def next(self) -> tuple[bool, SearchPoint | None]:
        if self._done:
            return True, None
        self._y += 1
        if self._y > self.max_exp:
            self._y = MIN_EXP
            self._x += 1
            if self._x > self.max_exp:
                self._x = MIN_EXP
                self._b += 1
                while True:
                    if self._b > self.a:
                        self._done = True
                        return True, None
                    if gcd(self.a, self._b) > 1:
                        self._b += 1
                    else:
                        break
        return False, SearchPoint(self.a, self._x, self._b, self._y)


# --- orchestrator ------------------------------------------------------------

def work_make(max_base: int, max_exp: int, moduli: Iterable[int]) -> _Handle:
    return _Handle(SearchOrchestrator(max_base, max_exp, list(moduli)))


def work_do_work(work: _Handle, a: int, out: list, capacity: int) -> int:
    """
    Search slice a. If the result count is <= capacity, out's contents are
    replaced by the results; otherwise out is left exactly as it was.
    Returns the true result count in both cases.
    """
    require(require_int(capacity, "capacity") >= 0, f"capacity must be >= 0, got {capacity}")
    results = work.get(SearchOrchestrator).search(a)
    if len(results) <= capacity:
        out[:] = results
    return len(results)


def work_free(work: _Handle) -> None:
    work.free()


# --- single residue table ----------------------------------------------------

def cz_make(max_base: int, max_exp: int, modulus: int) -> _Handle:
    return _Handle(ResidueTable(max_base, max_exp, modulus))


def cz_get(cz: _Handle, c: int, z: int) -> int:
    return cz.get(ResidueTable).get(c, z)


def cz_exists(cz: _Handle, value: int) -> bool:
    return cz.get(ResidueTable).exists(value)


def cz_modulus(cz: _Handle) -> int:
    return cz.get(ResidueTable).modulus


def cz_free(cz: _Handle) -> None:
    cz.free()


# --- single enumerator -------------------------------------------------------

def axby_make(max_base: int, max_exp: int, a: int) -> _Handle:
    return _Handle(EnumeratorCursor(max_base, max_exp, a))


def axby_next(axby: _Handle) -> tuple[bool, SearchPoint | None]:
    """(done, point); if done, there is no point."""
    return axby.get(EnumeratorCursor).next()


def axby_free(axby: _Handle) -> None:
    axby.free()


# --- numeric primitives ------------------------------------------------------

def c_modpow(base: int, exponent: int, modulus: int) -> int:
    return modpow(base, exponent, modulus)


def c_gcd(u: int, v: int) -> int:
    return gcd(u, v)
