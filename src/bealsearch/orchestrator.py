# -----------------------------------------------------------------------------
#  orchestrator.py
#  Multi-modulus residue filtering of the (a, x, b, y) space
# -----------------------------------------------------------------------------

from __future__ import annotations

import time
from collections.abc import Callable, Iterable

from bealsearch.enumerator import SearchPoint, SpaceEnumerator
from bealsearch.residues import ResidueTable
from bealsearch.runtime import current as _rt_current
from bealsearch.utility import debug_line, require, require_int

ProgressFn = Callable[[int, int, int], None]


class SearchOrchestrator:
    """
    Owns one ResidueTable per modulus and filters each "a" slice through all
    of them.

    A point (a, x, b, y) survives only if, for every modulus m,
    (a**x + b**y) mod m is itself some c**z mod m with c, z in range. The
    tables are never written after __init__, so `search` may be called any
    number of times, for any a in [1, max_base], from any thread.
    """

    def __init__(
        self,
        max_base: int,
        max_exp: int,
        moduli: Iterable[int],
        *,
        dense_limit: int | None = None,
    ):
        require(require_int(max_base, "max_base") > 0, f"max_base must be > 0, got {max_base}")
        require(require_int(max_exp, "max_exp") > 2, f"max_exp must be > 2, got {max_exp}")
        self.max_base = max_base
        self.max_exp = max_exp

        # duplicates add nothing to the conjunction
        unique = list(dict.fromkeys(moduli))
        debug = _rt_current().debug
        tables = []
        for m in unique:
            t0 = time.perf_counter()
            table = ResidueTable(max_base, max_exp, m, dense_limit=dense_limit)
            if debug:
                kind = "dense" if table.is_dense else "sparse"
                debug_line(
                    f"residue table m={m}: {len(table)} distinct residues ({kind} sieve)",
                    (time.perf_counter() - t0) * 1000.0,
                )
            tables.append(table)
        self._tables: tuple[ResidueTable, ...] = tuple(tables)

    @property
    def tables(self) -> tuple[ResidueTable, ...]:
        return self._tables

    @property
    def moduli(self) -> tuple[int, ...]:
        return tuple(t.modulus for t in self._tables)

    def enumerator(self, a: int) -> SpaceEnumerator:
        return SpaceEnumerator(self.max_base, self.max_exp, a)

    def passes(self, pt: SearchPoint) -> bool:
        """True if every table admits pt.a**pt.x + pt.b**pt.y as a power residue."""
        for t in self._tables:
            # Python ints: the sum never wraps, whatever the modulus width
            s = (t.get(pt.a, pt.x) + t.get(pt.b, pt.y)) % t.modulus
            if not t.exists(s):
                return False
        return True

    def search(self, a: int) -> list[SearchPoint]:
        """All points of the "a" slice that pass every modulus, in enumeration order."""
        require(require_int(a, "a") > 0 and a <= self.max_base,
                f"a must be in [1, {self.max_base}], got {a}")
        return [pt for pt in self.enumerator(a) if self.passes(pt)]

    def search_many(
        self,
        a_values: Iterable[int],
        *,
        progress: ProgressFn | None = None,
    ) -> dict[int, list[SearchPoint]]:
        """
        Run `search` for each a in turn (sequentially) and return {a: points}.
        progress(done, a, found) is called after each slice.
        """
        out: dict[int, list[SearchPoint]] = {}
        for i, a in enumerate(a_values, start=1):
            out[a] = self.search(a)
            if progress is not None:
                progress(i, a, len(out[a]))
        return out

    def __repr__(self) -> str:
        return (f"SearchOrchestrator(max_base={self.max_base}, max_exp={self.max_exp}, "
                f"moduli={list(self.moduli)})")
