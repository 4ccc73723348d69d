# -----------------------------------------------------------------------------
#  residues.py
#  Power residues c^z mod m and the exact existence sieve built from them
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable

from bealsearch.numeric import modpow
from bealsearch.runtime import CFG
from bealsearch.utility import U32_LIMIT, PreconditionError, require, require_int

MIN_EXP = 3
DEFAULT_DENSE_LIMIT = 1 << 24


class ExistenceSieve:
    """
    Exact membership over residues mod m.

    Dense mode keeps one byte per residue in [0, m) (O(m) bytes); sparse mode
    keeps a frozenset of the residues actually reached. Both answer in O(1),
    and both are exact: a value is present iff it was added.
    """

    __slots__ = ("_dense", "_sparse", "modulus")

    def __init__(self, modulus: int, values: Iterable[int], *, dense: bool):
        self.modulus = modulus
        self._dense: bytearray | None = None
        self._sparse: frozenset[int] | None = None
        if dense:
            marks = bytearray(modulus)
            for v in values:
                marks[v] = 1
            self._dense = marks
        else:
            self._sparse = frozenset(values)

    @property
    def is_dense(self) -> bool:
        return self._dense is not None

    def __contains__(self, value: int) -> bool:
        if not 0 <= value < self.modulus:
            return False
        if self._dense is not None:
            return bool(self._dense[value])
        return value in self._sparse

    def members(self) -> list[int]:
        if self._dense is not None:
            return [i for i, flag in enumerate(self._dense) if flag]
        return sorted(self._sparse)


class ResidueTable:
    """
    All residues c^z mod m for c in [1, max_base], z in [3, max_exp].

    Built once, read-only afterwards; safe to share between threads or
    forked processes. `get` and `exists` raise PreconditionError outside
    the range the table was built for.
    """

    __slots__ = ("_distinct", "_max_base", "_max_exp", "_modulus", "_sieve", "_vals")

    def __init__(self, max_base: int, max_exp: int, modulus: int, *, dense_limit: int | None = None):
        require(require_int(max_base, "max_base") > 0, f"max_base must be > 0, got {max_base}")
        require(require_int(max_exp, "max_exp") > 2, f"max_exp must be > 2, got {max_exp}")
        require(0 < require_int(modulus, "modulus") < U32_LIMIT,
                f"modulus must be in [1, 2**32), got {modulus}")

        if dense_limit is None:
            dense_limit = int(CFG("SIEVE.DENSE_LIMIT", DEFAULT_DENSE_LIMIT))

        self._max_base = max_base
        self._max_exp = max_exp
        self._modulus = modulus

        # row c-1 holds z = 3..max_exp
        self._vals: list[tuple[int, ...]] = [
            tuple(modpow(c, z, modulus) for z in range(MIN_EXP, max_exp + 1))
            for c in range(1, max_base + 1)
        ]
        reached = {v for row in self._vals for v in row}
        self._distinct = len(reached)
        self._sieve = ExistenceSieve(modulus, reached, dense=modulus <= dense_limit)

    # --- accessors ---------------------------------------------------------

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def max_base(self) -> int:
        return self._max_base

    @property
    def max_exp(self) -> int:
        return self._max_exp

    @property
    def is_dense(self) -> bool:
        return self._sieve.is_dense

    # --- lookups -----------------------------------------------------------

    def get(self, c: int, z: int) -> int:
        """Precomputed c**z mod m; 1 <= c <= max_base, 3 <= z <= max_exp."""
        if not (1 <= c <= self._max_base and MIN_EXP <= z <= self._max_exp):
            raise PreconditionError(
                f"(c={c}, z={z}) outside table range c in [1, {self._max_base}], "
                f"z in [{MIN_EXP}, {self._max_exp}]"
            )
        return self._vals[c - 1][z - MIN_EXP]

    def exists(self, value: int) -> bool:
        """True iff value == c**z mod m for some (c, z) in range."""
        require(0 <= value < U32_LIMIT, f"value must be in [0, 2**32), got {value}")
        return value in self._sieve

    def __contains__(self, value: int) -> bool:
        return self.exists(value)

    def __len__(self) -> int:
        return self._distinct

    def residues(self) -> list[int]:
        """Sorted distinct residues present in the sieve."""
        return self._sieve.members()

    def __repr__(self) -> str:
        kind = "dense" if self.is_dense else "sparse"
        return (f"ResidueTable(max_base={self._max_base}, max_exp={self._max_exp}, "
                f"modulus={self._modulus}, sieve={kind})")
