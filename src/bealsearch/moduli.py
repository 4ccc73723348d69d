# -----------------------------------------------------------------------------
#  moduli.py
#  Choosing the moduli the residue tables are built for
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from sympy import isprime, prevprime

from bealsearch.utility import U32_LIMIT, UserInputError

_SPLIT_RE = re.compile(r"[,\s]+")


def prime_moduli(count: int, ceiling: int = U32_LIMIT) -> list[int]:
    """
    The `count` largest primes strictly below `ceiling`, descending.

    Large, distinct primes make the per-modulus "sum is a power residue"
    events close to independent, so each extra modulus cuts the false
    positive rate by roughly the density of power residues mod p.
    """
    if count < 1:
        raise UserInputError(f"prime count must be >= 1, got {count}.")
    if ceiling > U32_LIMIT:
        raise UserInputError(f"prime ceiling must be <= 2**32, got {ceiling}.")
    out: list[int] = []
    p = ceiling
    while len(out) < count:
        if p <= 2:
            raise UserInputError(f"only {len(out)} primes below {ceiling}, {count} requested.")
        p = prevprime(p)
        out.append(int(p))
    return out


def parse_moduli(text: str) -> list[int]:
    """
    Parse "4294967291, 4294967279" (commas and/or spaces) into ints.
    Every entry must be an integer in [2, 2**32).
    """
    parts = [s for s in _SPLIT_RE.split(str(text).strip()) if s]
    if not parts:
        raise UserInputError("no moduli given.")
    out: list[int] = []
    for s in parts:
        try:
            m = int(s)
        except ValueError:
            raise UserInputError(f"Invalid input: modulus '{s}' is not an integer.") from None
        if not (2 <= m < U32_LIMIT):
            raise UserInputError(f"Invalid input: modulus {m} must be in [2, 2**32).")
        out.append(m)
    return out


def describe_moduli(moduli: list[int]) -> str:
    """Short human summary, e.g. '4294967291 (prime), 1000 (composite)'."""
    return ", ".join(f"{m} ({'prime' if isprime(m) else 'composite'})" for m in moduli)
