# -----------------------------------------------------------------------------
#  numeric.py
#  Exact modular exponentiation and gcd on non-negative integers
# -----------------------------------------------------------------------------

from __future__ import annotations

import gmpy2

from bealsearch.utility import require, require_int


def modpow(base: int, exponent: int, modulus: int) -> int:
    """
    base**exponent mod modulus by repeated squaring (gmpy2.powmod).

    Exact for any modulus >= 1, including the full unsigned 32-bit range.
    modpow(x, 0, 1) == 0.
    """
    require(require_int(base, "base") >= 0, f"base must be >= 0, got {base}")
    require(require_int(exponent, "exponent") >= 0, f"exponent must be >= 0, got {exponent}")
    require(require_int(modulus, "modulus") > 0, f"modulus must be > 0, got {modulus}")
    return int(gmpy2.powmod(base, exponent, modulus))


def gcd(u: int, v: int) -> int:
    """Greatest common divisor of two non-negative ints; gcd(0, v) == v."""
    require(require_int(u, "u") >= 0, f"u must be >= 0, got {u}")
    require(require_int(v, "v") >= 0, f"v must be >= 0, got {v}")
    return int(gmpy2.gcd(u, v))
