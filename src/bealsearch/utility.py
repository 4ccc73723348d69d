# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys
from pathlib import PurePath

from colorama import Fore, Style

U32_LIMIT = 1 << 32


class UserInputError(Exception):
    pass


class PreconditionError(AssertionError):
    """
    A caller broke a documented precondition (bounds, ranges, freed handles).

    Raised explicitly rather than through `assert`, so the check survives
    `python -O`. This is a programming error, not something to recover from.
    """


def require(cond: bool, msg: str) -> None:
    if not cond:
        raise PreconditionError(msg)


def require_int(value: object, name: str) -> int:
    # bool is an int subclass; True/False as a bound is always a bug
    if isinstance(value, bool) or not isinstance(value, int):
        raise PreconditionError(f"{name} must be an int, got {type(value).__name__}")
    return value


def debug_line(msg: str, dt_ms: float | None = None) -> None:
    """Emit a single dimmed debug line (with optional timing) to STDERR."""
    tm = f"{Style.DIM}[{dt_ms:8.2f} ms]{Style.RESET_ALL} " if dt_ms is not None else ""
    sys.stderr.write(f"{Fore.CYAN}[debug]{Style.RESET_ALL} {tm}{msg}\n")
    sys.stderr.flush()


def parse_a_range(text: str) -> tuple[int, int]:
    """
    Parse an "a" slice selector: "12" or "5-40" (inclusive).
    Raises UserInputError for anything else.
    """
    s = str(text).strip()
    lo_s, sep, hi_s = s.partition("-")
    try:
        lo = int(lo_s)
        hi = int(hi_s) if sep else lo
    except ValueError:
        raise UserInputError(f"Invalid input: '{text}' is not an integer or range like 5-40.") from None
    if lo < 1 or hi < lo:
        raise UserInputError(f"Invalid input: range '{text}' must satisfy 1 <= from <= to.")
    return lo, hi


_RESERVED_NAMES = frozenset(
    {".gitignore", "license", "pyproject.toml", "con", "prn", "aux", "nul"}
    | {f"{dev}{i}" for dev in ("com", "lpt") for i in range(1, 10)}
)
_RESERVED_SUFFIXES = (".py", ".md", ".toml")


def validate_output_setting(output_file: str | None) -> str | None:
    """
    Check an --output / OUTPUT.OUTPUT_FILE value before anything is written.

    Empty means screen only and a trailing "/" (or ".") means one file per
    run; both pass through. A file target may not be a source or config
    file, nor a Windows device name. Raises ValueError otherwise.
    """
    if not output_file or output_file in (".", "./") or output_file.endswith("/"):
        return output_file

    name = PurePath(output_file).name
    lowered = name.lower()
    if lowered in _RESERVED_NAMES or lowered.split(".", 1)[0] in _RESERVED_NAMES:
        raise ValueError(f"Forbidden output filename: {name}")
    if lowered.endswith(_RESERVED_SUFFIXES):
        raise ValueError(f"Forbidden output file extension: {PurePath(lowered).suffix}")
    return output_file


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
