# src/bealsearch/fmt.py
from __future__ import annotations

import re

from colorama import Fore, Style

from bealsearch.enumerator import SearchPoint

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def format_point(pt: SearchPoint, *, color: bool = True) -> str:
    """'a^x + b^y' with the exponents highlighted."""
    if not color:
        return f"{pt.a}^{pt.x} + {pt.b}^{pt.y}"
    ex = f"{Fore.YELLOW}{{}}{Style.RESET_ALL}"
    return f"{pt.a}^{ex.format(pt.x)} + {pt.b}^{ex.format(pt.y)}"


def format_count(n: int) -> str:
    return f"{n:,}"


def format_duration(seconds: float) -> str:
    """'850 ms', '12.345 s', '3:07.250' or '1:02:03.000'."""
    if seconds < 1:
        return f"{round(seconds * 1000)} ms"
    if seconds < 60:  # noqa: PLR2004
        return f"{seconds:.3f} s"
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(int(minutes), 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:06.3f}"
    return f"{minutes}:{secs:06.3f}"
