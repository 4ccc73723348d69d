# src/bealsearch/runtime.py
from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import Any

from colorama import Fore, Style

_MISSING = object()


@dataclass
class Runtime:
    """Settings of the applied profile plus the two session flags."""
    profile_name: str = "builtin"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False      # stderr trace lines, tracebacks
    progress: bool = True    # live bar during multi-slice runs

    def apply(self, settings: Any) -> None:
        """Install a config.Settings (anything with .as_dict()) or a plain mapping."""
        data = settings.as_dict() if hasattr(settings, "as_dict") else settings
        if not isinstance(data, Mapping):
            raise TypeError(f"cannot apply settings of type {type(settings).__name__}")
        self.settings = dict(data)
        self.profile_name = str(getattr(settings, "name", None) or "custom")

        for attr, key in (("debug", "BEHAVIOUR.DEBUG"), ("progress", "BEHAVIOUR.PROGRESS")):
            flag = self.get(key)
            if isinstance(flag, bool):
                setattr(self, attr, flag)

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup into the nested settings, e.g. 'SEARCH.MAX_BASE'."""
        node: Any = self.settings
        for part in str(key).split("."):
            if not isinstance(node, Mapping):
                return default
            node = node.get(part, _MISSING)
            if node is _MISSING:
                return default
        return node


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("bealsearch_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = reset()
    return rt


def reset() -> Runtime:
    """Install a fresh Runtime (tests, repeated CLI calls in one process)."""
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


# ---- Dependency check --------------------------------------------------------

def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    The numeric core needs gmpy2 (powmod, gcd) and sympy (totient, primes).
    Report any that cannot be found; with strict=True that is fatal.
    """
    missing = [name for name in ("gmpy2", "sympy") if find_spec(name) is None]
    if missing:
        print(
            f"{Fore.RED}{Style.BRIGHT}Missing dependencies:{Style.RESET_ALL} {', '.join(missing)}\n"
            f"Install with: {Fore.YELLOW}pip install {' '.join(missing)}{Style.RESET_ALL}"
        )
        return not strict
    return True
