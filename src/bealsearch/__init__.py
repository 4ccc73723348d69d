from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("bealsearch")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .enumerator import SearchPoint, SpaceEnumerator
from .moduli import parse_moduli, prime_moduli
from .numeric import gcd, modpow
from .orchestrator import SearchOrchestrator
from .residues import ResidueTable
from .runtime import APPLY, CFG
from .utility import PreconditionError, UserInputError
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "PreconditionError",
    "ResidueTable",
    "SearchOrchestrator",
    "SearchPoint",
    "SpaceEnumerator",
    "UserInputError",
    "__version__",
    "gcd",
    "modpow",
    "parse_moduli",
    "prime_moduli",
    "workspace_dir",
]
