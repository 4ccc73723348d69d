# src/bealsearch/config.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:  # Python 3.10
    import tomli as toml  # type: ignore

from bealsearch.utility import UserInputError
from bealsearch.workspace import ensure_workspace_seeded, workspace_dir

# Fallbacks for keys a profile leaves out. default.toml spells all of them out.
DEFAULTS: dict[str, dict[str, Any]] = {
    "SEARCH": {
        "MAX_BASE": 100,
        "MAX_EXP": 10,
        "MODULI": [],
        "PRIME_COUNT": 4,
        "PRIME_CEILING": 1 << 32,
    },
    "SIEVE": {
        "DENSE_LIMIT": 1 << 24,
    },
    "OUTPUT": {
        "OUTPUT_FILE": "",
    },
    "BEHAVIOUR": {
        "DEBUG": False,
        "PROGRESS": True,
    },
}

_INT_KEYS = (
    ("SEARCH", "MAX_BASE"),
    ("SEARCH", "MAX_EXP"),
    ("SEARCH", "PRIME_COUNT"),
    ("SEARCH", "PRIME_CEILING"),
    ("SEARCH", "A_FROM"),
    ("SEARCH", "A_TO"),
    ("SIEVE", "DENSE_LIMIT"),
)


@dataclass
class Settings:
    """
    One loaded profile: the TOML tables minus [PROFILE], with DEFAULTS
    filled in. `name` and `description` come from [PROFILE] (falling back
    to the file stem and "(no description)").
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


# --- Parsing ---------------------------------------------------------------

def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        raise UserInputError(f"reading {path.name}: {e}.") from None
    except OSError as e:
        raise UserInputError(f"reading {path.name}: {e.strerror or e}.") from None


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _normalize(raw: dict[str, Any], stem: str) -> tuple[dict[str, Any], str, str]:
    """Split off [PROFILE], merge DEFAULTS and type-check the known keys."""
    meta = raw.get("PROFILE") or {}
    name = str(meta.get("name") or stem)
    description = " ".join(str(meta.get("description") or "").split()) or "(no description)"

    data: dict[str, Any] = {k: v for k, v in raw.items() if k != "PROFILE"}
    for section, fallback in DEFAULTS.items():
        table = data.get(section, {})
        if not isinstance(table, dict):
            raise UserInputError(f"{stem}.toml: [{section}] must be a table.")
        data[section] = {**fallback, **table}

    for section, key in _INT_KEYS:
        if key in data[section] and not _is_int(data[section][key]):
            raise UserInputError(f"{stem}.toml: {section}.{key} must be an integer, got {data[section][key]!r}.")
    mods = data["SEARCH"]["MODULI"]
    if not isinstance(mods, list) or not all(_is_int(m) for m in mods):
        raise UserInputError(f"{stem}.toml: SEARCH.MODULI must be a list of integers, got {mods!r}.")

    return data, name, description


# --- Public API ------------------------------------------------------------

def list_all_profiles() -> list[str]:
    """Profile names (file stems) in the workspace, sorted."""
    ensure_workspace_seeded()
    return sorted(p.stem for p in _profiles_dir().glob("*.toml"))


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """[(name, description), ...]; unreadable profiles are listed by file name."""
    items: list[tuple[str, str]] = []
    for p in _profiles_dir().glob("*.toml"):
        try:
            _, name, desc = _normalize(_load_toml(p), p.stem)
        except UserInputError as e:
            name, desc = p.stem, f"(unreadable: {e})"
        items.append((name, desc))
    return sorted(items, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _profile_path(name).exists()


def load_settings(name: str | None) -> Settings:
    """Load <workspace>/profiles/<name>.toml ('default' when name is empty)."""
    name = name or "default"
    path = _profile_path(name)
    if not path.exists():
        raise UserInputError(f"Profile '{name}' not found at {path}")
    data, resolved, description = _normalize(_load_toml(path), path.stem)
    return Settings(data=data, name=resolved, description=description, _source=path)


def default_settings() -> Settings:
    """DEFAULTS alone, for when no profile file is available."""
    data, _, _ = _normalize({}, "builtin")
    return Settings(data=data, name="builtin", description="built-in defaults")


# --- Last used profile -----------------------------------------------------

def _current_profile_path() -> Path:
    return _profiles_dir() / ".current"


def read_current_profile() -> str | None:
    try:
        s = _current_profile_path().read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return s.removesuffix(".toml") or None


def write_current_profile(name: str) -> None:
    _profiles_dir().mkdir(parents=True, exist_ok=True)
    _current_profile_path().write_text((name or "").strip().removesuffix(".toml"), encoding="utf-8")
