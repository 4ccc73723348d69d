# src/bealsearch/workspace.py
from __future__ import annotations

import os
import shutil
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

SUBDIRS = ("profiles", "results")


def workspace_dir() -> Path:
    """$BEALSEARCH_HOME, else ~/Documents/Bealsearch."""
    env = os.environ.get("BEALSEARCH_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / "Documents" / "Bealsearch").resolve()


def seed_workspace(*, overwrite: bool = False) -> tuple[Path, dict[str, int]]:
    """
    Create the workspace folders and copy the packaged *.toml profiles into
    <workspace>/profiles. Existing files are kept unless overwrite=True.

    Returns: (workspace_path, {"profiles": files_copied})
    """
    root = workspace_dir()
    for sub in SUBDIRS:
        (root / sub).mkdir(parents=True, exist_ok=True)

    copied = 0
    with as_file(pkg_files("bealsearch") / "profiles") as packaged:
        for src in sorted(Path(packaged).glob("*.toml")):
            dst = root / "profiles" / src.name
            if overwrite or not dst.exists():
                shutil.copy2(src, dst)
                copied += 1
    return root, {"profiles": copied}


def ensure_workspace_seeded() -> tuple[Path, bool, dict[str, int]]:
    root, copied = seed_workspace(overwrite=False)
    return root, any(copied.values()), copied
