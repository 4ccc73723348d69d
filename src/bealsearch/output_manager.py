# src/bealsearch/output_manager.py
from __future__ import annotations

import re
from pathlib import Path

from bealsearch.fmt import strip_ansi
from bealsearch.workspace import workspace_dir

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9._=-]+")


def resolve_output_path(path: str, workspace_root: str | Path) -> Path:
    """'~' is expanded; relative paths land under the workspace root."""
    if not path:
        raise ValueError("Output path is empty")
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = Path(workspace_root) / p
    return p.resolve()


def _next_available_path(path: Path) -> Path:
    """`path` itself if free, else the first free name_2.ext, name_3.ext, ..."""
    n = 1
    candidate = path
    while candidate.exists():
        n += 1
        candidate = path.with_name(f"{path.stem}_{n}{path.suffix}")
    return candidate


def safe_stem(label: str) -> str:
    """Filesystem-safe stem for a run label such as 'a=1-40'."""
    return _UNSAFE_RE.sub("_", str(label)).strip("._-=") or "run"


class OutputManager:
    """
    Screen output for a search run, mirrored to a results file when asked.

    output_file:
        ""                => screen only
        "dir/" or "."     => one new file per run, dir/<label>.txt (never overwritten)
        "path/to/f.txt"   => every run appended to the same file

    Text written to files has ANSI colours stripped. `quiet` silences the
    screen but not the file.
    """

    def __init__(self, output_file: str | None = None, quiet: bool = False, label: str | None = None):
        self.quiet = quiet
        self.label = label
        self.path: Path | None = None
        self._per_run = False
        self._lines: list[str] = []
        self._warned = False
        self._closed = False

        target = output_file or ""
        if not target:
            return

        root = workspace_dir()
        if target in (".", "./") or target.endswith("/"):
            if label is None:
                raise ValueError("A label must be provided when outputting to a directory.")
            folder = resolve_output_path(target, root)
            folder.mkdir(parents=True, exist_ok=True)
            self.path = _next_available_path(folder / f"{safe_stem(label)}.txt")
            self._per_run = True
        else:
            self.path = resolve_output_path(target, root)
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def _save(self, text: str, mode: str) -> None:
        try:
            with open(self.path, mode, encoding="utf-8") as fh:
                fh.write(text)
        except OSError as e:
            if not (self._warned or self.quiet):
                self._warned = True
                self.write_screen(f"[WARNING] Could not write output file: {self.path} ({type(e).__name__}: {e})")

    def write(self, *args, sep: str = " ", end: str = "\n") -> None:
        text = sep.join(str(a) for a in args) + end
        self._lines.append(text)
        if not self.quiet:
            print(text, end="")
        if self.path is not None and not self._per_run:
            self._save(strip_ansi(text), "a")

    def write_screen(self, *args, sep: str = " ", end: str = "\n", flush: bool = True) -> None:
        """Screen only; never reaches the results file."""
        if not self.quiet:
            print(*args, sep=sep, end=end, flush=flush)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.path is None or not self._lines:
            return
        if self._per_run:
            self._save(strip_ansi("".join(self._lines)), "w")
        else:
            self._save("\n", "a")  # blank line between appended runs

    def __enter__(self) -> OutputManager:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
