# src/bealsearch/cli.py

"""
Beal search - modular residue sieve for a^x + b^y = c^z candidates

Description:
    Enumerates (a, x, b, y) with x, y > 2, b <= a and gcd(a, b) = 1, and keeps
    only the points whose sum a^x + b^y is a power residue c^z modulo every
    configured modulus. Survivors are candidates, not counterexamples: no
    exact verification is attempted.

usage: see bealsearch -h
"""

from __future__ import annotations

import argparse
import faulthandler
import io
import os
import sys
import threading
import time
import traceback
from importlib.resources import files as pkg_files

from colorama import Fore, Style
from colorama import init as colorama_init

from bealsearch import __version__ as _ver
from bealsearch import config as CONFIG
from bealsearch.fmt import format_count, format_duration, format_point
from bealsearch.moduli import describe_moduli, parse_moduli, prime_moduli
from bealsearch.orchestrator import SearchOrchestrator
from bealsearch.output_manager import OutputManager
from bealsearch.progress import Progress
from bealsearch.runtime import APPLY, CFG, ensure_runtime_deps
from bealsearch.runtime import current as _rt_current
from bealsearch.utility import (
    UserInputError,
    debug_line,
    flatten_dotted,
    parse_a_range,
    typename,
    validate_output_setting,
)
from bealsearch.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

COMMANDS = ("init", "where", "profiles", "active")


def _install_loud_error_handlers(debug: bool) -> None:
    """With --debug, print full tracebacks for anything uncaught (main or worker threads)."""
    if not debug:
        return
    try:
        faulthandler.enable()
    except (AttributeError, ValueError, io.UnsupportedOperation):
        pass  # stderr has no file descriptor

    def _report(title: str, exc_type, exc, tb) -> None:
        print(f"\n[{title}]", file=sys.stderr)
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()

    sys.excepthook = lambda t, e, tb: _report("UNCAUGHT EXCEPTION", t, e, tb)
    threading.excepthook = lambda a: _report("UNCAUGHT THREAD EXCEPTION", a.exc_type, a.exc_value, a.exc_traceback)


def _print_user_error(msg: str) -> None:
    if not msg.startswith(("Invalid input:", "Error:")):
        msg = f"{Fore.RED}Error:{Style.RESET_ALL} {msg}"
    print(msg, file=sys.stderr)


def _looks_like_range(s: str) -> bool:
    lo, _, hi = s.partition("-")
    return lo.strip().isdigit() and (not hi or hi.strip().isdigit())


def _resolve_inputs(items: list[str]) -> tuple[str | None, tuple[int, int] | None]:
    """
    Split the positionals into (profile or command, a range).

    "init ..." and the other commands pass through untouched. Otherwise a
    lone item is a range if it looks like one ("7", "5-40") and a profile
    name if not; two items are profile then range.
    """
    if not items:
        return None, None
    if items[0] in COMMANDS:
        return items[0], None
    if len(items) > 2:  # noqa: PLR2004
        raise UserInputError(f"too many arguments: {' '.join(items)}")

    if len(items) == 1:
        s = items[0]
        return (None, parse_a_range(s)) if _looks_like_range(s) else (s, None)

    name, rng = items
    if _looks_like_range(name):
        raise UserInputError(f"expected a profile name before the range, got '{name}'.")
    return name, parse_a_range(rng)


_EPILOG = """\
commands:
  init              create the workspace and copy the sample profiles into it
  init overwrite    replace workspace profiles with the packaged ones (needs BEALSEARCH_DEV=1)
  profiles          list profiles and their descriptions
  active            show the profile used when none is named
  where             show workspace and package locations

examples:
  bealsearch 10-40 --moduli 65521,65519
  bealsearch quick 5
  bealsearch --primes 6 --max-exp 12 1-60 --output results/
"""


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bealsearch",
        description="Sieve a^x + b^y = c^z candidates through power residue tables.",
        usage=(
            "bealsearch [[profile] [A | A-B]] [--max-base N] [--max-exp N]\n"
            "                  [--moduli P,Q,...] [--primes K] [--output OUTPUT] [--quiet] [--debug]\n"
            "       bealsearch init | where | profiles | active\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    p.add_argument("items", nargs="*", metavar="[[profile] A|A-B]",
                   help="optional profile name followed by one 'a' value or an inclusive range")
    p.add_argument("--max-base", type=int, default=None, help="largest base a, b, c (overrides SEARCH.MAX_BASE)")
    p.add_argument("--max-exp", type=int, default=None, help="largest exponent x, y, z (overrides SEARCH.MAX_EXP)")
    p.add_argument("--moduli", default=None, help="comma separated moduli (overrides SEARCH.MODULI)")
    p.add_argument("--primes", type=int, default=None,
                   help="use the K largest primes below SEARCH.PRIME_CEILING as moduli")
    p.add_argument("--output", default=None,
                   help="results file, or a directory ending in '/' for one file per run")
    p.add_argument("--quiet", action="store_true", help="no screen output or progress bar")
    p.add_argument("--debug", action="store_true", help="profile dump, table timings and full tracebacks on stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Console entry point. Exit codes: 0 ok, 1 internal error, 2 bad input, 130 interrupted."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("\nAborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if "--debug" in (sys.argv[1:] if argv is None else argv):
            raise
        print(f"Unexpected error: {typename(e)}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _cmd_init(items: list[str]) -> int:
    overwrite = items[1:] == ["overwrite"]
    if overwrite and os.environ.get("BEALSEARCH_DEV") != "1":
        print("Refusing to overwrite: set BEALSEARCH_DEV=1 to enable developer overwrite.")
        return 2
    root, copied = seed_workspace(overwrite=overwrite)
    note = " (overwrote existing files)" if overwrite else ""
    print(f"Workspace ready at: {root}{note}")
    print(f"Copied -> profiles: {copied['profiles']}")
    return 0


def _run_command(cmd: str, items: list[str]) -> int:
    if cmd == "init":
        return _cmd_init(items)
    if cmd == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('bealsearch')}")
    elif cmd == "profiles":
        for name, desc in CONFIG.list_profiles_with_descriptions():
            print(f"{Fore.GREEN}{name:<16}{Style.RESET_ALL} {desc}")
    else:
        print(f"Active profile: {CONFIG.read_current_profile() or 'default'}")
    return 0


def _apply_profile(explicit: str | None, debug: bool) -> str:
    """Choose explicit → last used → default, load it into the runtime and return its name."""
    if explicit:
        if not CONFIG.has_profile(explicit):
            avail = ", ".join(CONFIG.list_all_profiles())
            raise UserInputError(f"Unknown profile: '{explicit}'. Available profiles: {avail}")
        name = explicit
    else:
        last = CONFIG.read_current_profile()
        name = last if last and CONFIG.has_profile(last) else "default"

    if CONFIG.has_profile(name):
        selected = CONFIG.load_settings(name)
    else:
        selected = CONFIG.default_settings()
    APPLY(selected)
    if debug:
        _rt_current().debug = True

    if explicit:
        CONFIG.write_current_profile(explicit)

    if _rt_current().debug:
        debug_line(f"active profile: {selected.name}")
        if selected._source:
            debug_line(f"profile file: {selected._source}")
        flat = flatten_dotted(selected.as_dict())
        for k in sorted(flat, key=str.lower):
            v = CFG(k, None)
            debug_line(f"  {k:.<40} {v!r} ({typename(v)})")
    return selected.name


def _select_moduli(args) -> list[int]:
    if args.moduli:
        return parse_moduli(args.moduli)
    if args.primes is None:
        configured = list(CFG("SEARCH.MODULI", []) or [])
        if configured:
            return parse_moduli(" ".join(str(m) for m in configured))
    count = args.primes if args.primes is not None else int(CFG("SEARCH.PRIME_COUNT", 4))
    return prime_moduli(count, int(CFG("SEARCH.PRIME_CEILING", 1 << 32)))


def _select_bounds(args) -> tuple[int, int]:
    max_base = args.max_base if args.max_base is not None else int(CFG("SEARCH.MAX_BASE", 100))
    max_exp = args.max_exp if args.max_exp is not None else int(CFG("SEARCH.MAX_EXP", 10))
    if max_base < 1:
        raise UserInputError(f"max base must be >= 1, got {max_base}.")
    if max_exp < 3:  # noqa: PLR2004
        raise UserInputError(f"max exponent must be >= 3, got {max_exp}.")
    return max_base, max_exp


def _select_range(a_range: tuple[int, int] | None, max_base: int) -> tuple[int, int]:
    if a_range is None:
        a_range = (int(CFG("SEARCH.A_FROM", 1)), int(CFG("SEARCH.A_TO", max_base)))
    lo, hi = a_range
    if lo < 1 or hi < lo:
        raise UserInputError(f"invalid 'a' range {lo}-{hi}.")
    if hi > max_base:
        raise UserInputError(f"'a' range {lo}-{hi} exceeds max base {max_base}.")
    return lo, hi


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    if not ensure_runtime_deps(strict=True):
        return 1

    ensure_workspace_seeded()

    name, a_range = _resolve_inputs(args.items)
    if name in COMMANDS:
        return _run_command(name, args.items)

    _apply_profile(name, args.debug)

    max_base, max_exp = _select_bounds(args)
    moduli = _select_moduli(args)
    lo, hi = _select_range(a_range, max_base)

    try:
        target = validate_output_setting(args.output)
    except ValueError as e:
        raise UserInputError(f"--output: {e}") from None
    if target is None:
        try:
            target = validate_output_setting(CFG("OUTPUT.OUTPUT_FILE", "") or None)
        except ValueError as e:
            raise UserInputError(f"OUTPUT.OUTPUT_FILE: {e}") from None

    label = f"a={lo}-{hi}_b={max_base}_e={max_exp}"
    t0 = time.perf_counter()
    orch = SearchOrchestrator(max_base, max_exp, moduli,
                              dense_limit=int(CFG("SIEVE.DENSE_LIMIT", 1 << 24)))
    t_build = time.perf_counter() - t0

    with OutputManager(output_file=target, quiet=args.quiet, label=label) as om:
        om.write(f"{Fore.YELLOW}{Style.BRIGHT}Beal search v{_ver}{Style.RESET_ALL}")
        om.write(f"max base {max_base}, max exponent {max_exp}, a in [{lo}, {hi}]")
        om.write(f"moduli: {describe_moduli(list(orch.moduli))}")
        om.write(f"tables built in {format_duration(t_build)}")
        om.write()

        bar = Progress(hi - lo + 1, enabled=rt.progress and not args.quiet and not rt.debug)
        t1 = time.perf_counter()
        try:
            results = orch.search_many(range(lo, hi + 1), progress=bar.update)
        finally:
            bar.done()
        elapsed = time.perf_counter() - t1

        enumerated = 0
        found = 0
        for a, points in results.items():
            enumerated += len(orch.enumerator(a))
            found += len(points)
            if not points:
                continue
            om.write(f"{Fore.GREEN}a={a}{Style.RESET_ALL}: {len(points)} candidate(s)")
            for pt in points:
                om.write(f"  {format_point(pt)}")

        om.write()
        om.write(
            f"{len(results)} slice(s), {format_count(enumerated)} point(s) enumerated, "
            f"{Style.BRIGHT}{format_count(found)}{Style.RESET_ALL} candidate(s) in {format_duration(elapsed)}"
        )
        if om.path and not args.quiet:
            om.write_screen(f"Results written to {om.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
