#!/usr/bin/env python3
"""intensity_segments/main.py — CLI entry-point.

Usage examples
--------------
    # Print the two sample walkthroughs
    python -m intensity_segments demo

    # Execute an operation script (``-`` reads stdin)
    python -m intensity_segments run ops.txt
    echo "add 10 30 1; show" | python -m intensity_segments run -

    # Continue from a saved state and write the result back
    python -m intensity_segments run ops.txt --load state.json --save state.json

    # Point queries against a saved state
    python -m intensity_segments query 15 25 --state state.json

    # Stress benchmark
    python -m intensity_segments bench --iterations 20 --json

Exit codes
----------
    0   Success.
    1   Invalid input: script syntax error or rejected operation.
    2   Infrastructure failure (missing file, unreadable snapshot, etc.).

The module doubles as ``python -m intensity_segments`` via the companion
``intensity_segments/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from . import __version__
from .config import BenchmarkConfig
from .errors import IntensityError
from .perf import run_benchmark
from .script import ScriptRunner, format_number, parse_number, parse_script
from .segments import IntensityMap

_log = logging.getLogger("intensity_segments")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2

# Walkthroughs printed by ``demo`` -------------------------------------------

DEMO_SCRIPTS = {
    "sample sequence 1": textwrap.dedent("""\
        show
        add 10 30 1
        show
        add 20 40 1
        show
        add 10 40 -2
        show
    """),
    "sample sequence 2": textwrap.dedent("""\
        show
        add 10 30 1
        show
        add 20 40 1
        show
        add 10 40 -1
        show
        add 10 40 -1
        show
    """),
    "assign": textwrap.dedent("""\
        add 10 30 1
        add 20 40 1
        show
        set 15 35 5
        show
        query 12 20 37
    """),
}


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``intensity_segments`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("intensity_segments")
    root.setLevel(level)
    root.handlers[:] = [handler]


def _resolve_path(raw: str, label: str = "file") -> Path:
    """Resolve *raw* to an absolute ``Path``, raising on missing files."""
    p = Path(raw).expanduser().resolve()
    if not p.exists():
        _log.error("%s not found: %s", label, p)
        raise SystemExit(EXIT_INFRA)
    return p


def _read_source(raw: str) -> str:
    if raw == "-":
        return sys.stdin.read()
    return _resolve_path(raw, "script").read_text(encoding="utf-8")


def _load_state(raw: str) -> IntensityMap:
    """Load a JSON ``[[position, value], ...]`` snapshot."""
    path = _resolve_path(raw, "state file")
    try:
        pairs = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        _log.error("Failed to parse state file %s: %s", path, exc)
        raise SystemExit(EXIT_INFRA)
    if not isinstance(pairs, list):
        _log.error("State file %s must contain a JSON array", path)
        raise SystemExit(EXIT_INFRA)
    try:
        return IntensityMap.from_pairs(pairs)
    except IntensityError as exc:
        _log.error("Invalid state file %s: %s", path, exc)
        raise SystemExit(EXIT_INFRA)


def _save_state(imap: IntensityMap, raw: str) -> None:
    p = Path(raw).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(imap.serialize()) + "\n", encoding="utf-8")
    _log.info("Wrote %d boundaries to %s", len(imap), p)


def _report(exc: IntensityError, fmt: str, err: TextIO) -> None:
    if fmt == "json":
        err.write(json.dumps(exc.to_json()) + "\n")
    else:
        err.write(exc.to_gcc_format() + "\n")


# ===========================================================================
# Subcommands
# ===========================================================================

def cmd_demo(args: argparse.Namespace) -> int:
    """Print each walkthrough with the state after every ``show``."""
    out = sys.stdout
    for title, text in DEMO_SCRIPTS.items():
        out.write(f"== {title}\n")
        runner = ScriptRunner()
        for command in parse_script(text, source=title):
            for line in runner.run([command]):
                out.write(f"{str(command):<16} {line}\n")
            if command.op in ("accumulate", "assign", "reset"):
                out.write(f"{str(command):<16} -> {runner.map.to_json()}\n")
        out.write("\n")
    return EXIT_OK


def cmd_run(args: argparse.Namespace) -> int:
    """Execute an operation script."""
    text = _read_source(args.script)
    imap = _load_state(args.load) if args.load else IntensityMap()
    source = "<stdin>" if args.script == "-" else args.script

    runner = ScriptRunner(imap)
    output: List[str] = []
    status = EXIT_OK
    try:
        for line in runner.iter_run(parse_script(text, source)):
            output.append(line)
    except IntensityError as exc:
        _report(exc, args.format, sys.stderr)
        status = EXIT_ERROR

    # Output produced before a failure is still printed.
    if args.format == "json":
        sys.stdout.write(json.dumps({"output": output, "state": imap.serialize()}) + "\n")
    else:
        for line in output:
            sys.stdout.write(line + "\n")

    if args.save:
        if status == EXIT_OK:
            _save_state(imap, args.save)
        else:
            _log.warning("Script failed; not writing %s", args.save)
    return status


def cmd_query(args: argparse.Namespace) -> int:
    """Point queries against a saved snapshot."""
    imap = _load_state(args.state) if args.state else IntensityMap()
    try:
        results = [(pos, imap.value_at(pos)) for pos in args.positions]
    except IntensityError as exc:
        _report(exc, args.format, sys.stderr)
        return EXIT_ERROR

    if args.format == "json":
        sys.stdout.write(json.dumps([[pos, value] for pos, value in results]) + "\n")
    else:
        for pos, value in results:
            sys.stdout.write(f"{format_number(pos)}: {format_number(value)}\n")
    return EXIT_OK


def cmd_bench(args: argparse.Namespace) -> int:
    """Run the stress workload and report timings."""
    config = BenchmarkConfig.from_env()
    for name in ("iterations", "add_operations", "set_operations", "span"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)

    problems = config.validate()
    if problems:
        for problem in problems:
            _log.error("Invalid benchmark setting: %s", problem)
        return EXIT_ERROR

    result = run_benchmark(config)
    if args.json:
        sys.stdout.write(json.dumps(result.to_json()) + "\n")
    else:
        sys.stdout.write(
            f"operations:   {result.operations}\n"
            f"total time:   {result.exec_time:.3f} ms\n"
            f"average time: {result.average_time:.3f} ms\n"
            f"peak memory:  {result.mem_usage} bytes\n"
        )
    if config.max_exec_ms is not None and result.exec_time > config.max_exec_ms:
        _log.warning(
            "Benchmark exceeded budget: %.1f ms > %.1f ms",
            result.exec_time, config.max_exec_ms,
        )
    return EXIT_OK


# ===========================================================================
# Argument parser construction
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct the full CLI argument parser with subcommands."""

    parser = argparse.ArgumentParser(
        prog="intensity-segments",
        description=(
            "Piecewise-constant intensity maps over the number line.\n\n"
            "Accumulate or assign values over half-open ranges and query\n"
            "the resulting step function."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              intensity-segments demo
              intensity-segments run ops.txt --save state.json
              intensity-segments query 15 25 --state state.json
              intensity-segments bench --iterations 20
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    def _add_format_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "-f", "--format",
            choices=["text", "json"],
            default="text",
            help="Output format (default: text).",
        )

    # --- demo --------------------------------------------------------------
    p_demo = subparsers.add_parser(
        "demo",
        help="Print the sample walkthroughs.",
    )
    p_demo.set_defaults(func=cmd_demo)

    # --- run ---------------------------------------------------------------
    p_run = subparsers.add_parser(
        "run",
        help="Execute an operation script.",
        description="Execute add/set/query/show statements against a map.",
    )
    p_run.add_argument(
        "script",
        metavar="SCRIPT",
        help='Script file ("-" for stdin).',
    )
    p_run.add_argument(
        "--load",
        metavar="FILE",
        default=None,
        help="Start from a JSON state snapshot.",
    )
    p_run.add_argument(
        "--save",
        metavar="FILE",
        default=None,
        help="Write the final state as a JSON snapshot.",
    )
    _add_format_arg(p_run)
    p_run.set_defaults(func=cmd_run)

    # --- query -------------------------------------------------------------
    p_query = subparsers.add_parser(
        "query",
        help="Query values from a JSON state snapshot.",
    )
    p_query.add_argument(
        "positions",
        nargs="+",
        type=parse_number,
        metavar="POS",
        help="Positions to evaluate.",
    )
    p_query.add_argument(
        "-s", "--state",
        metavar="FILE",
        default=None,
        help="JSON state snapshot (default: empty map).",
    )
    _add_format_arg(p_query)
    p_query.set_defaults(func=cmd_query)

    # --- bench -------------------------------------------------------------
    p_bench = subparsers.add_parser(
        "bench",
        help="Run the accumulate/assign stress benchmark.",
        description=(
            "Defaults come from INTENSITY_BENCH_* environment variables, "
            "then from the command line."
        ),
    )
    p_bench.add_argument("--iterations", type=int, default=None, metavar="N")
    p_bench.add_argument("--add-operations", type=int, default=None, metavar="N")
    p_bench.add_argument("--set-operations", type=int, default=None, metavar="N")
    p_bench.add_argument("--span", type=int, default=None, metavar="N")
    p_bench.add_argument("--json", action="store_true", help="Emit JSON.")
    p_bench.set_defaults(func=cmd_bench)

    return parser


# ===========================================================================
# Main entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
