# -----------------------------------------------------------------------------
# dimlang command line
#   dimlang run [SCRIPT] [--json] [--trace]   run a script, print the final store
#   dimlang units [--json]                    list the unit catalog
# Exit status: 0 on success, 1 on any language or I/O error (diagnostic on
# stderr). Settings come from the environment / .env, see config.py.
# -----------------------------------------------------------------------------

from __future__ import annotations
import argparse
import json
import sys
from typing import List, Optional

from . import __version__
from .catalog import default_catalog, use_catalog
from .config import load_settings
from .errors import CatalogError
from .formatters import binding_lines
from .interpreter import run_program
from .loader import read_source
from .tracer import Tracer
from .tracing import save_trace


def echo(msg: str): print(f"[dimlang] {msg}", file=sys.stderr, flush=True)


def _cmd_run(args: argparse.Namespace) -> int:
    settings = load_settings()
    if settings.catalog_path:
        use_catalog(settings.catalog_path)
    path = args.script or settings.script
    try:
        source = read_source(path)
    except OSError as e:
        echo(f"cannot read {path}: {e}")
        return 1

    result = run_program(source, tracer=Tracer())
    if args.trace or settings.trace:
        fpath = save_trace(settings.trace_dir, {"script": path, "version": __version__}, result)
        echo(f"trace written to {fpath}")

    if args.json:
        print(result.model_dump_json(indent=2, exclude={"trace"}))
    else:
        for line in binding_lines(result.bindings):
            print(line)

    if not result.ok:
        echo(f"{result.error_kind}: {result.error}")
        return 1
    return 0


def _cmd_units(args: argparse.Namespace) -> int:
    settings = load_settings()
    if settings.catalog_path:
        use_catalog(settings.catalog_path)
    rows = default_catalog().list_units()
    if args.json:
        print(json.dumps(rows, indent=2))
        return 0
    for r in rows:
        print(f"{r['unit']:<10} {r['symbol']:<4} {r['dimension']:<14} "
              f"x{r['rate']:.6g} {r['base']}   aliases: {', '.join(r['aliases'])}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dimlang", description="Run unit-aware arithmetic scripts.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="run a script and print the final variable store")
    run.add_argument("script", nargs="?", help="script path (default: $DIMLANG_SCRIPT or ./test.cr)")
    run.add_argument("--json", action="store_true", help="print the result as JSON")
    run.add_argument("--trace", action="store_true", help="write a JSON trace file")
    run.set_defaults(func=_cmd_run)

    units = sub.add_parser("units", help="list known units and aliases")
    units.add_argument("--json", action="store_true")
    units.set_defaults(func=_cmd_units)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except CatalogError as e:
        echo(f"bad unit catalog: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
