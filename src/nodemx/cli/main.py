"""
Command-line interface for nodemx.

Each subcommand initializes a TopologyContext from the configuration file
and prints one accessor's result: scalars on a single line, arrays space
separated, and row sets as tab separated lines.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import polars as pl

from ..cgroup import TopologyContext
from ..config import get_config, set_config_path
from ..functions import (
    cgroup_array_bigint,
    cgroup_array_text,
    cgroup_members,
    cgroup_mode,
    cgroup_path,
    cgroup_process_count,
    cgroup_scalar_bigint,
    cgroup_scalar_float8,
    cgroup_scalar_text,
    cgroup_setof_bigint,
    cgroup_setof_ksv,
    cgroup_setof_kv,
    cgroup_setof_nkv,
    cgroup_setof_text,
    envvar_bigint,
    envvar_text,
    kdapi_scalar_bigint,
    kdapi_setof_kv,
    take_snapshot,
)
from ..storage import create_storage
from ..validation import NodemxError, handle_cli_error

logger = logging.getLogger(__name__)

SCALAR_ACCESSORS = {
    "bigint": cgroup_scalar_bigint,
    "float8": cgroup_scalar_float8,
    "text": cgroup_scalar_text,
}
SETOF_ACCESSORS = {
    "bigint": cgroup_setof_bigint,
    "text": cgroup_setof_text,
    "kv": cgroup_setof_kv,
    "ksv": cgroup_setof_ksv,
    "nkv": cgroup_setof_nkv,
}
ARRAY_ACCESSORS = {
    "text": cgroup_array_text,
    "bigint": cgroup_array_bigint,
}
KDAPI_ACCESSORS = {
    "bigint": kdapi_scalar_bigint,
    "kv": kdapi_setof_kv,
}
ENVVAR_ACCESSORS = {
    "text": envvar_text,
    "bigint": envvar_bigint,
}


def _setup_logging(verbose: bool) -> None:
    # stderr keeps query output on stdout clean for pipes
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _print_value(value) -> None:
    if value is None:
        print("")
    elif isinstance(value, pl.DataFrame):
        for row in value.iter_rows():
            print("\t".join(str(item) for item in row))
    elif isinstance(value, list):
        print(" ".join(str(item) for item in value))
    else:
        print(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodemx",
        description="Inspect the cgroup topology and virtual files of this process.",
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml (default: conf/config.toml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("mode", help="Print the detected cgroup mode")
    sub.add_parser("paths", help="Print controller to directory mapping")

    members = sub.add_parser("members", help="Print pids in this cgroup")
    members.add_argument("--count", action="store_true", help="Print only the number of pids")

    scalar = sub.add_parser("scalar", help="Read a single-value controller file")
    scalar.add_argument("type", choices=sorted(SCALAR_ACCESSORS))
    scalar.add_argument("file", help="Controller file name, e.g. memory.max")

    setof = sub.add_parser("setof", help="Read a multi-line controller file")
    setof.add_argument("type", choices=sorted(SETOF_ACCESSORS))
    setof.add_argument("file", help="Controller file name, e.g. memory.stat")

    array = sub.add_parser("array", help="Read a space separated controller file")
    array.add_argument("type", choices=sorted(ARRAY_ACCESSORS))
    array.add_argument("file", help="Controller file name, e.g. cpu.max")

    kdapi = sub.add_parser("kdapi", help="Read a Kubernetes Downward API file")
    kdapi.add_argument("type", choices=sorted(KDAPI_ACCESSORS))
    kdapi.add_argument("file", help="Downward API file name, e.g. labels")

    envvar = sub.add_parser("envvar", help="Read an environment variable")
    envvar.add_argument("type", choices=sorted(ENVVAR_ACCESSORS))
    envvar.add_argument("name")

    snapshot = sub.add_parser("snapshot", help="Write topology, members and files to a directory")
    snapshot.add_argument("--output", type=Path, required=True, help="Output directory")
    snapshot.add_argument("--kv", action="append", default=[], metavar="FILE", help="Flat keyed file to include")
    snapshot.add_argument("--nkv", action="append", default=[], metavar="FILE", help="Nested keyed file to include")

    return parser


def run_command(args: argparse.Namespace, ctx: TopologyContext) -> None:
    """Dispatch one parsed command against an initialized context."""
    if args.command == "mode":
        _print_value(cgroup_mode(ctx))
    elif args.command == "paths":
        _print_value(cgroup_path(ctx))
    elif args.command == "members":
        _print_value(cgroup_process_count(ctx) if args.count else cgroup_members(ctx))
    elif args.command == "scalar":
        _print_value(SCALAR_ACCESSORS[args.type](ctx, args.file))
    elif args.command == "setof":
        _print_value(SETOF_ACCESSORS[args.type](ctx, args.file))
    elif args.command == "array":
        _print_value(ARRAY_ACCESSORS[args.type](ctx, args.file))
    elif args.command == "kdapi":
        _print_value(KDAPI_ACCESSORS[args.type](ctx, args.file))
    elif args.command == "envvar":
        _print_value(ENVVAR_ACCESSORS[args.type](args.name))
    elif args.command == "snapshot":
        storage_config = ctx.config.storage
        storage = create_storage(storage_config.format, storage_config.compression)
        written = take_snapshot(ctx, storage, args.output, kv_files=args.kv, nkv_files=args.nkv)
        for name, path in written.items():
            print(f"{name}\t{path}")


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for nodemx.

    Raises:
        SystemExit: On configuration errors or failed reads (exit code 1)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.config:
        set_config_path(args.config)

    try:
        config = get_config()
    except Exception as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            include_traceback=args.verbose,
            logger=logger,
        )

    try:
        if args.command == "envvar":
            # environment lookups never touch the cgroup file system
            ctx = TopologyContext(config)
        else:
            ctx = TopologyContext(config).initialize()
        run_command(args, ctx)
    except (NodemxError, OSError, ValueError) as e:
        handle_cli_error(
            error=e,
            context=f"{args.command} command",
            exit_code=1,
            include_traceback=args.verbose,
            logger=logger,
        )
