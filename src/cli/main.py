"""ndquery CLI entry points.
This module exposes lookup, filter, and watch commands over NDJSON sources.
It maps argparse commands onto data manager calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
import sys
import threading
from typing import Sequence

from core.config import (
    NdQueryConfig,
    parse_decode_policy,
    parse_memory_ceiling,
    parse_storage_mode,
)
from core.constants import IN_MEMORY_MODE, SUPPORTED_DECODE_POLICIES, SUPPORTED_STORAGE_MODES
from core.errors import NdQueryConfigError, NdQueryError
from core.logging_config import configure_log_output
from core.types import FilterCondition, Record
from ingest.reload_scheduler import ReloadOutcome, ReloadScheduler
from query.condition_loading import build_condition, load_conditions_file
from store.data_manager import DataManager


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="ndquery", description="Typed NDJSON filtering")
    parser.add_argument("--mode", choices=SUPPORTED_STORAGE_MODES, help="Override NDQUERY_MODE")
    parser.add_argument("--memory-ceiling", help="Override NDQUERY_MEMORY_CEILING in bytes")
    parser.add_argument(
        "--decode-policy",
        choices=SUPPORTED_DECODE_POLICIES,
        help="Override NDQUERY_DECODE_POLICY",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level for stderr events")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_get_command(subparsers)
    _add_filter_command(subparsers)
    _add_watch_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ndquery CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_log_output(args.log_level)
    try:
        config = _build_config(args)
        if args.command == "get":
            return _run_get_command(config, args)
        if args.command == "filter":
            return _run_filter_command(config, args)
        if args.command == "watch":
            return _run_watch_command(config, args)
    except NdQueryError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _add_get_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("get", help="Load a source and print one record by key")
    parser.add_argument("key", help="Key field value to look up")
    parser.add_argument("--source", help="NDJSON source path (NDQUERY_SOURCE_PATH)")
    parser.add_argument("--key-field", help="Key field name (NDQUERY_KEY_FIELD)")


def _add_filter_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("filter", help="Print records matching all conditions")
    parser.add_argument("--source", help="NDJSON source path (NDQUERY_SOURCE_PATH)")
    parser.add_argument("--key-field", help="Key field name (NDQUERY_KEY_FIELD)")
    _add_condition_arguments(parser)


def _add_watch_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("watch", help="Reload a source periodically")
    parser.add_argument("--source", help="NDJSON source path (NDQUERY_SOURCE_PATH)")
    parser.add_argument("--key-field", help="Key field name (NDQUERY_KEY_FIELD)")
    parser.add_argument("--interval", type=float, help="Seconds between reloads")
    parser.add_argument(
        "--iterations", type=int, help="Stop after this many reloads; run forever if omitted"
    )
    _add_condition_arguments(parser, help_suffix=" (split mode only)")


def _add_condition_arguments(parser: argparse.ArgumentParser, help_suffix: str = "") -> None:
    parser.add_argument(
        "--where",
        nargs=4,
        action="append",
        default=[],
        metavar=("FIELD", "TYPE", "OP", "VALUE"),
        help=f"Condition tuple; repeat to AND several conditions{help_suffix}",
    )
    parser.add_argument(
        "--conditions-file",
        help=f"JSON array of condition objects{help_suffix}",
    )


def _build_config(args: argparse.Namespace) -> NdQueryConfig:
    """Apply CLI overrides on top of environment configuration.

    Args:
        args: Parsed CLI args.

    Returns:
        Effective configuration.
    """
    config = NdQueryConfig.from_env()
    if args.mode:
        config = replace(config, mode=parse_storage_mode(args.mode))
    if args.memory_ceiling:
        config = replace(config, memory_ceiling=parse_memory_ceiling(args.memory_ceiling))
    if args.decode_policy:
        config = replace(config, decode_policy=parse_decode_policy(args.decode_policy))
    if getattr(args, "source", None):
        config = replace(config, source_path=Path(args.source).expanduser())
    if getattr(args, "key_field", None):
        config = replace(config, key_field=args.key_field)
    if getattr(args, "interval", None) is not None:
        if args.interval <= 0:
            raise NdQueryConfigError(f"Invalid --interval {args.interval}: must be positive.")
        config = replace(config, reload_interval=args.interval)
    return config


def _require_source(config: NdQueryConfig) -> Path:
    if config.source_path is None:
        raise NdQueryConfigError(
            "No source path configured. Pass --source or set NDQUERY_SOURCE_PATH."
        )
    return config.source_path


def _run_get_command(config: NdQueryConfig, args: argparse.Namespace) -> int:
    """Handle get command.

    Args:
        config: Effective configuration.
        args: Parsed CLI args.

    Returns:
        Exit code; 1 when the key is absent.
    """
    manager = DataManager.from_config(replace(config, mode=IN_MEMORY_MODE))
    manager.load(_require_source(config), config.key_field)
    record = manager.get_by_key(args.key)
    if record is None:
        print(f"key not found: {args.key}", file=sys.stderr)
        return 1
    _print_records([record])
    return 0


def _run_filter_command(config: NdQueryConfig, args: argparse.Namespace) -> int:
    """Handle filter command.

    Args:
        config: Effective configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    conditions = _collect_conditions(args)
    source_path = _require_source(config)
    manager = DataManager.from_config(config)
    if manager.mode == IN_MEMORY_MODE:
        manager.load(source_path, config.key_field)
        records = manager.filter(conditions)
    else:
        records = manager.load_and_filter(source_path, conditions)
    _print_records(records)
    return 0


def _run_watch_command(config: NdQueryConfig, args: argparse.Namespace) -> int:
    """Handle watch command.

    Args:
        config: Effective configuration.
        args: Parsed CLI args.

    Returns:
        Exit code of the last reload.
    """
    outcomes: list[ReloadOutcome] = []
    finished = threading.Event()

    def _record_outcome(outcome: ReloadOutcome) -> None:
        outcomes.append(outcome)
        print(_describe_outcome(outcome), flush=True)
        if args.iterations is not None and len(outcomes) >= args.iterations:
            finished.set()

    scheduler = ReloadScheduler(
        DataManager.from_config(config),
        _require_source(config),
        key_field=config.key_field,
        conditions=_collect_conditions(args),
        interval_seconds=config.reload_interval,
        on_result=_record_outcome,
    )
    scheduler.start()
    try:
        finished.wait()
    except KeyboardInterrupt:
        pass
    finally:
        scheduler.stop()
    return 0 if outcomes and outcomes[-1].succeeded else 2


def _collect_conditions(args: argparse.Namespace) -> list[FilterCondition]:
    conditions = [build_condition(*values) for values in args.where]
    if args.conditions_file:
        conditions.extend(load_conditions_file(Path(args.conditions_file).expanduser()))
    return conditions


def _describe_outcome(outcome: ReloadOutcome) -> str:
    if not outcome.succeeded:
        return f"failed\t{outcome.error}"
    if isinstance(outcome.result, list):
        return f"ok\tmatched={len(outcome.result)}"
    summary = outcome.result
    return (
        f"ok\trecords={summary.record_count}\t"
        f"dropped={summary.dropped_count}\t"
        f"bytes={summary.bytes_read}"
    )


def _print_records(records: Sequence[Record]) -> None:
    for record in records:
        print(json.dumps(record, ensure_ascii=False, sort_keys=True))
