"""Command frontend: ``iphone2sbr --import-file calls.csv --collection-file archive.json``."""

from __future__ import annotations

import argparse
import os
import sys
import time
from collections.abc import Mapping, Sequence
from dataclasses import replace

from imazingtosbr.api_objects.types import ConversionSummary
from imazingtosbr.application import Application
from imazingtosbr.config import AppConfig, apply_env, dump_default_config, load_config
from imazingtosbr.constants import COMMAND_NAME, DEFAULT_VERBOSITY
from imazingtosbr.errors import InputNotFoundError
from imazingtosbr.models import utc_now
from imazingtosbr.utils.display.terminal import print_run_summary, print_run_summary_json
from imazingtosbr.utils.logging import get_logger, level_from_verbosity, setup_logging

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=COMMAND_NAME,
        description="Append an iMazing call or message CSV export to a JSON collection file",
    )
    parser.add_argument("--import-file", help="Path to the file to import")
    parser.add_argument("--collection-file", help="Path to the collection file to append to")
    parser.add_argument("--tag", help="Tag to apply to all imported records")
    parser.add_argument(
        "--log-level",
        type=int,
        choices=(0, 1, 2),
        help=f"Log level (0=warn, 1=info, 2=debug; default {DEFAULT_VERBOSITY})",
    )
    parser.add_argument("--config", default=None, help="Optional YAML config file")
    parser.add_argument("--json", action="store_true", help="Print the run summary as JSON")
    parser.add_argument("--dump-config", metavar="PATH", help="Write a default config file and exit")
    return parser


def resolve_config(args: argparse.Namespace, environ: Mapping[str, str]) -> AppConfig:
    """CLI flags win over environment, which wins over the config file."""
    config = apply_env(load_config(args.config), environ)
    updates = {}
    if args.import_file is not None:
        updates["import_file"] = args.import_file
    if args.collection_file is not None:
        updates["collection_file"] = args.collection_file
    if args.tag is not None:
        updates["tag"] = args.tag
    if args.log_level is not None:
        updates["log_level"] = args.log_level
    if args.json:
        updates["json_output"] = True
    return replace(config, **updates) if updates else config


def _report(summary: ConversionSummary, config: AppConfig) -> None:
    if config.json_output:
        print_run_summary_json(summary)
    else:
        print_run_summary(summary)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.dump_config:
        dump_default_config(args.dump_config)
        print(f"Wrote default config to {args.dump_config}")
        return 0

    try:
        config = resolve_config(args, os.environ)
    except ValueError as exc:
        parser.error(str(exc))
    if not config.import_file:
        parser.error("--import-file is required")
    if not config.collection_file:
        parser.error("--collection-file is required")

    setup_logging(level_from_verbosity(config.log_level))
    started = time.perf_counter()
    logger.info("starting application")
    if config.log_level >= 2:
        logger.info(
            "input import-file=%s collection-file=%s tag=%s args=%s",
            config.import_file,
            config.collection_file,
            config.tag,
            list(argv) if argv is not None else sys.argv[1:],
        )

    try:
        app = Application(
            config.import_file,
            collection_file=config.collection_file,
            tag=config.tag,
            logger=logger,
        )
    except InputNotFoundError as exc:
        logger.error("error running application: %s", exc)
        now = utc_now()
        _report(
            ConversionSummary(
                import_file=config.import_file,
                collection_file=config.collection_file,
                started_at=now,
                ended_at=now,
                tag=config.tag,
                error_message=str(exc),
            ),
            config,
        )
        return 1

    summary = app.run()
    _report(summary, config)
    duration_ms = int((time.perf_counter() - started) * 1000)
    if not summary.ok:
        logger.error("error running application (duration_ms=%d)", duration_ms)
        return 1
    logger.info("application stopped (duration_ms=%d)", duration_ms)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
