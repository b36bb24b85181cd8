from __future__ import annotations

import argparse
import logging
import os
import subprocess
from dataclasses import replace

from dotload.bootstrap import load_dotenv
from dotload.config import Settings
from dotload.errors import DotenvError
from dotload.observability.logging import LoggingDiagnostics, setup_logging
from dotload.storage.filesystem import OSFileSystem

logger = logging.getLogger("dotload")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load .env files and optionally run a command")
    parser.add_argument(
        "--path",
        dest="paths",
        action="append",
        help="file or directory to load (repeatable, later overrides earlier)",
    )
    parser.add_argument("--root", help="filesystem root for relative paths")
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="emit log lines as JSON",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="command to run with the loaded environment",
    )
    return parser.parse_args(argv)


def _apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides: dict = {}
    if args.paths:
        overrides["paths"] = list(args.paths)
    if args.root:
        overrides["root"] = args.root
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    if args.json_logs is not None:
        overrides["json_logs"] = args.json_logs
    return replace(settings, **overrides)


def run(settings: Settings, command: list[str]) -> int:
    try:
        fs = OSFileSystem(settings.root)
    except OSError as exc:
        logger.error("invalid root | root=%s error=%s", settings.root, exc)
        return 1

    try:
        loaded = load_dotenv(
            settings.paths,
            fs=fs,
            logger=LoggingDiagnostics(logger),
        )
    except DotenvError as exc:
        logger.error("load failed | error=%s", exc)
        return 1

    logger.info("loaded | files=%d", len(loaded))

    # "--" перед командой argparse оставляет в REMAINDER
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        return 0

    logger.info("running command | argv=%s", command)
    try:
        completed = subprocess.run(command, env=dict(os.environ), check=False)
    except OSError as exc:
        logger.error("command failed to start | argv=%s error=%s", command, exc)
        return 127
    return completed.returncode


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = _apply_args(Settings.from_env(), args)

    setup_logging(
        level=settings.log_level,
        json_logs=settings.json_logs,
    )

    return run(settings, list(args.command))


if __name__ == "__main__":
    raise SystemExit(main())
