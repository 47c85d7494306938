"""
CLI entry point for run-py-cli.

Usage
─────
  # Start the interactive launcher with settings from ./.env
  python -m run_py_cli

  # Other settings file, faster redraw, kill scripts after 30 s
  python -m run_py_cli --env conf/launcher.env --tick-rate 100 --timeout 30

There are no subcommands: the process runs one interactive session and exits
with 0 when the operator presses q.  Startup failures (no tty, registry
cannot be created) exit with 1.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.live import Live

from run_py_cli.config import AppConfig, load_config
from run_py_cli.exceptions import ConfigError, StoreError, TerminalError
from run_py_cli.runner.script_runner import ScriptRunner
from run_py_cli.store.registry import RegistryStore
from run_py_cli.tui.app import Application
from run_py_cli.tui.events import EventSource
from run_py_cli.tui.render import build_frame
from run_py_cli.tui.terminal import TerminalSession

__all__ = ["build_parser", "setup_logging", "bootstrap_store", "run_session", "main"]

logger = logging.getLogger(__name__)

_LOG_NAME = "run-py-cli.log"


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="run-py-cli",
        description="Interactive terminal launcher for Python scripts",
    )
    parser.add_argument(
        "--env",
        default=".env",
        metavar="PATH",
        help="KEY=VALUE settings file with DATABASE_ADDR / PYTHON_BIND (default: .env)",
    )
    parser.add_argument(
        "--tick-rate",
        type=int,
        default=250,
        metavar="MS",
        help="Milliseconds between redraw ticks (default: 250)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Kill a running script after this many seconds (default: wait forever)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="PATH",
        help=f"Log file (default: {_LOG_NAME} next to the registry file)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )
    return parser


# ── Helpers ───────────────────────────────────────────────────────────────────


def setup_logging(log_file: Path, debug: bool = False) -> None:
    """Send all log records to *log_file*; the screen belongs to the UI."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        filename=str(log_file),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )


def bootstrap_store(config: AppConfig) -> RegistryStore:
    """
    Open the registry, creating and seeding it on first start.

    Raises:
        StoreError: the file cannot be created or is unreadable.
    """
    store = RegistryStore(config.database_addr)
    if store.seed_if_absent():
        logger.info("Created registry at %s", store.path)
    records = store.load()
    logger.info("Registry %s holds %d record(s)", store.path, len(records))
    return store


def run_session(app: Application, config: AppConfig, console: Console) -> int:
    """
    Drive *app* on the real terminal until the operator quits.

    Raises:
        TerminalError: raw mode cannot be entered.
    """
    with TerminalSession(console=console) as session:
        with Live(console=console, screen=True, auto_refresh=False, transient=True) as live:

            def render(frame) -> None:
                live.update(build_frame(frame), refresh=True)

            with EventSource(session.key_reader(), tick_rate=config.tick_rate) as source:
                return app.run(source.get, render)


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)
    if ns.tick_rate <= 0:
        parser.error("--tick-rate must be positive")

    try:
        config = load_config(
            ns.env,
            tick_rate=ns.tick_rate / 1000.0,
            run_timeout=ns.timeout,
        )
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    log_file = Path(ns.log_file) if ns.log_file else Path(config.database_addr).parent / _LOG_NAME
    try:
        setup_logging(log_file, debug=ns.debug)
    except OSError as exc:
        print(f"Error: cannot open log file {log_file}: {exc}", file=sys.stderr)
        return 1

    try:
        store = bootstrap_store(config)
    except StoreError as exc:
        logger.error("Registry bootstrap failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    app = Application(store, ScriptRunner(timeout=config.run_timeout), config)
    console = Console()
    try:
        return run_session(app, config, console)
    except TerminalError as exc:
        logger.error("Terminal failure: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
