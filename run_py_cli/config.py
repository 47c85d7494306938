"""
Runtime configuration — defaults overridden by a ``KEY=VALUE`` settings file.

Recognised keys
───────────────
DATABASE_ADDR — path of the registry JSON file   (default ./data/db.json)
PYTHON_BIND   — interpreter used to run scripts  (default python3)

Values are parsed with python-dotenv: surrounding quotes are removed, an
unquoted `` #`` starts an inline comment, and ``${VAR}`` is kept literally
(no interpolation).  Unknown keys and lines without ``=`` are ignored.  A
missing settings file simply means "use the defaults".
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values

from run_py_cli.exceptions import ConfigError

__all__ = ["AppConfig", "read_env_file", "load_config", "DEFAULT_DATABASE_ADDR", "DEFAULT_PYTHON_BIND"]

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_ADDR = "./data/db.json"
DEFAULT_PYTHON_BIND   = "python3"
DEFAULT_TICK_RATE     = 0.25   # seconds


@dataclass(frozen=True)
class AppConfig:
    """
    Settings fixed at startup and read-only afterwards.

    database_addr — registry file path
    python_bind   — interpreter binary name or path
    tick_rate     — seconds between redraw ticks
    run_timeout   — seconds before a running script is killed (None = never)
    """
    database_addr: str             = DEFAULT_DATABASE_ADDR
    python_bind:   str             = DEFAULT_PYTHON_BIND
    tick_rate:     float           = DEFAULT_TICK_RATE
    run_timeout:   Optional[float] = None


def read_env_file(path: Union[str, Path]) -> dict[str, str]:
    """
    Parse *path* into a dict of settings.

    Keys without a value (lines lacking ``=``) are dropped.

    Raises:
        FileNotFoundError: *path* does not exist.
        ConfigError:       *path* exists but cannot be read.
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise FileNotFoundError(str(env_path))
    try:
        raw = dotenv_values(env_path, interpolate=False)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read settings file {env_path}: {exc}") from exc
    return {k.strip(): v.strip() for k, v in raw.items() if v is not None}


def load_config(
    env_path: Union[str, Path] = ".env",
    tick_rate: float = DEFAULT_TICK_RATE,
    run_timeout: Optional[float] = None,
) -> AppConfig:
    """Build the AppConfig from *env_path*, falling back to defaults."""
    try:
        values = read_env_file(env_path)
    except FileNotFoundError:
        logger.info("No settings file at %s, using defaults", env_path)
        values = {}

    database_addr = values.get("DATABASE_ADDR") or DEFAULT_DATABASE_ADDR
    python_bind   = values.get("PYTHON_BIND") or DEFAULT_PYTHON_BIND
    logger.info("DATABASE_ADDR=%s PYTHON_BIND=%s", database_addr, python_bind)

    return AppConfig(
        database_addr=database_addr,
        python_bind=python_bind,
        tick_rate=tick_rate,
        run_timeout=run_timeout,
    )
