"""
Project-wide custom exception hierarchy.
All modules raise subclasses of RunPyCliError — never bare Exception.
"""

__all__ = [
    "RunPyCliError",
    "ConfigError",
    "StoreError",
    "StoreIoError",
    "StoreNotFoundError",
    "StoreParseError",
    "RunnerError",
    "ProcessSpawnError",
    "ProcessTimeoutError",
    "TerminalError",
]


class RunPyCliError(Exception):
    """Root exception for all run-py-cli errors."""


# ── Config ────────────────────────────────────────────────────────────────────

class ConfigError(RunPyCliError):
    """Raised when the settings file exists but cannot be read."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(RunPyCliError):
    """Base class for registry file errors."""


class StoreIoError(StoreError):
    """Raised when the registry file cannot be read or written."""


class StoreNotFoundError(StoreIoError):
    """Raised when the registry file does not exist."""


class StoreParseError(StoreError):
    """Raised when the registry file is not a valid list of script records."""


# ── Runner ────────────────────────────────────────────────────────────────────

class RunnerError(RunPyCliError):
    """Base class for script execution errors."""


class ProcessSpawnError(RunnerError):
    """Raised when the interpreter binary cannot be started."""


class ProcessTimeoutError(RunnerError):
    """Raised when a script exceeds the configured run timeout."""


# ── Terminal ──────────────────────────────────────────────────────────────────

class TerminalError(RunPyCliError):
    """Raised when the terminal cannot enter raw mode or render a frame."""
