"""
ScriptRunner — synchronous interpreter invocation with captured output.

The call blocks until the script exits.  No timeout is applied unless one is
configured; a hung script therefore freezes the caller, which is the
expected behaviour of the interactive loop.

Raises
──────
ProcessSpawnError    — interpreter missing, not executable, or other OS error
ProcessTimeoutError  — configured timeout elapsed (process is killed)
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

from run_py_cli.exceptions import ProcessSpawnError, ProcessTimeoutError
from run_py_cli.runner.models import RunResult
from run_py_cli.store.models import DEFAULT_SCRIPT

__all__ = ["ScriptRunner", "resolve_target"]

logger = logging.getLogger(__name__)


def resolve_target(target: str, cwd: Union[str, Path, None] = None) -> tuple[str, bool]:
    """
    Decide which script to execute for a registry *target*.

    Args:
        target: filename stored in the record.
        cwd:    directory the target is looked up in (default: process cwd).

    Returns:
        (name, substituted) — *target* itself when a file of that name
        exists in *cwd*, otherwise DEFAULT_SCRIPT with substituted=True.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    if target and (base / target).is_file():
        return target, False
    return DEFAULT_SCRIPT, True


class ScriptRunner:
    """Runs ``<interpreter> <script>`` and collects both output streams."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        """
        Args:
            timeout: Seconds before the process is killed. None waits forever.
        """
        self._timeout = timeout

    def run(
        self,
        interpreter: str,
        script_path: str,
        cwd: Union[str, Path, None] = None,
    ) -> RunResult:
        """
        Execute *script_path* with *interpreter* and wait for it to exit.

        Returns:
            RunResult; ``succeeded`` is True iff the exit status is 0.
        """
        cmd = [interpreter, script_path]
        logger.info("Running: %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                cwd=str(cwd) if cwd is not None else None,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise ProcessTimeoutError(
                f"{script_path} timed out after {self._timeout}s"
            ) from exc
        except FileNotFoundError as exc:
            raise ProcessSpawnError(f"Interpreter not found: {interpreter}") from exc
        except PermissionError as exc:
            raise ProcessSpawnError(f"Interpreter not executable: {interpreter}") from exc
        except OSError as exc:
            raise ProcessSpawnError(f"Cannot execute {interpreter}: {exc}") from exc

        result = RunResult(
            stdout=proc.stdout.decode("utf-8", errors="replace"),
            stderr=proc.stderr.decode("utf-8", errors="replace"),
            returncode=proc.returncode,
        )
        logger.info("Finished %s: %s", script_path, result)
        return result
