"""Data models for the runner module."""

from dataclasses import dataclass

__all__ = ["RunResult"]


@dataclass
class RunResult:
    """
    Captured outcome of one script execution.

    stdout     — decoded standard output
    stderr     — decoded standard error
    returncode — interpreter exit status
    """
    stdout:     str
    stderr:     str
    returncode: int

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    def summary(self) -> str:
        """Return the text shown in the log panel after a run."""
        parts = [self.stdout.rstrip("\n")] if self.stdout else []
        if self.stderr:
            parts.append("[stderr]\n" + self.stderr.rstrip("\n"))
        if not self.succeeded:
            parts.append(f"[exit status {self.returncode}]")
        return "\n".join(parts)

    def __str__(self) -> str:
        status = "OK" if self.succeeded else f"FAIL({self.returncode})"
        return f"[{status}] {len(self.stdout)} bytes stdout, {len(self.stderr)} bytes stderr"
