"""
TerminalSession + TtyKeyReader — raw keyboard input on a POSIX tty.

Design
──────
• TerminalSession puts stdin into cbreak mode with signal keys off (Ctrl-C
  is read as a key) and restores the saved attributes and cursor visibility
  on exit, whatever way the session ends.
• TtyKeyReader waits on the tty with select() for at most the given timeout,
  then reads the key bytes from the descriptor and maps arrow escape
  sequences onto readchar key codes.
• termios/tty are imported lazily so the module stays importable on
  platforms without them; entering the session there raises TerminalError.
"""

import logging
import os
import select
import sys
from typing import Any, Optional, TextIO

import readchar
from rich.console import Console

from run_py_cli.exceptions import TerminalError

__all__ = ["TerminalSession", "TtyKeyReader"]

logger = logging.getLogger(__name__)

_IS_POSIX = os.name == "posix"


class TerminalSession:
    """
    Context manager owning raw-mode state of *stream*.

    Usage::

        with TerminalSession(console=console) as session:
            reader = session.key_reader()
            ...
    """

    def __init__(self, stream: Optional[TextIO] = None, console: Optional[Console] = None) -> None:
        self._stream = stream or sys.stdin
        self._console = console
        self._saved: Optional[list[Any]] = None
        self._fd: Optional[int] = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def __enter__(self) -> "TerminalSession":
        if not _IS_POSIX:
            raise TerminalError("Raw keyboard mode needs a POSIX terminal")
        if not self._stream.isatty():
            raise TerminalError("stdin is not a terminal; run run-py-cli interactively")

        import termios
        import tty

        try:
            self._fd = self._stream.fileno()
            self._saved = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
            # Ctrl-C reaches the reader as a key instead of raising SIGINT
            attrs = termios.tcgetattr(self._fd)
            attrs[3] &= ~termios.ISIG
            termios.tcsetattr(self._fd, termios.TCSANOW, attrs)
        except (OSError, termios.error) as exc:
            self._saved = None
            raise TerminalError(f"Cannot enter raw mode: {exc}") from exc
        logger.debug("Terminal switched to cbreak mode")
        return self

    def __exit__(self, *exc) -> None:
        self.restore()

    def restore(self) -> None:
        """Leave raw mode and show the cursor again; safe to call twice."""
        if self._saved is None:
            return
        import termios

        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        except (OSError, termios.error) as exc:
            logger.warning("Could not restore terminal attributes: %s", exc)
        finally:
            self._saved = None
        if self._console is not None:
            self._console.show_cursor(True)
        logger.debug("Terminal restored")

    def key_reader(self) -> "TtyKeyReader":
        if not self.active:
            raise TerminalError("Terminal session is not active")
        return TtyKeyReader(self._stream)


# Escape sequences (after ESC) mapped to readchar key codes; the SS3 forms
# are sent by terminals in application cursor mode
_ESCAPE_KEYS = {
    "[A": readchar.key.UP,
    "[B": readchar.key.DOWN,
    "[C": readchar.key.RIGHT,
    "[D": readchar.key.LEFT,
    "OA": readchar.key.UP,
    "OB": readchar.key.DOWN,
    "OC": readchar.key.RIGHT,
    "OD": readchar.key.LEFT,
}
# Seconds to wait for the rest of a multi-byte key
_SEQUENCE_WAIT = 0.01


class TtyKeyReader:
    """
    KeyReader for EventSource backed by a tty in cbreak mode.

    Bytes are read straight from the file descriptor, so a key reported
    ready by select() is never flushed or left in a Python-side buffer.
    """

    def __init__(self, stream: TextIO) -> None:
        self._fd = stream.fileno()

    def _ready(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd], [], [], max(timeout, 0.0))
        return bool(ready)

    def _read_char(self) -> str:
        """Read one UTF-8 character; continuation bytes follow the lead byte."""
        data = os.read(self._fd, 1)
        if data and data[0] >= 0xC0:
            needed = 1 if data[0] < 0xE0 else 2 if data[0] < 0xF0 else 3
            while needed and self._ready(_SEQUENCE_WAIT):
                data += os.read(self._fd, 1)
                needed -= 1
        return data.decode("utf-8", errors="ignore")

    def poll(self, timeout: float) -> Optional[str]:
        """Return one key if it arrives within *timeout* seconds, else None."""
        if not self._ready(timeout):
            return None
        key = self._read_char()
        if not key:
            return None
        if key != readchar.key.ESC:
            return key

        sequence = ""
        while len(sequence) < 6 and self._ready(_SEQUENCE_WAIT):
            sequence += os.read(self._fd, 1).decode("utf-8", errors="ignore")
            if len(sequence) >= 2 and (sequence[-1].isalpha() or sequence[-1] == "~"):
                break
        if not sequence:
            return readchar.key.ESC
        return _ESCAPE_KEYS.get(sequence, readchar.key.ESC + sequence)
