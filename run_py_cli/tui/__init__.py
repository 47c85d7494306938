"""
tui — terminal front-end of run-py-cli.

Public API
──────────
Application      — render / wait / dispatch loop
EventSource      — background key + tick producer
SelectionCursor  — wrap-around list selection
UIState, Frame   — loop-owned state and render snapshot
build_frame      — rich layout for one Frame
TerminalSession  — raw-mode tty context manager
"""

from run_py_cli.tui.app import Application
from run_py_cli.tui.cursor import SelectionCursor
from run_py_cli.tui.events import EventSource, InputEvent, StopEvent, TickEvent
from run_py_cli.tui.render import build_frame
from run_py_cli.tui.terminal import TerminalSession, TtyKeyReader
from run_py_cli.tui.viewmodels import Frame, MenuItem, UIState

__all__ = [
    "Application",
    "SelectionCursor",
    "EventSource",
    "InputEvent",
    "StopEvent",
    "TickEvent",
    "build_frame",
    "TerminalSession",
    "TtyKeyReader",
    "Frame",
    "MenuItem",
    "UIState",
]
