"""
TUI ViewModels — pure-Python state containers.

No terminal imports here; everything is testable without a tty.  The
renderer reads these objects, the dispatcher writes them, and both run on
the single loop thread.

Public API
──────────
MenuItem — the active tab
UIState  — last action / last log / reinit confirmation flag / active tab
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from run_py_cli.store.models import ScriptRecord

__all__ = ["MenuItem", "UIState", "Frame", "MENU_TITLES"]

logger = logging.getLogger(__name__)

# Titles shown in the tab bar; only the first two are selectable tabs
MENU_TITLES = ["Home", "RunPy", "Add", "Delete", "Quit"]

REINIT_ARMED_MSG = (
    "InitDB flag is ON. Do you want to initialize the registry?\n"
    "Press y at any time to proceed.\n"
    "Press i again to remove the InitDB flag."
)
REINIT_DISARMED_MSG = "InitDB flag is OFF"
REINIT_DONE_MSG     = "You initialized the registry"


class MenuItem(int, Enum):
    HOME     = 0
    RUN_LIST = 1


class UIState:
    """
    Mutable strings and flags shown around the main view.

    Attributes
    ──────────
    active_menu     — MenuItem currently displayed
    last_action     — description of the latest key press
    last_log        — latest script output or status message
    armed_to_reinit — True between the first ``i`` and ``y`` / second ``i``
    """

    def __init__(self) -> None:
        self.active_menu:     MenuItem = MenuItem.HOME
        self.last_action:     str      = "Nothing being pressed yet..."
        self.last_log:        str      = "Initial log."
        self.armed_to_reinit: bool     = False

    def record_key(self, description: str) -> None:
        self.last_action = f"pressed --- {description}"

    def log(self, message: str) -> None:
        self.last_log = message

    def toggle_reinit(self) -> bool:
        """Flip the confirmation flag and return its new value."""
        self.armed_to_reinit = not self.armed_to_reinit
        self.last_log = REINIT_ARMED_MSG if self.armed_to_reinit else REINIT_DISARMED_MSG
        return self.armed_to_reinit

    def disarm(self) -> None:
        self.armed_to_reinit = False


@dataclass
class Frame:
    """Snapshot handed to the renderer once per loop iteration."""
    active_menu: MenuItem
    last_action: str
    last_log:    str
    records:     list[ScriptRecord] = field(default_factory=list)
    selected:    Optional[int]      = None
    store_error: str                = ""

    @property
    def selected_record(self) -> Optional[ScriptRecord]:
        if self.selected is None or not 0 <= self.selected < len(self.records):
            return None
        return self.records[self.selected]
