"""
Application — the render / wait / dispatch loop of the launcher.

The loop thread owns every piece of mutable state (UIState, SelectionCursor)
and is the only writer of the registry file.  The EventSource thread only
feeds the event queue.

Key map
───────
  q        quit
  h / r    Home tab / RunPy tab
  a        add a random record
  s        add records for *.py files in the working directory
  d        delete the selected record (never the last one)
  Up/Down  move the selection (wraps)
  Enter    run the selected script (RunPy tab only)
  i        arm / disarm registry reinitialisation
  y        reinitialise the registry while armed

Store and runner failures during a session are shown in the log panel and
the loop carries on; only the startup path treats them as fatal.
"""

import logging
import random
import string
from pathlib import Path
from typing import Callable, Optional, Union

import readchar

from run_py_cli.config import AppConfig
from run_py_cli.exceptions import RunnerError, StoreError
from run_py_cli.runner.script_runner import ScriptRunner, resolve_target
from run_py_cli.store.models import ScriptRecord
from run_py_cli.store.registry import RegistryStore, default_seed, discover_scripts
from run_py_cli.tui.cursor import SelectionCursor
from run_py_cli.tui.events import Event, InputEvent, StopEvent, TickEvent
from run_py_cli.tui.viewmodels import REINIT_DONE_MSG, Frame, MenuItem, UIState

__all__ = ["Application", "random_record", "describe_key", "LAST_RECORD_MSG"]

logger = logging.getLogger(__name__)

LAST_RECORD_MSG = "registry has only one element left, operation skipped"

# Target used by the fixed branch of the random record generator
_FIXED_TARGET = "script.py"
_TOKEN_CHARS  = string.ascii_letters + string.digits

_ENTER_KEYS = {readchar.key.ENTER, readchar.key.CR, readchar.key.LF}
_QUIT_KEYS  = {"q", readchar.key.CTRL_C}

_KEY_NAMES = {
    readchar.key.UP:        "Up",
    readchar.key.DOWN:      "Down",
    readchar.key.LEFT:      "Left",
    readchar.key.RIGHT:     "Right",
    readchar.key.CR:        "Enter",
    readchar.key.LF:        "Enter",
    readchar.key.ESC:       "Esc",
    readchar.key.TAB:       "Tab",
    readchar.key.BACKSPACE: "Backspace",
    readchar.key.CTRL_C:    "Ctrl-C",
}

Renderer = Callable[[Frame], None]


def describe_key(key: str) -> str:
    """Human-readable name of *key* for the action panel."""
    if key in _KEY_NAMES:
        return _KEY_NAMES[key]
    if len(key) == 1 and key.isprintable():
        return f"Char({key!r})"
    return repr(key)


def random_record(rng: random.Random) -> ScriptRecord:
    """
    Build a placeholder record.

    With even odds the target is the fixed ``script.py`` or a random
    ``Rand_<token>.py``; the label always carries the token.
    """
    token = "".join(rng.choice(_TOKEN_CHARS) for _ in range(5))
    target = _FIXED_TARGET if rng.randrange(2) == 0 else f"Rand_{token}.py"
    return ScriptRecord(id=rng.randrange(99), label=f"mock$ {token}", target=target)


class Application:
    """
    Consumer side of the event channel.

    Usage::

        app = Application(RegistryStore(cfg.database_addr), ScriptRunner(), cfg)
        with EventSource(reader, cfg.tick_rate) as source:
            exit_code = app.run(source.get, render)
    """

    def __init__(
        self,
        store: RegistryStore,
        runner: ScriptRunner,
        config: AppConfig,
        cwd: Union[str, Path, None] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store  = store
        self.runner = runner
        self.config = config
        self.state  = UIState()
        self.cursor = SelectionCursor(0)
        self._cwd   = Path(cwd) if cwd is not None else Path.cwd()
        self._rng   = rng or random.Random()
        self._exit_code = 0

        self._handlers: dict[str, Callable[[], None]] = {
            "h": self._show_home,
            "r": self._show_run_list,
            "a": self._add_random,
            "s": self._add_discovered,
            "d": self._delete_selected,
            "i": self._toggle_reinit,
            "y": self._confirm_reinit,
            readchar.key.DOWN: self._move_down,
            readchar.key.UP:   self._move_up,
        }
        for key in _ENTER_KEYS:
            self._handlers[key] = self._run_selected

    # ── Loop ──────────────────────────────────────────────────────────────

    def run(self, next_event: Callable[[], Event], render: Renderer) -> int:
        """
        Render, wait for an event, dispatch; repeat until quit.

        Returns:
            Process exit code (0 on a normal quit).
        """
        while True:
            render(self.frame())
            if not self.dispatch(next_event()):
                logger.info("Application loop finished with code %d", self._exit_code)
                return self._exit_code

    def frame(self) -> Frame:
        """Snapshot of everything the renderer draws, re-read from disk."""
        records: list[ScriptRecord] = []
        error = ""
        try:
            records = self.store.load()
        except StoreError as exc:
            error = str(exc)
        if records:
            self.cursor.clamp(len(records))
        return Frame(
            active_menu=self.state.active_menu,
            last_action=self.state.last_action,
            last_log=self.state.last_log,
            records=records,
            selected=self.cursor.selected if records else None,
            store_error=error,
        )

    def dispatch(self, event: Event) -> bool:
        """
        Apply one event.

        Returns:
            False when the loop must stop.
        """
        if isinstance(event, TickEvent):
            return True
        if isinstance(event, StopEvent):
            logger.error("Input stopped: %s", event.reason)
            self._exit_code = 1
            return False
        if not isinstance(event, InputEvent):
            logger.debug("Ignoring unknown event %r", event)
            return True

        key = event.key
        self.state.record_key(describe_key(key))
        if key in _QUIT_KEYS:
            return False

        handler = self._handlers.get(key)
        if handler is None:
            return True
        try:
            handler()
        except (StoreError, RunnerError) as exc:
            logger.warning("%s failed: %s", describe_key(key), exc)
            self.state.log(f"Error: {exc}")
        return True

    # ── Tabs ──────────────────────────────────────────────────────────────

    def _show_home(self) -> None:
        self.state.active_menu = MenuItem.HOME

    def _show_run_list(self) -> None:
        self.state.active_menu = MenuItem.RUN_LIST

    # ── Registry mutations ────────────────────────────────────────────────

    def _add_random(self) -> None:
        record = random_record(self._rng)
        records = self.store.append(record)
        self.state.log(f"Added {record.target} ({len(records)} records)")

    def _add_discovered(self) -> None:
        known = {r.target for r in self.store.load()}
        added = 0
        for record in discover_scripts(self._cwd):
            if record.target not in known:
                self.store.append(record)
                known.add(record.target)
                added += 1
        self.state.log(f"Found {added} new script(s) in {self._cwd}")

    def _delete_selected(self) -> None:
        index = self.cursor.selected
        if index is None:
            return
        try:
            removed = self.store.remove_at(index)
        except IndexError:
            self.cursor.clamp(len(self.store.load()))
            self.state.log(f"No record at index {index}, selection reset")
            return
        if not removed:
            self.state.log(LAST_RECORD_MSG)
            return
        self.cursor.clamp_after_removal(index, len(self.store.load()))

    def _toggle_reinit(self) -> None:
        self.state.toggle_reinit()

    def _confirm_reinit(self) -> None:
        if not self.state.armed_to_reinit:
            return
        self.store.overwrite(default_seed())
        self.cursor.reset()
        self.state.disarm()
        self.state.log(REINIT_DONE_MSG)

    # ── Navigation ────────────────────────────────────────────────────────

    def _move_down(self) -> None:
        if self.cursor.selected is None:
            return
        self.cursor.advance(len(self.store.load()))

    def _move_up(self) -> None:
        if self.cursor.selected is None:
            return
        self.cursor.retreat(len(self.store.load()))

    # ── Execution ─────────────────────────────────────────────────────────

    def _run_selected(self) -> None:
        if self.state.active_menu != MenuItem.RUN_LIST or self.cursor.selected is None:
            return
        records = self.store.load()
        self.cursor.clamp(len(records))
        if self.cursor.selected is None:
            return
        record = records[self.cursor.selected]

        name, substituted = resolve_target(record.target, self._cwd)
        if substituted:
            self.state.last_action = f"Executed --- {name} ({record.target!r} not found)"
        else:
            self.state.last_action = f"Executed --- {name}"

        # blocks the loop until the script exits
        result = self.runner.run(self.config.python_bind, name, cwd=self._cwd)
        self.state.log(result.summary() or f"{name} finished with no output")
