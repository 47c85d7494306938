"""
Frame renderer — turns a Frame into rich renderables.

Layout
──────
  ┌ Menu ─────────────────────────────────────┐
  │ Home | RunPy | Add | Delete | Quit        │
  └───────────────────────────────────────────┘
  ┌ body: Home panel, or ───────────────────────┐
  │ PyScripts (20%) │ Detail table (80%)        │
  └───────────────────────────────────────────┘
  ┌ Your last input action ───────────────────┐
  ┌ Your last log (12 rows) ──────────────────┐
  ┌ About ────────────────────────────────────┐
"""

from rich.align import Align
from rich.console import RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from run_py_cli.tui.viewmodels import MENU_TITLES, Frame, MenuItem

__all__ = ["build_frame"]

_FOOTER = "Run-Py-CLI - terminal launcher for Python scripts"
_TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S UTC"


def _panel(body: RenderableType, title: str, **kwargs) -> Panel:
    return Panel(body, title=title, title_align="left", border_style="white", **kwargs)


def _menu(active: MenuItem) -> Panel:
    tabs = Text()
    for pos, title in enumerate(MENU_TITLES):
        if pos:
            tabs.append(" | ")
        if pos == active.value:
            tabs.append(title, style="bold yellow")
        else:
            tabs.append(title[0], style="underline yellow")
            tabs.append(title[1:], style="white")
    return _panel(tabs, "Menu")


def _message(text: str, title: str) -> Panel:
    return _panel(Align.center(Text(text, style="bright_cyan")), title)


def _home() -> Panel:
    lines = Text(justify="center")
    lines.append("\nWelcome\n\nto\n\n")
    lines.append("Run-Py-CLI", style="bright_blue")
    lines.append("\n\n")
    lines.append("Press 'r' to list scripts and Enter to run the selected one.\n")
    lines.append("Press 'a' to add a random script, 's' to add scripts found here.\n")
    lines.append("Press 'd' to delete the currently selected script.\n")
    lines.append("Press 'i' to initialize the json registry.")
    return _panel(lines, "Home")


def _script_list(frame: Frame) -> Panel:
    items = Text(no_wrap=True, overflow="ellipsis")
    for pos, record in enumerate(frame.records):
        if pos:
            items.append("\n")
        style = "bold black on yellow" if pos == frame.selected else ""
        items.append(record.label, style=style)
    return _panel(items, "PyScripts")


def _detail(frame: Frame) -> Panel:
    table = Table(expand=True, box=None, header_style="bold")
    table.add_column("ID", ratio=2)
    table.add_column("Description", ratio=5)
    table.add_column("Script", ratio=5)
    table.add_column("Created At", ratio=6, no_wrap=True)
    record = frame.selected_record
    if record is not None:
        table.add_row(
            str(record.id),
            record.label,
            record.target,
            record.created_at.strftime(_TIMESTAMP_FMT),
        )
    return _panel(table, "Detail")


def _body(frame: Frame) -> Layout:
    if frame.store_error:
        return Layout(_panel(Text(frame.store_error, style="bold red"), "Registry error"))
    if frame.active_menu == MenuItem.HOME:
        return Layout(_home())
    body = Layout()
    body.split_row(
        Layout(_script_list(frame), ratio=1),
        Layout(_detail(frame), ratio=4),
    )
    return body


def build_frame(frame: Frame) -> Layout:
    """Return the full-screen layout for *frame*."""
    root = Layout(name="root")
    root.split_column(
        Layout(_menu(frame.active_menu), name="menu", size=3),
        Layout(name="body", ratio=1, minimum_size=2),
        Layout(_message(frame.last_action, "Your last input action"), name="action", size=3),
        Layout(_message(frame.last_log, "Your last log"), name="log", size=12),
        Layout(_panel(Align.center(Text(_FOOTER, style="bright_cyan")), "About"), name="footer", size=3),
    )
    root["body"].update(_body(frame))
    return root
