"""
Text rendering of the picker overlay.

One header line with the mode and the live buffer, then one line per
viewable tab in host order. The active tab is red bold, the selected tab is
black on cyan; a tab can be both.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.style import Style
from rich.text import Text

from tabpick.core.session import PickerSession
from tabpick.core.tabs import Tab

ACTIVE_STYLE = Style(color="red", bold=True)
SELECTED_STYLE = Style(color="black", bgcolor="cyan")
BUFFER_STYLE = Style(dim=True, italic=True)


def render_header(session: PickerSession) -> Text:
    header = Text(f"({session.mode.label}) > ")
    header.append(session.modes.buffer, style=BUFFER_STYLE)
    return header


def tab_row_text(tab: Tab, pane_count: int) -> str:
    return f"({tab.number}) -> {tab.name}: ({pane_count} terminals)"


def render_tab_row(session: PickerSession, tab: Tab) -> Text:
    row = Text(tab_row_text(tab, session.pane_count_for(tab.position)))
    if tab.is_active:
        row.stylize(ACTIVE_STYLE)
    if tab.position == session.selected_position:
        row.stylize(SELECTED_STYLE)
    return row


def render_overlay(session: PickerSession) -> Text:
    lines = [render_header(session)]
    lines.extend(render_tab_row(session, tab) for tab in session.viewable())
    return Text("\n").join(lines)


def render_plain(session: PickerSession) -> str:
    return render_overlay(session).plain


def render_to_ansi(session: PickerSession, width: int = 80) -> str:
    """Render for hosts that write straight to a terminal."""
    buf = StringIO()
    console = Console(file=buf, width=width, force_terminal=True, color_system="standard")
    console.print(render_overlay(session), soft_wrap=True)
    return buf.getvalue()
