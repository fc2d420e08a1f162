"""Custom Textual widgets for the TUI module."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual.widgets import Static

from tabpick.core.session import PickerSession
from tabpick.tui.host import SimulatedMultiplexer
from tabpick.ui.render import render_overlay


class TabBar(Static):
    """One-line strip of the host's tabs with the active one highlighted."""

    def show(self, host: SimulatedMultiplexer) -> None:
        bar = Text()
        for i, tab in enumerate(host.tabs):
            label = f" {i + 1}:{tab.name} "
            bar.append(label, style="reverse bold" if i == host.active else "")
            bar.append(" ")
        self.update(bar)


class OverlayView(Static):
    """The picker overlay. Hidden while no session is open."""

    def show(self, session: Optional[PickerSession]) -> None:
        if session is None:
            self.display = False
            return
        self.display = True
        self.update(render_overlay(session))
