from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Header, Static

from tabpick.core.config import PickerConfig
from tabpick.core.events import Event, KeyPress
from tabpick.core.host import HostCommand, command_to_dict
from tabpick.core.keys import from_textual
from tabpick.core.session import PickerSession
from tabpick.tui.debug import DebugLogger
from tabpick.tui.host import SimulatedMultiplexer
from tabpick.tui.models import (
    CLOSED_HINT,
    DEFAULT_TABS,
    DEFAULT_TERMINALS,
    OPEN_HINT,
    WidgetIds,
)
from tabpick.tui.widgets import OverlayView, TabBar


class _LoggingHost:
    """Forwards picker commands to the simulated host and records them for debugging."""

    def __init__(self, host: SimulatedMultiplexer, debug: DebugLogger) -> None:
        self._host = host
        self._debug = debug

    def send(self, command: HostCommand) -> None:
        self._debug.log(event="command", data=command_to_dict(command))
        self._host.send(command)


class TabPickTuiApp(App):
    """
    Tab picker running over a simulated multiplexer.

    The picker only ever talks to the host through commands and only learns
    about their effects from the snapshots the host sends back, one event at
    a time, exactly as it would inside a real multiplexer.
    """

    TITLE = "tabpick"

    CSS = """
    #tab_bar { height: 1; background: $panel; }
    #overlay_frame { border: round $accent; padding: 0 1; height: auto; }
    #status { color: $text-muted; }
    #footer { dock: bottom; color: $text-muted; }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        config: Optional[PickerConfig] = None,
        tabs: Optional[Sequence[str]] = None,
        terminals: Optional[Sequence[int]] = None,
    ) -> None:
        super().__init__()
        self.config = config or PickerConfig()
        if tabs is None:
            tabs, terminals = DEFAULT_TABS, DEFAULT_TERMINALS
        self.host = SimulatedMultiplexer(tabs, terminals)
        self.debug = DebugLogger()
        self.session: Optional[PickerSession] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield TabBar("", id=WidgetIds.TAB_BAR)
        with Container(id="overlay_frame"):
            yield OverlayView("", id=WidgetIds.OVERLAY)
        yield Static("", id=WidgetIds.STATUS)
        yield Static("", id=WidgetIds.FOOTER)

    def on_mount(self) -> None:
        self.open_picker()

    @property
    def picker_open(self) -> bool:
        return self.session is not None

    def open_picker(self) -> None:
        """Start a brand-new session; nothing carries over from the previous one."""
        self.session = PickerSession(
            _LoggingHost(self.host, self.debug),
            self.config,
            plugin_id=self.host.plugin_id,
        )
        self.host.open_overlay()
        self.debug.log(event="open", data={"tabs": [t.name for t in self.host.tabs]})
        # Take focus before the first snapshots are produced.
        self.session.initialize()
        self._pump()

    def deliver(self, event: Event) -> None:
        """Feed one event to the session, then every snapshot it provokes, in order."""
        if self.session is None:
            return
        self.session.update(event)
        self._pump()

    def _pump(self) -> None:
        pending: Deque[Event] = deque(self.host.take_events())
        while pending and self.session is not None:
            if self.session.closed or not self.host.overlay_open:
                break
            self.session.update(pending.popleft())
            pending.extend(self.host.take_events())
        if self.session is not None and (self.session.closed or not self.host.overlay_open):
            self.debug.log(event="closed")
            self.session = None
            # Overlay gone; the host still settles whatever the last commands did.
            self.host.take_events()
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.query_one(f"#{WidgetIds.TAB_BAR}", TabBar).show(self.host)
        self.query_one(f"#{WidgetIds.OVERLAY}", OverlayView).show(self.session)
        frame = self.query_one("#overlay_frame", Container)
        frame.display = self.session is not None
        status = self.query_one(f"#{WidgetIds.STATUS}", Static)
        if self.session is None:
            status.update(CLOSED_HINT)
        else:
            target = self.session.target()
            status.update(f"target: {target.name if target else '-'}")
        self.query_one(f"#{WidgetIds.FOOTER}", Static).update(OPEN_HINT if self.session else "")

    def on_key(self, event) -> None:  # type: ignore[override]
        key = str(getattr(event, "key", "") or "")
        character = getattr(event, "character", None)
        self.debug.log(event="key", data={"key": key, "character": character, "open": self.picker_open})
        if self.session is None:
            if character == "p":
                event.stop()
                self.open_picker()
            return
        event.stop()
        event.prevent_default()
        self.deliver(KeyPress(from_textual(key, character)))

    def on_unmount(self) -> None:
        self.debug.close_debug_file()
