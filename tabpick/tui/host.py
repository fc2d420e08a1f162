"""
An in-process stand-in for a terminal multiplexer.

It keeps named tabs with a number of terminal panes each, hosts the picker
overlay as a plugin pane in the tab it was opened from, and applies picker
commands the way a multiplexer would: tabs are renumbered after every change
and closing the last tab is refused. After a batch of commands it produces a
fresh tab snapshot and pane snapshot.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tabpick.core.events import Event, PaneUpdate, TabUpdate
from tabpick.core.host import (
    CloseSelf,
    CloseTab,
    FocusSelf,
    HostCommand,
    NewTab,
    RenameTab,
    SwitchTab,
    ToggleFullscreen,
)
from tabpick.core.tabs import PaneRecord, Tab

logger = logging.getLogger(__name__)

_tab_ids = itertools.count(1)


@dataclass(eq=False)
class SimTab:
    name: str
    terminals: int = 1
    uid: int = field(default_factory=lambda: next(_tab_ids))


class SimulatedMultiplexer:
    """Host adapter backed by an in-memory tab model."""

    def __init__(
        self,
        names: Sequence[str],
        terminals: Optional[Sequence[int]] = None,
        *,
        active: int = 0,
        plugin_id: int = 1,
    ) -> None:
        if not names:
            raise ValueError("At least one tab is required")
        counts = list(terminals) if terminals is not None else [1] * len(names)
        self.tabs: List[SimTab] = [SimTab(n, c) for n, c in zip(names, counts)]
        self.active = max(0, min(active, len(self.tabs) - 1))
        self.plugin_id = plugin_id
        self.fullscreen = False
        self.overlay_tab: Optional[SimTab] = None
        self.overlay_focused = False
        self.history: List[HostCommand] = []
        self._dirty = False

    @property
    def overlay_open(self) -> bool:
        return self.overlay_tab is not None

    @property
    def active_tab(self) -> SimTab:
        return self.tabs[self.active]

    def open_overlay(self) -> None:
        """Float the picker over the active tab (focus comes from the picker itself)."""
        self.overlay_tab = self.active_tab
        self.overlay_focused = False
        self._dirty = True

    def send(self, command: HostCommand) -> None:
        self.history.append(command)
        if isinstance(command, FocusSelf):
            self._set_focus(True)
        elif isinstance(command, ToggleFullscreen):
            self.fullscreen = not self.fullscreen
            self._dirty = True
        elif isinstance(command, SwitchTab):
            self._switch(command.position)
        elif isinstance(command, NewTab):
            self.tabs.append(SimTab(f"Tab #{len(self.tabs) + 1}"))
            self.active = len(self.tabs) - 1
            self._dirty = True
        elif isinstance(command, CloseTab):
            self._close(self.active if command.position is None else command.position)
        elif isinstance(command, RenameTab):
            if 0 <= command.position < len(self.tabs):
                self.tabs[command.position].name = command.name
                self._dirty = True
        elif isinstance(command, CloseSelf):
            if self.overlay_tab is not None:
                self.overlay_tab = None
                self.overlay_focused = False
                self._dirty = True

    def _set_focus(self, focused: bool) -> None:
        if self.overlay_tab is not None and self.overlay_focused != focused:
            self.overlay_focused = focused
            self._dirty = True

    def _switch(self, position: int) -> None:
        if not 0 <= position < len(self.tabs):
            logger.debug("switch to unknown tab %s ignored", position)
            return
        if position != self.active:
            self.active = position
            self._dirty = True

    def _close(self, position: int) -> None:
        if not 0 <= position < len(self.tabs):
            return
        if len(self.tabs) == 1:
            logger.info("refusing to close the last tab")
            return
        closed = self.tabs.pop(position)
        if closed is self.overlay_tab:
            self.overlay_tab = None
            self.overlay_focused = False
        if position < self.active or self.active >= len(self.tabs):
            self.active = max(0, self.active - 1)
        self._dirty = True

    def tab_snapshot(self) -> TabUpdate:
        return TabUpdate(tuple(
            Tab(position=i, name=t.name, is_active=(i == self.active))
            for i, t in enumerate(self.tabs)
        ))

    def pane_snapshot(self) -> PaneUpdate:
        records: List[PaneRecord] = []
        for i, tab in enumerate(self.tabs):
            records.extend(PaneRecord(owning_tab=i, is_focused=False) for _ in range(tab.terminals))
            if tab is self.overlay_tab:
                records.append(PaneRecord(
                    owning_tab=i,
                    is_plugin=True,
                    # A floating pane only has focus while its tab is the active one.
                    is_focused=self.overlay_focused and i == self.active,
                    pane_id=self.plugin_id,
                ))
        return PaneUpdate(tuple(records))

    def take_events(self) -> List[Event]:
        """Snapshots describing everything that changed since the last call."""
        if not self._dirty:
            return []
        self._dirty = False
        return [self.tab_snapshot(), self.pane_snapshot()]
