"""
The picker session: one object owning all picker state.

The host feeds events to ``update`` one at a time; each call runs to
completion and returns whether the overlay needs repainting. Nothing here
blocks or waits on the host: commands go out through the host adapter and
their effects come back later as snapshots.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from tabpick.core.config import PickerConfig
from tabpick.core.events import Event, KeyPress, PaneUpdate, TabUpdate
from tabpick.core.host import CloseSelf, FocusSelf, HostAdapter, HostCommand, ToggleFullscreen, describe_command
from tabpick.core.lifecycle import LifecycleGuard
from tabpick.core.modes import KeyContext, Mode, ModeStateMachine
from tabpick.core.selection import SelectionTracker
from tabpick.core.tabs import Tab, TabView

logger = logging.getLogger(__name__)


class PickerSession:
    """Tab picker state machine bound to one host adapter."""

    def __init__(
        self,
        host: HostAdapter,
        config: Optional[PickerConfig] = None,
        *,
        plugin_id: Optional[int] = None,
    ) -> None:
        self.host = host
        self.config = config or PickerConfig()
        self.view = TabView()
        self.selection = SelectionTracker()
        self.modes = ModeStateMachine(ignore_case=self.config.ignore_case)
        self.guard = LifecycleGuard(plugin_id=plugin_id)
        self.initialized = False
        self.closed = False

    # Read side, used by renderers and tests.

    @property
    def mode(self) -> Mode:
        return self.modes.mode

    @property
    def selected_position(self) -> Optional[int]:
        return self.selection.selected

    @property
    def filter_text(self) -> str:
        return self.modes.filter_text

    @property
    def rename_text(self) -> str:
        return self.modes.rename_text

    def viewable(self) -> List[Tab]:
        return self.modes.viewable(self.view)

    def target(self) -> Optional[Tab]:
        return self.selection.target(self.viewable())

    def pane_count_for(self, position: int) -> int:
        return self.view.pane_count_for(position)

    # Write side.

    def send(self, command: HostCommand) -> None:
        logger.debug("-> %s", describe_command(command))
        if isinstance(command, CloseSelf):
            self.closed = True
        self.host.send(command)

    def initialize(self) -> None:
        self.send(FocusSelf())
        if self.config.fullscreen:
            self.send(ToggleFullscreen())
        self.initialized = True

    def update(self, event: Event) -> bool:
        if not self.initialized:
            self.initialize()

        if isinstance(event, TabUpdate):
            self._on_tabs(event)
            changed = True
        elif isinstance(event, PaneUpdate):
            self._on_panes(event)
            changed = True
        elif isinstance(event, KeyPress):
            changed = self.modes.handle_key(event.key, self._key_context())
        else:
            logger.debug("ignoring event %r", event)
            return False

        self.selection.check_invariant(self.viewable())
        return changed

    def _key_context(self) -> KeyContext:
        return KeyContext(view=self.view, selection=self.selection, guard=self.guard, send=self.send)

    def _on_tabs(self, event: TabUpdate) -> None:
        self.view.set_tabs(event.tabs)
        active = self.view.active_tab()
        own_change = self.guard.consume_suppression(len(event.tabs))
        self.selection.reconcile_after_tab_list_update(self.viewable(), active, own_change=own_change)
        if self.guard.should_exit_on_tabs(active, own_change=own_change) and not self.closed:
            self.send(CloseSelf())

    def _on_panes(self, event: PaneUpdate) -> None:
        if self.guard.should_exit_on_panes(event.panes) and not self.closed:
            self.send(CloseSelf())
        self.view.apply_pane_snapshot(event.panes)
