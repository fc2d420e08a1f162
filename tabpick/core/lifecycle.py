"""
Decides when the picker should close itself.

Two triggers: the picker's own pane loses focus, or the host's active tab
changes while the picker is open. Tab changes the picker caused itself
(create/delete) are tolerated through a one-shot suppression flag that is
armed before the commands go out and consumed by the next tab-list snapshot,
which only counts as the awaited change when its length is the one expected.
At most one self-initiated change may be in flight at a time.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from tabpick.core.tabs import PaneRecord, Tab

logger = logging.getLogger(__name__)


class LifecycleGuard:
    def __init__(self, plugin_id: Optional[int] = None) -> None:
        self.plugin_id = plugin_id
        self.suppress_next_exit = False
        self.expected_tab_count: Optional[int] = None
        self.last_active_position: Optional[int] = None

    def arm(self, expected_tab_count: Optional[int] = None) -> None:
        """
        Tolerate the tab change caused by the command about to be sent.

        Args:
            expected_tab_count: Length of the tab list once the host has
                carried out the command, if known. A snapshot of any other
                length is not the awaited change and is checked normally.
        """
        self.suppress_next_exit = True
        self.expected_tab_count = expected_tab_count

    def consume_suppression(self, tab_count: int) -> bool:
        """
        Disarm on a tab-list snapshot.

        Returns:
            True when the snapshot is the self-initiated change that was armed for
        """
        if not self.suppress_next_exit:
            return False
        expected = self.expected_tab_count
        self.suppress_next_exit = False
        self.expected_tab_count = None
        if expected is not None and expected != tab_count:
            logger.debug("expected %s tabs after own command, got %s", expected, tab_count)
            return False
        return True

    def is_self(self, record: PaneRecord) -> bool:
        if record.is_self:
            return True
        return (
            self.plugin_id is not None
            and record.is_plugin
            and record.pane_id == self.plugin_id
        )

    def find_self(self, records: Iterable[PaneRecord]) -> Optional[PaneRecord]:
        return next((r for r in records if self.is_self(r)), None)

    def should_exit_on_panes(self, records: Iterable[PaneRecord]) -> bool:
        """True when our own pane is reported but not focused."""
        own = self.find_self(records)
        if own is None:
            return False
        if not own.is_focused:
            logger.debug("own pane lost focus, closing")
            return True
        return False

    def should_exit_on_tabs(self, active: Optional[Tab], *, own_change: bool = False) -> bool:
        """
        Feed the active tab of a new snapshot and decide whether to close.

        Args:
            active: The tab flagged active in the new snapshot, if any
            own_change: The snapshot is the awaited result of our own command

        Returns:
            True when the active tab moved and the change was not self-initiated
        """
        previous = self.last_active_position
        current = active.position if active is not None else None
        self.last_active_position = current

        if own_change:
            logger.debug("suppressed exit check (active %s -> %s)", previous, current)
            return False
        if previous is None:
            return False
        if previous != current:
            logger.debug("active tab changed %s -> %s, closing", previous, current)
            return True
        return False
