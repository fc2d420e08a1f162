"""
Selection tracking over the filtered (viewable) tab list.

Selection is stored as a host tab position, never as an index into the
viewable list. Every operation takes the current viewable projection and
re-resolves the position against it.

Invariant after every operation: the selection is None or the position of a
tab in the viewable list passed to that operation.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from tabpick.core.tabs import Tab

logger = logging.getLogger(__name__)


class SelectionInvariantError(AssertionError):
    """Selection points at a tab outside the viewable set (programming error)."""


def _index_of(viewable: Sequence[Tab], position: Optional[int]) -> Optional[int]:
    if position is None:
        return None
    for idx, tab in enumerate(viewable):
        if tab.position == position:
            return idx
    return None


class SelectionTracker:
    """Owns the currently selected tab position."""

    def __init__(self, selected: Optional[int] = None) -> None:
        self.selected: Optional[int] = selected
        self.reselect_pending = False

    def defer_to_active(self) -> None:
        """Fall back to the active tab once the host confirms a change we caused."""
        self.reselect_pending = True

    def contains(self, viewable: Sequence[Tab]) -> bool:
        return _index_of(viewable, self.selected) is not None

    def reconcile_after_filter_change(self, viewable: Sequence[Tab], *, searching: bool) -> None:
        """A fresh filter in Search mode selects nothing; otherwise the first match."""
        if searching:
            self.selected = None
        else:
            self.selected = viewable[0].position if viewable else None

    def reconcile_after_tab_list_update(
        self,
        viewable: Sequence[Tab],
        active: Optional[Tab],
        *,
        own_change: bool = False,
    ) -> None:
        """
        Re-establish the selection after the host replaced the tab list.

        Keeps the selected position when it is still viewable, otherwise falls
        back to the active tab when that is viewable, otherwise None.

        Args:
            viewable: Tabs passing the current filter in the new list
            active: The tab flagged active in the new list, if any
            own_change: The list is the awaited result of our own command
        """
        if self.reselect_pending:
            self.reselect_pending = False
            if own_change:
                self.selected = None
        if self.selected is not None and self.contains(viewable):
            return
        previous = self.selected
        if active is not None and _index_of(viewable, active.position) is not None:
            self.selected = active.position
        else:
            self.selected = None
        if previous is not None and previous != self.selected:
            logger.debug("selection %s no longer viewable, now %s", previous, self.selected)

    def select_next(self, viewable: Sequence[Tab]) -> None:
        if not viewable:
            self.selected = None
            return
        idx = _index_of(viewable, self.selected)
        if idx is None:
            self.selected = viewable[0].position
        else:
            self.selected = viewable[(idx + 1) % len(viewable)].position

    def select_previous(self, viewable: Sequence[Tab]) -> None:
        if not viewable:
            self.selected = None
            return
        idx = _index_of(viewable, self.selected)
        if idx is None:
            self.selected = viewable[-1].position
        else:
            self.selected = viewable[(idx - 1) % len(viewable)].position

    def target(self, viewable: Sequence[Tab]) -> Optional[Tab]:
        """The viewable tab whose position equals the selection, or None."""
        idx = _index_of(viewable, self.selected)
        return viewable[idx] if idx is not None else None

    def check_invariant(self, viewable: Sequence[Tab]) -> None:
        if self.selected is not None and not self.contains(viewable):
            raise SelectionInvariantError(
                f"selected position {self.selected} is not in the viewable set "
                f"{[tab.position for tab in viewable]}"
            )
