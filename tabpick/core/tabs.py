"""
Tab and pane data held by the picker.

The host owns the tab list; every snapshot replaces ours wholesale. Pane
counts are rebuilt from a flat list of pane records on every pane snapshot.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from tabpick.core.filter import FilterState


@dataclass(frozen=True)
class Tab:
    """One host tab. ``position`` is host-assigned and only stable within a snapshot."""

    position: int
    name: str
    is_active: bool = False

    @property
    def number(self) -> int:
        """1-based display number."""
        return self.position + 1


@dataclass(frozen=True)
class PaneRecord:
    """A pane as reported by the host, attached to the tab that hosts it."""

    owning_tab: int
    is_plugin: bool = False
    is_focused: bool = False
    is_self: bool = False
    pane_id: Optional[int] = None


class TabView:
    """Holds the authoritative tab list and the per-tab terminal pane counts."""

    def __init__(self) -> None:
        self._tabs: List[Tab] = []
        self._pane_counts: Dict[int, int] = {}

    @property
    def tabs(self) -> List[Tab]:
        return list(self._tabs)

    def set_tabs(self, new_tabs: Iterable[Tab]) -> None:
        """Atomically replace the held list. Selection is reconciled by the caller."""
        self._tabs = list(new_tabs)

    def iter_viewable(self, filter_state: FilterState) -> Iterator[Tab]:
        return (tab for tab in self._tabs if filter_state.accepts(tab.name))

    def viewable(self, filter_state: FilterState) -> List[Tab]:
        """Tabs passing the filter, in host order. Computed on demand."""
        return list(self.iter_viewable(filter_state))

    def active_tab(self) -> Optional[Tab]:
        return next((tab for tab in self._tabs if tab.is_active), None)

    def pane_count_for(self, position: int) -> int:
        return self._pane_counts.get(position, 0)

    def apply_pane_snapshot(self, records: Iterable[PaneRecord]) -> None:
        """Recount terminal (non-plugin) panes per owning tab."""
        counts: Counter = Counter()
        for record in records:
            if not record.is_plugin:
                counts[record.owning_tab] += 1
        self._pane_counts = dict(counts)
