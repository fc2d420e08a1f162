"""
Interaction modes and key routing.

Three mutually exclusive modes. The filter text outlives Search mode (it keeps
narrowing the list in Normal mode), so it lives on the machine; the rename
text only exists while renaming, so it lives on the ``RenameMode`` variant.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Union

from tabpick.core.filter import FilterState
from tabpick.core.host import CloseSelf, CloseTab, HostCommand, NewTab, RenameTab, SwitchTab
from tabpick.core.keys import Key, KeyKind
from tabpick.core.lifecycle import LifecycleGuard
from tabpick.core.selection import SelectionTracker
from tabpick.core.tabs import Tab, TabView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalMode:
    label = "Normal"


@dataclass(frozen=True)
class SearchMode:
    label = "Search"


@dataclass(frozen=True)
class RenameMode:
    label = "Rename"
    text: str = ""


Mode = Union[NormalMode, SearchMode, RenameMode]


@dataclass(frozen=True)
class KeyContext:
    """Collaborators a key handler may touch, passed in per key press."""

    view: TabView
    selection: SelectionTracker
    guard: LifecycleGuard
    send: Callable[[HostCommand], None]


class ModeStateMachine:
    """Routes keys to the active mode's handler. Handlers return whether they handled the key."""

    def __init__(self, ignore_case: bool = True) -> None:
        self.mode: Mode = NormalMode()
        self.filter = FilterState(ignore_case=ignore_case)

    @property
    def filter_text(self) -> str:
        return self.filter.text

    @property
    def rename_text(self) -> str:
        return self.mode.text if isinstance(self.mode, RenameMode) else ""

    @property
    def is_searching(self) -> bool:
        return isinstance(self.mode, SearchMode)

    @property
    def buffer(self) -> str:
        """Text shown next to the mode label."""
        if isinstance(self.mode, RenameMode):
            return self.mode.text
        return self.filter.text

    def viewable(self, view: TabView) -> List[Tab]:
        return view.viewable(self.filter)

    def handle_key(self, key: Key, ctx: KeyContext) -> bool:
        if isinstance(self.mode, SearchMode):
            return self._handle_search_key(key, ctx)
        if isinstance(self.mode, RenameMode):
            return self._handle_rename_key(self.mode, key, ctx)
        return self._handle_normal_key(key, ctx)

    def _enter(self, mode: Mode) -> None:
        if type(mode) is not type(self.mode):
            logger.debug("mode %s -> %s", self.mode.label, mode.label)
        self.mode = mode

    def _reconcile(self, ctx: KeyContext) -> None:
        ctx.selection.reconcile_after_filter_change(
            self.viewable(ctx.view), searching=self.is_searching
        )

    # Normal mode

    def _handle_normal_key(self, key: Key, ctx: KeyContext) -> bool:
        ch = key.text
        if ch == "/":
            self._enter(SearchMode())
            self._reconcile(ctx)
        elif ch == "r":
            self._enter(RenameMode())
        elif key.kind is KeyKind.ESC or ch == "q":
            ctx.send(CloseSelf())
        elif key.kind is KeyKind.DOWN or ch == "j":
            ctx.selection.select_next(self.viewable(ctx.view))
        elif key.kind is KeyKind.UP or ch == "k":
            ctx.selection.select_previous(self.viewable(ctx.view))
        elif key.kind is KeyKind.ENTER or ch == "l":
            self._focus_target(ctx)
        elif ch == "c":
            self._create_tab(ctx)
        elif ch == "d":
            self._delete_target(ctx)
        elif ch == "K":
            self.filter.clear()
            self._reconcile(ctx)
        else:
            return False
        return True

    def _focus_target(self, ctx: KeyContext) -> None:
        target = ctx.selection.target(self.viewable(ctx.view))
        if target is None:
            return
        ctx.send(SwitchTab(target.position))
        ctx.send(CloseSelf())

    def _create_tab(self, ctx: KeyContext) -> None:
        active = ctx.view.active_tab()
        if active is None:
            logger.warning("no active tab to return to, not creating a tab")
            return
        ctx.guard.arm(expected_tab_count=len(ctx.view.tabs) + 1)
        ctx.send(NewTab())
        ctx.send(SwitchTab(active.position))

    def _delete_target(self, ctx: KeyContext) -> None:
        target = ctx.selection.target(self.viewable(ctx.view))
        if target is None:
            return
        active = ctx.view.active_tab()
        ctx.guard.arm(expected_tab_count=len(ctx.view.tabs) - 1)
        ctx.send(SwitchTab(target.position))
        ctx.send(CloseTab())
        # Closing the active tab leaves the host to focus its neighbour.
        if active is not None and active.position != target.position:
            # The host renumbers tabs after the close.
            back = active.position - 1 if target.position < active.position else active.position
            ctx.send(SwitchTab(back))
        # Re-selected from the active tab once the shrunken list arrives.
        ctx.selection.defer_to_active()

    # Search mode

    def _handle_search_key(self, key: Key, ctx: KeyContext) -> bool:
        ch = key.text
        if key.kind is KeyKind.ESC:
            self.filter.clear()
            self._enter(NormalMode())
        elif key.kind is KeyKind.ENTER:
            self._enter(NormalMode())
        elif key.kind is KeyKind.BACKSPACE:
            self.filter.pop()
        elif ch is not None:
            self.filter.push(ch)
        else:
            return False
        self._reconcile(ctx)
        return True

    # Rename mode

    def _handle_rename_key(self, mode: RenameMode, key: Key, ctx: KeyContext) -> bool:
        ch = key.text
        if key.kind is KeyKind.ESC:
            self._enter(NormalMode())
        elif key.kind is KeyKind.ENTER:
            target = ctx.selection.target(self.viewable(ctx.view))
            if target is not None:
                ctx.send(RenameTab(target.position, mode.text))
            self._enter(NormalMode())
        elif key.kind is KeyKind.BACKSPACE:
            self.mode = RenameMode(mode.text[:-1])
        elif ch is not None:
            self.mode = RenameMode(mode.text + ch)
        else:
            return False
        return True
