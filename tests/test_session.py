"""Tests for the picker session: key routing, host commands and self-exit."""

from __future__ import annotations

import random

from tabpick.core.config import PickerConfig
from tabpick.core.events import KeyPress, PaneUpdate, TabUpdate
from tabpick.core.host import (
    CloseSelf,
    CloseTab,
    FocusSelf,
    NewTab,
    RecordingHost,
    RenameTab,
    SwitchTab,
    ToggleFullscreen,
)
from tabpick.core.keys import Key, KeyKind, parse_key
from tabpick.core.modes import NormalMode, RenameMode, SearchMode
from tabpick.core.session import PickerSession
from tabpick.core.tabs import PaneRecord, Tab


def _tabs(*names: str, active: int = 0) -> TabUpdate:
    return TabUpdate(tuple(Tab(i, n, i == active) for i, n in enumerate(names)))


def _press(session: PickerSession, *tokens: str) -> list[bool]:
    return [session.update(KeyPress(parse_key(t))) for t in tokens]


def _type(session: PickerSession, text: str) -> None:
    for ch in text:
        session.update(KeyPress(Key.of_char(ch)))


def _session(*names: str, active: int = 0, **config) -> tuple[PickerSession, RecordingHost]:
    host = RecordingHost()
    session = PickerSession(host, PickerConfig(**config))
    session.update(_tabs(*(names or ("alpha", "Albatross", "beta")), active=active))
    host.drain()
    return session, host


class TestInitialization:
    def test_first_event_focuses_self_once(self) -> None:
        host = RecordingHost()
        session = PickerSession(host)
        session.update(_tabs("a", "b"))
        session.update(_tabs("a", "b"))
        assert host.commands == [FocusSelf()]
        assert session.initialized

    def test_fullscreen_toggled_when_configured(self) -> None:
        host = RecordingHost()
        session = PickerSession(host, PickerConfig(fullscreen=True))
        session.update(KeyPress(Key.of_char("x")))
        assert host.commands == [FocusSelf(), ToggleFullscreen()]

    def test_first_snapshot_selects_active_tab(self) -> None:
        session, _ = _session("a", "b", "c", active=2)
        assert session.selected_position == 2
        assert session.mode == NormalMode()

    def test_unknown_event_is_not_a_repaint(self) -> None:
        session, _ = _session()
        assert session.update(object()) is False


class TestSearchMode:
    def test_filter_scenario_and_wrap(self) -> None:
        session, _ = _session("alpha", "Albatross", "beta")
        _press(session, "/")
        assert session.mode == SearchMode()
        assert session.selected_position is None
        _type(session, "al")
        assert [t.position for t in session.viewable()] == [0, 1]
        assert session.selected_position is None
        _press(session, "enter")
        assert session.mode == NormalMode()
        assert session.filter_text == "al"
        assert session.selected_position == 0
        _press(session, "j")
        assert session.selected_position == 1
        _press(session, "j")
        assert session.selected_position == 0

    def test_no_match_clears_selection(self) -> None:
        session, _ = _session("alpha", "Albatross", "beta")
        _press(session, "/")
        _type(session, "xyz")
        assert session.viewable() == []
        assert session.selected_position is None
        _press(session, "enter", "j", "k")
        assert session.selected_position is None

    def test_case_sensitive_config(self) -> None:
        session, _ = _session("alpha", "Albatross", "beta", ignore_case=False)
        _press(session, "/")
        _type(session, "al")
        assert [t.name for t in session.viewable()] == ["alpha"]

    def test_letters_are_text_in_search(self) -> None:
        session, host = _session()
        _press(session, "/")
        _type(session, "jkqdc")
        assert session.filter_text == "jkqdc"
        assert host.commands == []

    def test_backspace_and_escape(self) -> None:
        session, _ = _session("alpha", "Albatross", "beta")
        _press(session, "/")
        _type(session, "bx")
        _press(session, "backspace")
        assert session.filter_text == "b"
        assert [t.name for t in session.viewable()] == ["Albatross", "beta"]
        _press(session, "esc")
        assert session.mode == NormalMode()
        assert session.filter_text == ""
        assert session.selected_position == 0

    def test_unhandled_keys_do_not_repaint(self) -> None:
        session, _ = _session()
        _press(session, "/")
        assert _press(session, "ctrl+a") == [False]
        assert session.update(KeyPress(Key(KeyKind.OTHER))) is False
        assert session.filter_text == ""

    def test_clear_filter_in_normal(self) -> None:
        session, _ = _session("alpha", "Albatross", "beta")
        _press(session, "/")
        _type(session, "bet")
        _press(session, "enter")
        assert session.selected_position == 2
        _press(session, "K")
        assert session.filter_text == ""
        assert session.selected_position == 0
        assert len(session.viewable()) == 3


class TestNormalMode:
    def test_navigation_keys(self) -> None:
        session, _ = _session("a", "b", "c")
        _press(session, "down")
        assert session.selected_position == 1
        _press(session, "up", "up")
        assert session.selected_position == 2
        _press(session, "k")
        assert session.selected_position == 1

    def test_unhandled_key(self) -> None:
        session, host = _session()
        assert _press(session, "x") == [False]
        assert _press(session, "ctrl+j") == [False]
        assert session.selected_position == 0
        assert host.commands == []

    def test_close_keys(self) -> None:
        for token in ("esc", "q"):
            session, host = _session()
            assert _press(session, token) == [True]
            assert host.commands == [CloseSelf()]
            assert session.closed

    def test_enter_switches_and_closes(self) -> None:
        session, host = _session("a", "b", "c")
        _press(session, "j", "l")
        assert host.commands == [SwitchTab(1), CloseSelf()]

    def test_enter_without_target_is_noop(self) -> None:
        session, host = _session("a", "b")
        _press(session, "/")
        _type(session, "zzz")
        _press(session, "enter", "enter")
        assert host.commands == []
        assert not session.closed

    def test_create_tab(self) -> None:
        session, host = _session("a", "b", "c", active=1)
        _press(session, "c")
        assert host.commands == [NewTab(), SwitchTab(1)]
        assert session.guard.suppress_next_exit

    def test_create_tab_without_active_tab(self) -> None:
        host = RecordingHost()
        session = PickerSession(host)
        session.update(TabUpdate((Tab(0, "a"), Tab(1, "b"))))
        host.drain()
        assert _press(session, "c") == [True]
        assert host.commands == []
        assert not session.guard.suppress_next_exit

    def test_delete_tab_before_active(self) -> None:
        session, host = _session("a", "b", "c", "d", active=2)
        _press(session, "k")
        assert session.selected_position == 1
        _press(session, "d")
        assert host.commands == [SwitchTab(1), CloseTab(), SwitchTab(1)]
        assert session.selected_position == 1
        assert session.selection.reselect_pending
        assert session.guard.suppress_next_exit

        session.update(_tabs("a", "c", "d", active=1))
        assert CloseSelf() not in host.commands
        assert session.selected_position == 1
        assert session.target().name == "c"

    def test_delete_tab_after_active(self) -> None:
        session, host = _session("a", "b", "c", active=0)
        _press(session, "j", "j", "d")
        assert host.commands == [SwitchTab(2), CloseTab(), SwitchTab(0)]

    def test_delete_active_tab(self) -> None:
        session, host = _session("a", "b", "c", active=1)
        _press(session, "d")
        assert host.commands == [SwitchTab(1), CloseTab()]
        session.update(_tabs("a", "c", active=1))
        assert not session.closed
        assert session.target().name == "c"

    def test_delete_without_target(self) -> None:
        session, host = _session("a", "b")
        _press(session, "/")
        _type(session, "zz")
        _press(session, "enter", "d")
        assert host.commands == []
        assert not session.guard.suppress_next_exit

    def test_refused_delete_keeps_selection(self) -> None:
        session, host = _session("only")
        _press(session, "d")
        assert host.commands == [SwitchTab(0), CloseTab()]
        host.drain()
        # The host refuses to close its last tab and sends nothing back.
        assert session.selected_position == 0
        _press(session, "enter")
        assert host.commands == [SwitchTab(0), CloseSelf()]

    def test_refused_delete_does_not_swallow_a_later_tab_change(self) -> None:
        session, host = _session("only")
        _press(session, "d")
        host.drain()
        session.update(_tabs("only", "new", active=1))
        assert host.commands == [CloseSelf()]
        assert not session.guard.suppress_next_exit
        assert not session.selection.reselect_pending


class TestRenameMode:
    def test_rename_scenario(self) -> None:
        session, host = _session("alpha", "Albatross", "beta")
        _press(session, "j")
        assert session.target().name == "Albatross"
        _press(session, "r")
        assert session.mode == RenameMode()
        _type(session, "work")
        assert session.rename_text == "work"
        _press(session, "enter")
        assert host.commands == [RenameTab(1, "work")]
        assert session.rename_text == ""
        assert session.mode == NormalMode()

    def test_rename_buffer_edits(self) -> None:
        session, _ = _session()
        _press(session, "r")
        _type(session, "ab/q")
        _press(session, "backspace")
        assert session.rename_text == "ab/"
        assert session.filter_text == ""

    def test_escape_discards(self) -> None:
        session, host = _session()
        _press(session, "r")
        _type(session, "tmp")
        _press(session, "esc")
        assert session.mode == NormalMode()
        assert session.rename_text == ""
        _press(session, "r")
        assert session.rename_text == ""
        assert host.commands == []

    def test_rename_without_target(self) -> None:
        session, host = _session("a", "b")
        _press(session, "/")
        _type(session, "none")
        _press(session, "enter", "r")
        _type(session, "new")
        _press(session, "enter")
        assert host.commands == []
        assert session.mode == NormalMode()

    def test_unhandled_in_rename(self) -> None:
        session, _ = _session()
        _press(session, "r")
        assert _press(session, "up") == [False]
        assert session.mode == RenameMode()


class TestLifecycle:
    def test_suppressed_then_unsuppressed_update(self) -> None:
        session, host = _session("a", "b", "c", active=0)
        _press(session, "c")
        host.drain()
        session.update(_tabs("a", "b", "c", "Tab #4", active=3))
        assert host.commands == []
        assert not session.guard.suppress_next_exit
        session.update(_tabs("a", "b", "c", "Tab #4", active=1))
        assert host.commands == [CloseSelf()]

    def test_active_change_closes(self) -> None:
        session, host = _session("a", "b", active=0)
        session.update(_tabs("a", "b", active=1))
        assert host.commands == [CloseSelf()]
        assert session.closed

    def test_same_active_keeps_open(self) -> None:
        session, host = _session("a", "b", active=0)
        session.update(_tabs("a", "renamed", active=0))
        assert host.commands == []

    def test_selection_moves_to_active_when_selected_tab_vanishes(self) -> None:
        session, _ = _session("a", "b", "c", active=0)
        _press(session, "j", "j")
        session.update(_tabs("a", "b", active=0))
        assert session.selected_position == 0

    def test_pane_focus_loss_closes(self) -> None:
        session, host = _session("a", "b")
        changed = session.update(
            PaneUpdate((PaneRecord(0), PaneRecord(0, is_plugin=True, is_self=True, is_focused=False)))
        )
        assert changed
        assert host.commands == [CloseSelf()]
        assert session.pane_count_for(0) == 1

    def test_pane_focus_kept(self) -> None:
        session, host = _session("a", "b")
        session.update(
            PaneUpdate((
                PaneRecord(0), PaneRecord(0), PaneRecord(0, is_plugin=True),
                PaneRecord(1), PaneRecord(1, is_plugin=True, is_self=True, is_focused=True),
            ))
        )
        assert host.commands == []
        assert session.pane_count_for(0) == 2
        assert session.pane_count_for(1) == 1

    def test_own_pane_found_by_plugin_id(self) -> None:
        host = RecordingHost()
        session = PickerSession(host, plugin_id=7)
        session.update(_tabs("a"))
        host.drain()
        session.update(PaneUpdate((
            PaneRecord(0, is_plugin=True, pane_id=3, is_focused=False),
            PaneRecord(0, is_plugin=True, pane_id=7, is_focused=True),
        )))
        assert host.commands == []
        session.update(PaneUpdate((PaneRecord(0, is_plugin=True, pane_id=7, is_focused=False),)))
        assert host.commands == [CloseSelf()]

    def test_close_requested_once(self) -> None:
        session, host = _session("a", "b")
        unfocused = PaneUpdate((PaneRecord(0, is_plugin=True, is_self=True, is_focused=False),))
        session.update(unfocused)
        session.update(unfocused)
        session.update(_tabs("a", "b", active=1))
        assert host.commands == [CloseSelf()]


def test_invariant_survives_random_event_streams() -> None:
    rng = random.Random(42)
    names = ["alpha", "Albatross", "beta", "gamma", "delta", "Alpine"]
    tokens = ["/", "a", "l", "e", "x", "backspace", "enter", "esc", "j", "k", "up", "down", "K", "r", "c", "d"]
    for _ in range(50):
        host = RecordingHost()
        session = PickerSession(host)
        for _ in range(200):
            if rng.random() < 0.2:
                count = rng.randint(0, len(names))
                picked = rng.sample(names, count)
                active = rng.randrange(count) if count else -1
                session.update(TabUpdate(tuple(Tab(i, n, i == active) for i, n in enumerate(picked))))
            else:
                session.update(KeyPress(parse_key(rng.choice(tokens))))
            viewable = session.viewable()
            sel = session.selected_position
            assert sel is None or any(t.position == sel for t in viewable)
