"""
Scripted event sequences for replaying a picker session.

A script is YAML::

    config:
      ignore_case: "true"
    events:
      - tabs:
          - {name: alpha, active: true}
          - {name: beta}
      - panes:
          - {tab: 0}
          - {tab: 0, plugin: true, self: true, focused: true}
      - keys: "/al"
      - key: enter

``tabs`` positions default to the list index. ``keys`` is either a string of
single characters or a list of key tokens (``"enter"``, ``"ctrl+c"``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from tabpick.core.config import parse_bool
from tabpick.core.events import Event, KeyPress, PaneUpdate, TabUpdate
from tabpick.core.keys import parse_key
from tabpick.core.tabs import PaneRecord, Tab


class ScriptError(ValueError):
    """Raised for malformed scripts; ``index`` is the offending event, if known."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        if index is not None:
            message = f"event #{index}: {message}"
        super().__init__(message)


@dataclass
class Script:
    config: Dict[str, Any] = field(default_factory=dict)
    events: List[Event] = field(default_factory=list)


def _flag(raw: Mapping, key: str) -> bool:
    value = parse_bool(raw.get(key, False))
    if value is None:
        raise ValueError(f"'{key}' must be a boolean: {raw[key]!r}")
    return value


def _tab(raw: Any, idx: int) -> Tab:
    if isinstance(raw, str):
        return Tab(position=idx, name=raw)
    if not isinstance(raw, Mapping) or "name" not in raw:
        raise ValueError(f"tab entry needs a name: {raw!r}")
    return Tab(
        position=int(raw.get("position", idx)),
        name=str(raw["name"]),
        is_active=_flag(raw, "active"),
    )


def _pane(raw: Any) -> PaneRecord:
    if not isinstance(raw, Mapping) or "tab" not in raw:
        raise ValueError(f"pane entry needs a tab: {raw!r}")
    pane_id = raw.get("id")
    return PaneRecord(
        owning_tab=int(raw["tab"]),
        is_plugin=_flag(raw, "plugin"),
        is_focused=_flag(raw, "focused"),
        is_self=_flag(raw, "self"),
        pane_id=int(pane_id) if pane_id is not None else None,
    )


def parse_events(raw_events: Any) -> List[Event]:
    if not isinstance(raw_events, list):
        raise ScriptError("'events' must be a list")
    events: List[Event] = []
    for idx, raw in enumerate(raw_events):
        if not isinstance(raw, Mapping) or len(raw) != 1:
            raise ScriptError("expected a mapping with exactly one of tabs/panes/keys/key", idx)
        kind, body = next(iter(raw.items()))
        try:
            if kind == "tabs":
                events.append(TabUpdate(tuple(_tab(t, i) for i, t in enumerate(body or []))))
            elif kind == "panes":
                events.append(PaneUpdate(tuple(_pane(p) for p in body or [])))
            elif kind == "keys":
                tokens = list(body) if isinstance(body, (str, list)) else None
                if tokens is None:
                    raise ValueError("'keys' must be a string or a list")
                events.extend(KeyPress(parse_key(str(t))) for t in tokens)
            elif kind == "key":
                events.append(KeyPress(parse_key(str(body))))
            else:
                raise ValueError(f"unknown event type {kind!r}")
        except (TypeError, ValueError) as e:
            raise ScriptError(str(e), idx) from e
    return events


def load_script(path: Path) -> Script:
    """
    Load a replay script from YAML.

    Raises:
        ScriptError: If the file is not a valid script
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ScriptError(f"invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ScriptError("script must be a mapping with an 'events' list")
    config = data.get("config") or {}
    if not isinstance(config, dict):
        raise ScriptError("'config' must be a mapping")
    return Script(config=config, events=parse_events(data.get("events") or []))
