"""Events the host delivers to the picker, one at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

from tabpick.core.keys import Key
from tabpick.core.tabs import PaneRecord, Tab


@dataclass(frozen=True)
class TabUpdate:
    tabs: Tuple[Tab, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PaneUpdate:
    panes: Tuple[PaneRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class KeyPress:
    key: Key


Event = Union[TabUpdate, PaneUpdate, KeyPress]
