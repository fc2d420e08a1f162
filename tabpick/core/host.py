"""
Commands the picker sends to its host, and the host-side sink protocol.

Every command is fire-and-forget: its effect is only observed later through a
new tab or pane snapshot. Positions are 0-based host tab positions; adapters
translate them to whatever indexing the host uses.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol, Union


@dataclass(frozen=True)
class FocusSelf:
    pass


@dataclass(frozen=True)
class ToggleFullscreen:
    pass


@dataclass(frozen=True)
class SwitchTab:
    position: int


@dataclass(frozen=True)
class NewTab:
    pass


@dataclass(frozen=True)
class CloseTab:
    """Close the tab at ``position``, or the focused tab when position is None."""

    position: Optional[int] = None


@dataclass(frozen=True)
class RenameTab:
    position: int
    name: str


@dataclass(frozen=True)
class CloseSelf:
    pass


HostCommand = Union[FocusSelf, ToggleFullscreen, SwitchTab, NewTab, CloseTab, RenameTab, CloseSelf]


def command_to_dict(command: HostCommand) -> Dict[str, Any]:
    """Flat dict form used in traces and CLI output."""
    return {"command": type(command).__name__, **asdict(command)}


def describe_command(command: HostCommand) -> str:
    args = ", ".join(f"{k}={v!r}" for k, v in asdict(command).items())
    return f"{type(command).__name__}({args})"


class HostAdapter(Protocol):
    """Anything that accepts host commands."""

    def send(self, command: HostCommand) -> None:
        ...


class RecordingHost:
    """Host adapter that only records what it was asked to do."""

    def __init__(self) -> None:
        self.commands: List[HostCommand] = []

    def send(self, command: HostCommand) -> None:
        self.commands.append(command)

    def drain(self) -> List[HostCommand]:
        """Return and forget everything recorded so far."""
        out, self.commands = self.commands, []
        return out

    def of_type(self, kind: type) -> List[HostCommand]:
        return [c for c in self.commands if isinstance(c, kind)]
