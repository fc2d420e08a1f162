"""
Machine-parseable traces of a picker session.

Trace files are JSON Lines: one object per delivered event and one per
command the picker issued. They are meant for replay and diffing, not for
reading.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator

from tabpick.core.events import Event
from tabpick.core.host import HostCommand, command_to_dict


def _default(o: Any) -> Any:
    if is_dataclass(o):
        return asdict(o)
    if isinstance(o, Enum):
        return o.value
    if isinstance(o, frozenset):
        return sorted(o)
    return str(o)


class TraceWriter:
    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._fh = self._path.open("w", encoding="utf-8")

    @property
    def path(self) -> Path:
        return self._path

    def _emit(self, record: Dict[str, Any]) -> None:
        record.setdefault("ts", datetime.now(timezone.utc).isoformat())
        self._fh.write(json.dumps(record, ensure_ascii=False, default=_default) + "\n")
        self._fh.flush()

    def event(self, index: int, event: Event, *, changed: bool) -> None:
        self._emit({"kind": "event", "index": index, "type": type(event).__name__,
                    "data": event, "changed": changed})

    def command(self, index: int, command: HostCommand) -> None:
        self._emit({"kind": "command", "index": index, **command_to_dict(command)})

    def close(self) -> None:
        self._fh.close()

    def __enter__(self) -> "TraceWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TraceReader:
    def __init__(self, path: str | Path):
        self._path = Path(path)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        with self._path.open("r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line:
                    continue
                yield json.loads(line)
