"""Debug event logging for the TUI.

Events are kept in memory and, when ``TABPICK_TUI_DEBUG_FILE`` is set,
streamed to that file as NDJSON for reproducible traces.
"""

import json
import os
import time
from typing import Optional, TextIO


class DebugLogger:
    """Best-effort debug event sink. Never raises into the UI."""

    MAX_EVENTS = 500

    def __init__(self) -> None:
        self._debug_events: list[dict[str, object]] = []
        self._debug_file_path: Optional[str] = None
        self._debug_file: Optional[TextIO] = None

    def log(self, *, event: str, data: Optional[dict[str, object]] = None) -> None:
        """Record a debug event.

        Args:
            event: Event name/type
            data: Optional event data dictionary
        """
        payload: dict[str, object] = {
            "t": float(time.time()),
            "event": str(event),
            "data": data or {},
        }
        self._debug_events.append(payload)
        # Prevent unbounded growth during long sessions/tests.
        if len(self._debug_events) > self.MAX_EVENTS:
            self._debug_events = self._debug_events[-(self.MAX_EVENTS // 2):]

        debug_file_path = os.getenv("TABPICK_TUI_DEBUG_FILE")
        if not debug_file_path:
            return
        try:
            if self._debug_file is None or self._debug_file_path != debug_file_path:
                self.close_debug_file()
                self._debug_file_path = debug_file_path
                self._debug_file = open(debug_file_path, "a", encoding="utf-8", buffering=1)
            line = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)
            self._debug_file.write(line + "\n")
        except OSError:
            # Debug output must never break the UI.
            return

    def close_debug_file(self) -> None:
        """Flush/close the debug file handle (if open)."""
        try:
            if self._debug_file is not None:
                self._debug_file.close()
        except OSError:
            pass
        finally:
            self._debug_file = None
            self._debug_file_path = None

    @property
    def debug_events(self) -> list[dict[str, object]]:
        """Get the list of debug events (read-only)."""
        return self._debug_events.copy()


__all__ = ["DebugLogger"]
