"""Widget ids and text constants for the TUI module."""


class WidgetIds:
    """Widget ID constants for stable test API."""

    TAB_BAR = "tab_bar"
    OVERLAY = "overlay"
    STATUS = "status"
    FOOTER = "footer"


DEFAULT_TABS = ["editor", "server", "logs", "scratch"]
DEFAULT_TERMINALS = [2, 1, 1, 3]

CLOSED_HINT = "Picker closed. Press p to open it again, ctrl+q to quit."
OPEN_HINT = "/ search  r rename  c new  d delete  j/k move  enter go  K clear  q close"


__all__ = [
    "WidgetIds",
    "DEFAULT_TABS",
    "DEFAULT_TERMINALS",
    "CLOSED_HINT",
    "OPEN_HINT",
]
