"""Core functionality modules for tabpick."""

__all__ = [
    "filter",
    "tabs",
    "selection",
    "keys",
    "modes",
    "lifecycle",
    "host",
    "events",
    "session",
    "config",
    "script",
    "trace",
]
