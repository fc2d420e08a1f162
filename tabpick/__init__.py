"""tabpick - substring tab picker overlay for terminal multiplexers."""

__version__ = "1.0.0"
__description__ = "Filter, jump to, rename, create and delete multiplexer tabs"

from tabpick.cli import app, main

__all__ = ["app", "main", "__version__"]
