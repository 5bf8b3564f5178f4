"""initiative.sh: a command-line helper for tabletop game masters."""

from .app.app import App

__version__ = "0.1.0"

__all__ = ["App", "__version__"]
