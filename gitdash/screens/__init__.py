"""Screen generators: each module turns repository queries into rows."""

from . import log, refs, show, status

__all__ = ["log", "refs", "show", "status"]
