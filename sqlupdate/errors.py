from __future__ import annotations


class SQLUpdateError(RuntimeError):
    """Base class for failures reported by the sqlupdate CLI."""
