from __future__ import annotations
import pathlib

from sqlupdate.errors import SQLUpdateError


class LoadError(SQLUpdateError):
    """Raised when the SQL input file cannot be read."""

    def __init__(self, path: pathlib.Path, reason: str) -> None:
        super().__init__(f"I/O error with file {path}: {reason}")
        self.path: pathlib.Path = path


def load_text(path: pathlib.Path | str, encoding: str = "utf-8") -> str:
    """Return the whole content of *path* as one string, line endings untouched."""
    p = pathlib.Path(path)
    try:
        return p.read_bytes().decode(encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(p, str(exc)) from exc
    except LookupError as exc:                    # unknown codec name
        raise LoadError(p, f"unknown encoding {encoding!r}") from exc
