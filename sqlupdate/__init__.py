"""
sqlupdate – issue the SQL statements of a text file against a pooled
database connection.
"""
from __future__ import annotations

__version__ = "0.3.0"
