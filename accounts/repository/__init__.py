"""Repository layer: DB access helpers (SQLite).

One parameterized statement per function; callers own the connection.
"""
from __future__ import annotations
