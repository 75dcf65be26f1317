"""
Read-only database access for the reporting queries.

This module provides a connection helper (``get_connection``), the
default query executor (``run_query``) and the FastAPI dependency
(``get_query_executor``) that hands the executor to route handlers.
The executor contract is deliberately small: it receives a
parameterized SQL string with ``?`` placeholders and a positional list
of bound values, and returns the result rows as plain dictionaries.
To point the service at another DBMS, override ``get_query_executor``
with a callable honouring the same contract.
"""

import os
import sqlite3
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence

from .config import settings


Row = Dict[str, Any]
QueryExecutor = Callable[[str, Sequence[Any]], List[Row]]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # service_order_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    ``check_same_thread`` is disabled because queries run in worker
    threads; every call still opens its own connection.
    """
    conn = sqlite3.connect(get_database_path(), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def run_query(sql: str, params: Sequence[Any]) -> List[Row]:
    """Execute ``sql`` with positional ``params`` and return all rows.

    Blocking; callers running inside the event loop should dispatch it
    with ``asyncio.to_thread``.  Driver errors propagate unchanged.
    """
    conn = get_connection()
    try:
        rows = conn.execute(sql, tuple(params)).fetchall()
        return [dict(row) for row in rows]
    finally:
        conn.close()


def get_query_executor() -> QueryExecutor:
    """FastAPI dependency returning the query executor for a request."""
    return run_query
