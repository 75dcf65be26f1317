import threading

import pytest
from fastapi.testclient import TestClient

from service_order_api.app.core.db import get_query_executor
from service_order_api.app.main import app


class FakeExecutor:
    """In-memory stand-in for the reporting database.

    Answers the counts query with ``counts_rows`` and any other query
    with ``rows``.  Every call is recorded as ``(sql, params)``.
    """

    def __init__(self, rows=None, counts_rows=None, error=None):
        self.rows = rows or []
        self.counts_rows = counts_rows if counts_rows is not None else []
        self.error = error
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, sql, params):
        with self._lock:
            self.calls.append((sql, list(params)))
        if self.error is not None:
            raise self.error
        if "COUNT(*)" in sql:
            return list(self.counts_rows)
        return list(self.rows)

    def call_for(self, marker):
        return next(call for call in self.calls if marker in call[0])


@pytest.fixture(name="executor")
def executor_fixture():
    return FakeExecutor()


@pytest.fixture(name="client")
def client_fixture(executor: FakeExecutor):
    """Provide a test client whose query executor is ``executor``."""
    app.dependency_overrides[get_query_executor] = lambda: executor

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
