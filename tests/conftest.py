"""Shared fixtures: an in-memory stand-in for a pooled oracledb connection."""

import pytest
from fastapi.testclient import TestClient

from backend.app import app


class FakeVar:
    """Mimics the bind variable returned by cursor.var()."""

    def __init__(self, type_):
        self.type = type_
        self.value = None

    def getvalue(self):
        return self.value


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.description = None
        self.rowfactory = None
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def close(self):
        pass

    def var(self, type_):
        return FakeVar(type_)

    def execute(self, sql, params=None):
        self.conn.calls.append(("execute", " ".join(sql.split()), params))
        self.conn.maybe_fail()
        if sql.lstrip().upper().startswith("SELECT"):
            self.description = [(name,) for name in self.conn.columns]
            self._rows = list(self.conn.rows)

    def fetchall(self):
        if self.rowfactory is None:
            return list(self._rows)
        return [self.rowfactory(*row) for row in self._rows]

    def callproc(self, name, parameters=None, keyword_parameters=None):
        self.conn.calls.append(("callproc", name, parameters, keyword_parameters))
        self.conn.maybe_fail()
        lowered = name.lower()
        if lowered == "dbms_output.get_line":
            line_var, status_var = parameters
            if self.conn.output_lines:
                line_var.value = self.conn.output_lines.pop(0)
                status_var.value = 0
            else:
                line_var.value = None
                status_var.value = 1
            return
        if lowered == "dbms_output.enable":
            return
        binds = list(parameters or []) + list((keyword_parameters or {}).values())
        for bind in binds:
            if isinstance(bind, FakeVar):
                bind.value = self.conn.out_value


class FakeConnection:
    """Records every statement, commit and close issued by a request."""

    def __init__(self):
        self.calls = []
        self.commits = 0
        self.closes = 0
        self.columns = []
        self.rows = []
        self.out_value = None
        self.output_lines = []
        self.error = None
        self.close_error = None

    def maybe_fail(self):
        if self.error is not None:
            raise self.error

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def close(self):
        self.closes += 1
        if self.close_error is not None:
            raise self.close_error

    @property
    def procedure_calls(self):
        return [call for call in self.calls if call[0] == "callproc"]


@pytest.fixture
def fake_conn(monkeypatch):
    """Route every checkout from the pool to one FakeConnection."""
    conn = FakeConnection()
    monkeypatch.setattr("backend.database.get_connection", lambda: conn)
    return conn


@pytest.fixture
def client(fake_conn):
    return TestClient(app)
