"""Shared fixtures for nullmap tests."""

from contextlib import contextmanager

import pytest

from nullmap.nullmap_api.configuration.api import ApiConfiguration


class FakeResult:
    """Minimal SQLAlchemy Result stand-in supporting mappings()/all()/iteration."""

    def __init__(self, rows):
        self._rows = rows

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)

    def __iter__(self):
        return iter(self._rows)


class FakeConnection:
    """Records executed statements and answers metadata and data queries."""

    def __init__(self, dialect, key_rows=None, data_rows=None, error=None):
        self.dialect = dialect
        self.key_rows = key_rows or []
        self.data_rows = data_rows or []
        self.error = error
        self.executed = []

    def execute(self, statement, params=None):
        sql = str(statement)
        self.executed.append((sql, params))
        if self.error is not None and self.error[0] in sql:
            raise self.error[1]
        if "SHOW KEYS" in sql or "pg_index" in sql:
            return FakeResult(self.key_rows)
        return FakeResult(self.data_rows)


@pytest.fixture
def mysql_configuration():
    return ApiConfiguration(
        db_host="db.local",
        db_user="reader",
        db_password="secret",
        db_name="shop",
        use_mysql=True,
        use_postgres=False,
        default_limit=100,
        max_limit=500,
    )


@pytest.fixture
def postgres_configuration():
    return ApiConfiguration(
        db_host="db.local",
        db_user="reader",
        db_password="secret",
        db_name="shop",
        use_mysql=False,
        use_postgres=True,
    )


@pytest.fixture
def patch_connection(monkeypatch):
    """Replace the per-call database connection used by the row fetchers."""

    def _patch(conn):
        opened = []

        @contextmanager
        def fake_connection(url):
            opened.append(url)
            yield conn

        monkeypatch.setattr("nullmap.shared.row_fetcher.get_sql_connection", fake_connection)
        return opened

    return _patch


@pytest.fixture
def sample_rows():
    return [
        {"id": 1, "a": 1, "b": None},
        {"id": 2, "a": None, "b": None},
        {"id": 3, "a": 3, "b": None},
    ]


@pytest.fixture
def make_connection():
    return FakeConnection
