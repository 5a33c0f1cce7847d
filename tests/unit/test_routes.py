"""Tests for the null distribution HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from nullmap.nullmap_api.app import app
from nullmap.nullmap_api.configuration.api import ApiConfiguration, get_api_configuration
from nullmap.nullmap_api.deps.analyzer import get_analyzer
from nullmap.shared.analyser import analyze_null_distribution
from nullmap.shared.errors import EmptyResultError, NoPrimaryKeyError, QueryError


class FakeAnalyzer:
    """Analyzer double that serves canned rows or raises a canned error."""

    def __init__(self, rows=None, error=None):
        self.rows = rows
        self.error = error
        self.calls = []

    def get_null_distribution(self, table, limit):
        self.calls.append((table, limit))
        if self.error is not None:
            raise self.error
        return analyze_null_distribution(self.rows, table, limit)


@pytest.fixture
def api_configuration():
    return ApiConfiguration(use_mysql=True, use_postgres=False, default_limit=42, max_limit=1000)


@pytest.fixture
def make_client(api_configuration):
    def _make(analyzer):
        app.dependency_overrides[get_api_configuration] = lambda: api_configuration
        app.dependency_overrides[get_analyzer] = lambda: analyzer
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_root(make_client):
    client = make_client(FakeAnalyzer())
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Table Null Distribution API"}


class TestNullDistributionJson:
    def test_returns_sorted_report(self, make_client, sample_rows):
        analyzer = FakeAnalyzer(rows=sample_rows)
        client = make_client(analyzer)

        response = client.get("/table-null-distribution", params={"table": "orders", "limit": "3"})

        assert response.status_code == 200
        body = response.json()
        assert body["table"] == "orders"
        assert body["limit"] == 3
        assert list(body["null_distribution"]) == ["b", "a", "id"]
        assert body["null_distribution"]["a"] == {"total_rows": 3, "null_rows": 1, "not_null_rows": 2}
        assert body["summary"] == {
            "total_rows_scanned": 3,
            "no_of_columns_analyzed": 3,
            "no_of_columns_having_null_values": 2,
            "no_of_columns_having_no_nulls": 1,
        }
        assert analyzer.calls == [("orders", 3)]

    @pytest.mark.parametrize(
        "params, expected_limit",
        [
            ({}, 42),
            ({"limit": ""}, 42),
            ({"limit": "many"}, 42),
            ({"limit": "0"}, 1),
            ({"limit": "5000"}, 1000),
            ({"limit": "10"}, 10),
        ],
    )
    def test_limit_policy(self, make_client, sample_rows, params, expected_limit):
        analyzer = FakeAnalyzer(rows=sample_rows)
        client = make_client(analyzer)

        response = client.get("/table-null-distribution", params={"table": "orders", **params})

        assert response.status_code == 200
        assert response.json()["limit"] == expected_limit
        assert analyzer.calls == [("orders", expected_limit)]

    @pytest.mark.parametrize("params", [{}, {"table": ""}, {"table": "   "}, {"limit": "5"}])
    def test_missing_table(self, make_client, params):
        analyzer = FakeAnalyzer()
        client = make_client(analyzer)

        response = client.get("/table-null-distribution", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Please provide a valid table name."}
        assert analyzer.calls == []

    @pytest.mark.parametrize(
        "error",
        [
            NoPrimaryKeyError("No primary key found for table 'logs'."),
            EmptyResultError("No data found for table 'logs'."),
            QueryError("Invalid table name 'logs;'."),
            RuntimeError("unexpected"),
        ],
    )
    def test_core_failures_map_to_500(self, make_client, error):
        client = make_client(FakeAnalyzer(error=error))

        response = client.get("/table-null-distribution", params={"table": "logs"})

        assert response.status_code == 500
        assert response.json() == {"error": str(error)}


class TestNullDistributionHtml:
    def test_renders_report(self, make_client, sample_rows):
        client = make_client(FakeAnalyzer(rows=sample_rows))

        response = client.get("/table-null-distribution-html", params={"table": "orders"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "<code>orders</code>" in html
        assert "Rows scanned: 3 (limit 42)" in html
        assert "Columns with NULL values: 2" in html
        assert html.index("<td>b</td>") < html.index("<td>a</td>") < html.index("<td>id</td>")

    def test_missing_table(self, make_client):
        analyzer = FakeAnalyzer()
        client = make_client(analyzer)

        response = client.get("/table-null-distribution-html")

        assert response.status_code == 400
        assert "Please provide a valid table name." in response.text
        assert analyzer.calls == []

    def test_failure_renders_escaped_error(self, make_client):
        error = QueryError("Invalid table name '<script>'.")
        client = make_client(FakeAnalyzer(error=error))

        response = client.get("/table-null-distribution-html", params={"table": "x"})

        assert response.status_code == 500
        assert "&lt;script&gt;" in response.text
        assert "<script>" not in response.text
