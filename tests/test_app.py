"""Tests for app wiring: health check, error mapping and the CLI."""

import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from backend.app import app
from backend.config import load_config
from backend.errors import InvalidParameterError, LibraryApiError

import main


def test_health_reports_database_up(client, fake_conn):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": True}
    assert fake_conn.closes == 1


def test_health_reports_database_down(monkeypatch):
    def _unavailable():
        raise RuntimeError("Database not initialized")

    monkeypatch.setattr("backend.database.get_connection", _unavailable)

    response = TestClient(app).get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": False}


@pytest.mark.parametrize(
    "method, url",
    [
        ("GET", "/api/books"),
        ("GET", "/api/books/search"),
        ("PUT", "/api/books/value"),
        ("DELETE", "/api/books/1"),
        ("GET", "/api/member"),
        ("PUT", "/api/member/1"),
        ("GET", "/api/loans"),
        ("GET", "/api/loans/active"),
        ("GET", "/api/loans/overdue"),
        ("POST", "/api/loans/1/return"),
        ("GET", "/api/reports/most-borrowed/2024"),
    ],
)
def test_route_groups_are_mounted(client, fake_conn, method, url):
    response = client.request(method, url, follow_redirects=False)

    assert response.status_code == 200
    assert fake_conn.closes == 1


def test_error_status_codes():
    assert LibraryApiError("x").status_code == 500
    assert LibraryApiError("x", status_code=418).status_code == 418
    assert InvalidParameterError("x").status_code == 400


def test_cli_init_writes_config(tmp_path, monkeypatch):
    path = tmp_path / "config.ini"
    monkeypatch.setattr(main, "DEFAULT_CONFIG_PATH", path)

    result = CliRunner().invoke(
        main.app,
        ["init", "--user", "lib", "--password", "pw", "--dsn", "db:1521/ORCL", "--port", "3100"],
    )

    assert result.exit_code == 0
    config = load_config(path)
    assert config.database.user == "lib"
    assert config.database.dsn == "db:1521/ORCL"
    assert config.server_port == 3100


def test_cli_serve_without_config_exits(tmp_path, monkeypatch):
    monkeypatch.setattr("backend.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.ini")

    result = CliRunner().invoke(main.app, ["serve"])

    assert result.exit_code == 1
    assert "config.ini not found" in result.output


def test_cli_serve_does_not_listen_when_database_unreachable(tmp_path, monkeypatch):
    path = tmp_path / "config.ini"
    path.write_text("[database]\nuser = lib\n")
    monkeypatch.setattr("backend.config.DEFAULT_CONFIG_PATH", path)
    monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)

    def _refuse(config):
        raise RuntimeError("ORA-12541: TNS:no listener")

    started = []
    monkeypatch.setattr(main, "init_db", _refuse)
    monkeypatch.setattr(main, "run_server", lambda *args, **kwargs: started.append(True))

    result = CliRunner().invoke(main.app, ["serve"])

    assert result.exit_code == 1
    assert started == []
