"""Tests for config.ini loading and writing."""

import pytest

from backend import config as config_module
from backend.config import DatabaseConfig, ServerConfig, load_config, write_config


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "config.ini")


def test_load_config_reads_sections(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text(
        "[database]\n"
        "user = library\n"
        "password = s3cret\n"
        "dsn = db.example.com:1521/ORCL\n"
        "\n"
        "[server]\n"
        "host = 127.0.0.1\n"
        "port = 8080\n"
        "\n"
        "[logging]\n"
        "level = debug\n"
    )

    config = load_config(path)

    assert config.database.user == "library"
    assert config.database.password == "s3cret"
    assert config.database.dsn == "db.example.com:1521/ORCL"
    assert config.database.url == ""
    assert config.server_host == "127.0.0.1"
    assert config.server_port == 8080
    assert config.logging.level == "DEBUG"


def test_load_config_defaults(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[database]\nurl = sqlite://\n")

    config = load_config(path)

    assert config.database.engine_url == "sqlite://"
    assert config.server_host == "0.0.0.0"
    assert config.server_port == 3000
    assert config.logging.level == "INFO"


def test_write_config_round_trips(tmp_path):
    path = tmp_path / "nested" / "config.ini"

    write_config(
        path,
        DatabaseConfig(user="lib", password="pw", dsn="localhost:1521/XEPDB1"),
        ServerConfig(host="127.0.0.1", port=3100),
    )
    config = load_config(path)

    assert config.database.user == "lib"
    assert config.database.dsn == "localhost:1521/XEPDB1"
    assert config.server_port == 3100


def test_get_config_is_cached(tmp_path, monkeypatch):
    path = tmp_path / "config.ini"
    path.write_text("[server]\nport = 4000\n")
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", path)
    config_module.reset_config_cache()

    first = config_module.get_config()
    path.write_text("[server]\nport = 5000\n")
    second = config_module.get_config()

    assert first is second
    assert second.server_port == 4000
    config_module.reset_config_cache()
