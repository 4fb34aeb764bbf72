"""Config management for the Library API.

Reads `config.ini` from DATA_DIR (beside main.py unless overridden).
"""

from __future__ import annotations

import configparser
import dataclasses
import os
import pathlib
from typing import Optional

from .logging_config import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]

# DATA_DIR holds config.ini and the log file.
# Set via env var for Docker; defaults to PROJECT_ROOT for standalone use.
DATA_DIR = pathlib.Path(os.environ.get("DATA_DIR", str(PROJECT_ROOT)))
DEFAULT_CONFIG_PATH = DATA_DIR / "config.ini"


@dataclasses.dataclass
class DatabaseConfig:
    user: str = ""
    password: str = ""
    dsn: str = "localhost:1521/XEPDB1"
    url: str = ""

    @property
    def engine_url(self) -> str:
        """SQLAlchemy URL; credentials travel as connect args unless `url` is set."""
        return self.url or "oracle+oracledb://@"

    @property
    def connect_args(self) -> dict:
        if self.url:
            return {}
        return {"user": self.user, "password": self.password, "dsn": self.dsn}


@dataclasses.dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000


@dataclasses.dataclass
class LoggingConfig:
    level: str = "INFO"
    file: pathlib.Path = dataclasses.field(default_factory=lambda: DATA_DIR / "library-api.log")
    max_size_mb: int = 5
    backups: int = 3

    @property
    def max_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024


@dataclasses.dataclass
class LibraryApiConfig:
    database: DatabaseConfig
    server: ServerConfig
    logging: LoggingConfig

    @property
    def server_host(self) -> str:
        return self.server.host

    @property
    def server_port(self) -> int:
        return self.server.port


def load_config(config_path: Optional[pathlib.Path] = None) -> LibraryApiConfig:
    """Load configuration from config.ini.

    Defaults to `config.ini` in DATA_DIR.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    parser = configparser.ConfigParser()
    parser.read(path)

    database = DatabaseConfig(
        user=parser.get("database", "user", fallback="").strip(),
        password=parser.get("database", "password", fallback=""),
        dsn=parser.get("database", "dsn", fallback="localhost:1521/XEPDB1").strip(),
        url=parser.get("database", "url", fallback="").strip(),
    )

    server = ServerConfig(
        host=parser.get("server", "host", fallback="0.0.0.0"),
        port=parser.getint("server", "port", fallback=3000),
    )

    log_file = pathlib.Path(
        parser.get("logging", "file", fallback="library-api.log").strip()
    ).expanduser()
    if not log_file.is_absolute():
        log_file = DATA_DIR / log_file

    logging_section = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO").strip().upper(),
        file=log_file,
        max_size_mb=parser.getint("logging", "max_size_mb", fallback=5),
        backups=parser.getint("logging", "backups", fallback=3),
    )

    if not database.url and not database.user:
        logger.warning(f"No database user configured in {path}")

    return LibraryApiConfig(database=database, server=server, logging=logging_section)


def write_config(
    config_path: pathlib.Path,
    database: DatabaseConfig,
    server: Optional[ServerConfig] = None,
) -> pathlib.Path:
    """Write a config.ini holding the given database and server settings."""
    server = server or ServerConfig()
    parser = configparser.ConfigParser()

    parser["database"] = {
        "user": database.user,
        "password": database.password,
        "dsn": database.dsn,
    }
    if database.url:
        parser["database"]["url"] = database.url
    parser["server"] = {
        "host": server.host,
        "port": str(server.port),
    }
    parser["logging"] = {
        "level": "INFO",
        "file": "library-api.log",
        "max_size_mb": "5",
        "backups": "3",
    }

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w") as handle:
        parser.write(handle)
    return config_path


_cached_config: Optional[LibraryApiConfig] = None


def get_config() -> LibraryApiConfig:
    """Return the cached config singleton. Loads from disk on first call."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reset_config_cache() -> None:
    """Clear the cached config (useful for tests)."""
    global _cached_config
    _cached_config = None
