"""Library API CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from backend.config import (
    DEFAULT_CONFIG_PATH,
    DatabaseConfig,
    LibraryApiConfig,
    LoggingConfig,
    ServerConfig,
    load_config,
    write_config,
)
from backend.database import dispose_db, init_db
from backend.app import run_server
from backend.logging_config import setup_logging


__version__ = "0.1.0"

app = typer.Typer(add_completion=False, help="Library management REST API")
logger = logging.getLogger("library")


def _ensure_config() -> LibraryApiConfig:
    try:
        return load_config()
    except FileNotFoundError:
        typer.echo("[ERROR] config.ini not found. Run: library-api init --user USER --password PASS --dsn DSN")
        raise typer.Exit(code=1)


def _setup_logging(log_config: LoggingConfig) -> None:
    setup_logging(
        log_config.level,
        log_file=log_config.file,
        max_bytes=log_config.max_bytes,
        backup_count=log_config.backups,
    )


def _connect(config: LibraryApiConfig) -> None:
    try:
        init_db(config)
    except Exception as exc:
        logger.error(f"Database connection failed: {exc}")
        raise typer.Exit(code=1)


@app.command()
def init(
    user: str = typer.Option(..., "--user", help="Database user"),
    password: str = typer.Option(..., "--password", help="Database password"),
    dsn: str = typer.Option(..., "--dsn", help="Oracle connect string, e.g. host:1521/service"),
    host: str = typer.Option("0.0.0.0", "--host", help="Server host"),
    port: int = typer.Option(3000, "--port", help="Server port"),
) -> None:
    """Write config.ini with database credentials and server address."""
    path = write_config(
        DEFAULT_CONFIG_PATH,
        DatabaseConfig(user=user, password=password, dsn=dsn),
        ServerConfig(host=host, port=port),
    )
    typer.echo(f"[OK] Config created at {path}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Server host"),
    port: Optional[int] = typer.Option(None, "--port", help="Server port"),
) -> None:
    """Connect to the database, then start the API server."""
    config = _ensure_config()
    _setup_logging(config.logging)

    # Listen only once the pool is up
    _connect(config)
    try:
        run_server(config, host=host, port=port)
    except KeyboardInterrupt:
        pass
    finally:
        dispose_db()


@app.command()
def check() -> None:
    """Check that the configured database is reachable."""
    config = _ensure_config()
    _setup_logging(config.logging)

    _connect(config)
    dispose_db()
    typer.echo("[OK] Database reachable")


if __name__ == "__main__":
    app()
