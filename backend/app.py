"""FastAPI application for the Library API.

Exposes:
- /api/books    (list, search, add, update price, delete)
- /api/member   (list, register, update contact details)
- /api/loans    (all, active, overdue, place, return)
- /api/reports  (most borrowed books by year)
- /api/health
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from .config import LibraryApiConfig
from .database import check_connection, dispose_db
from .errors import register_error_handlers
from .logging_config import get_logger

from routes import books_router, loans_router, members_router, reports_router

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration for every request."""

    async def dispatch(self, request, call_next):
        request_logger = logging.getLogger("library.request")
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        client_ip = request.client.host if request.client else "unknown"
        request_logger.info(
            'ip="%s" url="%s %s" status=%d duration_ms=%.1f',
            client_ip,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


@asynccontextmanager
async def _lifespan(app: FastAPI):
    async def _print_startup_messages():
        await asyncio.sleep(0.1)
        logger.info("Started server process [" + str(os.getpid()) + "]")
        api_url = getattr(app.state, "api_url", None)
        if api_url:
            logger.info("Library API available at: " + api_url)

    asyncio.create_task(_print_startup_messages())
    yield
    dispose_db()


app = FastAPI(title="Library API", lifespan=_lifespan)
app.add_middleware(RequestLoggingMiddleware)
register_error_handlers(app)

app.include_router(books_router, prefix="/api/books")
app.include_router(members_router, prefix="/api/member")
app.include_router(loans_router, prefix="/api/loans")
app.include_router(reports_router, prefix="/api/reports")


@app.get("/api/health", tags=["health"])
def health():
    """Readiness check: can a pooled connection be checked out?"""
    return {"status": "ok", "database": check_connection()}


class _AccessFilter(logging.Filter):
    """Drop uvicorn access lines for successful requests; keep 4xx/5xx."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except Exception:
            return True
        return not any(
            pattern in msg
            for pattern in (' 200 OK', '" 200', ' 204 No Content', '" 204', ' 304 Not Modified', '" 304')
        )


def run_server(
    config: LibraryApiConfig,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """Run the FastAPI app with Uvicorn. The connection pool must already be initialized."""
    import uvicorn

    effective_host = host or config.server_host
    effective_port = port or config.server_port
    app.state.api_url = f"http://localhost:{effective_port}/api"

    # RequestLoggingMiddleware already logs every request
    logging.getLogger("uvicorn.access").addFilter(_AccessFilter())

    uvicorn.run(
        app,
        host=effective_host,
        port=effective_port,
        log_level="info",
        log_config=None,
    )
