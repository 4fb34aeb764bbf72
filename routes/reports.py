"""FastAPI router for reports built by stored procedures."""

from __future__ import annotations

import math
import re

from fastapi import APIRouter

from backend.database import db_operation
from backend.errors import InvalidParameterError

from . import repository as repo


router = APIRouter(tags=["reports"])

# ASCII decimal literal with optional sign and exponent; nothing else is a year
NUMERIC_RE = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)


def parse_year(raw: str) -> int | float:
    """Parse a numeric path segment; integral values come back as int."""
    if not NUMERIC_RE.fullmatch(raw):
        raise InvalidParameterError("Year must be a number")
    value = float(raw)
    if not math.isfinite(value):
        raise InvalidParameterError("Year must be a number")
    return int(value) if value.is_integer() else value


@router.get("/most-borrowed/{year}")
def most_borrowed(year: str):
    """Most borrowed books of a year, as printed by SP_MOST_BORROWED_BY_YEAR."""
    year_value = parse_year(year)
    with db_operation("Failed to run report") as conn:
        lines = repo.most_borrowed_by_year(conn, year_value)
    return {
        "year": year_value,
        "message": "Report generated successfully",
        "result": lines,
    }
