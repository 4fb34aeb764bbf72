"""HTTP route groups for the Library API.

Each group is independent and talks to the database only through
`routes.repository`.
"""

from .books import router as books_router
from .loans import router as loans_router
from .members import router as members_router
from .reports import router as reports_router

__all__ = ["books_router", "loans_router", "members_router", "reports_router"]
