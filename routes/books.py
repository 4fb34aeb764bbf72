"""FastAPI router for books: list, search, add, reprice, delete."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from backend.database import db_operation
from backend.models import BookCreate, BookValueUpdate

from . import repository as repo


router = APIRouter(tags=["books"])


@router.get("", include_in_schema=False)
@router.get("/")
def list_books():
    """All books ordered by id."""
    with db_operation("Failed to fetch books") as conn:
        return repo.list_books(conn)


@router.get("/search")
def search_books(title: Optional[str] = None):
    """Books whose title contains `title` (case-insensitive)."""
    with db_operation("Failed to search books") as conn:
        return repo.search_books(conn, title)


@router.post("", include_in_schema=False)
@router.post("/")
def add_book(body: Optional[BookCreate] = None):
    """Insert a book through SP_ADD_NEW_BOOK."""
    body = body or BookCreate()
    with db_operation("Failed to add book") as conn:
        new_book_id = repo.add_book(conn, body)
    return {"message": "Book added successfully", "new_book_id": new_book_id}


@router.put("/value")
def update_book_value(body: Optional[BookValueUpdate] = None):
    """Change a book's price, looked up by title."""
    body = body or BookValueUpdate()
    with db_operation("Failed to update price") as conn:
        repo.update_book_value(conn, body)
    return {"message": "Book price updated successfully"}


@router.delete("/{book_id}")
def delete_book(book_id: str):
    with db_operation("Failed to delete book") as conn:
        repo.delete_book(conn, book_id)
    return {"message": "Book deleted"}
