"""FastAPI router for loans (orders and their order lines)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from backend.database import db_operation
from backend.models import LoanCreate

from . import repository as repo


router = APIRouter(tags=["loans"])


@router.get("", include_in_schema=False)
@router.get("/")
def list_loans():
    """Every order line, returned or not."""
    with db_operation("Failed to fetch loans") as conn:
        return repo.list_loans(conn)


@router.get("/active")
def list_active_loans():
    """Order lines not returned yet."""
    with db_operation("Failed to fetch active loans") as conn:
        return repo.list_active_loans(conn)


@router.get("/overdue")
def list_overdue_loans():
    """Order lines not returned and past their due date."""
    with db_operation("Failed to fetch overdue loans") as conn:
        return repo.list_overdue_loans(conn)


@router.post("", include_in_schema=False)
@router.post("/")
def place_loan(body: Optional[LoanCreate] = None):
    """Lend a book through SP_PLACE_NEW_ORDER."""
    body = body or LoanCreate()
    with db_operation("Failed to place loan") as conn:
        order_id = repo.place_loan(conn, body)
    return {
        "message": "Loan placed successfully via SP_PLACE_NEW_ORDER",
        "order_id": order_id,
    }


@router.post("/{order_id}/return")
def return_loan(order_id: str):
    with db_operation("Failed to return book") as conn:
        repo.return_loan(conn, order_id)
    return {"message": "Book returned successfully"}
