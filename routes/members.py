"""FastAPI router for members (library patrons)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from backend.database import db_operation
from backend.models import MemberCreate, MemberUpdate

from . import repository as repo


router = APIRouter(tags=["members"])


@router.get("", include_in_schema=False)
@router.get("/")
def list_members():
    with db_operation("Failed to fetch members") as conn:
        return repo.list_members(conn)


@router.post("", include_in_schema=False)
@router.post("/")
def add_member(body: Optional[MemberCreate] = None):
    """Register a patron through SP_UPSERT_CUSTOMER (insert path)."""
    body = body or MemberCreate()
    with db_operation("Failed to add member") as conn:
        new_id = repo.add_member(conn, body)
    return {"message": "Member registered successfully!", "new_customer_id": new_id}


@router.put("/{cust_id}")
def update_member(cust_id: str, body: Optional[MemberUpdate] = None):
    """Update a patron's email, phone and address."""
    body = body or MemberUpdate()
    with db_operation("Failed to update member") as conn:
        updated_id = repo.update_member(conn, cust_id, body)
    return {"message": "Member updated successfully!", "updated_id": updated_id}
