"""SQLModel request bodies for the Library API.

Fields accept any JSON value. Whatever the client sends is bound as-is
(missing values as NULL) and Oracle decides what is valid. Trailing
comments name the column type the procedure expects.
"""

from typing import Any, Optional

from sqlmodel import SQLModel


class BookCreate(SQLModel):
    title: Optional[Any] = None  # VARCHAR2
    author_name: Optional[Any] = None  # VARCHAR2
    publisher_name: Optional[Any] = None  # VARCHAR2
    category_name: Optional[Any] = None  # VARCHAR2
    language_name: Optional[Any] = None  # VARCHAR2
    value: Optional[Any] = None  # NUMBER
    total_copies: Optional[Any] = None  # NUMBER
    available_copies: Optional[Any] = None  # NUMBER


class BookValueUpdate(SQLModel):
    title: Optional[Any] = None  # VARCHAR2
    value: Optional[Any] = None  # NUMBER


class MemberContact(SQLModel):
    email: Optional[Any] = None
    phone: Optional[Any] = None
    address: Optional[Any] = None


class MemberCreate(MemberContact):
    first_name: Optional[Any] = None
    last_name: Optional[Any] = None
    city: Optional[Any] = None
    province: Optional[Any] = None
    zip: Optional[Any] = None


class MemberUpdate(MemberContact):
    """Only contact details can change after registration."""


class LoanCreate(SQLModel):
    first_name: Optional[Any] = None  # VARCHAR2
    last_name: Optional[Any] = None  # VARCHAR2
    email: Optional[Any] = None  # VARCHAR2
    book_title: Optional[Any] = None  # VARCHAR2
    quantity: Optional[Any] = None  # NUMBER
