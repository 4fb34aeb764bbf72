"""Data access layer for the route groups: every SQL statement and procedure call in one place.

Each function performs one logical database operation on a connection
checked out by the caller. Mutations commit before returning.
"""

from __future__ import annotations

from backend.models import BookCreate, BookValueUpdate, LoanCreate, MemberCreate, MemberUpdate


def _rows_as_dicts(cur) -> list[dict]:
    """Fetch all rows keyed by the column names the driver reports."""
    columns = [col[0] for col in cur.description]
    cur.rowfactory = lambda *values: dict(zip(columns, values))
    return cur.fetchall()


def _query(conn, sql: str, params: dict | None = None) -> list[dict]:
    with conn.cursor() as cur:
        cur.execute(sql, params or {})
        return _rows_as_dicts(cur)


# --- Books ---


LIST_BOOKS_SQL = """
    SELECT
        book_id, title, author_id, pub_id, category_id,
        lang_id, value, total_copies, available_copies
    FROM BK_BOOKS
    ORDER BY book_id
"""

SEARCH_BOOKS_SQL = """
    SELECT *
    FROM BK_BOOKS
    WHERE LOWER(title) LIKE '%' || LOWER(:title) || '%'
"""


def list_books(conn) -> list[dict]:
    return _query(conn, LIST_BOOKS_SQL)


def search_books(conn, title: str | None) -> list[dict]:
    """Case-insensitive substring match on title. NULL title matches every titled book."""
    return _query(conn, SEARCH_BOOKS_SQL, {"title": title})


def add_book(conn, book: BookCreate):
    """SP_ADD_NEW_BOOK; returns the generated book id (OUT parameter)."""
    with conn.cursor() as cur:
        book_id = cur.var(int)
        cur.callproc(
            "SP_ADD_NEW_BOOK",
            [
                book.title,
                book.author_name,
                book.publisher_name,
                book.category_name,
                book.language_name,
                book.value,
                book.total_copies,
                book.available_copies,
                book_id,
            ],
        )
    conn.commit()
    return book_id.getvalue()


def update_book_value(conn, update: BookValueUpdate) -> None:
    with conn.cursor() as cur:
        cur.callproc("PR_UPDATE_BOOK_VALUE", [update.title, update.value])
    conn.commit()


def delete_book(conn, book_id: str) -> None:
    with conn.cursor() as cur:
        cur.execute("DELETE FROM BK_BOOKS WHERE book_id = :id", {"id": book_id})
    conn.commit()


# --- Members ---


LIST_MEMBERS_SQL = """
    SELECT
        cust_id, first_name, last_name, email, phone,
        address, city, province, zip, join_date
    FROM BK_CUSTOMERS
    ORDER BY cust_id
"""


def list_members(conn) -> list[dict]:
    return _query(conn, LIST_MEMBERS_SQL)


def _upsert_customer(conn, cust_id, member: MemberCreate):
    """SP_UPSERT_CUSTOMER inserts when cust_id is NULL, updates otherwise."""
    with conn.cursor() as cur:
        out_id = cur.var(int)
        cur.callproc(
            "SP_UPSERT_CUSTOMER",
            [
                cust_id,
                member.first_name,
                member.last_name,
                member.email,
                member.phone,
                member.address,
                member.city,
                member.province,
                member.zip,
                out_id,
            ],
        )
    conn.commit()
    return out_id.getvalue()


def add_member(conn, member: MemberCreate):
    """Register a new customer; returns the generated customer id."""
    return _upsert_customer(conn, None, member)


def update_member(conn, cust_id: str, update: MemberUpdate):
    """Update contact details; name and location fields are passed as NULL."""
    contact_only = MemberCreate(email=update.email, phone=update.phone, address=update.address)
    return _upsert_customer(conn, cust_id, contact_only)


# --- Loans ---


LIST_LOANS_SQL = """
    SELECT
        o.order_id, o.cust_id, o.order_date, o.due_date,
        d.book_id, d.quantity, d.unit_price, d.total,
        d.return_date, d.fine, d.fine_status
    FROM BK_ORDERS o
    JOIN BK_ORDERDETAILS d ON o.order_id = d.order_id
    ORDER BY o.order_id
"""

ACTIVE_LOANS_SQL = """
    SELECT
        o.order_id, o.cust_id, o.order_date, o.due_date,
        d.book_id, d.quantity, d.return_date
    FROM BK_ORDERS o
    JOIN BK_ORDERDETAILS d ON o.order_id = d.order_id
    WHERE d.return_date IS NULL
    ORDER BY o.order_id
"""

OVERDUE_LOANS_SQL = """
    SELECT
        o.order_id, o.cust_id, d.book_id, o.due_date,
        d.return_date, d.fine, d.fine_status
    FROM BK_ORDERS o
    JOIN BK_ORDERDETAILS d ON o.order_id = d.order_id
    WHERE d.return_date IS NULL
      AND o.due_date < SYSDATE
    ORDER BY o.order_id
"""

RETURN_LOAN_SQL = """
    UPDATE BK_ORDERDETAILS
    SET return_date = SYSDATE
    WHERE order_id = :oid
"""


def list_loans(conn) -> list[dict]:
    return _query(conn, LIST_LOANS_SQL)


def list_active_loans(conn) -> list[dict]:
    return _query(conn, ACTIVE_LOANS_SQL)


def list_overdue_loans(conn) -> list[dict]:
    return _query(conn, OVERDUE_LOANS_SQL)


def place_loan(conn, loan: LoanCreate):
    """SP_PLACE_NEW_ORDER (named parameters); returns the new order id."""
    with conn.cursor() as cur:
        order_id = cur.var(int)
        cur.callproc(
            "SP_PLACE_NEW_ORDER",
            keyword_parameters={
                "p_first_name": loan.first_name,
                "p_last_name": loan.last_name,
                "p_email": loan.email,
                "p_book_title": loan.book_title,
                "p_quantity": loan.quantity,
                "p_order_id": order_id,
            },
        )
    conn.commit()
    return order_id.getvalue()


def return_loan(conn, order_id: str) -> None:
    """Stamp return_date on every line of the order; fines come from triggers."""
    with conn.cursor() as cur:
        cur.execute(RETURN_LOAN_SQL, {"oid": order_id})
    conn.commit()


# --- Reports ---


def most_borrowed_by_year(conn, year) -> list[str]:
    """Run SP_MOST_BORROWED_BY_YEAR and collect what it prints via DBMS_OUTPUT."""
    lines: list[str] = []
    with conn.cursor() as cur:
        cur.callproc("dbms_output.enable", [None])
        cur.callproc("SP_MOST_BORROWED_BY_YEAR", [year])

        line_var = cur.var(str)
        status_var = cur.var(int)
        while True:
            cur.callproc("dbms_output.get_line", (line_var, status_var))
            if status_var.getvalue() != 0:
                break
            lines.append(line_var.getvalue())
    return lines
