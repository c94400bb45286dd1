from typing import Optional, List, Dict, Any
from datetime import date
from psycopg import Connection

# Each mutation below is exactly one statement; the caller owns the transaction.

# Inserts a new invoice and returns its generated id.
# `amount` is in cents.
def insert_invoice(conn: Connection, *, customer_id: str, amount: int, status: str, invoice_date: date) -> str:
    sql = """
    INSERT INTO invoices (id, customer_id, amount, status, date)
    VALUES (gen_random_uuid(), %(customer_id)s, %(amount)s, %(status)s, %(date)s)
    RETURNING id;
    """
    with conn.cursor() as cur:
        cur.execute(sql, {
            "customer_id": customer_id,
            "amount": amount,
            "status": status,
            "date": invoice_date,
        })
        return str(cur.fetchone()[0])

# Updates the mutable columns of an invoice. `id` and `date` are never touched.
# Returns the number of rows affected (0 when no such invoice exists).
def update_invoice(conn: Connection, invoice_id: str, *, customer_id: str, amount: int, status: str) -> int:
    sql = """
    UPDATE invoices
    SET customer_id = %(customer_id)s, amount = %(amount)s, status = %(status)s
    WHERE id = %(id)s
    """
    with conn.cursor() as cur:
        cur.execute(sql, {
            "id": invoice_id,
            "customer_id": customer_id,
            "amount": amount,
            "status": status,
        })
        return cur.rowcount

# Hard delete. Returns the number of rows removed.
def delete_invoice(conn: Connection, invoice_id: str) -> int:
    with conn.cursor() as cur:
        cur.execute("DELETE FROM invoices WHERE id = %s", (invoice_id,))
        return cur.rowcount


# Lists invoices newest first, with the customer name for display.
def list_invoices(conn: Connection, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT i.id::text AS id, i.customer_id::text AS customer_id, c.name AS customer_name, i.amount, i.status, i.date
            FROM invoices i
            LEFT JOIN customers c ON c.id = i.customer_id
            ORDER BY i.date DESC, i.id
            LIMIT %s OFFSET %s
            """,
            (limit, offset),
        )
        columns = [col[0] for col in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]


# Fetches a single invoice row. Returns None if not found.
def get_invoice(conn: Connection, invoice_id: str) -> Optional[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT id::text AS id, customer_id::text AS customer_id, amount, status, date
            FROM invoices WHERE id = %s
            """,
            (invoice_id,),
        )
        row = cur.fetchone()
        if not row:
            return None
        columns = [c[0] for c in cur.description]
        return dict(zip(columns, row))
