from typing import List, Dict, Any
from psycopg import Connection

# Customers offered in the invoice form's select, alphabetical.
def list_customers(conn: Connection, limit: int = 500, offset: int = 0) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT id::text AS id, name, email
            FROM customers
            ORDER BY name ASC
            LIMIT %s OFFSET %s
            """,
            (limit, offset),
        )
        columns = [c[0] for c in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]
