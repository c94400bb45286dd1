from fastapi import APIRouter, Depends, Query
from psycopg import Connection
from typing import List

from ..db import get_conn
from ..models.invoice import Customer
from ..repos.customers import list_customers as repo_list_customers

router = APIRouter(prefix="/dashboard/customers", tags=["customers"])

# Customer choices for the invoice form
@router.get("", response_model=List[Customer])
def list_customers(
    limit: int = Query(500, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    conn: Connection = Depends(get_conn),
):
    return repo_list_customers(conn, limit=limit, offset=offset)
