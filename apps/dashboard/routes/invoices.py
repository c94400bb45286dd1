from typing import Optional, List, Dict, Any
from fastapi import APIRouter, Depends, Form, HTTPException, Query
from fastapi.responses import JSONResponse, RedirectResponse, Response
from psycopg import Connection

from ..db import get_conn
from ..models.invoice import InvoiceDetail, InvoiceListItem, from_cents, parse_invoice_id
from ..models.outcome import MutationOutcome
from ..repos.invoices import list_invoices as repo_list_invoices, get_invoice
from ..services import invoice_actions
from ..services.view_cache import ViewCache, get_view_cache
from ..settings import settings

router = APIRouter(prefix="/dashboard/invoices", tags=["invoices"])

STATUS_BY_KIND = {
    "validation_error": 422,
    "not_found": 404,
    "persistence_error": 500,
}


def _form_fields(customer_id: Optional[str], amount: Optional[str], status: Optional[str]) -> Dict[str, Optional[str]]:
    return {"customerId": customer_id, "amount": amount, "status": status}


# Applies the outcome's effects in order: invalidate first, then navigate.
def _respond(outcome: MutationOutcome, cache: ViewCache) -> Response:
    if not outcome.ok:
        return JSONResponse(
            status_code=STATUS_BY_KIND[outcome.kind],
            content=outcome.state.model_dump(exclude_none=True),
        )
    cache.revalidate_all(outcome.revalidate)
    if outcome.redirect:
        return RedirectResponse(outcome.redirect, status_code=303)
    return Response(status_code=204)


def _dollars(row: Dict[str, Any]) -> Dict[str, Any]:
    return {**row, "amount": from_cents(row["amount"])}


# Invoice list view, served from the view cache until a mutation revalidates it
@router.get("", response_model=List[InvoiceListItem])
def list_invoices(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    conn: Connection = Depends(get_conn),
    cache: ViewCache = Depends(get_view_cache),
):
    # only the default page is cached under the bare route path
    if limit == 50 and offset == 0:
        rows = cache.get_or_load(settings.INVOICES_PATH, lambda: repo_list_invoices(conn))
    else:
        rows = repo_list_invoices(conn, limit=limit, offset=offset)
    return [_dollars(r) for r in rows]


# Single invoice for the edit form, amount back in dollars
@router.get("/{invoice_id}", response_model=InvoiceDetail)
def get_invoice_by_id(invoice_id: str, conn: Connection = Depends(get_conn)):
    row_id = parse_invoice_id(invoice_id)
    inv = get_invoice(conn, row_id) if row_id else None
    if not inv:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return _dollars(inv)


@router.post("/create")
def create_invoice(
    customer_id: Optional[str] = Form(None, alias="customerId"),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    conn: Connection = Depends(get_conn),
    cache: ViewCache = Depends(get_view_cache),
):
    outcome = invoice_actions.create_invoice(conn, _form_fields(customer_id, amount, status))
    return _respond(outcome, cache)


@router.post("/{invoice_id}/update")
def update_invoice(
    invoice_id: str,
    customer_id: Optional[str] = Form(None, alias="customerId"),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    conn: Connection = Depends(get_conn),
    cache: ViewCache = Depends(get_view_cache),
):
    outcome = invoice_actions.update_invoice(conn, invoice_id, _form_fields(customer_id, amount, status))
    return _respond(outcome, cache)


@router.post("/{invoice_id}/delete")
def delete_invoice(
    invoice_id: str,
    conn: Connection = Depends(get_conn),
    cache: ViewCache = Depends(get_view_cache),
):
    outcome = invoice_actions.delete_invoice(conn, invoice_id)
    return _respond(outcome, cache)
