"""
Invoice mutations: create, update and delete.

Each action validates its input once, runs a single statement through the
repo layer and returns a MutationOutcome describing what the HTTP layer
should do next (which cached views to drop, where to redirect). Nothing
here touches the cache or the response directly, so the actions can be
exercised with any object that looks like a psycopg Connection.
"""
import logging
from datetime import date
from typing import Callable, Mapping, Optional

import psycopg
from psycopg import Connection

from ..models.invoice import parse_invoice_id, to_cents
from ..models.outcome import ActionState, MutationOutcome
from ..repos import invoices as repo
from ..settings import settings
from .validator import validate_invoice_form

logger = logging.getLogger(__name__)


def _error_code(exc: psycopg.Error) -> str:
    # SQLSTATE when the server sent one, otherwise the driver-side error class.
    return exc.sqlstate or type(exc).__name__


def _persistence_failure(verb: str, exc: psycopg.Error, invoice_id: Optional[str] = None) -> MutationOutcome:
    code = _error_code(exc)
    logger.error("failed to %s invoice %s [%s]: %s", verb.lower(), invoice_id or "", code, exc)
    return MutationOutcome(
        kind="persistence_error",
        state=ActionState(message=f"Database Error: Failed to {verb} Invoice."),
        error_code=code,
        invoice_id=invoice_id,
    )


def create_invoice(
    conn: Connection,
    raw: Mapping[str, Optional[str]],
    today: Callable[[], date] = date.today,
) -> MutationOutcome:
    result = validate_invoice_form(raw)
    if not result.success:
        return MutationOutcome(
            kind="validation_error",
            state=ActionState(
                errors=result.field_errors,
                message="Missing Fields. Failed to Create Invoice.",
            ),
        )

    form = result.data
    amount_cents = to_cents(form.amount)
    try:
        with conn.transaction():
            invoice_id = repo.insert_invoice(
                conn,
                customer_id=form.customer_id,
                amount=amount_cents,
                status=form.status,
                invoice_date=today(),
            )
    except psycopg.Error as exc:
        return _persistence_failure("Create", exc)

    logger.info("created invoice %s (%s cents, %s)", invoice_id, amount_cents, form.status)
    return MutationOutcome(
        kind="success",
        revalidate=[settings.INVOICES_PATH],
        redirect=settings.INVOICES_PATH,
        invoice_id=invoice_id,
    )


def update_invoice(conn: Connection, invoice_id: str, raw: Mapping[str, Optional[str]]) -> MutationOutcome:
    result = validate_invoice_form(raw)
    if not result.success:
        return MutationOutcome(
            kind="validation_error",
            state=ActionState(
                errors=result.field_errors,
                message="Missing Fields. Failed to Update Invoice.",
            ),
            invoice_id=invoice_id,
        )

    form = result.data
    amount_cents = to_cents(form.amount)
    row_id = parse_invoice_id(invoice_id)
    if row_id is None:
        # not a UUID, so no row can match
        updated = 0
    else:
        try:
            with conn.transaction():
                updated = repo.update_invoice(
                    conn,
                    row_id,
                    customer_id=form.customer_id,
                    amount=amount_cents,
                    status=form.status,
                )
        except psycopg.Error as exc:
            return _persistence_failure("Update", exc, invoice_id)

    if updated == 0:
        logger.warning("update matched no invoice with id %s", invoice_id)
        return MutationOutcome(
            kind="not_found",
            state=ActionState(message="Invoice Not Found. Failed to Update Invoice."),
            invoice_id=invoice_id,
        )

    logger.info("updated invoice %s (%s cents, %s)", invoice_id, amount_cents, form.status)
    return MutationOutcome(
        kind="success",
        revalidate=[settings.INVOICES_PATH],
        redirect=settings.INVOICES_PATH,
        invoice_id=invoice_id,
    )


def delete_invoice(conn: Connection, invoice_id: str) -> MutationOutcome:
    # Called from the list view itself, so there is nowhere to redirect to.
    row_id = parse_invoice_id(invoice_id)
    if row_id is None:
        deleted = 0
    else:
        try:
            with conn.transaction():
                deleted = repo.delete_invoice(conn, row_id)
        except psycopg.Error as exc:
            return _persistence_failure("Delete", exc, invoice_id)

    if deleted == 0:
        logger.info("delete matched no invoice with id %s; already gone", invoice_id)
    else:
        logger.info("deleted invoice %s", invoice_id)
    return MutationOutcome(
        kind="success",
        revalidate=[settings.INVOICES_PATH],
        invoice_id=invoice_id,
    )
