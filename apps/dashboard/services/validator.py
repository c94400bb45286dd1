import logging
from typing import Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..models.invoice import InvoiceForm
from ..models.validation import ValidationResult

logger = logging.getLogger(__name__)

# One user-facing message per form field, whatever the underlying pydantic error was.
FIELD_MESSAGES: Dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

FORM_FIELDS = tuple(FIELD_MESSAGES)


def validate_invoice_form(raw: Mapping[str, Optional[str]]) -> ValidationResult:
    """
    Validate a submitted invoice form.

    Only `customerId`, `amount` and `status` are read from `raw`; anything
    else in the mapping (including `id` or `date`) is ignored. All three
    fields are checked before returning, so the caller gets every problem at
    once rather than just the first.
    """
    payload = {name: raw.get(name) for name in FORM_FIELDS}
    try:
        form = InvoiceForm.model_validate(payload)
    except ValidationError as exc:
        field_errors: Dict[str, List[str]] = {}
        for err in exc.errors():
            field = _field_name(err.get("loc", ()))
            message = FIELD_MESSAGES.get(field, err.get("msg", "Invalid value."))
            messages = field_errors.setdefault(field, [])
            if message not in messages:
                messages.append(message)
        logger.info("invoice form rejected: %s", ", ".join(field_errors))
        return ValidationResult(success=False, field_errors=field_errors)
    return ValidationResult(success=True, data=form)


def _field_name(loc) -> str:
    if not loc:
        return "__all__"
    name = str(loc[0])
    # pydantic reports the python name when the alias was not used
    return "customerId" if name == "customer_id" else name
