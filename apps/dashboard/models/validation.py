from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from .invoice import InvoiceForm

class ValidationResult(BaseModel):
    success: bool
    data: Optional[InvoiceForm] = None
    # field name -> messages, in the order they were raised
    field_errors: Dict[str, List[str]] = Field(default_factory=dict, serialization_alias="fieldErrors")
