from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

OutcomeKind = Literal["success", "validation_error", "persistence_error", "not_found"]

class ActionState(BaseModel):
    """What a failed mutation hands back for display next to the form."""

    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None

class MutationOutcome(BaseModel):
    """Result of one create/update/delete call.

    Side effects are not performed here. `revalidate` lists the view paths
    whose cached rendering must be dropped, and `redirect` is the route the
    caller should navigate to afterwards. Invalidation always comes first.
    """

    kind: OutcomeKind
    state: Optional[ActionState] = None
    revalidate: List[str] = Field(default_factory=list)
    redirect: Optional[str] = None
    # internal only, never shown to the user
    error_code: Optional[str] = None
    invoice_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind == "success"
