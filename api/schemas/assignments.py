"""
Pydantic schemas for assignment endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from lodging.ledger import AssignmentLedger


class AssignRequest(BaseModel):
    guest_id: str
    bed_id: str


class UnassignRequest(BaseModel):
    """Unassign one guest, or everyone on the listed beds."""

    guest_id: str | None = None
    bed_ids: list[str] = Field(default_factory=list)


class SwapRequest(BaseModel):
    guest_id_1: str
    guest_id_2: str


class LedgerState(BaseModel):
    """Committed map, suggestion overlay and history availability."""

    assignments: dict[str, str]
    suggestions: dict[str, str]
    assigned_count: int
    unassigned_count: int
    can_undo: bool
    can_redo: bool
    history_depth: int


class MutationResponse(BaseModel):
    changed: bool
    state: LedgerState


def ledger_state(ledger: AssignmentLedger) -> LedgerState:
    return LedgerState(
        assignments=dict(ledger.assignments),
        suggestions=dict(ledger.suggested_assignments),
        assigned_count=ledger.assigned_count,
        unassigned_count=ledger.unassigned_count,
        can_undo=ledger.can_undo,
        can_redo=ledger.can_redo,
        history_depth=ledger.history_depth,
    )
