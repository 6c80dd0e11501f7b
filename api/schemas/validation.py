"""
Pydantic schemas for validation endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from lodging.validator import ValidationIssue


class WarningsResponse(BaseModel):
    """bed_id -> warnings for every committed assignment with any."""

    warnings: dict[str, list[ValidationIssue]] = Field(default_factory=dict)
    total: int = 0


class GuestWarningsResponse(BaseModel):
    guest_id: str
    warnings: list[ValidationIssue]
