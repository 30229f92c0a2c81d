"""Module instance data models.

This module defines the persisted record shape of a module instance and the
static module catalogue entry.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-12
Version: 1.0.0
License: MIT
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from .outcome import Outcome, normalize_outcome


class ModuleDefinition(BaseModel):
    """Catalogue entry for an assessment module.

    Attributes:
        key: Module key (e.g. "A4_MANAGEMENT_CONTROLS").
        name: Display name.
        doc_types: Document types the module appears in.
        order: Display order within a document.
        requires: Module keys this module reads (never writes).
    """
    key: str
    name: str
    doc_types: List[str] = Field(default_factory=list)
    order: int = 0
    requires: List[str] = Field(default_factory=list)


class ModuleInstanceRecord(BaseModel):
    """Persisted module instance.

    The `data` field is the raw FieldSet dict; callers wrap it with
    `models.field_set.FieldSet` when they need typed access.
    """
    id: str = Field(..., description="Module instance id")
    document_id: str = Field(..., description="Owning assessment document")
    module_key: str = Field(..., description="Module key")
    data: Dict[str, Any] = Field(default_factory=dict, description="FieldSet contents")
    outcome: Optional[Outcome] = Field(None, description="Confirmed outcome")
    assessor_notes: str = Field("", description="Free-text assessor notes")
    completed_at: Optional[str] = Field(None, description="Completion timestamp")
    updated_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="Last save timestamp",
    )

    @field_validator("outcome", mode="before")
    @classmethod
    def _accept_legacy_outcome(cls, value):
        if isinstance(value, Outcome):
            return value
        return normalize_outcome(value)

    @field_validator("assessor_notes", mode="before")
    @classmethod
    def _notes_not_null(cls, value):
        return value or ""


# Made with Bob
