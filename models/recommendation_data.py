"""Data models for the recommendations register.

This module contains Pydantic models for register entries, both the ones
generated automatically from low ratings and the ones typed by an assessor.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-12
Version: 1.1.0
License: MIT
"""

import uuid
from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, Field

Priority = Literal["critical", "high", "medium", "low"]
Status = Literal["open", "in_progress", "complete"]


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RecommendationEntry(BaseModel):
    """One row of the recommendations register.

    Attributes:
        id: Register entry identifier.
        document_id: Assessment document the entry belongs to.
        source_module_key: Module whose rating triggered the entry.
        canonical_key: Risk factor the entry addresses.
        triggering_rating: Rating that caused auto-generation, if any.
        title: Short title.
        detail: Recommendation text.
        priority: Priority tier.
        status: Workflow status.
        is_auto_generated: False once an assessor edits the entry by hand.
        owner_id: Optional owner.
        target_date: Optional target date (ISO format).
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    document_id: str
    source_module_key: str
    canonical_key: str
    triggering_rating: Optional[int] = Field(None, ge=1, le=5)
    title: str
    detail: str
    priority: Priority = "medium"
    status: Status = "open"
    is_auto_generated: bool = False
    owner_id: Optional[str] = None
    target_date: Optional[str] = None
    created_at: str = Field(default_factory=_utc_now)
    updated_at: str = Field(default_factory=_utc_now)

    def matches(self, document_id: str, module_key: str, canonical_key: str) -> bool:
        """True when the entry belongs to the given (document, module, factor) key."""
        return (
            self.document_id == document_id
            and self.source_module_key == module_key
            and self.canonical_key == canonical_key
        )


class RecommendationUpdate(BaseModel):
    """Manual edit to a register entry. Unset fields are left unchanged."""
    title: Optional[str] = None
    detail: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    owner_id: Optional[str] = None
    target_date: Optional[str] = None


# Made with Bob
