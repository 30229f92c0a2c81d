"""Outcome data model.

This module defines the closed outcome vocabulary shared by every
assessment module, and the suggestion object returned by the outcome
resolver.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-12
Version: 1.0.0
License: MIT
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Outcome(str, Enum):
    """Compliance verdict for a module instance."""
    COMPLIANT = "compliant"
    ACCEPTABLE = "acceptable"
    MINOR_DEFICIENCY = "minor_deficiency"
    MATERIAL_DEFICIENCY = "material_deficiency"
    INFORMATION_GAP = "information_gap"


# Tags written by earlier versions of the forms
LEGACY_OUTCOME_TAGS = {
    "info_gap": Outcome.INFORMATION_GAP,
    "minor_def": Outcome.MINOR_DEFICIENCY,
    "material_def": Outcome.MATERIAL_DEFICIENCY,
}


def normalize_outcome(value: Optional[str]) -> Optional[Outcome]:
    """Map a stored outcome tag (current or legacy) onto the closed enum.

    Args:
        value: Raw tag as persisted, may be None.

    Returns:
        The matching Outcome, or None for empty / unrecognised tags
        (including the legacy "na" tag, which carries no verdict).

    Example:
        >>> normalize_outcome("minor_def")
        <Outcome.MINOR_DEFICIENCY: 'minor_deficiency'>
    """
    if not value:
        return None
    if value in LEGACY_OUTCOME_TAGS:
        return LEGACY_OUTCOME_TAGS[value]
    try:
        return Outcome(value)
    except ValueError:
        return None


class OutcomeSuggestion(BaseModel):
    """Suggested outcome with the rationale shown to the assessor.

    Attributes:
        outcome: Suggested verdict.
        rationale: Human-readable explanation built from the inspected fields.
        rule_id: Identifier of the rule that fired.
    """
    outcome: Outcome = Field(..., description="Suggested outcome")
    rationale: str = Field(..., description="Why the outcome was suggested")
    rule_id: str = Field(..., description="Rule that produced the suggestion")

# Made with Bob
