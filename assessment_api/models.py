"""Pydantic models for API requests and responses.

This module defines the data models used for API request/response validation.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from models.module_instance import ModuleDefinition, ModuleInstanceRecord
from models.outcome import Outcome, OutcomeSuggestion
from models.recommendation_data import Priority, RecommendationEntry
from models.score_factor import ScoreBreakdown


class ModuleCatalogResponse(BaseModel):
    """Response model for the module catalogue."""
    total_modules: int = Field(..., description="Number of catalogued modules")
    modules: List[ModuleDefinition] = Field(..., description="Module definitions in display order")


class CreateInstanceRequest(BaseModel):
    """Request model for creating a module instance."""
    module_key: str = Field(..., description="Module key (e.g., 'A4_MANAGEMENT_CONTROLS')")
    data: Dict[str, Any] = Field(default_factory=dict, description="Initial field values")


class InstanceResponse(BaseModel):
    """Response model for a loaded module instance."""
    record: ModuleInstanceRecord = Field(..., description="Stored module instance")
    suggestion: Optional[OutcomeSuggestion] = Field(None, description="Suggested outcome for the stored data")
    dependencies: Dict[str, Optional[Dict[str, Any]]] = Field(
        default_factory=dict,
        description="Data of the modules this module reads (None when absent)"
    )


class SuggestRequest(BaseModel):
    """Request model for suggesting an outcome for unsaved answers."""
    data: Dict[str, Any] = Field(default_factory=dict, description="Current field values")


class SuggestResponse(BaseModel):
    """Response model for an outcome suggestion."""
    module_key: str = Field(..., description="Module key")
    suggestion: Optional[OutcomeSuggestion] = Field(None, description="Suggested outcome, null when no rule matches")


class SaveInstanceRequest(BaseModel):
    """Request model for saving a module instance (whole-document replace)."""
    data: Dict[str, Any] = Field(..., description="Complete field values")
    outcome: Optional[Outcome] = Field(None, description="Outcome confirmed by the assessor")
    assessor_notes: str = Field("", description="Assessor notes")
    expected_updated_at: Optional[str] = Field(
        None, description="updated_at of the record as loaded (used by the reject_stale policy)"
    )


class RatingRequest(BaseModel):
    """Request model for setting one factor rating."""
    rating: int = Field(..., ge=1, le=5, description="Rating 1 (poor) to 5 (excellent)")
    expected_updated_at: Optional[str] = Field(None, description="updated_at of the record as loaded")


class RecommendationListResponse(BaseModel):
    """Response model for a document's recommendations register."""
    document_id: str = Field(..., description="Assessment document id")
    total: int = Field(..., description="Number of entries")
    recommendations: List[RecommendationEntry] = Field(..., description="Register entries")


class CreateRecommendationRequest(BaseModel):
    """Request model for a manually typed recommendation."""
    source_module_key: str = Field(..., description="Module the recommendation relates to")
    canonical_key: str = Field(..., description="Risk factor the recommendation addresses")
    title: str = Field(..., min_length=1, description="Short title")
    detail: str = Field(..., min_length=1, description="Recommendation text")
    priority: Priority = Field("medium", description="Priority tier")
    owner_id: Optional[str] = Field(None, description="Owner")
    target_date: Optional[str] = Field(None, description="Target date (ISO format)")


class SummaryResponse(BaseModel):
    """Response model for the document summary."""
    document_id: str = Field(..., description="Assessment document id")
    risk_score: ScoreBreakdown = Field(..., description="Risk-engineering score table")
    exposures: Optional[Dict[str, Optional[int]]] = Field(None, description="RE-07 exposure pillars")
    overall_rating: Optional[int] = Field(None, description="Worst pillar rating")
    recommendations: Dict[str, Any] = Field(..., description="Register counts by priority and status")
    modules: List[Dict[str, Any]] = Field(..., description="Outcome per module instance")
    executive_summary: str = Field(..., description="Executive summary text")


# Made with Bob
