"""Score factor data models.

This module defines the Pydantic models used by the weighted rating
aggregator of the risk-engineering modules.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-12
Version: 1.0.0
License: MIT
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field, computed_field

MIN_RATING = 1
MAX_RATING = 5
NEUTRAL_RATING = 3


class ScoreFactor(BaseModel):
    """One rated risk factor.

    Attributes:
        canonical_key: Stable identifier independent of the display label.
        rating: Integer rating 1 (poor) to 5 (excellent).
        weight: Positive weight applied to the rating.
        label: Optional display label.
        score: Derived rating x weight.
    """
    canonical_key: str = Field(..., description="Canonical factor key")
    rating: int = Field(NEUTRAL_RATING, ge=MIN_RATING, le=MAX_RATING, description="Rating 1-5")
    weight: float = Field(1.0, gt=0, description="Factor weight")
    label: Optional[str] = Field(None, description="Display label")

    @computed_field
    @property
    def score(self) -> float:
        return self.rating * self.weight


class ScoreResult(BaseModel):
    """Aggregate of a factor list.

    Attributes:
        total: Sum of rating x weight across factors.
        per_factor: Score per canonical key.
        pillar_rating: Worst (minimum) rating in the group, None when empty.
    """
    total: float = Field(0.0, description="Sum of weighted scores")
    per_factor: Dict[str, float] = Field(default_factory=dict, description="Score per factor")
    pillar_rating: Optional[int] = Field(None, description="Worst rating in the group")


class ScoreBreakdown(BaseModel):
    """Risk-engineering score table for one document."""
    industry_key: Optional[str] = Field(None, description="Selected industry classification")
    industry_label: str = Field("No Industry Selected", description="Display label for the industry")
    factors: List[ScoreFactor] = Field(default_factory=list, description="Rated factors")
    total_score: float = Field(0.0, description="Sum of weighted scores")
    max_score: float = Field(0.0, description="Best achievable total (all factors rated 5)")
    pillar_rating: Optional[int] = Field(None, description="Worst rating across all factors")
    top_contributors: List[ScoreFactor] = Field(default_factory=list, description="Highest scoring factors")

# Made with Bob
