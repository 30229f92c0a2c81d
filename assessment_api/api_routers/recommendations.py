"""Recommendations register endpoints.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT
"""

import logging
from fastapi import APIRouter, Path as PathParam

from models.recommendation_data import RecommendationEntry, RecommendationUpdate

from ..api_utils import get_recommendation_store, raise_http_error
from ..models import CreateRecommendationRequest, RecommendationListResponse

router = APIRouter(tags=["Recommendations"])
logger = logging.getLogger(__name__)


@router.get(
    "/documents/{document_id}/recommendations",
    response_model=RecommendationListResponse,
    operation_id="list_recommendations"
)
async def list_recommendations(
    document_id: str = PathParam(..., description="Assessment document id")
):
    """List the recommendations register of a document."""
    store = get_recommendation_store()
    try:
        entries = store.list(document_id)
        return RecommendationListResponse(document_id=document_id, total=len(entries), recommendations=entries)
    except Exception as e:
        raise_http_error(e, f"listing recommendations for {document_id}")


@router.post(
    "/documents/{document_id}/recommendations",
    response_model=RecommendationEntry,
    status_code=201,
    operation_id="create_recommendation"
)
async def create_recommendation(
    request: CreateRecommendationRequest,
    document_id: str = PathParam(..., description="Assessment document id")
):
    """Add a manually typed recommendation."""
    store = get_recommendation_store()
    try:
        entry = RecommendationEntry(document_id=document_id, is_auto_generated=False, **request.model_dump())
        return store.add(entry)
    except Exception as e:
        raise_http_error(e, f"adding recommendation to {document_id}")


@router.patch(
    "/recommendations/{document_id}/{recommendation_id}",
    response_model=RecommendationEntry,
    operation_id="update_recommendation"
)
async def update_recommendation(
    changes: RecommendationUpdate,
    document_id: str = PathParam(..., description="Assessment document id"),
    recommendation_id: str = PathParam(..., description="Register entry id")
):
    """Edit a register entry by hand.

    The entry stops being auto-generated and later rating changes leave it
    untouched.
    """
    store = get_recommendation_store()
    try:
        return store.update(document_id, recommendation_id, changes)
    except Exception as e:
        raise_http_error(e, f"updating recommendation {recommendation_id}")

# Made with Bob
