"""Risk score and document summary endpoints.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT
"""

import logging
from fastapi import APIRouter, Path as PathParam

from models.score_factor import ScoreBreakdown

from ..api_utils import get_summary_service, raise_http_error
from ..models import SummaryResponse

router = APIRouter(tags=["Summary"])
logger = logging.getLogger(__name__)


@router.get("/documents/{document_id}/risk-score", response_model=ScoreBreakdown, operation_id="get_risk_score")
async def get_risk_score(
    document_id: str = PathParam(..., description="Assessment document id")
):
    """Weighted risk-engineering score table for a document.

    Unrated factors count as 3; without an industry every weight is the
    default weight.
    """
    summary_service = get_summary_service()
    try:
        return summary_service.risk_score(document_id)
    except Exception as e:
        raise_http_error(e, f"scoring document {document_id}")


@router.get("/documents/{document_id}/summary", response_model=SummaryResponse, operation_id="get_document_summary")
async def get_document_summary(
    document_id: str = PathParam(..., description="Assessment document id")
):
    """Risk score, exposures, register counts, module outcomes and executive summary."""
    summary_service = get_summary_service()
    try:
        return SummaryResponse(**summary_service.document_summary(document_id))
    except Exception as e:
        raise_http_error(e, f"summarising document {document_id}")

# Made with Bob
