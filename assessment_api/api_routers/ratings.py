"""Factor rating endpoint.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT
"""

import logging
from fastapi import APIRouter, Path as PathParam

from models.module_instance import ModuleInstanceRecord

from ..api_utils import get_assessment_service, raise_http_error
from ..models import RatingRequest

router = APIRouter(tags=["Ratings"])
logger = logging.getLogger(__name__)


@router.put(
    "/instances/{instance_id}/ratings/{canonical_key}",
    response_model=ModuleInstanceRecord,
    operation_id="set_factor_rating"
)
async def set_factor_rating(
    request: RatingRequest,
    instance_id: str = PathParam(..., description="Module instance id"),
    canonical_key: str = PathParam(..., description="Canonical factor key (e.g., 'exposures_flood')")
):
    """Set one factor rating.

    The rating is saved first; the recommendations register is then synced.
    A sync failure is logged and does not fail the request.
    """
    service = get_assessment_service()
    try:
        return service.set_rating(
            instance_id,
            canonical_key,
            request.rating,
            expected_updated_at=request.expected_updated_at
        )
    except Exception as e:
        raise_http_error(e, f"rating {canonical_key} on {instance_id}")

# Made with Bob
