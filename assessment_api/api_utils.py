"""Shared utilities for API routers.

This module holds the service instances shared by all routers and the
translation of service errors into HTTP errors.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT
"""

import logging
from pathlib import Path
from typing import Dict, NoReturn, Optional

from fastapi import HTTPException

from utils.logging_config import log_exception

from .errors import (
    GatewayError,
    InstanceNotFoundError,
    RecommendationNotFoundError,
    SaveInProgressError,
    StaleWriteError,
)
from .gateway import JsonFileGateway
from .module_service import AssessmentService
from .recommendation_service import RecommendationStore, RecommendationSync
from .summary_service import SummaryService

logger = logging.getLogger(__name__)

# Global services dictionary (populated by initialize_services)
services: Dict[str, object] = {}


def initialize_services(data_dir: Optional[Path] = None) -> None:
    """Create the gateway, register store and services.

    Args:
        data_dir: Base data directory (defaults to config.DATA_DIR).
    """
    gateway = JsonFileGateway(data_dir)
    store = RecommendationStore(data_dir)
    assessment_service = AssessmentService(gateway, RecommendationSync(store))

    services.clear()
    services.update({
        "gateway": gateway,
        "store": store,
        "assessment": assessment_service,
        "summary": SummaryService(assessment_service, store),
    })
    logger.info(f"Services initialized with data directory: {gateway.data_dir}")


def _get(name: str):
    if name not in services:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return services[name]


def get_assessment_service() -> AssessmentService:
    return _get("assessment")


def get_recommendation_store() -> RecommendationStore:
    return _get("store")


def get_summary_service() -> SummaryService:
    return _get("summary")


def raise_http_error(e: Exception, context: str) -> NoReturn:
    """Translate a service exception into an HTTPException.

    Args:
        e: Exception raised by a service.
        context: What was being attempted (for the log line).

    Raises:
        HTTPException: 404 for missing records, 409 for concurrent or stale
            saves, 502 for persistence failures, 500 otherwise.
    """
    if isinstance(e, (InstanceNotFoundError, RecommendationNotFoundError)):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (SaveInProgressError, StaleWriteError)):
        logger.warning(f"Conflict while {context}: {e}")
        raise HTTPException(status_code=409, detail=str(e))
    if isinstance(e, GatewayError):
        logger.error(f"Storage error while {context}: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    log_exception(logger, f"Error while {context}", e)
    raise HTTPException(status_code=500, detail=str(e))

# Made with Bob
