"""Module catalogue and module instance endpoints.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT
"""

import logging
from fastapi import APIRouter, HTTPException, Path as PathParam, Query
from typing import Optional

from models.module_instance import ModuleInstanceRecord
from utils.module_catalog import get_module_definition, get_modules_for_doc_type, load_module_catalog

from ..api_utils import get_assessment_service, raise_http_error
from ..models import (
    CreateInstanceRequest,
    InstanceResponse,
    ModuleCatalogResponse,
    SaveInstanceRequest,
    SuggestRequest,
    SuggestResponse,
)

router = APIRouter(tags=["Modules"])
logger = logging.getLogger(__name__)


@router.get("/modules", response_model=ModuleCatalogResponse, operation_id="list_modules")
async def list_modules(
    doc_type: Optional[str] = Query(None, description="Filter by document type (e.g., 'FRA', 'FSD', 'RE')")
):
    """List catalogued assessment modules in display order."""
    try:
        modules = get_modules_for_doc_type(doc_type) if doc_type else list(load_module_catalog().values())
        return ModuleCatalogResponse(total_modules=len(modules), modules=modules)
    except Exception as e:
        logger.error(f"Error loading module catalogue: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/documents/{document_id}/modules",
    response_model=ModuleInstanceRecord,
    status_code=201,
    operation_id="create_module_instance"
)
async def create_module_instance(
    request: CreateInstanceRequest,
    document_id: str = PathParam(..., description="Assessment document id")
):
    """Create a module instance for a document."""
    if get_module_definition(request.module_key) is None:
        raise HTTPException(status_code=404, detail=f"Unknown module '{request.module_key}'")

    service = get_assessment_service()
    try:
        return service.create_instance(document_id, request.module_key, request.data)
    except Exception as e:
        raise_http_error(e, f"creating {request.module_key} for {document_id}")


@router.get("/instances/{instance_id}", response_model=InstanceResponse, operation_id="get_module_instance")
async def get_module_instance(
    instance_id: str = PathParam(..., description="Module instance id")
):
    """Load a module instance with its suggested outcome and read-only dependencies."""
    service = get_assessment_service()
    try:
        return InstanceResponse(**service.open(instance_id))
    except Exception as e:
        raise_http_error(e, f"loading instance {instance_id}")


@router.post("/instances/{instance_id}/suggest", response_model=SuggestResponse, operation_id="suggest_outcome")
async def suggest_module_outcome(
    request: SuggestRequest,
    instance_id: str = PathParam(..., description="Module instance id")
):
    """Suggest an outcome for unsaved answers.

    The suggestion is advisory; it is null when no rule matches and is
    never stored.
    """
    service = get_assessment_service()
    try:
        record = service.gateway.load_record(instance_id)
        return SuggestResponse(
            module_key=record.module_key,
            suggestion=service.suggest(record.module_key, request.data)
        )
    except Exception as e:
        raise_http_error(e, f"suggesting outcome for {instance_id}")


@router.put("/instances/{instance_id}", response_model=ModuleInstanceRecord, operation_id="save_module_instance")
async def save_module_instance(
    request: SaveInstanceRequest,
    instance_id: str = PathParam(..., description="Module instance id")
):
    """Save the whole FieldSet with the confirmed outcome and notes.

    Storage failures return 502; the client keeps its answers and may retry.
    """
    service = get_assessment_service()
    try:
        return service.save(
            instance_id,
            request.data,
            outcome=request.outcome,
            assessor_notes=request.assessor_notes,
            expected_updated_at=request.expected_updated_at
        )
    except Exception as e:
        raise_http_error(e, f"saving instance {instance_id}")

# Made with Bob
