"""Health check and status endpoints.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2025-12-16
Version: 2.0.0
License: MIT
"""

import shutil
from datetime import datetime
from typing import Dict, Any
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from utils.config import config

from .. import __version__
from ..api_utils import services

router = APIRouter(tags=["Health"])


def check_disk_space(path: str = ".") -> Dict[str, Any]:
    """Check available disk space."""
    try:
        stat = shutil.disk_usage(path)
        total_gb = stat.total / (1024**3)
        used_gb = stat.used / (1024**3)
        free_gb = stat.free / (1024**3)
        percent_used = (stat.used / stat.total) * 100

        return {
            "status": "healthy" if percent_used < 90 else "warning",
            "total_gb": round(total_gb, 2),
            "used_gb": round(used_gb, 2),
            "free_gb": round(free_gb, 2),
            "percent_used": round(percent_used, 2)
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}


def check_data_directories() -> Dict[str, Any]:
    """Check if the data directory of the running services exists."""
    try:
        gateway = services.get("gateway")
        data_dir = gateway.data_dir if gateway is not None else config.DATA_DIR
        return {
            "status": "healthy" if data_dir.exists() else "warning",
            "data_dir_exists": data_dir.exists(),
            "data_dir_path": str(data_dir)
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}


def check_config_files() -> Dict[str, Any]:
    """Check if the YAML reference files exist."""
    try:
        files = {
            name: config.get_config_file(name).exists()
            for name in ("modules", "industry_weights", "recommendation_templates")
        }
        return {
            "status": "healthy" if all(files.values()) else "warning",
            "reference_files": files,
            "config_dir_path": str(config.CONFIG_DIR)
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}


@router.get("/", operation_id="root")
async def root():
    """Root endpoint - API health check."""
    if not services:
        return JSONResponse(
            status_code=503,
            content={"error": "Service not initialized", "detail": "Assessment services not configured"}
        )
    return {
        "message": "Fire Risk Assessment Engine API",
        "version": __version__,
        "status": "operational",
        "conflict_policy": config.CONFLICT_POLICY,
        "recommendation_improved_policy": config.RECOMMENDATION_IMPROVED_POLICY
    }


@router.get("/health", operation_id="health_check")
async def health_check():
    """Enhanced health check endpoint with dependency verification.

    Returns detailed health status including:
    - Service initialisation
    - Disk space availability
    - Data directory existence
    - Reference configuration files
    """
    checks = {
        "services": {
            "status": "healthy" if services else "unhealthy",
            "initialized": sorted(services.keys())
        },
        "disk_space": check_disk_space(),
        "directories": check_data_directories(),
        "configuration": check_config_files()
    }

    # Overall status is healthy only if all checks pass
    all_healthy = all(
        check.get("status") == "healthy"
        for check in checks.values()
    )

    overall_status = "healthy" if all_healthy else "degraded"
    status_code = 200 if all_healthy else 503

    response = {
        "status": overall_status,
        "timestamp": datetime.now().isoformat(),
        "checks": checks
    }

    return JSONResponse(
        status_code=status_code,
        content=response
    )

# Made with Bob
