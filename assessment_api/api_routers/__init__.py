"""API routers for modular endpoint organization.

This package contains FastAPI routers for the API server organized by functionality.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2025-12-16
Version: 2.0.0
License: MIT
"""

from .health import router as health_router
from .modules import router as modules_router
from .ratings import router as ratings_router
from .recommendations import router as recommendations_router
from .summary import router as summary_router

__all__ = [
    "health_router",
    "modules_router",
    "ratings_router",
    "recommendations_router",
    "summary_router",
]

# Made with Bob
