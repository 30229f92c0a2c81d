"""FastAPI server for fire risk assessment documents.

This module provides a REST API for module instances, outcome suggestions,
factor ratings, the recommendations register and document summaries.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT

Example:
    Run the server::

        python -m assessment_api.run_api --port 8200

    Or use uvicorn directly::

        uvicorn assessment_api.api:app --reload --port 8200
"""

import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from utils.config import config

from . import __version__
from .api_routers import (
    health_router,
    modules_router,
    ratings_router,
    recommendations_router,
    summary_router,
)
from .api_utils import initialize_services, services
from .logging_config import setup_logging

# Configure logging
logger = setup_logging('api')


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup (run_api or a test may already have initialised the services)
    if not services:
        initialize_services()
    yield
    # Shutdown (if needed in the future)


# Create FastAPI app
app = FastAPI(
    title="Fire Risk Assessment Engine API",
    description="REST API for module outcomes, risk scoring and the recommendations register",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    servers=[
        {
            "url": f"http://localhost:{config.API_PORT}",
            "description": "Development server (default port)"
        }
    ]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware for request logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests with timing information."""
    start_time = time.time()

    # Log request
    logger.info(
        f"Incoming request: {request.method} {request.url.path}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_host": request.client.host if request.client else None
        }
    )

    # Process request
    response = await call_next(request)

    # Log response
    duration = time.time() - start_time
    logger.info(
        f"Request completed: {request.method} {request.url.path} - Status: {response.status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2)
        }
    )

    return response


app.include_router(health_router)
app.include_router(modules_router)
app.include_router(ratings_router)
app.include_router(recommendations_router)
app.include_router(summary_router)

# Made with Bob
