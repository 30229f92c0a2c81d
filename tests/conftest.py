"""Pytest configuration and fixtures for the assessment engine tests.

This module provides shared fixtures: a throwaway data directory, the
JSON-file gateway and register, the assessment service and an API client
wired to the same data directory.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

import pytest
from fastapi.testclient import TestClient

from assessment_api.api import app
from assessment_api.api_utils import initialize_services, services
from assessment_api.gateway import JsonFileGateway
from assessment_api.module_service import AssessmentService
from assessment_api.recommendation_service import RecommendationStore, RecommendationSync


# Test document id
TEST_DOCUMENT = "doc-0001"


@pytest.fixture
def data_dir(tmp_path):
    """Provide an empty data directory for one test."""
    return tmp_path / "data"


@pytest.fixture
def document_id():
    """Provide the test document id."""
    return TEST_DOCUMENT


@pytest.fixture
def gateway(data_dir):
    """JSON-file gateway with last-write-wins saves."""
    return JsonFileGateway(data_dir, conflict_policy="last_write_wins")


@pytest.fixture
def store(data_dir):
    """Empty recommendations register."""
    return RecommendationStore(data_dir)


@pytest.fixture
def recommendation_sync(store):
    """Register sync with the default threshold and the 'leave' policy."""
    return RecommendationSync(store, threshold=2, improved_policy="leave")


@pytest.fixture
def service(gateway, recommendation_sync):
    """Assessment service over the test gateway and register."""
    return AssessmentService(gateway, recommendation_sync)


@pytest.fixture
def test_client(data_dir):
    """Create a test client for the API.

    The services are initialised against the test data directory before
    the client is created, so the lifespan hook keeps them.

    Yields:
        TestClient: FastAPI test client
    """
    initialize_services(data_dir)

    client = TestClient(app)

    yield client

    services.clear()

# Made with Bob
