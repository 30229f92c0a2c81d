"""Tests for API health and status endpoints.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

from assessment_api.api_utils import services


def test_root_endpoint(test_client):
    """Test the root endpoint returns API information."""
    response = test_client.get("/")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "operational"
    assert "version" in data
    assert data["conflict_policy"] in ["last_write_wins", "reject_stale"]
    assert data["recommendation_improved_policy"] in ["leave", "auto_close"]


def test_root_endpoint_without_services(test_client):
    """Test the root endpoint reports 503 before initialisation."""
    saved = dict(services)
    services.clear()
    try:
        response = test_client.get("/")
    finally:
        services.update(saved)

    assert response.status_code == 503


def test_health_check(test_client):
    """Test the enhanced health check endpoint."""
    response = test_client.get("/health")

    # Should return 200 for healthy or 503 for degraded
    assert response.status_code in [200, 503]
    data = response.json()

    assert data["status"] in ["healthy", "degraded"]
    assert "timestamp" in data

    checks = data["checks"]
    assert checks["services"]["status"] == "healthy"
    assert "assessment" in checks["services"]["initialized"]
    assert "status" in checks["disk_space"]
    assert "data_dir_exists" in checks["directories"]

    configuration = checks["configuration"]
    assert configuration["status"] == "healthy"
    assert configuration["reference_files"] == {
        "modules": True,
        "industry_weights": True,
        "recommendation_templates": True,
    }


def test_openapi_schema_has_operation_ids(test_client):
    """Test that every route carries an explicit operation id."""
    response = test_client.get("/openapi.json")

    assert response.status_code == 200
    operation_ids = [
        operation["operationId"]
        for methods in response.json()["paths"].values()
        for operation in methods.values()
    ]
    assert "set_factor_rating" in operation_ids
    assert "update_recommendation" in operation_ids
    assert len(operation_ids) == len(set(operation_ids))

# Made with Bob
