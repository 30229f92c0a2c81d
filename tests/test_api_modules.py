"""Tests for module catalogue, instance and rating endpoints.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

import pytest

from assessment_api.api_utils import get_assessment_service


@pytest.fixture
def a7_instance(test_client, document_id):
    response = test_client.post(
        f"/documents/{document_id}/modules",
        json={"module_key": "A7_REVIEW_ASSURANCE"}
    )
    assert response.status_code == 201
    return response.json()


def test_list_modules(test_client):
    response = test_client.get("/modules")

    assert response.status_code == 200
    data = response.json()
    assert data["total_modules"] == len(data["modules"])
    keys = [module["key"] for module in data["modules"]]
    assert "A7_REVIEW_ASSURANCE" in keys
    assert "RISK_ENGINEERING" in keys


def test_list_modules_by_doc_type(test_client):
    response = test_client.get("/modules?doc_type=FSD")

    assert response.status_code == 200
    for module in response.json()["modules"]:
        assert "FSD" in module["doc_types"]


def test_create_unknown_module(test_client, document_id):
    response = test_client.post(f"/documents/{document_id}/modules", json={"module_key": "NOPE"})

    assert response.status_code == 404


def test_get_instance_with_suggestion(test_client, a7_instance):
    response = test_client.get(f"/instances/{a7_instance['id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["record"]["module_key"] == "A7_REVIEW_ASSURANCE"
    assert data["suggestion"]["outcome"] == "information_gap"
    assert data["dependencies"] == {}


def test_get_missing_instance(test_client):
    response = test_client.get("/instances/missing-instance")

    assert response.status_code == 404


def test_suggest_for_unsaved_answers(test_client, a7_instance):
    review = {item: "no" for item in ("peerReview", "siteInspection", "photos", "alarmEvidence")}

    response = test_client.post(f"/instances/{a7_instance['id']}/suggest", json={"data": {"review": review}})

    assert response.status_code == 200
    suggestion = response.json()["suggestion"]
    assert suggestion["outcome"] == "material_deficiency"
    assert suggestion["rule_id"] == "a7-many-not-done"

    # Nothing was stored
    stored = test_client.get(f"/instances/{a7_instance['id']}").json()["record"]
    assert stored["data"] == {}


def test_suggest_without_rule_table_is_null(test_client, document_id):
    created = test_client.post(
        f"/documents/{document_id}/modules", json={"module_key": "RE_14_DRAFT_OUTPUTS"}
    ).json()

    response = test_client.post(f"/instances/{created['id']}/suggest", json={"data": {}})

    assert response.status_code == 200
    assert response.json()["suggestion"] is None


def test_save_instance(test_client, a7_instance):
    payload = {
        "data": {"review": {"photos": "yes"}, "commentary": "Site visit 12 Oct"},
        "outcome": "information_gap",
        "assessor_notes": "Awaiting alarm certificates",
    }

    response = test_client.put(f"/instances/{a7_instance['id']}", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["outcome"] == "information_gap"
    assert data["completed_at"] is not None
    assert data["data"] == payload["data"]


def test_save_rejects_unknown_outcome(test_client, a7_instance):
    response = test_client.put(
        f"/instances/{a7_instance['id']}",
        json={"data": {}, "outcome": "pretty_good"}
    )

    assert response.status_code == 422


def test_save_conflict_while_in_flight(test_client, a7_instance):
    service = get_assessment_service()
    service._begin_save(a7_instance["id"])
    try:
        response = test_client.put(f"/instances/{a7_instance['id']}", json={"data": {}})
    finally:
        service._end_save(a7_instance["id"])

    assert response.status_code == 409


def test_set_rating_creates_recommendation(test_client, document_id):
    re07 = test_client.post(
        f"/documents/{document_id}/modules", json={"module_key": "RE_07_NATURAL_HAZARDS"}
    ).json()

    response = test_client.put(f"/instances/{re07['id']}/ratings/exposures_flood", json={"rating": 1})

    assert response.status_code == 200
    data = response.json()
    assert data["data"]["ratings"] == {"exposures_flood": 1}
    assert data["data"]["exposure_pillars"]["environmental"] == 1

    register = test_client.get(f"/documents/{document_id}/recommendations").json()
    assert register["total"] == 1
    assert register["recommendations"][0]["priority"] == "high"
    assert register["recommendations"][0]["is_auto_generated"] is True

    # Same rating again: still one entry
    test_client.put(f"/instances/{re07['id']}/ratings/exposures_flood", json={"rating": 1})
    assert test_client.get(f"/documents/{document_id}/recommendations").json()["total"] == 1


@pytest.mark.parametrize("rating", [0, 6])
def test_set_rating_out_of_range(test_client, a7_instance, rating):
    response = test_client.put(f"/instances/{a7_instance['id']}/ratings/exposures_flood", json={"rating": rating})

    assert response.status_code == 422

# Made with Bob
