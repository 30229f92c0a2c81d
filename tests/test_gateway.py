"""Tests for the JSON-file module instance gateway.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

import json

import pytest

from assessment_api.errors import GatewayError, InstanceNotFoundError, StaleWriteError
from assessment_api.gateway import JsonFileGateway
from models.outcome import Outcome


def _write_raw(gateway, record):
    gateway.modules_dir.mkdir(parents=True, exist_ok=True)
    path = gateway.modules_dir / f"{record['id']}.json"
    path.write_text(json.dumps(record), encoding="utf-8")


def test_create_and_load(gateway, document_id):
    created = gateway.create(document_id, "A3_PERSONS_AT_RISK", {"max_occupancy": "120"})

    record = gateway.load_record(created.id)

    assert record.document_id == document_id
    assert record.module_key == "A3_PERSONS_AT_RISK"
    assert record.outcome is None
    assert gateway.load(created.id).text("max_occupancy") == "120"


def test_save_of_loaded_field_set_is_lossless(gateway, document_id):
    data = {
        "review": {"photos": "yes", "rpInterview": "no"},
        "special_constraints": ["high-rise"],
        "height_m": 24.5,
        "z_field_from_newer_form": {"nested": [1, 2]},
    }
    created = gateway.create(document_id, "A2_BUILDING_PROFILE", data)

    loaded = gateway.load(created.id)
    gateway.save(created.id, loaded)

    assert gateway.load(created.id) == loaded
    assert gateway.load(created.id).to_dict() == data


def test_outcome_sets_completed_at(gateway, document_id):
    created = gateway.create(document_id, "A3_PERSONS_AT_RISK")

    saved = gateway.save(created.id, {}, outcome=Outcome.MINOR_DEFICIENCY, assessor_notes="Check PEEPs")

    assert saved.outcome == Outcome.MINOR_DEFICIENCY
    assert saved.completed_at is not None
    assert saved.assessor_notes == "Check PEEPs"

    cleared = gateway.save(created.id, {})

    assert cleared.outcome is None
    assert cleared.completed_at is None


def test_later_saves_keep_completed_at(gateway, document_id, monkeypatch):
    import assessment_api.gateway as gateway_module

    stamps = iter([
        "2026-10-01T09:00:00+00:00",
        "2026-10-02T09:00:00+00:00",
        "2026-10-03T09:00:00+00:00",
    ])
    monkeypatch.setattr(gateway_module, "_utc_now", lambda: next(stamps))
    created = gateway.create(document_id, "RE_07_NATURAL_HAZARDS")

    first = gateway.save(created.id, {}, outcome=Outcome.COMPLIANT)
    second = gateway.save(created.id, {"ratings": {"exposures_flood": 2}}, outcome=Outcome.COMPLIANT)

    assert first.completed_at == "2026-10-01T09:00:00+00:00"
    assert second.completed_at == "2026-10-01T09:00:00+00:00"
    assert second.updated_at == "2026-10-02T09:00:00+00:00"

    reopened = gateway.save(created.id, {})
    assert reopened.completed_at is None


def test_missing_instance(gateway):
    with pytest.raises(InstanceNotFoundError):
        gateway.load_record("does-not-exist")


@pytest.mark.parametrize("instance_id", ["../secrets", "a/b", ".hidden", ""])
def test_path_like_ids_are_rejected(gateway, instance_id):
    with pytest.raises(InstanceNotFoundError):
        gateway.load_record(instance_id)


def test_corrupt_record_is_gateway_error(gateway):
    gateway.modules_dir.mkdir(parents=True)
    (gateway.modules_dir / "broken.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(GatewayError):
        gateway.load_record("broken")


def test_write_failure_is_gateway_error(tmp_path, document_id):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(GatewayError):
        JsonFileGateway(blocker).create(document_id, "A3_PERSONS_AT_RISK")


def test_legacy_outcome_tags_are_normalised(gateway, document_id):
    _write_raw(gateway, {
        "id": "legacy-1", "document_id": document_id, "module_key": "FRA_2_ESCAPE_ASIS",
        "data": {}, "outcome": "material_def", "assessor_notes": None,
        "updated_at": "2025-06-01T10:00:00+00:00",
    })
    _write_raw(gateway, {
        "id": "legacy-2", "document_id": document_id, "module_key": "FRA_3_PROTECTION_ASIS",
        "data": {}, "outcome": "na", "updated_at": "2025-06-01T10:00:00+00:00",
    })

    assert gateway.load_record("legacy-1").outcome == Outcome.MATERIAL_DEFICIENCY
    assert gateway.load_record("legacy-1").assessor_notes == ""
    assert gateway.load_record("legacy-2").outcome is None


def test_legacy_building_profile_fields_are_migrated(gateway, document_id):
    _write_raw(gateway, {
        "id": "a2-old", "document_id": document_id, "module_key": "A2_BUILDING_PROFILE",
        "data": {"number_of_storeys": "7", "special_constraints": "high-rise, shared occupancy"},
        "updated_at": "2025-06-01T10:00:00+00:00",
    })

    fields = gateway.load("a2-old")

    assert "number_of_storeys" not in fields
    assert fields.choice("storeys_band") == "custom"
    assert fields.text("storeys_exact") == "7"
    assert fields.items_list("special_constraints") == ["high-rise", "shared occupancy"]


def test_legacy_review_checklist_is_migrated(gateway, document_id):
    _write_raw(gateway, {
        "id": "a7-old", "document_id": document_id, "module_key": "A7_REVIEW_ASSURANCE",
        "data": {"review_photos": "yes", "review_peerReview": "no", "commentary": "ok"},
        "updated_at": "2025-06-01T10:00:00+00:00",
    })

    fields = gateway.load("a7-old")

    assert fields.nested("review").to_dict() == {"photos": "yes", "peerReview": "no"}
    assert "review_photos" not in fields
    assert fields.text("commentary") == "ok"


def test_last_write_wins_ignores_stale_token(gateway, document_id):
    created = gateway.create(document_id, "A3_PERSONS_AT_RISK")

    saved = gateway.save(created.id, {"lone_working": "yes"}, expected_updated_at="2000-01-01T00:00:00+00:00")

    assert saved.data == {"lone_working": "yes"}


def test_reject_stale_refuses_outdated_save(data_dir, document_id):
    gateway = JsonFileGateway(data_dir, conflict_policy="reject_stale")
    created = gateway.create(document_id, "A3_PERSONS_AT_RISK")

    saved = gateway.save(created.id, {"lone_working": "yes"}, expected_updated_at=created.updated_at)

    with pytest.raises(StaleWriteError):
        gateway.save(created.id, {"lone_working": "no"}, expected_updated_at="2000-01-01T00:00:00+00:00")

    assert gateway.load(created.id) == {"lone_working": "yes"}
    assert gateway.save(created.id, {"lone_working": "no"}, expected_updated_at=saved.updated_at)


def test_list_and_find_by_document(gateway, document_id):
    a2 = gateway.create(document_id, "A2_BUILDING_PROFILE")
    gateway.create(document_id, "A3_PERSONS_AT_RISK")
    gateway.create("doc-0002", "A2_BUILDING_PROFILE")

    assert len(gateway.list_for_document(document_id)) == 2
    assert gateway.find(document_id, "A2_BUILDING_PROFILE").id == a2.id
    assert gateway.find(document_id, "FRA_1_HAZARDS") is None
    assert gateway.list_for_document("doc-empty") == []

# Made with Bob
