"""Tests for the assessment service (open, save, rate).

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

import pytest

from assessment_api.errors import GatewayError, SaveInProgressError
from assessment_api.module_service import AssessmentService
from assessment_api.recommendation_service import RecommendationSync
from models.outcome import Outcome


class RecordingSync(RecommendationSync):
    """Sync that records what the gateway held when it ran."""

    def __init__(self, store, gateway):
        super().__init__(store, threshold=2, improved_policy="leave")
        self.gateway = gateway
        self.calls = []

    def sync(self, document_id, module_key, canonical_key, rating):
        record = self.gateway.find(document_id, module_key)
        self.calls.append((canonical_key, rating, record.data["ratings"][canonical_key]))
        return super().sync(document_id, module_key, canonical_key, rating)


class FailingSync(RecommendationSync):
    def _sync(self, document_id, module_key, canonical_key, rating):
        raise GatewayError("register backend unavailable")


def test_open_returns_suggestion_and_dependencies(service, gateway, document_id):
    a2 = gateway.create(document_id, "A2_BUILDING_PROFILE", {"height_m": "30"})
    fra5 = gateway.create(document_id, "FRA_5_EXTERNAL_FIRE_SPREAD", {"external_wall_system_applicable": "no"})

    opened = service.open(fra5.id)

    assert opened["record"].id == fra5.id
    assert opened["suggestion"].outcome == Outcome.COMPLIANT
    assert opened["dependencies"] == {"A2_BUILDING_PROFILE": a2.data}


def test_missing_dependency_reads_as_none(service, gateway, document_id):
    re07 = gateway.create(document_id, "RE_07_NATURAL_HAZARDS")

    assert service.open(re07.id)["dependencies"] == {"RISK_ENGINEERING": None}


def test_suggest_does_not_persist(service, gateway, document_id):
    a3 = gateway.create(document_id, "A3_PERSONS_AT_RISK")

    suggestion = service.suggest("A3_PERSONS_AT_RISK", {"evacuation_assistance_required": "yes"})

    assert suggestion.outcome == Outcome.MATERIAL_DEFICIENCY
    assert gateway.load_record(a3.id).data == {}


def test_save_stores_confirmed_outcome(service, gateway, document_id):
    a3 = gateway.create(document_id, "A3_PERSONS_AT_RISK")

    saved = service.save(a3.id, {"max_occupancy": "40"}, outcome=Outcome.ACCEPTABLE, assessor_notes="ok")

    assert saved.outcome == Outcome.ACCEPTABLE
    assert gateway.load_record(a3.id).assessor_notes == "ok"


def test_second_save_while_in_flight_is_refused(service, gateway, document_id):
    a3 = gateway.create(document_id, "A3_PERSONS_AT_RISK")

    service._begin_save(a3.id)
    try:
        with pytest.raises(SaveInProgressError):
            service.save(a3.id, {"lone_working": "yes"})
        with pytest.raises(SaveInProgressError):
            service.set_rating(a3.id, "exposures_flood", 1)
    finally:
        service._end_save(a3.id)

    assert service.save(a3.id, {"lone_working": "yes"}).data == {"lone_working": "yes"}


def test_failed_save_releases_guard_and_keeps_caller_data(service, gateway, document_id):
    fields = {"lone_working": "yes"}

    with pytest.raises(GatewayError):
        service.save("missing-instance", fields)

    assert fields == {"lone_working": "yes"}
    assert service._saving == set()


def test_set_rating_saves_before_sync(store, gateway, document_id):
    sync = RecordingSync(store, gateway)
    service = AssessmentService(gateway, sync)
    re07 = gateway.create(document_id, "RE_07_NATURAL_HAZARDS", {"notes": "river 200m north"})

    saved = service.set_rating(re07.id, "exposures_flood", 1)

    assert saved.data["ratings"] == {"exposures_flood": 1}
    assert saved.data["notes"] == "river 200m north"
    assert sync.calls == [("exposures_flood", 1, 1)]

    entries = store.list(document_id)
    assert len(entries) == 1
    assert entries[0].source_module_key == "RE_07_NATURAL_HAZARDS"


def test_sync_failure_does_not_undo_rating(store, gateway, document_id):
    service = AssessmentService(gateway, FailingSync(store, threshold=2, improved_policy="leave"))
    re07 = gateway.create(document_id, "RE_07_NATURAL_HAZARDS")

    saved = service.set_rating(re07.id, "exposures_flood", 1)

    assert saved.data["ratings"]["exposures_flood"] == 1
    assert gateway.load_record(re07.id).data["ratings"]["exposures_flood"] == 1
    assert store.list(document_id) == []


def test_set_rating_keeps_outcome_and_notes(service, gateway, document_id):
    rec = gateway.create(document_id, "RISK_ENGINEERING", {"industry_key": "data_center"})
    service.save(rec.id, {"industry_key": "data_center"}, outcome=Outcome.COMPLIANT, assessor_notes="walked site")

    saved = service.set_rating(rec.id, "process_safety_management", 4)

    assert saved.outcome == Outcome.COMPLIANT
    assert saved.assessor_notes == "walked site"
    assert saved.data == {"industry_key": "data_center", "ratings": {"process_safety_management": 4}}


def test_exposure_pillars_are_derived_on_save(service, gateway, document_id):
    re07 = gateway.create(document_id, "RE_07_NATURAL_HAZARDS")
    ratings = {
        "exposures_flood": 2,
        "exposures_wind_storm": 4,
        "exposures_earthquake": 5,
        "exposures_wildfire": 4,
        "exposures_human_malicious": 3,
    }

    saved = service.save(re07.id, {"ratings": ratings})

    assert saved.data["exposure_pillars"] == {"environmental": 2, "human": 3, "overall": 2}


def test_document_ratings_are_normalised(service, gateway, document_id):
    gateway.create(document_id, "RISK_ENGINEERING", {"ratings": {"utilities": "2", "broken": 9}})
    gateway.create(document_id, "A3_PERSONS_AT_RISK")

    assert service.document_ratings(document_id) == {"RISK_ENGINEERING": {"utilities": 2, "broken": 3}}


def test_risk_engineering_data_defaults_to_empty(service, document_id):
    assert service.risk_engineering_data(document_id) == {}

# Made with Bob
