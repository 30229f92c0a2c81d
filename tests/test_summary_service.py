"""Tests for document-level rollups and the executive summary.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

import pytest

from assessment_api.summary_service import SummaryService


@pytest.fixture
def summary_service(service, store):
    return SummaryService(service, store)


@pytest.fixture
def rated_document(service, gateway, document_id):
    gateway.create(document_id, "RE_01_DOC_CONTROL", {
        "site_name": "Northgate Distribution Centre",
        "assessment_date": "2026-10-19",
    })
    risk = gateway.create(document_id, "RISK_ENGINEERING", {"industry_key": "warehousing_distribution"})
    service.set_rating(risk.id, "flammable_liquids_and_fire_risk", 1)
    service.set_rating(risk.id, "emergency_response_and_bcp", 2)
    re07 = gateway.create(document_id, "RE_07_NATURAL_HAZARDS")
    service.save(re07.id, {"ratings": {"exposures_flood": 4, "exposures_human_malicious": 3}})
    return document_id


def test_risk_score_for_unrated_document(summary_service, document_id):
    breakdown = summary_service.risk_score(document_id)

    assert breakdown.industry_key is None
    assert len(breakdown.factors) == 10
    assert all(factor.rating == 3 and factor.weight == 3 for factor in breakdown.factors)
    assert breakdown.total_score == 90
    assert breakdown.pillar_rating == 3


def test_risk_score_uses_industry_weights(summary_service, rated_document):
    breakdown = summary_service.risk_score(rated_document)
    ratings = {factor.canonical_key: factor.rating for factor in breakdown.factors}

    assert breakdown.industry_key == "warehousing_distribution"
    assert ratings["flammable_liquids_and_fire_risk"] == 1
    assert ratings["emergency_response_and_bcp"] == 2
    assert breakdown.pillar_rating == 1
    assert breakdown.total_score == sum(factor.rating * factor.weight for factor in breakdown.factors)


def test_exposures(summary_service, rated_document, document_id):
    assert summary_service.exposures(rated_document) == {"environmental": 3, "human": 3, "overall": 3}
    assert summary_service.exposures("doc-without-re07") is None


def test_executive_summary_mentions_site_date_and_register(summary_service, rated_document):
    text = summary_service.executive_summary(rated_document)

    assert "on 19 October 2026 for Northgate Distribution Centre" in text
    assert "warehousing distribution sector" in text
    assert "The principal risk contributors identified are" in text
    assert "identified 2 recommendations (1 high, 1 medium priority)" in text
    assert "Immediate attention should be given" in text
    assert text.endswith("provided in the main body of this report.")


def test_executive_summary_without_recommendations(summary_service, document_id):
    text = summary_service.executive_summary(document_id)

    assert "for the site." in text
    assert "unspecified sector" in text
    assert "No specific recommendations have been raised at this time." in text


def test_document_summary(summary_service, rated_document):
    summary = summary_service.document_summary(rated_document)

    assert summary["document_id"] == rated_document
    assert summary["overall_rating"] == 1
    assert summary["recommendations"]["total"] == 2
    assert {m["module_key"] for m in summary["modules"]} == {
        "RE_01_DOC_CONTROL", "RISK_ENGINEERING", "RE_07_NATURAL_HAZARDS"
    }
    assert summary["executive_summary"].startswith("This Risk Engineering assessment")

# Made with Bob
