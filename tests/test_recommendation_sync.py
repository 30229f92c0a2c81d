"""Tests for the recommendations register and its sync from ratings.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

import pytest

from assessment_api.errors import GatewayError, RecommendationNotFoundError
from assessment_api.recommendation_service import RecommendationStore, RecommendationSync
from models.recommendation_data import RecommendationEntry, RecommendationUpdate

MODULE = "RE_07_NATURAL_HAZARDS"
FLOOD = "exposures_flood"


class BrokenStore(RecommendationStore):
    """Register whose backend is down."""

    def list(self, document_id):
        raise GatewayError("register backend unavailable")


def test_low_rating_creates_one_auto_entry(recommendation_sync, store, document_id):
    entry = recommendation_sync.sync(document_id, MODULE, FLOOD, 1)

    assert entry.priority == "high"
    assert entry.is_auto_generated is True
    assert entry.triggering_rating == 1
    assert entry.title == "Exposures Flood Improvement Required"
    assert entry.detail.startswith("CRITICAL:")

    assert recommendation_sync.sync(document_id, MODULE, FLOOD, 1) is None

    entries = store.list(document_id)
    assert len(entries) == 1
    assert entries[0].id == entry.id
    assert entries[0].triggering_rating == 1


def test_rating_two_is_medium_priority(recommendation_sync, document_id):
    entry = recommendation_sync.sync(document_id, MODULE, FLOOD, 2)

    assert entry.priority == "medium"
    assert entry.detail.startswith("Flood exposure requires further mitigation")


def test_changed_low_rating_refreshes_same_entry(recommendation_sync, store, document_id):
    created = recommendation_sync.sync(document_id, MODULE, FLOOD, 1)
    refreshed = recommendation_sync.sync(document_id, MODULE, FLOOD, 2)

    assert refreshed.id == created.id
    assert refreshed.priority == "medium"
    assert refreshed.triggering_rating == 2
    assert len(store.list(document_id)) == 1


def test_improved_rating_leaves_entry_by_default(recommendation_sync, store, document_id):
    created = recommendation_sync.sync(document_id, MODULE, FLOOD, 1)

    assert recommendation_sync.sync(document_id, MODULE, FLOOD, 4) is None

    entries = store.list(document_id)
    assert len(entries) == 1
    assert entries[0] == created


def test_improved_rating_auto_close_policy(store, document_id):
    sync = RecommendationSync(store, threshold=2, improved_policy="auto_close")
    sync.sync(document_id, MODULE, FLOOD, 1)

    closed = sync.sync(document_id, MODULE, FLOOD, 5)

    assert closed.status == "complete"
    entries = store.list(document_id)
    assert len(entries) == 1
    assert entries[0].status == "complete"

    # Already closed
    assert sync.sync(document_id, MODULE, FLOOD, 5) is None


@pytest.mark.parametrize("dropped_to", [1, 2])
def test_auto_closed_entry_reopens_when_rating_drops(store, document_id, dropped_to):
    sync = RecommendationSync(store, threshold=2, improved_policy="auto_close")
    created = sync.sync(document_id, MODULE, FLOOD, 1)
    sync.sync(document_id, MODULE, FLOOD, 4)

    reopened = sync.sync(document_id, MODULE, FLOOD, dropped_to)

    assert reopened.id == created.id
    assert reopened.status == "open"
    entries = store.list(document_id)
    assert len(entries) == 1
    assert entries[0].status == "open"
    assert entries[0].triggering_rating == dropped_to
    assert entries[0].priority == ("high" if dropped_to == 1 else "medium")

    assert sync.sync(document_id, MODULE, FLOOD, dropped_to) is None


def test_high_rating_creates_nothing(recommendation_sync, store, document_id):
    assert recommendation_sync.sync(document_id, MODULE, FLOOD, 3) is None
    assert store.list(document_id) == []


def test_hand_edited_entry_is_never_touched(recommendation_sync, store, document_id):
    created = recommendation_sync.sync(document_id, MODULE, FLOOD, 1)
    edited = store.update(document_id, created.id, RecommendationUpdate(owner_id="site-manager"))

    assert edited.is_auto_generated is False

    assert recommendation_sync.sync(document_id, MODULE, FLOOD, 2) is None
    assert recommendation_sync.sync(document_id, MODULE, FLOOD, 5) is None

    entries = store.list(document_id)
    assert len(entries) == 1
    assert entries[0].priority == "high"
    assert entries[0].owner_id == "site-manager"


def test_manual_entry_suppresses_auto_generation(recommendation_sync, store, document_id):
    store.add(RecommendationEntry(
        document_id=document_id,
        source_module_key=MODULE,
        canonical_key=FLOOD,
        title="Flood barriers",
        detail="Fit demountable flood barriers to the loading dock.",
    ))

    assert recommendation_sync.sync(document_id, MODULE, FLOOD, 1) is None
    assert len(store.list(document_id)) == 1


def test_entries_are_keyed_by_module_and_factor(recommendation_sync, store, document_id):
    recommendation_sync.sync(document_id, MODULE, FLOOD, 1)
    recommendation_sync.sync(document_id, MODULE, "exposures_wildfire", 1)
    recommendation_sync.sync(document_id, "RISK_ENGINEERING", FLOOD, 1)
    recommendation_sync.sync("doc-0002", MODULE, FLOOD, 1)

    assert len(store.list(document_id)) == 3
    assert len(store.list("doc-0002")) == 1


def test_factor_without_template_gets_generic_detail(recommendation_sync, document_id):
    entry = recommendation_sync.sync(document_id, "RISK_ENGINEERING", "widget_integrity", 2)

    assert entry.detail == "Widget Integrity requires improvement to meet acceptable standards."


@pytest.mark.parametrize("rating", [0, 7, "1", None, True])
def test_invalid_rating_is_logged_not_raised(recommendation_sync, store, document_id, rating):
    assert recommendation_sync.sync(document_id, MODULE, FLOOD, rating) is None
    assert store.list(document_id) == []


def test_backend_failure_is_swallowed(data_dir, document_id, caplog):
    sync = RecommendationSync(BrokenStore(data_dir), threshold=2, improved_policy="leave")

    assert sync.sync(document_id, MODULE, FLOOD, 1) is None
    assert "Recommendation sync failed" in caplog.text


def test_update_unknown_entry(store, document_id):
    with pytest.raises(RecommendationNotFoundError):
        store.update(document_id, "missing", RecommendationUpdate(status="complete"))


def test_register_summary(recommendation_sync, store, document_id):
    recommendation_sync.sync(document_id, MODULE, FLOOD, 1)
    recommendation_sync.sync(document_id, MODULE, "exposures_wildfire", 2)
    store.add(RecommendationEntry(
        document_id=document_id,
        source_module_key="RE_13_RECOMMENDATIONS",
        canonical_key="housekeeping",
        title="Housekeeping",
        detail="Remove pallets stored against the north wall.",
        priority="low",
        status="in_progress",
    ))

    summary = store.summary(document_id)

    assert summary["total"] == 3
    assert summary["auto_generated"] == 2
    assert summary["by_priority"] == {"critical": 0, "high": 1, "medium": 1, "low": 1}
    assert summary["by_status"] == {"open": 2, "in_progress": 1, "complete": 0}

# Made with Bob
