"""Assessment service: open, suggest, save and rate module instances.

The service sits between the HTTP routers and the gateway. It resolves the
read-only modules a module declares in `requires`, runs the outcome
resolver, serialises saves per instance and triggers recommendation sync
once a rating save has settled.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-18
Version: 1.0.0
License: MIT
"""

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Set

from models.field_set import FieldSet
from models.module_instance import ModuleInstanceRecord
from models.outcome import Outcome, OutcomeSuggestion
from rules import suggest_outcome
from utils.module_catalog import get_required_modules
from utils.score_calculator import exposure_ratings, normalize_rating

from .errors import SaveInProgressError
from .gateway import ModuleInstanceGateway
from .recommendation_service import RecommendationSync

logger = logging.getLogger(__name__)

RISK_ENGINEERING_KEY = "RISK_ENGINEERING"
EXPOSURES_KEY = "RE_07_NATURAL_HAZARDS"


class AssessmentService:
    """Operations on module instances.

    Args:
        gateway: Module instance persistence.
        recommendation_sync: Register sync run after rating saves.
    """

    def __init__(self, gateway: ModuleInstanceGateway, recommendation_sync: RecommendationSync):
        self.gateway = gateway
        self.recommendation_sync = recommendation_sync
        self._saving: Set[str] = set()
        self._saving_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def open(self, instance_id: str) -> Dict[str, Any]:
        """Load a record with its suggested outcome and declared dependencies.

        Returns:
            Dictionary with 'record', 'suggestion' and 'dependencies'
            (module key -> data of the sibling module, None when the
            document has no such module).
        """
        record = self.gateway.load_record(instance_id)
        return {
            'record': record,
            'suggestion': suggest_outcome(record.module_key, record.data),
            'dependencies': self.resolve_dependencies(record),
        }

    def resolve_dependencies(self, record: ModuleInstanceRecord) -> Dict[str, Optional[Dict[str, Any]]]:
        """Read the modules this module declares in `requires`."""
        dependencies: Dict[str, Optional[Dict[str, Any]]] = {}
        for module_key in get_required_modules(record.module_key):
            sibling = self.gateway.find(record.document_id, module_key)
            dependencies[module_key] = sibling.data if sibling else None
        return dependencies

    def suggest(self, module_key: str, fields: Optional[Mapping[str, Any]]) -> Optional[OutcomeSuggestion]:
        """Suggested outcome for unsaved answers (None when no rule matches)."""
        return suggest_outcome(module_key, fields)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _begin_save(self, instance_id: str) -> None:
        with self._saving_lock:
            if instance_id in self._saving:
                raise SaveInProgressError(f"A save of '{instance_id}' is already in progress")
            self._saving.add(instance_id)

    def _end_save(self, instance_id: str) -> None:
        with self._saving_lock:
            self._saving.discard(instance_id)

    def save(
        self,
        instance_id: str,
        fields: Mapping[str, Any],
        outcome: Optional[Outcome] = None,
        assessor_notes: str = "",
        expected_updated_at: Optional[str] = None,
    ) -> ModuleInstanceRecord:
        """Save a whole FieldSet with the assessor's confirmed outcome.

        Raises:
            SaveInProgressError: If the instance is already being saved.
            GatewayError / StaleWriteError: From the gateway; the caller
                still holds its FieldSet and may retry.
        """
        self._begin_save(instance_id)
        try:
            record = self.gateway.load_record(instance_id)
            return self._write(record, FieldSet(fields), outcome, assessor_notes, expected_updated_at)
        finally:
            self._end_save(instance_id)

    def _write(
        self,
        record: ModuleInstanceRecord,
        fields: FieldSet,
        outcome: Optional[Outcome],
        assessor_notes: str,
        expected_updated_at: Optional[str],
    ) -> ModuleInstanceRecord:
        if record.module_key == EXPOSURES_KEY:
            self._derive_exposure_pillars(fields)
        return self.gateway.save(
            record.id,
            fields,
            outcome=outcome,
            assessor_notes=assessor_notes,
            expected_updated_at=expected_updated_at,
        )

    def set_rating(
        self,
        instance_id: str,
        canonical_key: str,
        rating: int,
        expected_updated_at: Optional[str] = None,
    ) -> ModuleInstanceRecord:
        """Set one factor rating, save, then sync the recommendations register.

        The rating save is the primary operation; sync runs after it has
        settled and its failure cannot undo it.
        """
        self._begin_save(instance_id)
        try:
            record = self.gateway.load_record(instance_id)
            fields = FieldSet(record.data)
            ratings = fields.nested("ratings")
            ratings[canonical_key] = rating
            fields["ratings"] = ratings
            saved = self._write(record, fields, record.outcome, record.assessor_notes, expected_updated_at)
        finally:
            self._end_save(instance_id)

        self.recommendation_sync.sync(saved.document_id, saved.module_key, canonical_key, rating)
        return saved

    @staticmethod
    def _derive_exposure_pillars(fields: FieldSet) -> None:
        ratings = fields.nested("ratings")
        include_other = "exposures_other" in ratings
        pillars = exposure_ratings(ratings, include_other=include_other)
        fields["exposure_pillars"] = pillars
        logger.debug(f"Exposure pillars: {pillars}")

    # ------------------------------------------------------------------
    # Document-level helpers
    # ------------------------------------------------------------------

    def create_instance(
        self,
        document_id: str,
        module_key: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ModuleInstanceRecord:
        return self.gateway.create(document_id, module_key, data)

    def risk_engineering_data(self, document_id: str) -> Dict[str, Any]:
        """Data of the document's RISK_ENGINEERING module ({} when absent)."""
        record = self.gateway.find(document_id, RISK_ENGINEERING_KEY)
        return record.data if record else {}

    def document_ratings(self, document_id: str) -> Dict[str, Dict[str, int]]:
        """Normalised ratings per module for every rated module of a document."""
        ratings: Dict[str, Dict[str, int]] = {}
        for record in self.gateway.list_for_document(document_id):
            stored = FieldSet(record.data).nested("ratings")
            if stored:
                ratings[record.module_key] = {key: normalize_rating(value) for key, value in stored.items()}
        return ratings


# Made with Bob
