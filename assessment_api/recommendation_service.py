"""Recommendations register storage and auto-generation from low ratings.

Register entries are stored as one JSON file per assessment document:

    {DATA_DIR}/recommendations/{document_id}.json

`RecommendationSync` keeps at most one auto-generated entry per
(document, module, canonical key). Entries an assessor has edited are
never touched by sync, and sync never deletes anything.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-18
Version: 1.0.0
License: MIT
"""

import json
import logging
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.recommendation_data import RecommendationEntry, RecommendationUpdate
from models.score_factor import MAX_RATING, MIN_RATING
from utils.config import config
from utils.schema_validator import load_validated_yaml
from utils.score_calculator import humanize_key

from .errors import GatewayError, RecommendationNotFoundError, SyncError

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@lru_cache(maxsize=1)
def load_recommendation_templates() -> Dict[str, Dict[str, str]]:
    """Load critical / moderate detail text per canonical key.

    Example:
        >>> templates = load_recommendation_templates()
        >>> templates['exposures_flood']['critical'][:9]
        'CRITICAL:'
    """
    return load_validated_yaml("recommendation_templates")['templates']


class RecommendationStore:
    """JSON-file backed recommendations register."""

    def __init__(self, data_dir: Optional[Path] = None):
        self.base_dir = Path(data_dir or config.DATA_DIR) / "recommendations"

    def _register_path(self, document_id: str) -> Path:
        return self.base_dir / f"{document_id}.json"

    def list(self, document_id: str) -> List[RecommendationEntry]:
        """All entries of a document, oldest first."""
        path = self._register_path(document_id)
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
            return [RecommendationEntry(**entry) for entry in raw.get("recommendations", [])]
        except Exception as e:
            logger.error(f"Failed to load recommendations register {path}: {e}")
            raise GatewayError(f"Failed to load recommendations for '{document_id}': {e}") from e

    def save_all(self, document_id: str, entries: List[RecommendationEntry]) -> None:
        path = self._register_path(document_id)
        tmp_path = path.with_suffix(".json.tmp")
        payload = {
            "document_id": document_id,
            "recommendations": [entry.model_dump(mode="json") for entry in entries],
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to save recommendations register {path}: {e}")
            raise GatewayError(f"Failed to save recommendations for '{document_id}': {e}") from e

    def add(self, entry: RecommendationEntry) -> RecommendationEntry:
        entries = self.list(entry.document_id)
        entries.append(entry)
        self.save_all(entry.document_id, entries)
        logger.info(f"Added recommendation {entry.id} to document {entry.document_id}")
        return entry

    def update(
        self,
        document_id: str,
        recommendation_id: str,
        changes: RecommendationUpdate,
    ) -> RecommendationEntry:
        """Apply a manual edit.

        Any manual edit takes the entry out of auto-generation: sync will
        leave it alone from then on.

        Raises:
            RecommendationNotFoundError: If the entry does not exist.
        """
        entries = self.list(document_id)
        for index, entry in enumerate(entries):
            if entry.id != recommendation_id:
                continue
            update = changes.model_dump(exclude_unset=True)
            update.update({'is_auto_generated': False, 'updated_at': _utc_now()})
            entries[index] = entry.model_copy(update=update)
            self.save_all(document_id, entries)
            logger.info(f"Recommendation {recommendation_id} edited by hand ({', '.join(sorted(update))})")
            return entries[index]

        raise RecommendationNotFoundError(
            f"Recommendation '{recommendation_id}' not found for document '{document_id}'"
        )

    def summary(self, document_id: str) -> Dict[str, Any]:
        """Counts by priority and status."""
        entries = self.list(document_id)
        by_priority = {priority: 0 for priority in ("critical", "high", "medium", "low")}
        by_status = {status: 0 for status in ("open", "in_progress", "complete")}
        for entry in entries:
            by_priority[entry.priority] += 1
            by_status[entry.status] += 1
        return {
            'total': len(entries),
            'auto_generated': sum(1 for entry in entries if entry.is_auto_generated),
            'by_priority': by_priority,
            'by_status': by_status,
        }


class RecommendationSync:
    """Create or refresh auto-generated recommendations from ratings.

    Args:
        store: Register storage.
        templates: Detail text per canonical key (loaded from config when None).
        threshold: Highest rating that triggers a recommendation.
        improved_policy: "leave" or "auto_close", applied when a rating
            rises above the threshold.
    """

    def __init__(
        self,
        store: RecommendationStore,
        templates: Optional[Dict[str, Dict[str, str]]] = None,
        threshold: Optional[int] = None,
        improved_policy: Optional[str] = None,
    ):
        self.store = store
        self._templates = templates
        self.threshold = threshold if threshold is not None else config.RECOMMENDATION_THRESHOLD
        self.improved_policy = improved_policy or config.RECOMMENDATION_IMPROVED_POLICY

    @property
    def templates(self) -> Dict[str, Dict[str, str]]:
        if self._templates is None:
            self._templates = load_recommendation_templates()
        return self._templates

    def build_detail(self, canonical_key: str, rating: int) -> str:
        severity = "critical" if rating == MIN_RATING else "moderate"
        template = self.templates.get(canonical_key)
        if template:
            return template[severity]
        return f"{humanize_key(canonical_key)} requires improvement to meet acceptable standards."

    @staticmethod
    def priority_for(rating: int) -> str:
        return "high" if rating == MIN_RATING else "medium"

    def sync(
        self,
        document_id: str,
        module_key: str,
        canonical_key: str,
        rating: Any,
    ) -> Optional[RecommendationEntry]:
        """Bring the register in line with one rating.

        Never raises: failures are logged and the primary save that
        triggered the sync stands.

        Returns:
            The created or updated entry, or None when nothing changed.
        """
        try:
            return self._sync(document_id, module_key, canonical_key, rating)
        except Exception as e:
            error = e if isinstance(e, SyncError) else SyncError(str(e))
            logger.error(
                f"Recommendation sync failed for {document_id}/{module_key}/{canonical_key}: {error}",
                extra={
                    "document_id": document_id,
                    "module_key": module_key,
                    "canonical_key": canonical_key,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            return None

    def _sync(
        self,
        document_id: str,
        module_key: str,
        canonical_key: str,
        rating: Any,
    ) -> Optional[RecommendationEntry]:
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise SyncError(f"Rating must be an integer {MIN_RATING}-{MAX_RATING}, got {rating!r}")

        entries = self.store.list(document_id)
        matching = [entry for entry in entries if entry.matches(document_id, module_key, canonical_key)]
        auto_entry = next((entry for entry in matching if entry.is_auto_generated), None)

        if rating > self.threshold:
            return self._rating_improved(document_id, entries, auto_entry)

        if auto_entry is None:
            if matching:
                # Assessor already owns a recommendation for this factor
                logger.debug(f"Hand-edited recommendation exists for {canonical_key}, sync skipped")
                return None
            entry = RecommendationEntry(
                document_id=document_id,
                source_module_key=module_key,
                canonical_key=canonical_key,
                triggering_rating=rating,
                title=f"{humanize_key(canonical_key)} Improvement Required",
                detail=self.build_detail(canonical_key, rating),
                priority=self.priority_for(rating),
                is_auto_generated=True,
            )
            entries.append(entry)
            self.store.save_all(document_id, entries)
            logger.info(
                f"Auto-generated recommendation {entry.id} for {canonical_key} (rating {rating})"
            )
            return entry

        # An auto-closed entry reopens when the rating drops back
        reopen = auto_entry.status == "complete"
        if auto_entry.triggering_rating == rating and not reopen:
            return None

        updated = auto_entry.model_copy(update={
            'status': "open" if reopen else auto_entry.status,
            'triggering_rating': rating,
            'detail': self.build_detail(canonical_key, rating),
            'priority': self.priority_for(rating),
            'updated_at': _utc_now(),
        })
        entries[entries.index(auto_entry)] = updated
        self.store.save_all(document_id, entries)
        logger.info(
            f"Refreshed recommendation {updated.id} for {canonical_key} "
            f"(rating {auto_entry.triggering_rating} -> {rating})"
        )
        return updated

    def _rating_improved(
        self,
        document_id: str,
        entries: List[RecommendationEntry],
        auto_entry: Optional[RecommendationEntry],
    ) -> Optional[RecommendationEntry]:
        if self.improved_policy != "auto_close" or auto_entry is None or auto_entry.status == "complete":
            return None

        closed = auto_entry.model_copy(update={'status': "complete", 'updated_at': _utc_now()})
        entries[entries.index(auto_entry)] = closed
        self.store.save_all(document_id, entries)
        logger.info(f"Auto-closed recommendation {closed.id} for {closed.canonical_key}")
        return closed


# Made with Bob
