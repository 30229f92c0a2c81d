"""Persistence gateway for module instances.

Module instances are stored as JSON files under:

    {DATA_DIR}/modules/{instance_id}.json

Each file holds one ModuleInstanceRecord. A save replaces the whole
document; there is no field-level merge. Legacy field names are migrated
when a record is loaded.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-17
Version: 1.0.0
License: MIT
"""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from models.field_set import FieldSet
from models.module_instance import ModuleInstanceRecord
from models.outcome import Outcome, normalize_outcome
from utils.config import config
from utils.field_migrations import migrate_fields

from .errors import GatewayError, InstanceNotFoundError, StaleWriteError

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ModuleInstanceGateway(ABC):
    """Load and save module instances.

    Subclasses implement storage; `load` and `save` are the operations the
    rest of the engine relies on.
    """

    @abstractmethod
    def load_record(self, instance_id: str) -> ModuleInstanceRecord:
        """Load the full record, raising InstanceNotFoundError / GatewayError."""

    @abstractmethod
    def save(
        self,
        instance_id: str,
        fields: Mapping[str, Any],
        outcome: Optional[Outcome] = None,
        assessor_notes: str = "",
        expected_updated_at: Optional[str] = None,
    ) -> ModuleInstanceRecord:
        """Replace the stored record's data, outcome and notes."""

    @abstractmethod
    def create(
        self,
        document_id: str,
        module_key: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ModuleInstanceRecord:
        """Create an empty (or pre-filled) module instance."""

    @abstractmethod
    def list_for_document(self, document_id: str) -> List[ModuleInstanceRecord]:
        """All module instances of a document."""

    def load(self, instance_id: str) -> FieldSet:
        return FieldSet(self.load_record(instance_id).data)

    def find(self, document_id: str, module_key: str) -> Optional[ModuleInstanceRecord]:
        """First instance of a module within a document, None if absent."""
        for record in self.list_for_document(document_id):
            if record.module_key == module_key:
                return record
        return None


class JsonFileGateway(ModuleInstanceGateway):
    """Module instances stored as one JSON file per instance.

    Args:
        data_dir: Base data directory (defaults to config.DATA_DIR).
        conflict_policy: "last_write_wins" or "reject_stale" (defaults to
            config.CONFLICT_POLICY).
    """

    def __init__(self, data_dir: Optional[Path] = None, conflict_policy: Optional[str] = None):
        self.data_dir = Path(data_dir or config.DATA_DIR)
        self.modules_dir = self.data_dir / "modules"
        self.conflict_policy = conflict_policy or config.CONFLICT_POLICY

    def _record_path(self, instance_id: str) -> Path:
        # Instance ids are generated here; anything path-like is rejected
        if not instance_id or "/" in instance_id or "\\" in instance_id or instance_id.startswith("."):
            raise InstanceNotFoundError(f"Module instance '{instance_id}' not found")
        return self.modules_dir / f"{instance_id}.json"

    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            raise InstanceNotFoundError(f"Module instance '{path.stem}' not found")
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read module instance at {path}: {e}")
            raise GatewayError(f"Failed to read module instance '{path.stem}': {e}") from e

    def _write(self, record: ModuleInstanceRecord) -> None:
        path = self._record_path(record.id)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(record.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to save module instance at {path}: {e}")
            raise GatewayError(f"Failed to save module instance '{record.id}': {e}") from e

    def _to_record(self, raw: Dict[str, Any], source: str) -> ModuleInstanceRecord:
        try:
            record = ModuleInstanceRecord.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Invalid module instance record {source}: {e}")
            raise GatewayError(f"Invalid module instance record '{source}'") from e

        fields = migrate_fields(record.module_key, FieldSet(record.data))
        record.data = fields.to_dict()
        return record

    def load_record(self, instance_id: str) -> ModuleInstanceRecord:
        path = self._record_path(instance_id)
        record = self._to_record(self._read(path), instance_id)
        logger.debug(f"Loaded module instance {instance_id} ({record.module_key})")
        return record

    def save(
        self,
        instance_id: str,
        fields: Mapping[str, Any],
        outcome: Optional[Outcome] = None,
        assessor_notes: str = "",
        expected_updated_at: Optional[str] = None,
    ) -> ModuleInstanceRecord:
        """Replace the stored document.

        Under the "reject_stale" policy a save that carries the
        `updated_at` it loaded is refused when the stored record has moved
        on since. Under "last_write_wins" the check is skipped.

        Raises:
            InstanceNotFoundError: If the instance does not exist.
            StaleWriteError: If the record changed since it was loaded.
            GatewayError: If the record cannot be written.
        """
        existing = self.load_record(instance_id)

        if (
            self.conflict_policy == "reject_stale"
            and expected_updated_at is not None
            and expected_updated_at != existing.updated_at
        ):
            logger.warning(
                f"Rejected stale save of {instance_id}: "
                f"loaded {expected_updated_at}, stored {existing.updated_at}"
            )
            raise StaleWriteError(
                f"Module instance '{instance_id}' was modified at {existing.updated_at}"
            )

        if not isinstance(fields, FieldSet):
            fields = FieldSet(fields)

        now = _utc_now()
        outcome = normalize_outcome(outcome.value if isinstance(outcome, Outcome) else outcome)
        completed_at = None
        if outcome:
            completed_at = existing.completed_at if existing.outcome and existing.completed_at else now
        record = ModuleInstanceRecord(
            id=existing.id,
            document_id=existing.document_id,
            module_key=existing.module_key,
            data=fields.to_dict(),
            outcome=outcome,
            assessor_notes=assessor_notes or "",
            completed_at=completed_at,
            updated_at=now,
        )
        self._write(record)
        logger.info(
            f"Saved module instance {instance_id} ({record.module_key}) "
            f"outcome={outcome.value if outcome else None}"
        )
        return record

    def create(
        self,
        document_id: str,
        module_key: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ModuleInstanceRecord:
        record = ModuleInstanceRecord(
            id=str(uuid.uuid4()),
            document_id=document_id,
            module_key=module_key,
            data=FieldSet(data or {}).to_dict(),
        )
        self._write(record)
        logger.info(f"Created module instance {record.id} ({module_key}) for document {document_id}")
        return record

    def list_for_document(self, document_id: str) -> List[ModuleInstanceRecord]:
        if not self.modules_dir.exists():
            return []

        records: List[ModuleInstanceRecord] = []
        for file_path in sorted(self.modules_dir.glob("*.json")):
            try:
                raw = self._read(file_path)
            except GatewayError as e:
                logger.warning(f"Skipping unreadable module instance {file_path}: {e}")
                continue
            if raw.get("document_id") != document_id:
                continue
            try:
                records.append(self._to_record(raw, file_path.stem))
            except GatewayError as e:
                logger.warning(f"Skipping invalid module instance {file_path}: {e}")
        return records


# Made with Bob
