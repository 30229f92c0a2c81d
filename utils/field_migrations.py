"""Load-time normalisation of legacy module data.

Earlier versions of some forms stored fields under different names. Each
module key has at most one current schema; records written by an older
schema are migrated here when they are loaded, before any rule sees them.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-14
Version: 1.0.0
License: MIT
"""

import logging
from typing import Callable, Dict, List

from models.field_set import FieldSet

logger = logging.getLogger(__name__)

Migration = Callable[[FieldSet], bool]


def _migrate_storeys(fields: FieldSet) -> bool:
    """number_of_storeys -> storeys_band / storeys_exact."""
    if "number_of_storeys" not in fields:
        return False
    legacy = fields.text("number_of_storeys").strip()
    if not fields.text("storeys_band"):
        fields["storeys_band"] = "custom" if legacy else "unknown"
    if not fields.text("storeys_exact"):
        fields["storeys_exact"] = legacy
    del fields["number_of_storeys"]
    return True


def _migrate_special_constraints(fields: FieldSet) -> bool:
    """Comma separated special_constraints string -> list."""
    value = fields.get("special_constraints")
    if not isinstance(value, str):
        return False
    fields["special_constraints"] = [part.strip() for part in value.split(",") if part.strip()]
    return True


def _migrate_review_checklist(fields: FieldSet) -> bool:
    """Flat review_<item> keys -> nested review checklist."""
    legacy_keys = [key for key in fields if key.startswith("review_")]
    if not legacy_keys:
        return False
    review = fields.nested("review")
    for key in legacy_keys:
        item = key[len("review_"):]
        if item not in review:
            review[item] = fields[key]
        del fields[key]
    fields["review"] = review
    return True


MIGRATIONS: Dict[str, List[Migration]] = {
    "A2_BUILDING_PROFILE": [_migrate_storeys, _migrate_special_constraints],
    "A7_REVIEW_ASSURANCE": [_migrate_review_checklist],
}


def migrate_fields(module_key: str, fields: FieldSet) -> FieldSet:
    """Apply the legacy migrations registered for a module, in place.

    Args:
        module_key: Module key of the record being loaded.
        fields: FieldSet as stored.

    Returns:
        The same FieldSet, migrated.
    """
    for migration in MIGRATIONS.get(module_key, []):
        if migration(fields):
            logger.info(f"Applied {migration.__name__} to {module_key} data")
    return fields
