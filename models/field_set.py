"""FieldSet data model.

A FieldSet holds the answers entered for one module instance: an ordered
mapping from field key to a loosely typed value (choice tag, text, number,
boolean, list of strings or a nested FieldSet).

Accessors never raise for missing or malformed values. Absent choice fields
read as "unknown", absent text as "", so rule predicates stay total.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-12
Version: 1.0.0
License: MIT

Example:
    >>> fields = FieldSet({"fire_alarm_present": "no"})
    >>> fields.choice("fire_alarm_present")
    'no'
    >>> fields.choice("emergency_lighting_present")
    'unknown'
"""

import copy
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, MutableMapping, Optional

UNKNOWN = "unknown"


class FieldKind(str, Enum):
    """Value kinds a module schema may declare for a field."""
    CHOICE = "choice"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"
    NESTED = "nested"


class FieldSet(MutableMapping):
    """Ordered, mutable mapping of field key to value.

    Unknown keys are kept as-is so a save never drops data written by a
    newer or older schema.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            self._data[str(key)] = _wrap(value)

    # MutableMapping protocol

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = _wrap(value)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldSet):
            return self.to_dict() == other.to_dict()
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"FieldSet({self.to_dict()!r})"

    # Typed accessors

    def choice(self, key: str, default: str = UNKNOWN) -> str:
        """Return a choice tag, or `default` when missing or blank."""
        value = self._data.get(key)
        if value is None or isinstance(value, (FieldSet, list, dict)):
            return default
        text = str(value).strip()
        return text if text else default

    def text(self, key: str) -> str:
        """Return free text, "" when missing."""
        value = self._data.get(key)
        if value is None or isinstance(value, (FieldSet, list, dict)):
            return ""
        return str(value)

    def number(self, key: str) -> Optional[float]:
        """Return a numeric value, None when missing or not parseable."""
        value = self._data.get(key)
        if isinstance(value, bool) or value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def flag(self, key: str) -> bool:
        value = self._data.get(key)
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "1")
        return bool(value)

    def items_list(self, key: str) -> List[Any]:
        """Return a list value, [] when missing or not a list."""
        value = self._data.get(key)
        return list(value) if isinstance(value, list) else []

    def nested(self, key: str) -> "FieldSet":
        """Return a nested FieldSet, an empty one when missing."""
        value = self._data.get(key)
        return value if isinstance(value, FieldSet) else FieldSet()

    def is_blank(self, key: str) -> bool:
        """True when a field is absent, empty or marked unknown."""
        value = self._data.get(key)
        if value is None:
            return True
        if isinstance(value, str):
            return value.strip() in ("", UNKNOWN)
        if isinstance(value, (list, FieldSet)):
            return len(value) == 0
        return False

    # Serialisation

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible dict, nested FieldSets included."""
        return {key: _unwrap(value) for key, value in self._data.items()}

    def copy(self) -> "FieldSet":
        return FieldSet(copy.deepcopy(self.to_dict()))


def _wrap(value: Any) -> Any:
    if isinstance(value, FieldSet):
        return value
    if isinstance(value, Mapping):
        return FieldSet(value)
    if isinstance(value, list):
        return [_wrap(v) if isinstance(v, Mapping) else v for v in value]
    return value


def _unwrap(value: Any) -> Any:
    if isinstance(value, FieldSet):
        return value.to_dict()
    if isinstance(value, list):
        return [_unwrap(v) for v in value]
    return value

# Made with Bob
