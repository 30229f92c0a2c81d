"""Declarative outcome rules for assessment modules.

A RuleTable is an ordered list of Rules over a module's FieldSet. Each
table declares its field schema, its numeric thresholds and a `facts`
function that derives the counts and issue lists its rules inspect, so
the predicate and the rationale read the same data.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-15
Version: 1.0.0
License: MIT

Example:
    >>> table = RuleTable(
    ...     module_key="DEMO",
    ...     schema={"alarm": FieldKind.CHOICE},
    ...     rules=(Rule("no-alarm", Outcome.MATERIAL_DEFICIENCY,
    ...                 lambda f, t: f["alarm"] == "no", "No alarm"),),
    ...     facts=lambda fields, t: {"alarm": fields.choice("alarm")},
    ... )
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple, Union

from models.field_set import FieldKind, FieldSet, UNKNOWN
from models.outcome import Outcome

Facts = Dict[str, Any]
Thresholds = Mapping[str, Any]
Predicate = Callable[[Facts, Thresholds], bool]
Rationale = Union[str, Callable[[Facts, Thresholds], str]]


@dataclass(frozen=True)
class Rule:
    """One row of a rule table.

    Attributes:
        rule_id: Stable identifier reported with the suggestion.
        outcome: Outcome suggested when the predicate holds.
        when: Pure predicate over the table's facts and thresholds.
        rationale: Format string (filled from facts and thresholds) or a
            callable returning the rationale text.
    """
    rule_id: str
    outcome: Outcome
    when: Predicate
    rationale: Rationale

    def explain(self, facts: Facts, thresholds: Thresholds) -> str:
        if callable(self.rationale):
            return self.rationale(facts, thresholds)
        return self.rationale.format(**{**dict(thresholds), **facts})


def _no_facts(fields: FieldSet, thresholds: Thresholds) -> Facts:
    return {}


@dataclass(frozen=True)
class RuleTable:
    """Ordered rules for one module key.

    Severe outcomes are declared before milder ones; the resolver stops at
    the first rule whose predicate holds.
    """
    module_key: str
    rules: Tuple[Rule, ...]
    schema: Mapping[str, FieldKind] = field(default_factory=dict)
    thresholds: Mapping[str, Any] = field(default_factory=dict)
    facts: Callable[[FieldSet, Thresholds], Facts] = _no_facts


def unknown_keys(fields: FieldSet, keys: Iterable[str]) -> List[str]:
    """Keys whose choice value is absent, blank or explicitly "unknown"."""
    return [key for key in keys if fields.choice(key) == UNKNOWN]


def count_unknowns(
    fields: FieldSet,
    keys: Iterable[str],
    exclude: Tuple[str, ...] = ()
) -> int:
    """Count unknown choice values, skipping keys containing any `exclude` fragment.

    Example:
        >>> count_unknowns(FieldSet({"a": "unknown"}), ["a", "b", "a_notes"], ("notes",))
        2
    """
    considered = [key for key in keys if not any(fragment in key for fragment in exclude)]
    return len(unknown_keys(fields, considered))


# Made with Bob
