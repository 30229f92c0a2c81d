"""Tests for the first-match outcome resolver.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

import logging

from models.outcome import Outcome
from rules import OutcomeResolver, Rule, RuleTable, suggest_outcome


def _boom(facts, thresholds):
    raise KeyError("missing_fact")


def test_failing_predicate_is_skipped(caplog):
    table = RuleTable(
        module_key="DEMO",
        rules=(
            Rule("broken", Outcome.MATERIAL_DEFICIENCY, _boom, "never"),
            Rule("fallback", Outcome.COMPLIANT, lambda f, t: True, "fine"),
        ),
    )

    with caplog.at_level(logging.WARNING):
        suggestion = OutcomeResolver(table).suggest({})

    assert suggestion.rule_id == "fallback"
    assert "broken" in caplog.text


def test_failing_facts_gives_no_suggestion():
    table = RuleTable(
        module_key="DEMO",
        rules=(Rule("always", Outcome.COMPLIANT, lambda f, t: True, "fine"),),
        facts=_boom,
    )

    assert OutcomeResolver(table).suggest({"a": "b"}) is None


def test_failing_rationale_falls_back_to_outcome_name():
    table = RuleTable(
        module_key="DEMO",
        rules=(Rule("gap", Outcome.MINOR_DEFICIENCY, lambda f, t: True, "{missing} fields"),),
    )

    suggestion = OutcomeResolver(table).suggest({})

    assert suggestion.outcome == Outcome.MINOR_DEFICIENCY
    assert suggestion.rationale == "Minor deficiency"


def test_rationale_reads_thresholds_and_facts():
    table = RuleTable(
        module_key="DEMO",
        rules=(Rule("r", Outcome.INFORMATION_GAP, lambda f, t: True, "{count} of {limit}"),),
        thresholds={"limit": 4},
        facts=lambda fields, t: {"count": len(fields)},
    )

    assert OutcomeResolver(table).suggest({"a": 1, "b": 2}).rationale == "2 of 4"


def test_no_match_is_none_not_compliant():
    table = RuleTable(
        module_key="DEMO",
        rules=(Rule("never", Outcome.COMPLIANT, lambda f, t: False, "x"),),
    )

    assert OutcomeResolver(table).resolve({}) is None


def test_none_fields_are_treated_as_empty():
    assert suggest_outcome("A3_PERSONS_AT_RISK", None).outcome == Outcome.INFORMATION_GAP


def test_module_without_table_has_no_suggestion():
    assert suggest_outcome("RE_14_DRAFT_OUTPUTS", {"anything": "yes"}) is None

# Made with Bob
