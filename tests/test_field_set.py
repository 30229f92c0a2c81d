"""Tests for the FieldSet accessors.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

from models.field_set import UNKNOWN, FieldSet


def test_choice_reads_unknown_for_missing_or_blank():
    fields = FieldSet({"fire_alarm_present": "no", "emergency_lighting_present": "  "})

    assert fields.choice("fire_alarm_present") == "no"
    assert fields.choice("emergency_lighting_present") == UNKNOWN
    assert fields.choice("sprinkler_present") == UNKNOWN
    assert fields.choice("oxygen_enrichment", default="none") == "none"


def test_text_and_number_never_raise():
    fields = FieldSet({"height_m": "18", "year_built": "c. 1970", "flag": True})

    assert fields.number("height_m") == 18.0
    assert fields.number("year_built") is None
    assert fields.number("flag") is None
    assert fields.number("missing") is None
    assert fields.text("missing") == ""


def test_flag_accepts_string_forms():
    fields = FieldSet({"a": "yes", "b": "false", "c": 1})

    assert fields.flag("a") is True
    assert fields.flag("b") is False
    assert fields.flag("c") is True
    assert fields.flag("missing") is False


def test_nested_mappings_are_wrapped():
    fields = FieldSet({"review": {"photos": "yes"}, "deviations": [{"justification": "x"}]})

    assert isinstance(fields["review"], FieldSet)
    assert fields.nested("review").choice("photos") == "yes"
    assert fields.nested("missing") == {}
    assert isinstance(fields.items_list("deviations")[0], FieldSet)


def test_items_list_ignores_non_lists():
    fields = FieldSet({"special_constraints": "high-rise", "ignition_sources": ["smoking"]})

    assert fields.items_list("special_constraints") == []
    assert fields.items_list("ignition_sources") == ["smoking"]


def test_is_blank():
    fields = FieldSet({"a": "", "b": "unknown", "c": [], "d": "no", "e": 0})

    assert fields.is_blank("a")
    assert fields.is_blank("b")
    assert fields.is_blank("c")
    assert fields.is_blank("missing")
    assert not fields.is_blank("d")
    assert not fields.is_blank("e")


def test_to_dict_keeps_unknown_keys_and_order():
    raw = {"z_future_field": 1, "review": {"photos": "no"}, "notes": "text"}
    fields = FieldSet(raw)

    assert fields.to_dict() == raw
    assert list(fields) == ["z_future_field", "review", "notes"]


def test_copy_is_independent():
    fields = FieldSet({"review": {"photos": "no"}})
    clone = fields.copy()
    clone.nested("review")["photos"] = "yes"

    assert fields.nested("review").choice("photos") == "no"
    assert clone == {"review": {"photos": "yes"}}

# Made with Bob
