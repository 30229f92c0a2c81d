"""Tests for the YAML reference data and its cross-file rules.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-20
Version: 1.0.0
License: MIT
"""

import sys
from pathlib import Path

import pytest

from utils.module_catalog import get_module_definition, get_modules_for_doc_type, get_required_modules
from utils.schema_validator import load_validated_yaml

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from cross_field_rules import validate_cross_field_constraints  # noqa: E402


@pytest.fixture(scope="module")
def reference_data():
    return {
        name: load_validated_yaml(name)
        for name in ("modules", "industry_weights", "recommendation_templates")
    }


def test_shipped_reference_data_is_consistent(reference_data):
    validate_cross_field_constraints(
        reference_data["modules"],
        reference_data["industry_weights"],
        reference_data["recommendation_templates"],
    )


def test_unknown_required_module_is_reported(reference_data):
    modules = {"modules": reference_data["modules"]["modules"] + [
        {"key": "RE_99_EXTRA", "name": "Extra", "requires": ["RE_98_MISSING"]},
    ]}

    with pytest.raises(ValueError, match="requires unknown module 'RE_98_MISSING'"):
        validate_cross_field_constraints(
            modules, reference_data["industry_weights"], reference_data["recommendation_templates"]
        )


def test_unknown_weighted_factor_is_reported(reference_data):
    weights = {
        "meta": reference_data["industry_weights"]["meta"],
        "industries": {"demo": {"label": "Demo", "weights": {"not_a_factor": 3}}},
    }

    with pytest.raises(ValueError, match="weights unknown factor 'not_a_factor'"):
        validate_cross_field_constraints(
            reference_data["modules"], weights, reference_data["recommendation_templates"]
        )


def test_invalid_yaml_fails_schema_validation(tmp_path):
    (tmp_path / "modules.yml").write_text("modules:\n  - name: missing key\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_validated_yaml("modules", tmp_path)


def test_catalogue_lookups():
    assert get_module_definition("A7_REVIEW_ASSURANCE").name.startswith("A7")
    assert get_module_definition("NOPE") is None
    assert get_required_modules("RE_07_NATURAL_HAZARDS") == ["RISK_ENGINEERING"]
    assert get_required_modules("A3_PERSONS_AT_RISK") == []

    orders = [module.order for module in get_modules_for_doc_type("FRA")]
    assert orders == sorted(orders)

# Made with Bob
