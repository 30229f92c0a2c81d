"""Rule tables for the explosive atmospheres modules (DSEAR-series).

Registers (substances, processes, zones, risk rows) only count rows the
assessor has started; an untouched blank row never drives an outcome.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

from typing import List

from models.field_set import FieldKind, FieldSet
from models.outcome import Outcome

from ..rule_table import Rule, RuleTable, Thresholds, unknown_keys

C = FieldKind.CHOICE
T = FieldKind.TEXT
L = FieldKind.LIST


def _rows(fields: FieldSet, key: str, started_by: str) -> List[FieldSet]:
    """Register rows whose `started_by` field has been filled in."""
    return [
        row for row in fields.items_list(key)
        if isinstance(row, FieldSet) and row.text(started_by).strip()
    ]


# ---------------------------------------------------------------------------
# DSEAR-1 - Dangerous substances register
# ---------------------------------------------------------------------------

DSEAR1_CRITICAL_PROPERTIES = ("SDS_available", "flash_point", "LFL_UFL")


def _dsear1_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    substances = _rows(fields, "substances", "name")
    return {
        "substances": len(substances),
        "unknown_critical": sum(
            1 for row in substances if unknown_keys(row, DSEAR1_CRITICAL_PROPERTIES)
        ),
        "flammable": sum(
            1 for row in substances
            if row.text("physical_state").strip() and row.choice("SDS_available") != "no"
        ),
    }


DSEAR_1_DANGEROUS_SUBSTANCES = RuleTable(
    module_key="DSEAR_1_DANGEROUS_SUBSTANCES",
    schema={"substances": L},
    thresholds={"info_gap_substances": 2},
    facts=_dsear1_facts,
    rules=(
        Rule(
            "dsear1-properties-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknown_critical"] >= t["info_gap_substances"],
            "{unknown_critical} substances lack SDS, flash point or flammable limits",
        ),
        Rule(
            "dsear1-flammables-present", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["flammable"] > 0,
            "{flammable} flammable or explosive substances present - DSEAR controls required",
        ),
        Rule(
            "dsear1-none-flammable", Outcome.COMPLIANT,
            lambda f, t: True,
            "No flammable dangerous substances recorded",
        ),
    ),
)

# ---------------------------------------------------------------------------
# DSEAR-2 - Process and release assessment
# ---------------------------------------------------------------------------


def _dsear2_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    processes = _rows(fields, "process_descriptions", "activity")
    return {
        "unknown_processes": sum(
            1 for row in processes if unknown_keys(row, ("grade_of_release", "ventilation_type"))
        ),
        "continuous": any(
            isinstance(row, FieldSet) and row.choice("grade_of_release") == "continuous"
            for row in fields.items_list("process_descriptions")
        ),
    }


DSEAR_2_PROCESS_RELEASES = RuleTable(
    module_key="DSEAR_2_PROCESS_RELEASES",
    schema={"process_descriptions": L},
    facts=_dsear2_facts,
    rules=(
        Rule(
            "dsear2-release-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknown_processes"] > 0,
            "Grade of release or ventilation unknown for {unknown_processes} processes",
        ),
        Rule(
            "dsear2-continuous-release", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["continuous"],
            "Continuous grade of release identified",
        ),
        Rule(
            "dsear2-assessed", Outcome.COMPLIANT,
            lambda f, t: True,
            "Process releases assessed",
        ),
    ),
)

# ---------------------------------------------------------------------------
# DSEAR-3 - Hazardous area classification
# ---------------------------------------------------------------------------

HIGH_RISK_ZONES = ("0", "20")


def _dsear3_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    zones = [row.text("zone_type").strip() for row in _rows(fields, "zones", "zone_type")]
    return {
        "zones": len(zones),
        "high_risk": [zone for zone in zones if zone in HIGH_RISK_ZONES],
        "drawings_missing": not fields.text("drawings_reference").strip(),
    }


DSEAR_3_HAZARDOUS_AREA_CLASSIFICATION = RuleTable(
    module_key="DSEAR_3_HAZARDOUS_AREA_CLASSIFICATION",
    schema={"zones": L, "drawings_reference": T},
    facts=_dsear3_facts,
    rules=(
        Rule(
            "dsear3-drawings-missing", Outcome.INFORMATION_GAP,
            lambda f, t: f["zones"] > 0 and f["drawings_missing"],
            "{zones} zones classified without a drawings reference",
        ),
        Rule(
            "dsear3-high-risk-zones", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: bool(f["high_risk"]),
            lambda f, t: f"Zone {', '.join(sorted(set(f['high_risk'])))} classified - continuous explosive atmosphere",
        ),
        Rule(
            "dsear3-zones-classified", Outcome.ACCEPTABLE,
            lambda f, t: f["zones"] > 0,
            "Hazardous areas classified and referenced to drawings",
        ),
        Rule(
            "dsear3-no-zones", Outcome.COMPLIANT,
            lambda f, t: True,
            "No hazardous area zones identified",
        ),
    ),
)

# ---------------------------------------------------------------------------
# DSEAR-4 - Ignition source control
# ---------------------------------------------------------------------------


def _dsear4_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    return {
        "atex_required": fields.choice("ATEX_equipment_required"),
        "atex_present": fields.choice("ATEX_equipment_present"),
        "static_controls": fields.choice("static_control_measures"),
    }


DSEAR_4_IGNITION_SOURCES = RuleTable(
    module_key="DSEAR_4_IGNITION_SOURCES",
    schema={
        "ignition_sources_assessed": L,
        "ATEX_equipment_required": C,
        "ATEX_equipment_present": C,
        "static_control_measures": C,
        "hot_work_controls": C,
        "inspection_testing_regime": T,
    },
    facts=_dsear4_facts,
    rules=(
        Rule(
            "dsear4-atex-missing", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["atex_required"] == "yes" and f["atex_present"] != "yes",
            "ATEX-rated equipment required but not confirmed in place",
        ),
        Rule(
            "dsear4-controls-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: "unknown" in (f["atex_required"], f["static_controls"]),
            "ATEX equipment requirement or static controls not confirmed",
        ),
        Rule(
            "dsear4-controlled", Outcome.COMPLIANT,
            lambda f, t: True,
            "Ignition sources controlled",
        ),
    ),
)


# ---------------------------------------------------------------------------
# DSEAR-5 - Explosion protection and mitigation
# ---------------------------------------------------------------------------

DSEAR5_MEASURES = ("explosion_venting", "suppression_systems", "explosion_isolation")


def _dsear5_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    return {
        "unknowns": len(unknown_keys(fields, DSEAR5_MEASURES)),
        "in_place": sum(1 for key in DSEAR5_MEASURES if fields.choice(key) == "yes"),
    }


DSEAR_5_EXPLOSION_PROTECTION = RuleTable(
    module_key="DSEAR_5_EXPLOSION_PROTECTION",
    schema={
        "prevention_measures": T,
        **{key: C for key in DSEAR5_MEASURES},
        "segregation_distance_controls": T,
    },
    facts=_dsear5_facts,
    rules=(
        Rule(
            "dsear5-measures-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] > 0,
            "{unknowns} explosion protection measures not confirmed",
        ),
        Rule(
            "dsear5-mitigation-in-place", Outcome.COMPLIANT,
            lambda f, t: f["in_place"] > 0,
            "Explosion mitigation in place",
        ),
        Rule(
            "dsear5-prevention-only", Outcome.ACCEPTABLE,
            lambda f, t: True,
            "No explosion mitigation; reliance on prevention measures",
        ),
    ),
)

# ---------------------------------------------------------------------------
# DSEAR-6 - Risk assessment table
# ---------------------------------------------------------------------------


def _dsear6_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    residual = [row.choice("residual_risk") for row in _rows(fields, "risk_rows", "activity")]
    return {"high": residual.count("high"), "medium": residual.count("medium")}


DSEAR_6_RISK_ASSESSMENT = RuleTable(
    module_key="DSEAR_6_RISK_ASSESSMENT",
    schema={"risk_rows": L},
    facts=_dsear6_facts,
    rules=(
        Rule(
            "dsear6-high-residual", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["high"] > 0,
            "{high} activities carry high residual risk",
        ),
        Rule(
            "dsear6-medium-residual", Outcome.ACCEPTABLE,
            lambda f, t: f["medium"] > 0,
            "{medium} activities carry medium residual risk",
        ),
        Rule(
            "dsear6-low-residual", Outcome.COMPLIANT,
            lambda f, t: True,
            "Residual explosion risks are low",
        ),
    ),
)

# ---------------------------------------------------------------------------
# DSEAR-10 - Hierarchy of control
# ---------------------------------------------------------------------------


def _dsear10_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    return {
        "substitution": fields.choice("substitution_considered"),
        "elimination": fields.choice("elimination_possible"),
        "justified": bool(fields.text("justification_for_retained_risk").strip()),
    }


DSEAR_10_HIERARCHY_OF_CONTROL = RuleTable(
    module_key="DSEAR_10_HIERARCHY_OF_CONTROL",
    schema={
        "substitution_considered": C,
        "elimination_possible": C,
        "engineering_controls": T,
        "administrative_controls": T,
        "PPE_controls": T,
        "justification_for_retained_risk": T,
    },
    facts=_dsear10_facts,
    rules=(
        Rule(
            "dsear10-substitution-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: f["substitution"] == "unknown",
            "Not confirmed whether substitution was considered",
        ),
        Rule(
            "dsear10-elimination-unjustified", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["elimination"] == "yes" and not f["justified"],
            "Elimination is possible but the retained risk is not justified",
        ),
        Rule(
            "dsear10-hierarchy-applied", Outcome.COMPLIANT,
            lambda f, t: True,
            "Hierarchy of control applied",
        ),
    ),
)

# ---------------------------------------------------------------------------
# DSEAR-11 - Explosion emergency response
# ---------------------------------------------------------------------------

DSEAR11_ARRANGEMENTS = ("emergency_shutdown_procedures", "drills_and_training")


def _dsear11_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    return {
        "unknown": unknown_keys(fields, DSEAR11_ARRANGEMENTS),
        "missing": [key for key in DSEAR11_ARRANGEMENTS if fields.choice(key) == "no"],
    }


def _humanise(keys: List[str]) -> str:
    return " and ".join(key.replace("_", " ") for key in keys)


DSEAR_11_EXPLOSION_EMERGENCY_RESPONSE = RuleTable(
    module_key="DSEAR_11_EXPLOSION_EMERGENCY_RESPONSE",
    schema={
        "explosion_scenarios_considered": T,
        "emergency_shutdown_procedures": C,
        "isolation_arrangements": T,
        "emergency_services_information": C,
        "drills_and_training": C,
    },
    facts=_dsear11_facts,
    rules=(
        Rule(
            "dsear11-arrangements-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: bool(f["unknown"]),
            lambda f, t: f"Not confirmed: {_humanise(f['unknown'])}",
        ),
        Rule(
            "dsear11-arrangements-missing", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: bool(f["missing"]),
            lambda f, t: f"Not in place: {_humanise(f['missing'])}",
        ),
        Rule(
            "dsear11-prepared", Outcome.COMPLIANT,
            lambda f, t: True,
            "Explosion emergency response arrangements in place",
        ),
    ),
)


# Made with Bob
