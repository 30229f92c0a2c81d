"""Rule tables for the fire risk assessment modules (FRA-series).

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-16
Version: 1.0.0
License: MIT
"""

from models.field_set import FieldKind, FieldSet
from models.outcome import Outcome

from ..rule_table import Rule, RuleTable, Thresholds, count_unknowns, unknown_keys

C = FieldKind.CHOICE
T = FieldKind.TEXT
L = FieldKind.LIST


def _issues_or_gaps(f: dict, t: Thresholds) -> str:
    return ", ".join(f["issues"]) if f["issues"] else "Some information gaps remain"


# ---------------------------------------------------------------------------
# FRA-1 - Fire hazards
# ---------------------------------------------------------------------------

FRA1_KEY_FIELDS = ("arson_risk", "housekeeping_fire_load", "lone_working", "oxygen_enrichment")


def _fra1_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    ignition = fields.items_list("ignition_sources")
    arson = fields.choice("arson_risk")
    # oxygen_enrichment is "none" until the assessor says otherwise
    oxygen = fields.choice("oxygen_enrichment", default="none")

    issues = []
    if "smoking" in ignition:
        issues.append("Smoking controls needed")
    if "hot_work" in ignition:
        issues.append("Hot work controls needed")
    if fields.choice("housekeeping_fire_load") == "high":
        issues.append("High fire load")
    if arson == "medium":
        issues.append("Moderate arson risk")

    return {
        "unknowns": len(unknown_keys(fields, FRA1_KEY_FIELDS[:3])) + (oxygen == "unknown"),
        "oxygen_known": oxygen == "known",
        "ignition_count": len(ignition),
        "fuel_count": len(fields.items_list("fuel_sources")),
        "arson": arson,
        "issues": issues,
    }


FRA_1_HAZARDS = RuleTable(
    module_key="FRA_1_HAZARDS",
    schema={
        "ignition_sources": L, "ignition_other": T,
        "fuel_sources": L, "fuel_other": T,
        "oxygen_enrichment": C, "oxygen_sources_notes": T,
        "high_risk_activities": L, "high_risk_other": T,
        "arson_risk": C, "housekeeping_fire_load": C, "lone_working": C,
        "notes": T,
    },
    thresholds={"many_sources": 2, "info_gap_unknowns": 4, "minor_unknowns": 2},
    facts=_fra1_facts,
    rules=(
        Rule(
            "fra1-oxygen-enrichment", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["oxygen_known"] and (
                f["ignition_count"] > t["many_sources"] or f["fuel_count"] > t["many_sources"]
            ),
            "Known oxygen enrichment combined with significant ignition and fuel sources "
            "presents elevated fire risk",
        ),
        Rule(
            "fra1-high-arson", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["arson"] == "high",
            "High arson risk requires immediate security and preventative measures",
        ),
        Rule(
            "fra1-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} key factors marked as unknown - significant information gaps",
        ),
        Rule(
            "fra1-minor", Outcome.MINOR_DEFICIENCY,
            lambda f, t: bool(f["issues"]) or f["unknowns"] >= t["minor_unknowns"],
            _issues_or_gaps,
        ),
    ),
)

# ---------------------------------------------------------------------------
# FRA-2 - Means of escape (as is)
# ---------------------------------------------------------------------------

FRA2_SCHEMA = {
    "escape_strategy_current": C,
    "escape_routes_description": T,
    "travel_distances_compliant": C,
    "final_exits_adequate": C,
    "escape_route_obstructions": C,
    "stair_protection_status": C,
    "inner_rooms_present": C,
    "basement_present": C,
    "exit_signage_adequacy": C,
    "emergency_lighting_dependency": C,
    "disabled_egress_arrangements": C,
    "notes": T,
}


def _fra2_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    critical = []
    if fields.choice("stair_protection_status") == "inadequate":
        critical.append("Inadequate stair protection")
    if fields.choice("final_exits_adequate") == "no":
        critical.append("Inadequate final exits")
    if fields.choice("travel_distances_compliant") == "no":
        critical.append("Non-compliant travel distances")

    issues = []
    if fields.choice("escape_route_obstructions") == "yes":
        issues.append("Escape route obstructions")
    if fields.choice("exit_signage_adequacy") == "inadequate":
        issues.append("Inadequate signage")
    if fields.choice("disabled_egress_arrangements") == "inadequate":
        issues.append("Inadequate disabled egress")

    return {
        "unknowns": count_unknowns(
            fields,
            [key for key, kind in FRA2_SCHEMA.items() if kind == C],
            exclude=("notes", "description"),
        ),
        "critical": critical,
        "issues": issues,
    }


FRA_2_ESCAPE_ASIS = RuleTable(
    module_key="FRA_2_ESCAPE_ASIS",
    schema=FRA2_SCHEMA,
    thresholds={"info_gap_unknowns": 4, "minor_unknowns": 2},
    facts=_fra2_facts,
    rules=(
        Rule(
            "fra2-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} items marked as unknown - significant information gaps",
        ),
        Rule(
            "fra2-critical", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: bool(f["critical"]),
            lambda f, t: f"Material deficiencies identified: {', '.join(f['critical'])}",
        ),
        Rule(
            "fra2-minor", Outcome.MINOR_DEFICIENCY,
            lambda f, t: bool(f["issues"]) or f["unknowns"] >= t["minor_unknowns"],
            _issues_or_gaps,
        ),
    ),
)

# ---------------------------------------------------------------------------
# FRA-3 - Fire protection (as is)
# ---------------------------------------------------------------------------

FRA3_SCHEMA = {
    "fire_alarm_present": C,
    "fire_alarm_category": C,
    "alarm_testing_evidence": C,
    "emergency_lighting_present": C,
    "emergency_lighting_testing_evidence": C,
    "fire_doors_condition": C,
    "fire_doors_inspection_regime": C,
    "compartmentation_condition": C,
    "fire_stopping_confidence": C,
    "extinguishers_present": C,
    "extinguisher_servicing_evidence": C,
    "sprinkler_present": C,
    "notes": T,
}


def _fra3_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    critical = []
    if fields.choice("fire_alarm_present") == "no":
        critical.append("No fire alarm system")
    if fields.choice("emergency_lighting_present") == "no":
        critical.append("No emergency lighting on escape routes")
    if fields.choice("compartmentation_condition") == "inadequate":
        critical.append("Inadequate compartmentation")
    if fields.choice("fire_doors_condition") == "inadequate":
        critical.append("Fire doors in poor condition")

    issues = []
    if fields.choice("alarm_testing_evidence") == "no":
        issues.append("No alarm testing evidence")
    if fields.choice("fire_stopping_confidence") == "unknown":
        issues.append("Fire stopping not verified")
    if fields.choice("extinguishers_present") == "no":
        issues.append("No extinguishers")

    return {
        "unknowns": count_unknowns(
            fields,
            [key for key, kind in FRA3_SCHEMA.items() if kind == C],
            exclude=("notes", "sprinkler"),
        ),
        "critical": critical,
        "issues": issues,
    }


FRA_3_PROTECTION_ASIS = RuleTable(
    module_key="FRA_3_PROTECTION_ASIS",
    schema=FRA3_SCHEMA,
    thresholds={"info_gap_unknowns": 4, "minor_unknowns": 2},
    facts=_fra3_facts,
    rules=(
        Rule(
            "fra3-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} items marked as unknown - significant information gaps",
        ),
        Rule(
            "fra3-critical", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: bool(f["critical"]),
            lambda f, t: f"Material deficiencies identified: {', '.join(f['critical'])}",
        ),
        Rule(
            "fra3-minor", Outcome.MINOR_DEFICIENCY,
            lambda f, t: bool(f["issues"]) or f["unknowns"] >= t["minor_unknowns"],
            _issues_or_gaps,
        ),
    ),
)

# ---------------------------------------------------------------------------
# FRA-5 - External fire spread
# ---------------------------------------------------------------------------

FRA5_KEY_UNKNOWNS = (
    ("cladding_present", "cladding"),
    ("insulation_combustibility_known", "insulation"),
    ("cavity_barriers_status", "cavity_barriers"),
)


def _fra5_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    height = fields.number("building_height_relevant")
    return {
        "applicable": fields.choice("external_wall_system_applicable"),
        "high_rise": height is not None and height >= thresholds["high_rise_height_m"],
        "key_unknowns": [label for key, label in FRA5_KEY_UNKNOWNS if fields.choice(key) == "unknown"],
        "appraisal": fields.choice("pas9980_or_equivalent_appraisal"),
        "openings": fields.choice("external_openings_fire_stopping"),
        "cavity_barriers": fields.choice("cavity_barriers_status"),
    }


FRA_5_EXTERNAL_FIRE_SPREAD = RuleTable(
    module_key="FRA_5_EXTERNAL_FIRE_SPREAD",
    schema={
        "external_wall_system_applicable": C,
        "building_height_relevant": FieldKind.NUMBER,
        "cladding_present": C,
        "insulation_combustibility_known": C,
        "cavity_barriers_status": C,
        "balconies_present": C,
        "external_openings_fire_stopping": C,
        "fire_spread_routes_notes": T,
        "pas9980_or_equivalent_appraisal": C,
        "appraisal_reference": T,
        "interim_measures": T,
        "notes": T,
    },
    thresholds={"high_rise_height_m": 18},
    facts=_fra5_facts,
    rules=(
        Rule(
            "fra5-not-applicable", Outcome.COMPLIANT,
            lambda f, t: f["applicable"] == "no",
            "External wall system assessment not applicable to this building",
        ),
        Rule(
            "fra5-high-rise-unknowns", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: bool(f["key_unknowns"]) and f["high_rise"],
            lambda f, t: (
                f"Building ≥{t['high_rise_height_m']}m with unknown {', '.join(f['key_unknowns'])} - "
                "significant information gaps pose potential life safety risk"
            ),
        ),
        Rule(
            "fra5-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: bool(f["key_unknowns"]),
            lambda f, t: f"Unknown {', '.join(f['key_unknowns'])} - requires verification",
        ),
        Rule(
            "fra5-appraisal-pending", Outcome.INFORMATION_GAP,
            lambda f, t: f["appraisal"] in ("required", "underway"),
            "External wall system appraisal required or underway - awaiting completion",
        ),
        Rule(
            "fra5-appraisal-complete", Outcome.COMPLIANT,
            lambda f, t: (
                f["appraisal"] == "completed"
                and f["openings"] == "adequate"
                and f["cavity_barriers"] == "known"
            ),
            "External wall system appraisal completed with adequate findings",
        ),
        Rule(
            "fra5-inadequate", Outcome.MINOR_DEFICIENCY,
            lambda f, t: "inadequate" in (f["openings"], f["cavity_barriers"]),
            "Deficiencies identified in external fire spread protection",
        ),
    ),
)


# Made with Bob
