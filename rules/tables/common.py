"""Rule tables for the common assessment modules (A-series).

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-15
Version: 1.0.0
License: MIT
"""

from models.field_set import FieldKind, FieldSet
from models.outcome import Outcome

from ..rule_table import Rule, RuleTable, Thresholds, count_unknowns

C = FieldKind.CHOICE
T = FieldKind.TEXT
L = FieldKind.LIST

# ---------------------------------------------------------------------------
# A2 - Building profile
# ---------------------------------------------------------------------------

A2_KEY_FIELDS = ("height_m", "storeys_band", "year_built", "construction_frame", "building_use_uk")
A2_COMPLEX_CONSTRAINTS = ("high-rise", "shared occupancy", "complex evacuation")


def _a2_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    constraints = fields.items_list("special_constraints")
    return {
        "unknowns": sum(1 for key in A2_KEY_FIELDS if fields.is_blank(key)),
        "complex_constraints": any(c in constraints for c in A2_COMPLEX_CONSTRAINTS),
        "constraints_detail_length": len(fields.text("special_constraints_other").strip()),
    }


A2_BUILDING_PROFILE = RuleTable(
    module_key="A2_BUILDING_PROFILE",
    schema={
        "building_name": T, "year_built": T, "height_m": T,
        "storeys_band": C, "storeys_exact": T,
        "floor_area_band": C, "floor_area_m2": T,
        "building_use_uk": C, "building_use_other": T,
        "secondary_uses": L, "secondary_uses_other": T,
        "construction_frame": C,
        "roof_construction_summary": T, "wall_construction_summary": T,
        "special_constraints": L, "special_constraints_other": T,
        "notes": T,
    },
    thresholds={"info_gap_unknowns": 4, "minor_unknowns": 2, "min_constraints_detail": 20},
    facts=_a2_facts,
    rules=(
        Rule(
            "a2-key-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} key fields unknown - significant information gaps for strategy basis",
        ),
        Rule(
            "a2-constraints-detail", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["complex_constraints"] and f["constraints_detail_length"] < t["min_constraints_detail"],
            "Complex constraints identified but details incomplete",
        ),
        Rule(
            "a2-some-unknowns", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"],
            "Some key building information gaps requiring clarification",
        ),
        Rule(
            "a2-documented", Outcome.COMPLIANT,
            lambda f, t: True,
            "Building profile sufficiently documented",
        ),
    ),
)

# ---------------------------------------------------------------------------
# A3 - Persons at risk
# ---------------------------------------------------------------------------

A3_KEY_FIELDS = (
    "max_occupancy",
    "occupancy_profile",
    "evacuation_assistance_required",
    "peeps_dependency",
    "out_of_hours_occupation",
)


def _a3_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    return {
        "unknowns": sum(1 for key in A3_KEY_FIELDS if fields.is_blank(key)),
        "assistance_required": fields.choice("evacuation_assistance_required") == "yes",
        "peeps_confirmed": fields.choice("peeps_dependency") == "yes",
    }


A3_PERSONS_AT_RISK = RuleTable(
    module_key="A3_PERSONS_AT_RISK",
    schema={
        "max_occupancy": T, "normal_occupancy": T,
        "occupancy_profile": C,
        "vulnerable_groups": L, "vulnerable_groups_notes": T,
        "lone_working": C, "out_of_hours_occupation": C,
        "evacuation_assistance_required": C, "peeps_dependency": C,
        "notes": T,
    },
    thresholds={"info_gap_unknowns": 3, "minor_unknowns": 1},
    facts=_a3_facts,
    rules=(
        Rule(
            "a3-assistance-without-peeps", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["assistance_required"] and not f["peeps_confirmed"],
            "Evacuation assistance required but PEEP process not confirmed",
        ),
        Rule(
            "a3-key-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} key fields unknown - occupancy profile incomplete",
        ),
        Rule(
            "a3-some-unknowns", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"],
            "Some occupancy information gaps requiring clarification",
        ),
        Rule(
            "a3-documented", Outcome.COMPLIANT,
            lambda f, t: True,
            "Occupancy profile sufficiently documented",
        ),
    ),
)

# ---------------------------------------------------------------------------
# A4 - Management controls
# ---------------------------------------------------------------------------

A4_SCHEMA = {
    "responsibilities_defined": C,
    "fire_safety_policy_exists": C,
    "training_induction_provided": C,
    "training_refresher_frequency": C,
    "fire_warden_marshal_provision": C,
    "contractor_induction": C,
    "contractor_supervision": C,
    "ptw_hot_work": C,
    "ptw_electrical_isolation_loto": C,
    "ptw_confined_space": C,
    "ptw_other_permits": T,
    "inspection_alarm_weekly_test": C,
    "inspection_emergency_lighting_monthly": C,
    "inspection_extinguishers_annual_service": C,
    "inspection_fire_doors_frequency": C,
    "inspection_records_available": C,
    "housekeeping_waste_control": C,
    "housekeeping_storage_control": C,
    "housekeeping_combustible_accumulation_risk": C,
    "change_management_process_exists": C,
    "change_management_review_triggers_defined": C,
    "management_notes": T,
}

# training_refresher_frequency defaults to "none" rather than "unknown"
A4_UNKNOWN_FIELDS = tuple(
    key for key, kind in A4_SCHEMA.items()
    if kind == C and key != "training_refresher_frequency"
)


def _a4_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    critical = []
    if fields.choice("fire_safety_policy_exists") == "no":
        critical.append("No fire safety policy")
    if fields.choice("training_induction_provided") == "no":
        critical.append("No staff induction")
    if fields.choice("ptw_hot_work") == "no" and fields.choice("contractor_supervision") == "no":
        critical.append("No hot work permit system with contractor works")
    if fields.choice("inspection_alarm_weekly_test") == "no":
        critical.append("Fire alarm not tested weekly")

    return {
        "unknowns": count_unknowns(fields, A4_UNKNOWN_FIELDS, exclude=("notes", "other")),
        "critical": critical,
    }


def _a4_minor_rationale(f: dict, t: Thresholds) -> str:
    if f["unknowns"] >= t["minor_unknowns"]:
        return "Some information gaps remain"
    return f["critical"][0]


A4_MANAGEMENT_CONTROLS = RuleTable(
    module_key="A4_MANAGEMENT_CONTROLS",
    schema=A4_SCHEMA,
    thresholds={"info_gap_unknowns": 5, "material_critical": 2, "minor_unknowns": 3},
    facts=_a4_facts,
    rules=(
        Rule(
            "a4-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} items marked as unknown - significant information gaps identified",
        ),
        Rule(
            "a4-multiple-critical", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: len(f["critical"]) >= t["material_critical"],
            lambda f, t: f"Multiple material deficiencies: {', '.join(f['critical'])}",
        ),
        Rule(
            "a4-minor", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"] or len(f["critical"]) == 1,
            _a4_minor_rationale,
        ),
    ),
)

# ---------------------------------------------------------------------------
# A5 - Emergency arrangements
# ---------------------------------------------------------------------------

A5_SCHEMA = {
    "emergency_plan_exists": C,
    "alarm_raising_procedure_defined": C,
    "calling_fire_service_procedure": C,
    "assembly_points_defined": C,
    "evacuation_drills_frequency": C,
    "fire_wardens_present": C,
    "peeps_in_place": C,
    "emergency_services_access_info_available": C,
    "utilities_isolation_known": C,
    "out_of_hours_arrangements": T,
    "notes": T,
}


def _a5_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    critical = []
    if fields.choice("emergency_plan_exists") == "no":
        critical.append("No emergency plan")
    if fields.choice("assembly_points_defined") == "no":
        critical.append("No assembly points")
    if fields.choice("evacuation_drills_frequency") == "none":
        critical.append("No evacuation drills")
    if fields.choice("peeps_in_place") == "no":
        critical.append("No PEEPs where required")

    return {
        "unknowns": count_unknowns(
            fields,
            [key for key, kind in A5_SCHEMA.items() if kind == C],
            exclude=("notes", "arrangements"),
        ),
        "critical": critical,
    }


A5_EMERGENCY_ARRANGEMENTS = RuleTable(
    module_key="A5_EMERGENCY_ARRANGEMENTS",
    schema=A5_SCHEMA,
    thresholds={"info_gap_unknowns": 4, "material_critical": 2, "minor_unknowns": 2},
    facts=_a5_facts,
    rules=(
        Rule(
            "a5-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} items marked as unknown - significant information gaps",
        ),
        Rule(
            "a5-multiple-critical", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: len(f["critical"]) >= t["material_critical"],
            lambda f, t: f"Multiple material deficiencies: {', '.join(f['critical'])}",
        ),
        Rule(
            "a5-minor", Outcome.MINOR_DEFICIENCY,
            lambda f, t: len(f["critical"]) == 1 or f["unknowns"] >= t["minor_unknowns"],
            lambda f, t: f["critical"][0] if f["critical"] else "Some information gaps remain",
        ),
    ),
)

# ---------------------------------------------------------------------------
# A7 - Review and assurance
# ---------------------------------------------------------------------------

A7_REVIEW_ITEMS = (
    "peerReview",
    "siteInspection",
    "photos",
    "alarmEvidence",
    "elEvidence",
    "drillEvidence",
    "maintenanceLogs",
    "rpInterview",
)


def _a7_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    review = fields.nested("review")
    answers = [review.choice(item) for item in A7_REVIEW_ITEMS]
    return {
        "yes_count": answers.count("yes"),
        "no_count": answers.count("no"),
    }


A7_REVIEW_ASSURANCE = RuleTable(
    module_key="A7_REVIEW_ASSURANCE",
    schema={
        "review": FieldKind.NESTED,
        "assumptionsLimitations": T,
        "commentary": T,
    },
    thresholds={"material_no": 4, "minor_no": 2, "compliant_yes": 6},
    facts=_a7_facts,
    rules=(
        Rule(
            "a7-many-not-done", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["no_count"] >= t["material_no"],
            "Multiple review/assurance activities not completed",
        ),
        Rule(
            "a7-some-not-done", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["no_count"] >= t["minor_no"],
            "Some review/assurance activities incomplete",
        ),
        Rule(
            "a7-comprehensive", Outcome.COMPLIANT,
            lambda f, t: f["yes_count"] >= t["compliant_yes"],
            "Comprehensive review and assurance activities completed",
        ),
        Rule(
            "a7-unclear", Outcome.INFORMATION_GAP,
            lambda f, t: True,
            "Review and assurance status unclear",
        ),
    ),
)


# Made with Bob
