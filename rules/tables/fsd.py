"""Rule tables for the fire strategy design modules (FSD-series).

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-16
Version: 1.0.0
License: MIT
"""

from models.field_set import FieldKind, FieldSet
from models.outcome import Outcome

from ..rule_table import Rule, RuleTable, Thresholds, unknown_keys

C = FieldKind.CHOICE
T = FieldKind.TEXT
L = FieldKind.LIST

# ---------------------------------------------------------------------------
# FSD-1 - Regulatory basis
# ---------------------------------------------------------------------------


def _fsd1_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    unjustified = 0
    for deviation in fields.items_list("deviations"):
        justification = deviation.text("justification") if isinstance(deviation, FieldSet) else ""
        if len(justification.strip()) < thresholds["min_justification"]:
            unjustified += 1

    return {
        "framework": fields.choice("regulatory_framework"),
        "unjustified": unjustified,
        "assumptions_length": len(fields.text("key_assumptions").strip()),
    }


FSD_1_REG_BASIS = RuleTable(
    module_key="FSD_1_REG_BASIS",
    schema={
        "regulatory_framework": C,
        "design_objectives": L, "design_objectives_notes": T,
        "life_safety_scope": T,
        "property_protection_scope": C, "property_protection_notes": T,
        "building_reg_control_body": T,
        "deviations": L,
        "key_assumptions": T,
        "standards_referenced": L,
        "notes": T,
    },
    thresholds={"min_justification": 10, "material_deviations": 2, "min_assumptions": 50},
    facts=_fsd1_facts,
    rules=(
        Rule(
            "fsd1-framework-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: f["framework"] == "unknown",
            "Regulatory framework not defined - cannot proceed with design",
        ),
        Rule(
            "fsd1-unjustified-deviations", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["unjustified"] >= t["material_deviations"],
            "{unjustified} deviations lack adequate justification",
        ),
        Rule(
            "fsd1-unjustified-deviation", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unjustified"] >= 1,
            "Some deviations require better justification",
        ),
        Rule(
            "fsd1-assumptions", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["assumptions_length"] < t["min_assumptions"],
            "Key design assumptions should be documented",
        ),
        Rule(
            "fsd1-defined", Outcome.COMPLIANT,
            lambda f, t: True,
            "Regulatory basis adequately defined",
        ),
    ),
)

# ---------------------------------------------------------------------------
# FSD-8 - Smoke control
# ---------------------------------------------------------------------------


def _fsd8_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    presence = fields.choice("smoke_control_present")
    activation_missing = len(fields.text("activation_and_controls").strip()) < thresholds["min_activation_detail"]
    return {
        "presence": presence,
        "activation_missing": activation_missing,
        "unknowns": (
            len(unknown_keys(fields, ("smoke_control_present", "system_type", "design_standard_or_basis")))
            + activation_missing
        ),
    }


FSD_8_SMOKE_CONTROL = RuleTable(
    module_key="FSD_8_SMOKE_CONTROL",
    schema={
        "smoke_control_present": C,
        "system_type": C,
        "coverage_areas": L, "coverage_areas_notes": T,
        "design_standard_or_basis": C,
        "activation_and_controls": T,
        "maintenance_testing_assumptions": T,
        "notes": T,
    },
    thresholds={"min_activation_detail": 20, "minor_unknowns": 2},
    facts=_fsd8_facts,
    rules=(
        Rule(
            "fsd8-presence-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: f["presence"] == "unknown",
            "Smoke control provision not confirmed",
        ),
        Rule(
            "fsd8-activation-undocumented", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["presence"] == "yes" and f["activation_missing"],
            "Smoke control present but activation/control not documented",
        ),
        Rule(
            "fsd8-some-unknowns", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"],
            "Some smoke control details require clarification",
        ),
        Rule(
            "fsd8-specified", Outcome.COMPLIANT,
            lambda f, t: True,
            "Smoke control adequately specified",
        ),
    ),
)

# ---------------------------------------------------------------------------
# FSD-9 - Construction phase fire safety
# ---------------------------------------------------------------------------

FSD9_PROVISIONS = (
    "fire_plan_exists",
    "hot_work_controls",
    "temporary_detection_alarm",
    "temporary_means_of_escape",
    "combustible_storage_controls",
    "site_security_arson_controls",
    "emergency_access_maintained",
)


def _fsd9_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    return {
        "applicable": fields.choice("construction_phase_applicable"),
        "unknowns": len(unknown_keys(fields, FSD9_PROVISIONS)),
        "critical_missing": (
            fields.choice("fire_plan_exists") in ("no", "unknown")
            or fields.choice("temporary_means_of_escape") in ("inadequate", "unknown")
        ),
    }


FSD_9_CONSTRUCTION_PHASE = RuleTable(
    module_key="FSD_9_CONSTRUCTION_PHASE",
    schema={
        "construction_phase_applicable": C,
        **{key: C for key in FSD9_PROVISIONS},
        "notes": T,
    },
    thresholds={"info_gap_unknowns": 3, "minor_unknowns": 1},
    facts=_fsd9_facts,
    rules=(
        Rule(
            "fsd9-not-applicable", Outcome.COMPLIANT,
            lambda f, t: f["applicable"] == "no",
            "Construction phase fire safety not applicable",
        ),
        Rule(
            "fsd9-applicability-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: f["applicable"] == "unknown",
            "Applicability of construction phase fire safety not confirmed",
        ),
        Rule(
            "fsd9-critical-missing", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["critical_missing"],
            "Critical construction phase fire safety provisions missing or unknown",
        ),
        Rule(
            "fsd9-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} construction phase fire safety parameters unknown",
        ),
        Rule(
            "fsd9-some-unknowns", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"],
            "Some construction phase fire safety details require clarification",
        ),
        Rule(
            "fsd9-addressed", Outcome.COMPLIANT,
            lambda f, t: True,
            "Construction phase fire safety adequately addressed",
        ),
    ),
)

# ---------------------------------------------------------------------------
# FSD-2 - Evacuation strategy
# ---------------------------------------------------------------------------


def _too_short(fields: FieldSet, key: str, minimum: int) -> bool:
    return len(fields.text(key).strip()) < minimum


def _fsd2_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    return {
        "strategy": fields.choice("evacuation_strategy"),
        "has_dependencies": len(fields.items_list("management_dependencies")) > 0,
        "dependencies_documented": not _too_short(
            fields, "management_dependencies_notes", thresholds["min_dependency_notes"]
        ),
        "alarm_documented": not _too_short(fields, "alarm_philosophy", thresholds["min_alarm_philosophy"]),
    }


FSD_2_EVAC_STRATEGY = RuleTable(
    module_key="FSD_2_EVAC_STRATEGY",
    schema={
        "evacuation_strategy": C,
        "alarm_philosophy": T,
        "cause_and_effect_summary": T,
        "management_dependencies": L, "management_dependencies_notes": T,
        "evacuation_lifts": C, "evacuation_lifts_notes": T,
        "refuges_provided": C, "refuges_notes": T,
        "communication_method": C,
        "notes": T,
    },
    thresholds={"min_dependency_notes": 21, "min_alarm_philosophy": 20},
    facts=_fsd2_facts,
    rules=(
        Rule(
            "fsd2-strategy-unknown", Outcome.INFORMATION_GAP,
            lambda f, t: f["strategy"] == "unknown",
            "Evacuation strategy not defined - critical for design basis",
        ),
        Rule(
            "fsd2-dependencies-undocumented", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["has_dependencies"] and not f["dependencies_documented"],
            "Strategy relies on management dependencies but these are not adequately documented",
        ),
        Rule(
            "fsd2-alarm-philosophy", Outcome.MINOR_DEFICIENCY,
            lambda f, t: not f["alarm_documented"],
            "Alarm philosophy should be documented",
        ),
        Rule(
            "fsd2-defined", Outcome.COMPLIANT,
            lambda f, t: True,
            "Evacuation strategy adequately defined",
        ),
    ),
)

# ---------------------------------------------------------------------------
# FSD-3 - Means of escape design
# ---------------------------------------------------------------------------


def _fsd3_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    capacity_missing = fields.choice("exit_capacity_calculation_done") in ("no", "unknown")
    assumptions_missing = _too_short(
        fields, "disabled_evacuation_assumptions", thresholds["min_assumptions"]
    )
    return {
        "capacity_missing": capacity_missing,
        "assumptions_missing": assumptions_missing,
        "unknowns": (
            len(unknown_keys(fields, ("travel_distance_basis", "stairs_strategy")))
            + capacity_missing
            + assumptions_missing
        ),
    }


FSD_3_ESCAPE_DESIGN = RuleTable(
    module_key="FSD_3_ESCAPE_DESIGN",
    schema={
        "travel_distance_basis": C,
        "travel_distance_limits_summary": T,
        "exit_capacity_calculation_done": C,
        "exit_widths_summary": T,
        "number_of_exits_per_storey": T,
        "stairs_strategy": C, "stairs_strategy_notes": T,
        "disabled_evacuation_assumptions": T,
        "final_exit_security_strategy": T,
        "notes": T,
    },
    thresholds={"min_assumptions": 20, "info_gap_unknowns": 3, "minor_unknowns": 1},
    facts=_fsd3_facts,
    rules=(
        Rule(
            "fsd3-capacity-not-calculated", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["capacity_missing"],
            "Exit capacity calculations not completed - critical for design basis",
        ),
        Rule(
            "fsd3-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} key escape design parameters unknown",
        ),
        Rule(
            "fsd3-assisted-evacuation", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["assumptions_missing"],
            "Assisted evacuation assumptions not defined",
        ),
        Rule(
            "fsd3-some-unknowns", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"],
            "Some escape design details require clarification",
        ),
        Rule(
            "fsd3-documented", Outcome.COMPLIANT,
            lambda f, t: True,
            "Escape design adequately documented",
        ),
    ),
)

# ---------------------------------------------------------------------------
# FSD-4 - Passive fire protection
# ---------------------------------------------------------------------------


def _fsd4_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    strategy_missing = _too_short(fields, "compartmentation_strategy", thresholds["min_strategy"])
    return {
        "strategy_missing": strategy_missing,
        "unknowns": len(unknown_keys(fields, (
            "structural_fire_resistance_minutes",
            "compartmentation_standard",
            "cavity_barriers_strategy",
        ))) + strategy_missing,
    }


FSD_4_PASSIVE_PROTECTION = RuleTable(
    module_key="FSD_4_PASSIVE_PROTECTION",
    schema={
        "structural_fire_resistance_minutes": C,
        "compartmentation_strategy": T,
        "compartmentation_standard": C,
        "fire_door_ratings": T,
        "cavity_barriers_strategy": C,
        "internal_lining_classifications": T, "internal_lining_notes": T,
        "penetrations_fire_stopping_strategy": T,
        "facade_considerations": T,
        "notes": T,
    },
    thresholds={"min_strategy": 20, "info_gap_unknowns": 3, "minor_unknowns": 1},
    facts=_fsd4_facts,
    rules=(
        Rule(
            "fsd4-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} key passive protection fields unknown",
        ),
        Rule(
            "fsd4-compartmentation-undefined", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["strategy_missing"],
            "Compartmentation strategy must be defined for fire strategy",
        ),
        Rule(
            "fsd4-some-unknowns", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"],
            "Some passive protection details require clarification",
        ),
        Rule(
            "fsd4-defined", Outcome.COMPLIANT,
            lambda f, t: True,
            "Passive protection strategy adequately defined",
        ),
    ),
)

# ---------------------------------------------------------------------------
# FSD-5 - Active fire systems
# ---------------------------------------------------------------------------


def _fsd5_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    minimum = thresholds["min_summary"]
    cause_effect_missing = _too_short(fields, "alarm_cause_and_effect_summary", minimum)
    return {
        "category": fields.choice("detection_alarm_design_category"),
        "cause_effect_missing": cause_effect_missing,
        "unknowns": (
            len(unknown_keys(fields, ("detection_alarm_design_category", "sprinkler_provision")))
            + cause_effect_missing
            + _too_short(fields, "emergency_lighting_design_principles", minimum)
        ),
    }


FSD_5_ACTIVE_SYSTEMS = RuleTable(
    module_key="FSD_5_ACTIVE_SYSTEMS",
    schema={
        "detection_alarm_design_category": C,
        "alarm_cause_and_effect_summary": T,
        "emergency_lighting_design_principles": T,
        "sprinkler_provision": C, "sprinkler_standard": T, "sprinkler_notes": T,
        "suppression_other": C, "suppression_other_notes": T,
        "fire_fighting_equipment_strategy": T,
        "interface_dependencies": T,
        "notes": T,
    },
    thresholds={"min_summary": 20, "info_gap_unknowns": 3, "minor_unknowns": 1},
    facts=_fsd5_facts,
    rules=(
        Rule(
            "fsd5-category-undefined", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["category"] == "unknown",
            "Fire detection/alarm category not defined - critical for design",
        ),
        Rule(
            "fsd5-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} key active system parameters unknown",
        ),
        Rule(
            "fsd5-cause-and-effect", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["cause_effect_missing"],
            "Alarm cause & effect should be documented",
        ),
        Rule(
            "fsd5-some-unknowns", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"],
            "Some active system details require clarification",
        ),
        Rule(
            "fsd5-specified", Outcome.COMPLIANT,
            lambda f, t: True,
            "Active fire systems adequately specified",
        ),
    ),
)

# ---------------------------------------------------------------------------
# FSD-6 - Fire and rescue service access
# ---------------------------------------------------------------------------


def _fsd6_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    risers_unknown = bool(unknown_keys(fields, ("dry_riser", "wet_riser")))
    return {
        "unknowns": sum((
            _too_short(fields, "appliance_access_routes_summary", thresholds["min_access_summary"]),
            fields.choice("water_supplies_hydrants") == "unknown",
            risers_unknown,
            _too_short(fields, "fire_control_point_location", thresholds["min_control_point"]),
        )),
    }


FSD_6_FRS_ACCESS = RuleTable(
    module_key="FSD_6_FRS_ACCESS",
    schema={
        "appliance_access_routes_summary": T,
        "water_supplies_hydrants": C, "water_supplies_notes": T,
        "dry_riser": C, "dry_riser_notes": T,
        "wet_riser": C, "wet_riser_notes": T,
        "firefighting_shaft": C, "firefighting_shaft_notes": T,
        "fire_service_lift": C, "fire_service_lift_notes": T,
        "fire_control_point_location": T,
        "signage_and_info_pack": C,
        "notes": T,
    },
    thresholds={"min_access_summary": 20, "min_control_point": 10, "info_gap_unknowns": 3, "minor_unknowns": 1},
    facts=_fsd6_facts,
    rules=(
        Rule(
            "fsd6-many-unknowns", Outcome.INFORMATION_GAP,
            lambda f, t: f["unknowns"] >= t["info_gap_unknowns"],
            "{unknowns} key fire service provisions unknown",
        ),
        Rule(
            "fsd6-some-unknowns", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["unknowns"] >= t["minor_unknowns"],
            "Some fire service access details require clarification",
        ),
        Rule(
            "fsd6-specified", Outcome.COMPLIANT,
            lambda f, t: True,
            "Fire service facilities adequately specified",
        ),
    ),
)

# ---------------------------------------------------------------------------
# FSD-7 - Drawings index
# ---------------------------------------------------------------------------

FSD7_DRAWING_TYPES = (
    "general_arrangement",
    "escape_routes",
    "compartmentation",
    "fire_doors",
    "detection_zones",
    "smoke_control",
    "firefighting_access",
)


def _fsd7_facts(fields: FieldSet, thresholds: Thresholds) -> dict:
    checklist = fields.nested("drawings_checklist")
    drawing_types = list(checklist) or list(FSD7_DRAWING_TYPES)
    completed = sum(1 for key in drawing_types if checklist.flag(key))
    return {
        "completed": completed,
        "total": len(drawing_types),
        "percent": completed * 100 / len(drawing_types),
    }


FSD_7_DRAWINGS = RuleTable(
    module_key="FSD_7_DRAWINGS",
    schema={
        "drawings_checklist": FieldKind.NESTED,
        "drawings_uploaded": L,
        "notes": T,
    },
    thresholds={"material_percent": 30, "minor_percent": 70},
    facts=_fsd7_facts,
    rules=(
        Rule(
            "fsd7-few-drawings", Outcome.MATERIAL_DEFICIENCY,
            lambda f, t: f["percent"] < t["material_percent"],
            "Only {completed}/{total} drawing types provided - insufficient for strategy",
        ),
        Rule(
            "fsd7-some-drawings", Outcome.MINOR_DEFICIENCY,
            lambda f, t: f["percent"] < t["minor_percent"],
            "{completed}/{total} drawing types provided - some key drawings missing",
        ),
        Rule(
            "fsd7-documented", Outcome.COMPLIANT,
            lambda f, t: True,
            "Drawing index adequately documented",
        ),
    ),
)


# Made with Bob
