"""Registry of rule tables by module key.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-15
Version: 1.0.0
License: MIT
"""

from typing import Any, Dict, Mapping, Optional

from models.outcome import OutcomeSuggestion

from .resolver import OutcomeResolver
from .rule_table import RuleTable
from .tables.common import (
    A2_BUILDING_PROFILE,
    A3_PERSONS_AT_RISK,
    A4_MANAGEMENT_CONTROLS,
    A5_EMERGENCY_ARRANGEMENTS,
    A7_REVIEW_ASSURANCE,
)
from .tables.fra import (
    FRA_1_HAZARDS,
    FRA_2_ESCAPE_ASIS,
    FRA_3_PROTECTION_ASIS,
    FRA_5_EXTERNAL_FIRE_SPREAD,
)
from .tables.dsear import (
    DSEAR_1_DANGEROUS_SUBSTANCES,
    DSEAR_2_PROCESS_RELEASES,
    DSEAR_3_HAZARDOUS_AREA_CLASSIFICATION,
    DSEAR_4_IGNITION_SOURCES,
    DSEAR_5_EXPLOSION_PROTECTION,
    DSEAR_6_RISK_ASSESSMENT,
    DSEAR_10_HIERARCHY_OF_CONTROL,
    DSEAR_11_EXPLOSION_EMERGENCY_RESPONSE,
)
from .tables.fsd import (
    FSD_1_REG_BASIS,
    FSD_2_EVAC_STRATEGY,
    FSD_3_ESCAPE_DESIGN,
    FSD_4_PASSIVE_PROTECTION,
    FSD_5_ACTIVE_SYSTEMS,
    FSD_6_FRS_ACCESS,
    FSD_7_DRAWINGS,
    FSD_8_SMOKE_CONTROL,
    FSD_9_CONSTRUCTION_PHASE,
)

RULE_TABLES: Dict[str, RuleTable] = {
    table.module_key: table
    for table in (
        A2_BUILDING_PROFILE,
        A3_PERSONS_AT_RISK,
        A4_MANAGEMENT_CONTROLS,
        A5_EMERGENCY_ARRANGEMENTS,
        A7_REVIEW_ASSURANCE,
        FRA_1_HAZARDS,
        FRA_2_ESCAPE_ASIS,
        FRA_3_PROTECTION_ASIS,
        FRA_5_EXTERNAL_FIRE_SPREAD,
        FSD_1_REG_BASIS,
        FSD_2_EVAC_STRATEGY,
        FSD_3_ESCAPE_DESIGN,
        FSD_4_PASSIVE_PROTECTION,
        FSD_5_ACTIVE_SYSTEMS,
        FSD_6_FRS_ACCESS,
        FSD_7_DRAWINGS,
        FSD_8_SMOKE_CONTROL,
        FSD_9_CONSTRUCTION_PHASE,
        DSEAR_1_DANGEROUS_SUBSTANCES,
        DSEAR_2_PROCESS_RELEASES,
        DSEAR_3_HAZARDOUS_AREA_CLASSIFICATION,
        DSEAR_4_IGNITION_SOURCES,
        DSEAR_5_EXPLOSION_PROTECTION,
        DSEAR_6_RISK_ASSESSMENT,
        DSEAR_10_HIERARCHY_OF_CONTROL,
        DSEAR_11_EXPLOSION_EMERGENCY_RESPONSE,
    )
}


def get_rule_table(module_key: str) -> Optional[RuleTable]:
    return RULE_TABLES.get(module_key)


def suggest_outcome(module_key: str, fields: Optional[Mapping[str, Any]]) -> Optional[OutcomeSuggestion]:
    """Suggest an outcome for a module, None when it has no rule table or no rule matches."""
    table = get_rule_table(module_key)
    if table is None:
        return None
    return OutcomeResolver(table).suggest(fields)


# Made with Bob
