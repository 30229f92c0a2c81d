"""Outcome rule tables for the assessment modules.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-15
Version: 1.0.0
License: MIT
"""

from .registry import RULE_TABLES, get_rule_table, suggest_outcome
from .resolver import OutcomeResolver
from .rule_table import Rule, RuleTable, count_unknowns

__all__ = [
    "OutcomeResolver",
    "Rule",
    "RuleTable",
    "RULE_TABLES",
    "count_unknowns",
    "get_rule_table",
    "suggest_outcome",
]
