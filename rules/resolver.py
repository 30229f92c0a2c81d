"""First-match evaluation of a module's rule table.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-15
Version: 1.0.0
License: MIT
"""

import logging
from typing import Any, Mapping, Optional, Union

from models.field_set import FieldSet
from models.outcome import Outcome, OutcomeSuggestion

from .rule_table import Facts, RuleTable

logger = logging.getLogger(__name__)


class OutcomeResolver:
    """Suggest an outcome for a FieldSet from a RuleTable.

    Rules are evaluated in declared order and the first match wins. When no
    rule matches the result is None, never an implicit "compliant". A rule
    whose predicate raises is logged and skipped.

    Example:
        >>> resolver = OutcomeResolver(get_rule_table("A3_PERSONS_AT_RISK"))
        >>> resolver.resolve({"evacuation_assistance_required": "yes"})
        <Outcome.MATERIAL_DEFICIENCY: 'material_deficiency'>
    """

    def __init__(self, table: RuleTable):
        self.table = table

    def _facts(self, fields: FieldSet) -> Optional[Facts]:
        try:
            return self.table.facts(fields, self.table.thresholds)
        except Exception as e:
            logger.error(
                f"Could not derive facts for {self.table.module_key}: {e}",
                exc_info=True
            )
            return None

    def suggest(self, fields: Union[FieldSet, Mapping[str, Any], None]) -> Optional[OutcomeSuggestion]:
        """Evaluate the table and return the first matching suggestion.

        Args:
            fields: Module answers (a plain mapping is wrapped).

        Returns:
            OutcomeSuggestion of the first rule that holds, or None.
        """
        if not isinstance(fields, FieldSet):
            fields = FieldSet(fields or {})

        facts = self._facts(fields)
        if facts is None:
            return None

        thresholds = self.table.thresholds
        for rule in self.table.rules:
            try:
                matched = bool(rule.when(facts, thresholds))
            except Exception as e:
                logger.warning(
                    f"Rule {rule.rule_id} of {self.table.module_key} failed, treated as no match: {e}"
                )
                continue

            if not matched:
                continue

            try:
                rationale = rule.explain(facts, thresholds)
            except Exception as e:
                logger.warning(f"Rationale of rule {rule.rule_id} failed: {e}")
                rationale = rule.outcome.value.replace("_", " ").capitalize()

            logger.debug(f"{self.table.module_key}: rule {rule.rule_id} -> {rule.outcome.value}")
            return OutcomeSuggestion(outcome=rule.outcome, rationale=rationale, rule_id=rule.rule_id)

        logger.debug(f"{self.table.module_key}: no rule matched")
        return None

    def resolve(self, fields: Union[FieldSet, Mapping[str, Any], None]) -> Optional[Outcome]:
        """Suggested outcome only, None when no rule matches."""
        suggestion = self.suggest(fields)
        return suggestion.outcome if suggestion else None


# Made with Bob
