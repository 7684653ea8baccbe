"""
Rule evaluation engine for eligibility decisions.
"""

import time
from typing import Dict, Any, Optional, Iterable, Sequence, Tuple

from shared.logging import get_logger
from shared.errors import ConfigurationError, NoRuleMatchedError
from .definitions import DEFAULT_RULE_ORDER
from .models import (
    Rule, RuleCondition, RuleConditionOperator,
    EvaluationContext, EligibilityResult, OosCategory
)

DEFAULT_RULE_NAME = "DefaultRule"


class RuleEngine:
    """Rule evaluation engine.

    Rules are fixed at construction and tried in the declared order; the
    first rule whose conditions all hold decides the result. The engine
    holds no per-call state, so one instance may serve concurrent callers.
    """

    def __init__(
        self,
        rules: Iterable[Rule],
        order: Sequence[str] = DEFAULT_RULE_ORDER,
        strict_matching: bool = False
    ):
        self.logger = get_logger("eligibility.rule_engine")
        self._rules: Tuple[Rule, ...] = self._order_rules(tuple(rules), tuple(order))
        self.strict_matching = strict_matching
        self.default_result = EligibilityResult(
            eligible=False,
            oos_category=OosCategory.NO_NEXUS.value,
            matched_rule=DEFAULT_RULE_NAME
        )
        self.logger.info(
            "Rule engine initialized",
            order=[rule.name for rule in self._rules],
            strict_matching=strict_matching
        )

    @staticmethod
    def _order_rules(rules: Tuple[Rule, ...], order: Tuple[str, ...]) -> Tuple[Rule, ...]:
        """Arrange rules by the declared order, which must name every rule exactly once."""
        by_name: Dict[str, Rule] = {}
        for rule in rules:
            if rule.name in by_name:
                raise ConfigurationError("Duplicate rule name", {"rule": rule.name})
            by_name[rule.name] = rule

        duplicates = sorted({name for name in order if order.count(name) > 1})
        unknown = sorted(set(order) - set(by_name))
        missing = sorted(set(by_name) - set(order))
        if duplicates or unknown or missing:
            raise ConfigurationError(
                "Rule order must list every rule exactly once",
                {"duplicates": duplicates, "unknown": unknown, "missing": missing}
            )

        return tuple(by_name[name] for name in order)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Rules in evaluation order."""
        return self._rules

    def get_rule(self, name: str) -> Optional[Rule]:
        """Get a rule by name."""
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def evaluate(self, context: EvaluationContext) -> EligibilityResult:
        """Evaluate rules against context."""
        start_time = time.time()

        for rule in self._rules:
            if self._evaluate_rule_conditions(rule, context):
                result = rule.to_result()

                self.logger.debug(
                    "Rule evaluation result",
                    rule=rule.name,
                    eligible=result.eligible,
                    oos_category=result.oos_category,
                    evaluation_time_ms=(time.time() - start_time) * 1000
                )

                return result

        if self.strict_matching:
            raise NoRuleMatchedError(details={
                "party": context.request.party,
                "rules": [rule.name for rule in self._rules]
            })

        self.logger.debug(
            "No rule matched, applying default",
            rule=DEFAULT_RULE_NAME,
            evaluation_time_ms=(time.time() - start_time) * 1000
        )
        return self.default_result

    def _evaluate_rule_conditions(self, rule: Rule, context: EvaluationContext) -> bool:
        """Evaluate rule conditions against context."""
        if not rule.conditions:
            return True

        for condition in rule.conditions:
            if not self._evaluate_condition(condition, context):
                return False

        return True

    def _evaluate_condition(self, condition: RuleCondition, context: EvaluationContext) -> bool:
        """Evaluate a single condition. Absent fields never match."""
        field_value = self._get_field_value(condition.field, context)

        if field_value is None:
            return False

        if condition.operator == RuleConditionOperator.EQUALS:
            return field_value == condition.value

        elif condition.operator == RuleConditionOperator.NOT_EQUALS:
            return field_value != condition.value

        elif condition.operator == RuleConditionOperator.IN:
            return field_value in condition.value

        elif condition.operator == RuleConditionOperator.NOT_IN:
            return field_value not in condition.value

        elif condition.operator == RuleConditionOperator.INTERSECTS:
            return not set(field_value).isdisjoint(condition.value)

        elif condition.operator == RuleConditionOperator.CONTAINS:
            if isinstance(field_value, (list, tuple, set, frozenset)):
                return condition.value in field_value
            return str(condition.value) in str(field_value)

        elif condition.operator == RuleConditionOperator.STARTS_WITH:
            return str(field_value).startswith(str(condition.value))

        elif condition.operator == RuleConditionOperator.ENDS_WITH:
            return str(field_value).endswith(str(condition.value))

        elif condition.operator == RuleConditionOperator.IS_TRUE:
            return field_value is True

        elif condition.operator == RuleConditionOperator.IS_FALSE:
            return field_value is False

        raise ConfigurationError("Unknown condition operator", {"operator": str(condition.operator)})

    def _get_field_value(self, field: str, context: EvaluationContext) -> Any:
        """Get field value from context."""
        # Check derived facts
        if field in context.facts:
            return context.facts[field]

        # Check nested fields (e.g., "request.productType")
        if "." in field:
            parts = field.split(".")
            value: Any = context.facts

            for part in parts:
                if isinstance(value, dict) and part in value:
                    value = value[part]
                else:
                    return None

            return value

        return None

    def get_engine_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        return {
            "total_rules": len(self._rules),
            "order": [rule.name for rule in self._rules],
            "strict_matching": self.strict_matching,
            "eligible_rules": [rule.name for rule in self._rules if rule.eligible]
        }
