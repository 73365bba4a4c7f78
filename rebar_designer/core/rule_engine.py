"""Rule engine — holds legacy design rules and runs them against a context."""

from __future__ import annotations
import logging

from rebar_designer.models import DesignContext, Severity, RULE_TIER_POLICY
from rebar_designer.rules.base import DesignRule

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Ordered list of design rules.

    Rules run by ascending priority; equal priorities keep insertion order.
    Names are not required to be unique: removal drops every rule with the name.
    """

    policy = RULE_TIER_POLICY

    def __init__(self, rules: list[DesignRule] | None = None) -> None:
        self._rules: list[DesignRule] = []
        for rule in rules or []:
            self.add_rule(rule)

    def add_rule(self, rule: DesignRule) -> None:
        """Register a rule at runtime."""
        self._rules.append(rule)
        self._rules.sort(key=lambda r: r.priority)

    def remove_rule(self, name: str) -> bool:
        """Remove all rules with this name. True if anything was removed."""
        before = len(self._rules)
        self._rules = [r for r in self._rules if r.get_name() != name]
        return len(self._rules) < before

    def rule_names(self) -> list[str]:
        return [r.get_name() for r in self._rules]

    def validate_all(self, context: DesignContext) -> None:
        """
        Run every rule in order, recording one result per rule.

        A halting result invalidates the context and stops evaluation.
        Warnings add their penalty; info and pass change nothing.
        """
        for rule in self._rules:
            result = rule.validate(context)
            context.validation_results.append(result)

            if self.policy.halts(result.severity):
                context.is_valid = False
                context.fail_stage = f"Rule:{rule.get_name()}"
                logger.debug("%s rejected by %s: %s", context.scenario_id, rule.get_name(), result.message)
                return

            if result.severity == Severity.WARNING:
                context.total_penalty += result.penalty
            elif result.severity == Severity.INFO:
                logger.debug("%s: %s", rule.get_name(), result.message)


def create_default_rule_engine() -> RuleEngine:
    """Create a rule engine with the standard design rules."""
    from rebar_designer.rules.pyramid import PyramidRule
    from rebar_designer.rules.symmetry import SymmetryRule
    from rebar_designer.rules.preferred_diameter import PreferredDiameterRule

    return RuleEngine([PyramidRule(), SymmetryRule(), PreferredDiameterRule()])
