# (c) Copyright Datacraft, 2026
"""
Point evaluation for the ABAC engine.

Evaluation strategy:
1. Scan the rule set from the last declared rule backwards
2. The first rule that applies to (action, resource type, instance) decides
3. Default to DENY if no rule applies

There is no "deny overrides" special case: a later Allow re-opens what an
earlier Deny closed, and vice versa.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from iamkit.core.exceptions import AuthorizationDenied

from .models import (
	CompiledRule, Condition, Effect, ExplicitIds, FieldPredicate, RuleSet,
	Wildcard,
)

logger = logging.getLogger(__name__)

ID_FIELD = "id"


def field_value(fields: Mapping[str, Any], name: str) -> Any:
	"""Instance field value; None means absent."""
	return fields.get(name)


def field_equals(fields: Mapping[str, Any], name: str, expected: Any) -> bool:
	actual = field_value(fields, name)
	if actual is None:
		return False
	# True == 1 in Python, but a Bool condition must not match a number
	if isinstance(actual, bool) != isinstance(expected, bool):
		return False
	return actual == expected


def field_compare(fields: Mapping[str, Any], name: str, op: str, expected: Any) -> bool:
	actual = field_value(fields, name)
	if actual is None or isinstance(actual, bool) or not isinstance(actual, (int, float)):
		return False

	match op:
		case "lt":
			return actual < expected
		case "lte":
			return actual <= expected
		case "gt":
			return actual > expected
		case "gte":
			return actual >= expected
		case _:
			logger.warning(f"Unknown comparison: {op}")
			return False


def id_in(fields: Mapping[str, Any], ids: frozenset[str]) -> bool:
	actual = field_value(fields, ID_FIELD)
	if actual is None:
		return False
	return str(actual) in ids


def predicate_holds(predicate: FieldPredicate, fields: Mapping[str, Any]) -> bool:
	operator = predicate.operator
	if operator.comparison:
		return field_compare(fields, predicate.field, operator.comparison, predicate.value)
	equal = field_equals(fields, predicate.field, predicate.value)
	return not equal if operator.is_negated else equal


def matches_condition(condition: Condition | None, fields: Mapping[str, Any]) -> bool:
	"""No condition always matches; otherwise every predicate must hold."""
	if condition is None:
		return True
	if condition.malformed:
		return False
	return all(predicate_holds(p, fields) for p in condition.predicates)


def rule_applies(
	rule: CompiledRule,
	action: str,
	resource_type: str,
	fields: Mapping[str, Any] | None,
) -> bool:
	"""
	Whether `rule` applies to `action` on `resource_type`.

	With `fields=None` (bulk compilation) only the action/type part is
	decided; resource ids and conditions become filter clauses instead.
	"""
	if not rule.covers(action, resource_type):
		return False
	if fields is None:
		return True

	match rule.resource_match:
		case Wildcard():
			pass
		case ExplicitIds(ids):
			if not id_in(fields, ids):
				return False

	return matches_condition(rule.condition, fields)


def normalize_action(action: str, resource_type: str) -> str:
	"""Reduce `Type:Verb` to `Verb` when the prefix names `resource_type`."""
	prefix, sep, verb = action.partition(":")
	if sep and prefix == resource_type:
		return verb
	return action


@dataclass
class PolicyDecision:
	"""Result of a point evaluation."""
	effect: Effect
	action: str
	resource_type: str
	matched_rule: CompiledRule | None = None
	reason: str = ""

	@property
	def allowed(self) -> bool:
		return self.effect == Effect.ALLOW

	def to_dict(self) -> dict:
		return {
			"allowed": self.allowed,
			"effect": self.effect.value,
			"action": self.action,
			"resource_type": self.resource_type,
			"matched_statement": self.matched_rule.statement if self.matched_rule else None,
			"reason": self.reason,
		}


def evaluate(
	rule_set: RuleSet,
	action: str,
	resource_type: str,
	fields: Mapping[str, Any],
) -> PolicyDecision:
	"""Decide a single instance, reporting the rule that decided it."""
	action = normalize_action(action, resource_type)
	for rule in reversed(rule_set):
		if rule_applies(rule, action, resource_type, fields):
			return PolicyDecision(
				effect=rule.effect,
				action=action,
				resource_type=resource_type,
				matched_rule=rule,
				reason=f"{rule.effect.value} by statement: {rule.statement}",
			)

	return PolicyDecision(
		effect=Effect.DENY,
		action=action,
		resource_type=resource_type,
		reason="No matching rule",
	)


def decide(
	rule_set: RuleSet,
	action: str,
	resource_type: str,
	fields: Mapping[str, Any],
) -> Effect:
	return evaluate(rule_set, action, resource_type, fields).effect


def ensure_can(
	rule_set: RuleSet,
	action: str,
	resource_type: str,
	fields: Mapping[str, Any],
) -> PolicyDecision:
	"""Evaluate and raise AuthorizationDenied unless allowed."""
	decision = evaluate(rule_set, action, resource_type, fields)
	logger.debug(f"{decision.action} on {resource_type}: {decision.reason}")
	if not decision.allowed:
		raise AuthorizationDenied(decision.action, resource_type)
	return decision
