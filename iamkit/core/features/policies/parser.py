# (c) Copyright Datacraft, 2026
"""
Parsing and compilation of policy statements.

A stored statement looks like:

	{
		"name": "ReadOwnGroups",
		"effect": "Allow",
		"actions": ["Group:GetGroup", "Group:ListGroups"],
		"resources": ["*"],
		"condition": {"StringEquals": {"name": "Ops"}},
	}

Actions are `<ResourceType>:<Verb>` with `*` allowed on either side, or a
bare `*` for everything. Each action compiles to one rule.
"""
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .models import (
	WILDCARD, CompiledRule, Condition, ConditionOperator, Effect, ExplicitIds,
	FieldPredicate, PolicyStatement, ResourceMatch, RuleSet, Wildcard,
)

logger = logging.getLogger(__name__)


class PolicySyntaxError(Exception):
	"""Raised when a statement cannot be parsed."""


def parse_action(entry: str) -> tuple[str, str]:
	"""Split an action entry into `(resource_type, verb)`."""
	if entry == WILDCARD:
		return WILDCARD, WILDCARD
	if not isinstance(entry, str) or entry.count(":") != 1:
		raise PolicySyntaxError(f"Malformed action: {entry!r}")
	resource_type, verb = (part.strip() for part in entry.split(":"))
	if not resource_type or not verb:
		raise PolicySyntaxError(f"Malformed action: {entry!r}")
	return resource_type, verb


def parse_resources(resources: Iterable[str] | None) -> ResourceMatch:
	resources = list(resources or [])
	if WILDCARD in resources:
		return Wildcard()
	return ExplicitIds(frozenset(str(r) for r in resources))


def _valid_value(operator: ConditionOperator, value: Any) -> bool:
	if operator == ConditionOperator.BOOL:
		return isinstance(value, bool)
	if operator.name.startswith("STRING"):
		return isinstance(value, str)
	return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_condition(raw: Any) -> Condition | None:
	"""
	Parse a condition mapping of operator -> {field: value}.

	Returns None for an absent/empty condition. Anything that cannot be
	understood yields `Condition.never()` and a warning.
	"""
	if raw is None or (isinstance(raw, Mapping) and not raw):
		return None
	if not isinstance(raw, Mapping):
		logger.warning(f"Condition is not a mapping: {raw!r}")
		return Condition.never()

	predicates = []
	for op_name, operand in raw.items():
		try:
			operator = ConditionOperator(op_name)
		except ValueError:
			logger.warning(f"Unknown condition operator: {op_name}")
			return Condition.never()
		if not isinstance(operand, Mapping) or not operand:
			logger.warning(f"Operand of {op_name} must be a non-empty mapping")
			return Condition.never()
		for field, value in operand.items():
			if not isinstance(field, str) or not _valid_value(operator, value):
				logger.warning(f"Invalid {op_name} operand for field {field!r}: {value!r}")
				return Condition.never()
			predicates.append(FieldPredicate(operator, field, value))

	return Condition(tuple(predicates))


def parse_statement(data: Mapping[str, Any]) -> PolicyStatement:
	"""Build a PolicyStatement from its stored mapping form."""
	try:
		effect = Effect(data["effect"])
	except (KeyError, ValueError) as e:
		raise PolicySyntaxError(f"Invalid effect in statement {data.get('name')!r}") from e

	actions = data.get("actions") or []
	if isinstance(actions, str):
		actions = [actions]

	return PolicyStatement(
		id=str(data["id"]) if data.get("id") is not None else None,
		name=data.get("name", ""),
		effect=effect,
		actions=tuple(actions),
		resource_match=parse_resources(data.get("resources")),
		condition=parse_condition(data.get("condition")),
	)


def compile_statement(statement: PolicyStatement) -> list[CompiledRule]:
	"""Expand a statement into one rule per well-formed action."""
	rules = []
	for entry in statement.actions:
		try:
			resource_type, verb = parse_action(entry)
		except PolicySyntaxError as e:
			logger.error(f"Error creating policy {statement.name!r}: {e}")
			continue
		rules.append(CompiledRule(
			effect=statement.effect,
			resource_type=resource_type,
			action=verb,
			resource_match=statement.resource_match,
			condition=statement.condition,
			statement=statement.name,
		))
	return rules


def compile_statements(statements: Iterable[PolicyStatement]) -> RuleSet:
	"""Compile statements into a RuleSet preserving declaration order."""
	rules: list[CompiledRule] = []
	for statement in statements:
		rules.extend(compile_statement(statement))
	return RuleSet(tuple(rules))
