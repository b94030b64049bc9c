# (c) Copyright Datacraft, 2026
"""
Compilation of a rule set into a query filter.

For a given (action, resource type) the relevant rules are folded in
declaration order starting from FALSE:

	Allow: filter OR clause
	Deny:  filter AND NOT clause

so the resulting filter selects exactly the instances for which point
evaluation (last matching rule wins) answers Allow.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .engine import ID_FIELD, field_compare, field_equals, id_in, normalize_action
from .models import Condition, Effect, ExplicitIds, RuleSet, Wildcard


@dataclass(frozen=True, slots=True)
class TrueExpr:
	pass


@dataclass(frozen=True, slots=True)
class FalseExpr:
	pass


@dataclass(frozen=True, slots=True)
class And:
	left: "FilterExpr"
	right: "FilterExpr"


@dataclass(frozen=True, slots=True)
class Or:
	left: "FilterExpr"
	right: "FilterExpr"


@dataclass(frozen=True, slots=True)
class Not:
	expr: "FilterExpr"


@dataclass(frozen=True, slots=True)
class FieldIn:
	field: str
	values: frozenset


@dataclass(frozen=True, slots=True)
class FieldEquals:
	field: str
	value: Any


@dataclass(frozen=True, slots=True)
class FieldCompare:
	field: str
	op: str  # lt, lte, gt, gte
	value: Any


FilterExpr = Union[TrueExpr, FalseExpr, And, Or, Not, FieldIn, FieldEquals, FieldCompare]

TRUE = TrueExpr()
FALSE = FalseExpr()


def and_(left: FilterExpr, right: FilterExpr) -> FilterExpr:
	if isinstance(left, FalseExpr) or isinstance(right, FalseExpr):
		return FALSE
	if isinstance(left, TrueExpr):
		return right
	if isinstance(right, TrueExpr):
		return left
	return And(left, right)


def or_(left: FilterExpr, right: FilterExpr) -> FilterExpr:
	if isinstance(left, TrueExpr) or isinstance(right, TrueExpr):
		return TRUE
	if isinstance(left, FalseExpr):
		return right
	if isinstance(right, FalseExpr):
		return left
	return Or(left, right)


def not_(expr: FilterExpr) -> FilterExpr:
	match expr:
		case TrueExpr():
			return FALSE
		case FalseExpr():
			return TRUE
		case Not(inner):
			return inner
		case _:
			return Not(expr)


def resource_clause(resource_match) -> FilterExpr:
	match resource_match:
		case Wildcard():
			return TRUE
		case ExplicitIds(ids):
			if not ids:
				return FALSE
			return FieldIn(ID_FIELD, ids)
	raise TypeError(f"Unknown resource match: {resource_match!r}")


def condition_clause(condition: Condition | None) -> FilterExpr:
	if condition is None:
		return TRUE
	if condition.malformed:
		return FALSE

	clause: FilterExpr = TRUE
	for predicate in condition.predicates:
		operator = predicate.operator
		if operator.comparison:
			leaf = FieldCompare(predicate.field, operator.comparison, predicate.value)
		else:
			leaf = FieldEquals(predicate.field, predicate.value)
			if operator.is_negated:
				leaf = not_(leaf)
		clause = and_(clause, leaf)
	return clause


def compile_filter(rule_set: RuleSet, action: str, resource_type: str) -> FilterExpr:
	"""Compile `rule_set` into the filter of instances allowed for `action`."""
	action = normalize_action(action, resource_type)
	result: FilterExpr = FALSE
	for rule in rule_set.relevant(action, resource_type):
		clause = and_(resource_clause(rule.resource_match), condition_clause(rule.condition))
		if rule.effect == Effect.ALLOW:
			result = or_(result, clause)
		else:
			result = and_(result, not_(clause))
	return result


def evaluate_filter(expr: FilterExpr, fields: Mapping[str, Any]) -> bool:
	"""In-memory evaluation of a filter against an instance's fields."""
	match expr:
		case TrueExpr():
			return True
		case FalseExpr():
			return False
		case And(left, right):
			return evaluate_filter(left, fields) and evaluate_filter(right, fields)
		case Or(left, right):
			return evaluate_filter(left, fields) or evaluate_filter(right, fields)
		case Not(inner):
			return not evaluate_filter(inner, fields)
		case FieldIn(field, values):
			if field == ID_FIELD:
				return id_in(fields, values)
			actual = fields.get(field)
			return actual is not None and actual in values
		case FieldEquals(field, value):
			return field_equals(fields, field, value)
		case FieldCompare(field, op, value):
			return field_compare(fields, field, op, value)
	raise TypeError(f"Unknown filter expression: {expr!r}")
