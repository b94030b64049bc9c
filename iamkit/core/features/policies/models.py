# (c) Copyright Datacraft, 2026
"""Policy domain models for the ABAC engine."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

WILDCARD = "*"


class Effect(str, Enum):
	"""Policy decision effect."""
	ALLOW = "Allow"
	DENY = "Deny"


class ConditionOperator(str, Enum):
	"""Operators accepted in a statement condition."""
	STRING_EQUALS = "StringEquals"
	STRING_NOT_EQUALS = "StringNotEquals"
	NUMBER_EQUALS = "NumberEquals"
	NUMBER_NOT_EQUALS = "NumberNotEquals"
	NUMBER_LESS_THAN = "NumberLessThan"
	NUMBER_LESS_THAN_EQUALS = "NumberLessThanEquals"
	NUMBER_GREATER_THAN = "NumberGreaterThan"
	NUMBER_GREATER_THAN_EQUALS = "NumberGreaterThanEquals"
	BOOL = "Bool"

	@property
	def is_negated(self) -> bool:
		return self in (ConditionOperator.STRING_NOT_EQUALS, ConditionOperator.NUMBER_NOT_EQUALS)

	@property
	def comparison(self) -> str | None:
		"""Ordering comparison symbol, or None for (in)equality operators."""
		return _COMPARISONS.get(self)


_COMPARISONS = {
	ConditionOperator.NUMBER_LESS_THAN: "lt",
	ConditionOperator.NUMBER_LESS_THAN_EQUALS: "lte",
	ConditionOperator.NUMBER_GREATER_THAN: "gt",
	ConditionOperator.NUMBER_GREATER_THAN_EQUALS: "gte",
}


@dataclass(frozen=True, slots=True)
class Wildcard:
	"""Resource match covering every instance of a type."""


@dataclass(frozen=True, slots=True)
class ExplicitIds:
	"""Resource match covering an explicit set of instance ids."""
	ids: frozenset[str]


ResourceMatch = Wildcard | ExplicitIds


@dataclass(frozen=True, slots=True)
class FieldPredicate:
	"""Single `operator(field, value)` test inside a condition."""
	operator: ConditionOperator
	field: str
	value: Any


@dataclass(frozen=True, slots=True)
class Condition:
	"""
	Conjunction of field predicates.

	A malformed condition never matches; it is kept as data so a
	misconfigured statement fails closed instead of raising.
	"""
	predicates: tuple[FieldPredicate, ...] = ()
	malformed: bool = False

	@classmethod
	def never(cls) -> "Condition":
		return cls(malformed=True)


@dataclass(frozen=True, slots=True)
class PolicyStatement:
	"""Permission statement as loaded from a policy document."""
	name: str
	effect: Effect
	actions: tuple[str, ...]
	resource_match: ResourceMatch
	condition: Condition | None = None
	id: str | None = None


@dataclass(frozen=True, slots=True)
class CompiledRule:
	"""A statement narrowed to one `(resource_type, action)` pair."""
	effect: Effect
	resource_type: str
	action: str
	resource_match: ResourceMatch
	condition: Condition | None = None
	statement: str = ""

	def covers(self, action: str, resource_type: str) -> bool:
		"""Whether this rule is about `action` on `resource_type` at all."""
		if self.resource_type != WILDCARD and self.resource_type != resource_type:
			return False
		return self.action == WILDCARD or self.action == action


@dataclass(frozen=True, slots=True)
class RuleSet:
	"""Ordered, immutable list of compiled rules; order is precedence."""
	rules: tuple[CompiledRule, ...] = ()

	def __iter__(self) -> Iterator[CompiledRule]:
		return iter(self.rules)

	def __reversed__(self) -> Iterator[CompiledRule]:
		return reversed(self.rules)

	def __len__(self) -> int:
		return len(self.rules)

	def relevant(self, action: str, resource_type: str) -> tuple[CompiledRule, ...]:
		"""Rules covering `action` on `resource_type`, in declaration order."""
		return tuple(r for r in self.rules if r.covers(action, resource_type))
