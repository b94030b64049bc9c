# (c) Copyright Datacraft, 2026
"""
Attribute-based access control.

- statements are parsed and compiled into an ordered RuleSet
- point checks scan the rules last to first; default deny
- list queries use the same RuleSet compiled into a filter expression

Aggregation of a principal's statements lives in `.ability`, which is
not imported here because it depends on the tenancy package.
"""
from .engine import PolicyDecision, decide, ensure_can, evaluate, matches_condition, rule_applies
from .filters import FilterExpr, compile_filter, evaluate_filter
from .models import (
	WILDCARD, CompiledRule, Condition, ConditionOperator, Effect, ExplicitIds,
	FieldPredicate, PolicyStatement, RuleSet, Wildcard,
)
from .parser import PolicySyntaxError, compile_statements, parse_statement

__all__ = [
	# Engine
	"PolicyDecision",
	"decide",
	"ensure_can",
	"evaluate",
	"matches_condition",
	"rule_applies",
	# Filters
	"FilterExpr",
	"compile_filter",
	"evaluate_filter",
	# Models
	"WILDCARD",
	"CompiledRule",
	"Condition",
	"ConditionOperator",
	"Effect",
	"ExplicitIds",
	"FieldPredicate",
	"PolicyStatement",
	"RuleSet",
	"Wildcard",
	# Parser
	"PolicySyntaxError",
	"compile_statements",
	"parse_statement",
]
