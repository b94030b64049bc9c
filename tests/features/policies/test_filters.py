# (c) Copyright Datacraft, 2026
"""
Tests for the compilation of rule sets into query filters.

The central property: for every document, evaluating the compiled filter
gives the same answer as the point decision.
"""
from hypothesis import HealthCheck, given, settings, strategies as st

from iamkit.core.features.policies.engine import decide
from iamkit.core.features.policies.filters import (
    FALSE, TRUE, And, FieldCompare, FieldEquals, FieldIn, Not, Or,
    and_, compile_filter, evaluate_filter, not_, or_,
)
from iamkit.core.features.policies.models import Effect, RuleSet
from iamkit.core.features.policies.parser import compile_statements, parse_statement

from tests.factories import allow, deny, rules

IDS = ["a", "b", "c", "d"]
NAMES = ["Foo", "Bar", "Baz"]


@st.composite
def conditions(draw):
    """Generate a condition mapping, sometimes a malformed one."""
    operators = {
        "StringEquals": ("name", st.sampled_from(NAMES)),
        "StringNotEquals": ("name", st.sampled_from(NAMES)),
        "NumberEquals": ("level", st.integers(0, 3)),
        "NumberNotEquals": ("level", st.integers(0, 3)),
        "NumberLessThan": ("level", st.integers(0, 3)),
        "NumberLessThanEquals": ("level", st.integers(0, 3)),
        "NumberGreaterThan": ("level", st.integers(0, 3)),
        "NumberGreaterThanEquals": ("level", st.integers(0, 3)),
        "Bool": ("active", st.booleans()),
        "StringLike": ("name", st.sampled_from(NAMES)),
    }
    chosen = draw(st.lists(st.sampled_from(sorted(operators)), min_size=1, max_size=2, unique=True))
    condition = {}
    for operator in chosen:
        field, values = operators[operator]
        condition[operator] = {field: draw(values)}
    return condition


@st.composite
def statements(draw):
    effect = draw(st.sampled_from(["Allow", "Deny"]))
    actions = draw(st.lists(
        st.sampled_from(["Group:GetGroup", "Group:ListGroups", "Group:*", "*:GetGroup", "*", "Role:GetRole", "GetGroup"]),
        min_size=1,
        max_size=2,
    ))
    if draw(st.booleans()):
        resources = ["*"]
    else:
        resources = draw(st.lists(st.sampled_from(IDS), max_size=3, unique=True))
    condition = draw(st.none() | conditions())
    return parse_statement({
        "name": "generated",
        "effect": effect,
        "actions": actions,
        "resources": resources,
        "condition": condition,
    })


@st.composite
def documents(draw):
    document = {}
    if draw(st.booleans()):
        document["id"] = draw(st.sampled_from(IDS))
    if draw(st.booleans()):
        document["name"] = draw(st.sampled_from(NAMES) | st.none())
    if draw(st.booleans()):
        document["level"] = draw(st.integers(0, 3))
    if draw(st.booleans()):
        document["active"] = draw(st.booleans())
    return document


class TestFilterPointEquivalence:
    @given(
        statement_list=st.lists(statements(), max_size=6),
        docs=st.lists(documents(), min_size=1, max_size=10),
        action=st.sampled_from(["GetGroup", "ListGroups", "Group:GetGroup"]),
    )
    @settings(max_examples=300, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_filter_matches_point_decision(self, statement_list, docs, action):
        rule_set = compile_statements(statement_list)
        expr = compile_filter(rule_set, action, "Group")

        for document in docs:
            expected = decide(rule_set, action, "Group", document) == Effect.ALLOW
            assert evaluate_filter(expr, document) == expected

    def test_three_rules_mixed_ids(self):
        rule_set = rules(
            allow("Group:GetGroup", resources=["a", "b"]),
            deny("Group:GetGroup", resources=["b", "c"]),
            allow("Group:GetGroup", resources=["c"]),
        )
        expr = compile_filter(rule_set, "GetGroup", "Group")

        visible = [i for i in IDS if evaluate_filter(expr, {"id": i})]

        assert visible == ["a", "c"]
        assert [i for i in IDS if decide(rule_set, "GetGroup", "Group", {"id": i}) == Effect.ALLOW] == visible


class TestCompileFilter:
    def test_empty_rule_set_is_false(self):
        assert compile_filter(RuleSet(), "ListGroups", "Group") == FALSE

    def test_only_deny_is_false(self):
        assert compile_filter(rules(deny("Group:ListGroups")), "ListGroups", "Group") == FALSE

    def test_irrelevant_rules_are_false(self):
        assert compile_filter(rules(allow("Role:ListRoles")), "ListGroups", "Group") == FALSE

    def test_wildcard_allow_is_true(self):
        assert compile_filter(rules(allow("Group:ListGroups")), "ListGroups", "Group") == TRUE

    def test_explicit_ids(self):
        expr = compile_filter(rules(allow("Group:ListGroups", resources=["a"])), "ListGroups", "Group")

        assert expr == FieldIn("id", frozenset({"a"}))

    def test_condition_filtering(self):
        rule_set = rules(allow("Group:ListGroups", condition={"StringEquals": {"name": "Foo"}}))

        expr = compile_filter(rule_set, "ListGroups", "Group")

        assert expr == FieldEquals("name", "Foo")
        assert evaluate_filter(expr, {"name": "Foo"})
        assert not evaluate_filter(expr, {"name": "Bar"})
        assert decide(rule_set, "ListGroups", "Group", {"name": "Bar"}) == Effect.DENY

    def test_allow_then_deny(self):
        rule_set = rules(
            allow("Group:ListGroups"),
            deny("Group:ListGroups", condition={"NumberGreaterThan": {"level": 2}}),
        )

        expr = compile_filter(rule_set, "ListGroups", "Group")

        assert expr == Not(FieldCompare("level", "gt", 2))

    def test_malformed_condition_contributes_nothing(self):
        rule_set = rules(allow("Group:ListGroups", condition={"StringLike": {"name": "F*"}}))

        assert compile_filter(rule_set, "ListGroups", "Group") == FALSE


class TestSmartConstructors:
    def test_constants_fold(self):
        leaf = FieldEquals("name", "Foo")

        assert and_(TRUE, leaf) == leaf
        assert and_(leaf, FALSE) == FALSE
        assert or_(FALSE, leaf) == leaf
        assert or_(leaf, TRUE) == TRUE
        assert not_(TRUE) == FALSE
        assert not_(not_(leaf)) == leaf

    def test_builds_nodes(self):
        left, right = FieldEquals("name", "Foo"), FieldIn("id", frozenset({"a"}))

        assert and_(left, right) == And(left, right)
        assert or_(left, right) == Or(left, right)
