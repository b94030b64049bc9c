# (c) Copyright Datacraft, 2026
"""Tests for condition matching, rule matching and point decisions."""
import pytest

from iamkit.core.exceptions import AuthorizationDenied
from iamkit.core.features.policies.engine import (
    decide, ensure_can, evaluate, matches_condition, normalize_action, rule_applies,
)
from iamkit.core.features.policies.models import Condition, Effect, RuleSet
from iamkit.core.features.policies.parser import parse_condition

from tests.factories import allow, deny, rules


class TestConditions:
    def test_no_condition_matches(self):
        assert matches_condition(None, {})

    def test_string_equals(self):
        condition = parse_condition({"StringEquals": {"name": "Foo"}})

        assert matches_condition(condition, {"name": "Foo"})
        assert not matches_condition(condition, {"name": "Bar"})
        assert not matches_condition(condition, {})
        assert not matches_condition(condition, {"name": None})

    def test_string_not_equals_matches_absent_field(self):
        condition = parse_condition({"StringNotEquals": {"name": "Foo"}})

        assert matches_condition(condition, {"name": "Bar"})
        assert matches_condition(condition, {})
        assert not matches_condition(condition, {"name": "Foo"})

    def test_number_comparisons(self):
        lt = parse_condition({"NumberLessThan": {"level": 3}})
        gte = parse_condition({"NumberGreaterThanEquals": {"level": 3}})

        assert matches_condition(lt, {"level": 2})
        assert not matches_condition(lt, {"level": 3})
        assert not matches_condition(lt, {})
        assert matches_condition(gte, {"level": 3})
        assert not matches_condition(gte, {"level": 2})
        assert not matches_condition(gte, {"level": "3"})

    def test_number_not_equals(self):
        condition = parse_condition({"NumberNotEquals": {"level": 3}})

        assert matches_condition(condition, {"level": 4})
        assert matches_condition(condition, {})
        assert not matches_condition(condition, {"level": 3})

    def test_bool_does_not_equal_number(self):
        condition = parse_condition({"Bool": {"active": True}})

        assert matches_condition(condition, {"active": True})
        assert not matches_condition(condition, {"active": 1})
        assert not matches_condition(condition, {"active": False})

    def test_all_predicates_must_hold(self):
        condition = parse_condition({
            "StringEquals": {"name": "Foo"},
            "NumberGreaterThan": {"level": 1},
        })

        assert matches_condition(condition, {"name": "Foo", "level": 2})
        assert not matches_condition(condition, {"name": "Foo", "level": 1})

    def test_malformed_never_matches(self):
        assert not matches_condition(Condition.never(), {"name": "Foo"})


class TestRuleMatcher:
    def test_action_and_type(self):
        [rule] = rules(allow("Group:GetGroup"))

        assert rule_applies(rule, "GetGroup", "Group", {"id": "1"})
        assert not rule_applies(rule, "ListGroups", "Group", {"id": "1"})
        assert not rule_applies(rule, "GetGroup", "Role", {"id": "1"})

    @pytest.mark.parametrize("action", ["*", "Group:*"])
    def test_wildcard_actions(self, action):
        [rule] = rules(allow(action))

        assert rule_applies(rule, "RemoveGroup", "Group", {"id": "1"})

    def test_wildcard_resource_type(self):
        [rule] = rules(allow("*:GetGroup"))

        assert rule_applies(rule, "GetGroup", "Group", {})
        assert rule_applies(rule, "GetGroup", "Role", {})

    def test_explicit_ids(self):
        [rule] = rules(allow("Group:GetGroup", resources=["1", "2"]))

        assert rule_applies(rule, "GetGroup", "Group", {"id": "1"})
        assert not rule_applies(rule, "GetGroup", "Group", {"id": "3"})
        assert not rule_applies(rule, "GetGroup", "Group", {})

    def test_without_instance_only_action_is_decided(self):
        [rule] = rules(allow("Group:GetGroup", resources=["1"], condition={"StringEquals": {"name": "Foo"}}))

        assert rule_applies(rule, "GetGroup", "Group", None)


class TestDecide:
    def test_default_deny(self):
        assert decide(RuleSet(), "GetGroup", "Group", {"id": "1"}) == Effect.DENY

    def test_last_match_wins(self):
        rule_set = rules(allow("Group:GetGroup"), deny("Group:GetGroup", resources=["X"]))

        assert decide(rule_set, "GetGroup", "Group", {"id": "X"}) == Effect.DENY
        assert decide(rule_set, "GetGroup", "Group", {"id": "Y"}) == Effect.ALLOW

    def test_order_sensitivity(self):
        rule_set = rules(deny("Group:GetGroup", resources=["X"]), allow("Group:GetGroup"))

        assert decide(rule_set, "GetGroup", "Group", {"id": "X"}) == Effect.ALLOW

    def test_later_wildcard_allow_reopens_specific_deny(self):
        rule_set = rules(deny("Group:GetGroup"), allow("*"))

        assert decide(rule_set, "GetGroup", "Group", {"id": "1"}) == Effect.ALLOW

    def test_condition_deny(self):
        rule_set = rules(allow("Group:GetGroup", condition={"StringEquals": {"name": "Foo"}}))

        assert decide(rule_set, "GetGroup", "Group", {"name": "Foo"}) == Effect.ALLOW
        assert decide(rule_set, "GetGroup", "Group", {"name": "Bar"}) == Effect.DENY

    def test_deterministic(self):
        rule_set = rules(allow("*"), deny("Group:*", resources=["1"]))
        fields = {"id": "1"}

        assert decide(rule_set, "GetGroup", "Group", fields) == decide(rule_set, "GetGroup", "Group", fields)

    def test_qualified_action(self):
        rule_set = rules(allow("Group:GetGroup"))

        assert decide(rule_set, "Group:GetGroup", "Group", {}) == Effect.ALLOW
        assert normalize_action("Group:GetGroup", "Group") == "GetGroup"
        assert normalize_action("Role:GetRole", "Group") == "Role:GetRole"

    def test_evaluate_reports_matched_statement(self):
        rule_set = rules(
            allow("Group:GetGroup", name="Everything"),
            deny("Group:GetGroup", resources=["X"], name="NotX"),
        )

        decision = evaluate(rule_set, "GetGroup", "Group", {"id": "X"})

        assert not decision.allowed
        assert decision.matched_rule.statement == "NotX"
        assert decision.to_dict()["matched_statement"] == "NotX"

    def test_evaluate_without_match(self):
        decision = evaluate(RuleSet(), "GetGroup", "Group", {})

        assert decision.matched_rule is None
        assert decision.reason == "No matching rule"

    def test_ensure_can_message(self):
        rule_set = rules(deny("Group:GetGroup"))

        with pytest.raises(AuthorizationDenied) as exc_info:
            ensure_can(rule_set, "Group:GetGroup", "Group", {"id": "1"})

        assert str(exc_info.value) == 'Cannot execute "GetGroup" on "Group"'
        assert exc_info.value.action == "GetGroup"
        assert exc_info.value.resource_type == "Group"
