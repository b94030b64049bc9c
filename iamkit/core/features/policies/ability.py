# (c) Copyright Datacraft, 2026
"""
Aggregation of a principal's statements into an Ability.

Normal mode concatenates, in order, the principal's own statements, each
group's statements (association order) and each role's statements
(association order). Under role assumption the rule set holds only the
assumed role's statements and the tenant switches to that role's unit.
"""
import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

from iamkit.core.exceptions import RoleNotAssigned
from iamkit.core.tenancy.context import TenantContext
from iamkit.core.tenancy.scope import tenant_scope

from .filters import FilterExpr
from .models import Effect, PolicyStatement, RuleSet
from .parser import compile_statements

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GroupGrant:
	id: str
	name: str
	statements: tuple[PolicyStatement, ...] = ()


@dataclass(frozen=True, slots=True)
class RoleGrant:
	id: str
	name: str
	tenant: TenantContext
	statements: tuple[PolicyStatement, ...] = ()


@dataclass(frozen=True, slots=True)
class PrincipalIdentity:
	"""Request-scoped snapshot of who is asking."""
	user_id: str
	email: str
	tenant: TenantContext
	statements: tuple[PolicyStatement, ...] = ()
	groups: tuple[GroupGrant, ...] = ()
	roles: tuple[RoleGrant, ...] = ()
	assumed_role_id: str | None = None

	def role(self, role_id: str) -> RoleGrant | None:
		for role in self.roles:
			if role.id == role_id:
				return role
		return None


def assume_role(principal: PrincipalIdentity, role_id: str) -> PrincipalIdentity:
	"""Return a new identity that acts as `role_id`."""
	if principal.role(role_id) is None:
		raise RoleNotAssigned(role_id)
	return dataclasses.replace(principal, assumed_role_id=role_id)


class Ability(NamedTuple):
	"""Rule set and tenant of one request; unpacks as `(rule_set, tenant)`."""
	rule_set: RuleSet
	tenant: TenantContext

	def decide(self, action: str, resource_type: str, fields: Mapping[str, Any]) -> Effect:
		return tenant_scope.decide(self.rule_set, action, resource_type, fields, self.tenant)

	def can(self, action: str, resource_type: str, fields: Mapping[str, Any]) -> bool:
		return self.decide(action, resource_type, fields) == Effect.ALLOW

	def ensure_can(self, action: str, resource_type: str, fields: Mapping[str, Any]) -> None:
		tenant_scope.ensure_can(self.rule_set, action, resource_type, fields, self.tenant)

	def filter_for(self, action: str, resource_type: str) -> FilterExpr:
		return tenant_scope.compile(self.rule_set, action, resource_type, self.tenant)


class AbilityAggregator:
	"""Builds a fresh Ability per request; holds no state."""

	def build(self, principal: PrincipalIdentity) -> Ability:
		if principal.assumed_role_id is not None:
			role = principal.role(principal.assumed_role_id)
			if role is None:
				raise RoleNotAssigned(principal.assumed_role_id)
			logger.debug(f"User {principal.user_id} acting as role {role.name}")
			return Ability(compile_statements(role.statements), role.tenant)

		statements = list(principal.statements)
		for group in principal.groups:
			statements.extend(group.statements)
		for role in principal.roles:
			statements.extend(role.statements)

		return Ability(compile_statements(statements), principal.tenant)
