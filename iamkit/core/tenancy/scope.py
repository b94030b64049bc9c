# (c) Copyright Datacraft, 2026
"""
Tenant isolation boundary.

The boundary is ANDed onto every policy outcome, for single instances and
for compiled filters alike. No policy statement can widen it.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from iamkit.core.exceptions import AuthorizationDenied
from iamkit.core.features.policies.engine import evaluate, normalize_action
from iamkit.core.features.policies.filters import (
	FieldEquals, FilterExpr, and_, compile_filter, evaluate_filter,
)
from iamkit.core.features.policies.models import Effect, RuleSet

from .context import TenantContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScopeBinding:
	"""Document field carrying the tenant key and the context attribute it must equal."""
	field: str
	context_attr: str


UNIT_BINDING = ScopeBinding("unit_id", "unit_id")


class TenantScope:
	def __init__(
		self,
		bindings: Mapping[str, ScopeBinding] | None = None,
		default: ScopeBinding = UNIT_BINDING,
	):
		self.bindings = dict(bindings or {})
		self.default = default

	def binding(self, resource_type: str) -> ScopeBinding:
		return self.bindings.get(resource_type, self.default)

	def boundary(self, resource_type: str, tenant: TenantContext) -> FilterExpr:
		binding = self.binding(resource_type)
		return FieldEquals(binding.field, getattr(tenant, binding.context_attr))

	def tenant_fields(self, resource_type: str, tenant: TenantContext) -> dict[str, Any]:
		"""Fields a new instance must carry to land inside the boundary."""
		binding = self.binding(resource_type)
		return {binding.field: getattr(tenant, binding.context_attr)}

	def scope(self, target, resource_type: str, tenant: TenantContext):
		"""
		Intersect `target` with the boundary.

		A FilterExpr yields a FilterExpr; a mapping of instance fields yields
		whether the instance lies inside the boundary.
		"""
		if isinstance(target, Mapping):
			return evaluate_filter(self.boundary(resource_type, tenant), target)
		return and_(target, self.boundary(resource_type, tenant))

	def permits(self, fields: Mapping[str, Any], resource_type: str, tenant: TenantContext) -> bool:
		return self.scope(fields, resource_type, tenant)

	def compile(
		self,
		rule_set: RuleSet,
		action: str,
		resource_type: str,
		tenant: TenantContext,
	) -> FilterExpr:
		"""Policy filter for `action` intersected with the boundary."""
		return self.scope(compile_filter(rule_set, action, resource_type), resource_type, tenant)

	def decide(
		self,
		rule_set: RuleSet,
		action: str,
		resource_type: str,
		fields: Mapping[str, Any],
		tenant: TenantContext,
	) -> Effect:
		if not self.permits(fields, resource_type, tenant):
			return Effect.DENY
		return evaluate(rule_set, action, resource_type, fields).effect

	def ensure_can(
		self,
		rule_set: RuleSet,
		action: str,
		resource_type: str,
		fields: Mapping[str, Any],
		tenant: TenantContext,
	) -> None:
		if self.decide(rule_set, action, resource_type, fields, tenant) != Effect.ALLOW:
			verb = normalize_action(action, resource_type)
			logger.info(f"Denied {verb} on {resource_type} in unit {tenant.unit_id}")
			raise AuthorizationDenied(verb, resource_type)


tenant_scope = TenantScope({
	"Unit": ScopeBinding("organization_id", "organization_id"),
	"Organization": ScopeBinding("id", "organization_id"),
})
