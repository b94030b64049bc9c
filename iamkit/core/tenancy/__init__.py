# (c) Copyright Datacraft, 2026
"""Tenant context and isolation boundary."""
from .context import TenantContext, create_tenant_context
from .scope import ScopeBinding, TenantScope, tenant_scope

__all__ = [
	"TenantContext",
	"create_tenant_context",
	"ScopeBinding",
	"TenantScope",
	"tenant_scope",
]
