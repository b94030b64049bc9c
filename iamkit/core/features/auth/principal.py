# (c) Copyright Datacraft, 2026
"""Conversion of a loaded user into a PrincipalIdentity snapshot."""
from iamkit.core.features.policies.ability import (
	GroupGrant, PrincipalIdentity, RoleGrant, assume_role,
)
from iamkit.core.features.policies.db.api import statements_from_orm
from iamkit.core.features.users.db.orm import User
from iamkit.core.tenancy.context import create_tenant_context


def principal_from_user(user: User, assumed_role_id: str | None = None) -> PrincipalIdentity:
	"""
	`user` must come from `get_user_with_policies`.

	Raises RoleNotAssigned when `assumed_role_id` is no longer one of the
	user's roles.
	"""
	principal = PrincipalIdentity(
		user_id=user.id,
		email=user.email,
		tenant=create_tenant_context(user.unit),
		statements=statements_from_orm(user.policies),
		groups=tuple(
			GroupGrant(id=g.id, name=g.name, statements=statements_from_orm(g.policies))
			for g in user.groups
		),
		roles=tuple(
			RoleGrant(
				id=r.id,
				name=r.name,
				tenant=create_tenant_context(r.unit),
				statements=statements_from_orm(r.policies),
			)
			for r in user.roles
		),
	)
	if assumed_role_id is not None:
		principal = assume_role(principal, assumed_role_id)
	return principal
