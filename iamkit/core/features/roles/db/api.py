# (c) Copyright Datacraft, 2026
"""Roles database API."""
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.links import replace_links

from .orm import Role, role_policies


async def create_role(
	session: AsyncSession,
	name: str,
	unit_id: str,
	policy_ids: list[str] | None = None,
) -> Role:
	"""Insert a role without any access check (seeding, tests)."""
	role = Role(name=name, unit_id=unit_id)
	session.add(role)
	await session.flush()
	await replace_links(session, role_policies, "role_id", role.id, "policy_id", policy_ids or [])
	return role
