# (c) Copyright Datacraft, 2026
"""Groups database API."""
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.links import replace_links

from .orm import Group, group_policies


async def create_group(
	session: AsyncSession,
	name: str,
	unit_id: str,
	policy_ids: list[str] | None = None,
) -> Group:
	"""Insert a group without any access check (seeding, tests)."""
	group = Group(name=name, unit_id=unit_id)
	session.add(group)
	await session.flush()
	await replace_links(session, group_policies, "group_id", group.id, "policy_id", policy_ids or [])
	return group
