# (c) Copyright Datacraft, 2026
"""
Ordered many-to-many links.

Link tables carry a `position` column so that reading a principal's
policies, groups and roles yields them in association order.
"""
from collections.abc import Sequence

from sqlalchemy import Table, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession


async def replace_links(
	session: AsyncSession,
	table: Table,
	owner_column: str,
	owner_id: str,
	target_column: str,
	target_ids: Sequence[str],
) -> None:
	"""Replace all links of `owner_id`, keeping the order of `target_ids`."""
	await remove_links(session, table, owner_column, owner_id)
	seen: list[str] = []
	for target_id in target_ids:
		if target_id not in seen:
			seen.append(target_id)
	if not seen:
		return
	await session.execute(
		insert(table),
		[
			{owner_column: owner_id, target_column: target_id, "position": position}
			for position, target_id in enumerate(seen)
		],
	)


async def append_link(
	session: AsyncSession,
	table: Table,
	owner_column: str,
	owner_id: str,
	target_column: str,
	target_id: str,
) -> bool:
	"""Append a link at the end; returns False if it already existed."""
	owner = table.c[owner_column]
	target = table.c[target_column]

	exists = await session.scalar(
		select(func.count()).select_from(table).where(owner == owner_id, target == target_id)
	)
	if exists:
		return False

	next_position = await session.scalar(
		select(func.coalesce(func.max(table.c.position) + 1, 0)).where(owner == owner_id)
	)
	await session.execute(
		insert(table).values({owner_column: owner_id, target_column: target_id, "position": next_position})
	)
	return True


async def remove_link(
	session: AsyncSession,
	table: Table,
	owner_column: str,
	owner_id: str,
	target_column: str,
	target_id: str,
) -> bool:
	result = await session.execute(
		delete(table).where(table.c[owner_column] == owner_id, table.c[target_column] == target_id)
	)
	return result.rowcount > 0


async def remove_links(session: AsyncSession, table: Table, column: str, value: str) -> None:
	"""Drop every link whose `column` equals `value`."""
	await session.execute(delete(table).where(table.c[column] == value))
