# (c) Copyright Datacraft, 2026
"""Units database API."""
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from .orm import Unit


async def get_unit(session: AsyncSession, unit_id: str) -> Unit | None:
	return await session.get(Unit, unit_id)


def descendant_ids(unit_id: str) -> Select:
	"""Ids of every unit below `unit_id`, walking `parent_id` recursively."""
	subtree = (
		select(Unit.id)
		.where(Unit.parent_id == unit_id)
		.cte("unit_subtree", recursive=True)
	)
	child = aliased(Unit)
	subtree = subtree.union_all(
		select(child.id).where(child.parent_id == subtree.c.id)
	)
	return select(subtree.c.id)
