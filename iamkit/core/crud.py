# (c) Copyright Datacraft, 2026
"""
Access-controlled CRUD over a single resource type.

- create: point check on the payload, before anything is written
- list: the compiled policy filter, intersected with the tenant
  boundary, is the WHERE clause; rows are never post-filtered
- get/update/remove: `id == :id` plus the same filter for the action; a row
  outside the permitted set is reported exactly like a missing row
"""
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.filters import to_sqlalchemy
from iamkit.core.exceptions import ResourceNotFound
from iamkit.core.features.policies.ability import Ability
from iamkit.core.tenancy.scope import tenant_scope

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CrudActions:
	scope: str
	create_action: str
	get_action: str
	list_action: str
	update_action: str
	remove_action: str

	@classmethod
	def for_scope(cls, scope: str, plural: str | None = None) -> "CrudActions":
		return cls(
			scope=scope,
			create_action=f"Create{scope}",
			get_action=f"Get{scope}",
			list_action=f"List{plural or scope + 's'}",
			update_action=f"Update{scope}",
			remove_action=f"Remove{scope}",
		)


class CrudService(Generic[T]):
	def __init__(self, session: AsyncSession, model: type[T], actions: CrudActions):
		self.session = session
		self.model = model
		self.actions = actions

	@property
	def scope(self) -> str:
		return self.actions.scope

	def criteria(self, ability: Ability, action: str):
		"""SQL clause selecting the rows `ability` may `action`."""
		return to_sqlalchemy(ability.filter_for(action, self.scope), self.model)

	def tenant_fields(self, ability: Ability) -> dict[str, Any]:
		return tenant_scope.tenant_fields(self.scope, ability.tenant)

	async def create(
		self,
		ability: Ability,
		data: Mapping[str, Any],
		action: str | None = None,
	) -> T:
		fields = {**data, **self.tenant_fields(ability)}
		ability.ensure_can(action or self.actions.create_action, self.scope, fields)

		row = self.model(**fields)
		self.session.add(row)
		await self.session.flush()
		logger.info(f"{self.scope} {row.id} created")
		return row

	async def list(
		self,
		ability: Ability,
		options: Sequence = (),
		where: Sequence = (),
	) -> list[T]:
		"""Rows `ability` may list, narrowed by the extra `where` clauses."""
		stmt = (
			select(self.model)
			.options(*options)
			.where(self.criteria(ability, self.actions.list_action), *where)
			.order_by(self.model.id)
		)
		result = await self.session.execute(stmt)
		return list(result.scalars().all())

	async def get(
		self,
		ability: Ability,
		id: str,
		action: str | None = None,
		options: Sequence = (),
	) -> T:
		stmt = (
			select(self.model)
			.options(*options)
			.where(
				self.model.id == id,
				self.criteria(ability, action or self.actions.get_action),
			)
		)
		result = await self.session.execute(stmt)
		row = result.scalar_one_or_none()
		if row is None:
			raise ResourceNotFound(self.scope, id)
		return row

	async def update(self, ability: Ability, id: str, data: Mapping[str, Any]) -> T:
		row = await self.get(ability, id, self.actions.update_action)
		protected = set(self.tenant_fields(ability)) | {"id"}
		for key, value in data.items():
			if key in protected:
				continue
			setattr(row, key, value)
		await self.session.flush()
		return row

	async def remove(self, ability: Ability, id: str) -> T:
		row = await self.get(ability, id, self.actions.remove_action)
		await self.session.delete(row)
		await self.session.flush()
		logger.info(f"{self.scope} {id} removed")
		return row
