# (c) Copyright Datacraft, 2026
"""Unit service: CRUD plus creation of child units."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.crud import CrudService
from iamkit.core.exceptions import ResourceNotFound
from iamkit.core.features.policies.ability import Ability

from . import schema
from .actions import CREATE_CHILD_UNIT, UNIT_ACTIONS
from .db import api as unit_dbapi
from .db.orm import Unit

logger = logging.getLogger(__name__)


class UnitService(CrudService[Unit]):
	def __init__(self, session: AsyncSession):
		super().__init__(session, Unit, UNIT_ACTIONS)

	async def create_unit(self, ability: Ability, data: schema.UnitCreate) -> Unit:
		"""Create a root unit in the caller's organization."""
		return await self.create(ability, {**data.model_dump(), "parent_id": None, "ancestors": []})

	async def create_child(self, ability: Ability, data: schema.ChildUnitCreate) -> Unit:
		"""
		Create a unit below `data.parent_id` (default: the active unit).

		The parent must be the active unit or lie below it.
		"""
		tenant = ability.tenant
		parent_id = data.parent_id or tenant.unit_id
		parent = await unit_dbapi.get_unit(self.session, parent_id)
		if (
			parent is None
			or parent.organization_id != tenant.organization_id
			or not tenant.contains(parent.id, parent.ancestors)
		):
			raise ResourceNotFound(self.scope, parent_id)

		fields = {
			"name": data.name,
			"parent_id": parent.id,
			"ancestors": [*(parent.ancestors or []), parent.id],
		}
		unit = await self.create(ability, fields, action=CREATE_CHILD_UNIT)
		logger.debug(f"Unit {unit.id} created below {parent.id}")
		return unit

	async def descendants(self, ability: Ability, unit_id: str) -> list[Unit]:
		"""Listable units below `unit_id`, shallowest first."""
		unit = await self.get(ability, unit_id)
		below = await self.list(ability, where=[Unit.id.in_(unit_dbapi.descendant_ids(unit.id))])
		return sorted(below, key=lambda u: len(u.ancestors or []))
