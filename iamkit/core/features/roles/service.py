# (c) Copyright Datacraft, 2026
"""
Role service.

Attaching a role to a user is authorized on the role: the role must be
visible to the caller for AddRoleToUser / RemoveRoleFromUser. The user may
belong to any unit; that is how access to another unit is delegated.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.crud import CrudService
from iamkit.core.db.links import append_link, remove_link, remove_links, replace_links
from iamkit.core.exceptions import ResourceNotFound
from iamkit.core.features.policies.ability import Ability
from iamkit.core.features.policies.db.api import get_policies_in_unit
from iamkit.core.features.users.db import api as usr_dbapi
from iamkit.core.features.users.db.orm import user_roles

from . import schema
from .actions import ADD_ROLE_TO_USER, REMOVE_ROLE_FROM_USER, ROLE_ACTIONS
from .db.orm import Role, role_policies

logger = logging.getLogger(__name__)


class RoleService(CrudService[Role]):
	def __init__(self, session: AsyncSession):
		super().__init__(session, Role, ROLE_ACTIONS)

	async def _set_policies(self, ability: Ability, role: Role, policy_ids: list[str]) -> None:
		policies = await get_policies_in_unit(self.session, policy_ids, ability.tenant.unit_id)
		await replace_links(
			self.session, role_policies, "role_id", role.id, "policy_id", [p.id for p in policies]
		)

	async def create_role(self, ability: Ability, data: schema.RoleCreate) -> Role:
		role = await self.create(ability, data.model_dump(exclude={"policy_ids"}))
		await self._set_policies(ability, role, data.policy_ids)
		return role

	async def update_role(self, ability: Ability, role_id: str, data: schema.RoleUpdate) -> Role:
		role = await self.update(ability, role_id, data.model_dump(exclude={"policy_ids"}, exclude_unset=True))
		if data.policy_ids is not None:
			await self._set_policies(ability, role, data.policy_ids)
		return role

	async def remove_role(self, ability: Ability, role_id: str) -> Role:
		role = await self.remove(ability, role_id)
		await remove_links(self.session, role_policies, "role_id", role_id)
		await remove_links(self.session, user_roles, "role_id", role_id)
		return role

	async def add_role_to_user(self, ability: Ability, role_id: str, user_id: str) -> None:
		role = await self.get(ability, role_id, ADD_ROLE_TO_USER)
		if await usr_dbapi.get_user(self.session, user_id) is None:
			raise ResourceNotFound("User", user_id)
		if await append_link(self.session, user_roles, "user_id", user_id, "role_id", role.id):
			logger.info(f"Role {role.id} added to user {user_id}")

	async def remove_role_from_user(self, ability: Ability, role_id: str, user_id: str) -> None:
		role = await self.get(ability, role_id, REMOVE_ROLE_FROM_USER)
		if await usr_dbapi.get_user(self.session, user_id) is None:
			raise ResourceNotFound("User", user_id)
		if await remove_link(self.session, user_roles, "user_id", user_id, "role_id", role.id):
			logger.info(f"Role {role.id} removed from user {user_id}")
