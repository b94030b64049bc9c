# (c) Copyright Datacraft, 2026
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.crud import CrudService
from iamkit.core.db.links import remove_links, replace_links
from iamkit.core.features.policies.ability import Ability
from iamkit.core.features.policies.db.api import get_policies_in_unit
from iamkit.core.features.users.db.orm import user_groups

from . import schema
from .actions import GROUP_ACTIONS
from .db.orm import Group, group_policies


class GroupService(CrudService[Group]):
	def __init__(self, session: AsyncSession):
		super().__init__(session, Group, GROUP_ACTIONS)

	async def _set_policies(self, ability: Ability, group: Group, policy_ids: list[str]) -> None:
		policies = await get_policies_in_unit(self.session, policy_ids, ability.tenant.unit_id)
		await replace_links(
			self.session, group_policies, "group_id", group.id, "policy_id", [p.id for p in policies]
		)

	async def create_group(self, ability: Ability, data: schema.GroupCreate) -> Group:
		group = await self.create(ability, data.model_dump(exclude={"policy_ids"}))
		await self._set_policies(ability, group, data.policy_ids)
		return group

	async def update_group(self, ability: Ability, group_id: str, data: schema.GroupUpdate) -> Group:
		group = await self.update(ability, group_id, data.model_dump(exclude={"policy_ids"}, exclude_unset=True))
		if data.policy_ids is not None:
			await self._set_policies(ability, group, data.policy_ids)
		return group

	async def remove_group(self, ability: Ability, group_id: str) -> Group:
		group = await self.remove(ability, group_id)
		await remove_links(self.session, group_policies, "group_id", group_id)
		await remove_links(self.session, user_groups, "group_id", group_id)
		return group
