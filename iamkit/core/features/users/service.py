# (c) Copyright Datacraft, 2026
import logging

from passlib.hash import pbkdf2_sha256
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from iamkit.core.crud import CrudService
from iamkit.core.db.links import append_link, remove_links, replace_links
from iamkit.core.exceptions import ResourceNotFound
from iamkit.core.features.groups.db.orm import Group
from iamkit.core.features.policies.ability import Ability
from iamkit.core.features.policies.db.api import get_policies_in_unit

from . import schema
from .actions import ADD_GROUP_TO_USER, USER_ACTIONS
from .db.orm import User, user_groups, user_policies, user_roles

logger = logging.getLogger(__name__)


class UserService(CrudService[User]):
	def __init__(self, session: AsyncSession):
		super().__init__(session, User, USER_ACTIONS)

	async def _set_policies(self, ability: Ability, user: User, policy_ids: list[str]) -> None:
		policies = await get_policies_in_unit(self.session, policy_ids, ability.tenant.unit_id)
		await replace_links(
			self.session, user_policies, "user_id", user.id, "policy_id", [p.id for p in policies]
		)

	async def create_user(self, ability: Ability, data: schema.UserCreate) -> User:
		fields = data.model_dump(exclude={"policy_ids"})
		fields["password"] = pbkdf2_sha256.hash(data.password)
		user = await self.create(ability, fields)
		await self._set_policies(ability, user, data.policy_ids)
		return user

	async def update_user(self, ability: Ability, user_id: str, data: schema.UserUpdate) -> User:
		fields = data.model_dump(exclude={"policy_ids"}, exclude_unset=True)
		if fields.get("password") is not None:
			fields["password"] = pbkdf2_sha256.hash(fields["password"])
		else:
			fields.pop("password", None)
		user = await self.update(ability, user_id, fields)
		if data.policy_ids is not None:
			await self._set_policies(ability, user, data.policy_ids)
		return user

	async def remove_user(self, ability: Ability, user_id: str) -> User:
		user = await self.remove(ability, user_id)
		for table in (user_policies, user_groups, user_roles):
			await remove_links(self.session, table, "user_id", user_id)
		return user

	async def get_details(self, ability: Ability, user_id: str) -> User:
		return await self.get(ability, user_id, options=[selectinload(User.groups)])

	async def add_group_to_user(self, ability: Ability, user_id: str, group_id: str) -> User:
		"""
		Add a group of the active unit to a user.

		Authorized on the user for AddGroupToUser; the group only has to
		exist in the active unit.
		"""
		stmt = select(Group).where(Group.id == group_id, Group.unit_id == ability.tenant.unit_id)
		group = (await self.session.execute(stmt)).scalar_one_or_none()
		if group is None:
			raise ResourceNotFound("Group", group_id)

		user = await self.get(ability, user_id, ADD_GROUP_TO_USER)
		if await append_link(self.session, user_groups, "user_id", user.id, "group_id", group.id):
			logger.info(f"Group {group.id} added to user {user.id}")

		stmt = (
			select(User)
			.options(selectinload(User.groups))
			.where(User.id == user.id)
			.execution_options(populate_existing=True)
		)
		return (await self.session.execute(stmt)).scalar_one()
