# (c) Copyright Datacraft, 2026
"""Users database API."""
from passlib.hash import pbkdf2_sha256
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from iamkit.core.db.links import replace_links
from iamkit.core.features.groups.db.orm import Group
from iamkit.core.features.roles.db.orm import Role

from .orm import User, user_groups, user_policies, user_roles


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
	stmt = select(User).where(User.email == email)
	result = await session.execute(stmt)
	return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: str) -> User | None:
	return await session.get(User, user_id)


async def get_user_with_policies(session: AsyncSession, user_id: str) -> User | None:
	"""
	Load a user with everything needed to build its ability.

	Direct policies, groups with their policies, roles with their policies
	and unit, and the user's own unit are loaded in one go.
	"""
	stmt = (
		select(User)
		.options(
			selectinload(User.unit),
			selectinload(User.policies),
			selectinload(User.groups).selectinload(Group.policies),
			selectinload(User.roles).selectinload(Role.policies),
			selectinload(User.roles).selectinload(Role.unit),
		)
		.where(User.id == user_id)
		.execution_options(populate_existing=True)
	)
	result = await session.execute(stmt)
	return result.scalar_one_or_none()


async def create_user(
	session: AsyncSession,
	email: str,
	password: str,
	unit_id: str,
	policy_ids: list[str] | None = None,
	group_ids: list[str] | None = None,
	role_ids: list[str] | None = None,
) -> User:
	"""Insert a user without any access check (seeding, tests)."""
	user = User(email=email, password=pbkdf2_sha256.hash(password), unit_id=unit_id)
	session.add(user)
	await session.flush()

	await replace_links(session, user_policies, "user_id", user.id, "policy_id", policy_ids or [])
	await replace_links(session, user_groups, "user_id", user.id, "group_id", group_ids or [])
	await replace_links(session, user_roles, "user_id", user.id, "role_id", role_ids or [])
	return user


def verify_password(user: User, password: str) -> bool:
	return pbkdf2_sha256.verify(password, user.password)
