# (c) Copyright Datacraft, 2026
"""
Administrative commands.

	iamkit-admin migrate [--revision head]
	iamkit-admin create-organization <name> [--unit-name Root]
	iamkit-admin create-admin <email> <password> --unit <unit_id>
"""
import argparse
import asyncio
import logging
import sys

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core import orm  # noqa: F401
from iamkit.core.db import migrations
from iamkit.core.db.engine import get_engine, get_session_factory
from iamkit.core.exceptions import IAMError, ResourceNotFound
from iamkit.core.features.organizations.db.api import create_organization
from iamkit.core.features.policies.db.api import create_policy
from iamkit.core.features.policies.db.orm import Policy
from iamkit.core.features.units.db.api import get_unit
from iamkit.core.features.users.db.api import create_user
from iamkit.core.features.users.db.orm import User

logger = logging.getLogger(__name__)

ADMINISTRATOR_POLICY = "Administrator"


async def get_or_create_admin_policy(session: AsyncSession, unit_id: str) -> Policy:
	stmt = select(Policy).where(Policy.unit_id == unit_id, Policy.name == ADMINISTRATOR_POLICY)
	policy = (await session.execute(stmt)).scalars().first()
	if policy is None:
		policy = await create_policy(session, unit_id, ADMINISTRATOR_POLICY, "Allow", ["*"], ["*"])
		logger.info(f"Policy {ADMINISTRATOR_POLICY} created in unit {unit_id}")
	return policy


async def create_admin(session: AsyncSession, email: str, password: str, unit_id: str) -> User:
	"""Create a user holding the unit's Administrator policy (allow everything)."""
	if await get_unit(session, unit_id) is None:
		raise ResourceNotFound("Unit", unit_id)
	policy = await get_or_create_admin_policy(session, unit_id)
	return await create_user(session, email, password, unit_id, policy_ids=[policy.id])


async def _create_organization(args: argparse.Namespace) -> None:
	async with get_session_factory()() as session:
		organization, unit = await create_organization(session, args.name, args.unit_name)
		await session.commit()
	print(f"Organization {organization.name} created with id {organization.id}")
	print(f"Unit {unit.name} created in organization {organization.name} with id {unit.id}")


async def _create_admin(args: argparse.Namespace) -> None:
	async with get_session_factory()() as session:
		user = await create_admin(session, args.email, args.password, args.unit)
		await session.commit()
	print(f"User {user.email} created with id {user.id}")


async def _run(coro) -> None:
	try:
		await coro
	finally:
		await get_engine().dispose()


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="iamkit-admin", description="iamkit administration")
	commands = parser.add_subparsers(dest="command", required=True)

	migrate = commands.add_parser("migrate", help="upgrade the database schema")
	migrate.add_argument("--revision", default="head")

	organization = commands.add_parser("create-organization", help="create an organization and its root unit")
	organization.add_argument("name")
	organization.add_argument("--unit-name", default="Root")

	admin = commands.add_parser("create-admin", help="create a user allowed to do everything in a unit")
	admin.add_argument("email")
	admin.add_argument("password")
	admin.add_argument("--unit", required=True, help="id of the unit the user belongs to")

	return parser


def main(argv: list[str] | None = None) -> int:
	args = build_parser().parse_args(argv)

	try:
		match args.command:
			case "migrate":
				migrations.upgrade(revision=args.revision)
			case "create-organization":
				asyncio.run(_run(_create_organization(args)))
			case "create-admin":
				asyncio.run(_run(_create_admin(args)))
	except IAMError as e:
		print(f"Error: {e}", file=sys.stderr)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
