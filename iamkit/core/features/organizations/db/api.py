# (c) Copyright Datacraft, 2026
"""Organizations database API."""
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.features.units.db.orm import Unit

from .orm import Organization


async def create_organization(
	session: AsyncSession,
	name: str,
	unit_name: str | None = None,
) -> tuple[Organization, Unit]:
	"""Create an organization together with its root unit."""
	organization = Organization(name=name)
	session.add(organization)
	await session.flush()

	unit = Unit(name=unit_name or name, organization_id=organization.id, ancestors=[])
	session.add(unit)
	await session.flush()
	return organization, unit
