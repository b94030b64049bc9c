# (c) Copyright Datacraft, 2026
"""Organizations API router."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.engine import get_db
from iamkit.core.features.auth.dependencies import get_ability
from iamkit.core.features.policies.ability import Ability

from .schema import Organization, OrganizationUpdate
from .service import OrganizationService

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.get("", response_model=list[Organization])
async def list_organizations(
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	"""The caller's organization, if its policies allow listing it."""
	return await OrganizationService(session).list(ability)


@router.get("/{organization_id}", response_model=Organization)
async def get_organization(
	organization_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await OrganizationService(session).get(ability, organization_id)


@router.patch("/{organization_id}", response_model=Organization)
async def update_organization(
	organization_id: str,
	data: OrganizationUpdate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	organization = await OrganizationService(session).update(
		ability, organization_id, data.model_dump(exclude_unset=True)
	)
	await session.commit()
	return organization
