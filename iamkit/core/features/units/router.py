# (c) Copyright Datacraft, 2026
"""Units API router."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from iamkit.core.db.engine import get_db
from iamkit.core.features.auth.dependencies import get_ability
from iamkit.core.features.policies.ability import Ability

from .schema import ChildUnitCreate, Unit, UnitCreate, UnitUpdate
from .service import UnitService

router = APIRouter(prefix="/units", tags=["Units"])


@router.get("", response_model=list[Unit])
async def list_units(
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await UnitService(session).list(ability)


@router.post("", response_model=Unit, status_code=status.HTTP_201_CREATED)
async def create_unit(
	data: UnitCreate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	unit = await UnitService(session).create_unit(ability, data)
	await session.commit()
	return unit


@router.post("/child", response_model=Unit, status_code=status.HTTP_201_CREATED)
async def create_child_unit(
	data: ChildUnitCreate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	"""Create a unit below the active unit or one of its descendants."""
	unit = await UnitService(session).create_child(ability, data)
	await session.commit()
	return unit


@router.get("/{unit_id}", response_model=Unit)
async def get_unit(
	unit_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await UnitService(session).get(ability, unit_id)


@router.get("/{unit_id}/descendants", response_model=list[Unit])
async def list_descendants(
	unit_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	return await UnitService(session).descendants(ability, unit_id)


@router.patch("/{unit_id}", response_model=Unit)
async def update_unit(
	unit_id: str,
	data: UnitUpdate,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	unit = await UnitService(session).update(ability, unit_id, data.model_dump(exclude_unset=True))
	await session.commit()
	return unit


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_unit(
	unit_id: str,
	ability: Annotated[Ability, Depends(get_ability)],
	session: Annotated[AsyncSession, Depends(get_db)],
) -> None:
	await UnitService(session).remove(ability, unit_id)
	await session.commit()
