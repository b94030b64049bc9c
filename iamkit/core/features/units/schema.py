# (c) Copyright Datacraft, 2026
"""Unit schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Unit(BaseModel):
	id: str
	name: str
	organization_id: str
	parent_id: str | None = None
	ancestors: list[str] = []
	created_at: datetime | None = None

	model_config = ConfigDict(from_attributes=True)


class UnitCreate(BaseModel):
	name: str = Field(..., min_length=1, max_length=255)


class ChildUnitCreate(UnitCreate):
	"""Defaults to a child of the caller's active unit."""
	parent_id: str | None = None


class UnitUpdate(BaseModel):
	name: str | None = Field(None, min_length=1, max_length=255)
