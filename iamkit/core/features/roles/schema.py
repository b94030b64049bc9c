# (c) Copyright Datacraft, 2026
"""Role schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Role(BaseModel):
	id: str
	name: str
	unit_id: str
	created_at: datetime | None = None

	model_config = ConfigDict(from_attributes=True)


class RoleCreate(BaseModel):
	name: str = Field(..., min_length=1, max_length=255)
	policy_ids: list[str] = []


class RoleUpdate(BaseModel):
	name: str | None = Field(None, min_length=1, max_length=255)
	policy_ids: list[str] | None = None
