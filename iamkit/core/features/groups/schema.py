# (c) Copyright Datacraft, 2026
"""Group schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Group(BaseModel):
	id: str
	name: str
	unit_id: str
	created_at: datetime | None = None

	model_config = ConfigDict(from_attributes=True)


class GroupCreate(BaseModel):
	name: str = Field(..., min_length=1, max_length=255)
	# order is precedence
	policy_ids: list[str] = []


class GroupUpdate(BaseModel):
	name: str | None = Field(None, min_length=1, max_length=255)
	policy_ids: list[str] | None = None
