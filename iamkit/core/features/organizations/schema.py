# (c) Copyright Datacraft, 2026
"""Organization schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Organization(BaseModel):
	id: str
	name: str
	created_at: datetime | None = None

	model_config = ConfigDict(from_attributes=True)


class OrganizationUpdate(BaseModel):
	name: str | None = Field(None, min_length=1, max_length=255)
