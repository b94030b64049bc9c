# (c) Copyright Datacraft, 2026
"""User schemas; the password hash is never part of a response."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
	id: str
	email: str
	unit_id: str
	created_at: datetime | None = None

	model_config = ConfigDict(from_attributes=True)


class UserGroup(BaseModel):
	id: str
	name: str

	model_config = ConfigDict(from_attributes=True)


class UserDetails(User):
	groups: list[UserGroup] = []


class UserCreate(BaseModel):
	email: str = Field(..., min_length=3, max_length=320)
	password: str = Field(..., min_length=1)
	policy_ids: list[str] = []


class UserUpdate(BaseModel):
	email: str | None = Field(None, min_length=3, max_length=320)
	password: str | None = Field(None, min_length=1)
	policy_ids: list[str] | None = None
