# (c) Copyright Datacraft, 2026
"""Policy schemas."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .models import Effect

ConditionValue = str | bool | int | float


class Policy(BaseModel):
	id: str
	name: str
	effect: Effect
	actions: list[str]
	resources: list[str]
	condition: dict[str, dict[str, ConditionValue]] | None = None
	unit_id: str
	created_at: datetime | None = None

	model_config = ConfigDict(from_attributes=True)


class PolicyCreate(BaseModel):
	name: str = Field(..., min_length=1, max_length=255)
	effect: Effect
	actions: list[str] = Field(..., min_length=1)
	resources: list[str] = Field(default_factory=lambda: ["*"])
	condition: dict[str, dict[str, ConditionValue]] | None = None


class PolicyUpdate(BaseModel):
	name: str | None = Field(None, min_length=1, max_length=255)
	effect: Effect | None = None
	actions: list[str] | None = Field(None, min_length=1)
	resources: list[str] | None = None
	condition: dict[str, dict[str, ConditionValue]] | None = None


class EvaluateRequest(BaseModel):
	"""Dry-run a point check with the caller's own ability."""
	action: str
	resource_type: str
	resource: dict[str, Any] = Field(default_factory=dict)


class EvaluateResponse(BaseModel):
	allowed: bool
	effect: Effect
	action: str
	resource_type: str
	matched_statement: str | None = None
	reason: str
