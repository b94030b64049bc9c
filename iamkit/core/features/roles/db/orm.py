# (c) Copyright Datacraft, 2026
"""Roles ORM models."""
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid_extensions import uuid7str

from iamkit.core.db.base import Base

if TYPE_CHECKING:
	from iamkit.core.features.policies.db.orm import Policy
	from iamkit.core.features.units.db.orm import Unit


role_policies = Table(
	"role_policies",
	Base.metadata,
	Column("role_id", String(36), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
	Column("policy_id", String(36), ForeignKey("policies.id", ondelete="CASCADE"), primary_key=True),
	Column("position", Integer, nullable=False, default=0),
)


class Role(Base):
	"""
	Assumable bundle of policies.

	A role lives in a unit; a user acting as the role is re-scoped to that
	unit, which may differ from the user's own.
	"""
	__tablename__ = "roles"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid7str)
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	unit_id: Mapped[str] = mapped_column(
		ForeignKey("units.id", ondelete="CASCADE"), nullable=False
	)
	created_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
	)

	unit: Mapped["Unit"] = relationship("Unit", lazy="raise")
	policies: Mapped[list["Policy"]] = relationship(
		"Policy",
		secondary=role_policies,
		order_by=role_policies.c.position,
		viewonly=True,
		lazy="raise",
	)

	def __repr__(self) -> str:
		return f"Role({self.id=}, {self.name=})"

	__table_args__ = (
		Index("ix_roles_unit_id", "unit_id"),
	)
