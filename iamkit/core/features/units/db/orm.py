# (c) Copyright Datacraft, 2026
"""Units ORM models."""
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid_extensions import uuid7str

from iamkit.core.db.base import Base

if TYPE_CHECKING:
	from iamkit.core.features.organizations.db.orm import Organization


class Unit(Base):
	"""Unit of an organization; the tenant boundary of every other resource."""
	__tablename__ = "units"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid7str)
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	organization_id: Mapped[str] = mapped_column(
		ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
	)
	parent_id: Mapped[str | None] = mapped_column(
		ForeignKey("units.id", ondelete="SET NULL"), nullable=True
	)
	# root first
	ancestors: Mapped[list[str]] = mapped_column(JSON, default=list)
	created_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
	)

	organization: Mapped["Organization"] = relationship("Organization", lazy="raise")
	parent: Mapped["Unit | None"] = relationship(
		"Unit", remote_side="Unit.id", foreign_keys=[parent_id], lazy="raise"
	)

	def __repr__(self) -> str:
		return f"Unit({self.id=}, {self.name=}, {self.parent_id=})"

	__table_args__ = (
		Index("ix_units_organization_id", "organization_id"),
	)
