# (c) Copyright Datacraft, 2026
"""SQLAlchemy ORM models for policy statements."""
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column
from uuid_extensions import uuid7str

from iamkit.core.db.base import Base


class Policy(Base):
	"""Persisted policy statement."""
	__tablename__ = "policies"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid7str)
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	effect: Mapped[str] = mapped_column(String(10), nullable=False)
	actions: Mapped[list[str]] = mapped_column(JSON, default=list)
	resources: Mapped[list[str]] = mapped_column(JSON, default=list)
	condition: Mapped[dict | None] = mapped_column(JSON, nullable=True)
	unit_id: Mapped[str] = mapped_column(
		ForeignKey("units.id", ondelete="CASCADE"), nullable=False
	)
	created_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
	)

	def __repr__(self) -> str:
		return f"Policy({self.id=}, {self.name=}, {self.effect=})"

	__table_args__ = (
		Index("ix_policies_unit_id", "unit_id"),
	)
