# (c) Copyright Datacraft, 2026
"""Organizations ORM models."""
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from uuid_extensions import uuid7str

from iamkit.core.db.base import Base


class Organization(Base):
	"""Top of the tenant hierarchy; owns units."""
	__tablename__ = "organizations"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid7str)
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	created_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
	)

	def __repr__(self) -> str:
		return f"Organization({self.id=}, {self.name=})"
