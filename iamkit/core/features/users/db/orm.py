# (c) Copyright Datacraft, 2026
"""Users ORM models."""
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid_extensions import uuid7str

from iamkit.core.db.base import Base

if TYPE_CHECKING:
	from iamkit.core.features.groups.db.orm import Group
	from iamkit.core.features.policies.db.orm import Policy
	from iamkit.core.features.roles.db.orm import Role
	from iamkit.core.features.units.db.orm import Unit


def _link_table(name: str, target: str, target_table: str) -> Table:
	return Table(
		name,
		Base.metadata,
		Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
		Column(f"{target}_id", String(36), ForeignKey(f"{target_table}.id", ondelete="CASCADE"), primary_key=True),
		Column("position", Integer, nullable=False, default=0),
	)


user_policies = _link_table("user_policies", "policy", "policies")
user_groups = _link_table("user_groups", "group", "groups")
user_roles = _link_table("user_roles", "role", "roles")


class User(Base):
	__tablename__ = "users"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid7str)
	email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
	password: Mapped[str] = mapped_column(String(255), nullable=False)
	unit_id: Mapped[str] = mapped_column(
		ForeignKey("units.id", ondelete="CASCADE"), nullable=False
	)
	created_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
	)

	unit: Mapped["Unit"] = relationship("Unit", lazy="raise")
	policies: Mapped[list["Policy"]] = relationship(
		"Policy",
		secondary=user_policies,
		order_by=user_policies.c.position,
		viewonly=True,
		lazy="raise",
	)
	groups: Mapped[list["Group"]] = relationship(
		"Group",
		secondary=user_groups,
		order_by=user_groups.c.position,
		viewonly=True,
		lazy="raise",
	)
	roles: Mapped[list["Role"]] = relationship(
		"Role",
		secondary=user_roles,
		order_by=user_roles.c.position,
		viewonly=True,
		lazy="raise",
	)

	def __repr__(self) -> str:
		return f"User({self.id=}, {self.email=})"

	__table_args__ = (
		Index("ix_users_unit_id", "unit_id"),
	)
