# (c) Copyright Datacraft, 2026
"""Tenant context of a request."""
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TenantContext:
	"""
	Immutable tenant context for the current request.

	`unit_ancestry` lists the active unit's ancestors root first; it is
	used for unit-tree operations only, never for policy evaluation.
	"""
	organization_id: str
	unit_id: str
	unit_ancestry: tuple[str, ...] = ()

	def contains(self, unit_id: str, ancestors=()) -> bool:
		"""Whether a unit with `ancestors` lies in the active unit's subtree."""
		return unit_id == self.unit_id or self.unit_id in tuple(ancestors or ())


def create_tenant_context(unit) -> TenantContext:
	"""Build the context of a unit row (or anything with the same attributes)."""
	return TenantContext(
		organization_id=str(unit.organization_id),
		unit_id=str(unit.id),
		unit_ancestry=tuple(str(a) for a in (unit.ancestors or ())),
	)
