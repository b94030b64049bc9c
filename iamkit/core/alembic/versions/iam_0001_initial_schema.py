# (c) Copyright Datacraft, 2026
"""Organizations, units, policies, groups, roles and users.

Revision ID: iam_0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = 'iam_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
	return sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)


def _unit_fk() -> sa.Column:
	return sa.Column('unit_id', sa.String(36), sa.ForeignKey('units.id', ondelete='CASCADE'), nullable=False)


def _link_table(name: str, owner: str, owner_table: str, target: str, target_table: str) -> None:
	"""Ordered many-to-many link; `position` keeps association order."""
	op.create_table(
		name,
		sa.Column(f'{owner}_id', sa.String(36), sa.ForeignKey(f'{owner_table}.id', ondelete='CASCADE'), primary_key=True),
		sa.Column(f'{target}_id', sa.String(36), sa.ForeignKey(f'{target_table}.id', ondelete='CASCADE'), primary_key=True),
		sa.Column('position', sa.Integer, nullable=False),
	)


def upgrade() -> None:
	op.create_table(
		'organizations',
		sa.Column('id', sa.String(36), primary_key=True),
		sa.Column('name', sa.String(255), nullable=False),
		_created_at(),
	)

	# Units; ancestors is the root-first list of ancestor ids
	op.create_table(
		'units',
		sa.Column('id', sa.String(36), primary_key=True),
		sa.Column('name', sa.String(255), nullable=False),
		sa.Column('organization_id', sa.String(36), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
		sa.Column('parent_id', sa.String(36), sa.ForeignKey('units.id', ondelete='SET NULL'), nullable=True),
		sa.Column('ancestors', sa.JSON, nullable=False),
		_created_at(),
	)
	op.create_index('ix_units_organization_id', 'units', ['organization_id'])

	op.create_table(
		'policies',
		sa.Column('id', sa.String(36), primary_key=True),
		sa.Column('name', sa.String(255), nullable=False),
		sa.Column('effect', sa.String(10), nullable=False),
		sa.Column('actions', sa.JSON, nullable=False),
		sa.Column('resources', sa.JSON, nullable=False),
		sa.Column('condition', sa.JSON, nullable=True),
		_unit_fk(),
		_created_at(),
	)
	op.create_index('ix_policies_unit_id', 'policies', ['unit_id'])

	op.create_table(
		'groups',
		sa.Column('id', sa.String(36), primary_key=True),
		sa.Column('name', sa.String(255), nullable=False),
		_unit_fk(),
		_created_at(),
	)
	op.create_index('ix_groups_unit_id', 'groups', ['unit_id'])

	op.create_table(
		'roles',
		sa.Column('id', sa.String(36), primary_key=True),
		sa.Column('name', sa.String(255), nullable=False),
		_unit_fk(),
		_created_at(),
	)
	op.create_index('ix_roles_unit_id', 'roles', ['unit_id'])

	op.create_table(
		'users',
		sa.Column('id', sa.String(36), primary_key=True),
		sa.Column('email', sa.String(320), nullable=False),
		sa.Column('password', sa.String(255), nullable=False),
		_unit_fk(),
		_created_at(),
		sa.UniqueConstraint('email', name='uq_users_email'),
	)
	op.create_index('ix_users_unit_id', 'users', ['unit_id'])

	_link_table('group_policies', 'group', 'groups', 'policy', 'policies')
	_link_table('role_policies', 'role', 'roles', 'policy', 'policies')
	_link_table('user_policies', 'user', 'users', 'policy', 'policies')
	_link_table('user_groups', 'user', 'users', 'group', 'groups')
	_link_table('user_roles', 'user', 'users', 'role', 'roles')


def downgrade() -> None:
	op.drop_table('user_roles')
	op.drop_table('user_groups')
	op.drop_table('user_policies')
	op.drop_table('role_policies')
	op.drop_table('group_policies')
	op.drop_table('users')
	op.drop_table('roles')
	op.drop_table('groups')
	op.drop_table('policies')
	op.drop_table('units')
	op.drop_table('organizations')
