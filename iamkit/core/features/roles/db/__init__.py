# (c) Copyright Datacraft, 2026
"""Roles database models and operations."""

from .orm import Role, role_policies

__all__ = ["Role", "role_policies"]
